from decimal import Decimal

from django import forms
from django.utils import timezone

from .models import Expense, Purchase


class _DefaultTodayMixin:
    date_field = ""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields[self.date_field].required = False

    def _clean_date(self):
        return self.cleaned_data.get(self.date_field) or timezone.localdate()


class ExpenseForm(_DefaultTodayMixin, forms.ModelForm):
    date_field = "expense_date"
    amount = forms.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.00"))

    class Meta:
        model = Expense
        fields = ["title", "description", "amount", "category", "expense_date"]

    def clean_expense_date(self):
        return self._clean_date()


class PurchaseForm(_DefaultTodayMixin, forms.ModelForm):
    date_field = "purchase_date"
    quantity = forms.IntegerField(min_value=1)
    unit_price = forms.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.00"))

    class Meta:
        model = Purchase
        fields = ["supplier_name", "item_name", "quantity", "unit_price", "purchase_date"]

    def clean_purchase_date(self):
        return self._clean_date()
