from django import forms

from . import lifecycle
from .filters import ALL
from .models import Order


class OrderFilterForm(forms.Form):
    q = forms.CharField(required=False, max_length=160)
    type = forms.ChoiceField(
        required=False,
        choices=[(ALL, "All")] + Order.ORDER_TYPE_CHOICES,
    )
    status = forms.ChoiceField(
        required=False,
        choices=[(ALL, "All")] + lifecycle.STATUS_CHOICES,
    )

    def filters(self) -> dict:
        data = self.cleaned_data
        return {
            "search": data.get("q") or "",
            "order_type": data.get("type") or ALL,
            "status": data.get("status") or ALL,
        }


class DateRangeForm(OrderFilterForm):
    start = forms.DateField(required=False)
    end = forms.DateField(required=False)


class StatusForm(forms.Form):
    status = forms.ChoiceField(choices=lifecycle.STATUS_CHOICES)
    reason = forms.CharField(required=False, max_length=255)


class CancelForm(forms.Form):
    reason = forms.CharField(required=False, max_length=255)
