from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from apps.common.models import BaseModel

ZERO = Decimal("0.00")


class Expense(BaseModel):
    title = models.CharField(max_length=160)
    description = models.TextField(blank=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(ZERO)])
    category = models.CharField(max_length=80)
    expense_date = models.DateField(default=timezone.localdate)

    class Meta:
        ordering = ["-expense_date", "-created_at"]
        indexes = [models.Index(fields=["expense_date"], name="bk_expense_date_idx")]

    def __str__(self) -> str:
        return self.title


class Purchase(BaseModel):
    supplier_name = models.CharField(max_length=160)
    item_name = models.CharField(max_length=160)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(ZERO)])
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(ZERO)])
    purchase_date = models.DateField(default=timezone.localdate)

    class Meta:
        ordering = ["-purchase_date", "-created_at"]
        indexes = [models.Index(fields=["purchase_date"], name="bk_purchase_date_idx")]

    def __str__(self) -> str:
        return f"{self.item_name} ({self.supplier_name})"

    def save(self, *args, **kwargs):
        self.total_amount = (self.unit_price or ZERO) * (self.quantity or 0)
        super().save(*args, **kwargs)
