from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from apps.common.models import BaseModel
from .rules import is_topping_eligible


class MenuItem(BaseModel):
    name = models.CharField(max_length=160)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0.00"))])
    category = models.CharField(max_length=80, db_index=True)
    is_available = models.BooleanField(default=True)
    allow_toppings = models.BooleanField(default=False)
    image_url = models.URLField(max_length=500, blank=True)

    class Meta:
        indexes = [models.Index(fields=["is_available", "category"], name="menu_item_avail_cat_idx")]
        ordering = ["category", "name"]
        constraints = [
            models.CheckConstraint(condition=models.Q(price__gte=0), name="menu_item_price_gte_0"),
        ]

    def __str__(self) -> str:
        return self.name

    def accepts(self, topping: "Topping") -> bool:
        return is_topping_eligible(self, topping)


class Topping(BaseModel):
    name = models.CharField(max_length=120)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0.00"))])
    category = models.CharField(max_length=80, db_index=True)
    is_available = models.BooleanField(default=True)

    class Meta:
        indexes = [models.Index(fields=["is_available", "category"], name="menu_topping_avail_cat_idx")]
        ordering = ["category", "name"]
        constraints = [
            models.CheckConstraint(condition=models.Q(price__gte=0), name="topping_price_gte_0"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.category})"
