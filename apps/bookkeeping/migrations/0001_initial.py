import uuid
from decimal import Decimal

import django.core.validators
import django.utils.timezone
from django.db import migrations, models


def _money(max_digits):
    return models.DecimalField(
        decimal_places=2,
        max_digits=max_digits,
        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Expense",
            fields=[
                ("id", models.UUIDField(primary_key=True, serialize=False, editable=False, default=uuid.uuid4)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(max_length=160)),
                ("description", models.TextField(blank=True)),
                ("amount", _money(12)),
                ("category", models.CharField(max_length=80)),
                ("expense_date", models.DateField(default=django.utils.timezone.localdate)),
            ],
            options={
                "ordering": ["-expense_date", "-created_at"],
                "indexes": [models.Index(fields=["expense_date"], name="bk_expense_date_idx")],
            },
        ),
        migrations.CreateModel(
            name="Purchase",
            fields=[
                ("id", models.UUIDField(primary_key=True, serialize=False, editable=False, default=uuid.uuid4)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("supplier_name", models.CharField(max_length=160)),
                ("item_name", models.CharField(max_length=160)),
                (
                    "quantity",
                    models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)]),
                ),
                ("unit_price", _money(10)),
                ("total_amount", _money(12)),
                ("purchase_date", models.DateField(default=django.utils.timezone.localdate)),
            ],
            options={
                "ordering": ["-purchase_date", "-created_at"],
                "indexes": [models.Index(fields=["purchase_date"], name="bk_purchase_date_idx")],
            },
        ),
    ]
