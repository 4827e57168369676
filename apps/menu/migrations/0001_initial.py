import uuid
from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.UUIDField(primary_key=True, serialize=False, editable=False, default=uuid.uuid4)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=160)),
                ("description", models.TextField(blank=True)),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("category", models.CharField(db_index=True, max_length=80)),
                ("is_available", models.BooleanField(default=True)),
                ("allow_toppings", models.BooleanField(default=False)),
                ("image_url", models.URLField(blank=True, max_length=500)),
            ],
            options={
                "ordering": ["category", "name"],
                "indexes": [models.Index(fields=["is_available", "category"], name="menu_item_avail_cat_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(price__gte=0), name="menu_item_price_gte_0"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Topping",
            fields=[
                ("id", models.UUIDField(primary_key=True, serialize=False, editable=False, default=uuid.uuid4)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=120)),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("category", models.CharField(db_index=True, max_length=80)),
                ("is_available", models.BooleanField(default=True)),
            ],
            options={
                "ordering": ["category", "name"],
                "indexes": [models.Index(fields=["is_available", "category"], name="menu_topping_avail_cat_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(price__gte=0), name="topping_price_gte_0"),
                ],
            },
        ),
    ]
