import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

STATUS_CHOICES = [
    ("pending", "Pending"),
    ("preparing", "Preparing"),
    ("ready", "Ready"),
    ("completed", "Completed"),
    ("cancelled", "Cancelled"),
]


def _money(max_digits):
    return models.DecimalField(
        decimal_places=2,
        max_digits=max_digits,
        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
    )


def _base_fields():
    return [
        ("id", models.UUIDField(primary_key=True, serialize=False, editable=False, default=uuid.uuid4)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("menu", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=_base_fields()
            + [
                ("order_number", models.CharField(max_length=20, unique=True)),
                ("status", models.CharField(choices=STATUS_CHOICES, default="pending", max_length=20)),
                ("customer_name", models.CharField(max_length=160)),
                ("customer_phone", models.CharField(blank=True, max_length=40)),
                (
                    "order_type",
                    models.CharField(
                        choices=[("dine-in", "Dine-in"), ("delivery", "Delivery")], default="dine-in", max_length=10
                    ),
                ),
                ("total_amount", _money(12)),
                ("notes", models.TextField(blank=True)),
                ("cancel_reason", models.CharField(blank=True, max_length=255)),
                ("idempotency_key", models.CharField(blank=True, max_length=120, null=True, unique=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="orders_taken",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["status", "created_at"], name="orders_status_created_idx"),
                    models.Index(fields=["created_at"], name="orders_created_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            (models.Q(status="cancelled") & ~models.Q(cancel_reason=""))
                            | (~models.Q(status="cancelled") & models.Q(cancel_reason=""))
                        ),
                        name="orders_cancel_reason_iff_cancelled",
                    ),
                    models.CheckConstraint(condition=models.Q(total_amount__gte=0), name="orders_total_gte_0"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=_base_fields()
            + [
                ("menu_item_name", models.CharField(max_length=160)),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        default=1, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("unit_price", _money(10)),
                ("total_price", _money(12)),
                ("special_instructions", models.CharField(blank=True, max_length=200)),
                (
                    "menu_item",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="menu.menuitem",
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="order_items",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(quantity__gte=1), name="order_item_quantity_gte_1"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItemTopping",
            fields=_base_fields()
            + [
                ("topping_name", models.CharField(max_length=120)),
                (
                    "quantity_per_item",
                    models.PositiveIntegerField(
                        default=1, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        default=1, validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("unit_price", _money(10)),
                ("total_price", _money(12)),
                (
                    "order_item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="toppings",
                        to="orders.orderitem",
                    ),
                ),
                (
                    "topping",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="menu.topping",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
            },
        ),
        migrations.CreateModel(
            name="OrderStatusChange",
            fields=_base_fields()
            + [
                ("status", models.CharField(choices=STATUS_CHOICES, max_length=20)),
                ("source", models.CharField(blank=True, max_length=32)),
                ("note", models.CharField(blank=True, max_length=255)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="status_changes",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["order", "created_at"], name="orders_status_change_idx"),
                ],
            },
        ),
    ]
