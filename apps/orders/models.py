from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

from apps.common.models import BaseModel
from . import lifecycle

ZERO = Decimal("0.00")


class Order(BaseModel):
    STATUS_CHOICES = lifecycle.STATUS_CHOICES
    TYPE_DINE_IN = "dine-in"
    TYPE_DELIVERY = "delivery"
    ORDER_TYPE_CHOICES = [(TYPE_DINE_IN, "Dine-in"), (TYPE_DELIVERY, "Delivery")]

    order_number = models.CharField(max_length=20, unique=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=lifecycle.PENDING)
    customer_name = models.CharField(max_length=160)
    customer_phone = models.CharField(max_length=40, blank=True)
    order_type = models.CharField(max_length=10, choices=ORDER_TYPE_CHOICES, default=TYPE_DINE_IN)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(ZERO)])
    notes = models.TextField(blank=True)
    cancel_reason = models.CharField(max_length=255, blank=True)
    idempotency_key = models.CharField(max_length=120, blank=True, null=True, unique=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="orders_taken"
    )

    class Meta:
        indexes = [
            models.Index(fields=["status", "created_at"], name="orders_status_created_idx"),
            models.Index(fields=["created_at"], name="orders_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    (Q(status=lifecycle.CANCELLED) & ~Q(cancel_reason=""))
                    | (~Q(status=lifecycle.CANCELLED) & Q(cancel_reason=""))
                ),
                name="orders_cancel_reason_iff_cancelled",
            ),
            models.CheckConstraint(condition=Q(total_amount__gte=0), name="orders_total_gte_0"),
        ]

    def __str__(self) -> str:
        return self.order_number

    def save(self, *args, **kwargs):
        is_new = self._state.adding
        prev_status = None
        should_track_status = True
        source = getattr(self, "_status_change_source", None)
        note = getattr(self, "_status_change_note", "")
        if not is_new and self.pk:
            update_fields = kwargs.get("update_fields")
            should_track_status = update_fields is None or "status" in update_fields
            if should_track_status:
                prev_status = (
                    type(self)
                    .objects.filter(pk=self.pk)
                    .values_list("status", flat=True)
                    .first()
                )
        super().save(*args, **kwargs)
        if hasattr(self, "_status_change_source"):
            delattr(self, "_status_change_source")
        if hasattr(self, "_status_change_note"):
            delattr(self, "_status_change_note")
        if is_new:
            OrderStatusChange.objects.create(
                order=self,
                status=self.status,
                source=source or "initial",
                note=note or "",
            )
        elif should_track_status and prev_status != self.status:
            OrderStatusChange.objects.create(
                order=self,
                status=self.status,
                source=source or "",
                note=note or "",
            )

    def set_status(
        self,
        status: str,
        *,
        source: str | None = None,
        note: str = "",
        cancel_reason: str | None = None,
    ) -> None:
        """Persist `status` (and `cancel_reason` when given) in a single UPDATE."""
        self.status = status
        fields = ["status", "updated_at"]
        if cancel_reason is not None:
            self.cancel_reason = cancel_reason
            fields.append("cancel_reason")
        if source:
            self._status_change_source = source
        if note:
            self._status_change_note = note
        self.save(update_fields=fields)

    @property
    def is_terminal(self) -> bool:
        return lifecycle.is_terminal(self.status)

    def computed_total(self) -> Decimal:
        return sum((item.total_price for item in self.order_items.all()), ZERO)


class OrderItem(BaseModel):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="order_items")
    menu_item = models.ForeignKey("menu.MenuItem", on_delete=models.SET_NULL, null=True, related_name="+")
    menu_item_name = models.CharField(max_length=160)
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(ZERO)])
    total_price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(ZERO)])
    special_instructions = models.CharField(max_length=200, blank=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(condition=Q(quantity__gte=1), name="order_item_quantity_gte_1"),
        ]

    def __str__(self) -> str:
        return f"{self.quantity} x {self.menu_item_name}"

    def computed_total(self) -> Decimal:
        toppings = sum((t.total_price for t in self.toppings.all()), ZERO)
        return self.unit_price * self.quantity + toppings


class OrderItemTopping(BaseModel):
    order_item = models.ForeignKey(OrderItem, on_delete=models.CASCADE, related_name="toppings")
    topping = models.ForeignKey("menu.Topping", on_delete=models.SET_NULL, null=True, related_name="+")
    topping_name = models.CharField(max_length=120)
    # Selected units per dish; `quantity` is what gets billed (per dish x dishes)
    quantity_per_item = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(ZERO)])
    total_price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(ZERO)])

    class Meta:
        ordering = ["created_at"]

    def computed_total(self) -> Decimal:
        return self.unit_price * self.quantity


class OrderStatusChange(BaseModel):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="status_changes")
    status = models.CharField(max_length=20, choices=Order.STATUS_CHOICES)
    source = models.CharField(max_length=32, blank=True)
    note = models.CharField(max_length=255, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=["order", "created_at"], name="orders_status_change_idx"),
        ]
        ordering = ["created_at"]
