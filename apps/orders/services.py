from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction

from apps.common.codes import generate_order_number
from apps.common.phone import to_e164
from . import lifecycle
from .exceptions import PersistenceError
from .models import Order, OrderItem, OrderItemTopping
from .pricing import ComposedLine, order_total

log = logging.getLogger(__name__)

ORDER_TYPES = {Order.TYPE_DINE_IN, Order.TYPE_DELIVERY}
NAME_MAX_LENGTH = Order._meta.get_field("customer_name").max_length
KEY_MAX_LENGTH = Order._meta.get_field("idempotency_key").max_length


@dataclass
class OrderRequest:
    customer_name: str
    lines: list[ComposedLine] = field(default_factory=list)
    customer_phone: str = ""
    order_type: str = Order.TYPE_DINE_IN
    notes: str = ""
    idempotency_key: str | None = None

    @property
    def total_amount(self) -> Decimal:
        return order_total(self.lines)


def validate_order_request(req: OrderRequest) -> OrderRequest:
    """Check the candidate order before anything is written.

    Returns a cleaned copy (trimmed name/notes, E.164 phone).
    """
    name = (req.customer_name or "").strip()
    if not name:
        raise ValidationError("Customer name is required.", code="name_required")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(f"Customer name cannot exceed {NAME_MAX_LENGTH} characters.", code="name_too_long")
    key = req.idempotency_key
    if key is not None and not isinstance(key, str):
        raise ValidationError("Idempotency key must be a string.", code="invalid_idempotency_key")
    key = (key or "").strip() or None
    if key and len(key) > KEY_MAX_LENGTH:
        raise ValidationError(f"Idempotency key cannot exceed {KEY_MAX_LENGTH} characters.", code="invalid_idempotency_key")
    if not req.lines:
        raise ValidationError("Select at least one item.", code="empty_order")
    if req.order_type not in ORDER_TYPES:
        raise ValidationError(f"Unknown order type: {req.order_type}.", code="invalid_order_type")
    phone = (req.customer_phone or "").strip()
    if phone:
        try:
            phone = to_e164(phone)
        except ValueError:
            raise ValidationError("Invalid phone number.", code="invalid_phone")
    return OrderRequest(
        customer_name=name,
        customer_phone=phone,
        order_type=req.order_type,
        notes=(req.notes or "").strip(),
        lines=list(req.lines),
        idempotency_key=key,
    )


def _order_number_exists(number: str) -> bool:
    return Order.objects.filter(order_number=number).exists()


def _new_order_number() -> str:
    prefix = getattr(settings, "ORDER_NUMBER_PREFIX", "ORD")
    return generate_order_number(prefix=prefix, exists=_order_number_exists)


def _existing_for_key(key: str | None) -> Order | None:
    if not key:
        return None
    return Order.objects.filter(idempotency_key=key).first()


def submit_order(req: OrderRequest, *, created_by=None, source: str = "staff") -> Order:
    """Validate and persist an order with its items and toppings as one unit.

    Header, items and topping rows are written inside a single transaction;
    if any insert fails nothing is kept and PersistenceError is raised.
    A repeated idempotency key returns the order created the first time.
    """
    req = validate_order_request(req)
    existing = _existing_for_key(req.idempotency_key)
    if existing is not None:
        log.info("[orders] Duplicate submit ignored key=%s order=%s", req.idempotency_key, existing.order_number)
        return existing

    total = req.total_amount
    try:
        with transaction.atomic():
            order = Order(
                order_number=_new_order_number(),
                customer_name=req.customer_name,
                customer_phone=req.customer_phone,
                order_type=req.order_type,
                total_amount=total,
                notes=req.notes,
                idempotency_key=req.idempotency_key,
                created_by=created_by if getattr(created_by, "is_authenticated", False) else None,
            )
            order._status_change_source = source
            order.save()
            for line in req.lines:
                item = OrderItem.objects.create(
                    order=order,
                    menu_item=line.menu_item if getattr(line.menu_item, "pk", None) else None,
                    menu_item_name=line.menu_item.name,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    total_price=line.total_price,
                    special_instructions=line.special_instructions,
                )
                OrderItemTopping.objects.bulk_create(
                    [
                        OrderItemTopping(
                            order_item=item,
                            topping=t.topping if getattr(t.topping, "pk", None) else None,
                            topping_name=t.topping.name,
                            quantity_per_item=t.quantity_per_item,
                            quantity=t.quantity,
                            unit_price=t.unit_price,
                            total_price=t.total_price,
                        )
                        for t in line.toppings
                    ]
                )
    except IntegrityError as exc:
        # Lost a race on the idempotency key: the other request's order wins
        existing = _existing_for_key(req.idempotency_key)
        if existing is not None:
            return existing
        log.exception("[orders] Order insert rejected customer=%s", req.customer_name)
        raise PersistenceError("Failed to create order") from exc
    except DatabaseError as exc:
        log.exception("[orders] Order insert failed customer=%s", req.customer_name)
        raise PersistenceError("Failed to create order") from exc

    log.info(
        "[orders] Created order=%s items=%s total=%s type=%s",
        order.order_number,
        len(req.lines),
        order.total_amount,
        order.order_type,
    )
    return order


def change_status(order: Order, status: str, *, reason: str = "", source: str = "") -> Order:
    """Move `order` to `status`, enforcing the lifecycle.

    The row is re-read under a lock so the transition is checked against
    what is stored, not what the caller last saw. On failure `order` is
    left as it was.
    """
    try:
        with transaction.atomic():
            current = Order.objects.select_for_update().get(pk=order.pk)
            cleaned_reason = lifecycle.validate_transition(current.status, status, reason)
            current.set_status(
                status,
                source=source,
                note=cleaned_reason,
                cancel_reason=cleaned_reason if status == lifecycle.CANCELLED else None,
            )
    except Order.DoesNotExist:
        raise ValidationError("Order not found.", code="not_found")
    except DatabaseError as exc:
        log.exception("[orders] Status update failed order=%s target=%s", order.order_number, status)
        raise PersistenceError("Failed to update order") from exc

    log.info("[orders] order=%s status %s -> %s source=%s", order.order_number, order.status, status, source or "-")
    order.status = current.status
    order.cancel_reason = current.cancel_reason
    order.updated_at = current.updated_at
    return order


def cancel_order(order: Order, reason: str, *, source: str = "") -> Order:
    return change_status(order, lifecycle.CANCELLED, reason=reason, source=source)


def advance_order(order: Order, *, source: str = "") -> Order:
    target = lifecycle.next_status(order.status)
    if target is None:
        raise ValidationError(f"Order is already {order.status}.", code="invalid_transition")
    return change_status(order, target, source=source)
