from __future__ import annotations

from typing import Any

from apps.common.money import fmt_money, money_str
from . import lifecycle
from .filters import OrderStats
from .models import Order, OrderItem, OrderItemTopping


def serialize_item_topping(t: OrderItemTopping) -> dict[str, Any]:
    return {
        "id": str(t.id),
        "topping_id": str(t.topping_id) if t.topping_id else None,
        "name": t.topping_name,
        "quantity_per_item": t.quantity_per_item,
        "quantity": t.quantity,
        "unit_price": money_str(t.unit_price),
        "total_price": money_str(t.total_price),
    }


def serialize_order_item(item: OrderItem) -> dict[str, Any]:
    return {
        "id": str(item.id),
        "menu_item_id": str(item.menu_item_id) if item.menu_item_id else None,
        "name": item.menu_item_name,
        "quantity": item.quantity,
        "unit_price": money_str(item.unit_price),
        "total_price": money_str(item.total_price),
        "special_instructions": item.special_instructions,
        "toppings": [serialize_item_topping(t) for t in item.toppings.all()],
    }


def serialize_order(order: Order, *, with_items: bool = False) -> dict[str, Any]:
    data = {
        "id": str(order.id),
        "order_number": order.order_number,
        "customer_name": order.customer_name,
        "customer_phone": order.customer_phone,
        "order_type": order.order_type,
        "status": order.status,
        "status_label": order.get_status_display(),
        "next_status": lifecycle.next_status(order.status),
        "can_cancel": lifecycle.can_transition(order.status, lifecycle.CANCELLED),
        "allowed_statuses": lifecycle.allowed_targets(order.status),
        "total_amount": money_str(order.total_amount),
        "total_display": fmt_money(order.total_amount),
        "notes": order.notes,
        "cancel_reason": order.cancel_reason or None,
        "created_at": order.created_at.isoformat() if order.created_at else None,
    }
    if with_items:
        data["order_items"] = [serialize_order_item(i) for i in order.order_items.all()]
        data["history"] = [
            {"status": c.status, "source": c.source, "note": c.note, "at": c.created_at.isoformat()}
            for c in order.status_changes.all()
        ]
    return data


def serialize_stats(stats: OrderStats) -> dict[str, Any]:
    return {
        "total_orders": stats.total_orders,
        "total_revenue": money_str(stats.total_revenue),
        "total_revenue_display": fmt_money(stats.total_revenue),
        "pending_orders": stats.pending_orders,
        "completed_orders": stats.completed_orders,
    }
