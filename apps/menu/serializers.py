from __future__ import annotations

from typing import Any

from apps.common.money import fmt_money, money_str
from .models import MenuItem, Topping
from .rules import filter_eligible


def serialize_topping(topping: Topping) -> dict[str, Any]:
    return {
        "id": str(topping.id),
        "name": topping.name,
        "category": topping.category,
        "price": money_str(topping.price),
        "price_display": fmt_money(topping.price),
    }


def serialize_item(item: MenuItem, toppings: list[Topping] | None = None) -> dict[str, Any]:
    data = {
        "id": str(item.id),
        "name": item.name,
        "description": item.description,
        "category": item.category,
        "price": money_str(item.price),
        "price_display": fmt_money(item.price),
        "allow_toppings": item.allow_toppings,
        "image_url": item.image_url or None,
    }
    if toppings is not None:
        data["toppings"] = [serialize_topping(t) for t in filter_eligible(item, toppings)]
    return data
