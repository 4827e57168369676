"""Line item composition.

Pure functions over catalog objects (model instances or anything with the
same attributes); nothing here touches the database.

Topping quantities are per unit of the dish: three dishes with two units of a
topping bill six topping units.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Mapping

from django.conf import settings
from django.core.exceptions import ValidationError

from apps.common.money import to_money
from apps.menu.rules import is_topping_eligible

# Matches OrderItem.special_instructions
MAX_INSTRUCTIONS_LENGTH = 200


@dataclass(frozen=True)
class ComposedTopping:
    topping: Any
    quantity_per_item: int
    quantity: int
    unit_price: Decimal
    total_price: Decimal


@dataclass(frozen=True)
class ComposedLine:
    menu_item: Any
    quantity: int
    unit_price: Decimal
    toppings: list[ComposedTopping] = field(default_factory=list)
    total_price: Decimal = Decimal("0.00")
    special_instructions: str = ""

    @property
    def base_total(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def toppings_total(self) -> Decimal:
        return sum((t.total_price for t in self.toppings), Decimal("0.00"))


def max_quantity() -> int:
    return int(getattr(settings, "ORDERS_MAX_QUANTITY", 999))


def coerce_quantity(raw, *, label: str, allow_zero: bool) -> int:
    if isinstance(raw, bool):
        raise ValidationError(f"{label} must be a whole number.", code="invalid_quantity")
    if isinstance(raw, str):
        raw = raw.strip()
    try:
        value = int(raw)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{label} must be a whole number.", code="invalid_quantity")
    if value != raw and not isinstance(raw, str):
        raise ValidationError(f"{label} must be a whole number.", code="invalid_quantity")
    if value < 0 or (value == 0 and not allow_zero):
        raise ValidationError(f"{label} must be positive.", code="invalid_quantity")
    limit = max_quantity()
    if value > limit:
        raise ValidationError(f"{label} cannot exceed {limit}.", code="quantity_too_large")
    return value


def clean_instructions(text: str | None) -> str:
    cleaned = (text or "").strip()
    if len(cleaned) > MAX_INSTRUCTIONS_LENGTH:
        raise ValidationError(
            f"Special instructions cannot exceed {MAX_INSTRUCTIONS_LENGTH} characters.",
            code="instructions_too_long",
        )
    return cleaned


def _index(toppings: Iterable) -> dict[str, Any]:
    return {str(t.id): t for t in toppings}


def normalize_selections(selections: Mapping | None) -> dict[str, int]:
    """Drop zero quantities and coerce keys to strings."""
    out: dict[str, int] = {}
    for topping_id, raw in (selections or {}).items():
        qty = coerce_quantity(raw, label="Topping quantity", allow_zero=True)
        if qty:
            out[str(topping_id)] = qty
    return out


def compose_line(
    item,
    quantity,
    selections: Mapping | None,
    toppings: Iterable,
    *,
    special_instructions: str = "",
) -> ComposedLine:
    """Price one menu item with its topping selections.

    `toppings` is the available topping catalog; selecting an id outside it,
    or a topping not eligible for `item`, raises ValidationError.
    """
    qty = coerce_quantity(quantity, label="Quantity", allow_zero=False)
    catalog = _index(toppings)
    unit_price = to_money(item.price)

    composed: list[ComposedTopping] = []
    for topping_id, per_item in normalize_selections(selections).items():
        topping = catalog.get(topping_id)
        if topping is None:
            raise ValidationError(f"Topping {topping_id} is not available.")
        if not is_topping_eligible(item, topping):
            raise ValidationError(f"{topping.name} cannot be added to {item.name}.")
        topping_price = to_money(topping.price)
        billed = per_item * qty
        composed.append(
            ComposedTopping(
                topping=topping,
                quantity_per_item=per_item,
                quantity=billed,
                unit_price=topping_price,
                total_price=topping_price * billed,
            )
        )

    total = unit_price * qty + sum((t.total_price for t in composed), Decimal("0.00"))
    return ComposedLine(
        menu_item=item,
        quantity=qty,
        unit_price=unit_price,
        toppings=composed,
        total_price=total,
        special_instructions=clean_instructions(special_instructions),
    )


def order_total(lines: Iterable[ComposedLine]) -> Decimal:
    return sum((line.total_price for line in lines), Decimal("0.00"))


def unit_preview(item, selections: Mapping | None, toppings: Iterable) -> Decimal:
    """Price of a single dish with the given toppings (public menu preview)."""
    return compose_line(item, 1, selections, toppings).total_price
