"""In-memory order draft used by the staff console while an order is built."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Mapping

from django.core.exceptions import ValidationError

from apps.menu.rules import is_topping_eligible
from .pricing import ComposedLine, clean_instructions, coerce_quantity, compose_line, order_total
from .services import OrderRequest


@dataclass
class _DraftLine:
    quantity: int
    toppings: dict[str, int] = field(default_factory=dict)
    special_instructions: str = ""


class DraftOrder:
    def __init__(self, menu_items: Iterable, toppings: Iterable):
        self._items = {str(i.id): i for i in menu_items}
        self._toppings = {str(t.id): t for t in toppings}
        self._lines: dict[str, _DraftLine] = {}

    def __len__(self) -> int:
        return len(self._lines)

    def _item(self, item_id) -> Any:
        item = self._items.get(str(item_id))
        if item is None:
            raise ValidationError(f"Menu item {item_id} is not available.")
        return item

    def _line(self, item_id) -> _DraftLine:
        line = self._lines.get(str(item_id))
        if line is None:
            raise ValidationError("Add the item to the order before choosing toppings.")
        return line

    def add_item(self, item_id, quantity=1) -> None:
        self._item(item_id)
        qty = coerce_quantity(quantity, label="Quantity", allow_zero=False)
        key = str(item_id)
        if key in self._lines:
            line = self._lines[key]
            line.quantity = coerce_quantity(line.quantity + qty, label="Quantity", allow_zero=False)
        else:
            self._lines[key] = _DraftLine(quantity=qty)

    def set_item_quantity(self, item_id, quantity) -> None:
        self._item(item_id)
        qty = coerce_quantity(quantity, label="Quantity", allow_zero=True)
        key = str(item_id)
        if qty == 0:
            self._lines.pop(key, None)
        elif key in self._lines:
            self._lines[key].quantity = qty
        else:
            self._lines[key] = _DraftLine(quantity=qty)

    def set_topping_quantity(self, item_id, topping_id, quantity) -> None:
        item = self._item(item_id)
        line = self._line(item_id)
        qty = coerce_quantity(quantity, label="Topping quantity", allow_zero=True)
        key = str(topping_id)
        if qty == 0:
            line.toppings.pop(key, None)
            return
        topping = self._toppings.get(key)
        if topping is None:
            raise ValidationError(f"Topping {topping_id} is not available.")
        if not is_topping_eligible(item, topping):
            raise ValidationError(f"{topping.name} cannot be added to {item.name}.")
        line.toppings[key] = qty

    def set_instructions(self, item_id, text: str) -> None:
        self._line(item_id).special_instructions = clean_instructions(text)

    def lines(self) -> list[ComposedLine]:
        toppings = list(self._toppings.values())
        return [
            compose_line(
                self._items[item_id],
                line.quantity,
                line.toppings,
                toppings,
                special_instructions=line.special_instructions,
            )
            for item_id, line in self._lines.items()
        ]

    def compute_total(self) -> Decimal:
        return order_total(self.lines())

    def to_order_request(
        self,
        *,
        customer_name: str,
        customer_phone: str = "",
        order_type: str = "dine-in",
        notes: str = "",
        idempotency_key: str | None = None,
    ) -> OrderRequest:
        return OrderRequest(
            customer_name=customer_name,
            customer_phone=customer_phone,
            order_type=order_type,
            notes=notes,
            lines=self.lines(),
            idempotency_key=idempotency_key or None,
        )

    @classmethod
    def from_payload(cls, payload: Mapping, menu_items: Iterable, toppings: Iterable) -> "DraftOrder":
        """Build a draft from the console's JSON body.

        ``{"items": [{"menu_item_id": ..., "quantity": 2,
        "toppings": {"<topping id>": 1}, "special_instructions": ""}]}``
        Entries with quantity 0 are skipped.
        """
        draft = cls(menu_items, toppings)
        entries = payload.get("items") or []
        if not isinstance(entries, list):
            raise ValidationError("items must be a list.")
        for entry in entries:
            if not isinstance(entry, Mapping):
                raise ValidationError("Each item must be an object.")
            item_id = entry.get("menu_item_id")
            qty = coerce_quantity(entry.get("quantity", 1), label="Quantity", allow_zero=True)
            if qty == 0:
                continue
            if str(item_id) in draft._lines:
                raise ValidationError("Each menu item can only be listed once.")
            draft.add_item(item_id, qty)
            selections = entry.get("toppings") or {}
            if not isinstance(selections, Mapping):
                raise ValidationError("toppings must be an object.")
            for topping_id, topping_qty in selections.items():
                draft.set_topping_quantity(item_id, topping_id, topping_qty)
            draft.set_instructions(item_id, str(entry.get("special_instructions") or ""))
        return draft
