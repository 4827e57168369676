from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from apps.orders.drafts import DraftOrder


@pytest.fixture
def draft(item_factory, topping_factory):
    items = [
        item_factory(name="Widget", price="10.00", category="Test"),
        item_factory(name="Shrimp Salad", price="120.00", category="Salad", id="salad"),
        item_factory(name="Iced Tea", price="45.00", category="Drinks", allow_toppings=False, id="tea"),
    ]
    toppings = [
        topping_factory(name="Sprinkles", price="2.00", category="Test"),
        topping_factory(name="Extra Shrimp", price="15.00", category="Salad", id="shrimp"),
        topping_factory(name="Fried Egg", price="10.00", category="General", id="egg"),
    ]
    return DraftOrder(items, toppings)


def test_builds_total_from_lines(draft):
    draft.add_item("widget", 3)
    draft.set_topping_quantity("widget", "sprinkles", 2)
    draft.add_item("salad", 2)
    draft.set_topping_quantity("salad", "shrimp", 1)

    assert len(draft) == 2
    assert [line.total_price for line in draft.lines()] == [Decimal("42.00"), Decimal("270.00")]
    assert draft.compute_total() == Decimal("312.00")


def test_adding_same_item_twice_accumulates(draft):
    draft.add_item("widget")
    draft.add_item("widget", 2)
    [line] = draft.lines()
    assert line.quantity == 3


def test_set_item_quantity_zero_removes_line(draft):
    draft.add_item("widget", 2)
    draft.set_item_quantity("widget", 0)
    assert len(draft) == 0
    assert draft.compute_total() == Decimal("0.00")


def test_topping_needs_item_in_draft(draft):
    with pytest.raises(ValidationError):
        draft.set_topping_quantity("widget", "sprinkles", 1)


def test_ineligible_topping_is_rejected(draft):
    draft.add_item("salad")
    with pytest.raises(ValidationError):
        draft.set_topping_quantity("salad", "sprinkles", 1)
    draft.add_item("tea")
    with pytest.raises(ValidationError):
        draft.set_topping_quantity("tea", "egg", 1)


def test_topping_zero_clears_selection(draft):
    draft.add_item("salad")
    draft.set_topping_quantity("salad", "shrimp", 2)
    draft.set_topping_quantity("salad", "shrimp", 0)
    [line] = draft.lines()
    assert line.toppings == []


def test_unknown_item(draft):
    with pytest.raises(ValidationError):
        draft.add_item("pizza")


def test_to_order_request(draft):
    draft.add_item("salad", 2)
    draft.set_topping_quantity("salad", "shrimp", 1)
    draft.set_instructions("salad", "  no peanuts ")

    req = draft.to_order_request(customer_name="Somchai", order_type="delivery", idempotency_key="")

    assert req.customer_name == "Somchai"
    assert req.order_type == "delivery"
    assert req.idempotency_key is None
    assert req.total_amount == Decimal("270.00")
    assert req.lines[0].special_instructions == "no peanuts"


def test_from_payload(draft):
    payload = {
        "items": [
            {"menu_item_id": "widget", "quantity": 3, "toppings": {"sprinkles": 2}},
            {"menu_item_id": "salad", "quantity": 2, "toppings": {"shrimp": 1, "egg": 0}},
            {"menu_item_id": "tea", "quantity": 0},
        ]
    }
    built = DraftOrder.from_payload(payload, list(draft._items.values()), list(draft._toppings.values()))
    assert len(built) == 2
    assert built.compute_total() == Decimal("312.00")


@pytest.mark.parametrize(
    "payload",
    [
        {"items": "widget"},
        {"items": ["widget"]},
        {"items": [{"menu_item_id": "widget"}, {"menu_item_id": "widget"}]},
        {"items": [{"menu_item_id": "widget", "toppings": ["sprinkles"]}]},
    ],
)
def test_from_payload_rejects_malformed(draft, payload):
    with pytest.raises(ValidationError):
        DraftOrder.from_payload(payload, list(draft._items.values()), list(draft._toppings.values()))
