import json

import pytest
from django.urls import reverse

from apps.orders import lifecycle
from apps.orders.models import Order


def _payload(catalog, **extra):
    payload = {
        "customer_name": "Somchai",
        "customer_phone": "0812345678",
        "order_type": "dine-in",
        "items": [
            {"menu_item_id": str(catalog.salad.id), "quantity": 2, "toppings": {str(catalog.extra_shrimp.id): 1}},
            {
                "menu_item_id": str(catalog.pad_thai.id),
                "quantity": 1,
                "toppings": {str(catalog.fried_egg.id): 1},
                "special_instructions": "not spicy",
            },
        ],
    }
    payload.update(extra)
    return payload


def _post_json(client, url, payload, **headers):
    return client.post(url, data=json.dumps(payload), content_type="application/json", **headers)


@pytest.mark.django_db
def test_anonymous_is_sent_to_login(client):
    r = client.get(reverse("orders:staff_orders"))
    assert r.status_code == 302
    assert r["Location"].startswith("/auth/login")

    r = client.get(reverse("orders:staff_orders"), HTTP_HX_REQUEST="true")
    assert r.status_code == 204
    assert r.headers.get("HX-Redirect") == "/auth/login"


@pytest.mark.django_db
def test_staff_catalog_lists_available_items_with_toppings(staff_client, catalog):
    r = staff_client.get(reverse("orders:staff_catalog"))
    assert r.status_code == 200
    data = r.json()
    names = [i["name"] for i in data["items"]]
    assert "Crab Curry" not in names
    salad = next(i for i in data["items"] if i["name"] == "Shrimp Salad")
    assert {t["name"] for t in salad["toppings"]} == {"Extra Shrimp", "Fried Egg"}
    mango = next(i for i in data["items"] if i["name"] == "Mango Sticky Rice")
    assert mango["toppings"] == []


@pytest.mark.django_db
def test_create_order(staff_client, staff_user, catalog):
    r = _post_json(staff_client, reverse("orders:order_create"), _payload(catalog))

    assert r.status_code == 201
    data = r.json()
    assert data["flash"]["type"] == "success"
    assert "HX-Trigger" in r.headers
    order = data["order"]
    assert order["total_amount"] == "360.00"
    assert order["status"] == lifecycle.PENDING
    assert order["customer_phone"] == "+66812345678"
    assert [i["total_price"] for i in order["order_items"]] == ["270.00", "90.00"]
    assert order["order_items"][1]["special_instructions"] == "not spicy"
    assert Order.objects.get().created_by == staff_user


@pytest.mark.django_db
def test_create_order_idempotency_header(staff_client, catalog):
    url = reverse("orders:order_create")
    first = _post_json(staff_client, url, _payload(catalog), HTTP_IDEMPOTENCY_KEY="k-1")
    second = _post_json(staff_client, url, _payload(catalog), HTTP_IDEMPOTENCY_KEY="k-1")

    assert first.status_code == second.status_code == 201
    assert first.json()["order"]["id"] == second.json()["order"]["id"]
    assert Order.objects.count() == 1


@pytest.mark.django_db
@pytest.mark.parametrize(
    "changes",
    [
        {"customer_name": "  "},
        {"items": []},
        {"order_type": "takeaway"},
        {"customer_phone": "123"},
    ],
)
def test_create_order_rejects_invalid_input(staff_client, catalog, changes):
    r = _post_json(staff_client, reverse("orders:order_create"), _payload(catalog, **changes))
    assert r.status_code == 422
    assert r.json()["flash"]["type"] == "error"
    assert Order.objects.count() == 0


@pytest.mark.django_db
def test_create_order_rejects_ineligible_and_unavailable(staff_client, catalog):
    url = reverse("orders:order_create")
    wrong_topping = _payload(
        catalog,
        items=[{"menu_item_id": str(catalog.salad.id), "quantity": 1, "toppings": {str(catalog.meatballs.id): 1}}],
    )
    sold_out = _payload(catalog, items=[{"menu_item_id": str(catalog.sold_out.id), "quantity": 1}])

    assert _post_json(staff_client, url, wrong_topping).status_code == 422
    assert _post_json(staff_client, url, sold_out).status_code == 422
    assert Order.objects.count() == 0


@pytest.mark.django_db
def test_create_order_malformed_body(staff_client, catalog):
    r = staff_client.post(reverse("orders:order_create"), data="{nope", content_type="application/json")
    assert r.status_code == 400


@pytest.mark.django_db
def test_orders_list_filters_and_paginates(staff_client, make_order):
    make_order(name="Somchai")
    make_order(name="Malee", order_type="delivery")

    r = staff_client.get(reverse("orders:staff_orders"), {"type": "delivery"})
    assert r.status_code == 200
    data = r.json()
    assert [o["customer_name"] for o in data["orders"]] == ["Malee"]
    assert data["count"] == 1

    r = staff_client.get(reverse("orders:staff_orders"), {"page": "99"})
    assert r.json()["page"] == 1

    r = staff_client.get(reverse("orders:staff_orders"), {"status": "shipped"})
    assert r.status_code == 422


@pytest.mark.django_db
def test_order_detail(staff_client, make_order):
    order = make_order()
    r = staff_client.get(reverse("orders:order_detail", args=[order.id]))
    assert r.status_code == 200
    data = r.json()["order"]
    assert data["order_number"] == order.order_number
    assert data["next_status"] == lifecycle.PREPARING
    assert data["can_cancel"] is True
    assert data["order_items"][0]["toppings"][0]["quantity"] == 2
    assert [h["status"] for h in data["history"]] == [lifecycle.PENDING]


@pytest.mark.django_db
def test_update_status(staff_client, make_order):
    order = make_order()
    url = reverse("orders:update_order_status", args=[order.id])

    r = staff_client.post(url, {"status": lifecycle.PREPARING})
    assert r.status_code == 200
    assert r.json()["order"]["status"] == lifecycle.PREPARING

    r = staff_client.post(url, {"status": lifecycle.COMPLETED})
    assert r.status_code == 400
    order.refresh_from_db()
    assert order.status == lifecycle.PREPARING

    r = staff_client.post(url, {"status": "shipped"})
    assert r.status_code == 400


@pytest.mark.django_db
def test_cancel_order(staff_client, make_order):
    order = make_order()
    url = reverse("orders:cancel_order", args=[order.id])

    r = staff_client.post(url, {"reason": ""})
    assert r.status_code == 400
    order.refresh_from_db()
    assert order.status == lifecycle.PENDING

    r = staff_client.post(url, {"reason": "Customer left"})
    assert r.status_code == 200
    assert r.json()["order"]["cancel_reason"] == "Customer left"
    order.refresh_from_db()
    assert (order.status, order.cancel_reason) == (lifecycle.CANCELLED, "Customer left")

    r = staff_client.post(url, {"reason": "again"})
    assert r.status_code == 400


@pytest.mark.django_db
def test_status_endpoints_require_post(staff_client, make_order):
    order = make_order()
    r = staff_client.get(reverse("orders:cancel_order", args=[order.id]))
    assert r.status_code == 405


@pytest.mark.django_db
def test_admin_can_use_staff_console(owner_client, make_order):
    make_order()
    r = owner_client.get(reverse("orders:staff_orders"))
    assert r.status_code == 200
    assert r.json()["count"] == 1


@pytest.mark.django_db
@pytest.mark.parametrize(
    "changes",
    [
        {"idempotency_key": 12345},
        {"idempotency_key": "k" * 121},
        {"customer_name": "x" * 161},
    ],
)
def test_create_order_rejects_bad_header_fields(staff_client, catalog, changes):
    r = _post_json(staff_client, reverse("orders:order_create"), _payload(catalog, **changes))
    assert r.status_code == 422
    assert Order.objects.count() == 0


@pytest.mark.django_db
@pytest.mark.parametrize("quantity", [float("inf"), 10**20, 1000])
def test_create_order_rejects_out_of_range_quantities(staff_client, catalog, quantity):
    url = reverse("orders:order_create")
    line = _payload(catalog, items=[{"menu_item_id": str(catalog.salad.id), "quantity": quantity}])
    topping = _payload(
        catalog,
        items=[{"menu_item_id": str(catalog.salad.id), "quantity": 1, "toppings": {str(catalog.extra_shrimp.id): quantity}}],
    )

    assert _post_json(staff_client, url, line).status_code == 422
    assert _post_json(staff_client, url, topping).status_code == 422
    assert Order.objects.count() == 0


@pytest.mark.django_db
def test_create_order_rejects_overlong_instructions(staff_client, catalog):
    payload = _payload(
        catalog,
        items=[{"menu_item_id": str(catalog.salad.id), "quantity": 1, "special_instructions": "x" * 201}],
    )
    r = _post_json(staff_client, reverse("orders:order_create"), payload)
    assert r.status_code == 422
    assert Order.objects.count() == 0
