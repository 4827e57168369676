import datetime as dt

import pytest
from django.urls import reverse
from django.utils import timezone

from apps.orders import lifecycle, services


@pytest.mark.django_db
def test_staff_cannot_open_dashboard(staff_client):
    r = staff_client.get(reverse("orders:admin_dashboard"))
    assert r.status_code == 302
    assert r["Location"].startswith("/auth/login")


@pytest.mark.django_db
def test_dashboard_defaults_to_today(owner_client, make_order):
    make_order(name="Somchai")
    done = make_order(name="Malee", order_type="delivery")
    cancelled = make_order(name="Anan")
    for _ in range(3):
        services.advance_order(done)
    services.cancel_order(cancelled, "no show")

    r = owner_client.get(reverse("orders:admin_dashboard"))

    assert r.status_code == 200
    data = r.json()
    assert data["start"] == data["end"] == timezone.localdate().isoformat()
    assert data["stats"] == {
        "total_orders": 3,
        "total_revenue": "810.00",
        "total_revenue_display": "$810.00",
        "pending_orders": 1,
        "completed_orders": 1,
    }
    assert len(data["orders"]) == 3
    assert data["orders"][0]["order_items"]


@pytest.mark.django_db
def test_dashboard_filters_narrow_the_list_not_the_stats(owner_client, make_order):
    make_order(name="Somchai")
    make_order(name="Malee", order_type="delivery")

    r = owner_client.get(reverse("orders:admin_dashboard"), {"type": "delivery", "q": "mal"})

    data = r.json()
    assert [o["customer_name"] for o in data["orders"]] == ["Malee"]
    assert data["stats"]["total_orders"] == 2


@pytest.mark.django_db
def test_dashboard_status_filter(owner_client, make_order):
    order = make_order()
    make_order()
    services.change_status(order, lifecycle.PREPARING)

    r = owner_client.get(reverse("orders:admin_dashboard"), {"status": lifecycle.PREPARING})
    assert [o["id"] for o in r.json()["orders"]] == [str(order.id)]


@pytest.mark.django_db
def test_dashboard_past_range_is_empty(owner_client, make_order):
    make_order()
    last_week = timezone.localdate() - dt.timedelta(days=7)
    r = owner_client.get(
        reverse("orders:admin_dashboard"),
        {"start": last_week.isoformat(), "end": (last_week + dt.timedelta(days=1)).isoformat()},
    )
    assert r.status_code == 200
    assert r.json()["stats"]["total_orders"] == 0


@pytest.mark.django_db
@pytest.mark.parametrize(
    "params",
    [
        {"start": "2026-03-10", "end": "2026-03-01"},
        {"start": "2026-01-01", "end": "2026-03-01"},
    ],
)
def test_dashboard_rejects_bad_ranges(owner_client, params):
    r = owner_client.get(reverse("orders:admin_dashboard"), params)
    assert r.status_code == 422
    assert r.json()["flash"]["type"] == "error"


@pytest.mark.django_db
def test_dashboard_rejects_unparseable_dates(owner_client):
    r = owner_client.get(reverse("orders:admin_dashboard"), {"start": "yesterday"})
    assert r.status_code == 422
    assert "start" in r.json()["errors"]
