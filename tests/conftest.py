from decimal import Decimal
from types import SimpleNamespace

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache

from apps.menu.models import MenuItem, Topping
from apps.orders.pricing import compose_line
from apps.orders.services import OrderRequest, submit_order

User = get_user_model()


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        username="staff", email="staff@example.com", password="pwd123", role=User.ROLE_STAFF
    )


@pytest.fixture
def owner_user(db):
    return User.objects.create_user(
        username="owner", email="owner@example.com", password="pwd123", role=User.ROLE_ADMIN
    )


@pytest.fixture
def staff_client(client, staff_user):
    client.force_login(staff_user)
    return client


@pytest.fixture
def owner_client(client, owner_user):
    client.force_login(owner_user)
    return client


@pytest.fixture
def catalog(db):
    salad = MenuItem.objects.create(name="Shrimp Salad", price=Decimal("120.00"), category="Salad", allow_toppings=True)
    pad_thai = MenuItem.objects.create(name="Pad Thai", price=Decimal("80.00"), category="Noodles", allow_toppings=True)
    mango = MenuItem.objects.create(name="Mango Sticky Rice", price=Decimal("90.00"), category="Dessert")
    sold_out = MenuItem.objects.create(
        name="Crab Curry", price=Decimal("250.00"), category="Curry", allow_toppings=True, is_available=False
    )
    extra_shrimp = Topping.objects.create(name="Extra Shrimp", price=Decimal("15.00"), category="Salad")
    meatballs = Topping.objects.create(name="Pork Meatballs", price=Decimal("15.00"), category="Noodles")
    fried_egg = Topping.objects.create(name="Fried Egg", price=Decimal("10.00"), category="General")
    no_crab = Topping.objects.create(name="Crab Claw", price=Decimal("40.00"), category="Salad", is_available=False)
    return SimpleNamespace(
        salad=salad,
        pad_thai=pad_thai,
        mango=mango,
        sold_out=sold_out,
        extra_shrimp=extra_shrimp,
        meatballs=meatballs,
        fried_egg=fried_egg,
        no_crab=no_crab,
        toppings=[extra_shrimp, meatballs, fried_egg],
    )


@pytest.fixture
def make_order(catalog):
    """Persist an order for the salad (qty 2 + one Extra Shrimp each): 270.00."""

    def _make(name="Somchai", phone="", order_type="dine-in", **kwargs):
        line = compose_line(catalog.salad, 2, {str(catalog.extra_shrimp.id): 1}, catalog.toppings)
        return submit_order(
            OrderRequest(customer_name=name, customer_phone=phone, order_type=order_type, lines=[line], **kwargs)
        )

    return _make


def plain_item(name="Widget", price="10.00", category="Test", allow_toppings=True, **extra):
    return SimpleNamespace(
        id=extra.pop("id", name.lower()),
        name=name,
        price=Decimal(price),
        category=category,
        allow_toppings=allow_toppings,
        **extra,
    )


def plain_topping(name="Sprinkles", price="2.00", category="Test", **extra):
    return SimpleNamespace(id=extra.pop("id", name.lower()), name=name, price=Decimal(price), category=category, **extra)


@pytest.fixture
def item_factory():
    return plain_item


@pytest.fixture
def topping_factory():
    return plain_topping
