from __future__ import annotations

from django.conf import settings
from django.core.cache import cache

from .models import MenuItem, Topping
from .rules import filter_eligible

ITEMS_CACHE_KEY = "menu:items:available"
TOPPINGS_CACHE_KEY = "menu:toppings:available"
ALL_CATEGORIES = "All"


def _timeout() -> int:
    return int(getattr(settings, "CATALOG_CACHE_TIMEOUT", 60))


def _cached(model, cache_key: str, order_by: tuple[str, ...]) -> list:
    cached: list | None = cache.get(cache_key)
    if cached is None:
        rows = list(model.objects.filter(is_available=True).order_by(*order_by))
        cache.set(cache_key, [row.pk for row in rows], timeout=_timeout())
        return rows
    if not cached:
        return []
    preserved = {pk: idx for idx, pk in enumerate(cached)}
    # An item can become unavailable between invalidations on another worker
    rows = list(model.objects.filter(pk__in=cached, is_available=True))
    rows.sort(key=lambda row: preserved.get(row.pk, 0))
    return rows


def list_available_items(category: str | None = None) -> list[MenuItem]:
    items = _cached(MenuItem, ITEMS_CACHE_KEY, ("category", "name"))
    if category and category != ALL_CATEGORIES:
        items = [item for item in items if item.category == category]
    return items


def list_available_toppings() -> list[Topping]:
    return _cached(Topping, TOPPINGS_CACHE_KEY, ("category", "name"))


def list_categories() -> list[str]:
    seen: list[str] = []
    for item in list_available_items():
        if item.category not in seen:
            seen.append(item.category)
    return [ALL_CATEGORIES, *seen]


def eligible_toppings(item: MenuItem, toppings: list[Topping] | None = None) -> list[Topping]:
    if toppings is None:
        toppings = list_available_toppings()
    return filter_eligible(item, toppings)


def invalidate_catalog_cache() -> None:
    cache.delete_many([ITEMS_CACHE_KEY, TOPPINGS_CACHE_KEY])
