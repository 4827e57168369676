from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.common.phone import to_e164
from . import lifecycle
from .models import Order

ALL = "all"


def _as_phone(term: str) -> str | None:
    """E.164 form of `term` when it is a full phone number (stored phones use it)."""
    try:
        return to_e164(term)
    except ValueError:
        return None


def _max_days() -> int:
    return int(getattr(settings, "ORDERS_MAX_RANGE_DAYS", 31))


def parse_date_range(
    start: dt.date | None = None,
    end: dt.date | None = None,
    *,
    max_days: int | None = None,
) -> tuple[dt.datetime, dt.datetime]:
    """Local-time bounds covering whole days from `start` to `end`.

    Both default to today. The span may not exceed `max_days`.
    """
    today = timezone.localdate()
    start = start or today
    end = end or today
    limit = _max_days() if max_days is None else max_days
    if end < start:
        raise ValidationError("End date must be on or after the start date.", code="inverted_range")
    if (end - start).days > limit:
        raise ValidationError(f"Date range cannot exceed {limit} days.", code="range_too_long")
    tz = timezone.get_current_timezone()
    return (
        dt.datetime.combine(start, dt.time.min, tzinfo=tz),
        dt.datetime.combine(end, dt.time.max, tzinfo=tz),
    )


def orders_in_range(start: dt.datetime, end: dt.datetime) -> QuerySet[Order]:
    return Order.objects.filter(created_at__gte=start, created_at__lte=end).order_by("-created_at")


def filter_orders(
    qs: QuerySet[Order],
    *,
    search: str = "",
    order_type: str = ALL,
    status: str = ALL,
) -> QuerySet[Order]:
    term = (search or "").strip()
    if term:
        match = Q(customer_name__icontains=term) | Q(customer_phone__contains=term)
        phone = _as_phone(term)
        if phone:
            match |= Q(customer_phone=phone)
        qs = qs.filter(match)
    order_type = order_type or ALL
    if order_type != ALL:
        if order_type not in {Order.TYPE_DINE_IN, Order.TYPE_DELIVERY}:
            raise ValidationError(f"Unknown order type: {order_type}.")
        qs = qs.filter(order_type=order_type)
    status = status or ALL
    if status != ALL:
        if status not in lifecycle.STATUSES:
            raise ValidationError(f"Unknown status: {status}.")
        qs = qs.filter(status=status)
    return qs


@dataclass(frozen=True)
class OrderStats:
    total_orders: int
    total_revenue: Decimal
    pending_orders: int
    completed_orders: int


def order_stats(orders: Iterable[Order]) -> OrderStats:
    rows = list(orders)
    return OrderStats(
        total_orders=len(rows),
        total_revenue=sum((o.total_amount for o in rows), Decimal("0.00")),
        pending_orders=sum(1 for o in rows if o.status in lifecycle.IN_PROGRESS),
        completed_orders=sum(1 for o in rows if o.status == lifecycle.COMPLETED),
    )
