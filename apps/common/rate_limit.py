"""Login throttling: a fixed-window attempt counter kept in the default cache."""
from __future__ import annotations

from dataclasses import dataclass
from time import time
from typing import Callable

from django.conf import settings
from django.core.cache import caches
from django.http import HttpRequest


@dataclass(frozen=True)
class LimitResult:
    allowed: bool
    remaining: int
    retry_after: int


def rate_limit(
    namespace: str,
    ident: str,
    limit: int,
    window_seconds: int,
    *,
    clock: Callable[[], float] = time,
) -> LimitResult:
    """Count one attempt for `ident`; refuse once `limit` is passed in the window.

    Refused attempts still count, so hammering does not reopen the window early.
    """
    cache = caches["default"]
    now = int(clock())
    bucket, elapsed = divmod(now, window_seconds)
    key = f"rl:{namespace}:{ident}:{bucket}"

    if cache.add(key, 1, timeout=window_seconds):
        attempts = 1
    else:
        try:
            attempts = cache.incr(key)
        except ValueError:
            # Expired between add() and incr()
            cache.set(key, 1, timeout=window_seconds)
            attempts = 1

    if attempts > limit:
        return LimitResult(False, 0, window_seconds - elapsed)
    return LimitResult(True, limit - attempts, 0)


def login_throttle(request: HttpRequest) -> LimitResult:
    ident = request.META.get("REMOTE_ADDR") or "unknown"
    return rate_limit(
        "login",
        ident,
        limit=int(getattr(settings, "LOGIN_RATE_LIMIT", 20)),
        window_seconds=int(getattr(settings, "LOGIN_RATE_WINDOW", 60)),
    )
