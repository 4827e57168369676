"""Order status lifecycle.

    pending -> preparing -> ready -> completed
       \\__________\\__________\\____> cancelled (needs a reason)

`completed` and `cancelled` are terminal.
"""
from __future__ import annotations

from django.core.exceptions import ValidationError

PENDING = "pending"
PREPARING = "preparing"
READY = "ready"
COMPLETED = "completed"
CANCELLED = "cancelled"

STATUS_CHOICES = [
    (PENDING, "Pending"),
    (PREPARING, "Preparing"),
    (READY, "Ready"),
    (COMPLETED, "Completed"),
    (CANCELLED, "Cancelled"),
]
STATUSES = frozenset(s for s, _ in STATUS_CHOICES)

FORWARD = {
    PENDING: PREPARING,
    PREPARING: READY,
    READY: COMPLETED,
}
TERMINAL = frozenset({COMPLETED, CANCELLED})
# Statuses still being worked on by the kitchen
IN_PROGRESS = (PENDING, PREPARING, READY)


def next_status(current: str) -> str | None:
    return FORWARD.get(current)


def is_terminal(status: str) -> bool:
    return status in TERMINAL


def can_transition(current: str, target: str) -> bool:
    if current not in STATUSES or target not in STATUSES:
        return False
    if current in TERMINAL:
        return False
    if target == CANCELLED:
        return True
    return FORWARD.get(current) == target


def allowed_targets(current: str) -> list[str]:
    return [s for s, _ in STATUS_CHOICES if can_transition(current, s)]


def validate_transition(current: str, target: str, reason: str = "") -> str:
    """Raise ValidationError unless `current -> target` is allowed.

    Returns the trimmed cancellation reason ("" for forward moves).
    """
    if target not in STATUSES:
        raise ValidationError(f"Unknown status: {target}.", code="invalid_status")
    if not can_transition(current, target):
        raise ValidationError(f"Cannot move an order from {current} to {target}.", code="invalid_transition")
    if target == CANCELLED:
        cleaned = (reason or "").strip()
        if not cleaned:
            raise ValidationError("A cancellation reason is required.", code="reason_required")
        return cleaned
    return ""
