import secrets
import string
import time
from typing import Callable, Protocol


class _ExistsFunc(Protocol):
    def __call__(self, code: str) -> bool:
        ...


_ALPHABET = string.ascii_uppercase + string.digits


def _random_code(length: int = 8, alphabet: str = _ALPHABET) -> str:
    return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_unique_code(
    *,
    length: int = 8,
    exists: _ExistsFunc,
    max_attempts: int = 12,
    alphabet: str = _ALPHABET,
) -> str:
    """Return a random code that is unique under the provided exists() check."""
    for _ in range(max_attempts):
        code = _random_code(length, alphabet)
        if not exists(code):
            return code
    raise RuntimeError("unable to generate unique code")


def time_token(length: int = 6, clock: Callable[[], float] = time.time) -> str:
    """Last `length` digits of the epoch-millisecond clock."""
    millis = str(int(clock() * 1000))
    return millis[-length:].rjust(length, "0")


def generate_order_number(
    *,
    prefix: str = "ORD",
    exists: _ExistsFunc,
    length: int = 6,
    clock: Callable[[], float] = time.time,
) -> str:
    """Human-readable order number such as ``ORD-482913``.

    The clock-derived token is tried first; when two orders land in the same
    truncation window the token is replaced by random digits.
    """
    candidate = f"{prefix}-{time_token(length, clock)}"
    if not exists(candidate):
        return candidate
    token = generate_unique_code(
        length=length,
        exists=lambda code: exists(f"{prefix}-{code}"),
        alphabet=string.digits,
    )
    return f"{prefix}-{token}"
