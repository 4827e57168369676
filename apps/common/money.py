from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Coerce ints/strings/Decimals to a 2-place Decimal."""
    if isinstance(value, float):
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def fmt_money(value) -> str:
    """Format an amount the way the console shows it (e.g. 1234.5 -> $1,234.50)."""
    try:
        amount = to_money(value if value is not None else 0)
    except (ArithmeticError, TypeError, ValueError):
        return str(value)
    return f"${amount:,.2f}"


def money_str(value) -> str:
    """Plain string for JSON payloads (Decimal is not JSON-native)."""
    return f"{to_money(value):.2f}"
