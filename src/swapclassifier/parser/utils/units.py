"""Raw integer <-> decimal conversions. Aggregation stays in raw units; only these helpers leave them."""

from decimal import ROUND_HALF_EVEN, Decimal

# Zero tolerance in normalized (human) units
EPSILON = Decimal("1e-9")


def raw_to_decimal(raw: int, decimals: int) -> Decimal:
    """Exact: shifts the exponent instead of dividing, so no context rounding applies."""
    sign, digits, exponent = Decimal(raw).as_tuple()
    return Decimal((sign, digits, exponent - decimals))


def decimal_to_raw(amount: Decimal, decimals: int) -> int:
    sign, digits, exponent = amount.as_tuple()
    shifted = Decimal((sign, digits, exponent + decimals))
    return int(shifted.to_integral_value(rounding=ROUND_HALF_EVEN))


def is_near_zero(raw: int, decimals: int) -> bool:
    return abs(raw_to_decimal(raw, decimals)) < EPSILON


def human_to_raw(amount: int | float | str | Decimal, decimals: int) -> int:
    """Human-readable amount as reported by an indexer -> raw units. Floats go through str() to keep their repr."""
    if isinstance(amount, float):
        amount = str(amount)
    return decimal_to_raw(Decimal(amount), decimals)


def fraction_digits(amount: int | float | str | Decimal) -> int:
    """Digits after the decimal point in a reported amount (lower bound on the mint's decimals)."""
    exponent = Decimal(str(amount)).as_tuple().exponent
    return max(0, -exponent) if isinstance(exponent, int) else 0
