"""Money helpers using Decimal with cent precision rules."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

MONEY_PRECISION = Decimal("0.01")
ZERO = Decimal("0.00")
MAX_AMOUNT = Decimal("9999999999.99")


def quantize_money(value: Decimal) -> Decimal:
    """Return value rounded to two decimal places with HALF_UP strategy."""

    return value.quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def format_money(value: Decimal) -> str:
    """Render money as string with exactly two decimal places."""

    return f"{quantize_money(value):.2f}"


def parse_amount(value: object) -> Decimal | None:
    """Convert a number or numeric string into a quantized Decimal.

    Returns None for booleans, non-numeric values, unparsable strings and
    non-finite numbers. Sign is preserved; callers decide whether negative
    amounts are acceptable.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        candidate = value
    elif isinstance(value, int):
        candidate = Decimal(value)
    elif isinstance(value, float):
        candidate = Decimal(str(value))
    elif isinstance(value, str):
        try:
            candidate = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None

    if not candidate.is_finite():
        return None
    try:
        return quantize_money(candidate)
    except InvalidOperation:
        return None


def is_storable_amount(amount: Decimal) -> bool:
    """Return whether an amount fits the persisted money columns."""

    return ZERO <= amount <= MAX_AMOUNT


def coerce_money(value: object) -> Decimal:
    """Parse a storable amount, falling back to zero for anything else.

    Negative amounts and amounts above ``MAX_AMOUNT`` become zero.
    """

    amount = parse_amount(value)
    if amount is None or not is_storable_amount(amount):
        return ZERO
    return amount
