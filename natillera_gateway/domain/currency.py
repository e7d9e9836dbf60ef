"""Colombian peso formatting for display"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any

from natillera_gateway.utils.numbers import to_decimal


def format_currency(
    amount: Any,
    max_fraction_digits: int = 2,
    min_fraction_digits: int = 0,
    symbol: str = "$",
) -> str:
    """
    Render an amount with es-CO conventions.

    "." groups thousands and "," separates decimals. The value is rounded
    half-up to ``max_fraction_digits`` and trailing zeros are trimmed down to
    ``min_fraction_digits``. Unparseable input renders as zero.

    Example:
        1000000 -> "$1.000.000"
        1234.5  -> "$1.234,5"
    """
    value = to_decimal(amount)
    with localcontext() as ctx:
        # Room for every integer digit plus the requested fraction digits
        ctx.prec = max(28, value.adjusted() + max_fraction_digits + 2)
        value = value.quantize(Decimal(1).scaleb(-max_fraction_digits), rounding=ROUND_HALF_UP)

    sign = "-" if value < 0 else ""
    integer_part, _, fraction = f"{value.copy_abs():.{max_fraction_digits}f}".partition(".")

    fraction = fraction.rstrip("0")
    if len(fraction) < min_fraction_digits:
        fraction = fraction.ljust(min_fraction_digits, "0")

    grouped = f"{int(integer_part):,}".replace(",", ".")
    text = f"{grouped},{fraction}" if fraction else grouped
    return f"{sign}{symbol}{text}"
