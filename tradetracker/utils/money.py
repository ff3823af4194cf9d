# tradetracker/utils/money.py
"""
Decimal money helpers.

Prices and weighted-average cost carry 4 fractional digits, summary
amounts carry 2. Everything is Decimal; floats never enter the pipeline.

Usage:
    from tradetracker.utils.money import to_price, to_currency, format_money

    to_price(Decimal("3.33335"))          # Decimal("3.3334")
    format_money(Decimal("1E+2"), 2)      # "100.00"
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from tradetracker.services.constants import COST_TOTAL_PRECISION, CURRENCY_PRECISION, PRICE_PRECISION
from tradetracker.services.exceptions import FormatError


def quantize(value: Decimal, places: int) -> Decimal:
    """Round half-up to a fixed number of fractional digits."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def to_price(value: Decimal) -> Decimal:
    """Round to 4 dp (unit prices, weighted-average cost)."""
    return value.quantize(PRICE_PRECISION, rounding=ROUND_HALF_UP)


def to_currency(value: Decimal) -> Decimal:
    """Round to 2 dp (summary amounts)."""
    return value.quantize(CURRENCY_PRECISION, rounding=ROUND_HALF_UP)


def to_cost_total(value: Decimal) -> Decimal:
    """Round to 10 dp (running purchase cost of a position)."""
    return value.quantize(COST_TOTAL_PRECISION, rounding=ROUND_HALF_UP)


def format_money(value: Decimal, places: int = 2) -> str:
    """
    Fixed-point string at the given precision.

    Never uses exponent notation, so Decimal("1E+2") formats as "100.00".
    """
    return format(quantize(value, places), "f")


def parse_money(text: str) -> Decimal:
    """
    Parse a money string into a Decimal.

    Raises:
        FormatError: For empty strings, garbage, NaN or Infinity
    """
    if not isinstance(text, str) or not text.strip():
        raise FormatError(f"Invalid money value: {text!r}")
    try:
        value = Decimal(text.strip())
    except InvalidOperation:
        raise FormatError(f"Invalid money value: {text!r}")
    if not value.is_finite():
        raise FormatError(f"Invalid money value: {text!r}")
    return value
