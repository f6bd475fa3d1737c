"""
Numeric coercion for form input and backend values.

The backend serializes decimal fields inconsistently (numbers on some endpoints,
strings on others) and form fields always arrive as strings, so everything
monetary is converted to Decimal before any arithmetic.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

CENT = Decimal('0.01')


def parse_decimal(value: Any, strip_commas: bool = False) -> Optional[Decimal]:
    """
    Convert a number or numeric string to Decimal.

    Args:
        value: int, float, Decimal or str
        strip_commas: Remove thousands separators ("1,250.50") before parsing

    Returns:
        The Decimal value, or None for None, blank, non-numeric and non-finite input
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        result = value
    else:
        text = str(value).strip()
        if strip_commas:
            text = text.replace(',', '')
        if not text:
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            return None

    if not result.is_finite():
        return None
    return result


def to_money(value: Decimal) -> Decimal:
    """Round to whole cents, halves away from zero"""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Any) -> str:
    """
    Two-decimal display string; values that do not parse display as 0.00.

    >>> format_money("14.5")
    '14.50'
    """
    amount = parse_decimal(value)
    return str(to_money(amount if amount is not None else Decimal(0)))
