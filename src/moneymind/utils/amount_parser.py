"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
from typing import Any
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "₹123.45"
    - "$123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"[₹$€£¥]", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "")

    # Remove whitespace again
    amount_str = amount_str.strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if is_negative:
        amount = -amount
    return amount


def to_decimal(value: Any) -> Decimal:
    """Convert a JSON or CLI value (str, int, float, Decimal) to Decimal.

    Floats go through ``str`` so 19.99 stays 19.99 instead of its binary
    expansion.

    Raises:
        ValueError: If the value is not a number
    """
    if isinstance(value, bool):
        raise ValueError(f"Could not parse amount '{value}'")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Could not parse amount '{value}'")
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return parse_amount(repr(value))
    if isinstance(value, str):
        return parse_amount(value)
    raise ValueError(f"Could not parse amount '{value}'")
