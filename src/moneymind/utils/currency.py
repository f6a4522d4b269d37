"""Rupee/dollar conversion for the dashboard converter."""

from decimal import Decimal, ROUND_HALF_UP

INR_PER_USD = Decimal("90.23")

CENTS = Decimal("0.01")

SUPPORTED = ("INR", "USD")


def convert_currency(
    amount: Decimal, from_currency: str, to_currency: str, rate: Decimal = INR_PER_USD
) -> Decimal:
    """Convert between INR and USD, rounded half-up to two places.

    Args:
        amount: Amount in ``from_currency``
        from_currency: "INR" or "USD"
        to_currency: "INR" or "USD"
        rate: Rupees per dollar

    Raises:
        ValueError: If a currency code is not supported
    """
    source = from_currency.strip().upper()
    target = to_currency.strip().upper()
    for code in (source, target):
        if code not in SUPPORTED:
            raise ValueError(f"Unsupported currency '{code}'. Supported: {', '.join(SUPPORTED)}")

    if source == target:
        converted = amount
    elif source == "INR":
        converted = amount / rate
    else:
        converted = amount * rate
    return converted.quantize(CENTS, rounding=ROUND_HALF_UP)
