"""
Money Utilities - Safe Decimal operations for monetary values.

Prices arrive as JSON numbers (ints for SEK in the catalog, occasionally
floats); every calculation goes through Decimal.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal, None]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

CURRENCY_SYMBOLS = {
    "sek": "kr",
    "eur": "€",
    "usd": "$",
}


def to_decimal(value: Number) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            # Go through str to avoid binary float artifacts
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def to_minor_units(value: Number) -> int:
    """
    Convert decimal amount to minor units (öre/cents).

    Used for payment APIs that expect integer minor units.

    Args:
        value: Amount in major units (e.g., 199.50 SEK)

    Returns:
        Amount in minor units (e.g., 19950 öre)
    """
    decimal_value = to_decimal(value)
    return int((decimal_value * 100).to_integral_value(rounding=ROUND_HALF_UP))


def round_money(value: Number) -> Decimal:
    """Round monetary value to two decimal places."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def line_total(price: Number, quantity: int) -> Decimal:
    """Total for one cart line: unit price times quantity."""
    return multiply(price, quantity)


def format_money(value: Number, currency: str = "sek") -> str:
    """
    Format monetary value with currency symbol.

    SEK puts the symbol after the amount ("1250.00 kr"); other currencies
    prefix it ("$12.50").
    """
    code = currency.lower()
    symbol = CURRENCY_SYMBOLS.get(code, code.upper())
    formatted = f"{round_money(value):.2f}"
    if code == "sek":
        return f"{formatted} {symbol}"
    return f"{symbol}{formatted}"


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON responses.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


Price = Union[int, float]


def to_price(value: Number) -> Price:
    """
    Normalize a stored unit price to a JSON number.

    Ints stay ints (catalog prices are whole SEK); anything else becomes a
    float. Raises TypeError/ValueError for booleans and non-numeric input.
    """
    if isinstance(value, bool):
        raise TypeError("price must be a number")
    if isinstance(value, (int, float)):
        return value
    return float(value)
