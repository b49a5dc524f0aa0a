"""Amount parsing and formatting utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENT = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "50", "50.00", "50,00"
    - "R$ 1.234,56" (Brazilian grouping)
    - "1,234.56"

    When both separators appear, the last one is the decimal mark. A lone
    comma is always a decimal mark.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount rounded to cents

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = re.sub(r"R\$|\s", "", amount_str.strip())

    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif "," in text:
        text = text.replace(",", ".")
    elif text.count(".") > 1:
        text = text.replace(".", "")

    try:
        return to_money(Decimal(text))
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")


def to_money(value) -> Decimal:
    """Quantize a number to two decimal places."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    if not value.is_finite():
        raise ValueError(f"Amount must be a finite number, got {value}")
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_decimal_comma(amount: Decimal) -> str:
    """Format as "1234,56", the layout used by report exports."""
    return f"{to_money(amount):.2f}".replace(".", ",")


def format_brl(amount: Decimal) -> str:
    """Format as Brazilian currency, e.g. "R$ 1.234,56"."""
    grouped = f"{to_money(amount):,.2f}"
    return "R$ " + grouped.replace(",", "_").replace(".", ",").replace("_", ".")
