"""Conversions between display strings and integer minor currency units.

Amounts are kept as integers (cents) everywhere in the core. Only the CLI
and the CSV backup convert to and from display strings.
"""

import re

_NON_DIGITS = re.compile(r"[^0-9]")


def parse_minor_units(value) -> int:
    """Parse an amount into minor units.

    Integers pass through unchanged. Strings keep only their digits, so
    "R$ 1.234,56", "1,234.56" and "123456" all become 123456.

    Args:
        value: int, str or None.

    Returns:
        Amount in minor units; 0 when nothing numeric can be read.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value

    digits = _NON_DIGITS.sub("", str(value))
    return int(digits) if digits else 0


def parse_count(value, default: int) -> int:
    """Parse an installment count or interval, returning ``default`` on failure."""
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def format_minor_units(
    amount: int,
    symbol: str = "$",
    decimal_separator: str = ".",
    thousands_separator: str = ",",
) -> str:
    """Format minor units for display, e.g. 123456 -> "$1,234.56".

    Args:
        amount: Amount in minor units (may be negative).
        symbol: Currency symbol placed before the number.
        decimal_separator: Separator between units and cents.
        thousands_separator: Separator between groups of three digits.

    Returns:
        Display string.
    """
    sign = "-" if amount < 0 else ""
    units, cents = divmod(abs(amount), 100)
    grouped = f"{units:,}".replace(",", thousands_separator)
    return f"{sign}{symbol}{grouped}{decimal_separator}{cents:02d}"


def parse_display_amount(value) -> int:
    """Parse an amount typed in currency units into minor units.

    The last "." or "," followed by one or two digits is the decimal
    separator; any other separators group thousands. So "1500", "1500.00",
    "1,500.5" and "R$ 1.500,00" all parse, the first two as 150000.

    Args:
        value: Display string or None.

    Returns:
        Amount in minor units; 0 when nothing numeric can be read.
    """
    text = re.sub(r"[^0-9.,]", "", str(value or ""))
    separators = [i for i, char in enumerate(text) if char in ".,"]

    if separators and len(text) - separators[-1] - 1 in (1, 2):
        last = separators[-1]
        units = _NON_DIGITS.sub("", text[:last]) or "0"
        cents = text[last + 1:].ljust(2, "0")
        return int(units) * 100 + int(cents)

    return parse_minor_units(text) * 100
