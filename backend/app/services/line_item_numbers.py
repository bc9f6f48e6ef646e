"""Numeric text helpers for line item fields.

Quantity and amount are edited as free text. Nothing here rejects or reformats
what the operator typed; these helpers only convert at the edges (template
defaults into row text, row text into template payloads, display strings).
"""

import math
from decimal import Decimal
from typing import Optional


def parse_number(text: str | None) -> Optional[float]:
    """Return the numeric value of ``text``, or None when blank or unparseable."""
    if text is None:
        return None
    text = str(text).strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def number_text(value: float | int | Decimal | None) -> str:
    """Render a numeric default as field text; whole numbers drop the fraction."""
    if value is None:
        return ""
    if isinstance(value, Decimal):
        value = float(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_money(value: float | int | Decimal | str | None) -> str:
    """Format a dollar amount with thousands separators, e.g. ``$1,234.50``."""
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        number = parse_number(value)
        if number is None:
            return ""
    else:
        number = float(value)
        if not math.isfinite(number):
            return ""
    return f"${number:,.2f}"
