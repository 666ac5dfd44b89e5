"""Display helpers for amounts and categories."""

import re
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any

from rental_workpaper.models.coercion import to_decimal

_CENTS = Decimal("0.01")


def format_currency(value: Any) -> str:
    """Format an amount as NZ dollars, e.g. ``-$1,234.50``.

    ``None`` and unparsable values format as ``$0.00``.
    """
    amount = to_decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)
    formatted = f"${abs(amount):,.2f}"
    return f"-{formatted}" if amount < 0 else formatted


def format_category(category: Any) -> str:
    """Split a CamelCase category into words: ``"LegalFees"`` -> ``"Legal Fees"``."""
    if not category:
        return ""
    if isinstance(category, Enum):
        category = category.value
    return re.sub(r"(?<!^)([A-Z])", r" \1", str(category)).strip()
