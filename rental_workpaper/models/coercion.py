"""Lenient conversion of user-entered values.

Inputs arrive as whatever the caller typed: strings, floats, ``None``.
Malformed values become zero rather than raising, so bad data surfaces
through diagnostics instead of exceptions.
"""

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, TypeVar

ZERO = Decimal("0")
ONE = Decimal("1")

E = TypeVar("E", bound=Enum)


def to_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """Convert a value to a finite Decimal, falling back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    if isinstance(value, str):
        value = value.replace("$", "").replace(",", "").strip()
        if not value:
            return default
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default
    return result if result.is_finite() else default


def to_amount(value: Any) -> Decimal:
    """Convert a currency amount; negatives clamp to zero."""
    return max(ZERO, to_decimal(value))


def to_int(value: Any) -> int:
    """Convert a count to an int, truncating fractions."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    return int(to_decimal(value))


to_days = to_int


def to_ownership(value: Any) -> Decimal:
    """Convert an ownership share to the range 0-1; missing or invalid means full ownership."""
    share = to_decimal(value, default=ONE)
    return max(ZERO, min(share, ONE))


def to_flag(value: Any) -> bool:
    """Convert a checkbox-style value to bool."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def to_enum(enum_cls: type[E], value: Any, default: E) -> E:
    """Convert a value to a member of ``enum_cls`` by value or name."""
    if isinstance(value, enum_cls):
        return value
    if value is None or value == "":
        return default
    try:
        return enum_cls(value)
    except ValueError:
        pass
    member = enum_cls.__members__.get(str(value).upper())
    return member if member is not None else default
