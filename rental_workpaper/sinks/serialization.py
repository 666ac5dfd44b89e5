"""Conversion of rental records into JSON-ready structures.

Used by the storage backends and by every sink, so that stored payloads and
exported files share one shape:

- ``Decimal`` amounts become strings, keeping cents exact
- enums become their values (``"ReadyToReview"``, ``"Interest"``)
- dates and datetimes become ISO 8601 strings
- nested records (addresses, expense lines, calculations) become dicts
"""

import json
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable


def to_dict(obj: Any) -> dict[str, Any]:
    """Convert a record or mapping into a JSON-ready dict."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}
    elif isinstance(obj, dict):
        return {key: serialize_value(value) for key, value in obj.items()}
    else:
        return {"value": str(obj)}


def to_records(items: Iterable[Any]) -> list[dict[str, Any]]:
    """Convert a collection of records for a batch export."""
    return [to_dict(item) for item in items]


def serialize_value(value: Any) -> Any:
    """Serialize a single value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return to_dict(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple, set, frozenset)):
        return [serialize_value(v) for v in value]
    return value


def dumps(obj: Any, pretty: bool = False) -> str:
    """Serialize a record, mapping or list of records to a JSON string."""
    if isinstance(obj, (list, tuple)):
        payload: Any = [serialize_value(item) for item in obj]
    else:
        payload = to_dict(obj)
    return json.dumps(payload, indent=2 if pretty else None, ensure_ascii=False, default=str)
