"""Decode stored payloads back into typed records."""

import logging
from datetime import date, datetime
from typing import Any

from rental_workpaper.models.base import Address
from rental_workpaper.models.coercion import (
    to_amount,
    to_days,
    to_decimal,
    to_enum,
    to_flag,
    to_int,
    to_ownership,
)
from rental_workpaper.models.rental import (
    Activity,
    ActivityType,
    Evidence,
    ExpenseCategory,
    ExpenseLine,
    Property,
    PropertyType,
    Workpaper,
    WorkpaperCalculation,
    WorkpaperStatus,
)

logger = logging.getLogger(__name__)


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring unparsable date %r", value)
        return None


def address_from_dict(data: dict[str, Any]) -> Address:
    return Address(
        address_line1=data.get("address_line1", ""),
        city=data.get("city", ""),
        address_line2=data.get("address_line2", ""),
        suburb=data.get("suburb", ""),
        postcode=data.get("postcode", ""),
        country=data.get("country", "NZ"),
    )


def property_from_dict(data: dict[str, Any]) -> Property:
    return Property(
        property_id=data["property_id"],
        display_name=data.get("display_name", ""),
        address=address_from_dict(data.get("address") or {}),
        property_type=to_enum(PropertyType, data.get("property_type"), PropertyType.HOUSE),
        ownership_percentage=to_ownership(data.get("ownership_percentage")),
        acquisition_date=_parse_date(data.get("acquisition_date")),
        disposal_date=_parse_date(data.get("disposal_date")),
        is_main_home=to_flag(data.get("is_main_home", False)),
        is_new_build=to_flag(data.get("is_new_build", False)),
        is_active=to_flag(data.get("is_active", True)),
        created_at=_parse_datetime(data.get("created_at")),
    )


def expense_line_from_dict(data: dict[str, Any]) -> ExpenseLine:
    return ExpenseLine(
        line_id=data["line_id"],
        category=to_enum(ExpenseCategory, data.get("category"), ExpenseCategory.OTHER),
        amount=to_amount(data.get("amount")),
        description=data.get("description", ""),
        is_capital=to_flag(data.get("is_capital", False)),
        is_apportionable=to_flag(data.get("is_apportionable", True)),
        evidence_ids=list(data.get("evidence_ids") or []),
        notes=data.get("notes", ""),
    )


def calculation_from_dict(data: dict[str, Any] | None) -> WorkpaperCalculation:
    if not data:
        return WorkpaperCalculation()
    return WorkpaperCalculation(
        **{name: to_decimal(data.get(name)) for name in WorkpaperCalculation.__dataclass_fields__}
    )


def workpaper_from_dict(data: dict[str, Any]) -> Workpaper:
    return Workpaper(
        workpaper_id=data["workpaper_id"],
        property_id=data["property_id"],
        tax_year=data["tax_year"],
        status=WorkpaperStatus(data.get("status", WorkpaperStatus.NOT_STARTED.value)),
        gross_rental_income=to_decimal(data.get("gross_rental_income")),
        days_rented=to_days(data.get("days_rented")),
        days_available=to_days(data.get("days_available")),
        days_private=to_days(data.get("days_private")),
        mixed_use=to_flag(data.get("mixed_use", False)),
        expense_lines=[expense_line_from_dict(line) for line in data.get("expense_lines") or []],
        calculation=calculation_from_dict(data.get("calculation")),
        created_by=data.get("created_by", ""),
        last_modified_by=data.get("last_modified_by", ""),
        current_owner_user_id=data.get("current_owner_user_id", ""),
        created_at=_parse_datetime(data.get("created_at")),
        updated_at=_parse_datetime(data.get("updated_at")),
    )


def evidence_from_dict(data: dict[str, Any]) -> Evidence:
    return Evidence(
        evidence_id=data["evidence_id"],
        workpaper_id=data["workpaper_id"],
        file_name=data.get("file_name", "untitled"),
        content_type=data.get("content_type", "application/octet-stream"),
        size_bytes=to_int(data.get("size_bytes")),
        uploaded_at=_parse_datetime(data["uploaded_at"]),
        uploaded_by=data.get("uploaded_by", ""),
    )


def activity_from_dict(data: dict[str, Any]) -> Activity:
    return Activity(
        activity_id=data["activity_id"],
        workpaper_id=data["workpaper_id"],
        user_id=data.get("user_id", ""),
        action_type=ActivityType(data["action_type"]),
        timestamp=_parse_datetime(data["timestamp"]),
        field_name=data.get("field_name"),
        old_value=data.get("old_value"),
        new_value=data.get("new_value"),
    )
