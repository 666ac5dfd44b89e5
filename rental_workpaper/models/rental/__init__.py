"""Rental domain models."""

from rental_workpaper.models.rental.activity import Activity
from rental_workpaper.models.rental.enums import (
    STATUS_ORDER,
    ActivityType,
    ExpenseCategory,
    PropertyType,
    Severity,
    WorkpaperStatus,
)
from rental_workpaper.models.rental.evidence import Evidence
from rental_workpaper.models.rental.property import Property
from rental_workpaper.models.rental.settings import DEFAULT_TAX_SETTINGS, TaxSettings
from rental_workpaper.models.rental.workpaper import (
    ExpenseLine,
    Workpaper,
    WorkpaperCalculation,
)

__all__ = [
    "Activity",
    "ActivityType",
    "DEFAULT_TAX_SETTINGS",
    "Evidence",
    "ExpenseCategory",
    "ExpenseLine",
    "Property",
    "PropertyType",
    "STATUS_ORDER",
    "Severity",
    "TaxSettings",
    "Workpaper",
    "WorkpaperCalculation",
    "WorkpaperStatus",
]
