"""Rental property model."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from rental_workpaper.models.base import Address
from rental_workpaper.models.rental.enums import PropertyType


@dataclass
class Property:
    """Rental asset held wholly or partly by the filer."""

    property_id: str
    display_name: str
    address: Address
    property_type: PropertyType = PropertyType.HOUSE
    ownership_percentage: Decimal = Decimal("1")  # Fraction 0-1 held by the filer
    acquisition_date: date | None = None
    disposal_date: date | None = None
    is_main_home: bool = False
    is_new_build: bool = False
    is_active: bool = True
    created_at: datetime | None = None
