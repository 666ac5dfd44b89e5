"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

import pytest

from rental_workpaper.models.base import Actor
from rental_workpaper.models.rental import ExpenseCategory, ExpenseLine, Workpaper
from rental_workpaper.service import RentalWorkpaperService
from rental_workpaper.store import InMemoryBackend, RentalDataStore


class TickingClock:
    """Clock advancing one second per call, for ordered timestamps."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def actor() -> Actor:
    """Sample actor."""
    return Actor(user_id="user-test-001", display_name="Test Preparer")


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock(datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def store(backend: InMemoryBackend, clock: TickingClock) -> RentalDataStore:
    """Create a fresh store for each test."""
    return RentalDataStore(backend=backend, clock=clock)


@pytest.fixture
def service(store: RentalDataStore) -> RentalWorkpaperService:
    return RentalWorkpaperService(store)


@pytest.fixture
def property_data() -> dict[str, Any]:
    """Sample property input."""
    return {
        "display_name": "12 Kauri Street",
        "address_line1": "12 Kauri Street",
        "suburb": "Grey Lynn",
        "city": "Auckland",
        "postcode": "1021",
        "property_type": "House",
        "ownership_percentage": "1",
    }


@pytest.fixture
def workpaper() -> Workpaper:
    """Workpaper with income, days and one interest line."""
    return Workpaper(
        workpaper_id="wp-test-001",
        property_id="prop-test-001",
        tax_year="2025/2026",
        gross_rental_income=Decimal("20000"),
        days_rented=365,
        expense_lines=[
            ExpenseLine(
                line_id="line-001",
                category=ExpenseCategory.INTEREST,
                amount=Decimal("10000"),
            )
        ],
    )
