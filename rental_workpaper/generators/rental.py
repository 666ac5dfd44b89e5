"""Generators for rental properties, workpaper inputs, expenses and evidence.

Each generator returns the plain input dict accepted by the matching
``RentalDataStore`` operation, so generated data goes through the same
coercion and activity logging as user input.
"""

from __future__ import annotations

import random
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Iterator

from rental_workpaper.generators.address import AddressFactory
from rental_workpaper.generators.base import BaseGenerator
from rental_workpaper.models.rental.enums import ExpenseCategory, PropertyType

DAYS_IN_YEAR = 365


def _money(low: int, high: int) -> Decimal:
    """Random whole-cents amount in [low, high] dollars."""
    return Decimal(random.randint(low * 100, high * 100)) / 100


class PropertyGenerator(BaseGenerator):
    """Generate rental property input."""

    PROPERTY_TYPES = [
        PropertyType.HOUSE,
        PropertyType.APARTMENT,
        PropertyType.TOWNHOUSE,
        PropertyType.UNIT,
        PropertyType.LIFESTYLE,
    ]
    PROPERTY_TYPE_WEIGHTS = [0.45, 0.20, 0.18, 0.12, 0.05]

    # Most rentals are held outright; the rest in partnerships or trusts
    OWNERSHIP_SHARES = [Decimal("1"), Decimal("0.5"), Decimal("0.25")]
    OWNERSHIP_WEIGHTS = [0.75, 0.20, 0.05]

    # Builds with code compliance from this date qualify as new builds
    NEW_BUILD_FROM = date(2020, 3, 27)

    def __init__(self, seed: int | None = None) -> None:
        super().__init__(seed)
        self._address_factory = AddressFactory(seed=seed)

    def generate(self) -> dict[str, Any]:
        """Generate input for ``RentalDataStore.create_property``.

        Returns
        -------
        dict[str, Any]
            Property fields including a nested ``address``.
        """
        address = self._address_factory.generate()
        property_type = random.choices(
            self.PROPERTY_TYPES, weights=self.PROPERTY_TYPE_WEIGHTS, k=1
        )[0]
        acquisition_date = self.fake.date_between(start_date="-20y", end_date="-1y")

        return {
            "display_name": f"{address.address_line1}, {address.city}",
            "address": address,
            "property_type": property_type,
            "ownership_percentage": random.choices(
                self.OWNERSHIP_SHARES, weights=self.OWNERSHIP_WEIGHTS, k=1
            )[0],
            "acquisition_date": acquisition_date,
            "is_new_build": acquisition_date >= self.NEW_BUILD_FROM and random.random() < 0.5,
        }

    def generate_batch(self, count: int) -> Iterator[dict[str, Any]]:
        """Generate multiple properties.

        Parameters
        ----------
        count : int
            Number of properties to generate.

        Yields
        ------
        dict[str, Any]
            Property input.
        """
        for _ in range(count):
            yield self.generate()


class WorkpaperInputGenerator(BaseGenerator):
    """Generate yearly income and day counts for a workpaper."""

    WEEKLY_RENT_RANGE = (420, 950)

    def generate(self, mixed_use: bool = False) -> dict[str, Any]:
        """Generate input for ``RentalDataStore.update_workpaper``.

        Parameters
        ----------
        mixed_use : bool
            Produce a holiday home with private days.

        Returns
        -------
        dict[str, Any]
            Income, day counts and the mixed-use flag.
        """
        if mixed_use:
            days_private = random.randint(14, 120)
            days_rented = random.randint(30, DAYS_IN_YEAR - days_private - 30)
            # Holiday lets charge a nightly rate
            income = Decimal(days_rented * random.randint(120, 320))
        else:
            days_private = 0
            days_rented = random.randint(280, DAYS_IN_YEAR)
            weekly_rent = random.randint(*self.WEEKLY_RENT_RANGE)
            income = (Decimal(weekly_rent) * days_rented / 7).quantize(Decimal("0.01"))

        vacancy = random.randint(0, DAYS_IN_YEAR - days_rented - days_private)
        return {
            "gross_rental_income": income,
            "days_rented": days_rented,
            "days_available": days_rented + vacancy,
            "days_private": days_private,
            "mixed_use": mixed_use,
        }


class ExpenseLineGenerator(BaseGenerator):
    """Generate expense line input."""

    # Typical annual amounts in NZD
    AMOUNT_RANGES = {
        ExpenseCategory.INTEREST: (6000, 38000),
        ExpenseCategory.RATES: (1800, 4800),
        ExpenseCategory.INSURANCE: (1200, 3600),
        ExpenseCategory.PROPERTY_MANAGEMENT: (1500, 4200),
        ExpenseCategory.BODY_CORPORATE: (1500, 7000),
        ExpenseCategory.REPAIRS_MAINTENANCE: (150, 5000),
        ExpenseCategory.CLEANING: (100, 1200),
        ExpenseCategory.ADVERTISING: (50, 400),
        ExpenseCategory.LEGAL_FEES: (300, 2500),
        ExpenseCategory.ACCOUNTING_FEES: (300, 1200),
        ExpenseCategory.UTILITIES: (300, 2200),
        ExpenseCategory.TRAVEL: (80, 800),
        ExpenseCategory.OTHER: (50, 900),
    }

    DESCRIPTIONS = {
        ExpenseCategory.INTEREST: ["Mortgage interest", "Top-up loan interest"],
        ExpenseCategory.RATES: ["Council rates", "Regional council rates"],
        ExpenseCategory.INSURANCE: ["Landlord insurance", "House insurance"],
        ExpenseCategory.PROPERTY_MANAGEMENT: ["Management fees", "Letting fee"],
        ExpenseCategory.BODY_CORPORATE: ["Body corporate levy"],
        ExpenseCategory.REPAIRS_MAINTENANCE: ["Plumbing repair", "Gutter clean", "Hot water cylinder"],
        ExpenseCategory.CLEANING: ["End of tenancy clean", "Carpet clean"],
        ExpenseCategory.ADVERTISING: ["Listing fee"],
        ExpenseCategory.LEGAL_FEES: ["Tenancy tribunal filing", "Lease review"],
        ExpenseCategory.ACCOUNTING_FEES: ["Tax return preparation"],
        ExpenseCategory.UTILITIES: ["Water charges", "Power (common areas)"],
        ExpenseCategory.TRAVEL: ["Inspection travel"],
        ExpenseCategory.OTHER: ["Bank fees", "Smoke alarm service"],
    }

    CAPITAL_WORKS = ["New deck", "Kitchen renovation", "Heat pump install", "Re-roofing"]

    # Every rental carries these
    CORE_CATEGORIES = [
        ExpenseCategory.INTEREST,
        ExpenseCategory.RATES,
        ExpenseCategory.INSURANCE,
    ]

    def generate(
        self,
        category: ExpenseCategory | None = None,
        is_capital: bool = False,
    ) -> dict[str, Any]:
        """Generate input for ``RentalDataStore.add_expense_line``.

        Parameters
        ----------
        category : ExpenseCategory | None
            Category; random when omitted.
        is_capital : bool
            Produce a capital works line (excluded from deductions).

        Returns
        -------
        dict[str, Any]
            Expense line fields.
        """
        if is_capital:
            return {
                "category": ExpenseCategory.REPAIRS_MAINTENANCE,
                "description": random.choice(self.CAPITAL_WORKS),
                "amount": _money(4000, 25000),
                "is_capital": True,
            }

        if category is None:
            category = random.choice(list(self.AMOUNT_RANGES))
        low, high = self.AMOUNT_RANGES[category]
        return {
            "category": category,
            "description": random.choice(self.DESCRIPTIONS[category]),
            "amount": _money(low, high),
            "is_capital": False,
        }

    def generate_for_year(
        self,
        capital_rate: float = 0.0,
        extra_lines: tuple[int, int] = (2, 5),
    ) -> list[dict[str, Any]]:
        """Generate one property's expense lines for a year.

        Parameters
        ----------
        capital_rate : float
            Probability of adding one capital works line.
        extra_lines : tuple[int, int]
            Range of additional non-core lines.

        Returns
        -------
        list[dict[str, Any]]
            Core lines first, then extras, then any capital line.
        """
        lines = [self.generate(category) for category in self.CORE_CATEGORIES]

        others = [c for c in self.AMOUNT_RANGES if c not in self.CORE_CATEGORIES]
        count = random.randint(*extra_lines)
        for category in random.sample(others, k=min(count, len(others))):
            lines.append(self.generate(category))

        if random.random() < capital_rate:
            lines.append(self.generate(is_capital=True))
        return lines


class EvidenceGenerator(BaseGenerator):
    """Generate supporting document metadata."""

    CONTENT_TYPES = {
        "application/pdf": "pdf",
        "image/jpeg": "jpg",
        "image/png": "png",
    }
    CONTENT_TYPE_WEIGHTS = [0.70, 0.20, 0.10]

    def generate(self, category: ExpenseCategory | str | None = None) -> dict[str, Any]:
        """Generate input for ``RentalDataStore.add_evidence``.

        Parameters
        ----------
        category : ExpenseCategory | str | None
            Category the document supports; used in the file name.

        Returns
        -------
        dict[str, Any]
            File name, content type and size.
        """
        content_type = random.choices(
            list(self.CONTENT_TYPES), weights=self.CONTENT_TYPE_WEIGHTS, k=1
        )[0]
        label = category.value if isinstance(category, ExpenseCategory) else category
        issued = date.today() - timedelta(days=random.randint(0, DAYS_IN_YEAR))
        stem = (label or "receipt").lower()

        return {
            "file_name": f"{stem}-{issued.isoformat()}.{self.CONTENT_TYPES[content_type]}",
            "content_type": content_type,
            "size_bytes": random.randint(20_000, 4_000_000),
        }
