"""Tests for sample data generators."""

from decimal import Decimal

import pytest

from rental_workpaper.generators import (
    AddressFactory,
    EvidenceGenerator,
    ExpenseLineGenerator,
    PropertyGenerator,
    WorkpaperInputGenerator,
)
from rental_workpaper.generators.address import CITY_WEIGHTS
from rental_workpaper.models.base import Address
from rental_workpaper.models.rental import ExpenseCategory, PropertyType


class TestAddressFactory:
    """Tests for AddressFactory."""

    def test_generate(self, seed: int) -> None:
        address = AddressFactory(seed=seed).generate()

        assert isinstance(address, Address)
        assert address.city in CITY_WEIGHTS
        assert address.country == "NZ"
        assert len(address.postcode) == 4
        assert address.address_line1

    def test_specific_city(self, seed: int) -> None:
        assert AddressFactory(seed=seed).generate(city="Nelson").city == "Nelson"

    def test_faker_cities(self, seed: int) -> None:
        address = AddressFactory(seed=seed, use_faker_cities=True).generate()

        assert address.city


class TestPropertyGenerator:
    """Tests for PropertyGenerator."""

    def test_generate(self, seed: int) -> None:
        data = PropertyGenerator(seed=seed).generate()

        assert isinstance(data["address"], Address)
        assert data["display_name"].endswith(data["address"].city)
        assert data["property_type"] in PropertyGenerator.PROPERTY_TYPES
        assert data["ownership_percentage"] in PropertyGenerator.OWNERSHIP_SHARES
        assert isinstance(data["is_new_build"], bool)

    def test_new_build_requires_recent_acquisition(self, seed: int) -> None:
        for data in PropertyGenerator(seed=seed).generate_batch(50):
            if data["is_new_build"]:
                assert data["acquisition_date"] >= PropertyGenerator.NEW_BUILD_FROM

    def test_generate_batch(self, seed: int) -> None:
        batch = list(PropertyGenerator(seed=seed).generate_batch(5))

        assert len(batch) == 5

    def test_reproducible(self) -> None:
        first = PropertyGenerator(seed=7).generate()
        second = PropertyGenerator(seed=7).generate()

        assert first == second

    def test_no_commercial(self, seed: int) -> None:
        types = {d["property_type"] for d in PropertyGenerator(seed=seed).generate_batch(30)}

        assert PropertyType.COMMERCIAL not in types


class TestWorkpaperInputGenerator:
    """Tests for WorkpaperInputGenerator."""

    def test_long_term_rental(self, seed: int) -> None:
        data = WorkpaperInputGenerator(seed=seed).generate()

        assert data["mixed_use"] is False
        assert data["days_private"] == 0
        assert 280 <= data["days_rented"] <= 365
        assert data["days_rented"] <= data["days_available"] <= 365
        assert data["gross_rental_income"] > 0

    def test_mixed_use(self, seed: int) -> None:
        gen = WorkpaperInputGenerator(seed=seed)

        for _ in range(20):
            data = gen.generate(mixed_use=True)
            assert data["mixed_use"] is True
            assert data["days_private"] >= 14
            assert data["days_rented"] + data["days_private"] <= 365
            assert data["days_available"] + data["days_private"] <= 365


class TestExpenseLineGenerator:
    """Tests for ExpenseLineGenerator."""

    def test_every_category_has_ranges_and_descriptions(self) -> None:
        for category in ExpenseCategory:
            assert category in ExpenseLineGenerator.AMOUNT_RANGES
            assert ExpenseLineGenerator.DESCRIPTIONS[category]

    @pytest.mark.parametrize("category", list(ExpenseCategory))
    def test_amount_in_range(self, seed: int, category: ExpenseCategory) -> None:
        data = ExpenseLineGenerator(seed=seed).generate(category)
        low, high = ExpenseLineGenerator.AMOUNT_RANGES[category]

        assert data["category"] == category
        assert Decimal(low) <= data["amount"] <= Decimal(high)
        assert data["amount"] == data["amount"].quantize(Decimal("0.01"))
        assert data["is_capital"] is False

    def test_capital_line(self, seed: int) -> None:
        data = ExpenseLineGenerator(seed=seed).generate(is_capital=True)

        assert data["is_capital"] is True
        assert data["description"] in ExpenseLineGenerator.CAPITAL_WORKS

    def test_generate_for_year(self, seed: int) -> None:
        lines = ExpenseLineGenerator(seed=seed).generate_for_year(extra_lines=(3, 3))

        assert [line["category"] for line in lines[:3]] == ExpenseLineGenerator.CORE_CATEGORIES
        assert len(lines) == 6
        assert len({line["category"] for line in lines}) == 6

    def test_generate_for_year_always_capital(self, seed: int) -> None:
        lines = ExpenseLineGenerator(seed=seed).generate_for_year(capital_rate=1.0)

        assert lines[-1]["is_capital"] is True

    def test_generate_for_year_never_capital(self, seed: int) -> None:
        lines = ExpenseLineGenerator(seed=seed).generate_for_year(capital_rate=0.0)

        assert not any(line["is_capital"] for line in lines)


class TestEvidenceGenerator:
    """Tests for EvidenceGenerator."""

    def test_generate(self, seed: int) -> None:
        data = EvidenceGenerator(seed=seed).generate(ExpenseCategory.RATES)

        assert data["file_name"].startswith("rates-")
        assert data["content_type"] in EvidenceGenerator.CONTENT_TYPES
        assert data["file_name"].endswith(EvidenceGenerator.CONTENT_TYPES[data["content_type"]])
        assert data["size_bytes"] > 0

    def test_without_category(self, seed: int) -> None:
        assert EvidenceGenerator(seed=seed).generate()["file_name"].startswith("receipt-")
