"""Tests for shared serialization utilities."""

import json
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal

from rental_workpaper.models.base import Address
from rental_workpaper.models.rental import (
    ExpenseCategory,
    ExpenseLine,
    Property,
    PropertyType,
    WorkpaperStatus,
)
from rental_workpaper.sinks.serialization import dumps, serialize_value, to_dict, to_records


@dataclass
class _SampleData:
    name: str
    amount: Decimal
    created_at: datetime


class TestToDict:
    """Tests for to_dict function."""

    def test_dataclass(self) -> None:
        obj = _SampleData(name="test", amount=Decimal("100.50"), created_at=datetime(2024, 1, 1))
        result = to_dict(obj)
        assert result["name"] == "test"
        assert result["amount"] == "100.50"
        assert result["created_at"] == "2024-01-01T00:00:00"

    def test_nested_property(self) -> None:
        prop = Property(
            property_id="p-1",
            display_name="Kauri St",
            address=Address(address_line1="12 Kauri Street", city="Auckland"),
            property_type=PropertyType.TOWNHOUSE,
            acquisition_date=date(2019, 4, 1),
        )

        result = to_dict(prop)

        assert result["address"]["city"] == "Auckland"
        assert result["property_type"] == "Townhouse"
        assert result["ownership_percentage"] == "1"
        assert result["acquisition_date"] == "2019-04-01"

    def test_dict(self) -> None:
        assert to_dict({"status": WorkpaperStatus.COMPLETE}) == {"status": "Complete"}

    def test_other_type(self) -> None:
        assert to_dict(42) == {"value": "42"}

    def test_class_is_not_a_record(self) -> None:
        assert to_dict(_SampleData) == {"value": str(_SampleData)}


class TestSerializeValue:
    """Tests for serialize_value function."""

    def test_decimal(self) -> None:
        assert serialize_value(Decimal("99.99")) == "99.99"

    def test_enum(self) -> None:
        assert serialize_value(ExpenseCategory.BODY_CORPORATE) == "BodyCorporate"

    def test_datetime(self) -> None:
        dt = datetime(2025, 6, 15, 10, 30, tzinfo=timezone.utc)
        assert serialize_value(dt) == "2025-06-15T10:30:00+00:00"

    def test_date(self) -> None:
        assert serialize_value(date(2025, 4, 1)) == "2025-04-01"

    def test_list_of_records(self) -> None:
        line = ExpenseLine(line_id="l-1", category=ExpenseCategory.RATES, amount=Decimal("2400"))

        result = serialize_value([line])

        assert result[0]["category"] == "Rates"
        assert result[0]["evidence_ids"] == []

    def test_tuple_and_set(self) -> None:
        assert serialize_value((Decimal("1"), "a")) == ["1", "a"]
        assert serialize_value({Decimal("2")}) == ["2"]

    def test_passthrough(self) -> None:
        assert serialize_value("text") == "text"
        assert serialize_value(7) == 7
        assert serialize_value(None) is None


class TestDumps:
    """Tests for dumps and to_records."""

    def test_record(self) -> None:
        obj = _SampleData(name="a", amount=Decimal("1.10"), created_at=datetime(2024, 1, 1))

        assert json.loads(dumps(obj))["amount"] == "1.10"

    def test_list(self) -> None:
        payload = json.loads(dumps([{"amount": Decimal("3")}, {"amount": Decimal("4")}]))

        assert payload == [{"amount": "3"}, {"amount": "4"}]

    def test_pretty(self) -> None:
        assert "\n" in dumps({"a": 1}, pretty=True)
        assert "\n" not in dumps({"a": 1})

    def test_to_records(self) -> None:
        assert to_records([{"status": WorkpaperStatus.LOCKED}]) == [{"status": "Locked"}]
