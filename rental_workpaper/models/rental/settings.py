"""Tax settings applied to every calculation."""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any

from rental_workpaper.models.coercion import to_decimal


@dataclass(frozen=True)
class TaxSettings:
    """Active tax year and interest deductibility rate."""

    tax_year: str = "2025/2026"
    interest_deductibility_rate: Decimal = Decimal("0.80")

    def merged(self, overrides: dict[str, Any] | None) -> "TaxSettings":
        """Return a copy with stored values applied over these values.

        Unknown keys are ignored; an unparsable rate, or one outside 0-1,
        keeps the current rate.
        """
        if not overrides:
            return self
        changes: dict[str, Any] = {}
        tax_year = overrides.get("tax_year")
        if tax_year:
            changes["tax_year"] = str(tax_year)
        if overrides.get("interest_deductibility_rate") is not None:
            rate = to_decimal(
                overrides["interest_deductibility_rate"],
                default=self.interest_deductibility_rate,
            )
            if Decimal("0") <= rate <= Decimal("1"):
                changes["interest_deductibility_rate"] = rate
        return replace(self, **changes)


DEFAULT_TAX_SETTINGS = TaxSettings()
