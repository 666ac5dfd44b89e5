"""Workpaper models: one tax year's rental calculation for one property."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from rental_workpaper.models.rental.enums import ExpenseCategory, WorkpaperStatus

_ZERO = Decimal("0")


@dataclass
class ExpenseLine:
    """Cost entry attached to a workpaper."""

    line_id: str
    category: ExpenseCategory
    amount: Decimal
    description: str = ""
    is_capital: bool = False  # Capital lines are excluded from deductions
    is_apportionable: bool = True
    evidence_ids: list[str] = field(default_factory=list)
    notes: str = ""


@dataclass(frozen=True)
class WorkpaperCalculation:
    """Derived amounts produced by the calculation engine."""

    total_expenses: Decimal = _ZERO
    capital_excluded_total: Decimal = _ZERO
    deductible_expense_base: Decimal = _ZERO
    owned_expenses: Decimal = _ZERO
    apportioned_expenses: Decimal = _ZERO
    interest_total: Decimal = _ZERO
    deductible_interest: Decimal = _ZERO
    adjusted_deductible_expenses: Decimal = _ZERO
    adjusted_income: Decimal = _ZERO
    net_rental_income: Decimal = _ZERO
    loss_carry_forward: Decimal = _ZERO


@dataclass
class Workpaper:
    """Single-tax-year rental calculation record for one property."""

    workpaper_id: str
    property_id: str
    tax_year: str  # e.g. "2025/2026"
    status: WorkpaperStatus = WorkpaperStatus.NOT_STARTED
    gross_rental_income: Decimal = _ZERO
    days_rented: int = 0
    days_available: int = 0
    days_private: int = 0
    mixed_use: bool = False
    expense_lines: list[ExpenseLine] = field(default_factory=list)
    calculation: WorkpaperCalculation = field(default_factory=WorkpaperCalculation)
    created_by: str = ""
    last_modified_by: str = ""
    current_owner_user_id: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def find_line(self, line_id: str) -> ExpenseLine | None:
        """Return the expense line with the given id, if present."""
        for line in self.expense_lines:
            if line.line_id == line_id:
                return line
        return None
