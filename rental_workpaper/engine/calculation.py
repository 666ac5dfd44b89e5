"""Workpaper calculation engine.

The pipeline is a pure function of the workpaper inputs, the owner's share
and the tax settings. It is rerun in full on every call; nothing is cached.

Order of operations::

    total expenses
      - capital lines                = deductible base
      x ownership share              = owned expenses
      x rented / (rented + private)  = apportioned expenses   (mixed use only)
      - interest + limited interest  = adjusted deductible expenses

Interest is carried through apportionment inside the apportioned figure, then
the full non-capital interest total is backed out and replaced by its
deductibility-limited amount.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from rental_workpaper.models.coercion import ZERO, to_amount, to_days, to_decimal, to_ownership
from rental_workpaper.models.rental import (
    ExpenseCategory,
    TaxSettings,
    Workpaper,
    WorkpaperCalculation,
)

logger = logging.getLogger(__name__)


def apportionment_ratio(mixed_use: bool, days_rented: Any, days_private: Any) -> Decimal | None:
    """Return the rented share of the year, or ``None`` when apportionment is skipped."""
    if not mixed_use:
        return None
    rented = to_days(days_rented)
    total_days = rented + to_days(days_private)
    if total_days <= 0:
        return None
    return Decimal(rented) / Decimal(total_days)


def calculate(
    workpaper: Workpaper,
    ownership_percentage: Any,
    settings: TaxSettings,
) -> WorkpaperCalculation:
    """Derive every calculated amount for a workpaper.

    Parameters
    ----------
    workpaper : Workpaper
        Raw inputs: income, day counts, mixed-use flag and expense lines.
    ownership_percentage : Any
        Filer's share of the property (0-1). Missing or invalid means 1.
    settings : TaxSettings
        Supplies the interest deductibility rate.

    Returns
    -------
    WorkpaperCalculation
        The eleven derived amounts. Never raises for bad inputs.
    """
    ownership = to_ownership(ownership_percentage)
    lines = workpaper.expense_lines or []

    total_expenses = sum((to_amount(line.amount) for line in lines), ZERO)
    capital_excluded_total = sum(
        (to_amount(line.amount) for line in lines if line.is_capital), ZERO
    )
    deductible_expense_base = total_expenses - capital_excluded_total
    owned_expenses = deductible_expense_base * ownership

    ratio = apportionment_ratio(
        workpaper.mixed_use, workpaper.days_rented, workpaper.days_private
    )
    apportioned_expenses = owned_expenses if ratio is None else owned_expenses * ratio

    interest_total = sum(
        (
            to_amount(line.amount)
            for line in lines
            if line.category == ExpenseCategory.INTEREST and not line.is_capital
        ),
        ZERO,
    )
    deductible_interest = interest_total * to_decimal(settings.interest_deductibility_rate)
    adjusted_deductible_expenses = (apportioned_expenses - interest_total) + deductible_interest

    adjusted_income = to_decimal(workpaper.gross_rental_income) * ownership
    net_rental_income = adjusted_income - adjusted_deductible_expenses
    loss_carry_forward = max(ZERO, -net_rental_income)

    logger.debug(
        "Calculated workpaper %s: income=%s expenses=%s net=%s",
        workpaper.workpaper_id,
        adjusted_income,
        adjusted_deductible_expenses,
        net_rental_income,
    )

    return WorkpaperCalculation(
        total_expenses=total_expenses,
        capital_excluded_total=capital_excluded_total,
        deductible_expense_base=deductible_expense_base,
        owned_expenses=owned_expenses,
        apportioned_expenses=apportioned_expenses,
        interest_total=interest_total,
        deductible_interest=deductible_interest,
        adjusted_deductible_expenses=adjusted_deductible_expenses,
        adjusted_income=adjusted_income,
        net_rental_income=net_rental_income,
        loss_carry_forward=loss_carry_forward,
    )
