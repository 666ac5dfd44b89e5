"""Portfolio rollup across every active property."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Iterable

from rental_workpaper.engine.diagnostics import (
    Diagnostic,
    has_blocking,
    has_warning,
    needs_attention,
)
from rental_workpaper.models.coercion import ZERO
from rental_workpaper.models.rental import Property, Workpaper, WorkpaperStatus

logger = logging.getLogger(__name__)

COMPLETED_STATUSES = (WorkpaperStatus.COMPLETE, WorkpaperStatus.LOCKED)


@dataclass(frozen=True)
class PortfolioTotals:
    """Current-year totals over all active properties."""

    tax_year: str
    total_income: Decimal = ZERO
    total_expenses: Decimal = ZERO
    net_position: Decimal = ZERO
    loss_carry_forward: Decimal = ZERO
    completed_count: int = 0
    warning_count: int = 0
    property_count: int = 0


@dataclass
class PropertySummary:
    """One property with its current-year workpaper and findings."""

    property: Property
    workpaper: Workpaper | None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_blocking(self) -> bool:
        return has_blocking(self.diagnostics)

    @property
    def has_warning(self) -> bool:
        return has_warning(self.diagnostics)

    @property
    def net_rental_income(self) -> Decimal:
        if self.workpaper is None:
            return ZERO
        return self.workpaper.calculation.net_rental_income

    @property
    def status(self) -> WorkpaperStatus:
        if self.workpaper is None:
            return WorkpaperStatus.NOT_STARTED
        return self.workpaper.status


def calculate_portfolio_totals(
    properties: Iterable[Property],
    workpapers: Iterable[Workpaper],
    tax_year: str,
    diagnose: Callable[[Workpaper], list[Diagnostic]],
) -> PortfolioTotals:
    """Sum the persisted results of each active property's workpaper.

    Parameters
    ----------
    properties : Iterable[Property]
        All properties; inactive ones are ignored.
    workpapers : Iterable[Workpaper]
        Workpapers of any year; only ``tax_year`` ones are used.
    tax_year : str
        Year to roll up.
    diagnose : Callable[[Workpaper], list[Diagnostic]]
        Produces findings for a workpaper.

    Returns
    -------
    PortfolioTotals
        Properties without a workpaper for the year add to
        ``property_count`` only.
    """
    active = [prop for prop in properties if prop.is_active]
    by_property = {wp.property_id: wp for wp in workpapers if wp.tax_year == tax_year}

    total_income = ZERO
    total_expenses = ZERO
    net_position = ZERO
    loss_carry_forward = ZERO
    completed_count = 0
    warning_count = 0

    for prop in active:
        workpaper = by_property.get(prop.property_id)
        if workpaper is None:
            continue

        calc = workpaper.calculation
        total_income += calc.adjusted_income
        total_expenses += calc.adjusted_deductible_expenses
        net_position += calc.net_rental_income
        loss_carry_forward += calc.loss_carry_forward

        if workpaper.status in COMPLETED_STATUSES:
            completed_count += 1
        if needs_attention(diagnose(workpaper)):
            warning_count += 1

    logger.info(
        "Portfolio %s: %d active properties, net position %s",
        tax_year,
        len(active),
        net_position,
    )

    return PortfolioTotals(
        tax_year=tax_year,
        total_income=total_income,
        total_expenses=total_expenses,
        net_position=net_position,
        loss_carry_forward=loss_carry_forward,
        completed_count=completed_count,
        warning_count=warning_count,
        property_count=len(active),
    )
