"""Calculation, diagnostics, lifecycle and portfolio engines."""

from rental_workpaper.engine.calculation import apportionment_ratio, calculate
from rental_workpaper.engine.diagnostics import Diagnostic, run_diagnostics
from rental_workpaper.engine.lifecycle import ALLOWED_TRANSITIONS, StatusLifecycle
from rental_workpaper.engine.portfolio import (
    PortfolioTotals,
    PropertySummary,
    calculate_portfolio_totals,
)
from rental_workpaper.engine.settings import SettingsProvider

__all__ = [
    "ALLOWED_TRANSITIONS",
    "Diagnostic",
    "PortfolioTotals",
    "PropertySummary",
    "SettingsProvider",
    "StatusLifecycle",
    "apportionment_ratio",
    "calculate",
    "calculate_portfolio_totals",
    "run_diagnostics",
]
