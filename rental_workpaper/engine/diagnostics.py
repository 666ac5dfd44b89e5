"""Data-quality diagnostics for workpapers.

Every rule is evaluated on every call; findings are never stored. The engine
only reports: keeping blocked workpapers from advancing is up to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from rental_workpaper.models.coercion import ZERO, to_days, to_decimal
from rental_workpaper.models.rental import Evidence, Severity, Workpaper, WorkpaperStatus

DAYS_IN_YEAR = 365


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about a workpaper."""

    level: Severity
    code: str
    message: str


def _blocking(code: str, message: str) -> Diagnostic:
    return Diagnostic(Severity.BLOCKING, code, message)


def _warning(code: str, message: str) -> Diagnostic:
    return Diagnostic(Severity.WARNING, code, message)


def run_diagnostics(workpaper: Workpaper, evidence: Iterable[Evidence] = ()) -> list[Diagnostic]:
    """Assess a workpaper's inputs.

    Parameters
    ----------
    workpaper : Workpaper
        Workpaper to check.
    evidence : Iterable[Evidence]
        Evidence records that currently exist for the workpaper. Line
        evidence ids not found here count as missing.

    Returns
    -------
    list[Diagnostic]
        Blocking findings first, then warnings, then info.
    """
    diagnostics: list[Diagnostic] = []

    gross_income = to_decimal(workpaper.gross_rental_income)
    days_rented = to_days(workpaper.days_rented)
    days_private = to_days(workpaper.days_private)

    if gross_income <= ZERO:
        diagnostics.append(
            _blocking("INCOME_MISSING", "Gross rental income is missing or zero.")
        )
    if days_rented <= 0:
        diagnostics.append(
            _blocking("DAYS_RENTED_MISSING", "Days rented is missing or zero.")
        )
    if days_rented > DAYS_IN_YEAR:
        diagnostics.append(
            _blocking("DAYS_RENTED_EXCEEDS_YEAR", f"Days rented exceeds {DAYS_IN_YEAR}.")
        )

    if workpaper.mixed_use:
        if days_private <= 0:
            diagnostics.append(
                _blocking(
                    "DAYS_PRIVATE_MISSING",
                    "Mixed use is enabled but days private is missing or zero.",
                )
            )
        if days_private > DAYS_IN_YEAR:
            diagnostics.append(
                _blocking("DAYS_PRIVATE_EXCEEDS_YEAR", f"Days private exceeds {DAYS_IN_YEAR}.")
            )
        if days_rented + days_private > DAYS_IN_YEAR:
            diagnostics.append(
                _blocking(
                    "TOTAL_DAYS_EXCEED_YEAR",
                    f"Total days (rented + private) exceeds {DAYS_IN_YEAR}.",
                )
            )

    if workpaper.mixed_use:
        diagnostics.append(
            _warning("MIXED_USE_ACTIVE", "Mixed-use apportionment is active.")
        )

    lines = workpaper.expense_lines or []
    if any(line.is_capital for line in lines):
        diagnostics.append(
            _warning(
                "CAPITAL_EXCLUDED",
                "Capital expenses are present and excluded from deductions.",
            )
        )

    known_ids = {item.evidence_id for item in evidence}
    unlinked = [
        line
        for line in lines
        if not any(evidence_id in known_ids for evidence_id in line.evidence_ids or [])
    ]
    if unlinked:
        diagnostics.append(
            _warning(
                "EVIDENCE_MISSING",
                f"{len(unlinked)} expense line(s) have no linked evidence.",
            )
        )

    if workpaper.status == WorkpaperStatus.NOT_STARTED:
        diagnostics.append(
            Diagnostic(
                Severity.INFO, "NOT_CALCULATED", "Workpaper has not yet been calculated."
            )
        )

    return diagnostics


def has_blocking(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.level == Severity.BLOCKING for d in diagnostics)


def has_warning(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.level == Severity.WARNING for d in diagnostics)


def needs_attention(diagnostics: Iterable[Diagnostic]) -> bool:
    """True if any finding is a warning or blocking."""
    return any(d.level in (Severity.WARNING, Severity.BLOCKING) for d in diagnostics)
