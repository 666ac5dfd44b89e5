"""Workpaper workflow: calculation, diagnostics, status moves and rollups."""

from __future__ import annotations

import logging
from typing import Any

from rental_workpaper.engine.calculation import calculate
from rental_workpaper.engine.diagnostics import Diagnostic, run_diagnostics
from rental_workpaper.engine.lifecycle import StatusLifecycle
from rental_workpaper.engine.portfolio import (
    PortfolioTotals,
    PropertySummary,
    calculate_portfolio_totals,
)
from rental_workpaper.exceptions import InvalidTransitionError
from rental_workpaper.logging import get_logger
from rental_workpaper.models.base import DEFAULT_ACTOR, Actor
from rental_workpaper.models.rental import ActivityType, Workpaper, WorkpaperStatus
from rental_workpaper.store.rental import RentalDataStore

logger = logging.getLogger(__name__)


class RentalWorkpaperService:
    """Operations that combine the store with the engines.

    Parameters
    ----------
    store : RentalDataStore
        Record store to read from and persist to.
    lifecycle : StatusLifecycle | None
        Status state machine; the standard allow-list when omitted.
    """

    def __init__(
        self,
        store: RentalDataStore,
        lifecycle: StatusLifecycle | None = None,
    ) -> None:
        self.store = store
        self.lifecycle = lifecycle or StatusLifecycle()

    def calculate_workpaper(
        self, workpaper_id: str, actor: Actor = DEFAULT_ACTOR
    ) -> Workpaper | None:
        """Recompute and persist a workpaper's derived amounts.

        A ``NotStarted`` workpaper moves to ``InProgress`` once calculated.
        Returns ``None`` for an unknown id or a failed write.
        """
        workpaper = self.store.get_workpaper(workpaper_id)
        if workpaper is None:
            return None

        prop = self.store.get_property(workpaper.property_id)
        ownership = prop.ownership_percentage if prop is not None else None
        workpaper.calculation = calculate(workpaper, ownership, self.store.load_settings())

        previous = workpaper.status
        if previous == WorkpaperStatus.NOT_STARTED and self.lifecycle.can_transition(
            previous, WorkpaperStatus.IN_PROGRESS
        ):
            workpaper.status = WorkpaperStatus.IN_PROGRESS

        saved = self.store.save_workpaper(workpaper, actor=actor)
        if saved is None:
            return None

        if saved.status != previous:
            self._log_status_change(saved, previous, actor)
        return saved

    def calculate_all(self, tax_year: str | None = None, actor: Actor = DEFAULT_ACTOR) -> int:
        """Recalculate every workpaper of a year; returns how many were saved."""
        tax_year = tax_year or self.store.current_tax_year
        count = 0
        for workpaper in self.store.list_workpapers(tax_year):
            if self.calculate_workpaper(workpaper.workpaper_id, actor=actor) is not None:
                count += 1
        logger.info("Recalculated %d workpaper(s) for %s", count, tax_year)
        return count

    def diagnose(self, workpaper: Workpaper) -> list[Diagnostic]:
        return run_diagnostics(workpaper, self.store.evidence_for(workpaper))

    def run_diagnostics(self, workpaper_id: str) -> list[Diagnostic]:
        """Findings for a workpaper; empty for an unknown id."""
        workpaper = self.store.get_workpaper(workpaper_id)
        if workpaper is None:
            return []
        return self.diagnose(workpaper)

    def allowed_transitions(self, workpaper_id: str) -> list[WorkpaperStatus]:
        workpaper = self.store.get_workpaper(workpaper_id)
        if workpaper is None:
            return []
        return self.lifecycle.allowed_targets(workpaper.status)

    def transition_status(
        self,
        workpaper_id: str,
        new_status: Any,
        actor: Actor = DEFAULT_ACTOR,
    ) -> Workpaper | None:
        """Move a workpaper to ``new_status``.

        Returns the updated workpaper, or ``None`` if the id is unknown or the
        move is not allowed; a rejected move leaves the record unchanged.
        """
        workpaper = self.store.get_workpaper(workpaper_id)
        if workpaper is None:
            return None

        try:
            target = self.lifecycle.validate(workpaper.status, new_status)
        except InvalidTransitionError as e:
            get_logger(__name__, workpaper_id=workpaper_id, actor=actor.user_id).warning(
                "Rejected status change: %s", e
            )
            return None

        previous = workpaper.status
        workpaper.status = target
        saved = self.store.save_workpaper(workpaper, actor=actor)
        if saved is None:
            return None

        self._log_status_change(saved, previous, actor)
        return saved

    def _log_status_change(
        self, workpaper: Workpaper, previous: WorkpaperStatus, actor: Actor
    ) -> None:
        log = get_logger(__name__, workpaper_id=workpaper.workpaper_id, actor=actor.user_id)
        log.info("Status %s -> %s", previous.value, workpaper.status.value)
        self.store.log_activity(
            workpaper.workpaper_id,
            ActivityType.STATUS_CHANGE,
            actor,
            field_name="status",
            old_value=previous.value,
            new_value=workpaper.status.value,
        )

    def portfolio_totals(self, tax_year: str | None = None) -> PortfolioTotals:
        """Roll up the active properties for ``tax_year`` (default: current year)."""
        return calculate_portfolio_totals(
            self.store.list_properties(),
            self.store.list_workpapers(),
            tax_year or self.store.current_tax_year,
            self.diagnose,
        )

    def property_summary(
        self, property_id: str, tax_year: str | None = None
    ) -> PropertySummary | None:
        prop = self.store.get_property(property_id)
        if prop is None:
            return None
        workpaper = self.store.get_workpaper_for_property(property_id, tax_year)
        diagnostics = self.diagnose(workpaper) if workpaper is not None else []
        return PropertySummary(property=prop, workpaper=workpaper, diagnostics=diagnostics)

    def property_summaries(
        self, tax_year: str | None = None, active_only: bool = True
    ) -> list[PropertySummary]:
        summaries = []
        for prop in self.store.list_properties(active_only=active_only):
            summary = self.property_summary(prop.property_id, tax_year)
            if summary is not None:
                summaries.append(summary)
        return summaries
