"""Sample rental portfolio scenario."""

from __future__ import annotations

import logging
import random
from typing import Any

from rental_workpaper.engine.diagnostics import has_blocking
from rental_workpaper.generators import (
    EvidenceGenerator,
    ExpenseLineGenerator,
    PropertyGenerator,
    WorkpaperInputGenerator,
)
from rental_workpaper.models.base import DEFAULT_ACTOR, Actor
from rental_workpaper.models.rental import WorkpaperStatus
from rental_workpaper.service import RentalWorkpaperService
from rental_workpaper.store.rental import RentalDataStore

logger = logging.getLogger(__name__)

REVIEW_PATH = (WorkpaperStatus.READY_TO_REVIEW, WorkpaperStatus.COMPLETE)


class SamplePortfolioScenario:
    """Generate a populated, calculated rental portfolio.

    This scenario creates:
    - Properties across the main NZ rental markets, some part-owned
    - A current-year workpaper per property with income and day counts
    - Core expense lines (interest, rates, insurance) plus extras
    - Occasional capital works lines and mixed-use holiday homes
    - Evidence documents linked to most expense lines
    - Calculated workpapers, some moved on to review and completion
    """

    def __init__(
        self,
        num_properties: int = 10,
        mixed_use_rate: float = 0.10,
        capital_rate: float = 0.20,
        evidence_rate: float = 0.75,
        seed: int | None = None,
        *,
        completion_rate: float = 0.30,
        store: RentalDataStore | None = None,
        actor: Actor = DEFAULT_ACTOR,
    ) -> None:
        """Initialize sample portfolio scenario.

        Parameters
        ----------
        num_properties : int
            Number of properties to generate.
        mixed_use_rate : float
            Share of properties that are mixed-use holiday homes (0.0 to 1.0).
        capital_rate : float
            Share of workpapers with a capital works line.
        evidence_rate : float
            Share of expense lines with a linked document.
        seed : int | None
            Random seed for reproducibility.
        completion_rate : float
            Share of clean workpapers taken through review to Complete.
        store : RentalDataStore | None
            Store to populate; a fresh in-memory store when omitted.
        actor : Actor
            User recorded on every generated change.
        """
        self.num_properties = num_properties
        self.mixed_use_rate = mixed_use_rate
        self.capital_rate = capital_rate
        self.evidence_rate = evidence_rate
        self.completion_rate = completion_rate
        self.seed = seed
        self.actor = actor

        if seed is not None:
            random.seed(seed)

        self.store = store if store is not None else RentalDataStore()
        self.service = RentalWorkpaperService(self.store)
        self._property_gen = PropertyGenerator(seed=seed)
        self._input_gen = WorkpaperInputGenerator(seed=seed)
        self._expense_gen = ExpenseLineGenerator(seed=seed)
        self._evidence_gen = EvidenceGenerator(seed=seed)

    def generate(self) -> RentalDataStore:
        """Generate all data for the portfolio.

        Returns
        -------
        RentalDataStore
            Store containing the generated portfolio.
        """
        logger.info(
            "Starting portfolio scenario: %d properties, %.0f%% mixed use",
            self.num_properties,
            self.mixed_use_rate * 100,
        )

        for data in self._property_gen.generate_batch(self.num_properties):
            prop = self.store.create_property(data, actor=self.actor)
            if prop is None:
                continue
            workpaper = self.store.get_workpaper_for_property(prop.property_id)
            if workpaper is None:
                continue
            self._populate(workpaper.workpaper_id)

        calculated = self.service.calculate_all(actor=self.actor)
        completed = self._advance_clean_workpapers()

        logger.info(
            "Generated %d properties, %d calculated, %d completed",
            self.store.properties.count(),
            calculated,
            completed,
        )
        return self.store

    def _populate(self, workpaper_id: str) -> None:
        mixed_use = random.random() < self.mixed_use_rate
        self.store.update_workpaper(
            workpaper_id, self._input_gen.generate(mixed_use=mixed_use), actor=self.actor
        )

        for line_data in self._expense_gen.generate_for_year(capital_rate=self.capital_rate):
            line = self.store.add_expense_line(workpaper_id, line_data, actor=self.actor)
            if line is None or random.random() >= self.evidence_rate:
                continue
            evidence = self.store.add_evidence(
                workpaper_id, self._evidence_gen.generate(line.category), actor=self.actor
            )
            if evidence is not None:
                self.store.link_evidence(
                    workpaper_id, line.line_id, evidence.evidence_id, actor=self.actor
                )

    def _advance_clean_workpapers(self) -> int:
        """Take some workpapers without blocking findings through review."""
        completed = 0
        for workpaper in self.store.list_workpapers(self.store.current_tax_year):
            if has_blocking(self.service.diagnose(workpaper)):
                continue
            if random.random() >= self.completion_rate:
                continue
            for status in REVIEW_PATH:
                if self.service.transition_status(
                    workpaper.workpaper_id, status, actor=self.actor
                ) is None:
                    break
            else:
                completed += 1
        return completed

    def export(self, sinks: list[Any]) -> None:
        """Export generated data to sinks.

        Parameters
        ----------
        sinks : list[Any]
            Sink instances (JsonFileSink, ConsoleSink).
        """
        totals = self.service.portfolio_totals()
        for sink in sinks:
            sink.write_batch("properties", self.store.list_properties())
            sink.write_batch("workpapers", self.store.list_workpapers())
            sink.write_batch("evidence", self.store.evidence.all())
            sink.write_batch("activities", self.store.activities.all())
            sink.write_report("portfolio_totals", totals)

        logger.info("Exported portfolio to %d sinks", len(sinks))

    def get_portfolio_summary(self) -> dict[str, Any]:
        """Get summary statistics for the generated portfolio.

        Returns
        -------
        dict[str, Any]
            Record counts, status distribution and portfolio totals.
        """
        workpapers = self.store.list_workpapers(self.store.current_tax_year)
        status_counts: dict[str, int] = {}
        for workpaper in workpapers:
            status_counts[workpaper.status.value] = status_counts.get(workpaper.status.value, 0) + 1

        totals = self.service.portfolio_totals()
        return {
            **self.store.summary(),
            "tax_year": totals.tax_year,
            "status_distribution": status_counts,
            "mixed_use": sum(1 for wp in workpapers if wp.mixed_use),
            "total_income": totals.total_income,
            "total_expenses": totals.total_expenses,
            "net_position": totals.net_position,
            "loss_carry_forward": totals.loss_carry_forward,
        }
