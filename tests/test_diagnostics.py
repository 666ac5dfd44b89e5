"""Tests for the diagnostics engine."""

from datetime import datetime, timezone
from decimal import Decimal

from rental_workpaper.engine.diagnostics import (
    Diagnostic,
    has_blocking,
    has_warning,
    needs_attention,
    run_diagnostics,
)
from rental_workpaper.models.rental import (
    Evidence,
    ExpenseCategory,
    ExpenseLine,
    Severity,
    Workpaper,
    WorkpaperStatus,
)


def _codes(diagnostics: list[Diagnostic]) -> list[str]:
    return [d.code for d in diagnostics]


def _evidence(evidence_id: str) -> Evidence:
    return Evidence(
        evidence_id=evidence_id,
        workpaper_id="wp-test-001",
        file_name="rates.pdf",
        content_type="application/pdf",
        size_bytes=1024,
        uploaded_at=datetime(2025, 6, 1, tzinfo=timezone.utc),
        uploaded_by="user-test-001",
    )


class TestRunDiagnostics:
    """Tests for run_diagnostics."""

    def test_missing_income_and_days(self) -> None:
        workpaper = Workpaper(workpaper_id="wp-1", property_id="p-1", tax_year="2025/2026")

        diagnostics = run_diagnostics(workpaper)

        blocking = [d for d in diagnostics if d.level == Severity.BLOCKING]
        assert len(blocking) >= 2
        assert _codes(blocking) == ["INCOME_MISSING", "DAYS_RENTED_MISSING"]

    def test_days_rented_exceeds_year(self, workpaper: Workpaper) -> None:
        workpaper.days_rented = 366

        assert "DAYS_RENTED_EXCEEDS_YEAR" in _codes(run_diagnostics(workpaper))

    def test_mixed_use_rules(self, workpaper: Workpaper) -> None:
        workpaper.mixed_use = True
        workpaper.days_rented = 300
        workpaper.days_private = 0

        codes = _codes(run_diagnostics(workpaper))

        assert "DAYS_PRIVATE_MISSING" in codes
        assert "MIXED_USE_ACTIVE" in codes
        assert "TOTAL_DAYS_EXCEED_YEAR" not in codes

    def test_mixed_use_total_days(self, workpaper: Workpaper) -> None:
        workpaper.mixed_use = True
        workpaper.days_rented = 300
        workpaper.days_private = 400

        codes = _codes(run_diagnostics(workpaper))

        assert "DAYS_PRIVATE_EXCEEDS_YEAR" in codes
        assert "TOTAL_DAYS_EXCEED_YEAR" in codes

    def test_private_days_ignored_without_mixed_use(self, workpaper: Workpaper) -> None:
        workpaper.days_private = 400

        codes = _codes(run_diagnostics(workpaper))

        assert "DAYS_PRIVATE_EXCEEDS_YEAR" not in codes
        assert "MIXED_USE_ACTIVE" not in codes

    def test_capital_warning(self, workpaper: Workpaper) -> None:
        workpaper.expense_lines.append(
            ExpenseLine(
                line_id="line-002",
                category=ExpenseCategory.REPAIRS_MAINTENANCE,
                amount=Decimal("5000"),
                is_capital=True,
            )
        )

        diagnostics = run_diagnostics(workpaper)

        capital = [d for d in diagnostics if d.code == "CAPITAL_EXCLUDED"]
        assert capital and capital[0].level == Severity.WARNING

    def test_evidence_missing_counts_lines(self, workpaper: Workpaper) -> None:
        workpaper.expense_lines.append(
            ExpenseLine(line_id="line-002", category=ExpenseCategory.RATES, amount=Decimal("100"))
        )

        diagnostics = run_diagnostics(workpaper)

        missing = [d for d in diagnostics if d.code == "EVIDENCE_MISSING"]
        assert len(missing) == 1
        assert missing[0].message.startswith("2 expense line(s)")

    def test_evidence_linked(self, workpaper: Workpaper) -> None:
        workpaper.expense_lines[0].evidence_ids.append("ev-1")

        codes = _codes(run_diagnostics(workpaper, [_evidence("ev-1")]))

        assert "EVIDENCE_MISSING" not in codes

    def test_dangling_evidence_id_counts_as_missing(self, workpaper: Workpaper) -> None:
        workpaper.expense_lines[0].evidence_ids.append("ev-deleted")

        codes = _codes(run_diagnostics(workpaper, [_evidence("ev-other")]))

        assert "EVIDENCE_MISSING" in codes

    def test_not_calculated_info(self, workpaper: Workpaper) -> None:
        diagnostics = run_diagnostics(workpaper)

        assert diagnostics[-1].code == "NOT_CALCULATED"
        assert diagnostics[-1].level == Severity.INFO

    def test_calculated_has_no_info(self, workpaper: Workpaper) -> None:
        workpaper.status = WorkpaperStatus.IN_PROGRESS

        assert "NOT_CALCULATED" not in _codes(run_diagnostics(workpaper))

    def test_order_blocking_warning_info(self) -> None:
        workpaper = Workpaper(
            workpaper_id="wp-1",
            property_id="p-1",
            tax_year="2025/2026",
            mixed_use=True,
        )

        levels = [d.level for d in run_diagnostics(workpaper)]

        order = [Severity.BLOCKING, Severity.WARNING, Severity.INFO]
        assert levels == sorted(levels, key=order.index)


class TestHelpers:
    """Tests for the severity helpers."""

    def test_has_blocking(self) -> None:
        diagnostics = [Diagnostic(Severity.BLOCKING, "X", "x")]

        assert has_blocking(diagnostics)
        assert not has_warning(diagnostics)
        assert needs_attention(diagnostics)

    def test_info_only(self) -> None:
        diagnostics = [Diagnostic(Severity.INFO, "NOT_CALCULATED", "x")]

        assert not needs_attention(diagnostics)

    def test_empty(self) -> None:
        assert not has_blocking([])
        assert not needs_attention([])
