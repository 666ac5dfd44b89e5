#!/usr/bin/env python3
"""Print portfolio totals and per-property summaries from a JSON store."""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rental_workpaper.config import RentalConfig
from rental_workpaper.formatting import format_currency
from rental_workpaper.logging import setup_logging
from rental_workpaper.service import RentalWorkpaperService
from rental_workpaper.sinks.serialization import to_dict
from rental_workpaper.store import JsonFileBackend, RentalDataStore

logger = logging.getLogger(__name__)


def print_report(service: RentalWorkpaperService, tax_year: str) -> None:
    """Print totals followed by one row per active property."""
    totals = service.portfolio_totals(tax_year)

    print(f"\n{'=' * 72}")
    print(f"Rental portfolio {totals.tax_year}")
    print("=" * 72)
    print(f"  Properties:          {totals.property_count}")
    print(f"  Completed:           {totals.completed_count}")
    print(f"  Needing attention:   {totals.warning_count}")
    print(f"  Total income:        {format_currency(totals.total_income)}")
    print(f"  Total expenses:      {format_currency(totals.total_expenses)}")
    print(f"  Net position:        {format_currency(totals.net_position)}")
    print(f"  Loss carry-forward:  {format_currency(totals.loss_carry_forward)}")

    print(f"\n{'Property':<40} {'Status':<14} {'Net':>14}  Findings")
    print("-" * 72)
    for summary in service.property_summaries(tax_year):
        flags = []
        if summary.has_blocking:
            flags.append("blocking")
        if summary.has_warning:
            flags.append("warning")
        print(
            f"{summary.property.display_name[:40]:<40} "
            f"{summary.status.value:<14} "
            f"{format_currency(summary.net_rental_income):>14}  "
            f"{', '.join(flags) or '-'}"
        )


def main() -> None:
    """Main entry point."""
    config = RentalConfig.from_env()

    parser = argparse.ArgumentParser(description="Report on a stored rental portfolio")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=config.store.data_dir,
        help="Directory of the JSON-backed store",
    )
    parser.add_argument(
        "--tax-year",
        type=str,
        default=None,
        help="Tax year to report (default: the stored current year)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the totals as JSON instead of a table",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Log level (default: WARNING)",
    )
    args = parser.parse_args()

    setup_logging(args.log_level)

    if not args.data_dir.exists():
        logger.error("No store found at %s", args.data_dir)
        sys.exit(1)

    store = RentalDataStore(
        backend=JsonFileBackend(args.data_dir),
        tax_defaults=config.tax_settings,
    )
    service = RentalWorkpaperService(store)
    tax_year = args.tax_year or store.current_tax_year

    if args.json:
        print(json.dumps(to_dict(service.portfolio_totals(tax_year)), indent=2))
    else:
        print_report(service, tax_year)


if __name__ == "__main__":
    main()
