#!/usr/bin/env python3
"""Generate a sample rental portfolio.

Runs the sample portfolio scenario and writes every collection plus the
portfolio totals to JSON files (and optionally the console). With
``--data-dir`` the portfolio is built directly in a JSON-backed store that
``portfolio_report.py`` can read later.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rental_workpaper.config import RentalConfig, StoreConfig
from rental_workpaper.logging import setup_logging
from rental_workpaper.scenarios import SamplePortfolioScenario
from rental_workpaper.sinks import ConsoleSink, JsonFileSink, KafkaActivitySink
from rental_workpaper.store import RentalDataStore

logger = logging.getLogger(__name__)


def build_store(config: RentalConfig, publish_to_kafka: bool) -> RentalDataStore:
    """Create the store the scenario populates."""
    activity_sink = KafkaActivitySink(config.kafka) if publish_to_kafka else None
    return RentalDataStore.from_config(config, activity_sink=activity_sink)


def main() -> None:
    """Main entry point."""
    config = RentalConfig.from_env()

    parser = argparse.ArgumentParser(description="Generate a sample rental portfolio")
    parser.add_argument(
        "--properties",
        type=int,
        default=10,
        help="Number of properties to generate (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--mixed-use-rate",
        type=float,
        default=0.10,
        help="Share of mixed-use holiday homes (default: 0.10)",
    )
    parser.add_argument(
        "--capital-rate",
        type=float,
        default=0.20,
        help="Share of workpapers with a capital works line (default: 0.20)",
    )
    parser.add_argument(
        "--evidence-rate",
        type=float,
        default=0.75,
        help="Share of expense lines with linked evidence (default: 0.75)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output.json_output_dir,
        help="Directory for exported JSON files",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Build the portfolio in a JSON-backed store at this directory",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        default=config.output.pretty_json,
        help="Pretty-print JSON output",
    )
    parser.add_argument(
        "--console",
        action="store_true",
        help="Also print the exported records",
    )
    parser.add_argument(
        "--kafka",
        action="store_true",
        default=config.kafka.enabled,
        help="Publish every activity to Kafka",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["standard", "json"],
        default="standard",
        help="Log format (default: standard)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also append log lines to this file",
    )
    args = parser.parse_args()

    setup_logging(args.log_level, args.log_format, log_file=args.log_file)

    if args.data_dir is not None:
        config.store = StoreConfig(backend="json", data_dir=args.data_dir, pretty_json=args.pretty)
    config.kafka.enabled = False

    store = build_store(config, publish_to_kafka=args.kafka)
    scenario = SamplePortfolioScenario(
        num_properties=args.properties,
        mixed_use_rate=args.mixed_use_rate,
        capital_rate=args.capital_rate,
        evidence_rate=args.evidence_rate,
        seed=args.seed,
        store=store,
        actor=config.actor,
    )
    scenario.generate()

    sinks: list = [JsonFileSink(args.output_dir, pretty=args.pretty)]
    if args.console:
        sinks.append(ConsoleSink(pretty=args.pretty, max_records=5))
    scenario.export(sinks)

    for sink in sinks:
        sink.close()
    if isinstance(store.activity_sink, KafkaActivitySink):
        store.activity_sink.close()

    summary = scenario.get_portfolio_summary()
    logger.info(
        "Portfolio %s: %d properties, net position %s",
        summary["tax_year"],
        summary["properties"],
        summary["net_position"],
    )


if __name__ == "__main__":
    main()
