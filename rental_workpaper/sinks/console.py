"""Console sink for inspecting records during development."""

from typing import Any

from rental_workpaper.models.rental import Activity
from rental_workpaper.sinks.serialization import dumps


class ConsoleSink:
    """Print records and activities to stdout."""

    def __init__(self, pretty: bool = True, max_records: int | None = None) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        max_records : int | None
            Maximum records to print per batch (None for all).
        """
        self.pretty = pretty
        self.max_records = max_records
        self._counts: dict[str, int] = {}

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Print a batch of records under a header."""
        print(f"\n{'=' * 60}")
        print(f"Entity: {entity_type} ({len(records)} records)")
        print("=" * 60)

        display_records = records[: self.max_records] if self.max_records else records
        for record in display_records:
            print(dumps(record, pretty=self.pretty))

        if self.max_records and len(records) > self.max_records:
            print(f"... and {len(records) - self.max_records} more records")

        self._counts[entity_type] = self._counts.get(entity_type, 0) + len(records)

    def write_report(self, name: str, report: Any) -> None:
        print(f"\n{name}:")
        print(dumps(report, pretty=True))

    def publish(self, activity: Activity) -> None:
        """Print one activity on a single line."""
        change = ""
        if activity.old_value is not None or activity.new_value is not None:
            change = f" {activity.old_value or '-'} -> {activity.new_value or '-'}"
        print(
            f"[{activity.timestamp.isoformat()}] {activity.workpaper_id} "
            f"{activity.action_type.value} by {activity.user_id}{change}"
        )
        self._counts["activities"] = self._counts.get("activities", 0) + 1

    def close(self) -> None:
        """Print summary and close."""
        print(f"\n{'=' * 60}")
        print("Console Sink Summary")
        print("=" * 60)
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
