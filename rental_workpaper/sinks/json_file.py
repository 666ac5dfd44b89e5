"""JSON file sink for exporting collections and reports."""

import json
import logging
from pathlib import Path
from typing import Any

from rental_workpaper.exceptions import SinkError
from rental_workpaper.models.rental import Activity
from rental_workpaper.sinks.serialization import to_dict, to_records

logger = logging.getLogger(__name__)


class JsonFileSink:
    """Write records to ``<output_dir>/<entity_type>.json``.

    Also usable as an activity sink: each published activity is appended
    as one line to ``activities.jsonl``.
    """

    ACTIVITY_LOG = "activities.jsonl"

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def write_batch(self, entity_type: str, records: list[Any]) -> Path:
        """Write a batch of records, replacing any previous file."""
        file_path = self.output_dir / f"{entity_type}.json"
        self._dump(file_path, to_records(records))
        self._counts[entity_type] = len(records)
        logger.debug("Wrote %d %s record(s) to %s", len(records), entity_type, file_path)
        return file_path

    def write_report(self, name: str, report: Any) -> Path:
        """Write a single report object (e.g. portfolio totals)."""
        file_path = self.output_dir / f"{name}.json"
        self._dump(file_path, to_dict(report))
        self._counts[name] = 1
        return file_path

    def publish(self, activity: Activity) -> None:
        file_path = self.output_dir / self.ACTIVITY_LOG
        try:
            with open(file_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(to_dict(activity), ensure_ascii=False) + "\n")
        except OSError as e:
            raise SinkError(f"Failed to append activity to {file_path}: {e}") from e
        self._counts[self.ACTIVITY_LOG] = self._counts.get(self.ACTIVITY_LOG, 0) + 1

    def _dump(self, file_path: Path, data: Any) -> None:
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False, default=str)
                else:
                    json.dump(data, f, ensure_ascii=False, default=str)
        except OSError as e:
            raise SinkError(f"Failed to write {file_path}: {e}") from e

    @property
    def counts(self) -> dict[str, int]:
        return dict(self._counts)

    def close(self) -> None:
        """Log a summary of what was written."""
        logger.info("JSON files written to: %s", self.output_dir)
        for entity_type, count in self._counts.items():
            logger.info("  %s: %d records", entity_type, count)
