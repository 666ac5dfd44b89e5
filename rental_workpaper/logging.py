"""Logging setup with workpaper context for rental-workpaper.

Records may carry ``workpaper_id``, ``property_id`` and ``actor`` attributes,
either through ``extra=`` or through :class:`WorkpaperLogAdapter`. The
standard format prints them after the logger name; the JSON format emits them
as top-level keys.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, MutableMapping

CONTEXT_FIELDS = ("workpaper_id", "property_id", "actor")

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(context)s%(message)s"


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    log_file: str | Path | None = None,
) -> None:
    """Configure logging for rental-workpaper.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    format_type : str
        Format type: "standard" or "json".
    log_file : str | Path | None
        Also append log lines to this file.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler.addFilter(ContextFilter())
        root_logger.addHandler(handler)

    logging.getLogger("rental_workpaper").setLevel(log_level)

    # Faker and librdkafka are chatty at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)
    logging.getLogger("confluent_kafka").setLevel(logging.WARNING)


class ContextFilter(logging.Filter):
    """Render the workpaper context of a record into ``record.context``."""

    def filter(self, record: logging.LogRecord) -> bool:
        parts = [
            f"{key}={getattr(record, key)}" for key in CONTEXT_FIELDS if hasattr(record, key)
        ]
        record.context = f"[{' '.join(parts)}] " if parts else ""
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with workpaper context as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in CONTEXT_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra"):
            log_data.update(record.extra)

        return json.dumps(log_data, default=str)


class WorkpaperLogAdapter(logging.LoggerAdapter):
    """Logger adapter that attaches a fixed workpaper context to every record.

    Context given in a call's own ``extra=`` wins over the adapter's.
    """

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, **context: Any) -> logging.Logger | WorkpaperLogAdapter:
    """Get a logger, bound to workpaper context when any is given.

    Parameters
    ----------
    name : str
        Logger name (usually __name__).
    **context : Any
        ``workpaper_id``, ``property_id`` or ``actor`` values to attach.

    Returns
    -------
    logging.Logger | WorkpaperLogAdapter
        Plain logger, or an adapter carrying ``context``.
    """
    logger = logging.getLogger(name)
    if not context:
        return logger
    return WorkpaperLogAdapter(logger, context)
