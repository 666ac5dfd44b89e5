"""Output sinks for exporting records and streaming activities."""

from rental_workpaper.sinks.console import ConsoleSink
from rental_workpaper.sinks.json_file import JsonFileSink
from rental_workpaper.sinks.kafka import KafkaActivitySink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaActivitySink"]
