"""Tests for sinks."""

import json
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from confluent_kafka import KafkaException

from rental_workpaper.config import KafkaConfig
from rental_workpaper.engine.portfolio import PortfolioTotals
from rental_workpaper.exceptions import SinkError
from rental_workpaper.models.rental import Activity, ActivityType
from rental_workpaper.sinks import ConsoleSink, JsonFileSink, KafkaActivitySink
from rental_workpaper.sinks.kafka import (
    EVENT_SOURCE,
    ProducerStats,
    activity_event,
    event_type_for,
)


@pytest.fixture
def activity() -> Activity:
    return Activity(
        activity_id="act-001",
        workpaper_id="wp-001",
        user_id="user-001",
        action_type=ActivityType.STATUS_CHANGE,
        timestamp=datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc),
        field_name="status",
        old_value="InProgress",
        new_value="ReadyToReview",
    )


class TestJsonFileSink:
    """Tests for JsonFileSink."""

    def test_init_creates_directory(self, tmp_path: Path) -> None:
        output_dir = tmp_path / "nested" / "output"

        JsonFileSink(output_dir)

        assert output_dir.is_dir()

    def test_write_batch(self, tmp_path: Path) -> None:
        sink = JsonFileSink(tmp_path)

        path = sink.write_batch("properties", [{"property_id": "p-1", "share": Decimal("0.5")}])

        assert path == tmp_path / "properties.json"
        assert json.loads(path.read_text(encoding="utf-8")) == [
            {"property_id": "p-1", "share": "0.5"}
        ]
        assert sink.counts == {"properties": 1}

    def test_write_batch_replaces_file(self, tmp_path: Path) -> None:
        sink = JsonFileSink(tmp_path)
        sink.write_batch("evidence", [{"id": 1}, {"id": 2}])

        path = sink.write_batch("evidence", [{"id": 3}])

        assert len(json.loads(path.read_text(encoding="utf-8"))) == 1

    def test_write_batch_pretty(self, tmp_path: Path) -> None:
        path = JsonFileSink(tmp_path, pretty=True).write_batch("workpapers", [{"a": 1}])

        assert "\n" in path.read_text(encoding="utf-8")

    def test_write_report(self, tmp_path: Path) -> None:
        totals = PortfolioTotals(tax_year="2025/2026", property_count=3, total_income=Decimal("1500"))

        path = JsonFileSink(tmp_path).write_report("portfolio_totals", totals)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["tax_year"] == "2025/2026"
        assert data["property_count"] == 3
        assert data["total_income"] == "1500"

    def test_publish_appends_lines(self, tmp_path: Path, activity: Activity) -> None:
        sink = JsonFileSink(tmp_path)

        sink.publish(activity)
        sink.publish(activity)

        lines = (tmp_path / JsonFileSink.ACTIVITY_LOG).read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0])["action_type"] == "StatusChange"
        assert sink.counts[JsonFileSink.ACTIVITY_LOG] == 2

    def test_write_failure_raises_sink_error(self, tmp_path: Path) -> None:
        sink = JsonFileSink(tmp_path)
        (tmp_path / "properties.json").mkdir()

        with pytest.raises(SinkError):
            sink.write_batch("properties", [])


class TestConsoleSink:
    """Tests for ConsoleSink."""

    def test_init_default(self) -> None:
        sink = ConsoleSink()

        assert sink.pretty is True
        assert sink.max_records is None

    def test_write_batch(self, capsys: pytest.CaptureFixture) -> None:
        ConsoleSink(pretty=False).write_batch("properties", [{"property_id": "p-1"}])

        captured = capsys.readouterr()
        assert "Entity: properties (1 records)" in captured.out
        assert '"property_id": "p-1"' in captured.out

    def test_write_batch_with_max_records(self, capsys: pytest.CaptureFixture) -> None:
        ConsoleSink(max_records=2).write_batch("evidence", [{"id": i} for i in range(5)])

        assert "... and 3 more records" in capsys.readouterr().out

    def test_write_report(self, capsys: pytest.CaptureFixture) -> None:
        ConsoleSink().write_report("portfolio_totals", PortfolioTotals(tax_year="2025/2026"))

        output = capsys.readouterr().out
        assert "portfolio_totals:" in output
        assert '"tax_year": "2025/2026"' in output

    def test_publish(self, capsys: pytest.CaptureFixture, activity: Activity) -> None:
        ConsoleSink().publish(activity)

        assert (
            "[2025-06-01T09:00:00+00:00] wp-001 StatusChange by user-001 "
            "InProgress -> ReadyToReview"
        ) in capsys.readouterr().out

    def test_close(self, capsys: pytest.CaptureFixture) -> None:
        sink = ConsoleSink()
        sink.write_batch("properties", [{"a": 1}])
        sink.write_batch("properties", [{"a": 2}])
        capsys.readouterr()

        sink.close()

        output = capsys.readouterr().out
        assert "Console Sink Summary" in output
        assert "properties: 2 records" in output


class TestActivityEvents:
    """Tests for activity event envelopes."""

    @pytest.mark.parametrize(
        "action_type,expected",
        [
            (ActivityType.CREATED, "workpaper.created"),
            (ActivityType.STATUS_CHANGE, "workpaper.status_change"),
            (ActivityType.LINKED_EVIDENCE, "workpaper.linked_evidence"),
        ],
    )
    def test_event_type_for(self, activity: Activity, action_type: ActivityType, expected: str) -> None:
        activity = Activity(
            activity_id="a",
            workpaper_id="wp",
            user_id="u",
            action_type=action_type,
            timestamp=activity.timestamp,
        )

        assert event_type_for(activity) == expected

    def test_activity_event(self, activity: Activity) -> None:
        event = activity_event(activity)

        assert event.source == EVENT_SOURCE
        assert event.subject == "wp-001"
        assert event.event_time == activity.timestamp
        assert event.data["new_value"] == "ReadyToReview"
        assert event.metadata == {"user_id": "user-001"}


class TestProducerStats:
    """Tests for ProducerStats."""

    def test_success_rate(self) -> None:
        assert ProducerStats(delivered=3, failed=1).success_rate == 0.75

    def test_success_rate_empty(self) -> None:
        assert ProducerStats().success_rate == 0.0


class TestKafkaActivitySink:
    """Tests for KafkaActivitySink with a mocked producer."""

    @patch("rental_workpaper.sinks.kafka.Producer")
    def test_init_with_string(self, mock_producer_class: MagicMock) -> None:
        sink = KafkaActivitySink("kafka:9092")

        mock_producer_class.assert_called_once()
        assert mock_producer_class.call_args[0][0]["bootstrap.servers"] == "kafka:9092"
        assert sink.topic == "rental.workpaper-activities"

    @patch("rental_workpaper.sinks.kafka.Producer")
    def test_init_with_config(self, mock_producer_class: MagicMock) -> None:
        sink = KafkaActivitySink(KafkaConfig(activity_topic="custom.activities"))

        assert sink.topic == "custom.activities"

    @patch("rental_workpaper.sinks.kafka.Producer")
    def test_publish(self, mock_producer_class: MagicMock, activity: Activity) -> None:
        mock_producer = MagicMock()
        mock_producer_class.return_value = mock_producer
        sink = KafkaActivitySink("localhost:9092")

        sink.publish(activity)

        kwargs = mock_producer.produce.call_args.kwargs
        assert kwargs["topic"] == "rental.workpaper-activities"
        assert kwargs["key"] == b"wp-001"
        payload = json.loads(kwargs["value"].decode("utf-8"))
        assert payload["event_type"] == "workpaper.status_change"
        assert payload["data"]["activity_id"] == "act-001"
        mock_producer.poll.assert_called_once_with(0)
        assert sink.stats.sent == 1

    @patch("rental_workpaper.sinks.kafka.Producer")
    def test_publish_buffer_full(self, mock_producer_class: MagicMock, activity: Activity) -> None:
        mock_producer = MagicMock()
        mock_producer.produce.side_effect = BufferError("queue full")
        mock_producer_class.return_value = mock_producer
        sink = KafkaActivitySink("localhost:9092")

        sink.publish(activity)

        assert sink.stats.failed == 1
        assert sink.stats.sent == 0
        mock_producer.poll.assert_not_called()

    @patch("rental_workpaper.sinks.kafka.Producer")
    def test_publish_kafka_exception(self, mock_producer_class: MagicMock, activity: Activity) -> None:
        mock_producer = MagicMock()
        mock_producer.produce.side_effect = KafkaException("broker down")
        mock_producer_class.return_value = mock_producer
        sink = KafkaActivitySink("localhost:9092")

        sink.publish(activity)

        assert sink.stats.failed == 1

    @patch("rental_workpaper.sinks.kafka.Producer")
    def test_delivery_callback_success(self, mock_producer_class: MagicMock) -> None:
        sink = KafkaActivitySink("localhost:9092")
        msg = MagicMock()
        msg.topic.return_value = "rental.workpaper-activities"
        msg.partition.return_value = 0
        msg.offset.return_value = 12

        sink._delivery_callback(None, msg)

        assert sink.stats.delivered == 1

    @patch("rental_workpaper.sinks.kafka.Producer")
    def test_delivery_callback_failure(self, mock_producer_class: MagicMock) -> None:
        sink = KafkaActivitySink("localhost:9092")

        sink._delivery_callback("delivery failed", None)

        assert sink.stats.failed == 1

    @patch("rental_workpaper.sinks.kafka.Producer")
    def test_flush(self, mock_producer_class: MagicMock) -> None:
        mock_producer = MagicMock()
        mock_producer.flush.return_value = 0
        mock_producer_class.return_value = mock_producer
        sink = KafkaActivitySink("localhost:9092")

        assert sink.flush(timeout=5.0) == 0
        mock_producer.flush.assert_called_once_with(5.0)

    @patch("rental_workpaper.sinks.kafka.Producer")
    def test_close(self, mock_producer_class: MagicMock) -> None:
        mock_producer = MagicMock()
        mock_producer.flush.return_value = 2
        mock_producer_class.return_value = mock_producer
        sink = KafkaActivitySink("localhost:9092")

        sink.close()

        mock_producer.flush.assert_called_once()
