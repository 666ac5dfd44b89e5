"""Kafka sink streaming workpaper activities as events."""

import json
import logging
import re
import uuid
from dataclasses import dataclass
from typing import Any

from confluent_kafka import KafkaException, Producer

from rental_workpaper.config import KafkaConfig
from rental_workpaper.models.base import Event
from rental_workpaper.models.rental import Activity
from rental_workpaper.sinks.serialization import to_dict

logger = logging.getLogger(__name__)

EVENT_SOURCE = "rental-workpaper"


def event_type_for(activity: Activity) -> str:
    """``StatusChange`` -> ``workpaper.status_change``."""
    action = re.sub(r"(?<!^)([A-Z])", r"_\1", activity.action_type.value).lower()
    return f"workpaper.{action}"


def activity_event(activity: Activity) -> Event:
    """Wrap an activity in the standard event envelope."""
    return Event(
        event_id=str(uuid.uuid4()),
        event_type=event_type_for(activity),
        event_time=activity.timestamp,
        source=EVENT_SOURCE,
        subject=activity.workpaper_id,
        data=to_dict(activity),
        metadata={"user_id": activity.user_id},
    )


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class KafkaActivitySink:
    """Publish every appended activity to a Kafka topic.

    Messages are keyed by workpaper id so a workpaper's history stays in
    order within its partition. Publishing failures are logged and counted;
    they never reach the store operation that produced the activity.
    """

    def __init__(self, config: KafkaConfig | str) -> None:
        """Initialize Kafka activity sink.

        Parameters
        ----------
        config : KafkaConfig | str
            Kafka configuration or bootstrap servers string.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config, enabled=True)

        self.config = config
        self.topic = config.activity_topic
        self.producer = Producer(config.to_dict())
        self.stats = ProducerStats()

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.warning("Activity delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def publish(self, activity: Activity) -> None:
        """Send one activity event without waiting for delivery."""
        value = json.dumps(to_dict(activity_event(activity)), ensure_ascii=False, default=str)
        try:
            self.producer.produce(
                topic=self.topic,
                key=activity.workpaper_id.encode("utf-8"),
                value=value.encode("utf-8"),
                callback=self._delivery_callback,
            )
        except (BufferError, KafkaException) as e:
            self.stats.failed += 1
            logger.warning(
                "Could not queue activity %s: %s", activity.activity_id, e,
                extra={"workpaper_id": activity.workpaper_id},
            )
            return
        self.stats.sent += 1
        self.producer.poll(0)

    def flush(self, timeout: float = 30.0) -> int:
        """Flush pending messages; returns the number still queued."""
        return self.producer.flush(timeout)

    def close(self) -> None:
        """Flush and close the producer."""
        remaining = self.flush()
        if remaining:
            logger.warning("%d activity message(s) not delivered", remaining)
        logger.info(
            "Kafka activity sink closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
