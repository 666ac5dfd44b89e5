"""Configuration management for rental-workpaper."""

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

from rental_workpaper.exceptions import ConfigurationError
from rental_workpaper.models.base import DEFAULT_ACTOR, Actor
from rental_workpaper.models.coercion import to_decimal
from rental_workpaper.models.rental.settings import DEFAULT_TAX_SETTINGS, TaxSettings

STORE_BACKENDS = ("memory", "json")


@dataclass
class StoreConfig:
    """Record store configuration."""

    backend: str = "memory"
    data_dir: Path = field(default_factory=lambda: Path("data"))
    pretty_json: bool = False

    def __post_init__(self) -> None:
        if self.backend not in STORE_BACKENDS:
            raise ConfigurationError(
                f"Unknown store backend {self.backend!r}; expected one of {STORE_BACKENDS}"
            )


@dataclass
class KafkaConfig:
    """Kafka producer configuration for the activity stream."""

    bootstrap_servers: str = "localhost:9092"
    activity_topic: str = "rental.workpaper-activities"
    enabled: bool = False
    acks: str = "all"
    linger_ms: int = 5
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "linger.ms": self.linger_ms,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Export configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class RentalConfig:
    """Main configuration for rental-workpaper."""

    store: StoreConfig = field(default_factory=StoreConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    tax_settings: TaxSettings = DEFAULT_TAX_SETTINGS
    actor: Actor = DEFAULT_ACTOR
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "RentalConfig":
        """Create config from environment variables."""
        import os

        store = StoreConfig(
            backend=os.getenv("RENTAL_STORE_BACKEND", "memory"),
            data_dir=Path(os.getenv("RENTAL_DATA_DIR", "data")),
            pretty_json=os.getenv("RENTAL_PRETTY_JSON", "false").lower() == "true",
        )

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            activity_topic=os.getenv("KAFKA_ACTIVITY_TOPIC", "rental.workpaper-activities"),
            enabled=os.getenv("KAFKA_ENABLED", "false").lower() == "true",
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        tax_settings = TaxSettings(
            tax_year=os.getenv("RENTAL_TAX_YEAR", DEFAULT_TAX_SETTINGS.tax_year),
            interest_deductibility_rate=_parse_rate(
                os.getenv("RENTAL_INTEREST_DEDUCTIBILITY_RATE")
            ),
        )

        actor = Actor(
            user_id=os.getenv("RENTAL_USER_ID", DEFAULT_ACTOR.user_id),
            display_name=os.getenv("RENTAL_USER_NAME", DEFAULT_ACTOR.display_name),
        )

        return cls(
            store=store,
            kafka=kafka,
            output=output,
            tax_settings=tax_settings,
            actor=actor,
            seed=int(os.getenv("SEED")) if os.getenv("SEED") else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def _parse_rate(raw: str | None) -> Decimal:
    """Parse an interest deductibility rate from the environment."""
    if raw is None or raw == "":
        return DEFAULT_TAX_SETTINGS.interest_deductibility_rate
    rate = to_decimal(raw, default=Decimal("-1"))
    if not Decimal("0") <= rate <= Decimal("1"):
        raise ConfigurationError(
            f"Interest deductibility rate must be between 0 and 1, got {raw!r}"
        )
    return rate
