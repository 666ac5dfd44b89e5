"""Rental record store: properties, workpapers, evidence and their audit trail."""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, Protocol

from rental_workpaper.engine.settings import SettingsProvider
from rental_workpaper.exceptions import SinkError
from rental_workpaper.formatting import format_currency
from rental_workpaper.models.base import DEFAULT_ACTOR, Actor
from rental_workpaper.models.coercion import to_amount, to_enum, to_flag, to_int
from rental_workpaper.models.rental import (
    DEFAULT_TAX_SETTINGS,
    Activity,
    ActivityType,
    Evidence,
    ExpenseCategory,
    ExpenseLine,
    Property,
    TaxSettings,
    Workpaper,
    WorkpaperStatus,
)
from rental_workpaper.sinks.serialization import to_dict
from rental_workpaper.store.backends import InMemoryBackend, JsonFileBackend, StorageBackend
from rental_workpaper.store.codecs import (
    activity_from_dict,
    evidence_from_dict,
    expense_line_from_dict,
    property_from_dict,
    workpaper_from_dict,
)
from rental_workpaper.store.repositories import Repository, SettingsRepository

if TYPE_CHECKING:
    from rental_workpaper.config import RentalConfig

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = ("address_line1", "address_line2", "suburb", "city", "postcode", "country")

PROPERTY_FIELDS = (
    "display_name",
    "property_type",
    "ownership_percentage",
    "acquisition_date",
    "disposal_date",
    "is_main_home",
    "is_new_build",
    "is_active",
)

WORKPAPER_INPUT_FIELDS = (
    "gross_rental_income",
    "days_rented",
    "days_available",
    "days_private",
    "mixed_use",
    "current_owner_user_id",
)

EXPENSE_LINE_FIELDS = (
    "category",
    "description",
    "amount",
    "is_capital",
    "is_apportionable",
    "evidence_ids",
    "notes",
)


class ActivitySink(Protocol):
    """Receives every activity appended to the audit trail."""

    def publish(self, activity: Activity) -> None: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def _describe_line(line: ExpenseLine) -> str:
    return f"{line.category.value}: {format_currency(line.amount)}"


def _pick(data: dict[str, Any], allowed: tuple[str, ...]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if key in allowed}


class RentalDataStore:
    """Record store for the rental workpaper domain.

    Wraps one repository per collection and implements the create, update
    and delete operations together with their activity entries. Unknown
    identifiers yield ``None`` (or an empty list) rather than raising.

    Parameters
    ----------
    backend : StorageBackend | None
        Storage for all collections; in-memory when omitted.
    tax_defaults : TaxSettings
        Settings used where nothing is stored.
    activity_sink : ActivitySink | None
        Optional receiver of every appended activity.
    clock : Callable[[], datetime] | None
        Source of timestamps; UTC now when omitted.
    """

    def __init__(
        self,
        backend: StorageBackend | None = None,
        tax_defaults: TaxSettings = DEFAULT_TAX_SETTINGS,
        activity_sink: ActivitySink | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.backend = backend if backend is not None else InMemoryBackend()
        self.properties: Repository[Property] = Repository(
            self.backend, "properties", "property_id", property_from_dict
        )
        self.workpapers: Repository[Workpaper] = Repository(
            self.backend, "workpapers", "workpaper_id", workpaper_from_dict, "property_id"
        )
        self.evidence: Repository[Evidence] = Repository(
            self.backend, "evidence", "evidence_id", evidence_from_dict, "workpaper_id"
        )
        self.activities: Repository[Activity] = Repository(
            self.backend, "activities", "activity_id", activity_from_dict, "workpaper_id"
        )
        self.settings = SettingsProvider(SettingsRepository(self.backend), defaults=tax_defaults)
        self.activity_sink = activity_sink
        self._clock = clock or _utcnow

    @classmethod
    def from_config(
        cls,
        config: RentalConfig,
        activity_sink: ActivitySink | None = None,
    ) -> RentalDataStore:
        """Build a store from configuration.

        Uses a JSON file backend when ``config.store.backend == "json"`` and
        publishes activities to Kafka when ``config.kafka.enabled``.
        """
        if config.store.backend == "json":
            backend: StorageBackend = JsonFileBackend(
                config.store.data_dir, pretty=config.store.pretty_json
            )
        else:
            backend = InMemoryBackend()

        if activity_sink is None and config.kafka.enabled:
            from rental_workpaper.sinks.kafka import KafkaActivitySink

            activity_sink = KafkaActivitySink(config.kafka)

        return cls(backend=backend, tax_defaults=config.tax_settings, activity_sink=activity_sink)

    # Settings
    def load_settings(self) -> TaxSettings:
        return self.settings.load()

    def save_settings(self, settings: TaxSettings) -> bool:
        return self.settings.save(settings)

    @property
    def current_tax_year(self) -> str:
        return self.settings.current_tax_year

    # Properties
    def create_property(
        self,
        data: dict[str, Any] | None = None,
        actor: Actor = DEFAULT_ACTOR,
    ) -> Property | None:
        """Create a property and its workpaper for the current tax year."""
        data = data or {}
        record = _pick(data, PROPERTY_FIELDS)
        record["property_id"] = _new_id()
        record["address"] = self._merge_address({}, data)
        record["created_at"] = self._clock()
        prop = self.properties.insert(property_from_dict(record))
        if prop is None:
            return None

        logger.info(
            "Property created: %s (%s)", prop.property_id, prop.display_name,
            extra={"property_id": prop.property_id, "actor": actor.user_id},
        )
        self.create_workpaper(prop.property_id, actor=actor)
        return prop

    def get_property(self, property_id: str) -> Property | None:
        return self.properties.get(property_id)

    def list_properties(self, active_only: bool = False) -> list[Property]:
        properties = self.properties.all()
        if active_only:
            return [prop for prop in properties if prop.is_active]
        return properties

    def update_property(
        self,
        property_id: str,
        changes: dict[str, Any],
        actor: Actor = DEFAULT_ACTOR,
    ) -> Property | None:
        """Merge ``changes`` into a property; ``None`` if it does not exist."""
        existing = self.properties.get(property_id)
        if existing is None:
            return None

        record = to_dict(existing)
        record.update(_pick(changes, PROPERTY_FIELDS))
        record["address"] = self._merge_address(record["address"], changes)
        updated = self.properties.update(property_from_dict(record))
        if updated is not None:
            logger.debug("Property %s updated by %s", property_id, actor.user_id)
        return updated

    def deactivate_property(
        self, property_id: str, actor: Actor = DEFAULT_ACTOR
    ) -> Property | None:
        """Soft-delete a property by clearing its active flag."""
        return self.update_property(property_id, {"is_active": False}, actor=actor)

    def delete_property(self, property_id: str, actor: Actor = DEFAULT_ACTOR) -> bool:
        """Remove a property and every workpaper belonging to it."""
        removed = self.properties.delete(property_id)
        if removed is None:
            return False
        count = self.workpapers.delete_by_parent(property_id)
        logger.info(
            "Property %s deleted by %s with %d workpaper(s)", property_id, actor.user_id, count
        )
        return True

    @staticmethod
    def _merge_address(current: dict[str, Any], data: dict[str, Any]) -> dict[str, Any]:
        merged = dict(current)
        address = data.get("address")
        if address is not None:
            merged.update(address if isinstance(address, dict) else to_dict(address))
        merged.update(_pick(data, ADDRESS_FIELDS))
        return merged

    # Workpapers
    def create_workpaper(
        self,
        property_id: str,
        actor: Actor = DEFAULT_ACTOR,
        tax_year: str | None = None,
    ) -> Workpaper | None:
        """Create the workpaper for (property, year), or return the existing one."""
        if self.properties.get(property_id) is None:
            return None

        tax_year = tax_year or self.current_tax_year
        existing = self.get_workpaper_for_property(property_id, tax_year)
        if existing is not None:
            return existing

        now = self._clock()
        workpaper = self.workpapers.insert(
            Workpaper(
                workpaper_id=_new_id(),
                property_id=property_id,
                tax_year=tax_year,
                created_by=actor.user_id,
                last_modified_by=actor.user_id,
                current_owner_user_id=actor.user_id,
                created_at=now,
                updated_at=now,
            )
        )
        if workpaper is None:
            return None

        self.log_activity(
            workpaper.workpaper_id,
            ActivityType.CREATED,
            actor,
            field_name="status",
            new_value=WorkpaperStatus.NOT_STARTED.value,
        )
        return workpaper

    def get_workpaper(self, workpaper_id: str) -> Workpaper | None:
        return self.workpapers.get(workpaper_id)

    def get_workpaper_for_property(
        self, property_id: str, tax_year: str | None = None
    ) -> Workpaper | None:
        """Return the property's workpaper for ``tax_year`` (default: current year)."""
        tax_year = tax_year or self.current_tax_year
        for workpaper in self.workpapers.list_by_parent(property_id):
            if workpaper.tax_year == tax_year:
                return workpaper
        return None

    def list_workpapers(self, tax_year: str | None = None) -> list[Workpaper]:
        workpapers = self.workpapers.all()
        if tax_year is None:
            return workpapers
        return [wp for wp in workpapers if wp.tax_year == tax_year]

    def update_workpaper(
        self,
        workpaper_id: str,
        changes: dict[str, Any],
        actor: Actor = DEFAULT_ACTOR,
    ) -> Workpaper | None:
        """Merge raw input changes into a workpaper.

        Only income, day counts, the mixed-use flag and the current owner can
        be changed here; status moves through the lifecycle and derived
        amounts through the calculation engine.
        """
        existing = self.workpapers.get(workpaper_id)
        if existing is None:
            return None

        ignored = sorted(set(changes) - set(WORKPAPER_INPUT_FIELDS))
        if ignored:
            logger.debug("Ignoring non-input workpaper fields: %s", ", ".join(ignored))

        record = to_dict(existing)
        record.update(_pick(changes, WORKPAPER_INPUT_FIELDS))
        return self.save_workpaper(workpaper_from_dict(record), actor=actor)

    def save_workpaper(
        self, workpaper: Workpaper, actor: Actor = DEFAULT_ACTOR
    ) -> Workpaper | None:
        """Persist a workpaper as-is, stamping the modifier and update time."""
        stamped = replace(workpaper, last_modified_by=actor.user_id, updated_at=self._clock())
        return self.workpapers.update(stamped)

    # Expense lines
    def add_expense_line(
        self,
        workpaper_id: str,
        data: dict[str, Any],
        actor: Actor = DEFAULT_ACTOR,
    ) -> ExpenseLine | None:
        workpaper = self.workpapers.get(workpaper_id)
        if workpaper is None:
            return None

        line = ExpenseLine(
            line_id=_new_id(),
            category=to_enum(ExpenseCategory, data.get("category"), ExpenseCategory.OTHER),
            amount=to_amount(data.get("amount")),
            description=data.get("description") or "",
            is_capital=to_flag(data.get("is_capital", False)),
            is_apportionable=to_flag(data.get("is_apportionable", True)),
            evidence_ids=list(data.get("evidence_ids") or []),
            notes=data.get("notes") or "",
        )
        workpaper.expense_lines.append(line)
        if self.save_workpaper(workpaper, actor=actor) is None:
            return None

        self.log_activity(
            workpaper_id,
            ActivityType.ADDED_EXPENSE,
            actor,
            field_name="expenseLine",
            new_value=_describe_line(line),
        )
        return line

    def update_expense_line(
        self,
        workpaper_id: str,
        line_id: str,
        changes: dict[str, Any],
        actor: Actor = DEFAULT_ACTOR,
    ) -> ExpenseLine | None:
        workpaper = self.workpapers.get(workpaper_id)
        if workpaper is None:
            return None
        old = workpaper.find_line(line_id)
        if old is None:
            return None

        record = to_dict(old)
        record.update(_pick(changes, EXPENSE_LINE_FIELDS))
        updated = expense_line_from_dict(record)
        workpaper.expense_lines = [
            updated if line.line_id == line_id else line for line in workpaper.expense_lines
        ]
        if self.save_workpaper(workpaper, actor=actor) is None:
            return None

        self.log_activity(
            workpaper_id,
            ActivityType.UPDATED_EXPENSE,
            actor,
            field_name="expenseLine",
            old_value=_describe_line(old),
            new_value=_describe_line(updated),
        )
        return updated

    def remove_expense_line(
        self,
        workpaper_id: str,
        line_id: str,
        actor: Actor = DEFAULT_ACTOR,
    ) -> ExpenseLine | None:
        """Remove a line and return it; ``None`` if either id is unknown."""
        workpaper = self.workpapers.get(workpaper_id)
        if workpaper is None:
            return None
        line = workpaper.find_line(line_id)
        if line is None:
            return None

        workpaper.expense_lines = [l for l in workpaper.expense_lines if l.line_id != line_id]
        if self.save_workpaper(workpaper, actor=actor) is None:
            return None

        self.log_activity(
            workpaper_id,
            ActivityType.REMOVED_EXPENSE,
            actor,
            field_name="expenseLine",
            old_value=_describe_line(line),
        )
        return line

    def link_evidence(
        self,
        workpaper_id: str,
        line_id: str,
        evidence_id: str,
        actor: Actor = DEFAULT_ACTOR,
    ) -> ExpenseLine | None:
        """Cite an existing evidence record from an expense line."""
        workpaper = self.workpapers.get(workpaper_id)
        evidence = self.evidence.get(evidence_id)
        if workpaper is None or evidence is None:
            return None
        line = workpaper.find_line(line_id)
        if line is None:
            return None
        if evidence_id in line.evidence_ids:
            return line

        line.evidence_ids.append(evidence_id)
        if self.save_workpaper(workpaper, actor=actor) is None:
            return None

        self.log_activity(
            workpaper_id,
            ActivityType.LINKED_EVIDENCE,
            actor,
            field_name="evidenceIds",
            old_value=_describe_line(line),
            new_value=evidence.file_name,
        )
        return line

    # Evidence
    def add_evidence(
        self,
        workpaper_id: str,
        data: dict[str, Any],
        actor: Actor = DEFAULT_ACTOR,
    ) -> Evidence | None:
        if self.workpapers.get(workpaper_id) is None:
            return None

        evidence = self.evidence.insert(
            Evidence(
                evidence_id=_new_id(),
                workpaper_id=workpaper_id,
                file_name=data.get("file_name") or "untitled",
                content_type=data.get("content_type") or "application/octet-stream",
                size_bytes=to_int(data.get("size_bytes")),
                uploaded_at=self._clock(),
                uploaded_by=actor.user_id,
            )
        )
        if evidence is None:
            return None

        self.log_activity(
            workpaper_id,
            ActivityType.ADDED_EVIDENCE,
            actor,
            field_name="evidence",
            new_value=evidence.file_name,
        )
        return evidence

    def remove_evidence(self, evidence_id: str, actor: Actor = DEFAULT_ACTOR) -> Evidence | None:
        """Delete an evidence record; lines citing it keep the dangling id."""
        evidence = self.evidence.delete(evidence_id)
        if evidence is None:
            return None

        self.log_activity(
            evidence.workpaper_id,
            ActivityType.REMOVED_EVIDENCE,
            actor,
            field_name="evidence",
            old_value=evidence.file_name,
        )
        return evidence

    def evidence_for(self, workpaper: Workpaper) -> list[Evidence]:
        """Evidence owned by the workpaper or cited by any of its lines."""
        cited = {
            evidence_id for line in workpaper.expense_lines for evidence_id in line.evidence_ids
        }
        return self.evidence.find(
            lambda e: e.workpaper_id == workpaper.workpaper_id or e.evidence_id in cited
        )

    def get_evidence_for_workpaper(self, workpaper_id: str) -> list[Evidence]:
        workpaper = self.workpapers.get(workpaper_id)
        if workpaper is None:
            return []
        return self.evidence_for(workpaper)

    # Activities
    def log_activity(
        self,
        workpaper_id: str,
        action_type: ActivityType,
        actor: Actor = DEFAULT_ACTOR,
        field_name: str | None = None,
        old_value: Any = None,
        new_value: Any = None,
    ) -> Activity | None:
        """Append an audit entry; values are stored as strings."""
        activity = self.activities.insert(
            Activity(
                activity_id=_new_id(),
                workpaper_id=workpaper_id,
                user_id=actor.user_id,
                action_type=action_type,
                timestamp=self._clock(),
                field_name=field_name,
                old_value=None if old_value is None else str(old_value),
                new_value=None if new_value is None else str(new_value),
            )
        )
        if activity is not None and self.activity_sink is not None:
            try:
                self.activity_sink.publish(activity)
            except SinkError as e:
                logger.error("Failed to publish activity %s: %s", activity.activity_id, e)
        return activity

    def get_activities_for_workpaper(self, workpaper_id: str) -> list[Activity]:
        """Activities for a workpaper, newest first."""
        indexed = list(enumerate(self.activities.list_by_parent(workpaper_id)))
        indexed.sort(key=lambda pair: (pair[1].timestamp, pair[0]), reverse=True)
        return [activity for _, activity in indexed]

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "properties": self.properties.count(),
            "workpapers": self.workpapers.count(),
            "evidence": self.evidence.count(),
            "activities": self.activities.count(),
        }
