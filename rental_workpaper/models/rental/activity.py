"""Audit trail entries for workpapers."""

from dataclasses import dataclass
from datetime import datetime

from rental_workpaper.models.rental.enums import ActivityType


@dataclass(frozen=True)
class Activity:
    """Immutable audit entry; old/new values are stringified."""

    activity_id: str
    workpaper_id: str
    user_id: str
    action_type: ActivityType
    timestamp: datetime
    field_name: str | None = None
    old_value: str | None = None
    new_value: str | None = None
