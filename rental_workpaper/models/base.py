"""Base models shared across the rental domain."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Address:
    """Street address of a rental property.

    Fields follow the New Zealand postal layout:
    - address_line1/address_line2: street number, street and unit
    - suburb: suburb or rural locality
    - city: town or city
    - postcode: four-digit postcode
    - country: ISO 3166-1 alpha-2 code (default: ``"NZ"``)
    """

    address_line1: str
    city: str
    address_line2: str = ""
    suburb: str = ""
    postcode: str = ""
    country: str = "NZ"


@dataclass(frozen=True)
class Actor:
    """User performing a mutating operation."""

    user_id: str
    display_name: str = ""


DEFAULT_ACTOR = Actor(user_id="default-user", display_name="Current User")


@dataclass
class Event:
    """Standard event envelope for streaming."""

    event_id: str
    event_type: str  # entity.action (e.g., workpaper.status_change)
    event_time: datetime
    source: str  # Service/system that generated
    subject: str  # Entity ID affected
    data: dict
    metadata: dict = field(default_factory=dict)
