"""Domain models for rental property workpapers."""

from rental_workpaper.models.base import DEFAULT_ACTOR, Actor, Address, Event

__all__ = ["DEFAULT_ACTOR", "Actor", "Address", "Event"]
