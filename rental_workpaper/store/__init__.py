"""Record store and its storage backends."""

from rental_workpaper.store.backends import InMemoryBackend, JsonFileBackend, StorageBackend
from rental_workpaper.store.rental import ActivitySink, RentalDataStore
from rental_workpaper.store.repositories import Repository, SettingsRepository

__all__ = [
    "ActivitySink",
    "InMemoryBackend",
    "JsonFileBackend",
    "RentalDataStore",
    "Repository",
    "SettingsRepository",
    "StorageBackend",
]
