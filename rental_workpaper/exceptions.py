"""Custom exception hierarchy for rental-workpaper."""


class RentalWorkpaperError(Exception):
    """Base exception for all rental-workpaper errors."""


class StoreError(RentalWorkpaperError):
    """Raised when a storage backend cannot read or write a collection."""


class InvalidTransitionError(RentalWorkpaperError):
    """Raised when a workpaper status transition is not allowed."""

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Transition {current} -> {target} is not allowed")


class ConfigurationError(RentalWorkpaperError):
    """Raised when configuration is invalid or missing."""


class SinkError(RentalWorkpaperError):
    """Raised when a sink operation fails."""
