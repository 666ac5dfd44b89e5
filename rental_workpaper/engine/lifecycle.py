"""Workpaper status lifecycle.

Statuses move forward one step at a time::

    NotStarted -> InProgress -> ReadyToReview -> Complete -> Locked

The only backward move is ReadyToReview -> InProgress, used when a reviewer
sends the workpaper back for correction. Locked is terminal.
"""

from __future__ import annotations

from typing import Any, Iterable

from rental_workpaper.exceptions import InvalidTransitionError
from rental_workpaper.models.coercion import to_enum
from rental_workpaper.models.rental.enums import STATUS_ORDER, WorkpaperStatus

Transition = tuple[WorkpaperStatus, WorkpaperStatus]

ALLOWED_TRANSITIONS: frozenset[Transition] = frozenset(
    {
        (WorkpaperStatus.NOT_STARTED, WorkpaperStatus.IN_PROGRESS),
        (WorkpaperStatus.IN_PROGRESS, WorkpaperStatus.READY_TO_REVIEW),
        (WorkpaperStatus.READY_TO_REVIEW, WorkpaperStatus.COMPLETE),
        (WorkpaperStatus.COMPLETE, WorkpaperStatus.LOCKED),
        # Sent back by the reviewer
        (WorkpaperStatus.READY_TO_REVIEW, WorkpaperStatus.IN_PROGRESS),
    }
)


def _as_status(value: Any) -> WorkpaperStatus | None:
    return to_enum(WorkpaperStatus, value, None)


class StatusLifecycle:
    """Allow-list state machine for workpaper statuses."""

    def __init__(self, allowed: Iterable[Transition] = ALLOWED_TRANSITIONS) -> None:
        self.allowed = frozenset(allowed)

    def can_transition(self, current: Any, target: Any) -> bool:
        """Return True if ``current -> target`` is on the allow-list."""
        return (_as_status(current), _as_status(target)) in self.allowed

    def validate(self, current: Any, target: Any) -> WorkpaperStatus:
        """Return the target status, or raise if the move is not allowed.

        Raises
        ------
        InvalidTransitionError
            For backward, same-state and unknown-status moves.
        """
        if not self.can_transition(current, target):
            raise InvalidTransitionError(str(_value(current)), str(_value(target)))
        return _as_status(target)

    def allowed_targets(self, current: Any) -> list[WorkpaperStatus]:
        """Statuses reachable from ``current`` in lifecycle order."""
        status = _as_status(current)
        return [target for target in STATUS_ORDER if (status, target) in self.allowed]

    def is_terminal(self, status: Any) -> bool:
        return not self.allowed_targets(status)


def _value(status: Any) -> Any:
    return status.value if isinstance(status, WorkpaperStatus) else status
