"""Exception hierarchy for goalpilot.

All goalpilot exceptions inherit from :class:`GoalPilotError`, making it easy
to catch any library error with a single ``except`` clause while still allowing
callers to handle specific failure modes.

Only identity lookups (:class:`NotFoundError`) and backend failures
(:class:`RepositoryError`) escape the scheduling core.  Missing due dates,
degenerate dependency graphs and an unavailable advisor are absorbed with a
deterministic fallback.
"""

from __future__ import annotations


class GoalPilotError(Exception):
    """Base exception for all goalpilot errors."""


class ConfigError(GoalPilotError):
    """Configuration loading or validation failure."""


class StoreLoadError(GoalPilotError):
    """A local store snapshot cannot be read, parsed or written."""


class RepositoryError(GoalPilotError):
    """A repository call failed unexpectedly."""


class AuthenticationError(RepositoryError):
    """The backend rejected the configured credentials."""


class MalformedRecordError(RepositoryError):
    """A backend row could not be mapped onto a domain model.

    Attributes:
        table: Backend table the row came from.
        record_id: Identifier of the offending row, when known.
    """

    def __init__(self, message: str, *, table: str, record_id: str | None = None) -> None:
        super().__init__(message)
        self.table = table
        self.record_id = record_id


class NotFoundError(GoalPilotError):
    """A referenced record does not exist.

    Attributes:
        record_id: The identifier that could not be resolved.
    """

    kind = "record"

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"{self.kind} not found: {record_id}")


class StepNotFoundError(NotFoundError):
    """Raised when a step id does not resolve."""

    kind = "step"


class GoalNotFoundError(NotFoundError):
    """Raised when a goal id does not resolve."""

    kind = "goal"


class CheckInNotFoundError(NotFoundError):
    """Raised when a check-in id does not resolve."""

    kind = "check-in"


class AdvisoryUnavailableError(GoalPilotError):
    """The schedule advisor timed out, errored or returned an unusable payload."""
