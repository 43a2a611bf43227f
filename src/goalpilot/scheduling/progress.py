"""Progress reporting protocol for schedule writes.

The scheduler and cascader emit phase lifecycle events around their
repository writes; consumers (e.g. the CLI's Rich progress bar) implement
``ScheduleProgress`` to render feedback.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ScheduleProgress(ABC):
    """Observer interface for schedule write progress."""

    @abstractmethod
    def phase_start(self, phase: str, total: int | None = None) -> None:
        """A write phase is starting. *total* is ``None`` for indeterminate phases."""
        ...  # pragma: no cover

    @abstractmethod
    def item_done(self, phase: str) -> None:
        """One step within *phase* has been written."""
        ...  # pragma: no cover

    @abstractmethod
    def phase_done(self, phase: str) -> None:
        """The *phase* has finished successfully."""
        ...  # pragma: no cover

    @abstractmethod
    def phase_error(self, phase: str, error: BaseException) -> None:
        """The *phase* was interrupted by *error*."""
        ...  # pragma: no cover


class NullScheduleProgress(ScheduleProgress):
    """No-op implementation used when no progress display is requested."""

    def phase_start(self, phase: str, total: int | None = None) -> None:
        pass

    def item_done(self, phase: str) -> None:
        pass

    def phase_done(self, phase: str) -> None:
        pass

    def phase_error(self, phase: str, error: BaseException) -> None:
        pass
