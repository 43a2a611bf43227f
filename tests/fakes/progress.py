"""Schedule progress fake."""

from __future__ import annotations

from goalpilot.scheduling.progress import ScheduleProgress


class RecordingProgress(ScheduleProgress):
    """Records every lifecycle event as a tuple."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def phase_start(self, phase: str, total: int | None = None) -> None:
        self.events.append(("start", phase, total))

    def item_done(self, phase: str) -> None:
        self.events.append(("item", phase))

    def phase_done(self, phase: str) -> None:
        self.events.append(("done", phase))

    def phase_error(self, phase: str, error: BaseException) -> None:
        self.events.append(("error", phase, type(error).__name__))
