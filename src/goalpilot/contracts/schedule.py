"""Scheduling contracts: cadence, milestones, resolution and adjustment payloads."""

from __future__ import annotations

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field

from goalpilot.contracts.goal import Step


class Frequency(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class Cadence(BaseModel):
    frequency: Frequency
    interval_days: int = Field(ge=1)
    start_date: date
    duration_label: str | None = None


class MilestoneGroup(BaseModel):
    """Presentation-level window of consecutive steps.

    ``due_date`` is the due date of the last step in the window and stays
    ``None`` while that step is unscheduled.
    """

    id: str
    title: str
    steps: list[Step]
    due_date: date | None = None


class UpcomingMilestone(BaseModel):
    goal_id: str
    milestone: MilestoneGroup


class DependencyResolution(BaseModel):
    ordered: list[Step]
    fallback_used: bool = False
    unresolved_ids: list[str] = Field(default_factory=list)
    ignored_edges: list[tuple[str, str]] = Field(default_factory=list)


class ScheduleResult(BaseModel):
    goal_id: str
    cadence: Cadence | None = None
    steps: list[Step] = Field(default_factory=list)
    fallback_used: bool = False


class AdjustmentType(StrEnum):
    NEED_MORE_TIME = "need_more_time"
    CHANGE_FREQUENCY = "change_frequency"
    RESCHEDULE_MILESTONE = "reschedule_milestone"


class AdjustmentRequest(BaseModel):
    type: AdjustmentType
    goal_id: str
    step_id: str | None = None
    user_message: str
    current_due_date: date | None = None
    requested_extension: int | None = None
    new_frequency: str | None = None


class AdvisoryAdvice(BaseModel):
    message: str


class AdjustmentResponse(BaseModel):
    success: bool
    message: str
    new_due_date: date | None = None
    affected_steps: int = 0


class ExtensionOutcome(BaseModel):
    """What a deadline extension actually wrote.

    ``new_due_date`` is ``None`` when the target step had no due date and
    nothing was changed.
    """

    step_id: str
    extension_days: int
    new_due_date: date | None = None
    shifted_step_ids: list[str] = Field(default_factory=list)

    @property
    def applied(self) -> bool:
        return self.new_due_date is not None
