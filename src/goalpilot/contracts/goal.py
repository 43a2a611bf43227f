"""Goal and step contracts."""

from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

_LEGACY_STEP_STATUSES = {
    "not_started": "todo",
    "in_progress": "doing",
}


class GoalStatus(StrEnum):
    PLANNED = "planned"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class StepStatus(StrEnum):
    TODO = "todo"
    DOING = "doing"
    DONE = "done"
    SKIPPED = "skipped"

    @property
    def is_closed(self) -> bool:
        return self in (StepStatus.DONE, StepStatus.SKIPPED)


def coerce_optional_date(value: Any) -> Any:
    """Normalize backend date payloads.

    A blank string means "unset" and becomes ``None``; a timestamp keeps only
    its calendar date.  Anything else is left for pydantic to parse.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        if "T" in stripped or " " in stripped:
            return stripped[:10]
        return stripped
    return value


class Goal(BaseModel):
    id: str
    owner_id: str = ""
    title: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    start_date: date | None = None
    due_date: date | None = None
    status: GoalStatus = GoalStatus.PLANNED

    @field_validator("start_date", "due_date", mode="before")
    @classmethod
    def _normalize_dates(cls, value: Any) -> Any:
        return coerce_optional_date(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: Any) -> Any:
        return value if value is not None else []


class Step(BaseModel):
    id: str
    goal_id: str
    title: str = ""
    order_index: int = 0
    due_date: date | None = None
    status: StepStatus = StepStatus.TODO
    dependency_step_ids: list[str] = Field(default_factory=list)
    estimated_effort_min: int | None = Field(default=None, gt=0)
    is_required: bool = False
    points_awarded: int | None = None

    @field_validator("due_date", mode="before")
    @classmethod
    def _normalize_due_date(cls, value: Any) -> Any:
        return coerce_optional_date(value)

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _LEGACY_STEP_STATUSES.get(value, value)
        return value

    @field_validator("dependency_step_ids", mode="before")
    @classmethod
    def _normalize_dependencies(cls, value: Any) -> Any:
        return value if value is not None else []

    @field_validator("estimated_effort_min", mode="before")
    @classmethod
    def _normalize_effort(cls, value: Any) -> Any:
        # Backends store 0 for "no estimate".
        if value == 0:
            return None
        return value
