"""Check-in contracts."""

from __future__ import annotations

from datetime import date as dt_date
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from goalpilot.contracts.goal import Goal, Step


class CheckInSource(StrEnum):
    CHECKIN = "checkin"
    EXPRESS = "express"
    MODAL = "modal"


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def confidence(self) -> int:
        return {"easy": 5, "medium": 3, "hard": 1}[self.value]


class CheckInRecord(BaseModel):
    id: str = ""
    user_id: str
    goal_id: str
    step_id: str | None = None
    date: dt_date
    reflection: str = ""
    minutes_spent: int = 0
    # None only for legacy rows stored without a rating.
    confidence: int | None = Field(default=None, ge=1, le=5)
    completed: bool | None = None
    source: CheckInSource = CheckInSource.CHECKIN
    difficulty_rating: Difficulty | None = None
    created_at: datetime | None = None


class CheckInResponse(BaseModel):
    step_id: str
    completed: bool
    confidence: int = Field(ge=1, le=5)
    blockers: str | None = None
    needs_help: bool = False
    reflection: str | None = None
    minutes_spent: int | None = Field(default=None, ge=0)


class CheckInPrompt(BaseModel):
    id: str
    step: Step
    goal: Goal
    days_past_due: int
    is_urgent: bool


class FeedbackAdjustments(BaseModel):
    extend_due_date: bool = False
    break_down_step: bool = False
    add_scaffolding: bool = False

    @property
    def requested(self) -> bool:
        return self.extend_due_date or self.break_down_step or self.add_scaffolding


class CheckInFeedback(BaseModel):
    encouragement: str
    suggestions: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)
    adjustments: FeedbackAdjustments = Field(default_factory=FeedbackAdjustments)
    advisor_message: str | None = None


class CheckInResult(BaseModel):
    check_in_id: str
    feedback: CheckInFeedback
    step: Step
    goal: Goal
    extension_days: int | None = None


class ExpressCheckInResult(BaseModel):
    id: str
    points: int
