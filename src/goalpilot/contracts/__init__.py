"""Contracts shared by the scheduling core and its adapters."""

from goalpilot.contracts.advisor import ScheduleAdvisor
from goalpilot.contracts.checkin import (
    CheckInFeedback,
    CheckInPrompt,
    CheckInRecord,
    CheckInResponse,
    CheckInResult,
    CheckInSource,
    Difficulty,
    ExpressCheckInResult,
    FeedbackAdjustments,
)
from goalpilot.contracts.config import AdvisorConfig, ExtensionPolicy, GoalPilotConfig
from goalpilot.contracts.goal import Goal, GoalStatus, Step, StepStatus
from goalpilot.contracts.repository import CheckInRepository, GoalRepository, StepRepository
from goalpilot.contracts.schedule import (
    AdjustmentRequest,
    AdjustmentResponse,
    AdjustmentType,
    AdvisoryAdvice,
    Cadence,
    DependencyResolution,
    ExtensionOutcome,
    Frequency,
    MilestoneGroup,
    ScheduleResult,
    UpcomingMilestone,
)

__all__ = [
    "AdjustmentRequest",
    "AdjustmentResponse",
    "AdjustmentType",
    "AdvisorConfig",
    "AdvisoryAdvice",
    "Cadence",
    "CheckInFeedback",
    "CheckInPrompt",
    "CheckInRecord",
    "CheckInRepository",
    "CheckInResponse",
    "CheckInResult",
    "CheckInSource",
    "DependencyResolution",
    "Difficulty",
    "ExpressCheckInResult",
    "ExtensionOutcome",
    "ExtensionPolicy",
    "FeedbackAdjustments",
    "Frequency",
    "Goal",
    "GoalPilotConfig",
    "GoalRepository",
    "GoalStatus",
    "MilestoneGroup",
    "ScheduleAdvisor",
    "ScheduleResult",
    "Step",
    "StepRepository",
    "StepStatus",
    "UpcomingMilestone",
]
