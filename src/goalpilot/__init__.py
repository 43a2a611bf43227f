"""Public API surface for goalpilot."""

__version__ = "0.4.0"

from goalpilot.auth import TokenResolver, create_token_resolver
from goalpilot.checkins import CheckInOrchestrator, ScheduleAdjustmentService, generate_feedback
from goalpilot.config import load_config
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
from goalpilot.contracts.exceptions import (
    AdvisoryUnavailableError,
    AuthenticationError,
    CheckInNotFoundError,
    ConfigError,
    GoalNotFoundError,
    GoalPilotError,
    MalformedRecordError,
    NotFoundError,
    RepositoryError,
    StepNotFoundError,
    StoreLoadError,
)
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
from goalpilot.repositories import InMemoryStore, create_backend
from goalpilot.scheduling import (
    AutoScheduler,
    DeadlineCascader,
    GoalLocks,
    NullScheduleProgress,
    ScheduleProgress,
    UpcomingMilestoneScanner,
    calculate_default_extension,
    group_milestones,
    parse_cadence,
    resolve_dependencies,
    resolve_order,
)
from goalpilot.sdk import GoalPilot

__all__ = [
    "AdjustmentRequest",
    "AdjustmentResponse",
    "AdjustmentType",
    "AdvisorConfig",
    "AdvisoryAdvice",
    "AdvisoryUnavailableError",
    "AuthenticationError",
    "AutoScheduler",
    "Cadence",
    "CheckInFeedback",
    "CheckInNotFoundError",
    "CheckInOrchestrator",
    "CheckInPrompt",
    "CheckInRecord",
    "CheckInRepository",
    "CheckInResponse",
    "CheckInResult",
    "CheckInSource",
    "ConfigError",
    "DeadlineCascader",
    "DependencyResolution",
    "Difficulty",
    "ExpressCheckInResult",
    "ExtensionOutcome",
    "ExtensionPolicy",
    "FeedbackAdjustments",
    "Frequency",
    "Goal",
    "GoalLocks",
    "GoalNotFoundError",
    "GoalPilot",
    "GoalPilotConfig",
    "GoalPilotError",
    "GoalRepository",
    "GoalStatus",
    "InMemoryStore",
    "MalformedRecordError",
    "MilestoneGroup",
    "NotFoundError",
    "NullScheduleProgress",
    "RepositoryError",
    "ScheduleAdjustmentService",
    "ScheduleAdvisor",
    "ScheduleProgress",
    "ScheduleResult",
    "Step",
    "StepNotFoundError",
    "StepRepository",
    "StepStatus",
    "StoreLoadError",
    "TokenResolver",
    "UpcomingMilestone",
    "UpcomingMilestoneScanner",
    "__version__",
    "calculate_default_extension",
    "create_backend",
    "create_token_resolver",
    "generate_feedback",
    "group_milestones",
    "load_config",
    "parse_cadence",
    "resolve_dependencies",
    "resolve_order",
]
