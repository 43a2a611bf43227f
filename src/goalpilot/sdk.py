"""SDK composition root for goalpilot."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from types import TracebackType

from goalpilot.checkins.adjustments import ScheduleAdjustmentService
from goalpilot.checkins.orchestrator import CheckInOrchestrator
from goalpilot.contracts.advisor import ScheduleAdvisor
from goalpilot.contracts.checkin import (
    CheckInPrompt,
    CheckInRecord,
    CheckInResponse,
    CheckInResult,
    CheckInSource,
    Difficulty,
    ExpressCheckInResult,
)
from goalpilot.contracts.config import GoalPilotConfig
from goalpilot.contracts.repository import CheckInRepository, GoalRepository, StepRepository
from goalpilot.contracts.schedule import (
    AdjustmentResponse,
    ExtensionOutcome,
    MilestoneGroup,
    ScheduleResult,
    UpcomingMilestone,
)
from goalpilot.repositories.factory import Backend, create_backend
from goalpilot.scheduling.cascader import DeadlineCascader
from goalpilot.scheduling.locks import GoalLocks
from goalpilot.scheduling.milestones import group_milestones
from goalpilot.scheduling.progress import ScheduleProgress
from goalpilot.scheduling.scanner import UpcomingMilestoneScanner
from goalpilot.scheduling.scheduler import AutoScheduler


class GoalPilot:
    """goalpilot SDK public API.

    Wires one set of repositories into the scheduler, cascader, scanner and
    check-in services.  Use :meth:`from_config` plus ``async with`` to get a
    backend-backed instance that is closed (and, for the memory backend,
    persisted) on exit.
    """

    def __init__(
        self,
        *,
        steps: StepRepository,
        goals: GoalRepository,
        check_ins: CheckInRepository,
        config: GoalPilotConfig,
        advisor: ScheduleAdvisor | None = None,
        progress: ScheduleProgress | None = None,
        clock: Callable[[], date] = date.today,
        backend: Backend | None = None,
    ) -> None:
        self._config = config
        self._backend = backend
        self._steps = steps
        self._cascader = DeadlineCascader(steps, locks=GoalLocks(), progress=progress, clock=clock)
        self._scheduler = AutoScheduler(steps, goals, progress=progress, clock=clock)
        self._scanner = UpcomingMilestoneScanner(
            goals,
            steps,
            days_ahead=config.upcoming_days_ahead,
            group_size=config.milestone_group_size,
            clock=clock,
        )
        self._check_ins = CheckInOrchestrator(
            steps,
            goals,
            check_ins,
            self._cascader,
            config.user_id,
            advisor=advisor,
            policy=config.extension_policy,
            recent_days=config.recent_check_in_days,
            clock=clock,
        )
        self._adjustments = ScheduleAdjustmentService(
            steps, self._cascader, advisor=advisor, policy=config.extension_policy
        )

    @classmethod
    async def from_config(
        cls,
        config: GoalPilotConfig,
        *,
        progress: ScheduleProgress | None = None,
        clock: Callable[[], date] = date.today,
    ) -> GoalPilot:
        backend = await create_backend(config)
        return cls(
            steps=backend.store,
            goals=backend.store,
            check_ins=backend.store,
            config=config,
            advisor=backend.advisor,
            progress=progress,
            clock=clock,
            backend=backend,
        )

    async def __aenter__(self) -> GoalPilot:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._backend is not None:
            await self._backend.aclose()

    # -- scheduling ---------------------------------------------------------

    async def schedule_goal(self, goal_id: str) -> ScheduleResult:
        return await self._scheduler.schedule_goal(goal_id)

    async def milestones(self, goal_id: str) -> list[MilestoneGroup]:
        steps = await self._steps.list_steps_by_goal(goal_id)
        return group_milestones(steps, self._config.milestone_group_size)

    async def extend_deadline(self, step_id: str, extension_days: int) -> ExtensionOutcome:
        return await self._cascader.extend_deadline(step_id, extension_days)

    async def scan_upcoming(self) -> list[UpcomingMilestone]:
        return await self._scanner.scan_upcoming(self._config.user_id)

    # -- adjustments --------------------------------------------------------

    async def request_extension(
        self, step_id: str, reason: str | None = None, *, extension_days: int | None = None
    ) -> AdjustmentResponse:
        return await self._adjustments.handle_extension_request(step_id, reason, extension_days=extension_days)

    async def change_frequency(self, goal_id: str, step_id: str, frequency: str) -> AdjustmentResponse:
        return await self._adjustments.handle_frequency_change(goal_id, step_id, frequency)

    async def count_future_steps(self, goal_id: str, step_id: str) -> int:
        return await self._adjustments.count_future_steps(goal_id, step_id)

    # -- check-ins ----------------------------------------------------------

    async def pending_check_ins(self) -> list[CheckInPrompt]:
        return await self._check_ins.get_pending_check_ins()

    async def record_check_in(self, response: CheckInResponse) -> CheckInResult:
        return await self._check_ins.record_check_in(response)

    async def check_in_history(self, goal_id: str | None = None, days: int = 30) -> list[CheckInRecord]:
        return await self._check_ins.get_check_in_history(goal_id, days)

    async def express_check_in(
        self, step_id: str, source: CheckInSource | str = CheckInSource.EXPRESS
    ) -> ExpressCheckInResult:
        return await self._check_ins.create_express_check_in(step_id, source)

    async def rate_check_in(self, check_in_id: str, difficulty: Difficulty | str) -> None:
        await self._check_ins.update_check_in_difficulty(check_in_id, difficulty)
