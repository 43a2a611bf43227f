"""Check-in orchestration.

A step needs a check-in prompt when it is due today or earlier, still open,
and its goal has no check-in within the recent window.  Recording a response
persists it, closes the step on completion, derives feedback and, when the
feedback asks for it, pushes the deadline back through the cascader.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, timedelta

from goalpilot.checkins.adjustments import consult_advisor
from goalpilot.checkins.feedback import generate_feedback
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
from goalpilot.contracts.config import ExtensionPolicy
from goalpilot.contracts.goal import GoalStatus, Step, StepStatus
from goalpilot.contracts.repository import CheckInRepository, GoalRepository, StepRepository
from goalpilot.contracts.schedule import AdjustmentRequest, AdjustmentType
from goalpilot.scheduling.cascader import DeadlineCascader, calculate_default_extension

logger = logging.getLogger(__name__)

URGENT_AFTER_DAYS = 3
EXPRESS_CONFIDENCE = 3
DEFAULT_EXPRESS_POINTS = 5
_OPEN_GOAL_STATUSES = (GoalStatus.ACTIVE, GoalStatus.PLANNED)


class CheckInOrchestrator:
    def __init__(
        self,
        steps: StepRepository,
        goals: GoalRepository,
        check_ins: CheckInRepository,
        cascader: DeadlineCascader,
        user_id: str,
        *,
        advisor: ScheduleAdvisor | None = None,
        policy: ExtensionPolicy | None = None,
        recent_days: int = 2,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._steps = steps
        self._goals = goals
        self._check_ins = check_ins
        self._cascader = cascader
        self._user_id = user_id
        self._advisor = advisor
        self._policy = policy or ExtensionPolicy()
        self._recent_days = recent_days
        self._clock = clock

    async def get_pending_check_ins(self) -> list[CheckInPrompt]:
        """Return check-in prompts for overdue open steps, most overdue first."""
        today = self._clock()
        goals = [
            goal
            for goal in await self._goals.list_active_or_planned_goals_for_user(self._user_id)
            if goal.status in _OPEN_GOAL_STATUSES
        ]
        if not goals:
            return []

        due: list[tuple[Step, int]] = []
        for goal in goals:
            for step in await self._steps.list_steps_by_goal(goal.id):
                if step.due_date is None or step.status.is_closed or step.due_date > today:
                    continue
                due.append((step, (today - step.due_date).days))
        if not due:
            return []

        goal_ids = sorted({step.goal_id for step, _ in due})
        since = today - timedelta(days=self._recent_days)
        recent = await self._check_ins.list_recent_check_ins(goal_ids, since)
        recently_checked = {record.goal_id for record in recent}

        goals_by_id = {goal.id: goal for goal in goals}
        prompts = [
            CheckInPrompt(
                id=f"checkin_{step.id}",
                step=step,
                goal=goals_by_id[step.goal_id],
                days_past_due=days_past_due,
                is_urgent=days_past_due > URGENT_AFTER_DAYS or step.is_required,
            )
            for step, days_past_due in due
            if step.goal_id not in recently_checked
        ]
        prompts.sort(key=lambda prompt: prompt.days_past_due, reverse=True)
        return prompts

    async def record_check_in(self, response: CheckInResponse) -> CheckInResult:
        """Persist *response*, update the step and apply the feedback's adjustments."""
        step = await self._steps.get_step(response.step_id)
        goal = await self._goals.get_goal(step.goal_id)

        check_in_id = await self._check_ins.insert_check_in(
            CheckInRecord(
                user_id=self._user_id,
                goal_id=step.goal_id,
                step_id=step.id,
                date=self._clock(),
                reflection=response.reflection or "",
                minutes_spent=response.minutes_spent or 0,
                confidence=response.confidence,
                completed=response.completed,
            )
        )

        if response.completed and step.status != StepStatus.DONE:
            await self._steps.update_step_status(step.id, StepStatus.DONE)
            step = step.model_copy(update={"status": StepStatus.DONE})

        feedback = generate_feedback(response)
        extension_days: int | None = None

        if feedback.adjustments.extend_due_date:
            days = calculate_default_extension(step.estimated_effort_min, self._policy)
            previous_due_date = step.due_date
            outcome = await self._cascader.extend_deadline(step.id, days)
            if outcome.applied:
                extension_days = days
                step = step.model_copy(update={"due_date": outcome.new_due_date})
                advice = await consult_advisor(
                    self._advisor,
                    AdjustmentRequest(
                        type=AdjustmentType.NEED_MORE_TIME,
                        goal_id=goal.id,
                        step_id=step.id,
                        user_message=response.blockers or response.reflection or f"Check-in on: {step.title}",
                        current_due_date=previous_due_date,
                        requested_extension=days,
                    ),
                )
                if advice is not None:
                    feedback = feedback.model_copy(update={"advisor_message": advice.message})
        elif feedback.adjustments.break_down_step:
            logger.info("Step %s flagged for break-down and scaffolding", step.id)

        return CheckInResult(
            check_in_id=check_in_id,
            feedback=feedback,
            step=step,
            goal=goal,
            extension_days=extension_days,
        )

    async def get_check_in_history(self, goal_id: str | None = None, days: int = 30) -> list[CheckInRecord]:
        """Check-ins of the current user from the last *days* days, newest first."""
        since = self._clock() - timedelta(days=days)
        records = await self._check_ins.list_check_ins_for_user(self._user_id, since, goal_id)
        return sorted(records, key=lambda record: record.date, reverse=True)

    async def create_express_check_in(
        self, step_id: str, source: CheckInSource | str = CheckInSource.EXPRESS
    ) -> ExpressCheckInResult:
        """Record a one-tap completion of *step_id* and close the step."""
        source = CheckInSource(source)
        if source == CheckInSource.CHECKIN:
            raise ValueError("express check-ins must come from 'express' or 'modal'")

        step = await self._steps.get_step(step_id)
        check_in_id = await self._check_ins.insert_check_in(
            CheckInRecord(
                user_id=self._user_id,
                goal_id=step.goal_id,
                step_id=step.id,
                date=self._clock(),
                confidence=EXPRESS_CONFIDENCE,
                completed=True,
                source=source,
            )
        )
        await self._steps.update_step_status(step.id, StepStatus.DONE)
        return ExpressCheckInResult(id=check_in_id, points=step.points_awarded or DEFAULT_EXPRESS_POINTS)

    async def update_check_in_difficulty(self, check_in_id: str, difficulty: Difficulty | str) -> None:
        """Store a difficulty rating and the confidence it implies."""
        rating = Difficulty(difficulty)
        await self._check_ins.update_check_in(
            check_in_id, confidence=rating.confidence, difficulty_rating=rating
        )
