"""Automatic due-date assignment."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date, timedelta

from goalpilot.contracts.goal import Goal, Step
from goalpilot.contracts.repository import GoalRepository, StepRepository
from goalpilot.contracts.schedule import ScheduleResult
from goalpilot.scheduling.cadence import parse_cadence
from goalpilot.scheduling.progress import NullScheduleProgress, ScheduleProgress
from goalpilot.scheduling.resolver import resolve_dependencies

logger = logging.getLogger(__name__)


class AutoScheduler:
    """Spaces a goal's steps evenly along its cadence, in dependency order."""

    def __init__(
        self,
        steps: StepRepository,
        goals: GoalRepository,
        *,
        progress: ScheduleProgress | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._steps = steps
        self._goals = goals
        self._progress: ScheduleProgress = progress or NullScheduleProgress()
        self._clock = clock

    async def schedule_goal(self, goal_id: str) -> ScheduleResult:
        """Load *goal_id* and its steps, then :meth:`auto_schedule` them."""
        goal = await self._goals.get_goal(goal_id)
        steps = await self._steps.list_steps_by_goal(goal_id)
        return await self.auto_schedule(goal, steps)

    async def auto_schedule(self, goal: Goal, steps: Sequence[Step]) -> ScheduleResult:
        """Assign ``start + i * interval`` to the i-th step in dependency order.

        Every computed date is written through the step repository.  An empty
        step list is a no-op.
        """
        cadence = parse_cadence(goal, today=self._clock())
        if not steps:
            logger.info("Goal %s has no steps; nothing to schedule", goal.id)
            return ScheduleResult(goal_id=goal.id, cadence=cadence)

        resolution = resolve_dependencies(steps)
        scheduled: list[Step] = []

        self._progress.phase_start("Schedule", total=len(resolution.ordered))
        try:
            for position, step in enumerate(resolution.ordered):
                due_date = cadence.start_date + timedelta(days=position * cadence.interval_days)
                await self._steps.update_step_due_date(step.id, due_date)
                logger.debug("Scheduled step %s for %s", step.id, due_date.isoformat())
                scheduled.append(step.model_copy(update={"due_date": due_date}))
                self._progress.item_done("Schedule")
            self._progress.phase_done("Schedule")
        except BaseException as exc:
            self._progress.phase_error("Schedule", exc)
            raise

        return ScheduleResult(
            goal_id=goal.id,
            cadence=cadence,
            steps=scheduled,
            fallback_used=resolution.fallback_used,
        )
