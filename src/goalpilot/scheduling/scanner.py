"""Upcoming milestone sweep."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from goalpilot.contracts.exceptions import RepositoryError
from goalpilot.contracts.goal import GoalStatus
from goalpilot.contracts.repository import GoalRepository, StepRepository
from goalpilot.contracts.schedule import UpcomingMilestone
from goalpilot.scheduling.milestones import DEFAULT_GROUP_SIZE, group_milestones

logger = logging.getLogger(__name__)


class UpcomingMilestoneScanner:
    """Read-only sweep for milestones falling due exactly *days_ahead* days from today."""

    def __init__(
        self,
        goals: GoalRepository,
        steps: StepRepository,
        *,
        days_ahead: int = 3,
        group_size: int = DEFAULT_GROUP_SIZE,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._goals = goals
        self._steps = steps
        self._days_ahead = days_ahead
        self._group_size = group_size
        self._clock = clock

    async def scan_upcoming(self, user_id: str) -> list[UpcomingMilestone]:
        """Return milestones of *user_id*'s active goals due in exactly ``days_ahead`` days.

        A goal whose steps cannot be loaded is logged and skipped; milestones
        without a due date never match.
        """
        today = self._clock()
        goals = await self._goals.list_active_or_planned_goals_for_user(user_id)

        upcoming: list[UpcomingMilestone] = []
        for goal in goals:
            if goal.status != GoalStatus.ACTIVE:
                continue
            try:
                steps = await self._steps.list_steps_by_goal(goal.id)
            except RepositoryError as exc:
                logger.warning("Skipping goal %s during milestone scan: %s", goal.id, exc)
                continue

            for milestone in group_milestones(steps, self._group_size):
                if milestone.due_date is None:
                    continue
                if (milestone.due_date - today).days == self._days_ahead:
                    upcoming.append(UpcomingMilestone(goal_id=goal.id, milestone=milestone))
        logger.debug("Milestone scan found %d upcoming milestone(s)", len(upcoming))
        return upcoming
