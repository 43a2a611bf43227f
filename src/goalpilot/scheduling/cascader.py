"""Deadline cascades: relative extensions and cadence re-anchoring."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, timedelta

from goalpilot.contracts.config import ExtensionPolicy
from goalpilot.contracts.goal import Step
from goalpilot.contracts.repository import StepRepository
from goalpilot.contracts.schedule import ExtensionOutcome
from goalpilot.scheduling.locks import GoalLocks
from goalpilot.scheduling.progress import NullScheduleProgress, ScheduleProgress

logger = logging.getLogger(__name__)


def calculate_default_extension(effort_minutes: int | None, policy: ExtensionPolicy | None = None) -> int:
    """Return the number of days a step with *effort_minutes* gets when a user asks for more time."""
    policy = policy or ExtensionPolicy()
    effort = effort_minutes if effort_minutes is not None else policy.default_effort_minutes
    if effort <= policy.quick_max_minutes:
        return policy.quick_days
    if effort <= policy.medium_max_minutes:
        return policy.medium_days
    return policy.long_days


def is_downstream(step: Step, anchor: Step) -> bool:
    """A step is downstream of *anchor* if it depends on it or comes later by ``order_index``."""
    if step.id == anchor.id:
        return False
    return anchor.id in step.dependency_step_ids or step.order_index > anchor.order_index


class DeadlineCascader:
    """Shifts a step's due date and propagates the change to downstream steps.

    Cascades on one goal are serialized through *locks*; the anchor step is
    re-read after the lock is acquired so a concurrent cascade that just
    finished is never computed from a stale date.
    """

    def __init__(
        self,
        steps: StepRepository,
        *,
        locks: GoalLocks | None = None,
        progress: ScheduleProgress | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._steps = steps
        self._locks = locks or GoalLocks()
        self._progress: ScheduleProgress = progress or NullScheduleProgress()
        self._clock = clock

    async def extend_deadline(self, step_id: str, extension_days: int) -> ExtensionOutcome:
        """Push *step_id* and every downstream step back by *extension_days*.

        A step without a due date is a logged no-op and the returned outcome
        has no ``new_due_date``.  Downstream steps without a due date are left
        alone.
        """
        step = await self._steps.get_step(step_id)
        async with self._locks.for_goal(step.goal_id):
            anchor = await self._steps.get_step(step_id)
            if anchor.due_date is None:
                logger.info("Step %s has no due date; extension skipped", step_id)
                return ExtensionOutcome(step_id=step_id, extension_days=extension_days)

            delta = timedelta(days=extension_days)
            new_due_date = anchor.due_date + delta
            await self._steps.update_step_due_date(anchor.id, new_due_date)
            logger.debug("Extended step %s to %s", anchor.id, new_due_date.isoformat())

            siblings = await self._steps.list_steps_by_goal(anchor.goal_id)
            downstream = [sibling for sibling in siblings if is_downstream(sibling, anchor)]
            shifted: list[str] = []

            self._progress.phase_start("Cascade", total=len(downstream))
            try:
                for sibling in downstream:
                    if sibling.due_date is None:
                        logger.info("Downstream step %s has no due date; left unchanged", sibling.id)
                    else:
                        await self._steps.update_step_due_date(sibling.id, sibling.due_date + delta)
                        shifted.append(sibling.id)
                        logger.debug("Shifted step %s by %d day(s)", sibling.id, extension_days)
                    self._progress.item_done("Cascade")
                self._progress.phase_done("Cascade")
            except BaseException as exc:
                self._progress.phase_error("Cascade", exc)
                raise
            return ExtensionOutcome(
                step_id=anchor.id,
                extension_days=extension_days,
                new_due_date=new_due_date,
                shifted_step_ids=shifted,
            )

    async def adjust_from_step(self, step_id: str, new_interval_days: int) -> int:
        """Re-space every step after *step_id* at *new_interval_days* from its due date.

        The anchor is the step's due date, or today when it has none.  Returns
        the number of steps rewritten.
        """
        if new_interval_days < 1:
            raise ValueError("new_interval_days must be at least 1")

        step = await self._steps.get_step(step_id)
        async with self._locks.for_goal(step.goal_id):
            anchor = await self._steps.get_step(step_id)
            siblings = sorted(
                await self._steps.list_steps_by_goal(anchor.goal_id),
                key=lambda sibling: sibling.order_index,
            )
            position = next((i for i, sibling in enumerate(siblings) if sibling.id == anchor.id), None)
            if position is None:
                logger.info("Step %s not listed under goal %s; nothing to adjust", anchor.id, anchor.goal_id)
                return 0

            base = anchor.due_date or self._clock()
            later = [
                (offset, sibling)
                for offset, sibling in enumerate(siblings[position + 1 :], start=1)
                if sibling.order_index > anchor.order_index
            ]

            self._progress.phase_start("Reschedule", total=len(later))
            try:
                for steps_ahead, sibling in later:
                    new_due_date = base + timedelta(days=steps_ahead * new_interval_days)
                    await self._steps.update_step_due_date(sibling.id, new_due_date)
                    logger.debug("Rescheduled step %s to %s", sibling.id, new_due_date.isoformat())
                    self._progress.item_done("Reschedule")
                self._progress.phase_done("Reschedule")
            except BaseException as exc:
                self._progress.phase_error("Reschedule", exc)
                raise
            return len(later)
