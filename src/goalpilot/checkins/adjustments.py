"""User-initiated schedule adjustments: more time and new frequency."""

from __future__ import annotations

import logging

from goalpilot.contracts.advisor import ScheduleAdvisor
from goalpilot.contracts.config import ExtensionPolicy
from goalpilot.contracts.exceptions import AdvisoryUnavailableError, StepNotFoundError
from goalpilot.contracts.repository import StepRepository
from goalpilot.contracts.schedule import (
    AdjustmentRequest,
    AdjustmentResponse,
    AdjustmentType,
    AdvisoryAdvice,
)
from goalpilot.scheduling.cadence import frequency_to_interval
from goalpilot.scheduling.cascader import DeadlineCascader, calculate_default_extension

logger = logging.getLogger(__name__)

EXTENSION_FALLBACK_MESSAGE = "I understand you need more time. I've given you a few extra days to complete this step."
NO_DUE_DATE_MESSAGE = "This step doesn't have a due date yet, so there was nothing to push back."


async def consult_advisor(advisor: ScheduleAdvisor | None, request: AdjustmentRequest) -> AdvisoryAdvice | None:
    """Ask *advisor* for advice, returning ``None`` when it is absent or unavailable."""
    if advisor is None:
        return None
    try:
        return await advisor.advise(request)
    except AdvisoryUnavailableError as exc:
        logger.warning("Schedule advisor unavailable for %s on goal %s: %s", request.type, request.goal_id, exc)
        return None


class ScheduleAdjustmentService:
    def __init__(
        self,
        steps: StepRepository,
        cascader: DeadlineCascader,
        *,
        advisor: ScheduleAdvisor | None = None,
        policy: ExtensionPolicy | None = None,
    ) -> None:
        self._steps = steps
        self._cascader = cascader
        self._advisor = advisor
        self._policy = policy or ExtensionPolicy()

    async def handle_extension_request(
        self, step_id: str, reason: str | None = None, *, extension_days: int | None = None
    ) -> AdjustmentResponse:
        """Give *step_id* more time and cascade the shift downstream.

        The extension defaults to the step's effort-based length.  The advisor
        only supplies the message; the cascade is applied either way.
        """
        step = await self._steps.get_step(step_id)
        days = extension_days
        if days is None:
            days = calculate_default_extension(step.estimated_effort_min, self._policy)

        outcome = await self._cascader.extend_deadline(step.id, days)
        if not outcome.applied:
            return AdjustmentResponse(success=False, message=NO_DUE_DATE_MESSAGE)

        advice = await consult_advisor(
            self._advisor,
            AdjustmentRequest(
                type=AdjustmentType.NEED_MORE_TIME,
                goal_id=step.goal_id,
                step_id=step.id,
                user_message=reason or f"I need more time to complete: {step.title}",
                current_due_date=step.due_date,
                requested_extension=days,
            ),
        )
        return AdjustmentResponse(
            success=True,
            message=advice.message if advice is not None else EXTENSION_FALLBACK_MESSAGE,
            new_due_date=outcome.new_due_date,
            affected_steps=len(outcome.shifted_step_ids),
        )

    async def handle_frequency_change(self, goal_id: str, step_id: str, frequency: str) -> AdjustmentResponse:
        """Re-space the steps after *step_id* at the interval named by *frequency*.

        Raises :class:`StepNotFoundError` when *step_id* does not belong to *goal_id*.
        """
        step = await self._steps.get_step(step_id)
        if step.goal_id != goal_id:
            raise StepNotFoundError(step_id)
        interval = frequency_to_interval(frequency)
        affected = await self._cascader.adjust_from_step(step_id, interval)
        logger.info("Rescheduled %d step(s) of goal %s at %d-day interval", affected, goal_id, interval)
        return AdjustmentResponse(
            success=True,
            message=(
                f"Great! I've adjusted your schedule to {frequency}. "
                "All future steps have been rescheduled accordingly."
            ),
            affected_steps=affected,
        )

    async def count_future_steps(self, goal_id: str, step_id: str) -> int:
        """Number of steps of *goal_id* ordered after *step_id* (0 if it is not in the goal)."""
        steps = await self._steps.list_steps_by_goal(goal_id)
        current = next((step for step in steps if step.id == step_id), None)
        if current is None:
            return 0
        return sum(1 for step in steps if step.order_index > current.order_index)
