"""Supabase (PostgREST) implementation of the repository contracts."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, date, datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from goalpilot.contracts.checkin import CheckInRecord, Difficulty
from goalpilot.contracts.exceptions import (
    CheckInNotFoundError,
    GoalNotFoundError,
    MalformedRecordError,
    RepositoryError,
    StepNotFoundError,
)
from goalpilot.contracts.goal import Goal, GoalStatus, Step, StepStatus
from goalpilot.contracts.repository import CheckInRepository, GoalRepository, StepRepository
from goalpilot.repositories.supabase.client import SupabaseClient, eq, gte, in_

_LOG = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

STEPS = "steps"
GOALS = "goals"
CHECK_INS = "check_ins"


def _parse(model: type[ModelT], row: dict[str, Any], table: str) -> ModelT:
    try:
        return model.model_validate(row)
    except ValidationError as exc:
        record_id = row.get("id") if isinstance(row, dict) else None
        raise MalformedRecordError(
            f"malformed {table} row {record_id or '<unknown>'}: {exc.error_count()} validation error(s)",
            table=table,
            record_id=str(record_id) if record_id is not None else None,
        ) from exc


def check_in_from_row(row: dict[str, Any]) -> CheckInRecord:
    """Map a ``check_ins`` row.

    The backend stores confidence as ``confidence_1_5``, which older rows leave
    null; those map to ``confidence=None``.
    """
    payload = dict(row)
    if "confidence_1_5" in payload:
        payload["confidence"] = payload.pop("confidence_1_5")
    if payload.get("reflection") is None:
        payload["reflection"] = ""
    if payload.get("minutes_spent") is None:
        payload["minutes_spent"] = 0
    return _parse(CheckInRecord, payload, CHECK_INS)


def check_in_to_row(record: CheckInRecord) -> dict[str, Any]:
    row: dict[str, Any] = {
        "user_id": record.user_id,
        "goal_id": record.goal_id,
        "step_id": record.step_id,
        "date": record.date.isoformat(),
        "reflection": record.reflection,
        "minutes_spent": record.minutes_spent,
        "confidence_1_5": record.confidence,
        "source": record.source.value,
        "evidence_attachments": [],
    }
    if record.id:
        row["id"] = record.id
    if record.completed is not None:
        row["completed"] = record.completed
    if record.difficulty_rating is not None:
        row["difficulty_rating"] = record.difficulty_rating.value
    if record.created_at is not None:
        row["created_at"] = record.created_at.isoformat()
    return row


class SupabaseRepository(StepRepository, GoalRepository, CheckInRepository):
    """Reads and writes goals, steps and check-ins through a :class:`SupabaseClient`."""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    # -- steps --------------------------------------------------------------

    async def list_steps_by_goal(self, goal_id: str) -> list[Step]:
        rows = await self._client.select(STEPS, {"goal_id": eq(goal_id), "order": "order_index.asc"})
        return [_parse(Step, row, STEPS) for row in rows]

    async def get_step(self, step_id: str) -> Step:
        rows = await self._client.select(STEPS, {"id": eq(step_id), "limit": "1"})
        if not rows:
            raise StepNotFoundError(step_id)
        return _parse(Step, rows[0], STEPS)

    async def update_step_due_date(self, step_id: str, due_date: date) -> None:
        rows = await self._client.update(STEPS, {"id": eq(step_id)}, {"due_date": due_date.isoformat()})
        if not rows:
            raise StepNotFoundError(step_id)

    async def update_step_status(self, step_id: str, status: StepStatus) -> None:
        changes = {"status": status.value, "updated_at": datetime.now(UTC).isoformat()}
        rows = await self._client.update(STEPS, {"id": eq(step_id)}, changes)
        if not rows:
            raise StepNotFoundError(step_id)

    # -- goals --------------------------------------------------------------

    async def get_goal(self, goal_id: str) -> Goal:
        rows = await self._client.select(GOALS, {"id": eq(goal_id), "limit": "1"})
        if not rows:
            raise GoalNotFoundError(goal_id)
        return _parse(Goal, rows[0], GOALS)

    async def list_active_or_planned_goals_for_user(self, user_id: str) -> list[Goal]:
        """List the user's open goals, skipping rows that fail validation."""
        statuses = [GoalStatus.ACTIVE.value, GoalStatus.PLANNED.value]
        rows = await self._client.select(GOALS, {"owner_id": eq(user_id), "status": in_(statuses)})
        goals: list[Goal] = []
        for row in rows:
            try:
                goals.append(_parse(Goal, row, GOALS))
            except MalformedRecordError as exc:
                _LOG.warning("Skipping %s", exc)
        return goals

    # -- check-ins ----------------------------------------------------------

    async def insert_check_in(self, record: CheckInRecord) -> str:
        rows = await self._client.insert(CHECK_INS, check_in_to_row(record))
        if not rows or not rows[0].get("id"):
            raise RepositoryError("check-in insert returned no id")
        check_in_id = str(rows[0]["id"])
        _LOG.debug("Inserted check-in %s for goal %s", check_in_id, record.goal_id)
        return check_in_id

    async def list_recent_check_ins(self, goal_ids: Iterable[str], since: date) -> list[CheckInRecord]:
        wanted = sorted(set(goal_ids))
        if not wanted:
            return []
        rows = await self._client.select(CHECK_INS, {"goal_id": in_(wanted), "date": gte(since.isoformat())})
        return [check_in_from_row(row) for row in rows]

    async def list_check_ins_for_user(
        self, user_id: str, since: date, goal_id: str | None = None
    ) -> list[CheckInRecord]:
        params = {"user_id": eq(user_id), "date": gte(since.isoformat()), "order": "date.desc"}
        if goal_id is not None:
            params["goal_id"] = eq(goal_id)
        rows = await self._client.select(CHECK_INS, params)
        return [check_in_from_row(row) for row in rows]

    async def update_check_in(
        self, check_in_id: str, *, confidence: int, difficulty_rating: Difficulty | None = None
    ) -> None:
        changes: dict[str, Any] = {"confidence_1_5": confidence}
        if difficulty_rating is not None:
            changes["difficulty_rating"] = difficulty_rating.value
        rows = await self._client.update(CHECK_INS, {"id": eq(check_in_id)}, changes)
        if not rows:
            raise CheckInNotFoundError(check_in_id)
