"""In-memory repository backend with JSON snapshot persistence."""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from goalpilot.contracts.checkin import CheckInRecord, Difficulty
from goalpilot.contracts.exceptions import (
    CheckInNotFoundError,
    GoalNotFoundError,
    StepNotFoundError,
    StoreLoadError,
)
from goalpilot.contracts.goal import Goal, GoalStatus, Step, StepStatus
from goalpilot.contracts.repository import CheckInRepository, GoalRepository, StepRepository


class StoreSnapshot(BaseModel):
    """Serializable content of an :class:`InMemoryStore`."""

    goals: list[Goal] = Field(default_factory=list)
    steps: list[Step] = Field(default_factory=list)
    check_ins: list[CheckInRecord] = Field(default_factory=list)


class InMemoryStore(StepRepository, GoalRepository, CheckInRepository):
    """Keyed record store implementing every repository contract.

    Records are copied on the way in and out so callers never alias stored
    state.  Check-in ids are assigned sequentially when a record has none.
    """

    def __init__(
        self,
        *,
        goals: Iterable[Goal] = (),
        steps: Iterable[Step] = (),
        check_ins: Iterable[CheckInRecord] = (),
    ) -> None:
        self._goals: dict[str, Goal] = {}
        self._steps: dict[str, Step] = {}
        self._check_ins: dict[str, CheckInRecord] = {}
        self._check_in_counter = 0
        for goal in goals:
            self.add_goal(goal)
        for step in steps:
            self.add_step(step)
        for record in check_ins:
            self._store_check_in(record)

    @classmethod
    def from_snapshot(cls, snapshot: StoreSnapshot) -> InMemoryStore:
        return cls(goals=snapshot.goals, steps=snapshot.steps, check_ins=snapshot.check_ins)

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            goals=[goal.model_copy() for goal in self._goals.values()],
            steps=[step.model_copy() for step in self._steps.values()],
            check_ins=[record.model_copy() for record in self._check_ins.values()],
        )

    def add_goal(self, goal: Goal) -> None:
        self._goals[goal.id] = goal.model_copy(deep=True)

    def add_step(self, step: Step) -> None:
        self._steps[step.id] = step.model_copy(deep=True)

    def _store_check_in(self, record: CheckInRecord) -> str:
        self._check_in_counter += 1
        check_in_id = record.id or f"checkin-{self._check_in_counter}"
        created_at = record.created_at or datetime.now(UTC)
        self._check_ins[check_in_id] = record.model_copy(update={"id": check_in_id, "created_at": created_at})
        return check_in_id

    # -- steps --------------------------------------------------------------

    async def list_steps_by_goal(self, goal_id: str) -> list[Step]:
        steps = [step.model_copy(deep=True) for step in self._steps.values() if step.goal_id == goal_id]
        return sorted(steps, key=lambda step: step.order_index)

    async def get_step(self, step_id: str) -> Step:
        step = self._steps.get(step_id)
        if step is None:
            raise StepNotFoundError(step_id)
        return step.model_copy(deep=True)

    async def update_step_due_date(self, step_id: str, due_date: date) -> None:
        step = self._steps.get(step_id)
        if step is None:
            raise StepNotFoundError(step_id)
        self._steps[step_id] = step.model_copy(update={"due_date": due_date})

    async def update_step_status(self, step_id: str, status: StepStatus) -> None:
        step = self._steps.get(step_id)
        if step is None:
            raise StepNotFoundError(step_id)
        self._steps[step_id] = step.model_copy(update={"status": status})

    # -- goals --------------------------------------------------------------

    async def get_goal(self, goal_id: str) -> Goal:
        goal = self._goals.get(goal_id)
        if goal is None:
            raise GoalNotFoundError(goal_id)
        return goal.model_copy(deep=True)

    async def list_active_or_planned_goals_for_user(self, user_id: str) -> list[Goal]:
        return [
            goal.model_copy(deep=True)
            for goal in self._goals.values()
            if goal.owner_id == user_id and goal.status in (GoalStatus.ACTIVE, GoalStatus.PLANNED)
        ]

    # -- check-ins ----------------------------------------------------------

    async def insert_check_in(self, record: CheckInRecord) -> str:
        return self._store_check_in(record)

    async def list_recent_check_ins(self, goal_ids: Iterable[str], since: date) -> list[CheckInRecord]:
        wanted = set(goal_ids)
        return [
            record.model_copy()
            for record in self._check_ins.values()
            if record.goal_id in wanted and record.date >= since
        ]

    async def list_check_ins_for_user(
        self, user_id: str, since: date, goal_id: str | None = None
    ) -> list[CheckInRecord]:
        records = [
            record.model_copy()
            for record in self._check_ins.values()
            if record.user_id == user_id
            and record.date >= since
            and (goal_id is None or record.goal_id == goal_id)
        ]
        return sorted(records, key=lambda record: record.date, reverse=True)

    async def update_check_in(
        self, check_in_id: str, *, confidence: int, difficulty_rating: Difficulty | None = None
    ) -> None:
        record = self._check_ins.get(check_in_id)
        if record is None:
            raise CheckInNotFoundError(check_in_id)
        self._check_ins[check_in_id] = record.model_copy(
            update={"confidence": confidence, "difficulty_rating": difficulty_rating}
        )


def load_store(path: Path) -> InMemoryStore:
    """Load a store snapshot from *path*; a missing file yields an empty store."""
    if not path.exists():
        return InMemoryStore()
    try:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
        return InMemoryStore.from_snapshot(StoreSnapshot.model_validate(payload))
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise StoreLoadError(f"invalid store snapshot: {path}") from exc


def save_store(store: InMemoryStore, path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(store.snapshot().model_dump_json(indent=2), encoding="utf-8")
    except OSError as exc:
        raise StoreLoadError(f"failed to persist store snapshot: {path}") from exc
