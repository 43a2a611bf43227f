"""Repository adapter contracts.

The scheduling core never talks to a backend directly; it is handed
implementations of these interfaces.  Lookups raise the matching
:class:`~goalpilot.contracts.exceptions.NotFoundError` subclass, every other
backend failure surfaces as :class:`~goalpilot.contracts.exceptions.RepositoryError`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date

from goalpilot.contracts.checkin import CheckInRecord, Difficulty
from goalpilot.contracts.goal import Goal, Step, StepStatus


class StepRepository(ABC):
    @abstractmethod
    async def list_steps_by_goal(self, goal_id: str) -> list[Step]: ...  # pragma: no cover

    @abstractmethod
    async def get_step(self, step_id: str) -> Step: ...  # pragma: no cover

    @abstractmethod
    async def update_step_due_date(self, step_id: str, due_date: date) -> None: ...  # pragma: no cover

    @abstractmethod
    async def update_step_status(self, step_id: str, status: StepStatus) -> None: ...  # pragma: no cover


class GoalRepository(ABC):
    @abstractmethod
    async def get_goal(self, goal_id: str) -> Goal: ...  # pragma: no cover

    @abstractmethod
    async def list_active_or_planned_goals_for_user(self, user_id: str) -> list[Goal]: ...  # pragma: no cover


class CheckInRepository(ABC):
    @abstractmethod
    async def insert_check_in(self, record: CheckInRecord) -> str: ...  # pragma: no cover

    @abstractmethod
    async def list_recent_check_ins(
        self, goal_ids: Iterable[str], since: date
    ) -> list[CheckInRecord]: ...  # pragma: no cover

    @abstractmethod
    async def list_check_ins_for_user(
        self, user_id: str, since: date, goal_id: str | None = None
    ) -> list[CheckInRecord]: ...  # pragma: no cover

    @abstractmethod
    async def update_check_in(
        self, check_in_id: str, *, confidence: int, difficulty_rating: Difficulty | None = None
    ) -> None: ...  # pragma: no cover
