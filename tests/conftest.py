"""Shared test fixtures for goalpilot tests."""

from __future__ import annotations

from datetime import date

import pytest

from goalpilot import Goal, GoalPilotConfig, GoalStatus, Step
from tests.fakes.repository import FakeRepository

TODAY = date(2024, 1, 10)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def clock():
    """A clock frozen at :data:`TODAY`."""
    return lambda: TODAY


@pytest.fixture
def chain_goal() -> Goal:
    """An active goal spaced every three days from 2024-01-01."""
    return Goal(
        id="g1",
        owner_id="u1",
        title="Learn to cook",
        description="Practice a new recipe every 3 days",
        start_date=date(2024, 1, 1),
        status=GoalStatus.ACTIVE,
    )


@pytest.fixture
def chain_steps() -> list[Step]:
    """S1 <- S2 <- S3, order_index 0..2."""
    return [
        Step(id="S1", goal_id="g1", title="Pick recipe", order_index=0),
        Step(id="S2", goal_id="g1", title="Buy groceries", order_index=1, dependency_step_ids=["S1"]),
        Step(id="S3", goal_id="g1", title="Cook", order_index=2, dependency_step_ids=["S2"]),
    ]


@pytest.fixture
def repository(chain_goal: Goal, chain_steps: list[Step]) -> FakeRepository:
    return FakeRepository(goals=[chain_goal], steps=chain_steps)


@pytest.fixture
def sample_config() -> GoalPilotConfig:
    return GoalPilotConfig(user_id="u1")
