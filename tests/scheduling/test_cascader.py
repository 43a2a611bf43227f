"""Tests for DeadlineCascader and default extensions."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from goalpilot import (
    DeadlineCascader,
    ExtensionPolicy,
    GoalLocks,
    Step,
    StepNotFoundError,
    calculate_default_extension,
)
from goalpilot.scheduling.cascader import is_downstream
from tests.fakes.progress import RecordingProgress
from tests.fakes.repository import FakeRepository


def _dated_chain() -> list[Step]:
    return [
        Step(id="S1", goal_id="g1", order_index=0, due_date=date(2024, 1, 1)),
        Step(id="S2", goal_id="g1", order_index=1, due_date=date(2024, 1, 4), dependency_step_ids=["S1"]),
        Step(id="S3", goal_id="g1", order_index=2, due_date=date(2024, 1, 7), dependency_step_ids=["S2"]),
    ]


class TestDefaultExtension:
    @pytest.mark.parametrize(
        ("effort", "days"),
        [(None, 2), (1, 2), (30, 2), (31, 3), (120, 3), (121, 5), (600, 5)],
    )
    def test_effort_buckets(self, effort: int | None, days: int) -> None:
        assert calculate_default_extension(effort) == days

    def test_custom_policy(self) -> None:
        policy = ExtensionPolicy(quick_max_minutes=10, quick_days=1, medium_max_minutes=20, long_days=9)
        assert calculate_default_extension(15, policy) == 3
        assert calculate_default_extension(25, policy) == 9


class TestIsDownstream:
    def test_later_order_index(self) -> None:
        anchor = Step(id="A", goal_id="g1", order_index=1)
        assert is_downstream(Step(id="B", goal_id="g1", order_index=2), anchor)
        assert not is_downstream(Step(id="C", goal_id="g1", order_index=0), anchor)

    def test_dependent_with_earlier_order_index(self) -> None:
        anchor = Step(id="A", goal_id="g1", order_index=3)
        assert is_downstream(Step(id="B", goal_id="g1", order_index=0, dependency_step_ids=["A"]), anchor)

    def test_anchor_is_not_its_own_downstream(self) -> None:
        anchor = Step(id="A", goal_id="g1", order_index=1)
        assert not is_downstream(anchor, anchor)


class TestExtendDeadline:
    @pytest.mark.asyncio
    async def test_shifts_anchor_and_downstream(self) -> None:
        repository = FakeRepository(steps=_dated_chain())

        outcome = await DeadlineCascader(repository).extend_deadline("S2", 3)

        assert repository.due_dates() == {
            "S1": date(2024, 1, 1),
            "S2": date(2024, 1, 7),
            "S3": date(2024, 1, 10),
        }
        assert outcome.applied is True
        assert outcome.new_due_date == date(2024, 1, 7)
        assert outcome.shifted_step_ids == ["S3"]

    @pytest.mark.asyncio
    async def test_dependent_with_lower_order_index_is_shifted(self) -> None:
        steps = [
            Step(id="A", goal_id="g1", order_index=5, due_date=date(2024, 1, 5)),
            Step(id="B", goal_id="g1", order_index=0, due_date=date(2024, 1, 9), dependency_step_ids=["A"]),
            Step(id="C", goal_id="g1", order_index=1, due_date=date(2024, 1, 2)),
        ]
        repository = FakeRepository(steps=steps)

        await DeadlineCascader(repository).extend_deadline("A", 2)

        assert repository.due_dates() == {
            "A": date(2024, 1, 7),
            "B": date(2024, 1, 11),
            "C": date(2024, 1, 2),
        }

    @pytest.mark.asyncio
    async def test_undated_downstream_steps_are_left_alone(self) -> None:
        steps = _dated_chain()
        steps[2] = steps[2].model_copy(update={"due_date": None})
        repository = FakeRepository(steps=steps)

        outcome = await DeadlineCascader(repository).extend_deadline("S1", 1)

        assert repository.due_dates()["S3"] is None
        assert outcome.shifted_step_ids == ["S2"]

    @pytest.mark.asyncio
    async def test_step_without_due_date_is_noop(self, repository: FakeRepository) -> None:
        outcome = await DeadlineCascader(repository).extend_deadline("S1", 5)

        assert outcome.applied is False
        assert outcome.new_due_date is None
        assert repository.due_date_updates == []

    @pytest.mark.asyncio
    async def test_other_goals_are_untouched(self) -> None:
        steps = [*_dated_chain(), Step(id="X", goal_id="g2", order_index=9, due_date=date(2024, 1, 1))]
        repository = FakeRepository(steps=steps)

        await DeadlineCascader(repository).extend_deadline("S1", 2)

        assert repository.due_dates()["X"] == date(2024, 1, 1)

    @pytest.mark.asyncio
    async def test_unknown_step_raises(self, repository: FakeRepository) -> None:
        with pytest.raises(StepNotFoundError):
            await DeadlineCascader(repository).extend_deadline("nope", 1)

    @pytest.mark.asyncio
    async def test_anchor_is_reread_under_lock(self) -> None:
        repository = FakeRepository(steps=_dated_chain())

        await DeadlineCascader(repository).extend_deadline("S1", 1)

        assert repository.get_step_calls == ["S1", "S1"]

    @pytest.mark.asyncio
    async def test_concurrent_extensions_compose(self) -> None:
        repository = FakeRepository(steps=_dated_chain())
        cascader = DeadlineCascader(repository, locks=GoalLocks())

        await asyncio.gather(cascader.extend_deadline("S1", 2), cascader.extend_deadline("S2", 3))

        assert repository.due_dates() == {
            "S1": date(2024, 1, 3),
            "S2": date(2024, 1, 9),
            "S3": date(2024, 1, 12),
        }

    @pytest.mark.asyncio
    async def test_progress_phase(self) -> None:
        repository = FakeRepository(steps=_dated_chain())
        progress = RecordingProgress()

        await DeadlineCascader(repository, progress=progress).extend_deadline("S1", 1)

        assert progress.events == [
            ("start", "Cascade", 2),
            ("item", "Cascade"),
            ("item", "Cascade"),
            ("done", "Cascade"),
        ]


class TestAdjustFromStep:
    @pytest.mark.asyncio
    async def test_respaces_later_steps_from_anchor(self) -> None:
        repository = FakeRepository(steps=_dated_chain())

        affected = await DeadlineCascader(repository).adjust_from_step("S1", 2)

        assert affected == 2
        assert repository.due_dates() == {
            "S1": date(2024, 1, 1),
            "S2": date(2024, 1, 3),
            "S3": date(2024, 1, 5),
        }

    @pytest.mark.asyncio
    async def test_undated_anchor_uses_today(self, repository: FakeRepository, clock) -> None:
        affected = await DeadlineCascader(repository, clock=clock).adjust_from_step("S2", 7)

        assert affected == 1
        assert repository.due_dates() == {"S1": None, "S2": None, "S3": date(2024, 1, 17)}

    @pytest.mark.asyncio
    async def test_last_step_has_nothing_to_adjust(self) -> None:
        repository = FakeRepository(steps=_dated_chain())

        assert await DeadlineCascader(repository).adjust_from_step("S3", 1) == 0
        assert repository.due_date_updates == []

    @pytest.mark.asyncio
    async def test_interval_must_be_positive(self) -> None:
        repository = FakeRepository(steps=_dated_chain())

        with pytest.raises(ValueError, match="new_interval_days"):
            await DeadlineCascader(repository).adjust_from_step("S1", 0)

    @pytest.mark.asyncio
    async def test_progress_phase(self) -> None:
        repository = FakeRepository(steps=_dated_chain())
        progress = RecordingProgress()

        await DeadlineCascader(repository, progress=progress).adjust_from_step("S2", 1)

        assert progress.events == [("start", "Reschedule", 1), ("item", "Reschedule"), ("done", "Reschedule")]
