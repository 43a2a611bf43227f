"""Tests for dependency-aware step ordering."""

from __future__ import annotations

import itertools
import logging

import pytest

from goalpilot import Step, resolve_dependencies, resolve_order


def _step(step_id: str, order: int, *deps: str, goal_id: str = "g1") -> Step:
    return Step(id=step_id, goal_id=goal_id, order_index=order, dependency_step_ids=list(deps))


def _ids(steps: list[Step]) -> list[str]:
    return [step.id for step in steps]


class TestAcyclicGraphs:
    def test_chain_follows_dependencies(self) -> None:
        steps = [_step("S1", 0), _step("S2", 1, "S1"), _step("S3", 2, "S2")]
        assert _ids(resolve_order(steps)) == ["S1", "S2", "S3"]

    def test_dependency_overrides_order_index(self) -> None:
        steps = [_step("A", 0, "C"), _step("B", 1), _step("C", 2)]
        assert _ids(resolve_order(steps)) == ["B", "C", "A"]

    def test_ready_steps_picked_by_order_index(self) -> None:
        steps = [_step("late", 5), _step("early", 1), _step("mid", 3)]
        assert _ids(resolve_order(steps)) == ["early", "mid", "late"]

    def test_equal_order_index_keeps_input_position(self) -> None:
        steps = [_step("x", 1), _step("y", 1), _step("z", 0)]
        assert _ids(resolve_order(steps)) == ["z", "x", "y"]

    def test_every_prerequisite_precedes_its_dependent(self) -> None:
        steps = [
            _step("a", 4),
            _step("b", 3, "a"),
            _step("c", 2, "a"),
            _step("d", 1, "b", "c"),
            _step("e", 0, "d"),
            _step("f", 6),
        ]
        for permutation in itertools.permutations(steps):
            ordered = _ids(resolve_order(list(permutation)))
            position = {step_id: index for index, step_id in enumerate(ordered)}
            for step in steps:
                for dep in step.dependency_step_ids:
                    assert position[dep] < position[step.id]

    def test_prerequisites_precede_dependents_despite_dangling_edges(self) -> None:
        steps = [
            _step("a", 0, "gone"),
            _step("b", 1, "d"),
            _step("c", 2, "b"),
            _step("d", 3),
            _step("e", 4, "c", "missing"),
        ]
        for permutation in itertools.permutations(steps):
            ordered = _ids(resolve_order(list(permutation)))
            position = {step_id: index for index, step_id in enumerate(ordered)}
            assert position["d"] < position["b"] < position["c"] < position["e"]

    def test_no_fallback_for_satisfiable_graph(self) -> None:
        resolution = resolve_dependencies([_step("S1", 0), _step("S2", 1, "S1")])
        assert resolution.fallback_used is False
        assert resolution.unresolved_ids == []

    def test_empty_input(self) -> None:
        resolution = resolve_dependencies([])
        assert resolution.ordered == []
        assert resolution.fallback_used is False


class TestDegenerateGraphs:
    def test_cycle_falls_back_to_order_index_for_all_remaining(self) -> None:
        steps = [_step("S1", 0, "S2"), _step("S2", 1, "S1"), _step("S3", 2)]
        resolution = resolve_dependencies(steps)
        assert _ids(resolution.ordered) == ["S1", "S2", "S3"]
        assert resolution.fallback_used is True
        assert resolution.unresolved_ids == ["S1", "S2"]

    def test_cycle_after_satisfiable_prefix(self) -> None:
        steps = [_step("A", 0), _step("B", 1, "C"), _step("C", 2, "B"), _step("D", 3, "A")]
        resolution = resolve_dependencies(steps)
        assert _ids(resolution.ordered) == ["A", "B", "C", "D"]
        assert resolution.fallback_used is True

    def test_blocked_step_with_higher_order_index_waits_for_ready_ones(self) -> None:
        steps = [_step("A", 0), _step("B", 1), _step("X", 2, "missing")]
        resolution = resolve_dependencies(steps)
        assert _ids(resolution.ordered) == ["A", "B", "X"]
        assert resolution.fallback_used is True
        assert resolution.unresolved_ids == ["X"]

    def test_dangling_dependency_is_placed_last(self) -> None:
        steps = [_step("S1", 0, "elsewhere"), _step("S2", 1)]
        resolution = resolve_dependencies(steps)
        assert _ids(resolution.ordered) == ["S2", "S1"]
        assert resolution.fallback_used is True
        assert resolution.unresolved_ids == ["S1"]

    def test_dangling_dependency_keeps_later_edges_ordered(self) -> None:
        steps = [_step("S0", 0, "elsewhere"), _step("S1", 1, "S2"), _step("S2", 2)]
        resolution = resolve_dependencies(steps)
        assert _ids(resolution.ordered) == ["S2", "S1", "S0"]
        assert resolution.unresolved_ids == ["S0"]

    def test_step_behind_dangling_dependency_is_finished_by_order_index(self) -> None:
        steps = [_step("S0", 0, "elsewhere"), _step("S1", 1, "S0"), _step("S2", 2)]
        resolution = resolve_dependencies(steps)
        assert _ids(resolution.ordered) == ["S2", "S0", "S1"]
        assert resolution.unresolved_ids == ["S0", "S1"]

    def test_step_behind_cycle_stops_placement(self) -> None:
        steps = [_step("X", 0, "Y"), _step("Y", 1, "Z"), _step("Z", 2, "Y"), _step("W", 3)]
        resolution = resolve_dependencies(steps)
        assert _ids(resolution.ordered) == ["X", "Y", "Z", "W"]
        assert resolution.fallback_used is True

    def test_self_dependency_is_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        steps = [_step("S1", 0, "S1"), _step("S2", 1, "S1")]
        with caplog.at_level(logging.WARNING, logger="goalpilot.scheduling.resolver"):
            resolution = resolve_dependencies(steps)
        assert _ids(resolution.ordered) == ["S1", "S2"]
        assert resolution.fallback_used is False
        assert resolution.ignored_edges == [("S1", "S1")]
        assert "self-dependency" in caplog.text

    def test_cross_goal_dependency_is_ignored(self) -> None:
        steps = [_step("A", 0, "B"), _step("B", 1, goal_id="g2")]
        resolution = resolve_dependencies(steps)
        assert _ids(resolution.ordered) == ["A", "B"]
        assert resolution.fallback_used is False
        assert resolution.ignored_edges == [("A", "B")]

    def test_fallback_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="goalpilot.scheduling.resolver"):
            resolve_dependencies([_step("S1", 0, "S2"), _step("S2", 1, "S1")])
        assert "falling back to order_index" in caplog.text

    @pytest.mark.parametrize(
        "edges",
        [
            {"a": ["b"], "b": ["c"], "c": ["a"]},
            {"a": ["a"], "b": ["zzz"], "c": []},
            {"a": ["b"], "b": ["a"], "c": ["a"], "d": []},
        ],
    )
    def test_always_returns_a_permutation(self, edges: dict[str, list[str]]) -> None:
        steps = [_step(step_id, index, *deps) for index, (step_id, deps) in enumerate(edges.items())]
        ordered = resolve_order(steps)
        assert sorted(_ids(ordered)) == sorted(edges)
        assert len(ordered) == len(steps)

    def test_input_is_not_modified(self) -> None:
        steps = [_step("S2", 1, "S1"), _step("S1", 0)]
        resolve_order(steps)
        assert _ids(steps) == ["S2", "S1"]
