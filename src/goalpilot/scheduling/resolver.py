"""Dependency-aware step ordering.

Steps are placed one at a time: among the steps whose dependencies are all
placed, the one with the smallest ``order_index`` goes next.  Graphs that
cannot be fully satisfied are finished in plain ``order_index`` order so every
input yields a total order.  A step caught in a cycle, or waiting behind one,
ends placement as soon as it is the lowest-ranked unplaced step; a step that
waits only on an unknown id is left for the end.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from goalpilot.contracts.goal import Step
from goalpilot.contracts.schedule import DependencyResolution

logger = logging.getLogger(__name__)


def _effective_dependencies(
    steps: Sequence[Step],
) -> tuple[list[set[str]], list[tuple[str, str]]]:
    goal_by_id: dict[str, str] = {}
    for step in steps:
        goal_by_id.setdefault(step.id, step.goal_id)

    dependencies: list[set[str]] = []
    ignored: list[tuple[str, str]] = []
    for step in steps:
        deps: set[str] = set()
        for dep_id in step.dependency_step_ids:
            if dep_id == step.id:
                logger.warning("Ignoring self-dependency on step %s", step.id)
                ignored.append((step.id, dep_id))
                continue
            dep_goal = goal_by_id.get(dep_id)
            if dep_goal is not None and dep_goal != step.goal_id:
                logger.warning(
                    "Ignoring cross-goal dependency %s -> %s (goal %s != %s)",
                    step.id,
                    dep_id,
                    step.goal_id,
                    dep_goal,
                )
                ignored.append((step.id, dep_id))
                continue
            # Unknown ids stay in the set and can never be satisfied.
            deps.add(dep_id)
        dependencies.append(deps)
    return dependencies, ignored


def _never_ready(steps: Sequence[Step], dependencies: list[set[str]]) -> set[int]:
    """Return positions of steps no dependency ordering can ever place."""
    satisfiable: set[str] = set()
    pending = set(range(len(steps)))
    changed = True
    while changed:
        changed = False
        for pos in sorted(pending):
            if dependencies[pos] <= satisfiable:
                satisfiable.add(steps[pos].id)
                pending.discard(pos)
                changed = True
    return pending


def resolve_dependencies(steps: Sequence[Step]) -> DependencyResolution:
    """Order *steps* so that prerequisites come first.

    Ties are broken by ``order_index`` and then by input position.  When
    nothing is ready, or the lowest-ranked unplaced step sits in (or behind) a
    cycle, the remaining steps are appended by ``order_index`` and
    ``fallback_used`` is set.  Acyclic graphs are always fully dependency
    ordered; steps blocked by unknown ids only end up after everything that
    can be placed.
    """
    dependencies, ignored = _effective_dependencies(steps)
    blocked = _never_ready(steps, dependencies)
    # Dropping unknown ids leaves exactly the steps in or behind a cycle.
    known_ids = {step.id for step in steps}
    cyclic = _never_ready(steps, [deps & known_ids for deps in dependencies])

    def rank(pos: int) -> tuple[int, int]:
        return (steps[pos].order_index, pos)

    remaining = sorted(range(len(steps)), key=rank)
    placed_ids: set[str] = set()
    ordered: list[Step] = []
    fallback_used = False

    while remaining:
        candidate = next((pos for pos in remaining if dependencies[pos] <= placed_ids), None)
        if candidate is None or any(pos in cyclic for pos in remaining if rank(pos) < rank(candidate)):
            fallback_used = True
            ordered.extend(steps[pos] for pos in remaining)
            break
        ordered.append(steps[candidate])
        placed_ids.add(steps[candidate].id)
        remaining.remove(candidate)

    unresolved_ids = [steps[pos].id for pos in sorted(blocked, key=rank)]
    if fallback_used:
        logger.warning(
            "Dependency graph cannot be satisfied for %d step(s) (%s); falling back to order_index",
            len(unresolved_ids),
            ", ".join(unresolved_ids),
        )
    return DependencyResolution(
        ordered=ordered,
        fallback_used=fallback_used,
        unresolved_ids=unresolved_ids,
        ignored_edges=ignored,
    )


def resolve_order(steps: Sequence[Step]) -> list[Step]:
    """Return *steps* in dependency order. See :func:`resolve_dependencies`."""
    return resolve_dependencies(steps).ordered
