"""Milestone grouping."""

from __future__ import annotations

from collections.abc import Sequence

from goalpilot.contracts.goal import Step
from goalpilot.contracts.schedule import MilestoneGroup

DEFAULT_GROUP_SIZE = 3


def group_milestones(steps: Sequence[Step], group_size: int = DEFAULT_GROUP_SIZE) -> list[MilestoneGroup]:
    """Slice *steps* into consecutive windows of *group_size* by ``order_index``.

    Dependency order is deliberately not consulted so that groups stay stable
    when steps are inserted.  The input sequence is not modified.
    """
    if group_size < 1:
        raise ValueError("group_size must be at least 1")

    ordered = sorted(steps, key=lambda step: step.order_index)
    groups: list[MilestoneGroup] = []
    for start in range(0, len(ordered), group_size):
        window = ordered[start : start + group_size]
        number = start // group_size + 1
        groups.append(
            MilestoneGroup(
                id=f"milestone-{number}",
                title=f"Milestone {number}",
                steps=window,
                due_date=window[-1].due_date,
            )
        )
    return groups
