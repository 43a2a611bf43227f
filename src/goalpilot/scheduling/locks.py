"""Per-goal serialization of cascades."""

from __future__ import annotations

import asyncio


class GoalLocks:
    """Registry handing out one :class:`asyncio.Lock` per goal id.

    Two cascades on the same goal never interleave within one process; cascades
    on different goals run independently.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def for_goal(self, goal_id: str) -> asyncio.Lock:
        lock = self._locks.get(goal_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[goal_id] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)
