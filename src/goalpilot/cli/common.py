"""Shared CLI helpers."""

from __future__ import annotations

import argparse
from collections.abc import Awaitable, Callable
from datetime import date
from typing import TypeVar

from goalpilot.cli.progress import RichScheduleProgress
from goalpilot.sdk import GoalPilot

T = TypeVar("T")


def format_date(value: date | None) -> str:
    if value is None:
        return "unscheduled"
    return value.isoformat()


def plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


async def call_pilot(
    args: argparse.Namespace,
    action: Callable[[GoalPilot], Awaitable[T]],
    *,
    show_progress: bool = False,
) -> T:
    """Load config, open a :class:`GoalPilot` and run *action* against it.

    Writes render a Rich progress display unless ``--verbose`` is set, in
    which case debug logging takes over the terminal.
    """
    import goalpilot.cli as cli

    config = cli.load_config(args.config)

    if show_progress and not args.verbose:
        with RichScheduleProgress() as progress:
            async with await cli.GoalPilot.from_config(config, progress=progress) as pilot:
                return await action(pilot)
    async with await cli.GoalPilot.from_config(config) as pilot:
        return await action(pilot)
