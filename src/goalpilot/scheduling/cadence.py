"""Free-text cadence detection.

Only a handful of phrases are recognised; anything else is the weekly default.
"""

from __future__ import annotations

import math
import re
from datetime import date

from goalpilot.contracts.goal import Goal
from goalpilot.contracts.schedule import Cadence, Frequency

_DAILY = re.compile(r"daily|every day|each day")
_WEEKLY = re.compile(r"weekly|every week|once a week")
_EVERY_N_DAYS = re.compile(r"every (\d+) days?")

DEFAULT_INTERVAL_DAYS = 7

_FREQUENCY_WORDS = {
    "daily": 1,
    "every other day": 2,
    "weekly": 7,
    "bi-weekly": 14,
}


def _cadence_text(goal: Goal) -> str:
    description = (goal.description or "").lower()
    tags = " ".join(goal.tags).lower()
    return f"{description} {tags}"


def calculate_duration(start: date, end: date) -> str:
    """Human-readable span between two dates: days up to two weeks, then weeks."""
    days = abs((end - start).days)
    if days <= 14:
        return f"{days} days"
    return f"{math.ceil(days / 7)} weeks"


def parse_cadence(goal: Goal, today: date | None = None) -> Cadence:
    """Derive the step spacing for *goal* from its description and tags.

    Never raises; an unrecognised text yields a weekly cadence.
    """
    text = _cadence_text(goal)
    frequency = Frequency.WEEKLY
    interval = DEFAULT_INTERVAL_DAYS

    if _DAILY.search(text):
        frequency, interval = Frequency.DAILY, 1
    elif _WEEKLY.search(text):
        frequency, interval = Frequency.WEEKLY, 7
    elif match := _EVERY_N_DAYS.search(text):
        days = int(match.group(1))
        if days >= 1:
            frequency, interval = Frequency.CUSTOM, days

    start = goal.start_date or today or date.today()
    duration = None
    if goal.start_date is not None and goal.due_date is not None:
        duration = calculate_duration(goal.start_date, goal.due_date)

    return Cadence(frequency=frequency, interval_days=interval, start_date=start, duration_label=duration)


def frequency_to_interval(frequency: str) -> int:
    """Map a frequency word chosen by a user to a spacing in days (weekly if unknown)."""
    return _FREQUENCY_WORDS.get(frequency.strip().lower(), DEFAULT_INTERVAL_DAYS)
