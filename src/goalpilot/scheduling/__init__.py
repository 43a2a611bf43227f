"""Scheduling core: ordering, cadence, milestones and cascades."""

from goalpilot.scheduling.cadence import calculate_duration, frequency_to_interval, parse_cadence
from goalpilot.scheduling.cascader import DeadlineCascader, calculate_default_extension
from goalpilot.scheduling.locks import GoalLocks
from goalpilot.scheduling.milestones import group_milestones
from goalpilot.scheduling.progress import NullScheduleProgress, ScheduleProgress
from goalpilot.scheduling.resolver import resolve_dependencies, resolve_order
from goalpilot.scheduling.scanner import UpcomingMilestoneScanner
from goalpilot.scheduling.scheduler import AutoScheduler

__all__ = [
    "AutoScheduler",
    "DeadlineCascader",
    "GoalLocks",
    "NullScheduleProgress",
    "ScheduleProgress",
    "UpcomingMilestoneScanner",
    "calculate_default_extension",
    "calculate_duration",
    "frequency_to_interval",
    "group_milestones",
    "parse_cadence",
    "resolve_dependencies",
    "resolve_order",
]
