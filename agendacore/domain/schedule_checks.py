"""
Opt-in consistency checks for weekly schedules.

Editing never validates; these checks are for callers that want to warn
about inverted or overlapping slots before saving.
"""

import re
from dataclasses import dataclass
from datetime import time
from typing import List, Optional, Tuple

import pendulum

from .models import DaySchedule, WeeklySchedule

_HH_MM = re.compile(r"^\d{2}:\d{2}$")

INVALID_TIME = "invalid_time"
INVERTED = "inverted"
OVERLAP = "overlap"


@dataclass(frozen=True)
class SlotIssue:
    """A problem found in one slot of a day."""
    day: str
    slot_index: int
    kind: str
    message: str


def parse_clock(value: str) -> Optional[time]:
    """Parse 24-hour ``HH:MM`` text, returning None when it is not valid."""
    if not isinstance(value, str) or not _HH_MM.match(value):
        return None
    try:
        return pendulum.from_format(value, "HH:mm").time()
    except ValueError:
        return None


def _check_day(day: DaySchedule) -> List[SlotIssue]:
    issues: List[SlotIssue] = []
    ranges: List[Tuple[int, time, time]] = []

    for index, slot in enumerate(day.slots):
        start = parse_clock(slot.start)
        end = parse_clock(slot.end)
        if start is None or end is None:
            bad = slot.start if start is None else slot.end
            issues.append(
                SlotIssue(day.day, index, INVALID_TIME, f"{day.label}: '{bad}' is not a valid HH:MM time")
            )
            continue
        if start >= end:
            issues.append(
                SlotIssue(
                    day.day, index, INVERTED,
                    f"{day.label}: slot {slot.start}-{slot.end} ends before it starts",
                )
            )
            continue
        ranges.append((index, start, end))

    # Half-open intervals: 08:00-12:00 and 12:00-18:00 do not overlap
    for pos, (index_a, start_a, end_a) in enumerate(ranges):
        for index_b, start_b, end_b in ranges[pos + 1:]:
            if start_a < end_b and end_a > start_b:
                issues.append(
                    SlotIssue(
                        day.day, index_b, OVERLAP,
                        f"{day.label}: slot {index_b + 1} overlaps slot {index_a + 1}",
                    )
                )
    return issues


def find_slot_issues(schedule: WeeklySchedule, include_closed: bool = False) -> List[SlotIssue]:
    """
    Collect invalid, inverted and overlapping slots.

    Closed days are skipped unless ``include_closed`` is set, since their
    slots are kept only for when the day is reopened.
    """
    issues: List[SlotIssue] = []
    for day in schedule:
        if day.is_open or include_closed:
            issues.extend(_check_day(day))
    return issues
