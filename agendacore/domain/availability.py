"""
Editable weekly availability with whole-schedule change notifications.

Every effective edit hands the complete updated schedule to ``on_change``;
callers persist that snapshot wholesale.
"""

import logging
from collections.abc import Mapping, Sequence
from copy import deepcopy
from typing import Any, Callable, Dict, List, Optional

from .models import TimeSlot, WeeklySchedule

logger = logging.getLogger(__name__)

NEW_SLOT_RANGE = ("13:00", "18:00")

SLOT_FIELDS = ("start", "end")

ChangeCallback = Callable[[WeeklySchedule], None]


def initial_schedule(value: Any = None) -> WeeklySchedule:
    """
    Resolve a caller supplied value into a schedule.

    - ``WeeklySchedule``: adopted (copied)
    - list payload: parsed from the persisted form
    - mapping: legacy single-range day map
    - non-blank string: legacy free text, discarded; default template, all closed
    - ``None``, blank string, empty list: default template
    """
    if isinstance(value, WeeklySchedule):
        return value.copy()

    if isinstance(value, str):
        if value.strip():
            logger.debug("Discarding legacy free-text schedule %r", value)
            return WeeklySchedule.default(closed=True)
        return WeeklySchedule.default()

    if isinstance(value, Mapping):
        if not value:
            return WeeklySchedule.default()
        return WeeklySchedule.from_day_map(value)

    if isinstance(value, Sequence) and value:
        return WeeklySchedule.from_payload(value)

    return WeeklySchedule.default()


class WeeklyAvailability:
    """
    Holds a weekly schedule and applies slot edits to it.

    No validation happens here: overlapping or inverted slots are kept as
    entered. Day and slot indices are not bounds checked beyond normal
    indexing. See ``schedule_checks`` for opt-in validation.
    """

    def __init__(self, value: Any = None, on_change: Optional[ChangeCallback] = None):
        self._schedule = initial_schedule(value)
        self._on_change = on_change

    @property
    def schedule(self) -> WeeklySchedule:
        """The live schedule. Mutate it only through this class."""
        return self._schedule

    def snapshot(self) -> WeeklySchedule:
        return self._schedule.copy()

    def to_payload(self) -> List[Dict[str, Any]]:
        return self._schedule.to_payload()

    def is_last_slot(self, day_index: int, slot_index: int) -> bool:
        return self._schedule.is_last_slot(day_index, slot_index)

    def set_day_open(self, day_index: int, is_open: bool) -> None:
        """Open or close one day. Its slots are left as they are."""
        self._schedule[day_index].is_open = is_open
        self._notify()

    def set_slot_time(self, day_index: int, slot_index: int, field: str, value: str) -> None:
        """Set ``start`` or ``end`` of one slot."""
        if field not in SLOT_FIELDS:
            raise ValueError(f"field must be 'start' or 'end', got {field!r}")
        setattr(self._schedule[day_index].slots[slot_index], field, value)
        self._notify()

    def add_slot(self, day_index: int) -> None:
        """Append a 13:00-18:00 slot to a day."""
        start, end = NEW_SLOT_RANGE
        self._schedule[day_index].slots.append(TimeSlot(start=start, end=end))
        self._notify()

    def remove_slot(self, day_index: int, slot_index: int) -> bool:
        """
        Remove one slot, unless it is the only slot left on that day.

        Returns:
            True if a slot was removed, False for the no-op case.
        """
        slots = self._schedule[day_index].slots
        if len(slots) <= 1:
            return False
        del slots[slot_index]
        self._notify()
        return True

    def copy_day_to_all(self, source_day_index: int) -> None:
        """Overwrite every day's open flag and slots with the source day's."""
        source = self._schedule[source_day_index]
        is_open = source.is_open
        slots = deepcopy(source.slots)
        for day in self._schedule:
            day.is_open = is_open
            day.slots = deepcopy(slots)
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self._schedule.copy())
