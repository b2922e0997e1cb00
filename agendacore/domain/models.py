"""
Weekly availability data model shared by stores, professionals and businesses.

A ``WeeklySchedule`` always holds seven ``DaySchedule`` entries, Monday first.
Its wire format is the JSON list persisted per owning entity::

    [{"day": "monday", "dayLabel": "Segunda-feira", "isOpen": false,
      "timeSlots": [{"start": "08:00", "end": "18:00"}]}, ...]
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Sequence, Tuple

from .exceptions import ScheduleFormatError

WEEK_DAYS: Tuple[Tuple[str, str], ...] = (
    ("monday", "Segunda-feira"),
    ("tuesday", "Terça-feira"),
    ("wednesday", "Quarta-feira"),
    ("thursday", "Quinta-feira"),
    ("friday", "Sexta-feira"),
    ("saturday", "Sábado"),
    ("sunday", "Domingo"),
)

DAY_KEYS: Tuple[str, ...] = tuple(key for key, _ in WEEK_DAYS)

WEEKDAY_RANGE = ("08:00", "18:00")
WEEKEND_RANGE = ("09:00", "17:00")


@dataclass
class TimeSlot:
    """
    One contiguous open range within a day, as 24-hour ``HH:MM`` text.

    ``start < end`` is expected but not enforced.
    """
    start: str
    end: str

    def to_payload(self) -> Dict[str, str]:
        return {"start": self.start, "end": self.end}


@dataclass
class DaySchedule:
    """Open flag and ordered slots for one day of the week."""
    day: str
    label: str
    is_open: bool = False
    slots: List[TimeSlot] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "day": self.day,
            "dayLabel": self.label,
            "isOpen": self.is_open,
            "timeSlots": [slot.to_payload() for slot in self.slots],
        }

    def same_hours_as(self, other: "DaySchedule") -> bool:
        """Compare schedule content, ignoring the day identifiers."""
        return self.is_open == other.is_open and self.slots == other.slots


def _default_day(index: int, closed: bool = True) -> DaySchedule:
    key, label = WEEK_DAYS[index]
    start, end = WEEKDAY_RANGE if index < 5 else WEEKEND_RANGE
    return DaySchedule(day=key, label=label, is_open=not closed, slots=[TimeSlot(start, end)])


def _parse_slot(raw: Any, day: str) -> TimeSlot:
    if not isinstance(raw, Mapping):
        raise ScheduleFormatError(f"Time slot for {day} must be an object, got {raw!r}")
    try:
        return TimeSlot(start=str(raw["start"]), end=str(raw["end"]))
    except KeyError as exc:
        raise ScheduleFormatError(f"Time slot for {day} is missing {exc}") from exc


class WeeklySchedule:
    """
    Seven day schedules in fixed Monday to Sunday order.

    The set and order of days never change after construction; only the
    contents of each ``DaySchedule`` are mutable.
    """

    def __init__(self, days: Sequence[DaySchedule]):
        keys = tuple(day.day for day in days)
        if keys != DAY_KEYS:
            raise ScheduleFormatError(
                f"Weekly schedule must list {', '.join(DAY_KEYS)} in order, got {list(keys)}"
            )
        self._days: Tuple[DaySchedule, ...] = tuple(days)

    @classmethod
    def default(cls, closed: bool = True) -> "WeeklySchedule":
        """
        Default template: Monday to Friday 08:00-18:00, weekend 09:00-17:00.

        Every day starts closed unless ``closed`` is False.
        """
        return cls([_default_day(i, closed=closed) for i in range(len(WEEK_DAYS))])

    @classmethod
    def from_payload(cls, payload: Sequence[Any]) -> "WeeklySchedule":
        """
        Build a schedule from its persisted list form.

        Raises:
            ScheduleFormatError: If the payload is not a seven-day list in
                Monday to Sunday order with the expected keys.
        """
        if isinstance(payload, (str, bytes)) or not isinstance(payload, Sequence):
            raise ScheduleFormatError(f"Weekly schedule must be a list, got {type(payload).__name__}")
        if len(payload) != len(WEEK_DAYS):
            raise ScheduleFormatError(f"Weekly schedule must have 7 days, got {len(payload)}")

        days: List[DaySchedule] = []
        for raw in payload:
            if not isinstance(raw, Mapping):
                raise ScheduleFormatError(f"Day entry must be an object, got {raw!r}")
            try:
                day = str(raw["day"])
                slots_raw = raw["timeSlots"]
                is_open = raw["isOpen"]
            except KeyError as exc:
                raise ScheduleFormatError(f"Day entry is missing {exc}") from exc
            if not isinstance(slots_raw, Sequence) or isinstance(slots_raw, str):
                raise ScheduleFormatError(f"timeSlots for {day} must be a list")
            days.append(
                DaySchedule(
                    day=day,
                    label=str(raw.get("dayLabel", "")),
                    is_open=bool(is_open),
                    slots=[_parse_slot(slot, day) for slot in slots_raw],
                )
            )
        return cls(days)

    @classmethod
    def from_day_map(cls, mapping: Mapping[str, Any]) -> "WeeklySchedule":
        """
        Convert the single-range ``{"monday": {"start", "end", "active"}}`` shape.

        Days missing from the mapping keep their default template entry.
        """
        schedule = cls.default()
        for index, key in enumerate(DAY_KEYS):
            entry = mapping.get(key)
            if entry is None:
                continue
            if not isinstance(entry, Mapping):
                raise ScheduleFormatError(f"Entry for {key} must be an object, got {entry!r}")
            day = schedule[index]
            default_slot = day.slots[0]
            day.is_open = bool(entry.get("active", False))
            day.slots = [
                TimeSlot(
                    start=str(entry.get("start", default_slot.start)),
                    end=str(entry.get("end", default_slot.end)),
                )
            ]
        return schedule

    def to_payload(self) -> List[Dict[str, Any]]:
        """Serialize to the persisted list form."""
        return [day.to_payload() for day in self._days]

    def to_day_map(self) -> Dict[str, Dict[str, Any]]:
        """Serialize to the single-range day map, keeping each day's first slot."""
        result: Dict[str, Dict[str, Any]] = {}
        for day in self._days:
            first = day.slots[0] if day.slots else TimeSlot("", "")
            result[day.day] = {"start": first.start, "end": first.end, "active": day.is_open}
        return result

    def copy(self) -> "WeeklySchedule":
        """Deep copy; later edits to either schedule do not affect the other."""
        return WeeklySchedule(deepcopy(list(self._days)))

    def day_index(self, key: str) -> int:
        """Index of a day key such as ``"monday"``."""
        try:
            return DAY_KEYS.index(key.lower())
        except ValueError:
            raise ValueError(f"Unknown day {key!r}. Use one of: {', '.join(DAY_KEYS)}") from None

    def is_last_slot(self, day_index: int, slot_index: int) -> bool:
        """True for the final slot of a day, where a new slot gets appended."""
        return slot_index == len(self._days[day_index].slots) - 1

    def __getitem__(self, index: int) -> DaySchedule:
        return self._days[index]

    def __iter__(self) -> Iterator[DaySchedule]:
        return iter(self._days)

    def __len__(self) -> int:
        return len(self._days)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeeklySchedule):
            return NotImplemented
        return self._days == other._days

    def __repr__(self) -> str:
        open_days = [day.day for day in self._days if day.is_open]
        return f"WeeklySchedule(open={open_days})"
