"""
Human readable weekly summary, e.g. ``Seg-Sex: 08:00 às 18:00 | Sáb: 09:00 às 17:00``.
"""

from typing import Dict, List

from .models import DaySchedule, WeeklySchedule

SHORT_LABELS: Dict[str, str] = {
    "monday": "Seg",
    "tuesday": "Ter",
    "wednesday": "Qua",
    "thursday": "Qui",
    "friday": "Sex",
    "saturday": "Sáb",
    "sunday": "Dom",
}

CLOSED_TEXT = "Fechado"


def short_label(day_key: str) -> str:
    return SHORT_LABELS.get(day_key, day_key)


def format_slots(day: DaySchedule) -> str:
    return ", ".join(f"{slot.start} às {slot.end}" for slot in day.slots)


def summarize(schedule: WeeklySchedule) -> str:
    """
    One-line summary of the open days.

    Consecutive open days with identical slots are grouped into a range.
    Closed days are left out; a week with no open day reads ``Fechado``.
    """
    groups: List[List[DaySchedule]] = []
    for day in schedule:
        if not day.is_open:
            groups.append([])
            continue
        if groups and groups[-1] and groups[-1][-1].slots == day.slots:
            groups[-1].append(day)
        else:
            groups.append([day])

    parts = []
    for group in groups:
        if not group:
            continue
        first, last = group[0], group[-1]
        label = short_label(first.day)
        if last is not first:
            label = f"{label}-{short_label(last.day)}"
        parts.append(f"{label}: {format_slots(first)}")

    return " | ".join(parts) if parts else CLOSED_TEXT
