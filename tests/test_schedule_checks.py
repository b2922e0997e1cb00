"""
Tests for opt-in schedule checks and the weekly summary.
"""

from datetime import time

from agendacore.domain.formatting import summarize
from agendacore.domain.models import TimeSlot, WeeklySchedule
from agendacore.domain.schedule_checks import INVALID_TIME, INVERTED, OVERLAP, find_slot_issues, parse_clock


class TestParseClock:
    """Tests for HH:MM parsing."""

    def test_valid(self):
        assert parse_clock("08:00") == time(8, 0)
        assert parse_clock("23:59") == time(23, 59)

    def test_invalid(self):
        for value in ("8:00", "24:00", "12:60", "noon", "", "08:00:00"):
            assert parse_clock(value) is None, value


class TestFindSlotIssues:
    """Tests for find_slot_issues."""

    def test_default_template_is_clean(self):
        assert find_slot_issues(WeeklySchedule.default(closed=False)) == []

    def test_inverted_slot(self):
        schedule = WeeklySchedule.default(closed=False)
        schedule[0].slots[0] = TimeSlot("18:00", "08:00")

        issues = find_slot_issues(schedule)

        assert [(i.day, i.slot_index, i.kind) for i in issues] == [("monday", 0, INVERTED)]

    def test_overlapping_slots(self):
        schedule = WeeklySchedule.default(closed=False)
        schedule[1].slots.append(TimeSlot("13:00", "18:00"))

        issues = find_slot_issues(schedule)

        assert len(issues) == 1
        assert issues[0].kind == OVERLAP
        assert issues[0].slot_index == 1

    def test_adjacent_slots_do_not_overlap(self):
        schedule = WeeklySchedule.default(closed=False)
        schedule[2].slots = [TimeSlot("08:00", "12:00"), TimeSlot("12:00", "18:00")]

        assert find_slot_issues(schedule) == []

    def test_invalid_time(self):
        schedule = WeeklySchedule.default(closed=False)
        schedule[3].slots[0].start = "25:00"

        issues = find_slot_issues(schedule)

        assert issues[0].kind == INVALID_TIME
        assert "25:00" in issues[0].message

    def test_closed_days_skipped_by_default(self):
        schedule = WeeklySchedule.default()
        schedule[0].slots[0] = TimeSlot("18:00", "08:00")

        assert find_slot_issues(schedule) == []
        assert len(find_slot_issues(schedule, include_closed=True)) == 1


class TestSummarize:
    """Tests for the one-line weekly summary."""

    def test_all_closed(self):
        assert summarize(WeeklySchedule.default()) == "Fechado"

    def test_groups_consecutive_days(self):
        schedule = WeeklySchedule.default(closed=False)
        schedule[6].is_open = False

        assert summarize(schedule) == "Seg-Sex: 08:00 às 18:00 | Sáb: 09:00 às 17:00"

    def test_closed_day_breaks_group(self):
        schedule = WeeklySchedule.default()
        for index in (0, 1, 3):
            schedule[index].is_open = True

        assert summarize(schedule) == "Seg-Ter: 08:00 às 18:00 | Qui: 08:00 às 18:00"

    def test_multiple_slots(self):
        schedule = WeeklySchedule.default()
        schedule[5].is_open = True
        schedule[5].slots = [TimeSlot("08:00", "12:00"), TimeSlot("13:00", "17:00")]

        assert summarize(schedule) == "Sáb: 08:00 às 12:00, 13:00 às 17:00"
