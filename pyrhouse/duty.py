"""Warehouse duty schedule read from the duty spreadsheet."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Optional, Sequence

FRIDAY_COLUMNS = range(6, 30)
SATURDAY_COLUMNS = range(30, 54)
SUNDAY_COLUMNS = range(54, 78)

FULL_DAY_START = time(11, 0)
FULL_DAY_END = time(23, 0)

_CLOCK = re.compile(r"([0-9]{1,2}):([0-9]{2})")


@dataclass
class DutySchedule:
    """One warehouse row of the duty spreadsheet."""

    warehouse_name: str = ""
    installation: str = ""
    tuesday: str = ""
    wednesday: str = ""
    thursday: str = ""
    friday: dict[str, str] = field(default_factory=dict)
    saturday: dict[str, str] = field(default_factory=dict)
    sunday: dict[str, str] = field(default_factory=dict)


@dataclass
class DutyTimeSlot:
    """A period of duty held by one person."""

    start_time: datetime
    end_time: datetime
    person: str


@dataclass
class DutyScheduleResponse:
    """The duties of one person at one warehouse."""

    warehouse_name: str
    installation: str
    schedule: list[DutyTimeSlot] = field(default_factory=list)


def _to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def _header_label(header: Sequence[Any], column: int) -> str:
    if column >= len(header) or not isinstance(header[column], str):
        raise ValueError(f"header of column {column} is missing or not text")
    return header[column]


def parse_duty_schedule(values: Sequence[Sequence[Any]]) -> list[DutySchedule]:
    """Turn spreadsheet rows (header row first) into duty schedules."""
    if len(values) < 2:
        return []

    header = values[0]
    schedules = []
    for number, row in enumerate(values[1:], start=1):
        if len(row) < 2:
            continue
        if len(row) < 5:
            raise ValueError(
                f"row {number} has {len(row)} cells, at least 5 are needed"
            )

        schedule = DutySchedule(
            warehouse_name=_to_string(row[0]),
            installation=_to_string(row[1]),
            tuesday=_to_string(row[2]),
            wednesday=_to_string(row[3]),
            thursday=_to_string(row[4]),
        )
        for day, columns in (
            (schedule.friday, FRIDAY_COLUMNS),
            (schedule.saturday, SATURDAY_COLUMNS),
            (schedule.sunday, SUNDAY_COLUMNS),
        ):
            for column in columns:
                if column >= len(row):
                    break
                day[_header_label(header, column)] = _to_string(row[column])

        schedules.append(schedule)

    return schedules


def split_time_slot(time_slot: str) -> tuple[str, str]:
    """Split a label such as "00:00 - 01:00" into its start and end parts."""
    compact = time_slot.replace(" ", "")
    if len(compact) < 7:
        raise ValueError(f"time slot {time_slot!r} is too short")
    return compact[:5], compact[7:]


def _parse_clock(text: str) -> time:
    match = _CLOCK.fullmatch(text)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour < 24 and minute < 60:
            return time(hour, minute)
    return time()


def parse_time_slot(
    time_slot: str, today: Optional[date] = None
) -> tuple[datetime, datetime]:
    """Start and end of a slot label on the given day; unreadable times are midnight."""
    day = today or date.today()
    start, end = split_time_slot(time_slot)
    return (
        datetime.combine(day, _parse_clock(start)),
        datetime.combine(day, _parse_clock(end)),
    )


def schedule_for_person(
    schedules: Sequence[DutySchedule],
    person_name: str,
    today: Optional[date] = None,
) -> list[DutyScheduleResponse]:
    """Collect the duties of one person, one response per warehouse that has any."""
    day = today or date.today()
    full_day_start = datetime.combine(day, FULL_DAY_START)
    full_day_end = datetime.combine(day, FULL_DAY_END)

    result = []
    for schedule in schedules:
        slots = [
            DutyTimeSlot(full_day_start, full_day_end, person_name)
            for holder in (schedule.tuesday, schedule.wednesday, schedule.thursday)
            if holder == person_name
        ]
        for hours in (schedule.friday, schedule.saturday, schedule.sunday):
            for label, holder in hours.items():
                if holder == person_name:
                    start, end = parse_time_slot(label, day)
                    slots.append(DutyTimeSlot(start, end, person_name))

        if slots:
            result.append(
                DutyScheduleResponse(
                    warehouse_name=schedule.warehouse_name,
                    installation=schedule.installation,
                    schedule=slots,
                )
            )
    return result