from datetime import date, datetime

import pytest

from pyrhouse.duty import (
    DutySchedule,
    DutyTimeSlot,
    parse_duty_schedule,
    parse_time_slot,
    schedule_for_person,
    split_time_slot,
)

DAY = date(2024, 5, 3)


def slot_labels():
    return [f"{hour:02d}:00 - {(hour + 1) % 24:02d}:00" for hour in range(24)]


HEADER = ["Magazyn", "Instalacja", "Wtorek", "Środa", "Czwartek", "x"] + slot_labels() * 3


def full_row(name="M1"):
    return [name, "Prąd", "Ania", "Bartek", "Celina", ""] + [f"p{i}" for i in range(72)]


def test_parse_needs_data_rows():
    assert parse_duty_schedule([]) == []
    assert parse_duty_schedule([HEADER]) == []


def test_parse_skips_rows_with_fewer_than_two_cells():
    assert parse_duty_schedule([HEADER, ["M1"], []]) == []


def test_parse_rejects_rows_without_weekday_cells():
    with pytest.raises(ValueError):
        parse_duty_schedule([HEADER, ["M1", "Prąd", "Ania"]])


def test_parse_full_row_fills_every_day():
    row = full_row()
    (schedule,) = parse_duty_schedule([HEADER, row])

    assert schedule.warehouse_name == "M1"
    assert schedule.installation == "Prąd"
    assert (schedule.tuesday, schedule.wednesday, schedule.thursday) == (
        "Ania",
        "Bartek",
        "Celina",
    )
    assert schedule.friday == dict(zip(HEADER[6:30], row[6:30]))
    assert schedule.saturday == dict(zip(HEADER[30:54], row[30:54]))
    assert schedule.sunday == dict(zip(HEADER[54:78], row[54:78]))


def test_parse_short_row_fills_only_present_columns():
    row = full_row()[:10]
    (schedule,) = parse_duty_schedule([HEADER, row])
    assert schedule.friday == dict(zip(HEADER[6:10], row[6:10]))
    assert schedule.saturday == {}
    assert schedule.sunday == {}


def test_parse_converts_cells_to_text():
    (schedule,) = parse_duty_schedule([HEADER, [None, 7, 2.0, True, "x"]])
    assert schedule.warehouse_name == ""
    assert schedule.installation == "7"
    assert schedule.tuesday == "2"
    assert schedule.wednesday == "true"


def test_parse_requires_text_headers_for_slot_columns():
    header = HEADER[:6] + [None]
    with pytest.raises(ValueError):
        parse_duty_schedule([header, full_row()[:7]])


def test_split_time_slot_keeps_source_offsets():
    assert split_time_slot("00:00 - 01:00") == ("00:00", "1:00")


def test_split_time_slot_rejects_short_labels():
    with pytest.raises(ValueError):
        split_time_slot("00:00")


def test_parse_time_slot_on_given_day():
    assert parse_time_slot("00:00 - 01:00", DAY) == (
        datetime(2024, 5, 3, 0, 0),
        datetime(2024, 5, 3, 1, 0),
    )


def test_parse_time_slot_unreadable_times_are_midnight():
    start, end = parse_time_slot("xx:xx - yy:yy", DAY)
    assert start == end == datetime.combine(DAY, datetime.min.time())


def test_schedule_for_person_weekday_slots_span_the_day():
    schedules = [DutySchedule(warehouse_name="M1", installation="Prąd",
                              tuesday="Ania", thursday="Ania")]
    (response,) = schedule_for_person(schedules, "Ania", DAY)

    assert response.warehouse_name == "M1"
    assert response.installation == "Prąd"
    assert len(response.schedule) == 2
    first, second = response.schedule
    assert first == second
    assert first.person == "Ania"
    assert first.start_time.date() == DAY
    assert first.start_time < first.end_time


def test_schedule_for_person_weekend_slots_follow_labels():
    label = "00:00 - 01:00"
    schedules = [DutySchedule(warehouse_name="M1", friday={label: "Ania", "02:00 - 03:00": "Bartek"},
                              sunday={label: "Ania"})]
    (response,) = schedule_for_person(schedules, "Ania", DAY)

    expected = DutyTimeSlot(*parse_time_slot(label, DAY), "Ania")
    assert response.schedule == [expected, expected]


def test_schedule_for_person_skips_warehouses_without_duties():
    schedules = [
        DutySchedule(warehouse_name="M1", tuesday="Bartek"),
        DutySchedule(warehouse_name="M2", wednesday="Ania"),
        DutySchedule(warehouse_name="M3", saturday={"00:00 - 01:00": "Ania"}),
    ]
    responses = schedule_for_person(schedules, "Ania", DAY)
    assert [response.warehouse_name for response in responses] == ["M2", "M3"]
    assert schedule_for_person(schedules, "Zenon", DAY) == []


def test_schedule_for_person_defaults_to_today():
    schedules = [DutySchedule(warehouse_name="M1", tuesday="Ania")]
    (response,) = schedule_for_person(schedules, "Ania")
    assert response.schedule[0].start_time.date() == date.today()


def test_parsed_schedule_round_trip():
    row = full_row()
    row[6] = "Ania"
    schedules = parse_duty_schedule([HEADER, row])
    (response,) = schedule_for_person(schedules, "Ania", DAY)
    assert [slot.person for slot in response.schedule] == ["Ania", "Ania"]
    assert response.schedule[1] == DutyTimeSlot(*parse_time_slot(HEADER[6], DAY), "Ania")