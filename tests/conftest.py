import datetime as dt

import pytest

from session_layout.models import Day, Session, TimeWindow

MONDAY = dt.date(2026, 10, 19)
TUESDAY = dt.date(2026, 10, 20)


def make_session(student_id, minutes=None, name=None, **kwargs) -> Session:
    fields = {
        "studentId": student_id,
        "studentName": name if name is not None else f"student {student_id}",
        "instructorId": "inst-1",
        "instructorName": "דנה",
        "instructorColor": "#2563eb",
        "status": "upcoming",
    }
    if minutes is not None:
        fields["timeMinutes"] = minutes
    fields.update(kwargs)
    return Session.model_validate(fields)


def make_day(date, sessions) -> Day:
    return Day(date=date, sessions=sessions)


def slot_offset(slot_heights: dict[int, int], slot_minutes: int) -> int:
    return sum(height for minutes, height in slot_heights.items() if minutes < slot_minutes)


@pytest.fixture
def morning_window() -> TimeWindow:
    """08:00-12:00 on the 30 minute grid."""
    return TimeWindow(start_minutes=480, end_minutes=720, interval_minutes=30)
