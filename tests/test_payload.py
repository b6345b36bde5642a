import datetime as dt
import json

import pytest

from session_layout.errors import PayloadError
from session_layout.models import SessionStatus
from session_layout.payload import load_payload, read_payload_file

RAW = {
    "weekStart": "2026-10-18",
    "weekEnd": "2026-10-24",
    "today": "2026-10-19",
    "scope": "organization",
    "intervalMinutes": 30,
    "sessionDurationMinutes": 30,
    "timeWindow": {
        "start": "08:00",
        "end": "12:00",
        "startMinutes": 480,
        "endMinutes": 720,
        "intervalMinutes": 30,
    },
    "legend": [{"id": "i1", "name": "דנה", "color": "#2563eb", "isActive": True}],
    "days": [
        {
            "date": "2026-10-18",
            "label": "Sunday",
            "dayOfWeek": 1,
            "sessions": [
                {
                    "studentId": "s1",
                    "studentName": "אבי",
                    "instructorId": "i1",
                    "instructorName": "דנה",
                    "instructorColor": "#2563eb",
                    "instructorIsActive": True,
                    "time": "10:00",
                    "timeMinutes": 600,
                    "status": "complete",
                    "hasRecord": True,
                    "recordId": True,
                    "durationMinutes": 30,
                }
            ],
        },
        {"date": "2026-10-19", "dayOfWeek": 2, "sessions": []},
    ],
}


def test_load_payload_reads_camel_case() -> None:
    payload = load_payload(RAW)

    assert payload.week_start == dt.date(2026, 10, 18)
    assert payload.time_window.start_minutes == 480
    assert payload.time_window.end_minutes == 720
    session = payload.days[0].sessions[0]
    assert session.student_name == "אבי"
    assert session.status is SessionStatus.COMPLETE
    assert session.start_minutes == 600
    assert session.record_id is None


def test_load_payload_flags_today() -> None:
    payload = load_payload(RAW)
    assert [day.is_today for day in payload.days] == [False, True]


def test_session_time_resolution_is_lenient() -> None:
    raw = dict(RAW)
    raw["days"] = [
        {
            "date": "2026-10-18",
            "sessions": [
                {"studentId": 1, "time": "09:30"},
                {"studentId": 2, "timeMinutes": 2000, "time": "11:15"},
                {"studentId": 3, "timeMinutes": "abc", "time": "25:99"},
                {"studentId": 4, "time": 930},
                {"studentId": 5, "timeMinutes": 615.0},
            ],
        }
    ]
    sessions = load_payload(raw).days[0].sessions

    assert [s.student_id for s in sessions] == ["1", "2", "3", "4", "5"]
    assert [s.start_minutes for s in sessions] == [570, 675, None, None, 615]


def test_missing_window_and_duration_stay_unset() -> None:
    payload = load_payload({"days": [], "timeWindow": None, "sessionDurationMinutes": None})
    assert payload.time_window is None
    assert payload.session_duration_minutes is None
    assert payload.interval_minutes is None


def test_legend_and_session_duration_are_kept() -> None:
    raw = {
        "sessionDurationMinutes": -5,
        "legend": [{"id": "i1", "name": "דנה", "color": "#2563eb", "isActive": False}],
        "days": [
            {
                "date": "2026-10-18",
                "sessions": [{"studentId": "s1", "timeMinutes": 600, "durationMinutes": 45}],
            }
        ],
    }
    payload = load_payload(raw)

    assert payload.session_duration_minutes is None
    assert payload.days[0].sessions[0].duration_minutes == 45
    (key,) = payload.legend
    assert (key.id, key.name, key.is_active) == ("i1", "דנה", False)


def test_round_trip_keeps_camel_case_keys() -> None:
    dumped = load_payload(RAW).model_dump(mode="json", by_alias=True)
    assert dumped["timeWindow"]["startMinutes"] == 480
    assert dumped["days"][0]["sessions"][0]["studentName"] == "אבי"


@pytest.mark.parametrize(
    "raw",
    [
        [],
        {"days": "monday"},
        {"days": [{"date": "not-a-date"}]},
        {"days": [{"date": "2026-10-18", "sessions": [{"studentId": "x", "status": "late"}]}]},
    ],
)
def test_structural_problems_raise_payload_error(raw) -> None:
    with pytest.raises(PayloadError):
        load_payload(raw)


def test_read_payload_file(tmp_path) -> None:
    path = tmp_path / "week.json"
    path.write_text(json.dumps(RAW, ensure_ascii=False), encoding="utf-8")
    assert len(read_payload_file(path).days) == 2

    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(PayloadError):
        read_payload_file(broken)
