import datetime as dt

from session_layout.config import LayoutConfig
from session_layout.models import WeeklyPayload
from session_layout.payload import load_payload
from session_layout.report import format_week_table
from session_layout.service import WeeklyLayoutService
from session_layout.view_state import ViewState

SUNDAY = dt.date(2026, 10, 18)


def _session(student_id, name, minutes, **extra):
    return {
        "studentId": student_id,
        "studentName": name,
        "instructorId": "i1",
        "instructorName": "דנה",
        "instructorColor": "#2563eb",
        "timeMinutes": minutes,
        "status": "missing",
        **extra,
    }


def _payload(window=True) -> WeeklyPayload:
    raw = {
        "weekStart": "2026-10-18",
        "weekEnd": "2026-10-24",
        "sessionDurationMinutes": 30,
        "days": [
            {
                "date": "2026-10-18",
                "sessions": [
                    _session("s1", "אבי", 600),
                    _session("s2", "בני", 600),
                    _session("s3", "גיל", 600, status="complete"),
                    _session("s4", "דן", None, time="bad"),
                ],
            },
            {"date": "2026-10-19", "sessions": [_session("s5", "הדס", 615)]},
        ],
    }
    if window:
        raw["timeWindow"] = {"startMinutes": 480, "endMinutes": 720, "intervalMinutes": 30}
    return load_payload(raw)


def test_layout_week_assembles_week() -> None:
    layout = WeeklyLayoutService().layout_week(_payload())

    assert layout.slots[0] == 480
    assert layout.slot_heights[600] == 64
    assert list(layout.days) == [SUNDAY, dt.date(2026, 10, 19)]
    sunday = layout.days[SUNDAY]
    assert len(sunday.chips) == 2
    assert sunday.overflow_badges[0].sessions[0].student_id == "s3"
    assert sunday.excluded.unparseable_time == 1
    assert [entry.name for entry in layout.legend] == ["דנה"]


def test_layout_week_derives_missing_window() -> None:
    layout = WeeklyLayoutService().layout_week(_payload(window=False))

    assert layout.time_window.start_minutes == 600
    assert layout.time_window.end_minutes == 660
    assert layout.slots == [600, 630, 660]
    assert len(layout.days[dt.date(2026, 10, 19)].chips) == 1


def test_derived_window_uses_payload_interval() -> None:
    raw = _payload(window=False).model_dump(by_alias=True, mode="json")
    raw["intervalMinutes"] = 60

    layout = WeeklyLayoutService().layout_week(load_payload(raw))

    assert layout.time_window.interval_minutes == 60
    assert layout.slots == [600, 660, 720]


def test_configured_fallbacks_apply_when_payload_has_none() -> None:
    raw = _payload(window=False).model_dump(by_alias=True, mode="json")
    raw["sessionDurationMinutes"] = None
    config = LayoutConfig(
        _env_file=None, grid_interval_minutes=60, default_session_duration_minutes=60
    )

    layout = WeeklyLayoutService.from_config(config).layout_week(load_payload(raw))

    assert layout.slots == [600, 660, 720]
    assert layout.session_duration_minutes == 60
    # 60 minutes on a 60 minute row: 44 - 4
    assert layout.days[SUNDAY].chips[0].height == 40


def test_session_level_duration_used_when_payload_has_none() -> None:
    raw = _payload().model_dump(by_alias=True, mode="json")
    raw["sessionDurationMinutes"] = None
    raw["days"][0]["sessions"][0]["durationMinutes"] = 45

    layout = WeeklyLayoutService().layout_week(load_payload(raw))

    assert layout.session_duration_minutes == 45


def test_payload_legend_takes_precedence() -> None:
    raw = _payload().model_dump(by_alias=True, mode="json")
    raw["legend"] = [
        {"id": "i2", "name": "רון", "color": "#dc2626,#2563eb", "isActive": False},
        {"id": "i1", "name": "דנה", "color": "#2563eb", "isActive": True},
    ]

    legend = WeeklyLayoutService().layout_week(load_payload(raw)).legend

    assert [entry.id for entry in legend] == ["i1", "i2"]
    assert legend[1].fill.kind == "gradient"
    assert legend[1].fill.striped is True


def test_repeated_layout_uses_cache() -> None:
    service = WeeklyLayoutService()
    first = service.layout_week(_payload())
    second = service.layout_week(_payload())

    assert service.cache.hits == 1
    assert first.days == second.days


def test_fetch_and_layout_uses_client() -> None:
    class StubClient:
        def __init__(self):
            self.calls = []

        def fetch_week(self, org_id, week_start=None, instructor_id=None):
            self.calls.append((org_id, week_start, instructor_id))
            return _payload()

    client = StubClient()
    layout = WeeklyLayoutService(client=client).fetch_and_layout("org", "2026-10-18")

    assert client.calls == [("org", "2026-10-18", None)]
    assert len(layout.days) == 2


def test_week_layout_serializes_to_camel_case_json() -> None:
    document = WeeklyLayoutService().layout_week(_payload()).model_dump(mode="json", by_alias=True)

    sunday = document["days"]["2026-10-18"]
    assert set(sunday) >= {"chips", "overflowBadges", "slotHeights"}
    assert sunday["chips"][0]["zIndex"] == 11
    assert sunday["slotHeights"]["600"] == 64


def test_table_report_expands_selected_badges() -> None:
    layout = WeeklyLayoutService().layout_week(_payload())

    collapsed = format_week_table(layout)
    assert "+1" in collapsed
    assert "↳ גיל" not in collapsed
    assert "excluded: 1 unparseable" in collapsed

    expanded = format_week_table(layout, ViewState().toggle("2026-10-18@10:00"))
    assert "↳ גיל" in expanded
    assert "✓" in expanded


def test_view_state_toggles_without_mutation() -> None:
    state = ViewState()
    opened = state.toggle("k")

    assert not state.is_expanded("k")
    assert opened.is_expanded("k")
    assert not opened.toggle("k").is_expanded("k")
    assert opened.collapse_all() == ViewState()
