"""Weekly session layout engine for the tutoring operations dashboard.

Turns a week of tutoring sessions into collision-free chip placements and
"+N" overflow badges on a shared calendar row grid.
"""

from session_layout.engine import build_time_window, compute_layout, resolve_slots
from session_layout.models import (
    Chip,
    Day,
    DayLayout,
    OverflowBadge,
    Session,
    SessionStatus,
    TimeWindow,
    WeekLayout,
    WeeklyPayload,
)
from session_layout.payload import load_payload
from session_layout.service import WeeklyLayoutService

__all__ = [
    "compute_layout",
    "resolve_slots",
    "build_time_window",
    "load_payload",
    "WeeklyLayoutService",
    "Chip",
    "Day",
    "DayLayout",
    "OverflowBadge",
    "Session",
    "SessionStatus",
    "TimeWindow",
    "WeekLayout",
    "WeeklyPayload",
]
