"""Pydantic models for weekly schedule input and layout output.

All data structures use Pydantic v2 for validation, serialization, and type
safety. Field names are snake_case; the backend's camelCase keys are accepted
as aliases and produced again by model_dump(by_alias=True).

Time fields are deliberately lenient: a malformed session time or window
bound resolves to None instead of failing validation, so one bad record
cannot block the rest of the week from rendering.
"""

import datetime as dt
import math
from enum import Enum
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from session_layout.geometry import (
    DEFAULT_SESSION_DURATION_MINUTES,
    GRID_INTERVAL_MINUTES,
)
from session_layout.utils import parse_minutes


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


def _coerce_int(value: Any) -> int | None:
    """Whole numbers pass through; anything else becomes None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def _positive_int(value: Any) -> int | None:
    minutes = _coerce_int(value)
    if minutes is None or minutes <= 0:
        return None
    return minutes


class SessionStatus(str, Enum):
    """Compliance status computed by the backend for one session."""

    COMPLETE = "complete"
    MISSING = "missing"
    UPCOMING = "upcoming"


class Session(_Model):
    """One tutoring session of a student on a given day.

    Mirrors an entry of days[].sessions in the weekly-compliance payload.
    """

    student_id: str = ""
    student_name: str = ""
    instructor_id: str | None = None
    instructor_name: str = ""
    instructor_color: str = ""  # "#2563eb" or "#2563eb,#dc2626"
    instructor_is_active: bool = True
    time: str | None = None  # "HH:MM"
    time_minutes: int | None = None
    status: SessionStatus = SessionStatus.UPCOMING
    has_record: bool = False
    record_id: str | None = None
    duration_minutes: int | None = None  # same for every session of a week

    @field_validator("student_id", "record_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, bool) or value is None:
            return "" if info.field_name == "student_id" else None
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("student_name", "instructor_name", "instructor_color", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("time", mode="before")
    @classmethod
    def _lenient_time(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("time_minutes", mode="before")
    @classmethod
    def _lenient_time_minutes(cls, value: Any) -> int | None:
        return _coerce_int(value)

    @field_validator("duration_minutes", mode="before")
    @classmethod
    def _lenient_duration(cls, value: Any) -> int | None:
        return _positive_int(value)

    @property
    def start_minutes(self) -> int | None:
        """Start minute of day, from time_minutes first and then time."""
        minutes = parse_minutes(self.time_minutes)
        if minutes is None:
            minutes = parse_minutes(self.time)
        return minutes


class Day(_Model):
    """One calendar day column and its sessions."""

    date: dt.date
    day_of_week: int | None = None  # 1=Sunday ... 7=Saturday
    label: str | None = None
    sessions: list[Session] = Field(default_factory=list)
    is_today: bool = False

    @field_validator("sessions", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value


class TimeWindow(_Model):
    """Rendered part of the day, [start_minutes, end_minutes], and grid step.

    Bounds may be given as minutes or "HH:MM" (also under start/end keys).
    Unparseable bounds and intervals are kept as None / 0 so that slot
    resolution can return an empty grid instead of raising.
    """

    start_minutes: int | None = None
    end_minutes: int | None = None
    interval_minutes: int = GRID_INTERVAL_MINUTES

    @model_validator(mode="before")
    @classmethod
    def _resolve_bounds(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        resolved = dict(data)
        for field, fallback in (("start_minutes", "start"), ("end_minutes", "end")):
            alias = to_camel(field)
            raw = resolved.pop(alias, None)
            if raw is None:
                raw = resolved.pop(field, None)
            if raw is None:
                raw = resolved.get(fallback)
            resolved.pop(fallback, None)
            resolved[field] = parse_minutes(raw, allow_end_of_day=True)

        interval = resolved.pop("intervalMinutes", resolved.pop("interval_minutes", None))
        if interval is None:
            resolved["interval_minutes"] = GRID_INTERVAL_MINUTES
        else:
            resolved["interval_minutes"] = _coerce_int(interval) or 0
        return resolved


class ChipStyle(_Model):
    """Horizontal placement of a chip inside its day column, in percent."""

    left: float
    width: float
    gap_px: int = 0

    def css(self) -> dict[str, str]:
        width = f"{self.width:g}%"
        if self.gap_px:
            width = f"calc({width} - {self.gap_px}px)"
        return {"left": f"{self.left:g}%", "width": width}


class ChipFill(_Model):
    """Background of a chip or legend swatch derived from instructor colours."""

    kind: Literal["default", "solid", "gradient"]
    colors: tuple[str, ...]
    striped: bool = False  # inactive instructor overlay

    def css(self) -> dict[str, str]:
        if self.kind == "gradient":
            layers = [f"linear-gradient(135deg, {', '.join(self.colors)})"]
            style: dict[str, str] = {}
        else:
            layers = []
            style = {"backgroundColor": self.colors[0]}
        if self.striped:
            layers.insert(
                0,
                "repeating-linear-gradient(45deg, rgba(255,255,255,0.35) 0 6px, "
                "transparent 6px 12px)",
            )
        if layers:
            style["backgroundImage"] = ", ".join(layers)
        return style


class Chip(_Model):
    """A visible session rectangle. top/height in px from the grid top."""

    session: Session
    top: float
    height: float
    style: ChipStyle
    z_index: int
    start_minutes: int
    slot_minutes: int
    boundary_hint: bool = False  # starts mid-slot (quarter hour)
    fill: ChipFill

    @property
    def bottom(self) -> float:
        return round(self.top + self.height, 2)


class BadgePlacement(_Model):
    """Full-width badge position; stack_index counts badges of one group."""

    left: float
    width: float
    stack_index: int


class OverflowBadge(_Model):
    """The "+N" summary of hidden sessions sharing one exact start time."""

    key: str  # "2026-10-18@10:00", stable across re-renders
    sessions: list[Session]
    top: float
    height: float
    start_minutes: int
    slot_minutes: int
    placement: BadgePlacement

    @property
    def count(self) -> int:
        return len(self.sessions)

    @property
    def label(self) -> str:
        return f"+{self.count}"

    @property
    def bottom(self) -> float:
        return round(self.top + self.height, 2)


class ExcludedCounts(_Model):
    """Sessions left out of a day's layout, by reason."""

    unparseable_time: int = 0
    out_of_window: int = 0

    @property
    def total(self) -> int:
        return self.unparseable_time + self.out_of_window


class DayLayout(_Model):
    """Final placement of one day column."""

    date: dt.date
    chips: list[Chip] = Field(default_factory=list)
    overflow_badges: list[OverflowBadge] = Field(default_factory=list)
    slot_heights: dict[int, int] = Field(default_factory=dict)
    excluded: ExcludedCounts = Field(default_factory=ExcludedCounts)


class InstructorKey(_Model):
    """Instructor colour key as listed in the payload's legend."""

    id: str
    name: str = ""
    color: str = ""
    is_active: bool = True

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("name", "color", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class LegendEntry(InstructorKey):
    """Instructor colour key shown next to the grid, with its resolved fill."""

    fill: ChipFill


class WeeklyPayload(_Model):
    """Response body of GET /api/weekly-compliance."""

    week_start: dt.date | None = None
    week_end: dt.date | None = None
    today: dt.date | None = None
    scope: str | None = None
    time_window: TimeWindow | None = None
    # None when absent or invalid; the service then applies its configured defaults
    interval_minutes: int | None = None
    session_duration_minutes: int | None = None
    legend: list[InstructorKey] | None = None
    days: list[Day] = Field(default_factory=list)

    @field_validator("interval_minutes", "session_duration_minutes", mode="before")
    @classmethod
    def _positive_minutes(cls, value: Any) -> int | None:
        return _positive_int(value)

    @field_validator("days", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value


class WeekLayout(_Model):
    """Layout of a whole week: per-day placements on one shared row grid."""

    week_start: dt.date | None = None
    week_end: dt.date | None = None
    time_window: TimeWindow | None = None
    session_duration_minutes: int = DEFAULT_SESSION_DURATION_MINUTES
    slots: list[int] = Field(default_factory=list)
    slot_heights: dict[int, int] = Field(default_factory=dict)
    days: dict[dt.date, DayLayout] = Field(default_factory=dict)
    legend: list[LegendEntry] = Field(default_factory=list)
