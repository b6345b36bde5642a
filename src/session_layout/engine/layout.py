"""Two-pass weekly layout: shared slot heights, then exact placement.

compute_layout() is a pure function of (days, time window, session
duration). It never raises on bad data: sessions with unusable start times or
outside the window are counted in DayLayout.excluded and left out, and a
malformed window produces empty days.
"""

import datetime as dt
import math
from dataclasses import dataclass, field

from session_layout.engine.collision import build_events, group_collisions
from session_layout.engine.overflow import aggregate_overflow
from session_layout.engine.placement import place_group
from session_layout.engine.slots import SlotGrid, resolve_slots, window_contains
from session_layout.geometry import (
    DEFAULT_GEOMETRY,
    DEFAULT_SESSION_DURATION_MINUTES,
    LayoutGeometry,
)
from session_layout.logging import get_logger
from session_layout.models import (
    Chip,
    Day,
    DayLayout,
    ExcludedCounts,
    OverflowBadge,
    Session,
    TimeWindow,
)

log = get_logger(__name__)


@dataclass
class _DayInput:
    day: Day
    placed: list[tuple[Session, int]] = field(default_factory=list)
    unparseable: int = 0
    out_of_window: int = 0


def _merge_days(days: list[Day]) -> list[Day]:
    """Collapse repeated dates into the first column, keeping every session."""
    merged: dict[dt.date, Day] = {}
    for day in days:
        first = merged.get(day.date)
        if first is None:
            merged[day.date] = day
            continue
        log.warning(
            "duplicate_day_merged",
            date=day.date.isoformat(),
            sessions=len(day.sessions),
        )
        merged[day.date] = first.model_copy(
            update={"sessions": [*first.sessions, *day.sessions]}
        )
    return list(merged.values())


def _partition_sessions(day: Day, window: TimeWindow | None, has_grid: bool) -> _DayInput:
    result = _DayInput(day=day)
    for session in day.sessions:
        start = session.start_minutes
        if start is None:
            result.unparseable += 1
        elif not has_grid or not window_contains(window, start):
            result.out_of_window += 1
        else:
            result.placed.append((session, start))
    return result


def _place_day(
    entry: _DayInput,
    grid: SlotGrid,
    duration: int,
    geometry: LayoutGeometry,
) -> tuple[list[Chip], list[OverflowBadge]]:
    events = build_events(entry.placed, grid, duration, geometry)
    chips: list[Chip] = []
    badges: list[OverflowBadge] = []
    for group in group_collisions(events):
        visible, residual = place_group(group, grid, geometry)
        chips.extend(visible)
        badges.extend(
            aggregate_overflow(entry.day.date, residual, visible, grid, geometry)
        )
    return chips, badges


def required_slot_heights(
    grid: SlotGrid,
    chips: list[Chip],
    badges: list[OverflowBadge],
) -> dict[int, float]:
    """Pixel extent each slot needs to contain the elements anchored in it."""
    required: dict[int, float] = {}
    elements = [(c.slot_minutes, c.bottom) for c in chips]
    elements += [(b.slot_minutes, b.bottom) for b in badges]
    for slot_minutes, bottom in elements:
        extent = bottom - grid.offset(grid.index_of(slot_minutes))
        required[slot_minutes] = max(required.get(slot_minutes, 0.0), extent)
    return required


def compute_layout(
    days: list[Day],
    time_window: TimeWindow | None,
    session_duration: int = DEFAULT_SESSION_DURATION_MINUTES,
    geometry: LayoutGeometry = DEFAULT_GEOMETRY,
) -> dict[dt.date, DayLayout]:
    """Lay out every day of a week on one shared row grid.

    Pass 1 places each day on base-height rows and records, per slot, the
    height needed by the tallest day. Pass 2 rebuilds the grid from those
    merged heights and places every day again at final positions.

    Args:
        days: Day columns in display order. Sessions of a repeated date are
            merged into the first column with that date.
        time_window: Rendered window; None or malformed means nothing renders.
        session_duration: Minutes per session (day-level constant).
        geometry: Pixel constants.

    Returns:
        Mapping of date to DayLayout, in the order of days.
    """
    if (
        isinstance(session_duration, bool)
        or not isinstance(session_duration, int)
        or session_duration <= 0
    ):
        session_duration = DEFAULT_SESSION_DURATION_MINUTES

    slots = resolve_slots(time_window)
    has_grid = bool(slots)

    inputs = [
        _partition_sessions(day, time_window, has_grid) for day in _merge_days(days)
    ]

    slot_heights: dict[int, int] = {}
    if has_grid:
        interval = time_window.interval_minutes
        first_pass = SlotGrid(slots, interval, base_row_height=geometry.base_row_height)
        required: dict[int, float] = {}
        for entry in inputs:
            chips, badges = _place_day(entry, first_pass, session_duration, geometry)
            for minutes, extent in required_slot_heights(first_pass, chips, badges).items():
                required[minutes] = max(required.get(minutes, 0.0), extent)

        slot_heights = {
            minutes: max(geometry.base_row_height, math.ceil(required.get(minutes, 0)))
            for minutes in slots
        }
        final_grid = SlotGrid(
            slots, interval, slot_heights, base_row_height=geometry.base_row_height
        )

    layouts: dict[dt.date, DayLayout] = {}
    for entry in inputs:
        chips, badges = [], []
        if has_grid:
            chips, badges = _place_day(entry, final_grid, session_duration, geometry)

        excluded = ExcludedCounts(
            unparseable_time=entry.unparseable,
            out_of_window=entry.out_of_window,
        )
        if excluded.total:
            log.debug(
                "sessions_excluded",
                date=entry.day.date.isoformat(),
                unparseable_time=excluded.unparseable_time,
                out_of_window=excluded.out_of_window,
            )

        layouts[entry.day.date] = DayLayout(
            date=entry.day.date,
            chips=chips,
            overflow_badges=badges,
            slot_heights=dict(slot_heights),
            excluded=excluded,
        )

    log.debug(
        "layout_computed",
        days=len(layouts),
        slots=len(slots),
        grid_height=sum(slot_heights.values()),
    )
    return layouts
