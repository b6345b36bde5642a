"""Grid rows: slot resolution, window derivation and minute-to-pixel mapping."""

import math

from session_layout.geometry import (
    BASE_ROW_HEIGHT,
    GRID_INTERVAL_MINUTES,
    MINUTES_PER_DAY,
)
from session_layout.models import Day, TimeWindow


def resolve_slots(window: TimeWindow | None) -> list[int]:
    """Slot start minutes [start, start+interval, ..., <= end].

    The end bound is included when it is interval-aligned. A missing window,
    unparseable bound, non-positive interval or end <= start yields [],
    which callers treat as "nothing to render".
    """
    if window is None:
        return []
    start, end = window.start_minutes, window.end_minutes
    interval = window.interval_minutes
    if start is None or end is None or interval <= 0 or end <= start:
        return []
    return list(range(start, end + 1, interval))


def window_contains(window: TimeWindow, minutes: int) -> bool:
    return window.start_minutes <= minutes <= window.end_minutes


def build_time_window(
    days: list[Day], interval_minutes: int = GRID_INTERVAL_MINUTES
) -> TimeWindow | None:
    """Derive a grid window from the sessions of a week.

    Used when the payload carries no window: the earliest start is floored
    to the grid, the latest start plus one interval is ceiled, and the result
    is clamped to the day with at least one interval. Returns None when no
    session has a usable start time.
    """
    starts = [
        session.start_minutes
        for day in days
        for session in day.sessions
        if session.start_minutes is not None
    ]
    if not starts or interval_minutes <= 0:
        return None

    start = (max(0, min(starts)) // interval_minutes) * interval_minutes
    latest = min(MINUTES_PER_DAY, max(starts) + interval_minutes)
    aligned_end = math.ceil(latest / interval_minutes) * interval_minutes
    end = min(MINUTES_PER_DAY, max(start + interval_minutes, aligned_end))

    return TimeWindow(
        start_minutes=start,
        end_minutes=end,
        interval_minutes=interval_minutes,
    )


class SlotGrid:
    """Pixel geometry of the shared row grid.

    Rows have their own heights (base height on the first pass, merged
    heights on the second). A minute maps to its row's cumulative offset plus
    its position inside the row at base-height scale, so the mapping is
    strictly increasing and positions inside a row do not move when the row
    grows. Minutes past the last slot continue at base height.
    """

    def __init__(
        self,
        slots: list[int],
        interval_minutes: int,
        heights: dict[int, int] | None = None,
        base_row_height: int = BASE_ROW_HEIGHT,
    ) -> None:
        self.slots = slots
        self.interval = interval_minutes
        self.base_row_height = base_row_height
        heights = heights or {}
        self.heights = [heights.get(minutes, base_row_height) for minutes in slots]

        self.offsets: list[int] = []
        running = 0
        for height in self.heights:
            self.offsets.append(running)
            running += height
        self.total_height = running

    def index_of(self, minutes: int) -> int:
        return (minutes - self.slots[0]) // self.interval

    def slot_minutes(self, index: int) -> int:
        return self.slots[0] + index * self.interval

    def offset(self, index: int) -> int:
        if index < len(self.offsets):
            return self.offsets[index]
        return self.total_height + (index - len(self.offsets)) * self.base_row_height

    def y(self, minutes: int) -> float:
        index = self.index_of(minutes)
        within = (minutes - self.slot_minutes(index)) / self.interval
        return round(self.offset(index) + within * self.base_row_height, 2)
