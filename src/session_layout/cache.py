"""Content-addressed memo of the last layout, kept at the call site.

The engine holds no cache. Views that re-render often wrap it in a
LayoutCache so an unchanged (days, window, duration) snapshot is not laid out
again. Keys are SHA-256 digests of the canonical JSON of the inputs, so equal
content hits the cache even when the model instances differ.
"""

import datetime as dt
import hashlib
import json
from collections.abc import Callable

from session_layout.models import Day, DayLayout, TimeWindow

LayoutFn = Callable[[list[Day], TimeWindow | None, int], dict[dt.date, DayLayout]]


def layout_key(
    days: list[Day], time_window: TimeWindow | None, session_duration: int
) -> str:
    """Digest of the layout inputs."""
    document = {
        "days": [day.model_dump(mode="json", by_alias=True) for day in days],
        "timeWindow": (
            time_window.model_dump(mode="json", by_alias=True) if time_window else None
        ),
        "sessionDuration": session_duration,
    }
    canonical = json.dumps(
        document, sort_keys=True, ensure_ascii=False, separators=(",", ":")
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class LayoutCache:
    """Remembers the most recent layout and its input digest."""

    def __init__(self, layout_fn: LayoutFn) -> None:
        self.layout_fn = layout_fn
        self.last_key: str | None = None
        self.last_result: dict[dt.date, DayLayout] | None = None
        self.hits = 0
        self.misses = 0

    def get(
        self,
        days: list[Day],
        time_window: TimeWindow | None,
        session_duration: int,
    ) -> dict[dt.date, DayLayout]:
        key = layout_key(days, time_window, session_duration)
        if key == self.last_key and self.last_result is not None:
            self.hits += 1
            return self.last_result

        self.misses += 1
        self.last_result = self.layout_fn(days, time_window, session_duration)
        self.last_key = key
        return self.last_result

    def clear(self) -> None:
        self.last_key = None
        self.last_result = None
