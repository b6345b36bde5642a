"""Glue between the weekly payload, the layout engine and its call-site cache."""

import datetime as dt
from functools import partial

from session_layout.cache import LayoutCache
from session_layout.client import WeeklyComplianceClient
from session_layout.config import LayoutConfig, get_config
from session_layout.engine import build_time_window, compute_layout, resolve_slots
from session_layout.geometry import (
    DEFAULT_GEOMETRY,
    DEFAULT_SESSION_DURATION_MINUTES,
    GRID_INTERVAL_MINUTES,
    LayoutGeometry,
)
from session_layout.logging import get_logger
from session_layout.models import WeekLayout, WeeklyPayload
from session_layout.styles import build_legend

logger = get_logger(__name__)


class WeeklyLayoutService:
    """Lays out weekly payloads, memoizing on the payload content.

    interval_minutes and session_duration_minutes are fallbacks for payloads
    that carry no grid step or session duration of their own.
    """

    def __init__(
        self,
        client: WeeklyComplianceClient | None = None,
        geometry: LayoutGeometry = DEFAULT_GEOMETRY,
        interval_minutes: int = GRID_INTERVAL_MINUTES,
        session_duration_minutes: int = DEFAULT_SESSION_DURATION_MINUTES,
    ) -> None:
        self.client = client
        self.geometry = geometry
        self.interval_minutes = interval_minutes
        self.session_duration_minutes = session_duration_minutes
        self.cache = LayoutCache(partial(compute_layout, geometry=geometry))

    @classmethod
    def from_config(
        cls,
        config: LayoutConfig | None = None,
        client: WeeklyComplianceClient | None = None,
    ) -> "WeeklyLayoutService":
        """Build a service with geometry and fallbacks taken from settings."""
        config = config or get_config()
        return cls(
            client=client,
            geometry=config.geometry(),
            interval_minutes=config.grid_interval_minutes,
            session_duration_minutes=config.default_session_duration_minutes,
        )

    def session_duration(self, payload: WeeklyPayload) -> int:
        """Payload duration, else the first session-level one, else the default."""
        if payload.session_duration_minutes is not None:
            return payload.session_duration_minutes
        for day in payload.days:
            for session in day.sessions:
                if session.duration_minutes is not None:
                    return session.duration_minutes
        return self.session_duration_minutes

    def layout_week(self, payload: WeeklyPayload) -> WeekLayout:
        """Compute the week layout; derive a window when the payload has none."""
        window = payload.time_window or build_time_window(
            payload.days, payload.interval_minutes or self.interval_minutes
        )
        duration = self.session_duration(payload)

        days = self.cache.get(payload.days, window, duration)
        slots = resolve_slots(window)
        slot_heights = next(iter(days.values())).slot_heights if days else {}

        excluded = sum(day.excluded.total for day in days.values())
        logger.info(
            "week_layout_computed",
            week_start=payload.week_start.isoformat() if payload.week_start else None,
            days=len(days),
            chips=sum(len(day.chips) for day in days.values()),
            badges=sum(len(day.overflow_badges) for day in days.values()),
            excluded=excluded,
            cache_hits=self.cache.hits,
        )
        if excluded:
            logger.warning("sessions_not_rendered", count=excluded)

        return WeekLayout(
            week_start=payload.week_start,
            week_end=payload.week_end,
            time_window=window,
            session_duration_minutes=duration,
            slots=slots,
            slot_heights=slot_heights,
            days=days,
            legend=build_legend(payload.days, payload.legend),
        )

    def fetch_and_layout(
        self,
        org_id: str,
        week_start: dt.date | str | None = None,
        instructor_id: str | None = None,
    ) -> WeekLayout:
        """Fetch a week from the API and lay it out."""
        if self.client is None:
            self.client = WeeklyComplianceClient()
        payload = self.client.fetch_week(org_id, week_start, instructor_id)
        return self.layout_week(payload)
