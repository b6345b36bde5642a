"""Overflow badges for sessions that did not get a visible column."""

import datetime as dt
from itertools import groupby

from session_layout.engine.collision import Event
from session_layout.engine.slots import SlotGrid
from session_layout.geometry import LayoutGeometry
from session_layout.models import BadgePlacement, Chip, OverflowBadge
from session_layout.utils import format_time_label


def badge_key(day: dt.date, start_minutes: int) -> str:
    """Stable identifier of a badge, used by view state to track expansion."""
    return f"{day.isoformat()}@{format_time_label(start_minutes)}"


def aggregate_overflow(
    day: dt.date,
    residual: list[Event],
    visible: list[Chip],
    grid: SlotGrid,
    geometry: LayoutGeometry,
) -> list[OverflowBadge]:
    """Emit one badge per distinct residual start time.

    Badges sit below the lowest visible chip of the group and stack
    downwards in start-time order, each at a fixed position, so expanding
    one never moves another. They are anchored to the lowest chip's slot.

    Args:
        day: Date of the day column (part of the badge key).
        residual: Hidden events of one collision group, in group order.
        visible: The group's visible chips.
        grid: Row geometry of the current pass.
        geometry: Pixel constants.
    """
    if not residual:
        return []

    if visible:
        anchor = max(visible, key=lambda chip: (chip.bottom, chip.top))
        first_top = anchor.bottom + geometry.badge_gap_px
        slot_minutes = anchor.slot_minutes
    else:
        first_top = residual[0].top
        slot_minutes = grid.slot_minutes(residual[0].slot_index)

    margin = geometry.badge_margin_percent
    step = geometry.badge_height + geometry.badge_gap_px

    badges: list[OverflowBadge] = []
    for index, (start, events) in enumerate(
        groupby(residual, key=lambda event: event.start_time)
    ):
        badges.append(
            OverflowBadge(
                key=badge_key(day, start),
                sessions=[event.session for event in events],
                top=round(first_top + index * step, 2),
                height=geometry.badge_height,
                start_minutes=start,
                slot_minutes=slot_minutes,
                placement=BadgePlacement(
                    left=margin,
                    width=round(100 - 2 * margin, 4),
                    stack_index=index,
                ),
            )
        )
    return badges
