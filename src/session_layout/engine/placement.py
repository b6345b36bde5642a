"""Side-by-side chip placement inside one collision group."""

from session_layout.engine.collision import CollisionGroup, Event
from session_layout.engine.slots import SlotGrid
from session_layout.geometry import LayoutGeometry
from session_layout.models import Chip, ChipStyle
from session_layout.styles import build_fill


def split_visible(
    group: CollisionGroup, max_visible: int
) -> tuple[list[Event], list[Event]]:
    """Choose the events that get a visible column.

    Group events are already ordered by start time, so filling the visible
    columns from the earliest start-time bucket onwards is a prefix of the
    group. Later buckets may get no visible representative at all.
    """
    if len(group) <= max_visible:
        return list(group.events), []
    return group.events[:max_visible], group.events[max_visible:]


def place_chips(
    visible: list[Event],
    grid: SlotGrid,
    geometry: LayoutGeometry,
) -> list[Chip]:
    """Lay visible events out left to right in equal-width columns.

    Earlier columns get a higher z-index so they draw on top.
    """
    columns = len(visible)
    if columns == 0:
        return []

    width = round(100 / columns, 4)
    chips: list[Chip] = []
    for column, event in enumerate(visible):
        slot_minutes = grid.slot_minutes(event.slot_index)
        session = event.session
        chips.append(
            Chip(
                session=session,
                top=event.top,
                height=event.chip_height,
                style=ChipStyle(
                    left=round(column * width, 4),
                    width=width,
                    gap_px=geometry.column_gap_px,
                ),
                z_index=geometry.base_z_index + (columns - 1 - column),
                start_minutes=event.start_time,
                slot_minutes=slot_minutes,
                boundary_hint=event.start_time != slot_minutes,
                fill=build_fill(
                    session.instructor_color,
                    is_active=session.instructor_is_active,
                ),
            )
        )
    return chips


def place_group(
    group: CollisionGroup,
    grid: SlotGrid,
    geometry: LayoutGeometry,
) -> tuple[list[Chip], list[Event]]:
    """Visible chips of a group plus the events left for overflow badges."""
    visible, residual = split_visible(group, geometry.max_visible_chips)
    return place_chips(visible, grid, geometry), residual
