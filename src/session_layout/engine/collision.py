"""Collision grouping of a day's sessions by vertical extent."""

from dataclasses import dataclass, field

from session_layout.engine.slots import SlotGrid
from session_layout.geometry import LayoutGeometry
from session_layout.models import Session
from session_layout.utils import name_collation_key


@dataclass(frozen=True)
class Event:
    """A session projected onto the grid.

    top/bottom are the pixel positions of the start and end times and drive
    collision detection; chip_height is what gets rendered and may differ
    (it is floored to a readable minimum).
    """

    session: Session
    start_time: int
    end_time: int
    top: float
    bottom: float
    chip_height: float
    slot_index: int

    @property
    def sort_key(self) -> tuple:
        name = self.session.student_name
        return (
            self.top,
            self.start_time,
            name_collation_key(name),
            name,
            self.session.student_id,
        )


@dataclass
class CollisionGroup:
    events: list[Event] = field(default_factory=list)
    max_bottom: float = 0.0

    def add(self, event: Event) -> None:
        self.events.append(event)
        self.max_bottom = max(self.max_bottom, event.bottom)

    def __len__(self) -> int:
        return len(self.events)


def build_events(
    placed: list[tuple[Session, int]],
    grid: SlotGrid,
    duration_minutes: int,
    geometry: LayoutGeometry,
) -> list[Event]:
    """Project (session, start minute) pairs onto the grid."""
    chip_height = geometry.chip_height(duration_minutes, grid.interval)
    return [
        Event(
            session=session,
            start_time=start,
            end_time=start + duration_minutes,
            top=grid.y(start),
            bottom=grid.y(start + duration_minutes),
            chip_height=chip_height,
            slot_index=grid.index_of(start),
        )
        for session, start in placed
    ]


def group_collisions(events: list[Event]) -> list[CollisionGroup]:
    """Sweep events into maximal groups of transitively overlapping extents.

    Events are sorted by top, start time and student name. An event opens a
    new group when its top is at or below the current group's lowest bottom;
    exactly adjacent extents do not collide.
    """
    groups: list[CollisionGroup] = []
    current: CollisionGroup | None = None

    for event in sorted(events, key=lambda e: e.sort_key):
        if current is None or event.top >= current.max_bottom:
            current = CollisionGroup()
            groups.append(current)
        current.add(event)

    return groups
