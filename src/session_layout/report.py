"""Plain-text rendering of a week layout for the CLI."""

from session_layout.models import DayLayout, Session, SessionStatus, WeekLayout
from session_layout.utils import format_time_label
from session_layout.view_state import ViewState

STATUS_ICONS = {
    SessionStatus.COMPLETE: "✓",
    SessionStatus.MISSING: "✕",
    SessionStatus.UPCOMING: "○",
}

HEADERS = ["Time", "Student", "Instructor", "Status", "Placement"]


def _session_cells(session: Session) -> list[str]:
    instructor = session.instructor_name or "-"
    if not session.instructor_is_active:
        instructor += " (inactive)"
    return [session.student_name or "-", instructor, STATUS_ICONS[session.status]]


def day_rows(day: DayLayout, view_state: ViewState) -> list[list[str]]:
    """Rows for one day: chips and badges in start-time order.

    Expanded badges are followed by one indented row per hidden session.
    """
    items: list[tuple[int, int, float, list[list[str]]]] = []

    for chip in day.chips:
        hint = "|" if chip.boundary_hint else ""
        placement = f"col {chip.style.left:g}%+{chip.style.width:g}% y={chip.top:g}{hint}"
        row = [
            format_time_label(chip.start_minutes),
            *_session_cells(chip.session),
            placement,
        ]
        items.append((chip.start_minutes, 0, chip.top, [row]))

    for badge in day.overflow_badges:
        rows = [[
            format_time_label(badge.start_minutes),
            badge.label,
            "",
            "",
            f"badge y={badge.top:g}",
        ]]
        if view_state.is_expanded(badge.key):
            for session in badge.sessions:
                student, instructor, status = _session_cells(session)
                rows.append(["", f"  ↳ {student}", instructor, status, ""])
        items.append((badge.start_minutes, 1, badge.top, rows))

    items.sort(key=lambda item: item[:3])
    return [row for *_, rows in items for row in rows]


def _format_table(rows: list[list[str]]) -> str:
    widths = [len(h) for h in HEADERS]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    header_line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(HEADERS))
    separator = "-+-".join("-" * w for w in widths)
    row_lines = [
        " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)) for row in rows
    ]
    return "\n".join([header_line, separator, *row_lines])


def format_week_table(layout: WeekLayout, view_state: ViewState | None = None) -> str:
    """Human-readable table per day, with excluded-session counts."""
    view_state = view_state or ViewState()
    if not layout.days:
        return "(no days to render)"

    blocks: list[str] = []
    for date, day in layout.days.items():
        title = date.isoformat()
        if day.excluded.total:
            title += (
                f" (excluded: {day.excluded.unparseable_time} unparseable, "
                f"{day.excluded.out_of_window} out of window)"
            )
        rows = day_rows(day, view_state)
        body = _format_table(rows) if rows else "(no sessions)"
        blocks.append(f"{title}\n{body}")

    return "\n\n".join(blocks)
