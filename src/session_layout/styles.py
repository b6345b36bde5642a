"""Instructor colour tokens, chip fills and the weekly legend.

Instructor colours arrive as comma-joined tokens ("#2563eb" or
"#2563eb,#dc2626"). Zero tokens fall back to a neutral grey, one token is a
solid fill and two or more are ordered gradient stops. Inactive instructors
keep their colours but get a diagonal-stripe overlay.
"""

from collections.abc import Iterable

from session_layout.models import ChipFill, Day, InstructorKey, LegendEntry
from session_layout.utils import name_collation_key

DEFAULT_COLOR = "#6B7280"
UNASSIGNED_ID = "unassigned"
UNASSIGNED_LABEL = "לא משויך"


def parse_color_tokens(value: str | None) -> list[str]:
    """Split a comma-joined colour identifier into trimmed, non-empty tokens."""
    if not value or not isinstance(value, str):
        return []
    return [token.strip() for token in value.split(",") if token.strip()]


def build_fill(color: str | None, *, is_active: bool = True) -> ChipFill:
    """Resolve the background of a chip for an instructor colour."""
    tokens = parse_color_tokens(color)
    if not tokens:
        kind, colors = "default", (DEFAULT_COLOR,)
    elif len(tokens) == 1:
        kind, colors = "solid", (tokens[0],)
    else:
        kind, colors = "gradient", tuple(tokens)
    return ChipFill(kind=kind, colors=colors, striped=not is_active)


def build_legend(
    days: list[Day], keys: list[InstructorKey] | None = None
) -> list[LegendEntry]:
    """One legend entry per instructor seen during the week.

    When the payload lists its own legend (keys), those entries are used.
    Otherwise entries are collected from the sessions, and sessions without
    an instructor add a single "unassigned" entry. Entries are ordered by
    Hebrew name collation, then id.
    """
    if keys is not None:
        return _sorted_legend(
            LegendEntry(
                id=key.id,
                name=key.name,
                color=key.color or DEFAULT_COLOR,
                is_active=key.is_active,
                fill=build_fill(key.color, is_active=key.is_active),
            )
            for key in keys
        )

    entries: dict[str, LegendEntry] = {}
    has_unassigned = False

    for day in days:
        for session in day.sessions:
            if not session.instructor_id:
                has_unassigned = True
                continue
            if session.instructor_id in entries:
                continue
            entries[session.instructor_id] = LegendEntry(
                id=session.instructor_id,
                name=session.instructor_name,
                color=session.instructor_color or DEFAULT_COLOR,
                is_active=session.instructor_is_active,
                fill=build_fill(
                    session.instructor_color,
                    is_active=session.instructor_is_active,
                ),
            )

    if has_unassigned:
        entries[UNASSIGNED_ID] = LegendEntry(
            id=UNASSIGNED_ID,
            name=UNASSIGNED_LABEL,
            color=DEFAULT_COLOR,
            fill=build_fill(DEFAULT_COLOR),
        )

    return _sorted_legend(entries.values())


def _sorted_legend(entries: Iterable[LegendEntry]) -> list[LegendEntry]:
    return sorted(entries, key=lambda entry: (name_collation_key(entry.name), entry.id))
