from conftest import MONDAY, TUESDAY, make_day, make_session

from session_layout.styles import (
    DEFAULT_COLOR,
    UNASSIGNED_LABEL,
    build_fill,
    build_legend,
    parse_color_tokens,
)


def test_parse_color_tokens() -> None:
    assert parse_color_tokens(None) == []
    assert parse_color_tokens(" , ") == []
    assert parse_color_tokens("#2563eb") == ["#2563eb"]
    assert parse_color_tokens(" #2563eb , #dc2626,") == ["#2563eb", "#dc2626"]


def test_fill_kinds() -> None:
    assert build_fill("").kind == "default"
    assert build_fill("").colors == (DEFAULT_COLOR,)
    assert build_fill("#2563eb").css() == {"backgroundColor": "#2563eb"}
    assert build_fill("#2563eb,#dc2626").css() == {
        "backgroundImage": "linear-gradient(135deg, #2563eb, #dc2626)"
    }


def test_inactive_fill_keeps_colour_and_adds_stripes() -> None:
    fill = build_fill("#16a34a", is_active=False)

    assert fill.kind == "solid"
    assert fill.striped is True
    css = fill.css()
    assert css["backgroundColor"] == "#16a34a"
    assert css["backgroundImage"].startswith("repeating-linear-gradient(45deg")


def test_legend_lists_each_instructor_once_sorted_by_name() -> None:
    days = [
        make_day(
            MONDAY,
            [
                make_session("a", 600, instructorId="i2", instructorName="רון"),
                make_session("b", 630, instructorId="i1", instructorName="אורית"),
            ],
        ),
        make_day(
            TUESDAY,
            [
                make_session("c", 600, instructorId="i2", instructorName="רון"),
                make_session("d", 600, instructorId=None, instructorName=""),
                make_session(
                    "e",
                    600,
                    instructorId="i3",
                    instructorName="Ben",
                    instructorIsActive=False,
                    instructorColor="#111,#222",
                ),
            ],
        ),
    ]

    legend = build_legend(days)

    assert [entry.name for entry in legend] == ["אורית", "לא משויך", "רון", "Ben"]
    unassigned = next(e for e in legend if e.name == UNASSIGNED_LABEL)
    assert unassigned.id == "unassigned"
    assert unassigned.color == DEFAULT_COLOR
    ben = legend[-1]
    assert ben.is_active is False
    assert ben.fill.kind == "gradient"
    assert ben.fill.striped is True
