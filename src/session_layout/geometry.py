"""Grid constants shared by every layout stage."""

from dataclasses import dataclass

GRID_INTERVAL_MINUTES = 30
DEFAULT_SESSION_DURATION_MINUTES = 30
MINUTES_PER_DAY = 24 * 60

BASE_ROW_HEIGHT = 44
MAX_VISIBLE_CHIPS = 2


@dataclass(frozen=True)
class LayoutGeometry:
    """Pixel geometry of the weekly grid.

    Attributes:
        base_row_height: Height of an empty row; slots never shrink below it.
        max_visible_chips: Side-by-side chips per collision group.
        column_gap_px: Horizontal gap subtracted from each chip column width.
        chip_padding_px: Vertical breathing room subtracted from a chip.
        min_chip_inset_px: Readable minimum is base_row_height minus this.
        badge_height: Height of one "+N" overflow badge.
        badge_gap_px: Gap above the first badge and between stacked badges.
        badge_margin_percent: Left/right margin of a full-width badge.
        base_z_index: z-index of the last column; earlier columns stack above.
    """

    base_row_height: int = BASE_ROW_HEIGHT
    max_visible_chips: int = MAX_VISIBLE_CHIPS
    column_gap_px: int = 4
    chip_padding_px: int = 4
    min_chip_inset_px: int = 8
    badge_height: int = 20
    badge_gap_px: int = 4
    badge_margin_percent: float = 2.0
    base_z_index: int = 10

    def __post_init__(self) -> None:
        if self.base_row_height <= 0:
            raise ValueError(f"base_row_height must be positive, got {self.base_row_height}")
        if self.max_visible_chips < 0:
            raise ValueError(
                f"max_visible_chips must not be negative, got {self.max_visible_chips}"
            )

    @property
    def min_chip_height(self) -> int:
        return self.base_row_height - self.min_chip_inset_px

    def chip_height(self, duration_minutes: int, interval_minutes: int) -> float:
        """Rendered chip height for a session duration.

        Depends only on the duration and the base row height, never on the
        collision group or on grown slot heights.
        """
        scaled = duration_minutes / interval_minutes * self.base_row_height
        return round(max(scaled - self.chip_padding_px, self.min_chip_height), 2)


DEFAULT_GEOMETRY = LayoutGeometry()
