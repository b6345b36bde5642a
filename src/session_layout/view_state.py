"""Interaction state of the weekly grid, owned by the view.

The layout engine never sees this: which badges are expanded is passed
explicitly to whatever renders the layout.
"""

from pydantic import BaseModel, ConfigDict


class ViewState(BaseModel):
    """Expanded overflow badges, by badge key."""

    model_config = ConfigDict(frozen=True)

    expanded_badges: frozenset[str] = frozenset()

    def is_expanded(self, badge_key: str) -> bool:
        return badge_key in self.expanded_badges

    def toggle(self, badge_key: str) -> "ViewState":
        """New state with the badge opened, or closed if it was open."""
        return ViewState(expanded_badges=self.expanded_badges ^ {badge_key})

    def collapse_all(self) -> "ViewState":
        return ViewState()
