"""Session layout engine: slots, collision groups, chips and overflow badges."""

from session_layout.engine.layout import compute_layout
from session_layout.engine.slots import build_time_window, resolve_slots

__all__ = [
    "compute_layout",
    "build_time_window",
    "resolve_slots",
]
