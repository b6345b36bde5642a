"""Shared helpers: minute-of-day parsing, time labels and Hebrew name ordering."""

import math
import re
import unicodedata

from session_layout.geometry import MINUTES_PER_DAY

# "HH:MM" or "HH:MM:SS", as sent by the weekly-compliance endpoint
_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

# Final letter forms collate with their base letter in Hebrew
_HEBREW_FINAL_FORMS = str.maketrans("ךםןףץ", "כמנפצ")


def parse_minutes(value: object, *, allow_end_of_day: bool = False) -> int | None:
    """Resolve a minute-of-day from an int or an "HH:MM[:SS]" string.

    Args:
        value: Integer minutes, a whole float, or a time string.
        allow_end_of_day: Accept 1440 / "24:00" (window end bound).

    Returns:
        Minutes since midnight, or None when the value is missing, malformed
        or outside the day ("25:99" -> None).
    """
    upper = MINUTES_PER_DAY if allow_end_of_day else MINUTES_PER_DAY - 1

    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, int):
        minutes = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        minutes = int(value)
    elif isinstance(value, str):
        match = _TIME_PATTERN.match(value.strip())
        if not match:
            return None
        hours, mins = int(match.group(1)), int(match.group(2))
        seconds = int(match.group(3) or 0)
        if mins >= 60 or seconds >= 60:
            return None
        minutes = hours * 60 + mins
    else:
        return None

    if minutes < 0 or minutes > upper:
        return None
    return minutes


def format_time_label(minutes: int) -> str:
    """Format minutes since midnight as "HH:MM"."""
    value = max(0, int(minutes))
    return f"{value // 60:02d}:{value % 60:02d}"


def _char_rank(char: str) -> int:
    # punctuation/space < digits < Hebrew letters < everything else
    if "א" <= char <= "ת":
        return 2
    if char.isdigit():
        return 1
    if char.isalpha():
        return 3
    return 0


def name_collation_key(name: str | None) -> tuple[tuple[int, str], ...]:
    """Sort key approximating Hebrew-locale name comparison.

    Strips niqqud and other combining marks, folds case and final letter
    forms, and orders Hebrew script ahead of Latin.
    """
    text = unicodedata.normalize("NFKD", name or "")
    text = "".join(c for c in text if not unicodedata.combining(c))
    text = " ".join(text.split()).casefold().translate(_HEBREW_FINAL_FORMS)
    return tuple((_char_rank(c), c) for c in text)
