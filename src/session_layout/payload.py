"""Loading the weekly-compliance payload into models."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from session_layout.errors import PayloadError
from session_layout.logging import get_logger
from session_layout.models import WeeklyPayload

log = get_logger(__name__)


def load_payload(raw: Any) -> WeeklyPayload:
    """Validate a decoded weekly-compliance response.

    Days are flagged is_today from the payload's "today" field unless the
    provider already set the flag.

    Raises:
        PayloadError: If the structure is invalid (not an object, days not a
            list, bad dates, unknown session status).
    """
    if not isinstance(raw, dict):
        raise PayloadError(
            f"Weekly payload must be an object, got {type(raw).__name__}"
        )

    try:
        payload = WeeklyPayload.model_validate(raw)
    except ValidationError as e:
        log.warning("payload_invalid", errors=e.error_count())
        raise PayloadError(f"Invalid weekly payload: {e}") from e

    if payload.today is not None:
        days = [
            day
            if day.is_today
            else day.model_copy(update={"is_today": day.date == payload.today})
            for day in payload.days
        ]
        payload = payload.model_copy(update={"days": days})

    log.debug(
        "payload_loaded",
        week_start=payload.week_start.isoformat() if payload.week_start else None,
        days=len(payload.days),
        sessions=sum(len(day.sessions) for day in payload.days),
    )
    return payload


def read_payload_file(path: str | Path) -> WeeklyPayload:
    """Read and validate a payload saved as JSON.

    Raises:
        PayloadError: If the file is not valid JSON or fails validation.
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise PayloadError(f"{path} is not valid JSON: {e}") from e
    return load_payload(raw)
