"""HTTP client for the dashboard's weekly-compliance endpoint.

WeeklyComplianceClient fetches one week of sessions for an organization and
classifies failures so tenacity only retries what can succeed on retry.
"""

import datetime as dt
from typing import Any

import requests
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from session_layout.config import LayoutConfig, get_config
from session_layout.errors import (
    AuthenticationError,
    PayloadError,
    PermanentError,
    RateLimitError,
    TransientError,
)
from session_layout.logging import get_logger
from session_layout.models import WeeklyPayload
from session_layout.payload import load_payload

logger = get_logger(__name__)

WEEKLY_COMPLIANCE_PATH = "/api/weekly-compliance"


def build_query(
    org_id: str,
    week_start: dt.date | str | None = None,
    instructor_id: str | None = None,
) -> dict[str, str]:
    """Query parameters understood by the endpoint; empty values are omitted."""
    params: dict[str, str] = {"org_id": org_id}
    if week_start:
        params["week_start"] = (
            week_start.isoformat() if isinstance(week_start, dt.date) else week_start
        )
    if instructor_id:
        params["instructor_id"] = instructor_id
    return params


class WeeklyComplianceClient:
    """Reads weekly schedules from the dashboard API with a bearer token."""

    def __init__(
        self,
        config: LayoutConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or get_config()
        self.http = session or requests.Session()
        self.url = self.config.api_base_url.rstrip("/") + WEEKLY_COMPLIANCE_PATH

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "Cache-Control": "no-store"}
        if self.config.api_token:
            headers["Authorization"] = f"Bearer {self.config.api_token}"
        return headers

    def _raise_for_status(self, response: requests.Response) -> None:
        status = response.status_code
        if status < 400:
            return
        message = f"weekly-compliance returned {status}: {response.text[:200]}"
        if status in (401, 403):
            raise AuthenticationError(message)
        if status == 429:
            raise RateLimitError(message)
        if status >= 500:
            raise TransientError(message)
        raise PermanentError(message)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, max=10),
        retry=retry_if_exception_type(TransientError),
        reraise=True,
    )
    def fetch_raw(self, params: dict[str, str]) -> Any:
        """GET the endpoint and return the decoded JSON body.

        Raises:
            AuthenticationError: Token missing, invalid or expired.
            RateLimitError / TransientError: Retried, re-raised after 3 attempts.
            PermanentError: Other 4xx responses.
            PayloadError: Body is not JSON.
        """
        logger.info("weekly_compliance_request", url=self.url, **params)
        try:
            response = self.http.get(
                self.url,
                params=params,
                headers=self._headers(),
                timeout=self.config.request_timeout_seconds,
            )
        except (requests.Timeout, requests.ConnectionError) as e:
            logger.warning("weekly_compliance_unreachable", error=str(e))
            raise TransientError(f"weekly-compliance unreachable: {e}") from e

        self._raise_for_status(response)

        try:
            return response.json()
        except ValueError as e:
            raise PayloadError("weekly-compliance returned a non-JSON body") from e

    def fetch_week(
        self,
        org_id: str,
        week_start: dt.date | str | None = None,
        instructor_id: str | None = None,
    ) -> WeeklyPayload:
        """Fetch and validate one week of sessions.

        Args:
            org_id: Organization identifier.
            week_start: Any date of the week (the backend snaps to Sunday).
            instructor_id: Restrict to one instructor's students.
        """
        raw = self.fetch_raw(build_query(org_id, week_start, instructor_id))
        payload = load_payload(raw)
        logger.info(
            "weekly_compliance_fetched",
            org_id=org_id,
            week_start=payload.week_start.isoformat() if payload.week_start else None,
            days=len(payload.days),
        )
        return payload
