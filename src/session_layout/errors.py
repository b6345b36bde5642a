"""Error hierarchy for the dashboard's boundary with the scheduling backend.

The layout engine itself never raises: malformed sessions and windows degrade
to "nothing to render". These exceptions are only raised where data enters
the project (payload validation, the weekly compliance API client), and the
transient/permanent split lets tenacity decide what is worth retrying.

Example usage with tenacity:
    @retry(retry=retry_if_exception_type(TransientError), stop=stop_after_attempt(3))
    def fetch_week(org_id: str, week_start: str):
        ...
"""


class LayoutError(Exception):
    """Base exception for all session-layout errors."""

    pass


class TransientError(LayoutError):
    """Temporary failure that may succeed on retry.

    Examples: connection reset, read timeout, 502/503 from the backend.
    """

    pass


class RateLimitError(TransientError):
    """Backend answered 429 - back off before the next attempt."""

    pass


class PermanentError(LayoutError):
    """Failure that won't succeed on retry.

    Examples: unknown organization, malformed query parameters.
    """

    pass


class AuthenticationError(PermanentError):
    """Missing, invalid or expired bearer token (401/403)."""

    pass


class PayloadError(PermanentError):
    """Weekly payload does not match the expected structure.

    Raised for structural problems only (days is not a list, bad dates,
    unknown session status). Unparseable session times are not errors.
    """

    pass
