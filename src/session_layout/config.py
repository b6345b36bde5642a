"""Dashboard configuration loaded from environment variables.

Grid geometry defaults match the weekly compliance view; API settings point
the client at the scheduling backend.
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from session_layout.geometry import LayoutGeometry


class LayoutConfig(BaseSettings):
    """Configuration loaded from environment variables.

    For local development, create a .env file in the project root.
    """

    # Scheduling backend (weekly-compliance endpoint)
    api_base_url: str = Field(
        default="http://localhost:7071",
        description="Base URL of the dashboard API (without /api)",
    )
    api_token: str = Field(
        default="",
        description="Bearer token sent to the weekly-compliance endpoint",
    )
    request_timeout_seconds: float = Field(
        default=15.0,
        description="Timeout for a single API request",
    )

    # Grid geometry
    base_row_height: int = Field(
        default=44,
        gt=0,
        description="Minimum pixel height of one grid row",
    )
    max_visible_chips: int = Field(
        default=2,
        ge=0,
        description="Chips shown side by side before overflowing into badges",
    )
    grid_interval_minutes: int = Field(
        default=30,
        gt=0,
        description="Grid step used to derive a window when the payload has none",
    )
    default_session_duration_minutes: int = Field(
        default=30,
        gt=0,
        description="Session duration used when the payload has none",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def geometry(self) -> LayoutGeometry:
        """Grid geometry for the layout engine."""
        return LayoutGeometry(
            base_row_height=self.base_row_height,
            max_visible_chips=self.max_visible_chips,
        )


_config: LayoutConfig | None = None


def get_config() -> LayoutConfig:
    """Get the configuration singleton.

    Returns:
        LayoutConfig: Configuration instance
    """
    global _config
    if _config is None:
        _config = LayoutConfig()
    return _config
