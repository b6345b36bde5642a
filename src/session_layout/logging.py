"""structlog setup for the layout engine, service and CLI.

Logs go to stderr so the CLI can keep stdout for the layout JSON / table.
Modules obtain loggers with get_logger(__name__) and never print().
"""

import logging
import sys

import structlog


def setup_logging(json_output: bool = False, log_level: str = "INFO") -> None:
    """Configure structlog processors and the stdlib bridge.

    Args:
        json_output: Render JSON lines (deployments) instead of console output.
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # requests/urllib3 log through stdlib logging
    root = logging.getLogger()
    root.handlers = [logging.StreamHandler(sys.stderr)]
    root.setLevel(level)


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger bound with the module name."""
    return structlog.get_logger(name)
