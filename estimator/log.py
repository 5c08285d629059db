"""structlog configuration for the service."""

import logging

import structlog


def configure_logging(level: int = logging.INFO, json_output: bool = False) -> None:
    """Configure structlog processors and level filtering.

    Args:
        level: Minimum level to emit (e.g., logging.DEBUG)
        json_output: Render one JSON object per line instead of console output
    """
    renderer = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info if json_output else structlog.dev.set_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
