"""structlog setup for charstats."""

import logging

import structlog

from charstats.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """
    Configure structlog from settings.

    Args:
        settings: Settings to use. If None, uses the cached settings.

    Raises:
        ValueError: If the log level or log format is not recognised
    """
    if settings is None:
        settings = get_settings()

    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {settings.log_level}")

    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    elif settings.log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        raise ValueError(
            f"Unknown log format '{settings.log_format}' (must be one of: console, json)"
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
