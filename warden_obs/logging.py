"""
Structured Logging (structlog).

Library modules call get_logger(__name__) at import time; the output format
is chosen once by setup_logging() in the host application. Until then
structlog's defaults apply.
"""

import logging
import sys

import structlog

from warden_config.settings import Settings

LIBRARY_LOGGERS = ("warden_rbac",)

# Every event carries logger name, level and ISO timestamp; %-style
# positional args and exc_info are rendered before the final renderer runs.
SHARED_PROCESSORS = (
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.format_exc_info,
)

RENDERERS = {
    "json": structlog.processors.JSONRenderer,
    "text": structlog.dev.ConsoleRenderer,
}


def build_processors(log_format: str) -> list:
    """
    Shared processors followed by the renderer for ``log_format``.

    Raises:
        ValueError: Unknown format (Settings only admits json and text)
    """
    try:
        renderer = RENDERERS[log_format]
    except KeyError:
        raise ValueError(f"Unknown log format: {log_format!r}. Available: {list(RENDERERS)}") from None
    return [*SHARED_PROCESSORS, renderer()]


def setup_logging(settings: Settings) -> None:
    """
    Route structlog through stdlib logging at settings.LOG_LEVEL.

    The level is also pinned on the library loggers so a host that already
    configured the root logger still gets registration and decision events.
    """
    level = settings.LOG_LEVEL.upper()
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(level)

    structlog.configure(
        processors=build_processors(settings.LOG_FORMAT),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get configured logger."""
    return structlog.get_logger(name)
