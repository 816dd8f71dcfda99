"""Structlog configuration for the service.

Console output with colors when attached to a terminal, JSON lines otherwise.
"""

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", json_output: bool | None = None) -> None:
    """Configure structlog processors and the minimum log level.

    ``json_output`` forces the renderer; when left as ``None`` the console
    renderer is used on a TTY and JSON everywhere else.
    """
    if json_output is None:
        json_output = not sys.stdout.isatty()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    min_level = logging.getLevelName(level.upper())
    if not isinstance(min_level, int):
        min_level = logging.INFO

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
