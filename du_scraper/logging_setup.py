"""Logging configuration for command-line runs.

Modules log through ``structlog.get_logger(__name__)``; this routes those
events through the standard library so that they reach stdout and, when
requested, a log file.
"""

import logging
import sys

import structlog


def configure_logging(verbose: bool = False, log_file: str | None = None) -> None:
    """Configure stdlib logging handlers and the structlog pipeline.

    Args:
        verbose: Log DEBUG events (extracted snippets, skipped courses).
        log_file: Optional file receiving a copy of the log.
    """
    level = logging.DEBUG if verbose else logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
