"""Logging setup for the backend service and the CLI.

loguru is the only sink.  Records emitted through stdlib ``logging`` (uvicorn,
httpx, httpcore) are forwarded to it so everything shares one stream on
stderr.  The service gets a timestamped format with call sites; CLI commands
get a short one so diagnostics stay readable next to the JSON printed on
stdout.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

SERVICE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
CLI_FORMAT = "<level>{level: <8}</level> {message}"

# Each executed request is already logged once by the executor.
_CLIENT_LOGGERS = ("httpx", "httpcore")


class _InterceptHandler(logging.Handler):
    """Forward stdlib records to loguru, keeping the real call site."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", *, cli: bool = False) -> None:
    """Route all logging to stderr through loguru at ``level``.

    ``cli=True`` selects the short format and leaves uvicorn alone (a CLI
    command never serves).
    """
    level = level.upper()

    logger.remove()
    logger.add(sys.stderr, level=level, format=CLI_FORMAT if cli else SERVICE_FORMAT)
    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    quiet = _CLIENT_LOGGERS if cli else (*_CLIENT_LOGGERS, "uvicorn.access")
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Logging to stderr at {} ({} format)", level, "cli" if cli else "service")
