"""Logging setup shared by the generator, visitor and CLI.

Modules obtain their logger through :func:`get_logger`; the CLI calls
:func:`setup_logging` once to attach a rich handler to the package logger.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "openapi_alors"

_LOG_FORMAT = "%(message)s"
_DATE_FORMAT = "[%X]"


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package logger.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(level: int | str = logging.WARNING, console: Console | None = None) -> None:
    """Configure the package logger with a rich handler.

    Calling this more than once replaces the previously installed handler.

    Args:
        level: Logging level name or number.
        console: Console to log to (defaults to stderr).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.debug("Logging configured at level %s", logging.getLevelName(level))
