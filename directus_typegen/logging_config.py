"""Logging setup for directus_typegen.

Modules obtain loggers through :func:`get_logger`; the CLI calls
:func:`setup_logging` once to attach handlers to the package logger.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "directus_typegen"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package logger.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        The logger instance.
    """
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: str | int = "WARNING",
    log_file: str | Path | None = None,
    console: Console | None = None,
) -> logging.Logger:
    """Configure handlers on the package logger.

    Repeated calls only adjust the level.

    Args:
        level: Logging level name or number.
        log_file: Optional file that receives a plain-text copy of the log.
        console: Rich console to log to (defaults to stderr).

    Returns:
        The configured package logger.
    """
    global _configured

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if _configured:
        return logger

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(rich_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    logger.propagate = False
    _configured = True
    logger.debug(f"Logging configured at level {logging.getLevelName(level)}")
    return logger
