from __future__ import annotations

"""Centralised Loguru configuration.

Use setup_logger() at program start. Idempotent – repeated calls are no-ops.
"""
import sys
from pathlib import Path
from typing import Literal

from loguru import logger

from roadaware.settings import settings

_INITIALISED = False

# Request-scoped lines are bound with a tag, e.g. logger.bind(tag="STREAM").
DEFAULT_TAG = "app"
CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>[{extra[tag]}]</cyan> <level>{message}</level>"
)


def setup_logger(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None
) -> None:
    """Configure Loguru sinks once per process.

    If *level* is *None* the value of ``settings.LOG_LEVEL`` is used.  The
    function is idempotent – subsequent calls are ignored.
    """

    global _INITIALISED
    if _INITIALISED:
        return

    if level is None:
        level = settings.LOG_LEVEL.upper()  # type: ignore[assignment]

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.remove()  # remove default stderr sink
    logger.configure(extra={"tag": DEFAULT_TAG})

    logger.add(log_dir / "app.log", level="INFO", format=CONSOLE_FORMAT, rotation="1 MB", retention="10 days")
    logger.add(log_dir / "debug.log", level="DEBUG", format=CONSOLE_FORMAT, rotation="1 MB", retention="10 days")

    # pretty-print to stderr at the chosen level
    logger.add(
        sys.stderr,
        level=level,
        format=CONSOLE_FORMAT,
        colorize=True,
    )

    logger.info("Logger initialised (level: {})", level)

    _INITIALISED = True
