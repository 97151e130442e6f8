"""Logging configuration for tackboard."""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import Settings

# Marks handlers installed here so a second call replaces rather than duplicates them
_HANDLER_FLAG = "_tackboard_handler"


def setup_logging(
    verbose: int = 0,
    log_file: Path | None = None,
    settings: Settings | None = None,
) -> None:
    """Configure logging based on verbosity level and optional file output.

    Args:
        verbose: Verbosity level (0=off, 1=INFO, 2+=DEBUG)
        log_file: Optional path to write logs to file
        settings: Optional settings; storage backend and mutation policy are
            logged in the startup banner
    """
    logger = logging.getLogger("tackboard")
    for handler in logger.handlers[:]:
        if getattr(handler, _HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()

    if verbose == 0 and log_file is None:
        return

    level = logging.DEBUG if verbose >= 2 else logging.INFO
    logger.setLevel(level)

    # httpx logs every request at INFO; HttpStorage already logs them with timings
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose >= 3 else logging.WARNING)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers: list[logging.Handler] = []
    if verbose > 0:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_FLAG, True)
        logger.addHandler(handler)

    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    logger.info("=" * 60)
    logger.info("tackboard starting | %s | level=%s", timestamp, logging.getLevelName(level))
    if settings is not None:
        location = settings.api_url if settings.backend == "http" else settings.data_dir
        logger.info(
            "backend=%s (%s) | policy=%s", settings.backend, location, settings.mutation_policy
        )
    logger.info("=" * 60)
