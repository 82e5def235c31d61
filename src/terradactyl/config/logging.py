"""Logging setup for the terradactyl CLI."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for terminal output.

    Only the first call takes effect unless ``force=True``. Lifecycle handlers log
    at INFO and each panel request at DEBUG.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    # httpx logs every request at INFO, including the full URL
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
