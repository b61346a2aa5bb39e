"""Logging configuration."""

import logging
import os


def setup_logging(level: str | None = None) -> None:
    """Configure package logging.

    The level falls back to ``LOG_LEVEL`` from the environment, then INFO.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
