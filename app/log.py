"""Process-wide logging setup."""

from __future__ import annotations

import logging

from app.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Attach a root handler (once) and set the level for the `app` loggers."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("app").setLevel((level or settings.log_level).upper())
