"""Logging setup for the service.

Modules log through ``logging.getLogger(__name__)``; this only decides level and format,
once, for the ``src`` logger tree.
"""

import logging
import sys

from src.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure the root handler and the level of our own loggers."""
    log_level = getattr(logging, settings.log_level, logging.INFO)

    logging.basicConfig(format=LOG_FORMAT, stream=sys.stdout, level=log_level)

    # SQL echo is controlled by settings.database_echo, keep the rest of sqlalchemy quiet
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)

    logging.getLogger("src").setLevel(log_level)
