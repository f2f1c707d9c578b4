"""Process-wide logging setup."""
import logging

from registry.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging() -> None:
    level = logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
