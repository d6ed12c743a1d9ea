"""Root logging setup shared by the API and CLI entrypoints."""

import logging

from app.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    if not settings.DEBUG:
        # SQL echo is controlled by DEBUG through the engine, keep the logger quiet otherwise
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
