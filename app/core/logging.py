import logging
import sys
from pythonjsonlogger import jsonlogger

from app.core.config import settings


def setup_logging(level: str | None = None) -> None:
    logger = logging.getLogger()
    logger.setLevel(level or settings.log_level)

    for existing in logger.handlers:
        if isinstance(existing.formatter, jsonlogger.JsonFormatter):
            return

    handler = logging.StreamHandler(sys.stdout)
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"}
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
