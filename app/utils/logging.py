# app/utils/logging.py
import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _get_log_level() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _configure_root_logger() -> None:
    root = logging.getLogger()

    #tylko raz, uvicorn/celery moga juz miec swoje handlery
    if root.handlers:
        return

    root.setLevel(_get_log_level())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(_get_log_level())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger dla modulu, typowo get_logger(__name__)."""
    return logging.getLogger(name)
