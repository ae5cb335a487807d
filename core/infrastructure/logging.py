"""
Logging infrastructure.

Provides logging utilities for the infrastructure layer.
"""
import logging
from typing import Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """
    Configure the root logger once for the whole process.

    Args:
        level: Level name (e.g. "DEBUG") or numeric level
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    if not any(getattr(h, "_store_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._store_handler = True
        root.addHandler(handler)
    root.setLevel(level)

    # aiohttp access noise
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)

