# utils/log.py
from __future__ import annotations
import logging
from typing import Optional

from config import LOG_LEVEL

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None) -> None:
    """Sets up root logging once; later calls only adjust the level."""
    resolved = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=resolved, format=LOG_FORMAT, datefmt=DATE_FORMAT)
    root.setLevel(resolved)
    # requests/urllib3 are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(max(resolved, logging.WARNING))
