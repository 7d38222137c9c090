from __future__ import annotations

import logging

from .config import log_level


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        logging.basicConfig(level=getattr(logging, log_level(), logging.INFO), format="%(levelname)s | %(message)s")
    return logger
