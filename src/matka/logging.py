from __future__ import annotations
import logging
import sys
from matka.config import CFG

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Logger writing to stderr so CLI output on stdout stays machine readable."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    wanted = (level or CFG.log_level).upper()
    logger.setLevel(getattr(logging, wanted, logging.INFO))
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(h)
    logger.propagate = False
    return logger
