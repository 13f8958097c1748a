from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

LOGGER_NAME = "dpia_risk"


def setup_logging(level: Optional[Union[int, str]] = None, log_dir: Optional[str] = None) -> logging.Logger:
    """Configure the ``dpia_risk`` logger.

    ``level`` defaults to ``DPIA_RISK_LOG_LEVEL`` (WARNING if unset) and
    ``log_dir`` to ``DPIA_RISK_LOG_DIR``; without a directory only a stream
    handler is attached.  Safe to call more than once.
    """
    if level is None:
        level = os.environ.get("DPIA_RISK_LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = level.upper()
    if log_dir is None:
        log_dir = os.environ.get("DPIA_RISK_LOG_DIR") or None

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    if log_dir and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        os.makedirs(log_dir, exist_ok=True)
        text_path = os.path.join(log_dir, "dpia_risk.log")
        h = RotatingFileHandler(text_path, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
        h.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
        logger.addHandler(h)

    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, RotatingFileHandler) for h in logger.handlers):
        sh = logging.StreamHandler()
        sh.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(sh)

    return logger
