from __future__ import annotations

import logging

import pytest

from dpia_risk.logging_setup import LOGGER_NAME
from dpia_risk.risk_engine import create_risk_assessment


@pytest.fixture
def mixed_risk_factors():
    """One high, one medium and one unrecognised low factor."""
    return {
        "risk_systematic_monitoring": create_risk_assessment(4, 4, "CCTV in public areas"),
        "risk_automated_decisions": create_risk_assessment(3, 3),
        "risk_custom_vendor": create_risk_assessment(1, 1),
    }


@pytest.fixture
def clean_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    logger.handlers = []
    yield logger
    for h in logger.handlers:
        h.close()
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
