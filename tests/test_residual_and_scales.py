from __future__ import annotations

import pytest

from dpia_risk.residual_risk import calculate_residual_risk, requires_prior_consultation
from dpia_risk.risk_engine import create_risk_assessment
from dpia_risk.risk_scales import (
    DPIA_RISK_FACTORS,
    describe_impact,
    describe_likelihood,
    missing_risk_factors,
    risk_factor_label,
    risk_level_label,
)


def test_residual_risk_after_mitigation():
    inherent = create_risk_assessment(5, 5)
    residual = calculate_residual_risk(inherent, 2, 3, "Encryption at rest")
    assert residual.residual_score == 6
    assert residual.residual_level == "medium"
    assert residual.inherent_score == 25
    assert residual.inherent_level == "critical"
    assert residual.score_reduction == 19
    assert residual.level_reduced is True
    assert requires_prior_consultation(residual) is False


def test_residual_risk_still_high_needs_consultation():
    residual = calculate_residual_risk({"likelihood": 4, "impact": 5, "score": 20, "level": "high"}, 4, 4)
    assert residual.residual_level == "high"
    assert residual.level_reduced is False
    assert residual.score_reduction == 4
    assert requires_prior_consultation(residual) is True


@pytest.mark.parametrize("likelihood,impact", [(0, 3), (3, 6)])
def test_residual_values_are_range_checked(likelihood, impact):
    with pytest.raises(ValueError):
        calculate_residual_risk(create_risk_assessment(3, 3), likelihood, impact)


def test_scale_labels():
    assert describe_likelihood(1) == "Very Low"
    assert describe_likelihood(5) == "Very High"
    assert describe_impact(4) == "Major"
    assert describe_impact(9) == "Unknown"
    assert risk_level_label("critical") == "Critical Risk"


def test_risk_factor_labels_and_missing():
    assert risk_factor_label("risk_large_scale") == "Large-scale processing"
    assert risk_factor_label("risk_cross_border_transfer") == "Cross border transfer"
    assert missing_risk_factors(["risk_large_scale", "other"]) == [
        k for k in DPIA_RISK_FACTORS if k != "risk_large_scale"
    ]


def test_residual_against_unknown_inherent_level():
    residual = calculate_residual_risk({"likelihood": 5, "impact": 5, "score": 25, "level": "Severe"}, 1, 1)
    assert residual.residual_level == "low"
    assert residual.score_reduction == 24
    assert residual.level_reduced is False
