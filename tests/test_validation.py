from __future__ import annotations

from dpia_risk.risk_engine import create_risk_assessment, validate_risk_assessment


def test_consistent_assessment_is_valid():
    for likelihood in range(1, 6):
        for impact in range(1, 6):
            result = validate_risk_assessment(create_risk_assessment(likelihood, impact))
            assert result.is_valid is True
            assert result.errors == []


def test_likelihood_out_of_range():
    result = validate_risk_assessment({"likelihood": 6, "impact": 3, "score": 18, "level": "high"})
    assert result.is_valid is False
    assert result.errors == ["Likelihood must be between 1 and 5"]


def test_all_errors_are_collected():
    data = {"likelihood": 0, "impact": 9, "score": 10, "level": "critical"}
    result = validate_risk_assessment(data)
    assert result.is_valid is False
    assert result.errors == [
        "Likelihood must be between 1 and 5",
        "Impact must be between 1 and 5",
        "Score should be 0 (likelihood × impact)",
        "Level should be medium for score 10",
    ]
    assert data == {"likelihood": 0, "impact": 9, "score": 10, "level": "critical"}


def test_level_checked_against_stored_score():
    result = validate_risk_assessment({"likelihood": 2, "impact": 2, "score": 4, "level": "medium"})
    assert result.errors == ["Level should be low for score 4"]


def test_computed_out_of_range_assessment_only_fails_range():
    result = validate_risk_assessment(create_risk_assessment(7, 5))
    assert result.errors == ["Likelihood must be between 1 and 5"]
