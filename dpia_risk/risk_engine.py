"""
DPIA Risk Scoring Engine
========================

Turns qualitative likelihood/impact judgments (1 to 5 each) into a numeric
risk score and a discrete risk level, aggregates several named risk factors
into an overall assessment, and produces mitigation recommendations.

The scoring model is the usual 5x5 risk matrix:

* score = likelihood x impact (1 to 25)
* score >= 21 is ``critical``, >= 16 ``high``, >= 6 ``medium``, otherwise ``low``

The overall score blends the average factor score with the worst factor
score so that one severe factor is not diluted by several mild ones.

All functions are pure.  ``validate_risk_assessment`` is a separate,
explicit step: the scoring functions accept out-of-range values and simply
compute with them, which lets partially edited assessments exist.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)

# Ordered from least to most severe
RISK_LEVELS = ["low", "medium", "high", "critical"]
_LEVEL_RANK = {level: rank for rank, level in enumerate(RISK_LEVELS)}

# (minimum score, level), checked high to low
RISK_LEVEL_THRESHOLDS = [
    (21, "critical"),
    (16, "high"),
    (6, "medium"),
]

TIER_RECOMMENDATIONS = {
    "critical": [
        "Immediate action required: Critical privacy risks identified that must be addressed before processing begins",
        "Consider consulting with Data Protection Officer and legal counsel",
        "Implement strong technical and organizational safeguards",
    ],
    "high": [
        "High privacy risks require robust mitigation measures",
        "Regular monitoring and review of risk controls needed",
    ],
    "medium": [
        "Moderate risks should be monitored and controlled through appropriate measures",
    ],
}

# risk type -> (minimum level, recommendations)
SPECIFIC_RECOMMENDATION_RULES = {
    "risk_systematic_monitoring": (
        "high",
        [
            "Implement strong access controls and monitoring safeguards",
            "Consider anonymization or pseudonymization techniques",
        ],
    ),
    "risk_large_scale": (
        "high",
        [
            "Implement robust data security measures including encryption",
            "Establish clear data retention and deletion procedures",
        ],
    ),
    "risk_vulnerable_subjects": (
        "medium",
        [
            "Implement additional safeguards for vulnerable individuals",
            "Ensure appropriate consent mechanisms for children",
        ],
    ),
    "risk_innovative_tech": (
        "high",
        [
            "Conduct thorough testing of new technologies",
            "Implement algorithmic accountability measures",
        ],
    ),
    "risk_automated_decisions": (
        "medium",
        [
            "Provide meaningful information about automated decision-making",
            "Implement right to human intervention procedures",
        ],
    ),
}

GENERAL_RECOMMENDATIONS = [
    "Ensure data minimization principles are applied",
    "Implement privacy by design and default measures",
    "Provide clear information to data subjects about processing",
    "Establish procedures for handling data subject rights requests",
]


class EmptyRiskFactorsError(ValueError):
    """Raised when an overall risk is requested for zero risk factors."""

    def __init__(self, assessment_id: str = ""):
        self.assessment_id = assessment_id
        super().__init__("no risk factors supplied")


@dataclass(frozen=True)
class RiskAssessment:
    """A single likelihood/impact judgment with its derived score and level."""
    likelihood: int
    impact: int
    score: int
    level: str
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RiskAssessment":
        return cls(
            likelihood=data["likelihood"],
            impact=data["impact"],
            score=data["score"],
            level=data["level"],
            description=data.get("description"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RiskEvaluation:
    """A risk assessment bound to a DPIA and a named risk factor."""
    assessment_id: str
    risk_type: str
    likelihood: int
    impact: int
    score: int
    level: str
    description: Optional[str] = None
    mitigation_measures: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class OverallRiskAssessment:
    """Aggregate of all evaluated risk factors of one assessment."""
    overall_score: int
    overall_level: str
    risk_evaluations: List[RiskEvaluation]
    recommendations: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_score": self.overall_score,
            "overall_level": self.overall_level,
            "risk_evaluations": [e.to_dict() for e in self.risk_evaluations],
            "recommendations": list(self.recommendations),
        }


@dataclass
class RiskValidationResult:
    """Outcome of ``validate_risk_assessment``."""
    is_valid: bool
    errors: List[str]


RiskAssessmentLike = Union[RiskAssessment, Mapping[str, Any]]


def _as_assessment(value: RiskAssessmentLike) -> RiskAssessment:
    if isinstance(value, RiskAssessment):
        return value
    return RiskAssessment.from_dict(value)


def _round_half_up(value: float) -> int:
    # round() would use banker's rounding: round(3.5) == 4 but round(2.5) == 2
    return int(math.floor(value + 0.5))


def level_rank(level: str) -> Optional[int]:
    """Severity rank of a level (low=0 .. critical=3), None if unknown."""
    return _LEVEL_RANK.get(level)


def level_meets(level: str, minimum: str) -> bool:
    """Return True if ``level`` is at least as severe as ``minimum``.

    Unknown levels never meet a threshold.
    """
    rank, minimum_rank = level_rank(level), level_rank(minimum)
    if rank is None or minimum_rank is None:
        return False
    return rank >= minimum_rank


def calculate_risk_score(likelihood: int, impact: int) -> int:
    """Return ``likelihood * impact``.  Inputs are not range-checked."""
    return likelihood * impact


def determine_risk_level(score: int) -> str:
    """Classify a risk score into low, medium, high or critical."""
    for minimum, level in RISK_LEVEL_THRESHOLDS:
        if score >= minimum:
            return level
    return "low"


def create_risk_assessment(likelihood: int, impact: int, description: Optional[str] = None) -> RiskAssessment:
    """Build a ``RiskAssessment`` from a likelihood/impact pair.

    No validation is performed; see ``validate_risk_assessment``.
    """
    score = calculate_risk_score(likelihood, impact)
    return RiskAssessment(
        likelihood=likelihood,
        impact=impact,
        score=score,
        level=determine_risk_level(score),
        description=description,
    )


def evaluate_risk_factor(
    assessment_id: str,
    risk_type: str,
    risk_assessment: RiskAssessmentLike,
    mitigation_measures: Optional[List[str]] = None,
) -> RiskEvaluation:
    """Bind a risk assessment to an assessment id and a risk type."""
    ra = _as_assessment(risk_assessment)
    return RiskEvaluation(
        assessment_id=assessment_id,
        risk_type=risk_type,
        likelihood=ra.likelihood,
        impact=ra.impact,
        score=ra.score,
        level=ra.level,
        description=ra.description,
        mitigation_measures=list(mitigation_measures) if mitigation_measures is not None else None,
    )


def _specific_recommendations(risk_type: str, level: str) -> List[str]:
    rule = SPECIFIC_RECOMMENDATION_RULES.get(risk_type)
    if rule is None:
        return []
    minimum, recommendations = rule
    if not level_meets(level, minimum):
        return []
    return list(recommendations)


def _generate_recommendations(risk_evaluations: List[RiskEvaluation]) -> List[str]:
    recommendations: List[str] = []

    levels_present = {e.level for e in risk_evaluations}
    for tier in ("critical", "high", "medium"):
        if tier in levels_present:
            recommendations.extend(TIER_RECOMMENDATIONS[tier])

    for evaluation in risk_evaluations:
        recommendations.extend(_specific_recommendations(evaluation.risk_type, evaluation.level))

    recommendations.extend(GENERAL_RECOMMENDATIONS)

    # dict keeps first-occurrence order
    return list(dict.fromkeys(recommendations))


def calculate_overall_risk(
    assessment_id: str,
    risk_factors: Mapping[str, RiskAssessmentLike],
    mitigation_measures: Optional[Mapping[str, List[str]]] = None,
) -> OverallRiskAssessment:
    """Aggregate several risk factors into an overall risk assessment.

    Args:
        assessment_id: Identifier of the DPIA the factors belong to.
        risk_factors: Mapping of risk type (e.g. ``"risk_large_scale"``) to
            its assessment.  Iteration order is preserved in the result.
        mitigation_measures: Optional mapping of risk type to the mitigation
            measures planned for it.

    Returns:
        An ``OverallRiskAssessment`` whose score is
        ``round_half_up((average + maximum) / 2)`` over the factor scores.

    Raises:
        EmptyRiskFactorsError: if ``risk_factors`` is empty.
    """
    if not risk_factors:
        raise EmptyRiskFactorsError(assessment_id)

    mitigation_measures = mitigation_measures or {}
    risk_evaluations: List[RiskEvaluation] = []
    total_score = 0
    max_score = 0
    for risk_type, risk_assessment in risk_factors.items():
        evaluation = evaluate_risk_factor(
            assessment_id,
            risk_type,
            risk_assessment,
            mitigation_measures.get(risk_type),
        )
        risk_evaluations.append(evaluation)
        total_score += evaluation.score
        max_score = max(max_score, evaluation.score)

    avg_score = total_score / len(risk_evaluations)
    overall_score = _round_half_up((avg_score + max_score) / 2)
    overall_level = determine_risk_level(overall_score)

    logger.debug(
        "Overall risk for %s: %d factors, avg=%.2f max=%d -> %d (%s)",
        assessment_id, len(risk_evaluations), avg_score, max_score, overall_score, overall_level,
    )

    return OverallRiskAssessment(
        overall_score=overall_score,
        overall_level=overall_level,
        risk_evaluations=risk_evaluations,
        recommendations=_generate_recommendations(risk_evaluations),
    )


def validate_risk_assessment(risk_assessment: RiskAssessmentLike) -> RiskValidationResult:
    """Check that an assessment's values are in range and self-consistent.

    All applicable errors are collected.  The input is never modified and
    no exception is raised for inconsistent values.
    """
    if isinstance(risk_assessment, RiskAssessment):
        likelihood = risk_assessment.likelihood
        impact = risk_assessment.impact
        score = risk_assessment.score
        level = risk_assessment.level
    else:
        likelihood = risk_assessment["likelihood"]
        impact = risk_assessment["impact"]
        score = risk_assessment["score"]
        level = risk_assessment["level"]

    errors: List[str] = []

    if likelihood < 1 or likelihood > 5:
        errors.append("Likelihood must be between 1 and 5")

    if impact < 1 or impact > 5:
        errors.append("Impact must be between 1 and 5")

    expected_score = calculate_risk_score(likelihood, impact)
    if score != expected_score:
        errors.append(f"Score should be {expected_score} (likelihood × impact)")

    expected_level = determine_risk_level(score)
    if level != expected_level:
        errors.append(f"Level should be {expected_level} for score {score}")

    if errors:
        logger.debug("Risk assessment failed validation: %s", "; ".join(errors))

    return RiskValidationResult(is_valid=not errors, errors=errors)


class RiskEngine:
    """Stateless object wrapper around the module functions.

    Useful where callers want to inject an engine; every instance behaves
    identically.
    """

    calculate_risk_score = staticmethod(calculate_risk_score)
    determine_risk_level = staticmethod(determine_risk_level)
    create_risk_assessment = staticmethod(create_risk_assessment)
    evaluate_risk_factor = staticmethod(evaluate_risk_factor)
    calculate_overall_risk = staticmethod(calculate_overall_risk)
    validate_risk_assessment = staticmethod(validate_risk_assessment)


risk_engine = RiskEngine()
