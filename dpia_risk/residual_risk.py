"""
Residual Risk Evaluation
========================

Once mitigation measures are planned, the assessor re-rates likelihood and
impact.  The residual risk is scored with the same 5x5 model as the
inherent risk and compared against it.  Under GDPR Art. 36 a residual risk
that stays high requires prior consultation with the supervisory authority.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from dpia_risk.risk_engine import (
    RiskAssessment,
    RiskAssessmentLike,
    create_risk_assessment,
    level_meets,
    level_rank,
    _as_assessment,
)


@dataclass
class ResidualRiskEvaluation:
    """Inherent vs. residual risk for one risk factor."""
    residual_likelihood: int
    residual_impact: int
    residual_score: int
    residual_level: str
    inherent_score: int
    inherent_level: str
    score_reduction: int
    level_reduced: bool
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def calculate_residual_risk(
    inherent: RiskAssessmentLike,
    residual_likelihood: int,
    residual_impact: int,
    description: Optional[str] = None,
) -> ResidualRiskEvaluation:
    """Score the residual risk left after mitigation.

    Unlike the inherent scoring functions, residual values are checked:
    they are entered after the assessment is complete.

    Raises:
        ValueError: if the residual likelihood or impact is outside 1-5.
    """
    if not 1 <= residual_likelihood <= 5:
        raise ValueError(f"Residual likelihood must be between 1 and 5, got {residual_likelihood}")
    if not 1 <= residual_impact <= 5:
        raise ValueError(f"Residual impact must be between 1 and 5, got {residual_impact}")

    inherent_ra = _as_assessment(inherent)
    residual: RiskAssessment = create_risk_assessment(residual_likelihood, residual_impact, description)
    inherent_rank, residual_rank = level_rank(inherent_ra.level), level_rank(residual.level)
    level_reduced = (
        inherent_rank is not None
        and residual_rank is not None
        and residual_rank < inherent_rank
    )
    return ResidualRiskEvaluation(
        residual_likelihood=residual.likelihood,
        residual_impact=residual.impact,
        residual_score=residual.score,
        residual_level=residual.level,
        inherent_score=inherent_ra.score,
        inherent_level=inherent_ra.level,
        score_reduction=inherent_ra.score - residual.score,
        level_reduced=level_reduced,
        description=description,
    )


def requires_prior_consultation(residual: ResidualRiskEvaluation) -> bool:
    """True when the residual risk is still high or critical (GDPR Art. 36)."""
    return level_meets(residual.residual_level, "high")
