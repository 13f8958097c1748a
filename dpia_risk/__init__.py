"""
DPIA risk scoring package.

- risk_engine: likelihood x impact scoring, risk levels, overall risk and recommendations
- risk_scales: likelihood/impact scale labels and the standard DPIA risk factors
- residual_risk: residual risk after mitigation and prior consultation check
- risk_register: risk register as a DataFrame and Excel export
- logging_setup: package logger configuration
"""
from dpia_risk.risk_engine import (  # noqa: F401
    RISK_LEVELS,
    EmptyRiskFactorsError,
    OverallRiskAssessment,
    RiskAssessment,
    RiskEngine,
    RiskEvaluation,
    RiskValidationResult,
    calculate_overall_risk,
    calculate_risk_score,
    create_risk_assessment,
    determine_risk_level,
    evaluate_risk_factor,
    risk_engine,
    validate_risk_assessment,
)
