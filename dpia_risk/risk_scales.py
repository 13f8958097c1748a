"""
Risk scales and standard DPIA risk factors.

Labels shown next to the 1-5 likelihood and impact choices when a risk is
assessed, and the five risk factors every DPIA is expected to cover.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

LIKELIHOOD_SCALE: Dict[int, Tuple[str, str]] = {
    1: ("Very Low", "Highly unlikely to occur"),
    2: ("Low", "Unlikely to occur"),
    3: ("Medium", "May occur occasionally"),
    4: ("High", "Likely to occur"),
    5: ("Very High", "Almost certain to occur"),
}

IMPACT_SCALE: Dict[int, Tuple[str, str]] = {
    1: ("Minimal", "Little or no impact on individuals"),
    2: ("Minor", "Some inconvenience to individuals"),
    3: ("Moderate", "Significant impact on individuals"),
    4: ("Major", "Substantial harm to individuals"),
    5: ("Severe", "Serious harm or distress to individuals"),
}

DPIA_RISK_FACTORS: Dict[str, str] = {
    "risk_systematic_monitoring": "Systematic monitoring",
    "risk_large_scale": "Large-scale processing",
    "risk_vulnerable_subjects": "Vulnerable data subjects",
    "risk_innovative_tech": "Innovative technology",
    "risk_automated_decisions": "Automated decision-making",
}


def describe_likelihood(value: int) -> str:
    return LIKELIHOOD_SCALE.get(value, ("Unknown", ""))[0]


def describe_impact(value: int) -> str:
    return IMPACT_SCALE.get(value, ("Unknown", ""))[0]


def risk_level_label(level: str) -> str:
    """Display label for a level, e.g. ``"high"`` -> ``"High Risk"``."""
    return f"{level[:1].upper()}{level[1:]} Risk"


def risk_factor_label(risk_type: str) -> str:
    """Human label for a risk factor key; unknown keys are prettified."""
    if risk_type in DPIA_RISK_FACTORS:
        return DPIA_RISK_FACTORS[risk_type]
    name = risk_type[len("risk_"):] if risk_type.startswith("risk_") else risk_type
    return name.replace("_", " ").capitalize()


def missing_risk_factors(risk_factors: Iterable[str]) -> List[str]:
    """Return the standard DPIA risk factors not present in ``risk_factors``."""
    assessed = set(risk_factors)
    return [key for key in DPIA_RISK_FACTORS if key not in assessed]
