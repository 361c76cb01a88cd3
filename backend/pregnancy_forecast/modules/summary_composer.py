from typing import Dict, Tuple

from .schemas import DeliveryTypeDistribution, RiskScoreSet

SEVERITY_HIGH = 'high'
SEVERITY_MODERATE = 'moderate'
SEVERITY_LOW = 'low'

# Human-readable names for the risk factors
_RISK_NAMES: Dict[str, str] = {
    'anemia':             'anemia',
    'hypertension':       'hypertension',
    'growth_restriction': 'fetal growth restriction',
    'preterm_risk':       'preterm delivery',
    'maternal_age_risk':  'maternal age',
    'bmi_risk':           'BMI-related',
}

_TEMPLATES: Dict[str, str] = {
    SEVERITY_LOW: (
        "Patient shows stable progression with {matured}% likelihood of MATURED normal delivery. "
        "Continue routine antenatal monitoring."
    ),
    SEVERITY_MODERATE: (
        "Moderate {risk} risk noted. {matured}% chance of MATURED delivery "
        "with increased monitoring recommended."
    ),
    SEVERITY_HIGH: (
        "Elevated {risk} risk requires close monitoring. {premature}% premature delivery risk. "
        "Consider specialist consultation."
    ),
}


def risk_name(factor: str) -> str:
    return _RISK_NAMES.get(factor, factor)


def dominant_risk(scores: RiskScoreSet) -> Tuple[str, float]:
    """Highest-scoring factor; the earlier factor wins a tie."""
    top_name, top_score = None, None
    for name, score in scores.factors():
        if top_score is None or score > top_score:
            top_name, top_score = name, score
    return top_name, top_score


def severity_bucket(score: float) -> str:
    if score > 0.7:
        return SEVERITY_HIGH
    if score > 0.4:
        return SEVERITY_MODERATE
    return SEVERITY_LOW


def _percent(probability: float) -> int:
    return int(probability * 100 + 0.5)


def compose_summary(scores: RiskScoreSet, delivery_type: DeliveryTypeDistribution) -> str:
    factor, score = dominant_risk(scores)

    return _TEMPLATES[severity_bucket(score)].format(
        risk=risk_name(factor),
        matured=_percent(delivery_type.matured),
        premature=_percent(delivery_type.premature),
    )
