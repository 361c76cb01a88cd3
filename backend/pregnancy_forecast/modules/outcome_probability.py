"""
Outcome Probability Calculator
Turns risk sub-scores into delivery type and delivery mode distributions.
"""
import math
from typing import Any

from .schemas import DeliveryModeDistribution, DeliveryTypeDistribution, RiskScoreSet

MATURED_FLOOR = 0.40
PREMATURE_CEILING = 0.40
MORTALITY_CEILING = 0.20
CSECTION_CEILING = 0.70

FIRST_BIRTH_CSECTION_WEIGHT = 0.1


def round_probability(value: float) -> float:
    """Round to 2 decimals, halves away from zero."""
    return math.floor(value * 100 + 0.5) / 100


def calculate_delivery_type(scores: RiskScoreSet) -> DeliveryTypeDistribution:
    """
    Matured/Premature/MortalityRisk from the mean risk.

    The raw weights are normalized to sum to 1.0 before rounding; each
    field is rounded on its own, so the rounded sum may be off by a
    hundredth or two.
    """
    mean_risk = scores.mean()

    matured = max(MATURED_FLOOR, 0.80 - mean_risk * 0.3)
    premature = min(PREMATURE_CEILING, 0.15 + mean_risk * 0.2)
    mortality = min(MORTALITY_CEILING, 0.05 + mean_risk * 0.1)

    total = matured + premature + mortality

    return DeliveryTypeDistribution(
        matured=round_probability(matured / total),
        premature=round_probability(premature / total),
        mortality_risk=round_probability(mortality / total),
    )


def is_first_birth(parity: Any) -> bool:
    return (parity == 0 and not isinstance(parity, bool)) or parity == '0'


def calculate_delivery_mode(scores: RiskScoreSet, parity: Any = None) -> DeliveryModeDistribution:
    c_section = min(
        CSECTION_CEILING,
        scores.hypertension * 0.4
        + scores.growth_restriction * 0.3
        + scores.bmi_risk * 0.2
        + (FIRST_BIRTH_CSECTION_WEIGHT if is_first_birth(parity) else 0),
    )

    return DeliveryModeDistribution(
        normal=round_probability(1 - c_section),
        c_section=round_probability(c_section),
    )
