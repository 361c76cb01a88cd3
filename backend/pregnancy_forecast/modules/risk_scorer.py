"""
Risk Scorer - Independent maternal/fetal risk sub-scores
Each factor is scored from the latest visit and the patient profile.
"""
import logging
from typing import Any, Mapping, Optional, Sequence

from .schemas import RiskScoreSet, Visit
from .visit_normalizer import latest_visit, parse_blood_pressure, to_number

logger = logging.getLogger(__name__)

# Clinical thresholds
HB_MODERATE = 10.0
HB_MILD = 11.0

BP_HIGH_SYS = 140
BP_HIGH_DIA = 90
BP_ELEVATED_SYS = 130
BP_ELEVATED_DIA = 85

FH_MAJOR_DEVIATION = 4
FH_MINOR_DEVIATION = 2

TERM_WEEK = 37
VERY_PRETERM_WEEK = 32

DEFAULT_MATERNAL_AGE = 25
MATERNAL_AGE_MIN = 18
MATERNAL_AGE_MAX = 35

BMI_UNDERWEIGHT = 18.5
BMI_OVERWEIGHT = 25
BMI_OBESE = 30


def score_risks(visits: Sequence[Visit], patient: Optional[Mapping[str, Any]] = None) -> RiskScoreSet:
    """
    Compute the six risk sub-scores.

    Args:
        visits: normalized visit history (at least one visit)
        patient: patient profile mapping (AGE, BMI_VALUE, PARITY,
            MEDICAL_HISTORY); missing keys fall through to the
            default branch of the owning rule

    Returns:
        RiskScoreSet with every score in [0, 1]
    """
    patient = patient or {}
    latest = latest_visit(visits)

    scores = RiskScoreSet(
        anemia=_score_anemia(latest.hemoglobin_level),
        hypertension=_score_hypertension(latest.blood_pressure),
        growth_restriction=_score_growth_restriction(latest.fundal_height, latest.gestational_age),
        preterm_risk=_score_preterm(latest.gestational_age, patient),
        maternal_age_risk=_score_maternal_age(patient.get('AGE')),
        bmi_risk=_score_bmi(patient.get('BMI_VALUE')),
    )

    logger.debug(f"Risk scores at {latest.gestational_age} weeks: {scores.model_dump()}")
    return scores


def _score_anemia(hb: Optional[float]) -> float:
    if not hb:
        return 0.0
    if hb < HB_MODERATE:
        return 0.8
    if hb < HB_MILD:
        return 0.4
    return 0.1


def _score_hypertension(bp: Optional[str]) -> float:
    if not bp:
        return 0.0

    systolic, diastolic = parse_blood_pressure(bp)

    if systolic >= BP_HIGH_SYS or diastolic >= BP_HIGH_DIA:
        return 0.9
    if systolic >= BP_ELEVATED_SYS or diastolic >= BP_ELEVATED_DIA:
        return 0.6
    return 0.1


def _score_growth_restriction(fundal_height: Optional[float], ga: Optional[float]) -> float:
    if not fundal_height or not ga:
        return 0.0

    difference = abs(fundal_height - ga)

    if difference > FH_MAJOR_DEVIATION:
        return 0.7
    if difference > FH_MINOR_DEVIATION:
        return 0.3
    return 0.1


def has_preterm_history(patient: Mapping[str, Any]) -> bool:
    """Prior births on record and a medical history that mentions preterm delivery."""
    parity = patient.get('PARITY')
    parity_count = to_number(parity)

    has_prior_births = (parity_count is not None and parity_count > 0) or parity == '1'
    history = str(patient.get('MEDICAL_HISTORY') or '').lower()

    return has_prior_births and 'preterm' in history


def _score_preterm(ga: float, patient: Mapping[str, Any]) -> float:
    if ga < TERM_WEEK and has_preterm_history(patient):
        return 0.6
    if ga < VERY_PRETERM_WEEK:
        return 0.3
    return 0.1


def _score_maternal_age(age: Any) -> float:
    age = to_number(age) or DEFAULT_MATERNAL_AGE

    if age < MATERNAL_AGE_MIN or age > MATERNAL_AGE_MAX:
        return 0.4
    return 0.1


def _score_bmi(bmi: Any) -> float:
    bmi = to_number(bmi)
    if bmi is None:
        return 0.0

    if bmi < BMI_UNDERWEIGHT or bmi > BMI_OBESE:
        return 0.5
    if bmi > BMI_OVERWEIGHT:
        return 0.3
    return 0.1
