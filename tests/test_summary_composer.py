import pytest

from pregnancy_forecast.modules.schemas import DeliveryTypeDistribution, RiskScoreSet
from pregnancy_forecast.modules.summary_composer import (
    compose_summary,
    dominant_risk,
    risk_name,
    severity_bucket,
)

DIST = DeliveryTypeDistribution(matured=0.62, premature=0.27, mortality_risk=0.11)


@pytest.mark.parametrize('score, bucket', [(0.9, 'high'), (0.71, 'high'), (0.7, 'moderate'), (0.41, 'moderate'), (0.4, 'low'), (0.0, 'low')])
def test_severity_bucket(score, bucket):
    assert severity_bucket(score) == bucket


def test_dominant_risk_picks_highest():
    scores = RiskScoreSet(anemia=0.4, hypertension=0.9, bmi_risk=0.5)
    assert dominant_risk(scores) == ('hypertension', 0.9)


def test_dominant_risk_tie_goes_to_first_factor():
    scores = RiskScoreSet(hypertension=0.6, growth_restriction=0.6, bmi_risk=0.6)
    assert dominant_risk(scores) == ('hypertension', 0.6)


def test_dominant_risk_all_zero_is_anemia():
    assert dominant_risk(RiskScoreSet()) == ('anemia', 0.0)


def test_high_summary():
    scores = RiskScoreSet(anemia=0.8, hypertension=0.9, growth_restriction=0.7)
    assert compose_summary(scores, DIST) == (
        "Elevated hypertension risk requires close monitoring. 27% premature delivery risk. "
        "Consider specialist consultation."
    )


def test_moderate_summary():
    scores = RiskScoreSet(growth_restriction=0.7, maternal_age_risk=0.4)
    assert compose_summary(scores, DIST) == (
        "Moderate fetal growth restriction risk noted. 62% chance of MATURED delivery "
        "with increased monitoring recommended."
    )


def test_low_summary():
    scores = RiskScoreSet(preterm_risk=0.3, maternal_age_risk=0.1)
    dist = DeliveryTypeDistribution(matured=0.78, premature=0.16, mortality_risk=0.06)
    assert compose_summary(scores, dist) == (
        "Patient shows stable progression with 78% likelihood of MATURED normal delivery. "
        "Continue routine antenatal monitoring."
    )


@pytest.mark.parametrize('factor, name', [
    ('anemia', 'anemia'),
    ('growth_restriction', 'fetal growth restriction'),
    ('preterm_risk', 'preterm delivery'),
    ('maternal_age_risk', 'maternal age'),
    ('bmi_risk', 'BMI-related'),
])
def test_risk_names(factor, name):
    assert risk_name(factor) == name
