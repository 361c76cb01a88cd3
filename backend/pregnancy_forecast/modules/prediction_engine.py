"""
Prediction Engine - Rule-based delivery outcome and progression forecast
Single entry point composing normalization, scoring, probabilities,
progression and summary into one PredictionResult.

POLICY: the engine never raises for bad input. Missing data degrades to
rule defaults; no usable visits or an internal fault degrade to the
static fallback prediction.
"""
import logging
import math
import random
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from pregnancy_forecast.config.settings import EngineSettings

from .outcome_probability import calculate_delivery_mode, calculate_delivery_type
from .progression_synthesizer import ProgressionSynthesizer
from .risk_scorer import score_risks
from .schemas import (
    DeliveryModeDistribution,
    DeliveryTypeDistribution,
    PredictionMetadata,
    PredictionResult,
    Progression,
    Visit,
)
from .summary_composer import compose_summary
from .visit_normalizer import normalize_visits, sort_by_gestational_age

logger = logging.getLogger(__name__)

SOURCE_RULE_ENGINE = 'rule-based-engine'
SOURCE_FALLBACK = 'fallback-model'

FALLBACK_SUMMARY = (
    "Using standard pregnancy progression model - "
    "insufficient patient data for personalized prediction."
)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def fallback_prediction(error: Optional[str] = None) -> PredictionResult:
    """Static, data-independent prediction used when no personalized one can be made."""
    return PredictionResult(
        delivery_type=DeliveryTypeDistribution(matured=0.80, premature=0.15, mortality_risk=0.05),
        delivery_mode=DeliveryModeDistribution(normal=0.70, c_section=0.30),
        progression=Progression(),
        summary=FALLBACK_SUMMARY,
        metadata=PredictionMetadata(source=SOURCE_FALLBACK, generated_at=_utc_timestamp()),
        is_fallback=True,
        error=error,
    )


class PredictionEngine:
    """
    Rule-based forecast for one patient.

    Args:
        visits: raw visit records (mappings keyed GESTATIONAL_AGE_WEEKS,
            MATERNAL_WEIGHT, FUNDAL_HEIGHT, HEMOGLOBIN_LEVEL,
            BLOOD_PRESSURE, FETAL_HEART_RATE, COMPLICATIONS, VISIT_DATE)
        patient: patient profile mapping (AGE, BMI_VALUE, PARITY,
            MEDICAL_HISTORY, BMI_STATUS)
        rng: randomness source for progression jitter
        settings: term week and projection horizon
    """

    def __init__(self,
                 visits: Any,
                 patient: Optional[Mapping[str, Any]] = None,
                 rng: Optional[random.Random] = None,
                 settings: Optional[EngineSettings] = None):
        self.raw_visits = visits
        self.patient = patient if isinstance(patient, Mapping) else {}
        self.rng = rng
        self.settings = settings or EngineSettings()

    def weeks_to_project(self, current_ga: int) -> int:
        return min(self.settings.term_week - current_ga, self.settings.max_projection_weeks)

    def generate_prediction(self) -> PredictionResult:
        try:
            return self._predict()
        except Exception as e:
            logger.exception("Prediction failed, returning fallback model")
            return fallback_prediction(error=str(e))

    def _predict(self) -> PredictionResult:
        visits: List[Visit] = sort_by_gestational_age(normalize_visits(self.raw_visits))

        if not visits:
            logger.info("No valid visits, using fallback model")
            return fallback_prediction()

        current_ga = math.floor(visits[-1].gestational_age)
        weeks_to_project = self.weeks_to_project(current_ga)

        if weeks_to_project <= 0:
            logger.info(f"GA {current_ga} at or past term week {self.settings.term_week}, using fallback model")
            return fallback_prediction()

        logger.info(f"Rule-based prediction: {len(visits)} visit(s), current GA {current_ga} weeks")

        scores = score_risks(visits, self.patient)
        delivery_type = calculate_delivery_type(scores)
        delivery_mode = calculate_delivery_mode(scores, self.patient.get('PARITY'))
        progression = ProgressionSynthesizer(self.rng).synthesize(visits, current_ga, weeks_to_project)
        summary = compose_summary(scores, delivery_type)

        logger.info(f"Prediction summary: {summary}")

        return PredictionResult(
            delivery_type=delivery_type,
            delivery_mode=delivery_mode,
            progression=progression,
            summary=summary,
            metadata=PredictionMetadata(
                current_gestational_age=current_ga,
                weeks_projected=weeks_to_project,
                visit_count=len(visits),
                risk_scores=scores,
                generated_at=_utc_timestamp(),
                source=SOURCE_RULE_ENGINE,
            ),
        )


def generate_prediction(visits: Any,
                        patient: Optional[Mapping[str, Any]] = None,
                        rng: Optional[random.Random] = None,
                        settings: Optional[EngineSettings] = None) -> PredictionResult:
    return PredictionEngine(visits, patient, rng=rng, settings=settings).generate_prediction()
