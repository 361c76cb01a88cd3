"""
PregnancyForecast Modules Package
Rule-based delivery outcome and vital-sign progression forecasting
"""

from .visit_normalizer import normalize_visits, parse_blood_pressure
from .risk_scorer import score_risks
from .outcome_probability import calculate_delivery_type, calculate_delivery_mode
from .trend_estimator import calculate_trend
from .progression_synthesizer import ProgressionSynthesizer
from .summary_composer import compose_summary
from .prediction_engine import PredictionEngine, generate_prediction, fallback_prediction
from .record_cache import PatientRecordCache, CacheNotReadyError
from .schemas import (
    Visit,
    RiskScoreSet,
    DeliveryTypeDistribution,
    DeliveryModeDistribution,
    ProgressionPoint,
    Progression,
    PredictionMetadata,
    PredictionResult,
)


__all__ = [
    'normalize_visits',
    'parse_blood_pressure',
    'score_risks',
    'calculate_delivery_type',
    'calculate_delivery_mode',
    'calculate_trend',
    'ProgressionSynthesizer',
    'compose_summary',
    'PredictionEngine',
    'generate_prediction',
    'fallback_prediction',
    'PatientRecordCache',
    'CacheNotReadyError',
    'Visit',
    'RiskScoreSet',
    'DeliveryTypeDistribution',
    'DeliveryModeDistribution',
    'ProgressionPoint',
    'Progression',
    'PredictionMetadata',
    'PredictionResult',
]
