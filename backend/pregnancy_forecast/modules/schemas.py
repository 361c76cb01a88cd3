"""
Prediction Data Models
Pydantic models for normalized visits, risk scores and prediction output.
Field aliases carry the wire names used by the visit records and the
prediction JSON consumed by the dashboard.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]

RISK_FACTORS = (
    'anemia',
    'hypertension',
    'growth_restriction',
    'preterm_risk',
    'maternal_age_risk',
    'bmi_risk',
)


class Visit(BaseModel):
    """One normalized clinical observation. Absent measurements are None."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    gestational_age: Number = Field(..., alias='GESTATIONAL_AGE_WEEKS')
    maternal_weight: Optional[float] = Field(None, alias='MATERNAL_WEIGHT')
    fundal_height: Optional[float] = Field(None, alias='FUNDAL_HEIGHT')
    hemoglobin_level: Optional[float] = Field(None, alias='HEMOGLOBIN_LEVEL')
    blood_pressure: Optional[str] = Field(None, alias='BLOOD_PRESSURE')
    fetal_heart_rate: Optional[float] = Field(None, alias='FETAL_HEART_RATE')
    complications: Optional[str] = Field(None, alias='COMPLICATIONS')
    visit_date: Optional[Any] = Field(None, alias='VISIT_DATE')

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class RiskScoreSet(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    anemia: float = Field(0.0, ge=0.0, le=1.0)
    hypertension: float = Field(0.0, ge=0.0, le=1.0)
    growth_restriction: float = Field(0.0, ge=0.0, le=1.0, alias='growthRestriction')
    preterm_risk: float = Field(0.0, ge=0.0, le=1.0, alias='pretermRisk')
    maternal_age_risk: float = Field(0.0, ge=0.0, le=1.0, alias='maternalAgeRisk')
    bmi_risk: float = Field(0.0, ge=0.0, le=1.0, alias='bmiRisk')

    def factors(self) -> List[tuple]:
        """(name, score) pairs in the fixed enumeration order."""
        return [(name, getattr(self, name)) for name in RISK_FACTORS]

    def mean(self) -> float:
        return sum(score for _, score in self.factors()) / len(RISK_FACTORS)


class DeliveryTypeDistribution(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    matured: float = Field(..., alias='Matured')
    premature: float = Field(..., alias='Premature')
    mortality_risk: float = Field(..., alias='MortalityRisk')


class DeliveryModeDistribution(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    normal: float = Field(..., alias='Normal')
    c_section: float = Field(..., alias='CSection')


class ProgressionPoint(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    week: Number
    value: Number
    is_actual: Optional[bool] = Field(None, alias='isActual')


class Progression(BaseModel):
    weight: List[ProgressionPoint] = Field(default_factory=list)
    fundal: List[ProgressionPoint] = Field(default_factory=list)
    hb: List[ProgressionPoint] = Field(default_factory=list)
    systolic: List[ProgressionPoint] = Field(default_factory=list)
    diastolic: List[ProgressionPoint] = Field(default_factory=list)
    fetal_hr: List[ProgressionPoint] = Field(default_factory=list)


class PredictionMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_gestational_age: Optional[Number] = Field(None, alias='currentGestationalAge')
    weeks_projected: Optional[Number] = Field(None, alias='weeksProjected')
    visit_count: Optional[int] = Field(None, alias='visitCount')
    risk_scores: Optional[RiskScoreSet] = Field(None, alias='riskScores')
    generated_at: str = Field(..., alias='generatedAt')
    source: str


class PredictionResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    delivery_type: DeliveryTypeDistribution = Field(..., alias='deliveryType')
    delivery_mode: DeliveryModeDistribution = Field(..., alias='deliveryMode')
    progression: Progression
    summary: str
    metadata: PredictionMetadata
    is_fallback: Optional[bool] = Field(None, alias='isFallback')
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Nested JSON-ready structure using the wire field names."""
        return self.model_dump(by_alias=True, exclude_none=True)
