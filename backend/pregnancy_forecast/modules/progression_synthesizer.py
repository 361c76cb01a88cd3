"""
Progression Synthesizer - Weekly vital-sign trajectories up to term
Blends per-patient trends with clinical bounds and small bounded jitter
"""
import logging
import math
import random
from typing import Optional, Sequence, Union

from .schemas import Progression, ProgressionPoint, Visit
from .trend_estimator import calculate_trend
from .visit_normalizer import latest_visit, parse_blood_pressure

logger = logging.getLogger(__name__)

Number = Union[int, float]


def round_half_up(value: float, decimals: int = 0) -> Number:
    factor = 10 ** decimals
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if decimals == 0 else rounded


class ProgressionSynthesizer:
    """
    Projects six signals week by week from the current gestational age.

    Args:
        rng: object with a random.Random-style `uniform(a, b)`. A fresh
            unseeded random.Random is used when omitted, so every call is
            independent; pass a seeded one for reproducible curves.
    """

    # Defaults when the latest visit lacks a reading
    DEFAULT_WEIGHT = 60
    DEFAULT_HB = 11.5
    DEFAULT_FHR = 145

    WEEKLY_WEIGHT_GAIN = 0.3
    WEIGHT_TREND_FACTOR = 0.1
    WEEKLY_HB_DECLINE = 0.05
    HB_TREND_FACTOR = 0.02
    HB_FLOOR = 9.5

    SYSTOLIC_DRIFT = 0.25
    DIASTOLIC_DRIFT = 0.15

    FHR_AMPLITUDE = 2
    FHR_PERIOD_DIVISOR = 3
    FHR_MIN = 120
    FHR_MAX = 160

    FUNDAL_JITTER = 1.0
    BP_JITTER = 1.0
    FHR_JITTER = 1.5

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def synthesize(self, visits: Sequence[Visit], current_ga: Number, weeks_to_project: Number) -> Progression:
        # Weeks are completed gestational weeks
        current_ga = math.floor(current_ga)
        weeks_to_project = int(weeks_to_project)

        latest = latest_visit(visits)
        first_ga = math.floor(min(v.gestational_age for v in visits))
        systolic, diastolic = parse_blood_pressure(latest.blood_pressure)

        base_weight = latest.maternal_weight or self.DEFAULT_WEIGHT
        base_fundal = latest.fundal_height or current_ga
        base_hb = latest.hemoglobin_level or self.DEFAULT_HB
        base_fhr = latest.fetal_heart_rate or self.DEFAULT_FHR

        weight_trend = calculate_trend(visits, 'maternal_weight')
        hb_trend = calculate_trend(visits, 'hemoglobin_level')

        progression = Progression(
            weight=[self._actual(current_ga, base_weight)],
            fundal=[self._actual(current_ga, base_fundal)],
            hb=[self._actual(current_ga, base_hb)],
            systolic=[self._actual(current_ga, systolic)],
            diastolic=[self._actual(current_ga, diastolic)],
            fetal_hr=[self._actual(current_ga, base_fhr)],
        )

        for i in range(1, weeks_to_project + 1):
            week = current_ga + i
            weeks_since_first = week - first_ga

            progression.weight.append(ProgressionPoint(
                week=week,
                value=self._project_weight(base_weight, weeks_since_first, weight_trend),
            ))
            progression.fundal.append(ProgressionPoint(
                week=week,
                value=round_half_up(week + self._jitter(self.FUNDAL_JITTER), 1),
            ))
            progression.hb.append(ProgressionPoint(
                week=week,
                value=self._project_hb(base_hb, weeks_since_first, hb_trend),
            ))
            progression.systolic.append(ProgressionPoint(
                week=week,
                value=round_half_up(systolic + i * self.SYSTOLIC_DRIFT + self._jitter(self.BP_JITTER)),
            ))
            progression.diastolic.append(ProgressionPoint(
                week=week,
                value=round_half_up(diastolic + i * self.DIASTOLIC_DRIFT + self._jitter(self.BP_JITTER)),
            ))
            progression.fetal_hr.append(ProgressionPoint(
                week=week,
                value=self._project_fhr(base_fhr, i),
            ))

        logger.debug(f"Projected {weeks_to_project} week(s) from GA {current_ga}")
        return progression

    @staticmethod
    def _actual(week: Number, value: Number) -> ProgressionPoint:
        return ProgressionPoint(week=week, value=value, is_actual=True)

    def _jitter(self, spread: float) -> float:
        return self.rng.uniform(-spread, spread)

    def _project_weight(self, base: float, weeks_since_first: Number, trend: float) -> float:
        weekly_gain = self.WEEKLY_WEIGHT_GAIN + trend * self.WEIGHT_TREND_FACTOR
        return round_half_up(base + weeks_since_first * weekly_gain, 1)

    def _project_hb(self, base: float, weeks_since_first: Number, trend: float) -> float:
        weekly_decline = self.WEEKLY_HB_DECLINE + trend * self.HB_TREND_FACTOR
        return round_half_up(max(self.HB_FLOOR, base - weeks_since_first * weekly_decline), 1)

    def _project_fhr(self, base: float, offset: int) -> int:
        oscillation = math.sin(offset / self.FHR_PERIOD_DIVISOR) * self.FHR_AMPLITUDE
        fhr = base + oscillation + self._jitter(self.FHR_JITTER)
        return round_half_up(min(self.FHR_MAX, max(self.FHR_MIN, fhr)))
