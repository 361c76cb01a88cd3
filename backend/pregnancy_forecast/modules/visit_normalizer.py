"""
Visit Normalizer
Projects raw ANC visit records onto the canonical visit shape
"""
import logging
import math
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .schemas import Visit

logger = logging.getLogger(__name__)

DEFAULT_SYSTOLIC = 115
DEFAULT_DIASTOLIC = 70

_NUMERIC_FIELDS = {
    'GESTATIONAL_AGE_WEEKS': 'gestational_age',
    'MATERNAL_WEIGHT': 'maternal_weight',
    'FUNDAL_HEIGHT': 'fundal_height',
    'HEMOGLOBIN_LEVEL': 'hemoglobin_level',
    'FETAL_HEART_RATE': 'fetal_heart_rate',
}

_TEXT_FIELDS = {
    'BLOOD_PRESSURE': 'blood_pressure',
    'COMPLICATIONS': 'complications',
}


def to_number(value: Any) -> Optional[Union[int, float]]:
    """
    Read a measurement as a number.

    Falsy values (None, 0, "", "0") and anything that is not numeric come
    back as None, so a zero reading is treated the same as a missing one.
    """
    if not value or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except (TypeError, ValueError):
            return None

    if isinstance(number, float):
        if math.isnan(number) or math.isinf(number) or not number:
            return None
        if number.is_integer():
            return int(number)

    return number


def _normalize_record(record: Mapping) -> Optional[Visit]:
    fields: Dict[str, Any] = {}

    for key, attr in _NUMERIC_FIELDS.items():
        fields[attr] = to_number(record.get(key))

    for key, attr in _TEXT_FIELDS.items():
        value = record.get(key)
        fields[attr] = str(value) if value else None

    fields['visit_date'] = record.get('VISIT_DATE') or None

    ga = fields['gestational_age']
    if ga is None or ga <= 0:
        return None

    return Visit(**fields)


def normalize_visits(raw_visits: Any) -> List[Visit]:
    """
    Validate and project raw visit records.

    Records without a positive gestational age are dropped. The surviving
    visits keep their original relative order. Anything that is not a
    list/tuple of records yields an empty list.
    """
    if not isinstance(raw_visits, (list, tuple)):
        if raw_visits is not None:
            logger.warning(f"Visit history is not a sequence ({type(raw_visits).__name__}), ignoring")
        return []

    visits = []
    for record in raw_visits:
        if not isinstance(record, Mapping):
            continue
        visit = _normalize_record(record)
        if visit is not None:
            visits.append(visit)

    dropped = len(raw_visits) - len(visits)
    if dropped:
        logger.debug(f"Dropped {dropped} visit(s) without a valid gestational age")

    return visits


def sort_by_gestational_age(visits: Sequence[Visit]) -> List[Visit]:
    return sorted(visits, key=lambda v: v.gestational_age)


def latest_visit(visits: Sequence[Visit]) -> Optional[Visit]:
    """The visit with the highest gestational age; first one wins on ties."""
    if not visits:
        return None
    return max(visits, key=lambda v: v.gestational_age)


def parse_blood_pressure(bp: Optional[Any]) -> Tuple[Union[int, float], Union[int, float]]:
    """
    Parse "systolic/diastolic". Each side falls back independently to
    115/70 when missing, zero or unreadable.
    """
    if not bp:
        return DEFAULT_SYSTOLIC, DEFAULT_DIASTOLIC

    parts = str(bp).split('/')
    systolic = to_number(parts[0]) if len(parts) > 0 else None
    diastolic = to_number(parts[1]) if len(parts) > 1 else None

    return systolic or DEFAULT_SYSTOLIC, diastolic or DEFAULT_DIASTOLIC
