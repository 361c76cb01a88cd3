from typing import Sequence

from .schemas import Visit
from .visit_normalizer import sort_by_gestational_age


def calculate_trend(visits: Sequence[Visit], field: str) -> float:
    """
    Per-week change of `field` between the earliest and latest visit.

    Returns 0 with fewer than two visits, when either endpoint value is
    missing or zero, or when both visits share a gestational age.
    """
    if len(visits) < 2:
        return 0.0

    ordered = sort_by_gestational_age(visits)
    first, last = ordered[0], ordered[-1]

    first_value = getattr(first, field)
    last_value = getattr(last, field)
    if not first_value or not last_value:
        return 0.0

    week_span = last.gestational_age - first.gestational_age
    if week_span <= 0:
        return 0.0

    return (last_value - first_value) / week_span
