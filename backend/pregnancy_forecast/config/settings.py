import os
import logging
from dataclasses import dataclass

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_TERM_WEEK = 40
DEFAULT_MAX_PROJECTION_WEEKS = 12
DEFAULT_LOG_LEVEL = 'INFO'


@dataclass(frozen=True)
class EngineSettings:
    term_week: int = DEFAULT_TERM_WEEK
    max_projection_weeks: int = DEFAULT_MAX_PROJECTION_WEEKS
    log_level: str = DEFAULT_LOG_LEVEL


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name, '')
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer, using default {default}")
        return default


def load_settings() -> EngineSettings:
    load_dotenv()

    return EngineSettings(
        term_week=_int_from_env('FORECAST_TERM_WEEK', DEFAULT_TERM_WEEK),
        max_projection_weeks=_int_from_env('FORECAST_MAX_PROJECTION_WEEKS', DEFAULT_MAX_PROJECTION_WEEKS),
        log_level=os.getenv('FORECAST_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper(),
    )
