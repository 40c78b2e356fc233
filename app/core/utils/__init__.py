"""유틸리티 모듈"""

from app.core.utils.datetime import (
    BIRTH_DAY_FORMAT,
    MIN_DATE,
    UTC,
    format_date,
    now_utc,
    parse_date,
    parse_date_or_min,
)
from app.core.utils.time import measure_time

__all__ = [
    # datetime
    "UTC",
    "MIN_DATE",
    "BIRTH_DAY_FORMAT",
    "now_utc",
    "parse_date",
    "parse_date_or_min",
    "format_date",
    # time measurement
    "measure_time",
]
