"""날짜/시간 유틸리티"""

import re
from datetime import date, datetime, timezone
from typing import Optional

UTC = timezone.utc

# 생년월일 입출력 형식 (DD/MM/YYYY)
BIRTH_DAY_FORMAT = "%d/%m/%Y"
_BIRTH_DAY_PATTERN = re.compile(r"\d{2}/\d{2}/\d{4}", re.ASCII)

# 파싱 실패 시 저장되는 최소 날짜
MIN_DATE = date.min


def now_utc() -> datetime:
    """현재 UTC 시간 반환"""
    return datetime.now(UTC)


def parse_date(date_str: Optional[str]) -> Optional[date]:
    """DD/MM/YYYY 문자열을 date로 파싱

    자릿수까지 정확히 일치해야 하며 (예: "1/6/1990" 불가),
    앞뒤 공백도 허용하지 않습니다.

    Returns:
        파싱된 date, 형식이 맞지 않거나 존재하지 않는 날짜면 None
    """
    if not date_str or not _BIRTH_DAY_PATTERN.fullmatch(date_str):
        return None
    try:
        return datetime.strptime(date_str, BIRTH_DAY_FORMAT).date()
    except ValueError:
        return None


def parse_date_or_min(date_str: Optional[str]) -> date:
    """DD/MM/YYYY 문자열 파싱, 실패 시 MIN_DATE 반환"""
    return parse_date(date_str) or MIN_DATE


def format_date(value: date) -> str:
    """date를 DD/MM/YYYY 문자열로 포맷

    strftime의 %Y는 플랫폼에 따라 1000년 미만을 0으로 채우지 않으므로
    (MIN_DATE → "01/01/1") 직접 포맷합니다.
    """
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"
