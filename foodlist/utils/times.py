"""시간과 관련된 유틸리티 함수를 제공합니다."""
from datetime import datetime, timezone

from foodlist.config import Config


def utc_now() -> datetime:
    """현재 시간을 UTC 기준 datetime으로 반환합니다."""
    return datetime.now(timezone.utc)


def get_now_timestamp() -> str:
    """현재 시간을 iso8601 형식의 문자열로 반환합니다."""
    return datetime.now().astimezone(Config.TZ).isoformat()


def get_date_by_string(date_str: str) -> datetime:
    """"YYYY-MM-DD" 문자열을 서비스 타임존 자정 기준의 UTC datetime으로 변환합니다.

    Raises:
        ValueError: 날짜 형식이 올바르지 않은 경우.
    """
    naive = datetime.strptime(date_str, "%Y-%m-%d")
    return Config.TZ.localize(naive).astimezone(timezone.utc)
