"""
표시용 포맷 유틸리티
가격 천 단위 구분, 한국어 날짜 표기
"""
from datetime import datetime

KOREAN_DATETIME_FORMAT = "%m월 %d일 %H시 %M분"


def format_price(price: int) -> str:
    """
    가격을 천 단위로 구분

    Examples:
        >>> format_price(1234567)
        '1,234,567'
    """
    return f"{price:,}"


def format_korean_datetime(value: datetime) -> str:
    """날짜를 "MM월 dd일 HH시 mm분" 형식으로 변환 (24시간제)"""
    return value.strftime(KOREAN_DATETIME_FORMAT)
