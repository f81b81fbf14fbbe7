"""
목적: WHERE 바인딩 인자 변환 헬퍼를 제공한다.
설명: 불리언을 0/1 정수로 바꾸고, 바인딩용 문자열 목록을 만든다.
디자인 패턴: 유틸리티 함수
참조: src/async_select/query/select.py
"""

from __future__ import annotations

from typing import Iterable, List

from async_select.shared.exceptions import (
    ErrorCode,
    ExceptionDetail,
    QueryConfigurationError,
)


def coerce_argument(value: object) -> object:
    """SQLite에 불리언 타입이 없으므로 True/False를 1/0으로 바꾼다."""

    if value is None:
        detail = ExceptionDetail(
            code=ErrorCode.CONFIGURATION_INVALID,
            cause="None은 바인딩 인자로 사용할 수 없습니다.",
            hint="NULL 비교는 'IS NULL' 절을 직접 작성하세요.",
        )
        raise QueryConfigurationError("바인딩 인자가 올바르지 않습니다.", detail)
    if isinstance(value, bool):
        return 1 if value else 0
    return value


def coerce_arguments(values: Iterable[object]) -> tuple:
    return tuple(coerce_argument(value) for value in values)


def stringify_arguments(values: Iterable[object]) -> List[str]:
    """변환된 인자를 바인딩 순서대로 문자열 목록으로 만든다."""

    return [str(coerce_argument(value)) for value in values]
