"""
목적: 바인딩 인자 변환 헬퍼를 검증한다.
설명: 불리언 → 정수 변환과 문자열화 순서, None 거부를 확인한다.
디자인 패턴: 유틸리티 단위 테스트
참조: src/async_select/query/arguments.py
"""

from __future__ import annotations

import pytest

from async_select.query import coerce_argument, stringify_arguments
from async_select.shared.exceptions import QueryConfigurationError


@pytest.mark.parametrize(
    ("value", "expected"),
    [(True, 1), (False, 0), (7, 7), ("x", "x"), (1.5, 1.5)],
)
def test_coerce_argument(value, expected) -> None:
    result = coerce_argument(value)

    assert result == expected
    assert type(result) is type(expected)


def test_stringify_converts_booleans_before_str() -> None:
    assert stringify_arguments([True, False, 3, "a"]) == ["1", "0", "3", "a"]


def test_none_argument_is_rejected() -> None:
    with pytest.raises(QueryConfigurationError, match="바인딩"):
        coerce_argument(None)
