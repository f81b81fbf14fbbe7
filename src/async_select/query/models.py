"""
목적: 비동기 조회 실행에 쓰이는 상태/결과 모델을 정의한다.
설명: 실행 상태 열거형과 변환 성공/실패를 구분하는 태그 결과 타입을 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/async_select/query/executor.py
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ExecutionState(str, Enum):
    """실행 호출 1건의 상태."""

    IDLE = "IDLE"
    RENDERING = "RENDERING"
    DISPATCHED = "DISPATCHED"
    ROWS_RECEIVED = "ROWS_RECEIVED"
    CONVERTING = "CONVERTING"
    DELIVERED = "DELIVERED"
    DELIVERED_EMPTY = "DELIVERED_EMPTY"


@dataclass(frozen=True)
class ConversionOutcome(Generic[T]):
    """백그라운드 변환 결과. value와 error 중 하나만 의미를 가진다."""

    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T]) -> "ConversionOutcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> "ConversionOutcome[T]":
        return cls(error=error)
