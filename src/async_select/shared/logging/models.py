"""
목적: 쿼리 로깅에 필요한 공통 모델을 정의한다.
설명: 로그 레벨, 쿼리 컨텍스트, 레코드 구조를 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/async_select/shared/logging/logger.py
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """로그 레벨 열거형."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogContext(BaseModel):
    """쿼리 로그 컨텍스트 모델이다.

    Args:
        table: 조회 대상 테이블 이름.
        operation: 실행 연산 이름(execute_many/execute_one/count 등).
        request_id: 실행 호출 식별자.
        tags: 자유형 태그.
    """

    table: Optional[str] = None
    operation: Optional[str] = None
    request_id: Optional[str] = None
    tags: Dict[str, str] = Field(default_factory=dict)

    def merged_with(self, other: Optional["LogContext"]) -> "LogContext":
        """다른 컨텍스트를 덮어써 합친 새 컨텍스트를 반환한다."""

        if other is None:
            return self
        return LogContext(
            table=other.table or self.table,
            operation=other.operation or self.operation,
            request_id=other.request_id or self.request_id,
            tags={**self.tags, **other.tags},
        )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LogRecord(BaseModel):
    """로그 레코드 모델이다.

    Args:
        level: 로그 레벨.
        message: 로그 메시지.
        timestamp: 기록 시각.
        logger_name: 로거 이름.
        context: 쿼리 컨텍스트.
        metadata: 추가 메타데이터.
    """

    level: LogLevel
    message: str
    timestamp: datetime = Field(default_factory=_utc_now)
    logger_name: str
    context: Optional[LogContext] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
