"""
목적: 로깅 모듈 공개 API를 제공한다.
설명: 로거 구현과 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/async_select/shared/logging/logger.py, src/async_select/shared/logging/models.py
"""

from async_select.shared.logging.logger import (
    DEFAULT_MAX_LOG_RECORDS,
    InMemoryLogger,
    InMemoryLogRepository,
    LogRepository,
    Logger,
    create_default_logger,
)
from async_select.shared.logging.models import LogContext, LogLevel, LogRecord

__all__ = [
    "DEFAULT_MAX_LOG_RECORDS",
    "LogContext",
    "LogLevel",
    "LogRecord",
    "Logger",
    "LogRepository",
    "InMemoryLogRepository",
    "InMemoryLogger",
    "create_default_logger",
]
