"""
목적: shared 패키지의 공개 API를 제공한다.
설명: 로깅/예외/설정/런타임 공통 모듈에 대한 접근 포인트를 제공한다.
디자인 패턴: 퍼사드
참조: src/async_select/shared/exceptions, src/async_select/shared/logging, src/async_select/shared/runtime
"""

from __future__ import annotations

from async_select.shared.config import ConversionErrorPolicy, SelectSettings, SettingsLoader
from async_select.shared.exceptions import (
    BaseAppException,
    ErrorCode,
    ExceptionDetail,
    QueryConfigurationError,
    QueryExecutionError,
    RowConversionError,
)
from async_select.shared.logging import (
    InMemoryLogger,
    LogContext,
    LogLevel,
    LogRecord,
    Logger,
    LogRepository,
    create_default_logger,
)
from async_select.shared.runtime import TaskRecord, ThreadPool, ThreadPoolConfig

__all__ = [
    "BaseAppException",
    "ErrorCode",
    "ExceptionDetail",
    "QueryConfigurationError",
    "QueryExecutionError",
    "RowConversionError",
    "LogContext",
    "LogLevel",
    "LogRecord",
    "Logger",
    "LogRepository",
    "InMemoryLogger",
    "create_default_logger",
    "ConversionErrorPolicy",
    "SelectSettings",
    "SettingsLoader",
    "ThreadPoolConfig",
    "TaskRecord",
    "ThreadPool",
]
