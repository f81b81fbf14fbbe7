"""
목적: 로거 인터페이스와 인메모리 구현체를 제공한다.
설명: 백그라운드 스레드에서도 안전하게 기록되는 저장소 주입형 로거를 포함한다.
디자인 패턴: 전략 패턴, 저장소 패턴
참조: src/async_select/shared/logging/models.py
"""

from __future__ import annotations

import json
import os
import threading
from abc import ABC, abstractmethod
from collections import deque
from datetime import timezone
from typing import Deque, List, Optional

from async_select.shared.logging.models import LogContext, LogLevel, LogRecord

DEFAULT_MAX_LOG_RECORDS = 1000


class LogRepository(ABC):
    """로그 저장소 인터페이스."""

    @abstractmethod
    def add(self, record: LogRecord) -> None:
        """로그 레코드를 저장한다."""

    @abstractmethod
    def list(self) -> List[LogRecord]:
        """저장된 로그를 반환한다."""


class InMemoryLogRepository(LogRepository):
    """스레드 안전 인메모리 로그 저장소.

    최근 max_records개만 보관하고, 가득 차면 가장 오래된 레코드부터 버린다.
    None이면 상한 없이 보관한다.
    """

    def __init__(self, max_records: Optional[int] = DEFAULT_MAX_LOG_RECORDS) -> None:
        if max_records is not None and max_records < 1:
            raise ValueError("max_records는 1 이상이어야 합니다.")
        self._records: Deque[LogRecord] = deque(maxlen=max_records)
        self._lock = threading.Lock()

    def add(self, record: LogRecord) -> None:
        with self._lock:
            self._records.append(record)

    def list(self) -> List[LogRecord]:
        with self._lock:
            return list(self._records)

    @property
    def max_records(self) -> Optional[int]:
        return self._records.maxlen


class Logger(ABC):
    """로거 인터페이스."""

    @abstractmethod
    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        """로그를 기록한다."""

    @abstractmethod
    def with_context(self, context: LogContext) -> "Logger":
        """컨텍스트가 합쳐진 새 로거를 반환한다."""

    def debug(self, message: str, context: Optional[LogContext] = None) -> None:
        self.log(LogLevel.DEBUG, message, context)

    def info(self, message: str, context: Optional[LogContext] = None) -> None:
        self.log(LogLevel.INFO, message, context)

    def warning(self, message: str, context: Optional[LogContext] = None) -> None:
        self.log(LogLevel.WARNING, message, context)

    def error(
        self,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        """ERROR 레벨 로그를 기록한다. 예외 정보는 metadata로 전달한다."""

        self.log(LogLevel.ERROR, message, context, metadata)


class InMemoryLogger(Logger):
    """인메모리 로거 구현체."""

    def __init__(
        self,
        name: str,
        repository: Optional[LogRepository] = None,
        base_context: Optional[LogContext] = None,
        emit_stdout: Optional[bool] = None,
    ) -> None:
        self._name = name
        self._repository = repository or InMemoryLogRepository()
        self._base_context = base_context
        self._emit_stdout = _read_emit_stdout_env() if emit_stdout is None else emit_stdout

    @property
    def name(self) -> str:
        return self._name

    @property
    def repository(self) -> LogRepository:
        """저장소를 반환한다."""

        return self._repository

    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        record = LogRecord(
            level=level,
            message=message,
            logger_name=self._name,
            context=self._merge_context(context),
            metadata=metadata or {},
        )
        self._repository.add(record)
        if self._emit_stdout:
            self._write_stdout(record)

    def with_context(self, context: LogContext) -> "Logger":
        return InMemoryLogger(
            name=self._name,
            repository=self._repository,
            base_context=self._merge_context(context),
            emit_stdout=self._emit_stdout,
        )

    def _merge_context(self, context: Optional[LogContext]) -> Optional[LogContext]:
        if self._base_context is None:
            return context
        return self._base_context.merged_with(context)

    def _write_stdout(self, record: LogRecord) -> None:
        payload: dict[str, object] = {
            "timestamp": record.timestamp.astimezone(timezone.utc).isoformat(),
            "level": record.level.value,
            "logger": record.logger_name,
            "message": record.message,
        }
        if record.context is not None:
            payload["context"] = record.context.model_dump(exclude_none=True)
        if record.metadata:
            payload["metadata"] = record.metadata
        print(json.dumps(payload, ensure_ascii=False, default=str), flush=True)


def _read_emit_stdout_env() -> bool:
    raw = os.getenv("LOG_STDOUT")
    if raw is None:
        return False
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def create_default_logger(name: str, max_records: Optional[int] = DEFAULT_MAX_LOG_RECORDS) -> InMemoryLogger:
    """최근 max_records개를 보관하는 기본 인메모리 로거를 생성한다."""

    return InMemoryLogger(name=name, repository=InMemoryLogRepository(max_records))
