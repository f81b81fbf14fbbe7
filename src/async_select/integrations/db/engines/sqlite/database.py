"""
목적: SQLite 기반 DB 접근 계층을 제공한다.
설명: 테이블 단위 조회 핸들 생성, 쓰기 실행, 테이블 변경 알림을 지원한다.
디자인 패턴: 어댑터 패턴, 옵저버 패턴
참조: src/async_select/integrations/db/ports.py, src/async_select/integrations/db/engines/sqlite/connection.py
"""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Callable, Sequence
from typing import Dict, List, Optional, Tuple

from async_select.integrations.db.engines.sqlite.connection import SqliteConnectionManager
from async_select.integrations.db.ports import TableListener
from async_select.shared.config import SelectSettings
from async_select.shared.exceptions import ErrorCode, ExceptionDetail, QueryExecutionError
from async_select.shared.logging import Logger, create_default_logger


class SqliteQuery:
    """생성 시점의 SQL/인자 스냅샷을 보관하는 조회 핸들."""

    def __init__(
        self,
        table: str,
        sql: str,
        arguments: Tuple[str, ...],
        runner: Callable[[str, Tuple[str, ...]], List[sqlite3.Row]],
    ) -> None:
        self._table = table
        self._sql = sql
        self._arguments = arguments
        self._runner = runner

    @property
    def table(self) -> str:
        return self._table

    @property
    def sql(self) -> str:
        return self._sql

    @property
    def arguments(self) -> Tuple[str, ...]:
        return self._arguments

    def run(self) -> List[sqlite3.Row]:
        """구문을 실행해 전체 행을 반환한다."""

        return self._runner(self._sql, self._arguments)


class SqliteDatabase:
    """SQLite DB 접근 계층 구현체.

    단일 연결을 여러 백그라운드 스레드가 공유하므로 모든 구문 실행은 잠금 안에서 수행한다.
    """

    def __init__(
        self,
        database_path: str = ":memory:",
        busy_timeout_ms: int = 5000,
        logger: Optional[Logger] = None,
    ) -> None:
        self._logger = logger or create_default_logger("SqliteDatabase")
        self._connection = SqliteConnectionManager(
            database_path=database_path,
            busy_timeout_ms=busy_timeout_ms,
            logger=self._logger,
        )
        self._statement_lock = threading.RLock()
        self._listener_lock = threading.Lock()
        self._listeners: Dict[str, List[TableListener]] = {}

    @classmethod
    def from_settings(
        cls,
        settings: SelectSettings,
        logger: Optional[Logger] = None,
    ) -> "SqliteDatabase":
        return cls(
            database_path=settings.database_path,
            busy_timeout_ms=settings.busy_timeout_ms,
            logger=logger,
        )

    def __enter__(self) -> "SqliteDatabase":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def connect(self) -> None:
        with self._statement_lock:
            self._connection.connect()

    def close(self) -> None:
        with self._statement_lock:
            self._connection.close()

    def create_query(self, table: str, sql: str, arguments: Sequence[str]) -> SqliteQuery:
        """조회 핸들을 생성한다. 실행은 run() 호출 시점에 일어난다."""

        return SqliteQuery(table, sql, tuple(arguments), self._fetch_all)

    def execute_write(self, table: str, sql: str, arguments: Sequence[object] = ()) -> int:
        """쓰기 구문을 실행·커밋하고 테이블 리스너에 변경을 알린다."""

        with self._statement_lock:
            connection = self._connection.ensure_connection()
            try:
                cursor = connection.execute(sql, tuple(arguments))
                connection.commit()
            except sqlite3.Error as error:
                connection.rollback()
                raise _execution_error(sql, error) from error
            affected = cursor.rowcount
        self._logger.debug(f"쓰기 실행 완료: table={table}, rowcount={affected}")
        self._notify(table)
        return affected

    def subscribe(self, table: str, listener: TableListener) -> Callable[[], None]:
        """테이블 변경 리스너를 등록하고 해제 함수를 반환한다."""

        with self._listener_lock:
            self._listeners.setdefault(table, []).append(listener)

        def unsubscribe() -> None:
            with self._listener_lock:
                listeners = self._listeners.get(table, [])
                if listener in listeners:
                    listeners.remove(listener)
                if not listeners:
                    self._listeners.pop(table, None)

        return unsubscribe

    def _fetch_all(self, sql: str, arguments: Tuple[str, ...]) -> List[sqlite3.Row]:
        with self._statement_lock:
            connection = self._connection.ensure_connection()
            try:
                return connection.execute(sql, arguments).fetchall()
            except sqlite3.Error as error:
                raise _execution_error(sql, error) from error

    def _notify(self, table: str) -> None:
        with self._listener_lock:
            listeners = list(self._listeners.get(table, []))
        for listener in listeners:
            listener(table)


def _execution_error(sql: str, error: sqlite3.Error) -> QueryExecutionError:
    detail = ExceptionDetail(
        code=ErrorCode.EXECUTION_FAILED,
        cause=str(error),
        metadata={"sql": sql},
    )
    return QueryExecutionError("SQL 구문 실행에 실패했습니다.", detail, error)
