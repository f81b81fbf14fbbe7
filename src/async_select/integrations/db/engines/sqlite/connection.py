"""
목적: SQLite 연결 관리 모듈을 제공한다.
설명: 백그라운드 스레드에서 공유할 단일 연결의 초기화/종료와 PRAGMA 적용을 담당한다.
디자인 패턴: 매니저 패턴
참조: src/async_select/integrations/db/engines/sqlite/database.py
"""

from __future__ import annotations

import sqlite3
from typing import Optional

from async_select.shared.exceptions import ErrorCode, ExceptionDetail, QueryExecutionError
from async_select.shared.logging import Logger


class SqliteConnectionManager:
    """SQLite 연결 관리자."""

    def __init__(self, database_path: str, busy_timeout_ms: int, logger: Logger) -> None:
        self._database_path = database_path
        self._busy_timeout_ms = max(0, int(busy_timeout_ms))
        self._logger = logger
        self._connection: Optional[sqlite3.Connection] = None

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def connect(self) -> None:
        """SQLite 연결을 초기화한다."""

        if self._connection is not None:
            return
        self._connection = sqlite3.connect(
            self._database_path,
            timeout=self._busy_timeout_ms / 1000.0,
            check_same_thread=False,
        )
        self._connection.row_factory = sqlite3.Row
        self._apply_pragmas()
        self._logger.info(f"SQLite 연결이 초기화되었습니다: {self._database_path}")

    def close(self) -> None:
        """SQLite 연결을 종료한다."""

        if self._connection is None:
            return
        self._connection.close()
        self._connection = None
        self._logger.info("SQLite 연결이 종료되었습니다.")

    def ensure_connection(self) -> sqlite3.Connection:
        """초기화된 SQLite 연결 객체를 반환한다."""

        if self._connection is None:
            detail = ExceptionDetail(
                code=ErrorCode.DATABASE_CLOSED,
                cause="connect() 호출 전이거나 이미 close()된 연결입니다.",
                metadata={"database_path": self._database_path},
            )
            raise QueryExecutionError("SQLite 연결이 초기화되지 않았습니다.", detail)
        return self._connection

    def _apply_pragmas(self) -> None:
        connection = self.ensure_connection()
        connection.execute(f"PRAGMA busy_timeout={self._busy_timeout_ms}")
        if self._database_path == ":memory:":
            return
        try:
            connection.execute("PRAGMA journal_mode=WAL")
            connection.execute("PRAGMA synchronous=NORMAL")
        except sqlite3.DatabaseError as error:
            self._logger.warning(f"SQLite PRAGMA 적용 경고: {error}")
