"""
목적: 테스트 공통 결과 모델/픽스처를 제공한다.
설명: users 테이블이 준비된 SQLite DB, 테이블 레지스트리, 실행기 픽스처와 세션 로깅 훅을 제공한다.
디자인 패턴: 테스트 픽스처 + 테스트 훅
참조: src/async_select/query/executor.py, src/async_select/integrations/db/engines/sqlite/database.py
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

import pytest

from async_select.integrations.db import SqliteDatabase, TableModel, TableRegistry
from async_select.query import SelectExecutor
from async_select.shared.logging import InMemoryLogger

_LOGGER = logging.getLogger("tests")

_USERS = [
    (1, "alice", 31, 1),
    (2, "bob", 27, 0),
    (3, "carol", 45, 1),
]


class User(TableModel):
    """테스트용 users 테이블 결과 모델."""

    __table_name__ = "users"

    id: int
    name: str
    age: Optional[int] = None
    active: bool = True


class Unregistered:
    """테이블 이름이 선언되지 않은 타입."""


@pytest.fixture()
def registry() -> TableRegistry:
    """테스트 전용 테이블 레지스트리를 반환한다."""

    return TableRegistry()


@pytest.fixture()
def logger() -> InMemoryLogger:
    return InMemoryLogger(name="test", emit_stdout=False)


@pytest.fixture()
def database(tmp_path, logger) -> Iterator[SqliteDatabase]:
    """users 테이블과 시드 데이터가 준비된 SQLite DB를 반환한다."""

    db = SqliteDatabase(str(tmp_path / "select.sqlite"), logger=logger)
    db.connect()
    db.execute_write(
        "users",
        "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, age INTEGER, active INTEGER)",
    )
    for row in _USERS:
        db.execute_write("users", "INSERT INTO users (id, name, age, active) VALUES (?, ?, ?, ?)", row)
    yield db
    db.close()


@pytest.fixture()
def executor(database, registry, logger) -> Iterator[SelectExecutor]:
    """기본(ABSORB) 정책 실행기를 반환한다."""

    with SelectExecutor(database, resolver=registry, logger=logger) as select_executor:
        yield select_executor


def pytest_sessionstart(session) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    _LOGGER.info("테스트 세션 시작")


def pytest_sessionfinish(session, exitstatus: int) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    _LOGGER.info("테스트 세션 종료 (exitstatus=%s)", exitstatus)
