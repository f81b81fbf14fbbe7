"""
목적: SelectExecutor의 비동기 실행/전달 계약을 검증한다.
설명: 다건/단건/개수 조회, 백그라운드 실행과 루프 스레드 전달, 실행 오류 전파,
     변환 오류 정책(ABSORB/RAISE), 테이블 변경 감시를 확인한다.
디자인 패턴: 실행 코디네이터 단위 테스트
참조: src/async_select/query/executor.py
"""

from __future__ import annotations

import asyncio
import threading
from typing import ClassVar, List

import pytest

from async_select.integrations.db import TableModel
from async_select.query import SelectExecutor
from async_select.shared.config import ConversionErrorPolicy, SelectSettings
from async_select.shared.exceptions import (
    ErrorCode,
    QueryConfigurationError,
    QueryExecutionError,
    RowConversionError,
)
from async_select.shared.logging import LogLevel
from async_select.shared.runtime import ThreadPool, ThreadPoolConfig
from conftest import User


class BrokenUser(TableModel):
    """name 컬럼을 정수로 요구해 변환이 항상 실패하는 모델."""

    __table_name__ = "users"

    id: int
    name: int


class ThreadRecordingUser(User):
    """변환이 일어난 스레드를 기록하는 모델."""

    threads: ClassVar[List[int]] = []

    @classmethod
    def from_row(cls, row):
        cls.threads.append(threading.get_ident())
        return super().from_row(row)


@pytest.mark.asyncio
async def test_execute_many_returns_hydrated_models(executor) -> None:
    users = await executor.select(User).where("active = ?", True).order_by("id").execute_many()

    assert [user.name for user in users] == ["alice", "carol"]
    assert all(isinstance(user, User) for user in users)
    assert users[0].active is True


@pytest.mark.asyncio
async def test_execute_many_with_no_rows_returns_empty_list(executor) -> None:
    users = await executor.select(User).where("age > ?", 100).execute_many()

    assert users == []


@pytest.mark.asyncio
async def test_execute_one_returns_first_row(executor) -> None:
    user = await executor.select(User).order_by("age DESC").execute_one()

    assert user is not None
    assert user.name == "carol"


@pytest.mark.asyncio
async def test_execute_one_with_no_rows_returns_none(executor) -> None:
    user = await executor.select(User).where("name = ?", "nobody").execute_one()

    assert user is None


@pytest.mark.asyncio
async def test_count_matches_rows(executor) -> None:
    assert await executor.select(User).count() == 3
    assert await executor.select(User).where("active = ?", False).count() == 1
    assert await executor.select(User).where("age > ?", 100).count() == 0


@pytest.mark.asyncio
async def test_count_ignores_order_by(executor) -> None:
    assert await executor.select(User).order_by("missing_column").count() == 3


@pytest.mark.asyncio
async def test_execution_method_returns_pending_future(executor) -> None:
    pending = executor.execute_many(executor.select(User))

    assert isinstance(pending, asyncio.Future)
    assert len(await pending) == 3


@pytest.mark.asyncio
async def test_conversion_runs_in_background_and_result_arrives_on_loop(executor) -> None:
    ThreadRecordingUser.threads.clear()
    loop_thread = threading.get_ident()

    users = await executor.select(ThreadRecordingUser).execute_many()

    assert len(users) == 3
    assert ThreadRecordingUser.threads
    assert all(ident != loop_thread for ident in ThreadRecordingUser.threads)
    assert threading.get_ident() == loop_thread


@pytest.mark.asyncio
async def test_execution_error_fails_future(executor) -> None:
    with pytest.raises(QueryExecutionError) as raised:
        await executor.select(User).where("no_such_column = ?", 1).execute_many()

    assert raised.value.detail.code == ErrorCode.EXECUTION_FAILED
    assert "no_such_column" in raised.value.detail.metadata["sql"]


@pytest.mark.asyncio
async def test_conversion_error_is_absorbed_by_default(executor, logger) -> None:
    many = await executor.select(BrokenUser).execute_many()
    one = await executor.select(BrokenUser).execute_one()

    assert many is None
    assert one is None
    errors = [record for record in logger.repository.list() if record.level == LogLevel.ERROR]
    assert len(errors) == 2
    assert errors[0].context is not None
    assert errors[0].context.table == "users"
    assert errors[0].metadata["policy"] == "absorb"


@pytest.mark.asyncio
async def test_conversion_error_is_raised_with_raise_policy(database, registry) -> None:
    with SelectExecutor(
        database,
        resolver=registry,
        conversion_error_policy=ConversionErrorPolicy.RAISE,
    ) as strict:
        with pytest.raises(RowConversionError) as raised:
            await strict.select(BrokenUser).execute_one()

    assert raised.value.detail.code == ErrorCode.CONVERSION_FAILED
    assert raised.value.original is not None


@pytest.mark.asyncio
async def test_type_without_hydrator_fails_synchronously(executor, registry) -> None:
    class Plain:
        __table_name__ = "users"

    with pytest.raises(QueryConfigurationError):
        executor.select(Plain).execute_many()
    assert await executor.select(Plain).count() == 3


def test_execution_without_running_loop_is_rejected(executor) -> None:
    with pytest.raises(QueryConfigurationError, match="이벤트 루프"):
        executor.select(User).execute_many()


@pytest.mark.asyncio
async def test_independent_calls_complete_concurrently(executor) -> None:
    results = await asyncio.gather(
        executor.select(User).execute_many(),
        executor.select(User).where("id = ?", 2).execute_one(),
        executor.select(User).count(),
    )

    assert len(results[0]) == 3
    assert results[1].name == "bob"
    assert results[2] == 3


@pytest.mark.asyncio
async def test_watch_many_refreshes_after_table_write(executor, database) -> None:
    stream = executor.select(User).order_by("id").watch_many()

    first = await stream.__anext__()
    database.execute_write("users", "INSERT INTO users (id, name, age, active) VALUES (?, ?, ?, ?)", (4, "dave", 19, 1))
    second = await asyncio.wait_for(stream.__anext__(), timeout=5.0)
    await stream.aclose()

    assert [user.name for user in first] == ["alice", "bob", "carol"]
    assert [user.name for user in second] == ["alice", "bob", "carol", "dave"]


@pytest.mark.asyncio
async def test_executor_from_settings_owns_database(tmp_path) -> None:
    settings = SelectSettings(database_path=str(tmp_path / "owned.sqlite"), max_workers=2)

    with SelectExecutor.from_settings(settings) as owned:
        owned.database.execute_write("users", "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT)")
        owned.database.execute_write("users", "INSERT INTO users (id, name) VALUES (?, ?)", (1, "solo"))
        user = await owned.select(User).execute_one()

    assert user is not None
    assert user.name == "solo"
    assert user.age is None


class StubQuery:
    """고정 행을 돌려주는 조회 핸들. gate가 열릴 때까지 백그라운드에서 대기한다."""

    def __init__(self, table: str, sql: str, rows: list, gate: threading.Event, finished: threading.Event) -> None:
        self.table = table
        self.sql = sql
        self._rows = rows
        self._gate = gate
        self._finished = finished

    def run(self) -> list:
        self._gate.wait(5.0)
        self._finished.set()
        return self._rows


class StubDatabase:
    """DatabasePort 스텁. 모든 조회가 같은 행을 반환한다."""

    def __init__(self, rows: list) -> None:
        self.rows = rows
        self.gate = threading.Event()
        self.gate.set()
        self.finished = threading.Event()

    def create_query(self, table: str, sql: str, arguments) -> StubQuery:
        return StubQuery(table, sql, self.rows, self.gate, self.finished)

    def subscribe(self, table: str, listener):
        return lambda: None


class RecordingPool(ThreadPool):
    """shutdown 호출 횟수를 기록하는 스레드풀."""

    def __init__(self) -> None:
        super().__init__(ThreadPoolConfig(max_workers=1))
        self.shutdown_calls = 0

    def shutdown(self, wait: bool = True) -> None:
        self.shutdown_calls += 1
        super().shutdown(wait=wait)


@pytest.mark.asyncio
async def test_count_conversion_error_fails_even_with_absorb_policy(registry, logger) -> None:
    with SelectExecutor(StubDatabase([("not-a-number",)]), resolver=registry, logger=logger) as stubbed:
        assert stubbed.conversion_error_policy is ConversionErrorPolicy.ABSORB

        with pytest.raises(RowConversionError) as raised:
            await stubbed.select(User).count()

    assert raised.value.detail.code == ErrorCode.CONVERSION_FAILED
    assert isinstance(raised.value.original, ValueError)


@pytest.mark.asyncio
async def test_cancelled_future_skips_delivery_while_query_finishes(registry, logger) -> None:
    database = StubDatabase([(3,)])
    database.gate.clear()

    with SelectExecutor(database, resolver=registry, logger=logger) as stubbed:
        pending = stubbed.select(User).count()
        pending.cancel()
        database.gate.set()

        assert await asyncio.to_thread(database.finished.wait, 5.0)
        for _ in range(200):
            if any("전달을 건너뜁니다" in record.message for record in logger.repository.list()):
                break
            await asyncio.sleep(0.01)

    assert pending.cancelled()
    assert any("전달을 건너뜁니다" in record.message for record in logger.repository.list())
    assert not [record for record in logger.repository.list() if record.level == LogLevel.ERROR]


@pytest.mark.asyncio
async def test_watch_many_coalesces_writes_and_unsubscribes_on_close(executor, database, monkeypatch) -> None:
    issued: List[str] = []
    create_query = database.create_query

    def counting_create_query(table, sql, arguments):
        issued.append(sql)
        return create_query(table, sql, arguments)

    monkeypatch.setattr(database, "create_query", counting_create_query)
    insert = "INSERT INTO users (id, name, age, active) VALUES (?, ?, ?, ?)"

    stream = executor.select(User).order_by("id").watch_many()
    await stream.__anext__()
    for row in ((4, "dave", 19, 1), (5, "erin", 22, 0), (6, "frank", 50, 1)):
        database.execute_write("users", insert, row)
    refreshed = await asyncio.wait_for(stream.__anext__(), timeout=5.0)
    await stream.aclose()

    database.execute_write("users", insert, (7, "gina", 33, 1))
    await asyncio.sleep(0.05)

    assert [user.name for user in refreshed][-3:] == ["dave", "erin", "frank"]
    assert len(issued) == 2
    assert database._listeners == {}


@pytest.mark.asyncio
async def test_default_logger_keeps_only_recent_records(tmp_path) -> None:
    settings = SelectSettings(database_path=str(tmp_path / "capped.sqlite"), log_max_records=5)

    with SelectExecutor.from_settings(settings) as owned:
        owned.database.execute_write("users", "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT)")
        for _ in range(10):
            assert await owned.select(User).count() == 0
        records = owned.logger.repository.list()

    assert len(records) == 5
    assert records[-1].context is not None
    assert records[-1].context.operation == "count"


def test_close_leaves_shared_pool_running(database, registry, logger) -> None:
    shared = RecordingPool()

    SelectExecutor(database, pool=shared, resolver=registry, logger=logger).close()
    assert shared.shutdown_calls == 0

    SelectExecutor(database, pool=shared, resolver=registry, logger=logger, owns_pool=True).close()
    assert shared.shutdown_calls == 1
