"""
목적: Select 빌더의 비동기 실행기를 제공한다.
설명: SQL 렌더링은 호출 스레드에서, 조회와 행 변환은 백그라운드 스레드풀에서 수행하고
     결과는 호출 시점의 이벤트 루프(포그라운드 컨텍스트)에서 asyncio.Future로 전달한다.
디자인 패턴: 실행 코디네이터, 포트-어댑터
참조: src/async_select/query/select.py, src/async_select/shared/runtime/thread_pool/thread_pool.py,
     src/async_select/integrations/db/engines/sqlite/database.py
"""

from __future__ import annotations

import asyncio
from concurrent.futures import Future
from typing import Any, AsyncIterator, Callable, List, Optional, Sequence, Type, TypeVar
from uuid import uuid4

from async_select.integrations.db.engines.sqlite import SqliteDatabase
from async_select.integrations.db.models import hydrator_for
from async_select.integrations.db.ports import DatabasePort, QueryHandle, TableNameResolver
from async_select.integrations.db.table_registry import default_registry
from async_select.query.models import ConversionOutcome, ExecutionState
from async_select.query.select import Select
from async_select.shared.config import ConversionErrorPolicy, SelectSettings
from async_select.shared.exceptions import (
    BaseAppException,
    ErrorCode,
    ExceptionDetail,
    QueryConfigurationError,
    QueryExecutionError,
    RowConversionError,
)
from async_select.shared.logging import LogContext, Logger, create_default_logger
from async_select.shared.runtime import ThreadPool, ThreadPoolConfig

T = TypeVar("T")

RowConverter = Callable[[Sequence[Any]], Any]


class SelectExecutor:
    """Select 빌더 비동기 실행기.

    Args:
        database: DB 접근 계층.
        pool: 백그라운드 실행 스레드풀.
        resolver: 결과 타입 → 테이블 이름 해석기.
        conversion_error_policy: 행 변환 실패 시 결과 전달 정책.
        logger: 주입 가능한 로거.
        owns_database: close() 시 DB 연결도 함께 닫을지 여부.
        owns_pool: close() 시 스레드풀도 종료할지 여부. None이면 pool을 직접 만든 경우에만 종료한다.
    """

    _OP_MANY = "execute_many"
    _OP_ONE = "execute_one"
    _OP_COUNT = "count"

    def __init__(
        self,
        database: DatabasePort,
        pool: Optional[ThreadPool] = None,
        resolver: Optional[TableNameResolver] = None,
        conversion_error_policy: ConversionErrorPolicy = ConversionErrorPolicy.ABSORB,
        logger: Optional[Logger] = None,
        owns_database: bool = False,
        owns_pool: Optional[bool] = None,
    ) -> None:
        self._database = database
        self._logger = logger or create_default_logger("SelectExecutor")
        self._pool = pool or ThreadPool(logger=self._logger)
        self._resolver = resolver or default_registry()
        self._policy = ConversionErrorPolicy(conversion_error_policy)
        self._owns_database = owns_database
        self._owns_pool = pool is None if owns_pool is None else owns_pool

    @classmethod
    def from_settings(
        cls,
        settings: SelectSettings,
        resolver: Optional[TableNameResolver] = None,
        logger: Optional[Logger] = None,
    ) -> "SelectExecutor":
        """설정으로 SQLite DB와 스레드풀을 만들어 실행기를 구성한다."""

        logger = logger or create_default_logger("SelectExecutor", settings.log_max_records)
        database = SqliteDatabase.from_settings(settings, logger=logger)
        database.connect()
        pool = ThreadPool(
            ThreadPoolConfig(
                max_workers=settings.max_workers,
                thread_name_prefix=settings.thread_name_prefix,
            ),
            logger=logger,
        )
        return cls(
            database=database,
            pool=pool,
            resolver=resolver,
            conversion_error_policy=settings.conversion_error_policy,
            logger=logger,
            owns_database=True,
            owns_pool=True,
        )

    def __enter__(self) -> "SelectExecutor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def database(self) -> DatabasePort:
        return self._database

    @property
    def logger(self) -> Logger:
        return self._logger

    @property
    def conversion_error_policy(self) -> ConversionErrorPolicy:
        return self._policy

    def close(self) -> None:
        """소유한 스레드풀을 종료하고, 소유한 DB 연결을 닫는다."""

        if self._owns_pool:
            self._pool.shutdown(wait=True)
        if self._owns_database and isinstance(self._database, SqliteDatabase):
            self._database.close()

    def select(self, target_type: Type[T]) -> Select[T]:
        """이 실행기가 바인딩된 빌더를 만든다."""

        return Select.from_(target_type, resolver=self._resolver, executor=self)

    def execute_many(
        self,
        select: Select[T],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> "asyncio.Future[Optional[List[T]]]":
        """모든 행을 결과 객체 목록으로 변환해 전달한다."""

        hydrate = hydrator_for(select.target_type)

        def convert(rows: Sequence[Any]) -> List[T]:
            return [hydrate(row) for row in rows]

        return self._dispatch(select, self._OP_MANY, select.build_sql(), convert, loop)

    def execute_one(
        self,
        select: Select[T],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> "asyncio.Future[Optional[T]]":
        """첫 번째 행을 결과 객체로 변환해 전달한다. 행이 없으면 None이다."""

        hydrate = hydrator_for(select.target_type)

        def convert(rows: Sequence[Any]) -> Optional[T]:
            if not rows:
                return None
            return hydrate(rows[0])

        return self._dispatch(select, self._OP_ONE, select.build_sql(), convert, loop)

    def count(
        self,
        select: Select[Any],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> "asyncio.Future[int]":
        """COUNT(*) 구문의 첫 행 첫 컬럼을 정수로 전달한다. 행이 없으면 0이다."""

        def convert(rows: Sequence[Any]) -> int:
            if not rows:
                return 0
            return int(rows[0][0])

        return self._dispatch(select, self._OP_COUNT, select.to_count_sql(), convert, loop)

    async def watch_many(self, select: Select[T]) -> AsyncIterator[Optional[List[T]]]:
        """즉시 1회, 이후 테이블 변경 알림마다 execute_many 결과를 내보낸다.

        결과를 기다리는 동안 들어온 여러 알림은 한 번의 재조회로 합쳐진다.
        """

        loop = asyncio.get_running_loop()
        changed = asyncio.Event()

        def on_change(table: str) -> None:
            try:
                loop.call_soon_threadsafe(changed.set)
            except RuntimeError:
                self._logger.debug(f"이벤트 루프가 닫혀 변경 알림을 버립니다: table={table}")

        unsubscribe = self._database.subscribe(select.table, on_change)
        try:
            while True:
                changed.clear()
                yield await self.execute_many(select, loop)
                await changed.wait()
        finally:
            unsubscribe()

    def _dispatch(
        self,
        select: Select[Any],
        operation: str,
        sql: str,
        convert: RowConverter,
        loop: Optional[asyncio.AbstractEventLoop],
    ) -> "asyncio.Future[Any]":
        loop = loop or _running_loop()
        log = self._logger.with_context(
            LogContext(table=select.table, operation=operation, request_id=str(uuid4()))
        )
        log.debug(f"state={ExecutionState.RENDERING.value}, sql={sql}")
        query = self._database.create_query(select.table, sql, select.get_arguments())
        result: asyncio.Future[Any] = loop.create_future()
        background = self._pool.submit(self._run, query, convert, log, label=operation)
        log.debug(f"state={ExecutionState.DISPATCHED.value}")

        def on_background_done(done: Future) -> None:
            try:
                loop.call_soon_threadsafe(self._deliver, done, result, operation, log)
            except RuntimeError:
                log.warning("이벤트 루프가 닫혀 결과를 전달하지 못했습니다.")

        background.add_done_callback(on_background_done)
        return result

    def _run(self, query: QueryHandle, convert: RowConverter, log: Logger) -> ConversionOutcome[Any]:
        """백그라운드 스레드에서 조회와 변환을 수행한다. 실행 오류는 그대로 전파한다."""

        try:
            rows = query.run()
        except BaseAppException:
            raise
        except Exception as error:  # noqa: BLE001 - 외부 DB 계층 예외를 도메인 예외로 래핑
            detail = ExceptionDetail(
                code=ErrorCode.EXECUTION_FAILED,
                cause=str(error),
                metadata={"sql": query.sql},
            )
            raise QueryExecutionError("SQL 구문 실행에 실패했습니다.", detail, error) from error
        log.debug(f"state={ExecutionState.ROWS_RECEIVED.value}, rows={len(rows)}")
        log.debug(f"state={ExecutionState.CONVERTING.value}")
        try:
            return ConversionOutcome.success(convert(rows))
        except Exception as error:  # noqa: BLE001 - 변환 오류는 태그 결과로 포그라운드에 넘긴다
            return ConversionOutcome.failure(error)

    def _deliver(
        self,
        done: Future,
        result: "asyncio.Future[Any]",
        operation: str,
        log: Logger,
    ) -> None:
        """포그라운드 이벤트 루프에서 결과 Future를 완료한다."""

        if result.done():
            log.debug("결과 Future가 이미 취소되어 전달을 건너뜁니다.")
            return
        error = done.exception()
        if error is not None:
            log.error(
                f"조회 실행 실패: {error}",
                metadata={"error_type": type(error).__name__},
            )
            result.set_exception(error)
            return
        outcome: ConversionOutcome[Any] = done.result()
        if outcome.succeeded:
            state = ExecutionState.DELIVERED_EMPTY if _is_empty(outcome.value) else ExecutionState.DELIVERED
            log.debug(f"state={state.value}")
            result.set_result(outcome.value)
            return
        conversion_error = _as_conversion_error(outcome.error, operation)
        log.error(
            f"행 변환 실패: {outcome.error!r}",
            metadata={"error_type": type(outcome.error).__name__, "policy": self._policy.value},
        )
        if operation == self._OP_COUNT or self._policy is ConversionErrorPolicy.RAISE:
            result.set_exception(conversion_error)
            return
        log.debug(f"state={ExecutionState.DELIVERED_EMPTY.value}")
        result.set_result(None)


def _running_loop() -> asyncio.AbstractEventLoop:
    try:
        return asyncio.get_running_loop()
    except RuntimeError as error:
        detail = ExceptionDetail(
            code=ErrorCode.CONFIGURATION_INVALID,
            cause="실행 중인 이벤트 루프가 없습니다.",
            hint="코루틴 안에서 호출하거나 loop 인자를 전달하세요.",
        )
        raise QueryConfigurationError("결과를 전달할 이벤트 루프가 없습니다.", detail, error) from error


def _is_empty(value: Any) -> bool:
    return value is None or value == [] or value == 0


def _as_conversion_error(error: Optional[Exception], operation: str) -> RowConversionError:
    if isinstance(error, RowConversionError):
        return error
    detail = ExceptionDetail(
        code=ErrorCode.CONVERSION_FAILED,
        cause=repr(error),
        metadata={"operation": operation},
    )
    return RowConversionError("조회 결과를 변환하지 못했습니다.", detail, error)
