"""
목적: 쿼리 실행용 백그라운드 스레드풀을 제공한다.
설명: 블로킹 DB 작업을 호출 스레드 밖에서 실행하고 with 문 종료 시 graceful shutdown을 보장한다.
디자인 패턴: 파사드, 커맨드 패턴
참조: src/async_select/shared/runtime/thread_pool/model.py
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, Set, TypeVar

from async_select.shared.logging import Logger, create_default_logger
from async_select.shared.runtime.thread_pool.model import TaskRecord, ThreadPoolConfig

T = TypeVar("T")


class ThreadPool:
    """백그라운드 실행 컨텍스트 구현체."""

    def __init__(
        self,
        config: Optional[ThreadPoolConfig] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._config = config or ThreadPoolConfig()
        self._logger = logger or create_default_logger("ThreadPool")
        self._executor: Optional[ThreadPoolExecutor] = None
        self._pending: Set[Future] = set()
        self._lock = threading.RLock()

    def __enter__(self) -> "ThreadPool":
        self._ensure_executor()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)

    @property
    def pending_count(self) -> int:
        """아직 완료되지 않은 태스크 수를 반환한다."""

        with self._lock:
            return len(self._pending)

    def submit(self, fn: Callable[..., T], *args, label: str = "task") -> Future[T]:
        """태스크를 백그라운드 스레드에 제출한다."""

        with self._lock:
            executor = self._ensure_executor()
            record = TaskRecord(label=label)
            self._logger.debug(f"태스크 제출: {record.label} ({record.task_id})")
            future = executor.submit(fn, *args)
            self._pending.add(future)
            future.add_done_callback(self._on_future_done)
            return future

    def shutdown(self, wait: bool = True) -> None:
        """스레드풀을 종료한다. 이후 submit 호출 시 다시 생성된다."""

        with self._lock:
            executor = self._executor
            self._executor = None
        if executor is None:
            return
        executor.shutdown(wait=wait)
        self._logger.info("스레드풀이 종료되었습니다.")

    def _ensure_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._config.max_workers,
                    thread_name_prefix=self._config.thread_name_prefix,
                )
            return self._executor

    def _on_future_done(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)
