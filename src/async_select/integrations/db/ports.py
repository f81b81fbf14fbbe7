"""
목적: 쿼리 실행 계층이 의존하는 외부 협력자 인터페이스를 정의한다.
설명: 테이블 이름 해석기, DB 접근 계층, 행 하이드레이터를 Protocol로 제공한다.
디자인 패턴: 포트-어댑터(Port/Protocol)
참조: src/async_select/integrations/db/table_registry.py, src/async_select/integrations/db/engines/sqlite/database.py
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, TypeVar

T_co = TypeVar("T_co", covariant=True)

TableListener = Callable[[str], None]


class TableNameResolver(Protocol):
    """결과 타입을 저장 테이블 이름으로 해석하는 포트."""

    def resolve(self, target_type: type) -> str:
        """테이블 이름을 반환한다. 알 수 없는 타입이면 예외를 던진다."""


class QueryHandle(Protocol):
    """실행 가능한 조회 핸들 포트."""

    @property
    def table(self) -> str:
        """조회 대상 테이블 이름."""

    @property
    def sql(self) -> str:
        """실행할 SQL 문자열."""

    def run(self) -> Sequence[Any]:
        """구문을 실행해 행 목록을 반환한다. 블로킹 호출이다."""


class DatabasePort(Protocol):
    """백그라운드 스레드에서 호출 가능한 DB 접근 포트."""

    def create_query(self, table: str, sql: str, arguments: Sequence[str]) -> QueryHandle:
        """조회 핸들을 생성한다."""

    def subscribe(self, table: str, listener: TableListener) -> Callable[[], None]:
        """테이블 변경 리스너를 등록하고 해제 함수를 반환한다."""


class RowHydrator(Protocol[T_co]):
    """행 1건을 결과 객체로 변환하는 포트."""

    def __call__(self, row: Any) -> T_co:
        """변환된 결과 객체를 반환한다. 실패 시 예외를 던진다."""
