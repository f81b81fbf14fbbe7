"""
목적: 단일 테이블 SELECT 구문 빌더를 제공한다.
설명: WHERE/GROUP BY/HAVING/ORDER BY/LIMIT/OFFSET 조각을 고정된 순서로 조합해
     SQL 문자열과 위치 바인딩 인자 목록을 만든다. 모든 설정 호출은 새 빌더를 반환한다.
디자인 패턴: 빌더 패턴(불변 값 객체)
참조: src/async_select/query/arguments.py, src/async_select/query/executor.py
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, AsyncIterator, Generic, List, Optional, Type, TypeVar, Union

from async_select.integrations.db.ports import TableNameResolver
from async_select.integrations.db.table_registry import default_registry
from async_select.query.arguments import coerce_arguments, stringify_arguments
from async_select.shared.exceptions import (
    ErrorCode,
    ExceptionDetail,
    QueryConfigurationError,
)

if TYPE_CHECKING:
    import asyncio

    from async_select.query.executor import SelectExecutor

T = TypeVar("T")

_UNSET: Any = object()


class Select(Generic[T]):
    """단일 테이블 SELECT 빌더.

    where는 누적되고(AND 결합), 나머지 절은 마지막 호출 값만 유지한다.
    렌더링은 멱등이며 인스턴스는 생성 후 변경되지 않는다.
    """

    __slots__ = (
        "_target_type",
        "_table",
        "_alias",
        "_where",
        "_arguments",
        "_group_by",
        "_having",
        "_order_by",
        "_limit",
        "_offset",
        "_executor",
    )

    def __init__(
        self,
        target_type: Type[T],
        table: str,
        executor: Optional["SelectExecutor"] = None,
    ) -> None:
        self._target_type = target_type
        self._table = table
        self._alias: Optional[str] = None
        self._where = ""
        self._arguments: tuple = ()
        self._group_by: Optional[str] = None
        self._having: Optional[str] = None
        self._order_by: Optional[str] = None
        self._limit: Optional[str] = None
        self._offset: Optional[str] = None
        self._executor = executor

    @classmethod
    def from_(
        cls,
        target_type: Type[T],
        resolver: Optional[TableNameResolver] = None,
        executor: Optional["SelectExecutor"] = None,
    ) -> "Select[T]":
        """결과 타입에 대한 빌더를 만든다. 테이블 이름은 즉시 해석한다."""

        resolver = resolver or default_registry()
        return cls(target_type, resolver.resolve(target_type), executor)

    @property
    def target_type(self) -> Type[T]:
        return self._target_type

    @property
    def table(self) -> str:
        return self._table

    @property
    def executor(self) -> Optional["SelectExecutor"]:
        return self._executor

    def __repr__(self) -> str:
        return f"Select({self._target_type.__name__}, sql={self.build_sql()!r})"

    def using(self, executor: "SelectExecutor") -> "Select[T]":
        """실행기를 바인딩한 새 빌더를 반환한다."""

        return self._evolve(_executor=executor)

    def as_(self, alias: str) -> "Select[T]":
        return self._evolve(_alias=alias)

    def where(self, clause: str, *args: object) -> "Select[T]":
        """조건 조각을 추가한다. 기존 조건이 있으면 AND로 결합하며 괄호는 넣지 않는다."""

        coerced = coerce_arguments(args)
        where = f"{self._where} AND {clause}" if self._where else clause
        return self._evolve(_where=where, _arguments=self._arguments + coerced)

    def group_by(self, group_by: str) -> "Select[T]":
        return self._evolve(_group_by=group_by)

    def having(self, having: str) -> "Select[T]":
        return self._evolve(_having=having)

    def order_by(self, order_by: str) -> "Select[T]":
        return self._evolve(_order_by=order_by)

    def limit(self, limit: Union[int, str, None]) -> "Select[T]":
        return self._evolve(_limit=_as_clause_value("limit", limit))

    def offset(self, offset: Union[int, str, None]) -> "Select[T]":
        return self._evolve(_offset=_as_clause_value("offset", offset))

    def build_sql(self) -> str:
        """전체 SELECT 구문을 렌더링한다."""

        parts = ["SELECT * "]
        self._append_from(parts)
        self._append_where(parts)
        self._append_group_by(parts)
        self._append_having(parts)
        self._append_order_by(parts)
        self._append_limit(parts)
        self._append_offset(parts)
        return "".join(parts).strip()

    def to_count_sql(self) -> str:
        """COUNT(*) 구문을 렌더링한다. 정렬은 개수와 무관하므로 ORDER BY를 생략한다."""

        parts = ["SELECT COUNT(*) "]
        self._append_from(parts)
        self._append_where(parts)
        self._append_group_by(parts)
        self._append_having(parts)
        self._append_limit(parts)
        self._append_offset(parts)
        return "".join(parts).strip()

    def get_arguments(self) -> List[str]:
        """바인딩 인자를 추가된 순서대로 문자열 목록으로 반환한다."""

        return stringify_arguments(self._arguments)

    def execute_many(self) -> "asyncio.Future[Optional[List[T]]]":
        return self._require_executor().execute_many(self)

    def execute_one(self) -> "asyncio.Future[Optional[T]]":
        return self._require_executor().execute_one(self)

    def count(self) -> "asyncio.Future[int]":
        return self._require_executor().count(self)

    def watch_many(self) -> AsyncIterator[Optional[List[T]]]:
        return self._require_executor().watch_many(self)

    def _append_from(self, parts: List[str]) -> None:
        parts.append(f"FROM {self._table} ")
        if self._alias is not None:
            parts.append(f"AS {self._alias} ")

    def _append_where(self, parts: List[str]) -> None:
        if self._where.strip():
            parts.append(f"WHERE {self._where} ")

    def _append_group_by(self, parts: List[str]) -> None:
        if self._group_by is not None:
            parts.append(f"GROUP BY {self._group_by} ")

    def _append_having(self, parts: List[str]) -> None:
        if self._having is not None:
            parts.append(f"HAVING {self._having} ")

    def _append_order_by(self, parts: List[str]) -> None:
        if self._order_by is not None:
            parts.append(f"ORDER BY {self._order_by} ")

    def _append_limit(self, parts: List[str]) -> None:
        if self._limit is not None and self._limit.strip():
            parts.append(f"LIMIT {self._limit} ")

    def _append_offset(self, parts: List[str]) -> None:
        if self._offset is not None:
            parts.append(f"OFFSET {self._offset} ")

    def _evolve(self, **changes: Any) -> "Select[T]":
        clone = Select.__new__(Select)
        for slot in self.__slots__:
            value = changes.get(slot, _UNSET)
            object.__setattr__(clone, slot, getattr(self, slot) if value is _UNSET else value)
        return clone

    def _require_executor(self) -> "SelectExecutor":
        if self._executor is None:
            detail = ExceptionDetail(
                code=ErrorCode.CONFIGURATION_INVALID,
                cause="실행기가 바인딩되지 않은 빌더입니다.",
                hint="executor.select(type) 또는 select.using(executor)를 사용하세요.",
            )
            raise QueryConfigurationError("조회 실행기가 없습니다.", detail)
        return self._executor


def _as_clause_value(name: str, value: Union[int, str, None]) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        detail = ExceptionDetail(
            code=ErrorCode.CONFIGURATION_INVALID,
            cause=f"{name}에는 정수 또는 문자열만 사용할 수 있습니다: {value!r}",
        )
        raise QueryConfigurationError(f"{name} 값이 올바르지 않습니다.", detail)
    return str(value)


def select_from(
    target_type: Type[T],
    resolver: Optional[TableNameResolver] = None,
) -> Select[T]:
    """Select.from_의 함수형 별칭."""

    return Select.from_(target_type, resolver)
