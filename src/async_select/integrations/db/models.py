"""
목적: 테이블 행과 대응하는 결과 모델 베이스와 하이드레이터 해석을 제공한다.
설명: 타입별 from_row 변환 함수를 정적으로 찾아 행 1건을 결과 객체로 만든다.
디자인 패턴: 데이터 매퍼
참조: src/async_select/integrations/db/ports.py, src/async_select/query/executor.py
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping, Type, TypeVar

from pydantic import BaseModel, ConfigDict

from async_select.integrations.db.ports import RowHydrator
from async_select.shared.exceptions import (
    ErrorCode,
    ExceptionDetail,
    QueryConfigurationError,
)

M = TypeVar("M", bound="TableModel")
T = TypeVar("T")


class TableModel(BaseModel):
    """테이블 행과 1:1로 대응하는 결과 모델 베이스.

    하위 클래스는 __table_name__으로 저장 테이블을 선언한다.
    행에 모델에 없는 컬럼이 있으면 무시한다.
    """

    model_config = ConfigDict(extra="ignore")

    __table_name__: ClassVar[str] = ""

    @classmethod
    def from_row(cls: Type[M], row: Any) -> M:
        """sqlite3.Row 또는 매핑을 모델로 변환한다."""

        return cls.model_validate(_row_to_mapping(row))


def _row_to_mapping(row: Any) -> Mapping[str, Any]:
    if isinstance(row, Mapping):
        return row
    keys = getattr(row, "keys", None)
    if callable(keys):
        return {key: row[key] for key in keys()}
    raise TypeError(f"매핑으로 변환할 수 없는 행 형식입니다: {type(row)!r}")


def hydrator_for(target_type: Type[T]) -> RowHydrator[T]:
    """결과 타입의 정적 하이드레이터(from_row)를 반환한다."""

    hydrate = getattr(target_type, "from_row", None)
    if not callable(hydrate):
        detail = ExceptionDetail(
            code=ErrorCode.CONFIGURATION_INVALID,
            cause=f"from_row 변환 함수가 없는 타입입니다: {target_type!r}",
            hint="TableModel을 상속하거나 from_row 클래스 메서드를 정의하세요.",
        )
        raise QueryConfigurationError("결과 타입의 행 변환 함수를 찾을 수 없습니다.", detail)
    return hydrate
