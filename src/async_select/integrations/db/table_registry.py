"""
목적: 결과 타입과 저장 테이블 이름의 매핑을 관리한다.
설명: 명시 등록을 우선하고, 없으면 클래스의 __table_name__ 속성을 사용한다.
디자인 패턴: 레지스트리
참조: src/async_select/integrations/db/ports.py
"""

from __future__ import annotations

import threading
from typing import Dict, Optional

from async_select.shared.exceptions import (
    ErrorCode,
    ExceptionDetail,
    QueryConfigurationError,
)


class TableRegistry:
    """결과 타입별 테이블 이름 레지스트리."""

    TABLE_ATTRIBUTE = "__table_name__"

    def __init__(self) -> None:
        self._tables: Dict[type, str] = {}
        self._lock = threading.RLock()

    def register(self, target_type: type, table: str) -> None:
        """결과 타입의 테이블 이름을 등록한다."""

        candidate = str(table or "").strip()
        if not candidate:
            detail = ExceptionDetail(
                code=ErrorCode.CONFIGURATION_INVALID,
                cause="테이블 이름이 비어 있습니다.",
                metadata={"type": repr(target_type)},
            )
            raise QueryConfigurationError("테이블 이름은 비어 있을 수 없습니다.", detail)
        with self._lock:
            self._tables[target_type] = candidate

    def unregister(self, target_type: type) -> None:
        with self._lock:
            self._tables.pop(target_type, None)

    def resolve(self, target_type: type) -> str:
        """테이블 이름을 반환한다. 해석할 수 없으면 QueryConfigurationError를 던진다."""

        with self._lock:
            registered = self._tables.get(target_type)
        if registered:
            return registered
        declared = _declared_table(target_type)
        if declared:
            return declared
        raise QueryConfigurationError.unresolved_table(target_type)


def _declared_table(target_type: type) -> Optional[str]:
    value = getattr(target_type, TableRegistry.TABLE_ATTRIBUTE, None)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


_default_registry = TableRegistry()


def default_registry() -> TableRegistry:
    """프로세스 기본 레지스트리를 반환한다."""

    return _default_registry
