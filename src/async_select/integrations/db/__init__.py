"""
목적: DB 통합 모듈 공개 API를 제공한다.
설명: 외부 협력자 포트, 테이블 레지스트리, 결과 모델, SQLite 엔진을 노출한다.
디자인 패턴: 퍼사드
참조: src/async_select/integrations/db/ports.py, src/async_select/integrations/db/engines
"""

from async_select.integrations.db.engines import SqliteDatabase, SqliteQuery
from async_select.integrations.db.models import TableModel, hydrator_for
from async_select.integrations.db.ports import (
    DatabasePort,
    QueryHandle,
    RowHydrator,
    TableListener,
    TableNameResolver,
)
from async_select.integrations.db.table_registry import TableRegistry, default_registry

__all__ = [
    "DatabasePort",
    "QueryHandle",
    "RowHydrator",
    "TableListener",
    "TableNameResolver",
    "TableRegistry",
    "default_registry",
    "TableModel",
    "hydrator_for",
    "SqliteDatabase",
    "SqliteQuery",
]
