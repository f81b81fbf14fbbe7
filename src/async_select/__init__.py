"""
목적: async_select 패키지의 공개 API를 제공한다.
설명: 단일 테이블 SELECT 빌더와 SQLite 비동기 실행기, 주요 협력자를 한 번에 노출한다.
디자인 패턴: 퍼사드
참조: src/async_select/query, src/async_select/integrations/db, src/async_select/shared
"""

from async_select.integrations.db import SqliteDatabase, TableModel, TableRegistry, default_registry
from async_select.query import Select, SelectExecutor, select_from
from async_select.shared.config import ConversionErrorPolicy, SelectSettings, SettingsLoader
from async_select.shared.exceptions import (
    QueryConfigurationError,
    QueryExecutionError,
    RowConversionError,
)

__all__ = [
    "Select",
    "select_from",
    "SelectExecutor",
    "SqliteDatabase",
    "TableModel",
    "TableRegistry",
    "default_registry",
    "ConversionErrorPolicy",
    "SelectSettings",
    "SettingsLoader",
    "QueryConfigurationError",
    "QueryExecutionError",
    "RowConversionError",
]
