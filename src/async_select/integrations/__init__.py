"""
목적: integrations 패키지의 공개 API를 제공한다.
설명: DB 통합 모듈을 한 번에 노출한다.
디자인 패턴: 퍼사드
참조: src/async_select/integrations/db
"""

from async_select.integrations.db import (
    SqliteDatabase,
    TableModel,
    TableRegistry,
    default_registry,
)

__all__ = ["SqliteDatabase", "TableModel", "TableRegistry", "default_registry"]
