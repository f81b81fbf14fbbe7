"""
목적: DB 엔진 모듈 공개 API를 제공한다.
설명: 임베디드 SQLite 엔진 구현체를 노출한다.
디자인 패턴: 퍼사드
참조: src/async_select/integrations/db/engines/sqlite
"""

from async_select.integrations.db.engines.sqlite import SqliteDatabase, SqliteQuery

__all__ = ["SqliteDatabase", "SqliteQuery"]
