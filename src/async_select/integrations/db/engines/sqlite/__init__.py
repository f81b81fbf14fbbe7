"""
목적: SQLite 엔진 모듈 공개 API를 제공한다.
설명: SQLite DB 접근 계층과 조회 핸들을 노출한다.
디자인 패턴: 퍼사드
참조: src/async_select/integrations/db/engines/sqlite/database.py
"""

from async_select.integrations.db.engines.sqlite.database import SqliteDatabase, SqliteQuery

__all__ = ["SqliteDatabase", "SqliteQuery"]
