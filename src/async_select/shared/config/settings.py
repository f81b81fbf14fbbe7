"""
목적: 쿼리 실행 설정 모델을 정의한다.
설명: DB 경로, 백그라운드 스레드 수, 변환 오류 정책을 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/async_select/shared/config/loader.py
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from async_select.shared.logging import DEFAULT_MAX_LOG_RECORDS


class ConversionErrorPolicy(str, Enum):
    """행 변환 실패 시 결과 전달 정책.

    ABSORB: 오류를 로그로 남기고 결과를 None으로 성공 처리한다. count는 예외다.
    RAISE: RowConversionError로 결과 Future를 실패시킨다.
    """

    ABSORB = "absorb"
    RAISE = "raise"


class SelectSettings(BaseModel):
    """쿼리 실행 설정 모델이다.

    Args:
        database_path: SQLite 파일 경로. 기본값은 인메모리 DB.
        busy_timeout_ms: SQLite busy timeout(ms).
        max_workers: 백그라운드 스레드 수.
        thread_name_prefix: 백그라운드 스레드 이름 접두사.
        conversion_error_policy: 행 변환 실패 정책.
        log_max_records: 기본 인메모리 로거가 보관할 최근 로그 수.
    """

    database_path: str = Field(default=":memory:", min_length=1)
    busy_timeout_ms: int = Field(default=5000, ge=0)
    max_workers: int = Field(default=4, ge=1)
    thread_name_prefix: str = Field(default="select-io")
    conversion_error_policy: ConversionErrorPolicy = ConversionErrorPolicy.ABSORB
    log_max_records: int = Field(default=DEFAULT_MAX_LOG_RECORDS, ge=1)
