"""
목적: 공통 예외 베이스 클래스와 쿼리 예외를 제공한다.
설명: 설정/실행/변환 단계별 예외를 BaseAppException 위에 정의한다.
디자인 패턴: 도메인 예외 객체
참조: src/async_select/shared/exceptions/models.py
"""

from __future__ import annotations

from typing import Optional

from async_select.shared.exceptions.models import ErrorCode, ExceptionDetail


class BaseAppException(Exception):
    """애플리케이션 공통 예외 클래스이다.

    Args:
        message: 사용자 또는 시스템에 전달할 메시지.
        detail: 예외 상세 정보 모델.
        original: 원본 예외 객체.
    """

    def __init__(
        self,
        message: str,
        detail: ExceptionDetail,
        original: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._detail = detail
        self._original = original

    @property
    def message(self) -> str:
        return self._message

    @property
    def detail(self) -> ExceptionDetail:
        return self._detail

    @property
    def original(self) -> Optional[Exception]:
        return self._original

    def to_dict(self) -> dict:
        """예외 정보를 사전으로 변환한다."""

        return {
            "message": self._message,
            "detail": self._detail.model_dump(),
            "original": repr(self._original) if self._original else None,
        }


class QueryConfigurationError(BaseAppException):
    """빌더 구성 단계에서 즉시 발생하는 예외."""

    @classmethod
    def unresolved_table(cls, target_type: type) -> "QueryConfigurationError":
        """테이블 이름을 해석할 수 없는 타입에 대한 예외를 만든다."""

        detail = ExceptionDetail(
            code=ErrorCode.TABLE_UNRESOLVED,
            cause=f"등록되지 않은 결과 타입입니다: {target_type!r}",
            hint="TableRegistry.register()로 등록하거나 __table_name__ 속성을 정의하세요.",
        )
        return cls("결과 타입의 테이블 이름을 확인할 수 없습니다.", detail)


class QueryExecutionError(BaseAppException):
    """DB 계층에서 구문 실행이 실패했을 때 발생하는 예외."""


class RowConversionError(BaseAppException):
    """행을 결과 객체로 변환하지 못했을 때 발생하는 예외."""
