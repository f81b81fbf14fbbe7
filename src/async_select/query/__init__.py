"""
목적: 쿼리 모듈 공개 API를 제공한다.
설명: SELECT 빌더, 인자 변환 헬퍼, 비동기 실행기와 실행 모델을 노출한다.
디자인 패턴: 퍼사드
참조: src/async_select/query/select.py, src/async_select/query/executor.py
"""

from async_select.query.arguments import coerce_argument, coerce_arguments, stringify_arguments
from async_select.query.executor import SelectExecutor
from async_select.query.models import ConversionOutcome, ExecutionState
from async_select.query.select import Select, select_from

__all__ = [
    "Select",
    "select_from",
    "SelectExecutor",
    "ConversionOutcome",
    "ExecutionState",
    "coerce_argument",
    "coerce_arguments",
    "stringify_arguments",
]
