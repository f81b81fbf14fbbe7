"""
목적: 런타임 모듈 공개 API를 제공한다.
설명: 백그라운드 실행용 스레드풀 구성 요소를 노출한다.
디자인 패턴: 퍼사드
참조: src/async_select/shared/runtime/thread_pool
"""

from async_select.shared.runtime.thread_pool import TaskRecord, ThreadPool, ThreadPoolConfig

__all__ = ["ThreadPoolConfig", "TaskRecord", "ThreadPool"]
