"""
목적: 설정 모듈 공개 API를 제공한다.
설명: 설정 모델, 변환 오류 정책, 설정 로더를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/async_select/shared/config/loader.py, src/async_select/shared/config/settings.py
"""

from async_select.shared.config.loader import SettingsLoader
from async_select.shared.config.settings import ConversionErrorPolicy, SelectSettings

__all__ = ["ConversionErrorPolicy", "SelectSettings", "SettingsLoader"]
