"""
목적: 쿼리 실행 설정 로더를 제공한다.
설명: dict/JSON 파일/환경 변수를 순서대로 병합한 뒤 SelectSettings로 검증한다.
디자인 패턴: 빌더 패턴
참조: src/async_select/shared/config/settings.py, src/async_select/shared/logging/logger.py
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from async_select.shared.config.settings import SelectSettings
from async_select.shared.exceptions import BaseAppException, ErrorCode, ExceptionDetail
from async_select.shared.logging import Logger, create_default_logger


class SettingsLoader:
    """설정 로더 구현체이다.

    나중에 추가된 소스가 앞선 소스의 같은 키를 덮어쓴다.

    Args:
        logger: 주입 가능한 로거.
    """

    ENV_PREFIX = "ASYNC_SELECT_"
    _DEFAULT_ENCODING = "utf-8"

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self._logger = logger or create_default_logger("SettingsLoader")
        self._sources: list[Dict[str, Any]] = []

    def add_dict(self, data: Optional[Mapping[str, Any]]) -> "SettingsLoader":
        """딕셔너리 설정을 추가한다."""

        if data:
            self._sources.append(dict(data))
        return self

    def add_json_file(self, path: str, required: bool = False) -> "SettingsLoader":
        """JSON 파일 설정을 추가한다."""

        if not path:
            raise ValueError("path는 비어 있을 수 없습니다.")
        if not os.path.exists(path):
            if required:
                raise FileNotFoundError(path)
            self._logger.warning(f"설정 파일이 없어 건너뜁니다: {path}")
            return self
        with open(path, "r", encoding=self._DEFAULT_ENCODING) as handle:
            try:
                payload = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError("JSON 설정 파일 파싱에 실패했습니다.") from exc
        if not isinstance(payload, dict):
            raise ValueError("JSON 설정 파일은 최상위가 객체여야 합니다.")
        self._sources.append(payload)
        return self

    def add_env(self, prefix: Optional[str] = None) -> "SettingsLoader":
        """접두사로 시작하는 환경 변수를 소문자 키로 추가한다."""

        prefix = self.ENV_PREFIX if prefix is None else prefix
        env_data: Dict[str, Any] = {}
        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            trimmed = key[len(prefix) :].lower()
            if trimmed:
                env_data[trimmed] = value
        if env_data:
            self._sources.append(env_data)
        return self

    def build(self, overrides: Optional[Mapping[str, Any]] = None) -> SelectSettings:
        """수집된 설정을 병합해 검증된 설정 모델로 반환한다."""

        merged: Dict[str, Any] = {}
        for source in self._sources:
            merged.update(source)
        if overrides:
            merged.update(overrides)
        try:
            settings = SelectSettings.model_validate(merged)
        except ValidationError as error:
            detail = ExceptionDetail(
                code=ErrorCode.SETTINGS_INVALID,
                cause=str(error),
                metadata={"keys": sorted(merged)},
            )
            raise BaseAppException("쿼리 실행 설정이 올바르지 않습니다.", detail, error) from error
        self._logger.debug(f"설정 로딩 완료: database_path={settings.database_path}")
        return settings
