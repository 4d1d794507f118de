"""
core/tags/config.py - 프로바이더 태그 설정 (default_tags / ignore_tags)

YAML 설정 예시:

    default_tags:
      Environment: prod
      Owner: platform@company.com

    ignore_tags:
      keys:
        - LastScanned
      key_prefixes:
        - kubernetes.io/
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from core.exceptions import ConfigError

from .key_value_tags import KeyValueTags

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefaultConfig:
    """프로바이더 전역 기본 태그"""

    tags: KeyValueTags = field(default_factory=KeyValueTags)

    def merge_tags(self, tags: Any) -> KeyValueTags:
        """기본 태그에 리소스 태그 병합 (리소스 값 우선)"""
        return self.tags.merge(tags)

    def tags_equal(self, tags: Any) -> bool:
        """기본 태그와 동일한 집합인지 확인 (둘 다 비어있으면 False)"""
        other = KeyValueTags.new(tags)
        if not self.tags and not other:
            return False
        return self.tags.equal(other)


@dataclass(frozen=True)
class IgnoreConfig:
    """diff 대상에서 항상 제외할 태그

    Attributes:
        keys: 정확히 일치하는 키
        key_prefixes: 키 접두사
    """

    keys: tuple[str, ...] = ()
    key_prefixes: tuple[str, ...] = ()


def load_tag_config(path: str | Path) -> tuple[DefaultConfig, IgnoreConfig]:
    """YAML 파일에서 default_tags / ignore_tags 로드

    Args:
        path: 설정 파일 경로 (없으면 빈 설정)

    Returns:
        (DefaultConfig, IgnoreConfig)

    Raises:
        ConfigError: YAML 파싱 실패 또는 형식 오류
    """
    config_path = Path(path)
    if not config_path.exists():
        logger.debug(f"태그 설정 파일 없음, 빈 설정 사용: {config_path}")
        return DefaultConfig(), IgnoreConfig()

    try:
        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(str(config_path), "YAML 파싱 실패", cause=e) from e

    if not isinstance(data, dict):
        raise ConfigError(str(config_path), "최상위 항목은 매핑이어야 함")

    default_tags = data.get("default_tags") or {}
    if not isinstance(default_tags, dict):
        raise ConfigError("default_tags", "키/값 매핑이어야 함")

    ignore_tags = data.get("ignore_tags") or {}
    if not isinstance(ignore_tags, dict):
        raise ConfigError("ignore_tags", "keys / key_prefixes 매핑이어야 함")

    return (
        DefaultConfig(tags=KeyValueTags.new(default_tags)),
        IgnoreConfig(
            keys=_string_tuple("ignore_tags.keys", ignore_tags.get("keys")),
            key_prefixes=_string_tuple("ignore_tags.key_prefixes", ignore_tags.get("key_prefixes")),
        ),
    )


def _string_tuple(key: str, value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(key, "문자열 목록이어야 함")
    return tuple(value)
