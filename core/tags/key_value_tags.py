"""
core/tags/key_value_tags.py - 서비스 독립적인 태그 집합

각 AWS 서비스의 SDK 태그 형식([{"Key", "Value"}], [{"key", "value"}], {k: v})을
하나의 불변 매핑으로 다루고, 이전/새 태그 집합의 diff를 계산합니다.

Usage:
    from core.tags import KeyValueTags

    old = KeyValueTags.new({"env": "dev", "owner": "a"})
    new = KeyValueTags.new({"env": "prod", "team": "b"})

    old.removed(new).keys()   # ["owner"]
    old.updated(new).map()    # {"env": "prod", "team": "b"}
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import DefaultConfig, IgnoreConfig

# AWS 예약 태그 접두사 (모든 서비스 공통)
AWS_TAG_KEY_PREFIX = "aws:"

# 서비스별 예약 태그 (접두사, 정확히 일치하는 키)
SYSTEM_TAG_PREFIXES: dict[str, tuple[str, ...]] = {
    "elasticbeanstalk": ("elasticbeanstalk:",),
    "serverlessrepo": ("serverlessrepo:",),
}
SYSTEM_TAG_KEYS: dict[str, tuple[str, ...]] = {
    "elasticbeanstalk": ("Name",),
}


class KeyValueTags(Mapping[str, "str | None"]):
    """키 -> 값(또는 None) 불변 태그 매핑

    값이 None인 항목은 "키만 존재"를 뜻하며, map()에서는 빈 문자열이 됩니다.
    모든 연산은 새 KeyValueTags를 반환합니다.
    """

    __slots__ = ("_tags",)

    def __init__(self, tags: Mapping[str, str | None] | None = None):
        self._tags: dict[str, str | None] = dict(tags or {})

    # =========================================================================
    # 생성
    # =========================================================================

    @classmethod
    def new(cls, value: Any = None) -> KeyValueTags:
        """여러 입력 형식에서 KeyValueTags 생성

        Args:
            value: None, dict, 키 목록, AWS 태그 목록([{"Key","Value"}] 또는
                [{"key","value"}]), KeyValueTags

        Returns:
            KeyValueTags

        Raises:
            TypeError: 지원하지 않는 입력 형식
        """
        if value is None:
            return cls()

        if isinstance(value, KeyValueTags):
            return cls(value._tags)

        if isinstance(value, Mapping):
            return cls({str(k): _to_str(v) for k, v in value.items()})

        if isinstance(value, (list, tuple, set, frozenset)):
            result: dict[str, str | None] = {}
            for item in value:
                if isinstance(item, str):
                    result[item] = None
                elif isinstance(item, Mapping):
                    key, tag_value = _aws_tag_pair(item)
                    result[key] = tag_value
                else:
                    raise TypeError(f"지원하지 않는 태그 항목 형식: {type(item).__name__}")
            return cls(result)

        raise TypeError(f"지원하지 않는 태그 형식: {type(value).__name__}")

    # =========================================================================
    # Mapping 프로토콜
    # =========================================================================

    def __getitem__(self, key: str) -> str | None:
        return self._tags[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, KeyValueTags):
            return self._tags == other._tags
        if isinstance(other, Mapping):
            return self._tags == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._tags.items()))

    def __repr__(self) -> str:
        return f"KeyValueTags({self.map()!r})"

    # =========================================================================
    # 조회
    # =========================================================================

    def keys(self) -> list[str]:  # type: ignore[override]
        """정렬된 키 목록"""
        return sorted(self._tags)

    def values(self) -> list[str]:  # type: ignore[override]
        """키 순서대로 정렬된 값 목록 (None은 빈 문자열)"""
        return [self._tags[k] or "" for k in self.keys()]

    def map(self) -> dict[str, str]:
        """일반 dict로 변환 (None 값은 빈 문자열)"""
        return {k: ("" if v is None else v) for k, v in self._tags.items()}

    def key_exists(self, key: str) -> bool:
        return key in self._tags

    def key_value(self, key: str) -> str | None:
        return self._tags.get(key)

    def equal(self, other: Any) -> bool:
        """다른 태그 집합과 키/값이 모두 같은지 확인"""
        return self == KeyValueTags.new(other)

    def contains_all(self, target: Any) -> bool:
        """target의 모든 키/값이 포함되어 있는지 확인"""
        target_tags = KeyValueTags.new(target)
        return all(k in self._tags and self._tags[k] == v for k, v in target_tags.items())

    def hash(self) -> str:
        """실행 간에도 동일한 해시 (정렬된 [key, value] JSON 줄의 sha256)"""
        digest = hashlib.sha256()
        for key in self.keys():
            digest.update(json.dumps([key, self._tags[key]]).encode())
            digest.update(b"\n")
        return digest.hexdigest()

    # =========================================================================
    # diff
    # =========================================================================

    def removed(self, new_tags: Any) -> KeyValueTags:
        """새 태그 집합에 없는 기존 항목 (untag 대상)"""
        new = KeyValueTags.new(new_tags)
        return KeyValueTags({k: v for k, v in self._tags.items() if k not in new})

    def updated(self, new_tags: Any) -> KeyValueTags:
        """새로 생기거나 값이 바뀐 항목 (tag 대상)"""
        new = KeyValueTags.new(new_tags)
        return KeyValueTags({k: v for k, v in new.items() if k not in self._tags or self._tags[k] != v})

    def merge(self, other: Any) -> KeyValueTags:
        """병합 (충돌 시 other 값 우선)"""
        merged = dict(self._tags)
        merged.update(KeyValueTags.new(other)._tags)
        return KeyValueTags(merged)

    # =========================================================================
    # 필터
    # =========================================================================

    def ignore(self, keys: Iterable[str]) -> KeyValueTags:
        """지정한 키 제외"""
        excluded = set(keys)
        return KeyValueTags({k: v for k, v in self._tags.items() if k not in excluded})

    def ignore_prefixes(self, prefixes: Iterable[str]) -> KeyValueTags:
        """지정한 접두사로 시작하는 키 제외"""
        prefix_tuple = tuple(prefixes)
        if not prefix_tuple:
            return KeyValueTags(self._tags)
        return KeyValueTags({k: v for k, v in self._tags.items() if not k.startswith(prefix_tuple)})

    def only(self, keys: Iterable[str]) -> KeyValueTags:
        """지정한 키만 남김"""
        included = set(keys)
        return KeyValueTags({k: v for k, v in self._tags.items() if k in included})

    def only_prefixes(self, prefixes: Iterable[str]) -> KeyValueTags:
        """지정한 접두사로 시작하는 키만 남김"""
        prefix_tuple = tuple(prefixes)
        return KeyValueTags({k: v for k, v in self._tags.items() if k.startswith(prefix_tuple)})

    def ignore_aws(self) -> KeyValueTags:
        """aws: 접두사 태그 제외"""
        return self.ignore_prefixes((AWS_TAG_KEY_PREFIX,))

    def ignore_system(self, service: str) -> KeyValueTags:
        """AWS 예약 태그 + 서비스별 예약 태그 제외

        Args:
            service: 서비스 키 (core.names)
        """
        result = self.ignore_aws()
        result = result.ignore_prefixes(SYSTEM_TAG_PREFIXES.get(service, ()))
        return result.ignore(SYSTEM_TAG_KEYS.get(service, ()))

    def ignore_config(self, config: IgnoreConfig | None) -> KeyValueTags:
        """프로바이더 ignore_tags 설정 적용"""
        if config is None:
            return KeyValueTags(self._tags)
        return self.ignore(config.keys).ignore_prefixes(config.key_prefixes)

    def remove_default_config(self, config: DefaultConfig | None) -> KeyValueTags:
        """default_tags와 키/값이 모두 같은 항목 제외 (resource tags 계산용)"""
        if config is None or not config.tags:
            return KeyValueTags(self._tags)
        defaults = config.tags
        return KeyValueTags({k: v for k, v in self._tags.items() if not (k in defaults and defaults[k] == v)})

    def chunks(self, size: int) -> list[KeyValueTags]:
        """키 순서대로 size개씩 나눔 (API 호출당 태그 수 제한용)"""
        if size <= 0:
            raise ValueError(f"chunk 크기는 1 이상이어야 함: {size}")

        keys = self.keys()
        return [KeyValueTags({k: self._tags[k] for k in keys[i : i + size]}) for i in range(0, len(keys), size)]


def _to_str(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _aws_tag_pair(item: Mapping[str, Any]) -> tuple[str, str | None]:
    """{"Key": .., "Value": ..} 또는 {"key": .., "value": ..} 항목 파싱"""
    if "Key" in item:
        return str(item["Key"]), _to_str(item.get("Value"))
    if "key" in item:
        return str(item["key"]), _to_str(item.get("value"))
    raise TypeError(f"태그 항목에 Key/key가 없음: {dict(item)!r}")
