"""
core/tags/context.py - 리소스 작업 단위 태그 입출력 채널

리소스 작업 하나(생성/조회/수정)가 진행되는 동안 원하는 태그(tags_in)와
AWS에서 읽은 태그(tags_out)를 ContextVar에 담아 전달합니다.
스레드/코루틴마다 독립적이므로 병렬 리소스 작업끼리 섞이지 않습니다.

Example:
    from core.tags.context import tags_context

    with tags_context(tags_in={"env": "prod"}) as ctx:
        codeartifact.ServicePackage().list_tags(meta, arn)
        print(ctx.tags_out)
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

from .config import DefaultConfig, IgnoreConfig
from .key_value_tags import KeyValueTags

_in_context: ContextVar[InContext | None] = ContextVar("tags_in_context", default=None)


@dataclass
class InContext:
    """작업 단위 태그 상태

    Attributes:
        default_config: 프로바이더 default_tags
        ignore_config: 프로바이더 ignore_tags
        tags_in: 설정에서 요청한 리소스 태그 (None이면 미지정)
        tags_out: AWS에서 읽은 태그 (None이면 아직 조회 전)
    """

    default_config: DefaultConfig | None = None
    ignore_config: IgnoreConfig | None = None
    tags_in: KeyValueTags | None = None
    tags_out: KeyValueTags | None = None

    def tags_all(self) -> KeyValueTags:
        """AWS에 적용할 전체 태그 (default 병합 후 ignore 적용)"""
        tags = self.tags_in or KeyValueTags()
        if self.default_config is not None:
            tags = self.default_config.merge_tags(tags)
        return tags.ignore_config(self.ignore_config)

    def tags_for_state(self) -> KeyValueTags:
        """상태에 기록할 리소스 태그 (aws: 시스템 태그, ignore, default 제외)"""
        tags = KeyValueTags.new(self.tags_out)
        return tags.ignore_aws().ignore_config(self.ignore_config).remove_default_config(self.default_config)


def from_context() -> InContext | None:
    """현재 활성 InContext (없으면 None)"""
    return _in_context.get()


@contextmanager
def tags_context(
    tags_in: Any = None,
    default_config: DefaultConfig | None = None,
    ignore_config: IgnoreConfig | None = None,
) -> Generator[InContext, None, None]:
    """새 InContext를 설치하고 블록 종료 시 이전 값으로 복원

    Args:
        tags_in: 요청 태그 (None이면 tags_in도 None)
        default_config: 프로바이더 default_tags
        ignore_config: 프로바이더 ignore_tags
    """
    ctx = InContext(
        default_config=default_config,
        ignore_config=ignore_config,
        tags_in=None if tags_in is None else KeyValueTags.new(tags_in),
    )
    token = _in_context.set(ctx)
    try:
        yield ctx
    finally:
        _in_context.reset(token)
