"""
services/codeartifact/tags.py - CodeArtifact 태그 glue

SDK 태그 형식: [{"key": .., "value": ..}]
- list_tags_for_resource(resourceArn) -> {"tags": [...]}
- tag_resource(resourceArn, tags)
- untag_resource(resourceArn, tagKeys)
"""

from __future__ import annotations

from typing import Any

from core import names
from core.tags import KeyValueTags, ServicePackage, ServiceTagger, TagApi, TagFormat

TAG_API = TagApi(
    service=names.CODE_ARTIFACT,
    list_operation="list_tags_for_resource",
    list_output_key="tags",
    identifier_param="resourceArn",
    tag_format=TagFormat.LIST_LOWER,
)

_tagger = ServiceTagger(TAG_API)


def list_tags(conn: Any, identifier: str) -> KeyValueTags:
    """CodeArtifact 리소스(도메인/리포지토리) 태그 조회

    identifier는 리소스 ARN입니다.
    """
    return _tagger.list_tags(conn, identifier)


def update_tags(conn: Any, identifier: str, old_tags: Any, new_tags: Any) -> None:
    """CodeArtifact 리소스 태그 갱신"""
    _tagger.update_tags(conn, identifier, old_tags, new_tags)


def tags(kv: Any) -> list[dict[str, str]]:
    """KeyValueTags -> CodeArtifact Tag 목록"""
    return _tagger.tags(kv)


def key_value_tags(service_tags: list[dict[str, str]] | None) -> KeyValueTags:
    """CodeArtifact Tag 목록 -> KeyValueTags"""
    return _tagger.key_value_tags(service_tags)


def get_tags_in() -> list[dict[str, str]] | None:
    """컨텍스트 요청 태그 (없으면 None)"""
    return _tagger.get_tags_in()


def set_tags_out(service_tags: list[dict[str, str]] | None) -> None:
    _tagger.set_tags_out(service_tags)


class CodeArtifactServicePackage(ServicePackage):
    name = names.CODE_ARTIFACT
    tagger = _tagger
