"""
services/appmesh/tags.py - App Mesh 태그 glue

SDK 태그 형식: [{"key": .., "value": ..}]
- list_tags_for_resource(resourceArn, nextToken) -> {"tags": [...], "nextToken": ..}
- tag_resource(resourceArn, tags)
- untag_resource(resourceArn, tagKeys)
"""

from __future__ import annotations

from typing import Any

from core import names
from core.tags import KeyValueTags, ServicePackage, ServiceTagger, TagApi, TagFormat

TAG_API = TagApi(
    service=names.APP_MESH,
    list_operation="list_tags_for_resource",
    list_output_key="tags",
    identifier_param="resourceArn",
    tag_format=TagFormat.LIST_LOWER,
    next_token_key="nextToken",
)

_tagger = ServiceTagger(TAG_API)


def list_tags(conn: Any, identifier: str) -> KeyValueTags:
    """App Mesh 리소스 태그 조회 (nextToken 페이지 전체)"""
    return _tagger.list_tags(conn, identifier)


def update_tags(conn: Any, identifier: str, old_tags: Any, new_tags: Any) -> None:
    _tagger.update_tags(conn, identifier, old_tags, new_tags)


def tags(kv: Any) -> list[dict[str, str]]:
    return _tagger.tags(kv)


def key_value_tags(service_tags: list[dict[str, str]] | None) -> KeyValueTags:
    return _tagger.key_value_tags(service_tags)


def get_tags_in() -> list[dict[str, str]] | None:
    return _tagger.get_tags_in()


def set_tags_out(service_tags: list[dict[str, str]] | None) -> None:
    _tagger.set_tags_out(service_tags)


class AppMeshServicePackage(ServicePackage):
    name = names.APP_MESH
    tagger = _tagger
