"""
services/apigateway/tags.py - API Gateway (REST) 태그 glue

SDK 태그 형식: {key: value}
- get_tags(resourceArn) -> {"tags": {...}}
- tag_resource(resourceArn, tags)
- untag_resource(resourceArn, tagKeys)

identifier는 arn:aws:apigateway:<region>::/vpclinks/<id> 형식의 ARN입니다.
"""

from __future__ import annotations

from typing import Any

from core import names
from core.tags import KeyValueTags, ServicePackage, ServiceTagger, TagApi, TagFormat

TAG_API = TagApi(
    service=names.API_GATEWAY,
    list_operation="get_tags",
    list_output_key="tags",
    identifier_param="resourceArn",
    tag_format=TagFormat.MAP,
)

_tagger = ServiceTagger(TAG_API)


def list_tags(conn: Any, identifier: str) -> KeyValueTags:
    return _tagger.list_tags(conn, identifier)


def update_tags(conn: Any, identifier: str, old_tags: Any, new_tags: Any) -> None:
    _tagger.update_tags(conn, identifier, old_tags, new_tags)


def tags(kv: Any) -> dict[str, str]:
    return _tagger.tags(kv)


def key_value_tags(service_tags: dict[str, str] | None) -> KeyValueTags:
    return _tagger.key_value_tags(service_tags)


def get_tags_in() -> dict[str, str] | None:
    return _tagger.get_tags_in()


def set_tags_out(service_tags: dict[str, str] | None) -> None:
    _tagger.set_tags_out(service_tags)


def vpc_link_arn(region: str, vpc_link_id: str) -> str:
    """VPC Link ARN (API Gateway 리소스 ARN에는 계정 ID가 없음)"""
    return f"arn:aws:apigateway:{region}::/vpclinks/{vpc_link_id}"


class APIGatewayServicePackage(ServicePackage):
    name = names.API_GATEWAY
    tagger = _tagger
