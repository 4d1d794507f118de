"""
services/route53/tags.py - Route 53 태그 glue

Route 53은 태그 API 형태가 다른 서비스와 다릅니다.
- list_tags_for_resource(ResourceType, ResourceId) -> {"ResourceTagSet": {"Tags": [{"Key", "Value"}]}}
- change_tags_for_resource(ResourceType, ResourceId, AddTags, RemoveTagKeys)
  추가/제거를 한 번의 호출로 처리하며, 호출당 각각 최대 10개입니다.

identifier 형식:
- "Z123..." / "/hostedzone/Z123..." / "hostedzone/Z123..." -> hostedzone
- "healthcheck/<id>" -> healthcheck
"""

from __future__ import annotations

import itertools
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core import names
from core.exceptions import TagListError, TagUpdateError
from core.tags import KeyValueTags, ServicePackage, ServiceTagger, TagApi, TagFormat
from core.tags.context import from_context

logger = logging.getLogger(__name__)

RESOURCE_TYPE_HOSTED_ZONE = "hostedzone"
RESOURCE_TYPE_HEALTH_CHECK = "healthcheck"
RESOURCE_TYPES = (RESOURCE_TYPE_HOSTED_ZONE, RESOURCE_TYPE_HEALTH_CHECK)

# ChangeTagsForResource 호출당 AddTags / RemoveTagKeys 최대 개수
MAX_TAGS_PER_CHANGE = 10

# 형식 변환/컨텍스트 입출력만 공통 엔진 사용 (호출 형태는 아래에서 직접 처리)
TAG_API = TagApi(
    service=names.ROUTE53,
    list_output_key="Tags",
    identifier_param="ResourceId",
    tags_param="AddTags",
    tag_keys_param="RemoveTagKeys",
    tag_format=TagFormat.LIST_UPPER,
    max_tags_per_call=MAX_TAGS_PER_CHANGE,
)

_tagger = ServiceTagger(TAG_API)


def clean_zone_id(zone_id: str) -> str:
    """/hostedzone/ 접두사 제거"""
    for prefix in ("/hostedzone/", "hostedzone/"):
        if zone_id.startswith(prefix):
            return zone_id[len(prefix) :]
    return zone_id


def parse_identifier(identifier: str) -> tuple[str, str]:
    """식별자를 (ResourceType, ResourceId)로 분리"""
    stripped = identifier.lstrip("/")
    resource_type, sep, resource_id = stripped.partition("/")
    if sep and resource_type in RESOURCE_TYPES:
        return resource_type, resource_id
    return RESOURCE_TYPE_HOSTED_ZONE, clean_zone_id(identifier)


def list_tags(conn: Any, identifier: str, resource_type: str | None = None) -> KeyValueTags:
    """Route 53 리소스 태그 조회

    Args:
        conn: route53 boto3 client
        identifier: 호스팅 영역/헬스 체크 ID
        resource_type: None이면 identifier에서 판단

    Raises:
        TagListError: API 호출 실패
    """
    parsed_type, resource_id = parse_identifier(identifier)

    try:
        output = conn.list_tags_for_resource(ResourceType=resource_type or parsed_type, ResourceId=resource_id)
    except (ClientError, BotoCoreError) as e:
        raise TagListError(identifier, cause=e) from e

    return key_value_tags(output.get("ResourceTagSet", {}).get("Tags"))


def update_tags(
    conn: Any,
    identifier: str,
    old_tags: Any,
    new_tags: Any,
    resource_type: str | None = None,
) -> None:
    """Route 53 리소스 태그 갱신

    제거/추가 키를 MAX_TAGS_PER_CHANGE개씩 짝지어 change_tags_for_resource를 호출합니다.

    Raises:
        TagUpdateError: API 호출 실패
    """
    parsed_type, resource_id = parse_identifier(identifier)
    old = KeyValueTags.new(old_tags)
    new = KeyValueTags.new(new_tags)

    removed = old.removed(new).ignore_system(names.ROUTE53)
    updated = old.updated(new).ignore_system(names.ROUTE53)
    if not removed and not updated:
        return

    removed_chunks = removed.chunks(MAX_TAGS_PER_CHANGE)
    updated_chunks = updated.chunks(MAX_TAGS_PER_CHANGE)

    for remove_chunk, add_chunk in itertools.zip_longest(removed_chunks, updated_chunks):
        params: dict[str, Any] = {
            "ResourceType": resource_type or parsed_type,
            "ResourceId": resource_id,
        }
        if remove_chunk:
            params["RemoveTagKeys"] = remove_chunk.keys()
        if add_chunk:
            params["AddTags"] = tags(add_chunk)

        try:
            conn.change_tags_for_resource(**params)
        except (ClientError, BotoCoreError) as e:
            raise TagUpdateError("tagging", identifier, cause=e) from e

    logger.info(f"route53 태그 갱신 {identifier}: 제거 {removed.keys()}, 적용 {updated.keys()}")


def tags(kv: Any) -> list[dict[str, str]]:
    return _tagger.tags(kv)


def key_value_tags(service_tags: list[dict[str, str]] | None) -> KeyValueTags:
    return _tagger.key_value_tags(service_tags)


def get_tags_in() -> list[dict[str, str]] | None:
    return _tagger.get_tags_in()


def set_tags_out(service_tags: list[dict[str, str]] | None) -> None:
    _tagger.set_tags_out(service_tags)


class Route53ServicePackage(ServicePackage):
    name = names.ROUTE53
    tagger = _tagger

    def list_tags(self, meta: Any, identifier: str) -> None:
        tags_out = list_tags(self.conn(meta), identifier)

        ctx = from_context()
        if ctx is not None:
            ctx.tags_out = tags_out

    def update_tags(self, meta: Any, identifier: str, old_tags: Any, new_tags: Any) -> None:
        update_tags(self.conn(meta), identifier, old_tags, new_tags)
