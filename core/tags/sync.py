"""
core/tags/sync.py - 서비스별 태그 조회/갱신 공통 엔진

서비스마다 다른 것은 SDK 호출 형태(작업 이름, 파라미터 이름, 태그 형식)뿐이므로
TagApi로 형태를 선언하고 ServiceTagger가 공통 로직을 수행합니다.

주요 구성 요소:
- TagFormat: SDK 태그 형식
- TagApi: 서비스 하나의 태그 API 형태
- ServiceTagger: list_tags / update_tags / 형식 변환 / 컨텍스트 입출력
- ServicePackage: 호스트가 호출하는 ListTags / UpdateTags 훅

Example:
    TAG_API = TagApi(service="codeartifact", tag_format=TagFormat.LIST_LOWER)
    tagger = ServiceTagger(TAG_API)

    tags = tagger.list_tags(conn, arn)
    tagger.update_tags(conn, arn, {"a": "1"}, {"a": "2"})
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.exceptions import TagListError, TagUpdateError

from .context import from_context
from .key_value_tags import KeyValueTags

logger = logging.getLogger(__name__)


class TagFormat(Enum):
    """SDK 태그 형식"""

    LIST_LOWER = "list_lower"  # [{"key": .., "value": ..}]
    LIST_UPPER = "list_upper"  # [{"Key": .., "Value": ..}]
    MAP = "map"  # {key: value}


@dataclass(frozen=True)
class TagApi:
    """서비스 하나의 태그 API 호출 형태

    Attributes:
        service: 서비스 키 (core.names, IgnoreSystem에도 사용)
        list_operation: 태그 조회 작업 (boto3 메서드 이름)
        list_output_key: 조회 응답에서 태그가 담긴 키
        identifier_param: 리소스 식별자 파라미터 이름
        tag_operation: 태그 추가 작업
        tags_param: 태그 추가 시 태그 파라미터 이름
        untag_operation: 태그 제거 작업
        tag_keys_param: 태그 제거 시 키 목록 파라미터 이름
        tag_format: SDK 태그 형식
        next_token_key: 페이지네이션 토큰 키 (None이면 단일 호출)
        max_tags_per_call: 호출당 최대 태그 수 (None이면 제한 없음)
    """

    service: str
    list_operation: str = "list_tags_for_resource"
    list_output_key: str = "tags"
    identifier_param: str = "resourceArn"
    tag_operation: str = "tag_resource"
    tags_param: str = "tags"
    untag_operation: str = "untag_resource"
    tag_keys_param: str = "tagKeys"
    tag_format: TagFormat = TagFormat.LIST_LOWER
    next_token_key: str | None = None
    max_tags_per_call: int | None = None


class ServiceTagger:
    """TagApi 형태에 맞춰 태그를 조회/갱신

    identifier는 보통 ARN이지만 서비스에 따라 다른 식별자일 수 있습니다.
    """

    def __init__(self, api: TagApi):
        self.api = api

    # =========================================================================
    # 형식 변환
    # =========================================================================

    def tags(self, tags: Any) -> Any:
        """KeyValueTags -> 서비스 SDK 태그 형식"""
        kv = KeyValueTags.new(tags)
        fmt = self.api.tag_format

        if fmt == TagFormat.MAP:
            return kv.map()
        if fmt == TagFormat.LIST_UPPER:
            return [{"Key": k, "Value": v} for k, v in kv.map().items()]
        return [{"key": k, "value": v} for k, v in kv.map().items()]

    def key_value_tags(self, tags: Any) -> KeyValueTags:
        """서비스 SDK 태그 형식 -> KeyValueTags"""
        return KeyValueTags.new(tags)

    # =========================================================================
    # 컨텍스트 입출력
    # =========================================================================

    def get_tags_in(self) -> Any:
        """컨텍스트의 요청 태그를 SDK 형식으로 반환 (없거나 비어있으면 None)"""
        ctx = from_context()
        if ctx is None:
            return None

        tags = ctx.tags_all()
        if not tags:
            return None
        return self.tags(tags)

    def set_tags_out(self, tags: Any) -> None:
        """SDK 형식 태그를 컨텍스트의 tags_out에 기록 (컨텍스트 없으면 무시)"""
        ctx = from_context()
        if ctx is not None:
            ctx.tags_out = self.key_value_tags(tags)

    # =========================================================================
    # API 호출
    # =========================================================================

    def list_tags(self, conn: Any, identifier: str) -> KeyValueTags:
        """리소스 태그 조회

        Args:
            conn: boto3 client
            identifier: 리소스 식별자 (보통 ARN)

        Returns:
            KeyValueTags

        Raises:
            TagListError: API 호출 실패
        """
        api = self.api
        operation = getattr(conn, api.list_operation)
        params: dict[str, Any] = {api.identifier_param: identifier}
        result = KeyValueTags()

        while True:
            try:
                output = operation(**params)
            except (ClientError, BotoCoreError) as e:
                raise TagListError(identifier, cause=e) from e

            result = result.merge(self.key_value_tags(output.get(api.list_output_key)))

            token = output.get(api.next_token_key) if api.next_token_key else None
            if not token:
                break
            params[api.next_token_key] = token  # type: ignore[index]

        logger.debug(f"{api.service} 태그 조회 {identifier}: {len(result)}개")
        return result

    def update_tags(self, conn: Any, identifier: str, old_tags: Any, new_tags: Any) -> None:
        """이전/새 태그 집합의 차이만큼 untag -> tag 호출

        시스템 태그(aws: 등)는 diff에서 제외됩니다. 실패 시 즉시 중단합니다.

        Raises:
            TagUpdateError: untag/tag 호출 실패
        """
        api = self.api
        old = KeyValueTags.new(old_tags)
        new = KeyValueTags.new(new_tags)

        removed = old.removed(new).ignore_system(api.service)
        if removed:
            untag = getattr(conn, api.untag_operation)
            for chunk in self._chunks(removed):
                try:
                    untag(**{api.identifier_param: identifier, api.tag_keys_param: chunk.keys()})
                except (ClientError, BotoCoreError) as e:
                    raise TagUpdateError("untagging", identifier, cause=e) from e
            logger.info(f"{api.service} 태그 제거 {identifier}: {removed.keys()}")

        updated = old.updated(new).ignore_system(api.service)
        if updated:
            tag = getattr(conn, api.tag_operation)
            for chunk in self._chunks(updated):
                try:
                    tag(**{api.identifier_param: identifier, api.tags_param: self.tags(chunk)})
                except (ClientError, BotoCoreError) as e:
                    raise TagUpdateError("tagging", identifier, cause=e) from e
            logger.info(f"{api.service} 태그 적용 {identifier}: {updated.keys()}")

    def _chunks(self, tags: KeyValueTags) -> list[KeyValueTags]:
        if self.api.max_tags_per_call:
            return tags.chunks(self.api.max_tags_per_call)
        return [tags]


class ServicePackage:
    """서비스 패키지 태그 훅

    호스트(리소스 작업 실행기)는 meta(AWSClient)와 식별자만 넘기고,
    조회 결과는 컨텍스트의 tags_out으로 전달받습니다.
    """

    name: str = ""
    tagger: ServiceTagger

    def conn(self, meta: Any) -> Any:
        """meta(AWSClient)에서 이 서비스의 boto3 client 조회"""
        return meta.client(self.name)

    def list_tags(self, meta: Any, identifier: str) -> None:
        """태그를 조회하여 컨텍스트의 tags_out에 기록"""
        tags = self.tagger.list_tags(self.conn(meta), identifier)

        ctx = from_context()
        if ctx is not None:
            ctx.tags_out = tags

    def update_tags(self, meta: Any, identifier: str, old_tags: Any, new_tags: Any) -> None:
        self.tagger.update_tags(self.conn(meta), identifier, old_tags, new_tags)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
