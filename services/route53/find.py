"""
services/route53/find.py - Route 53 리소스 조회/삭제 헬퍼

acceptance 테스트의 존재/삭제 검사와 disappears 시나리오에서 사용합니다.
조회 대상이 없으면 NotFoundError를 발생시킵니다.
"""

from __future__ import annotations

import logging
from typing import Any

from botocore.exceptions import ClientError

from core.exceptions import APICallError, NotFoundError, is_not_found

from .tags import clean_zone_id

logger = logging.getLogger(__name__)

# Route 53이 관리하는 영역 apex 레코드
APEX_MANAGED_TYPES = ("NS", "SOA")

# ChangeResourceRecordSets 호출당 최대 변경 수
MAX_CHANGES_PER_BATCH = 1000


def normalize_record_name(name: str) -> str:
    """소문자 + 마지막 점 제거 (Route 53은 대소문자 구분 없음)"""
    return name.lower().rstrip(".")


def find_hosted_zone_by_id(conn: Any, zone_id: str) -> dict[str, Any]:
    """호스팅 영역 조회

    Returns:
        get_hosted_zone 응답의 HostedZone

    Raises:
        NotFoundError: 호스팅 영역 없음
        APICallError: 그 외 API 오류
    """
    zone_id = clean_zone_id(zone_id)
    try:
        output = conn.get_hosted_zone(Id=zone_id)
    except ClientError as e:
        if is_not_found(e):
            raise NotFoundError("Route 53 Hosted Zone", zone_id, cause=e) from e
        raise APICallError.from_client_error("route53", "get_hosted_zone", e) from e

    return output["HostedZone"]


def list_resource_record_sets(conn: Any, zone_id: str) -> list[dict[str, Any]]:
    """호스팅 영역의 모든 레코드 세트 (페이지 전체)"""
    zone_id = clean_zone_id(zone_id)
    record_sets: list[dict[str, Any]] = []

    paginator = conn.get_paginator("list_resource_record_sets")
    try:
        for page in paginator.paginate(HostedZoneId=zone_id):
            record_sets.extend(page.get("ResourceRecordSets", []))
    except ClientError as e:
        if is_not_found(e):
            raise NotFoundError("Route 53 Hosted Zone", zone_id, cause=e) from e
        raise APICallError.from_client_error("route53", "list_resource_record_sets", e) from e

    return record_sets


def is_apex_managed(record_set: dict[str, Any], zone_name: str) -> bool:
    """영역 apex의 NS/SOA 레코드인지 확인"""
    return record_set.get("Type") in APEX_MANAGED_TYPES and normalize_record_name(
        record_set.get("Name", "")
    ) == normalize_record_name(zone_name)


def find_resource_record_sets_for_hosted_zone(conn: Any, zone_id: str) -> list[dict[str, Any]]:
    """사용자가 관리하는 레코드 세트 (apex NS/SOA 제외)

    Raises:
        NotFoundError: 호스팅 영역 없음
    """
    zone = find_hosted_zone_by_id(conn, zone_id)
    zone_name = zone.get("Name", "")

    return [rs for rs in list_resource_record_sets(conn, zone_id) if not is_apex_managed(rs, zone_name)]


def delete_hosted_zone(conn: Any, zone_id: str, force: bool = True) -> None:
    """호스팅 영역 삭제

    force=True이면 apex NS/SOA를 제외한 레코드를 먼저 삭제합니다.
    이미 없으면 아무 것도 하지 않습니다.
    """
    zone_id = clean_zone_id(zone_id)

    try:
        if force:
            record_sets = find_resource_record_sets_for_hosted_zone(conn, zone_id)
            changes = [{"Action": "DELETE", "ResourceRecordSet": rs} for rs in record_sets]
            for i in range(0, len(changes), MAX_CHANGES_PER_BATCH):
                conn.change_resource_record_sets(
                    HostedZoneId=zone_id,
                    ChangeBatch={"Changes": changes[i : i + MAX_CHANGES_PER_BATCH]},
                )
            if changes:
                logger.info(f"호스팅 영역 {zone_id}: 레코드 {len(changes)}개 삭제")

        conn.delete_hosted_zone(Id=zone_id)
    except NotFoundError:
        logger.debug(f"호스팅 영역 이미 삭제됨: {zone_id}")
        return
    except ClientError as e:
        if is_not_found(e):
            logger.debug(f"호스팅 영역 이미 삭제됨: {zone_id}")
            return
        raise APICallError.from_client_error("route53", "delete_hosted_zone", e) from e

    logger.info(f"호스팅 영역 삭제: {zone_id}")
