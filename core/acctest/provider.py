"""
core/acctest/provider.py - acceptance 테스트 프로바이더 헬퍼

- pre_check: 자격 증명 확인
- error_check: 리전/파티션에서 지원하지 않는 서비스면 skip
- provider_meta: 검사 함수가 쓰는 AWSClient (프로세스당 하나)
- check_resource_disappears: 테스트 밖에서 리소스를 삭제하여 drift 재현
- run_serial_tests: 같은 리소스를 공유하는 테스트를 순서대로 실행
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from functools import lru_cache
from typing import Any

import boto3
import pytest
from botocore.exceptions import BotoCoreError

from core.config import get_default_profile, get_default_region
from core.conns import AWSClient
from core.exceptions import CheckError, get_error_code

from .check import CheckFunc
from .state import State

logger = logging.getLogger(__name__)

# 서비스 미지원 리전/계정에서 발생하는 오류
_UNSUPPORTED_ERROR_CODES = frozenset(
    {
        "UnsupportedOperation",
        "UnrecognizedClientException",
        "InvalidAction",
        "SubscriptionRequiredException",
        "OptInRequired",
    }
)
_UNSUPPORTED_PATTERNS = (
    re.compile(r"is not supported in this region", re.IGNORECASE),
    re.compile(r"Could not connect to the endpoint URL", re.IGNORECASE),
    re.compile(r"UnsupportedOperation", re.IGNORECASE),
    re.compile(r"no such host", re.IGNORECASE),
)


def pre_check() -> None:
    """AWS 자격 증명이 설정되어 있는지 확인 (없으면 테스트 실패)"""
    try:
        session = boto3.Session(profile_name=get_default_profile())
        credentials = session.get_credentials()
    except BotoCoreError as e:
        pytest.fail(f"AWS 자격 증명 조회 실패: {e}")

    if credentials is None:
        pytest.fail("AWS 자격 증명이 필요함 (AWS_PROFILE 또는 AWS_ACCESS_KEY_ID)")


def is_unsupported_error(error: Exception) -> bool:
    """서비스 미지원으로 인한 오류인지 확인 (원인 체인 포함)"""
    current: BaseException | None = error
    while current is not None:
        if isinstance(current, Exception) and get_error_code(current) in _UNSUPPORTED_ERROR_CODES:
            return True
        message = str(current)
        if any(pattern.search(message) for pattern in _UNSUPPORTED_PATTERNS):
            return True
        current = current.__cause__
    return False


def error_check(service_id: str) -> Callable[[Exception], None]:
    """TestCase.error_check 생성

    Args:
        service_id: AWS 서비스 ID (core.names.*_SERVICE_ID)
    """

    def _error_check(error: Exception) -> None:
        if is_unsupported_error(error):
            pytest.skip(f"{service_id} 미지원 환경: {error}")

    return _error_check


@lru_cache(maxsize=1)
def provider_meta() -> AWSClient:
    """검사 함수용 AWSClient (프로세스당 하나)"""
    meta = AWSClient.from_profile(region=get_default_region())
    logger.debug(f"acceptance provider meta: {meta!r}")
    return meta


def check_resource_disappears(
    address: str,
    delete_func: Callable[[AWSClient, str], Any],
    meta: AWSClient | None = None,
) -> CheckFunc:
    """상태의 리소스를 SDK로 직접 삭제하는 검사 함수

    Args:
        address: 리소스 주소 (예: "aws_route53_zone.test")
        delete_func: (meta, 리소스 ID)를 받아 리소스 삭제
        meta: AWSClient (None이면 provider_meta())
    """

    def _check(state: State) -> None:
        resource = state.get(address)
        if resource is None:
            raise CheckError(f"Not found: {address} in root module")
        if not resource.primary_id:
            raise CheckError(f"No ID is set: {address}")

        logger.info(f"리소스 외부 삭제: {address} ({resource.primary_id})")
        delete_func(meta or provider_meta(), resource.primary_id)

    return _check


def run_serial_tests(tests: Mapping[str, Callable[[], None]]) -> None:
    """이름 순서대로 테스트 함수를 하나씩 실행

    Args:
        tests: 테스트 이름 -> 테스트 함수 (삽입 순서 유지)
    """
    for name, test in tests.items():
        logger.info(f"serial 테스트 실행: {name}")
        test()
