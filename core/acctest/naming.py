"""
core/acctest/naming.py - 테스트 리소스 이름/도메인 생성

Example:
    name = random_with_prefix(RESOURCE_PREFIX)      # "tf-acc-test-4829102938473"
    zone = random_domain()                          # tf-acc-test-xxxx.com
    record = zone.random_subdomain()                # tf-acc-test-yyyy.tf-acc-test-xxxx.com
"""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass

from .consts import RANDOM_DOMAIN_TLD, RESOURCE_PREFIX

_ALPHANUMERIC = string.ascii_lowercase + string.digits


def random_string(length: int, charset: str = _ALPHANUMERIC) -> str:
    """charset 문자로 구성된 랜덤 문자열"""
    return "".join(secrets.choice(charset) for _ in range(length))


def random_int() -> int:
    return secrets.randbelow(10**18)


def random_with_prefix(prefix: str = RESOURCE_PREFIX) -> str:
    """<prefix>-<랜덤 숫자> 형식 이름"""
    return f"{prefix}-{random_int()}"


@dataclass(frozen=True)
class Domain:
    """테스트용 도메인 이름"""

    name: str

    def random_subdomain(self) -> Domain:
        return Domain(f"{random_with_prefix()}.{self.name}")

    def __str__(self) -> str:
        return self.name


def random_domain(tld: str = RANDOM_DOMAIN_TLD) -> Domain:
    return Domain(f"{RESOURCE_PREFIX}-{random_string(10)}.{tld}")
