"""
core/config.py - 중앙 설정 관리

환경변수와 기본값을 한 곳에서 관리합니다.

Usage:
    from core.config import settings, get_default_region

    region = get_default_region()
    retries = settings.API_RETRY_COUNT
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

VERSION = "0.3.1"


@dataclass(frozen=True)
class Settings:
    """애플리케이션 전역 설정 (불변)"""

    DEFAULT_REGION: str = "ap-northeast-2"

    # botocore retry / timeout
    API_RETRY_COUNT: int = 5
    API_RETRY_MODE: str = "adaptive"
    API_CONNECT_TIMEOUT: int = 10
    API_TIMEOUT: int = 30
    API_MAX_POOL_CONNECTIONS: int = 25

    # 프로바이더 태그 설정 파일 (default_tags / ignore_tags)
    TAG_CONFIG_FILE: str = "~/.aa/tags.yaml"
    TAG_CONFIG_ENV: str = "AA_TAG_CONFIG"

    # acceptance 테스트
    ACC_ENV: str = "TF_ACC"
    ACC_TERRAFORM_BINARY: str = "terraform"
    ACC_COMMAND_TIMEOUT_SECONDS: int = 1800


settings = Settings()


@dataclass
class LogConfig:
    """로깅 설정"""

    level: str = "WARNING"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls) -> LogConfig:
        """LOG_LEVEL / LOG_FORMAT 환경변수에서 로드"""
        default = cls()
        return cls(
            level=os.environ.get("LOG_LEVEL", default.level).upper(),
            format=os.environ.get("LOG_FORMAT", default.format),
            date_format=default.date_format,
        )


def get_version() -> str:
    """버전 문자열 반환"""
    return VERSION


def get_default_profile() -> str | None:
    """AWS_PROFILE > AWS_DEFAULT_PROFILE 순서로 프로파일 조회"""
    return os.environ.get("AWS_PROFILE") or os.environ.get("AWS_DEFAULT_PROFILE")


def get_default_region() -> str:
    """AWS_REGION > AWS_DEFAULT_REGION > 기본값 순서로 리전 조회"""
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION") or settings.DEFAULT_REGION


def get_tag_config_path() -> Path:
    """프로바이더 태그 설정 파일 경로 (AA_TAG_CONFIG 우선)"""
    raw = os.environ.get(settings.TAG_CONFIG_ENV) or settings.TAG_CONFIG_FILE
    return Path(raw).expanduser()


def is_acceptance_enabled() -> bool:
    """TF_ACC가 설정되어 있으면 True (Terraform 관례: 값이 비어있지 않으면 활성)"""
    return bool(os.environ.get(settings.ACC_ENV))
