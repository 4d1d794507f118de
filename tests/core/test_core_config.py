"""
tests/test_core_config.py - core/config.py 테스트
"""

import os
from unittest.mock import patch

import pytest

from core.config import (
    LogConfig,
    get_default_profile,
    get_default_region,
    get_tag_config_path,
    get_version,
    is_acceptance_enabled,
    settings,
)


class TestSettings:
    """Settings 데이터클래스 테스트"""

    def test_settings_is_frozen(self):
        """설정이 불변인지 확인"""
        with pytest.raises(Exception):  # FrozenInstanceError
            settings.DEFAULT_REGION = "us-east-1"

    def test_default_values(self):
        """기본값 확인"""
        assert settings.DEFAULT_REGION == "ap-northeast-2"
        assert settings.API_TIMEOUT == 30
        assert settings.API_RETRY_COUNT == 5
        assert settings.API_RETRY_MODE == "adaptive"

    def test_acceptance_settings(self):
        """acceptance 설정 확인"""
        assert settings.ACC_ENV == "TF_ACC"
        assert settings.ACC_TERRAFORM_BINARY == "terraform"
        assert settings.ACC_COMMAND_TIMEOUT_SECONDS > 0

    def test_version_format(self):
        """버전은 x.y.z 형식"""
        parts = get_version().split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


class TestEnvironmentHelpers:
    """환경변수 헬퍼 함수 테스트"""

    def test_get_default_profile_from_aws_profile(self):
        """AWS_PROFILE 환경변수에서 프로파일 가져오기"""
        with patch.dict(os.environ, {"AWS_PROFILE": "test-profile"}, clear=False):
            assert get_default_profile() == "test-profile"

    def test_get_default_profile_from_aws_default_profile(self):
        """AWS_DEFAULT_PROFILE 환경변수에서 프로파일 가져오기"""
        with patch.dict(os.environ, {"AWS_DEFAULT_PROFILE": "default-profile"}, clear=True):
            assert get_default_profile() == "default-profile"

    def test_get_default_profile_none(self):
        """프로파일 환경변수 없을 때"""
        with patch.dict(os.environ, {}, clear=True):
            assert get_default_profile() is None

    def test_get_default_region_from_aws_region(self):
        """AWS_REGION 환경변수가 AWS_DEFAULT_REGION보다 우선"""
        with patch.dict(os.environ, {"AWS_REGION": "us-west-2", "AWS_DEFAULT_REGION": "eu-west-1"}):
            assert get_default_region() == "us-west-2"

    def test_get_default_region_fallback(self):
        """리전 환경변수 없을 때 기본값"""
        with patch.dict(os.environ, {}, clear=True):
            assert get_default_region() == settings.DEFAULT_REGION

    def test_get_tag_config_path_default(self):
        """AA_TAG_CONFIG 없으면 홈 디렉토리 기본 경로"""
        with patch.dict(os.environ, {}, clear=True):
            path = get_tag_config_path()
        assert path.name == "tags.yaml"
        assert "~" not in str(path)

    def test_get_tag_config_path_env(self, tmp_path):
        """AA_TAG_CONFIG 환경변수 우선"""
        target = tmp_path / "custom.yaml"
        with patch.dict(os.environ, {"AA_TAG_CONFIG": str(target)}):
            assert get_tag_config_path() == target

    def test_is_acceptance_enabled(self):
        """TF_ACC 값이 비어있지 않으면 활성"""
        with patch.dict(os.environ, {"TF_ACC": "1"}):
            assert is_acceptance_enabled() is True
        with patch.dict(os.environ, {"TF_ACC": ""}):
            assert is_acceptance_enabled() is False
        with patch.dict(os.environ, {}, clear=True):
            assert is_acceptance_enabled() is False


class TestLogConfig:
    """LogConfig 테스트"""

    def test_default_values(self):
        """기본값 확인"""
        config = LogConfig()
        assert config.level == "WARNING"
        assert "%(asctime)s" in config.format
        assert config.date_format == "%Y-%m-%d %H:%M:%S"

    def test_from_env(self):
        """환경변수에서 로드 (레벨은 대문자로 정규화)"""
        with patch.dict(os.environ, {"LOG_LEVEL": "debug", "LOG_FORMAT": "%(message)s"}, clear=False):
            config = LogConfig.from_env()
            assert config.level == "DEBUG"
            assert config.format == "%(message)s"
