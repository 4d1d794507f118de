"""
tests/acceptance/conftest.py - 실제 AWS 대상 테스트 설정

상위 conftest의 가짜 자격 증명 환경을 쓰지 않고 실행 환경의
AWS_PROFILE / 자격 증명을 그대로 사용합니다.
"""

import pytest


@pytest.fixture(autouse=True)
def setup_test_environment():
    """실제 자격 증명 유지 (상위 픽스처 대체)"""
    yield
