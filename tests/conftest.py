"""
tests/conftest.py - pytest 공통 픽스처

AWS API 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(mock_meta, moto_route53):
        # mock_meta: 서비스 키별 MagicMock client를 돌려주는 AWSClient 대용
        # moto_route53: moto로 모킹한 route53 client
        pass
"""

import sys
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock, patch

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """테스트 환경 설정"""
    # 테스트용 환경 변수 설정
    monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-northeast-2")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AA_TAG_CONFIG", raising=False)

    yield


# =============================================================================
# AWS 모킹 픽스처
# =============================================================================


@pytest.fixture
def mock_boto3_session():
    """boto3.Session 모킹"""
    with patch("boto3.Session") as mock_session_class:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session

        # 기본 클라이언트 설정
        mock_session.client.return_value = MagicMock()
        mock_session.region_name = "ap-northeast-2"

        yield mock_session


class FakeMeta:
    """AWSClient 대용 (서비스 키 -> MagicMock client)"""

    def __init__(self) -> None:
        self.region = "ap-northeast-2"
        self.clients: Dict[str, MagicMock] = {}

    def client(self, service: str) -> Any:
        return self.clients.setdefault(service, MagicMock(name=f"{service}_client"))


@pytest.fixture
def mock_meta():
    """서비스별 MagicMock client를 제공하는 meta"""
    return FakeMeta()


# =============================================================================
# 유틸리티 함수
# =============================================================================


def create_mock_client_error(
    error_code: str,
    error_message: str = "Test error",
    operation_name: str = "TestOperation",
) -> Exception:
    """ClientError 생성 헬퍼"""
    from botocore.exceptions import ClientError

    return ClientError(
        {
            "Error": {
                "Code": error_code,
                "Message": error_message,
            }
        },
        operation_name,
    )


@pytest.fixture
def client_error():
    """ClientError 생성 함수 픽스처"""
    return create_mock_client_error


def show_json(resources: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """terraform show -json 형식 문서 생성 헬퍼 (주소 -> values)"""
    return {
        "format_version": "1.0",
        "values": {"root_module": {"resources": [resource_json(a, v) for a, v in resources.items()]}},
    }


@pytest.fixture
def make_show_json():
    """show -json 문서 생성 함수 픽스처"""
    return show_json


def resource_json(address: str, values: Dict[str, Any]) -> Dict[str, Any]:
    """show -json 리소스 항목 생성 (data. 접두사면 data 모드)"""
    mode = "data" if address.startswith("data.") else "managed"
    parts = address.split(".")
    resource_type, name = (parts[1], parts[2]) if mode == "data" else (parts[0], parts[1])
    return {
        "address": address,
        "mode": mode,
        "type": resource_type,
        "name": name,
        "values": values,
    }


# =============================================================================
# moto 통합
# =============================================================================


@pytest.fixture
def aws_credentials(monkeypatch):
    """moto 사용 시 AWS 자격 증명 설정"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def moto_route53(aws_credentials):
    """moto를 사용한 Route 53 모킹"""
    import boto3
    from moto import mock_aws

    with mock_aws():
        yield boto3.client("route53", region_name="us-east-1")


@pytest.fixture
def moto_appmesh(aws_credentials):
    """moto를 사용한 App Mesh 모킹 (mesh 하나 생성)

    Yields:
        (client, mesh_arn)
    """
    import boto3
    from moto import mock_aws

    with mock_aws():
        client = boto3.client("appmesh", region_name="us-east-1")
        mesh = client.create_mesh(
            meshName="tf-acc-test-mesh",
            spec={
                "egressFilter": {"type": "DROP_ALL"},
                "serviceDiscovery": {"ipPreference": "IPv4_ONLY"},
            },
            tags=[{"key": "owner", "value": "moto"}],
        )
        yield client, mesh["mesh"]["metadata"]["arn"]
