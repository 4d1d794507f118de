"""
core/names.py - 서비스 이름 상수

서비스 패키지 키, boto3 클라이언트 이름, AWS 서비스 ID(에러 메시지/acceptance
ErrorCheck용), 사람이 읽는 표시 이름을 한 곳에서 관리합니다.
"""

from __future__ import annotations

from dataclasses import dataclass

# 서비스 패키지 키
API_GATEWAY = "apigateway"
APP_MESH = "appmesh"
CODE_ARTIFACT = "codeartifact"
ROUTE53 = "route53"

# 시스템 태그 규칙이 있는 서비스 (IgnoreSystem 참고용)
ELASTIC_BEANSTALK = "elasticbeanstalk"
SERVERLESS_REPO = "serverlessrepo"

# AWS 서비스 ID
API_GATEWAY_SERVICE_ID = "API Gateway"
APP_MESH_SERVICE_ID = "App Mesh"
CODE_ARTIFACT_SERVICE_ID = "codeartifact"
ROUTE53_SERVICE_ID = "Route 53"

# 공통 속성 이름
ATTR_TAGS = "tags"
ATTR_TAGS_ALL = "tags_all"
ATTR_ARN = "arn"
ATTR_ID = "id"


@dataclass(frozen=True)
class ServiceName:
    """서비스 이름 묶음

    Attributes:
        key: 패키지 키 (services.<key>)
        client: boto3 클라이언트 이름
        service_id: AWS 서비스 ID
        human: 표시 이름
    """

    key: str
    client: str
    service_id: str
    human: str


SERVICES: dict[str, ServiceName] = {
    API_GATEWAY: ServiceName(API_GATEWAY, "apigateway", API_GATEWAY_SERVICE_ID, "API Gateway"),
    APP_MESH: ServiceName(APP_MESH, "appmesh", APP_MESH_SERVICE_ID, "App Mesh"),
    CODE_ARTIFACT: ServiceName(CODE_ARTIFACT, "codeartifact", CODE_ARTIFACT_SERVICE_ID, "CodeArtifact"),
    ROUTE53: ServiceName(ROUTE53, "route53", ROUTE53_SERVICE_ID, "Route 53"),
}


def human_name(key: str) -> str:
    """서비스 표시 이름 (미등록이면 키 그대로)"""
    service = SERVICES.get(key)
    return service.human if service else key


def client_name(key: str) -> str:
    """boto3 클라이언트 이름 (미등록이면 키 그대로)"""
    service = SERVICES.get(key)
    return service.client if service else key
