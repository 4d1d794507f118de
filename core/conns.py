"""
core/conns.py - boto3 client 생성 및 서비스별 연결 캐시

Retry(adaptive 모드) + 타임아웃 + 연결 풀이 설정된 boto3 client를 생성하고,
AWSClient가 서비스별 client를 한 번만 만들어 재사용합니다.

주요 구성 요소:
- get_client: retry 설정이 적용된 boto3 client 생성
- AWSClient: 서비스 패키지에 전달되는 meta 객체 (세션 + 리전 + client 캐시)

Example:
    from core.conns import AWSClient

    meta = AWSClient.from_profile("my-profile", region="ap-northeast-2")
    conn = meta.code_artifact_conn()
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Literal, cast

from core import names
from core.config import get_default_profile, get_default_region, settings

if TYPE_CHECKING:
    import boto3

logger = logging.getLogger(__name__)

# Retry mode 타입 (botocore TypedDict와 호환)
RetryMode = Literal["legacy", "standard", "adaptive"]


def get_client(
    session: boto3.Session,
    service_name: str,
    region_name: str | None = None,
    max_attempts: int = settings.API_RETRY_COUNT,
    retry_mode: RetryMode = cast(RetryMode, settings.API_RETRY_MODE),
    connect_timeout: int = settings.API_CONNECT_TIMEOUT,
    read_timeout: int = settings.API_TIMEOUT,
    max_pool_connections: int = settings.API_MAX_POOL_CONNECTIONS,
    **kwargs: Any,
) -> Any:
    """Retry가 적용된 boto3 client 생성

    Args:
        session: boto3 Session
        service_name: boto3 클라이언트 이름 (codeartifact, route53 등)
        region_name: 리전 (None이면 세션 기본값)
        max_attempts: 최대 시도 횟수
        retry_mode: 재시도 모드 ('adaptive' 또는 'standard')
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        max_pool_connections: HTTP 연결 풀 크기
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 client
    """
    from botocore.config import Config

    config = Config(
        retries={"max_attempts": max_attempts, "mode": retry_mode},  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        max_pool_connections=max_pool_connections,
    )

    # 기존 config가 있으면 병합
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    # cast to Any to bypass boto3-stubs Literal type requirements
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region_name,
        config=config,
        **kwargs,
    )


class AWSClient:
    """서비스 패키지에 전달되는 연결 메타 객체

    서비스별 boto3 client를 지연 생성하여 캐시합니다. 여러 스레드에서
    같은 AWSClient를 공유해도 client는 서비스당 하나만 만들어집니다.

    Attributes:
        session: boto3 Session
        region: 기본 리전
    """

    def __init__(self, session: boto3.Session, region: str | None = None):
        self.session = session
        self.region = region or session.region_name or get_default_region()
        self._clients: dict[str, Any] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_profile(cls, profile: str | None = None, region: str | None = None) -> AWSClient:
        """프로파일 이름으로 생성 (None이면 환경변수/기본 자격 증명)"""
        import boto3

        session = boto3.Session(profile_name=profile or get_default_profile(), region_name=region)
        return cls(session, region)

    def client(self, service: str) -> Any:
        """서비스 키(core.names)로 boto3 client 조회"""
        with self._lock:
            conn = self._clients.get(service)
            if conn is None:
                logger.debug(f"client 생성: {service} ({self.region})")
                conn = get_client(self.session, names.client_name(service), region_name=self.region)
                self._clients[service] = conn
            return conn

    def api_gateway_conn(self) -> Any:
        return self.client(names.API_GATEWAY)

    def app_mesh_conn(self) -> Any:
        return self.client(names.APP_MESH)

    def code_artifact_conn(self) -> Any:
        return self.client(names.CODE_ARTIFACT)

    def route53_conn(self) -> Any:
        return self.client(names.ROUTE53)

    def __repr__(self) -> str:
        return f"AWSClient(region={self.region!r}, clients={sorted(self._clients)})"
