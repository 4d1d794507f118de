"""
services - AWS 서비스별 태그 glue 패키지

각 서비스 패키지는 list_tags / update_tags / tags / key_value_tags /
get_tags_in / set_tags_out 함수와 ServicePackage 클래스를 제공합니다.

Example:
    from services import get_service_package

    package = get_service_package("codeartifact")
    with tags_context() as ctx:
        package.list_tags(meta, arn)
        print(ctx.tags_out)
"""

from __future__ import annotations

from functools import lru_cache

from core.exceptions import ServiceNotFoundError
from core.tags import ServicePackage


@lru_cache(maxsize=1)
def service_packages() -> dict[str, ServicePackage]:
    """등록된 서비스 패키지 (서비스 키 -> 인스턴스)"""
    from . import apigateway, appmesh, codeartifact, route53

    packages: list[ServicePackage] = [
        apigateway.ServicePackage(),
        appmesh.ServicePackage(),
        codeartifact.ServicePackage(),
        route53.ServicePackage(),
    ]
    return {p.name: p for p in packages}


def get_service_package(name: str) -> ServicePackage:
    """서비스 키로 패키지 조회

    Raises:
        ServiceNotFoundError: 등록되지 않은 서비스
    """
    packages = service_packages()
    try:
        return packages[name.lower()]
    except KeyError:
        raise ServiceNotFoundError(name, sorted(packages)) from None


__all__: list[str] = ["service_packages", "get_service_package"]
