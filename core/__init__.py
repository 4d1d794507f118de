# core/__init__.py
"""
core - AWS 태그 동기화 공통 인프라

아키텍처:
    core/
    ├── tags/           # KeyValueTags, 태그 설정/컨텍스트, 서비스 태그 glue 엔진
    ├── acctest/        # terraform 기반 acceptance 테스트 하네스
    ├── conns.py        # boto3 client 생성 / 서비스별 캐시 (AWSClient)
    ├── names.py        # 서비스 이름 상수
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    # 설정 사용
    from core.config import settings, get_default_region
    region = get_default_region()  # "ap-northeast-2"

    # 태그 diff
    from core.tags import KeyValueTags
    old = KeyValueTags.new({"env": "dev"})
    old.updated({"env": "prod"}).map()  # {"env": "prod"}

    # 예외 처리
    from core.exceptions import TagUpdateError, is_access_denied
    try:
        codeartifact.update_tags(conn, arn, old, new)
    except TagUpdateError as e:
        if is_access_denied(e.cause):
            print("권한이 없습니다")
"""

from core import config, exceptions, names

__all__: list[str] = [
    # 모듈
    "config",
    "exceptions",
    "names",
]
