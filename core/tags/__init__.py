"""
core/tags - 태그 동기화 공통 모듈

주요 구성 요소:
- KeyValueTags: 서비스 독립적인 불변 태그 집합 (diff / 필터)
- DefaultConfig, IgnoreConfig: 프로바이더 default_tags / ignore_tags
- InContext, tags_context: 리소스 작업 단위 태그 입출력 채널
- TagApi, ServiceTagger, ServicePackage: 서비스별 태그 glue 엔진
"""

from .config import DefaultConfig, IgnoreConfig, load_tag_config
from .context import InContext, from_context, tags_context
from .key_value_tags import AWS_TAG_KEY_PREFIX, KeyValueTags
from .sync import ServicePackage, ServiceTagger, TagApi, TagFormat

__all__: list[str] = [
    "KeyValueTags",
    "AWS_TAG_KEY_PREFIX",
    # Config
    "DefaultConfig",
    "IgnoreConfig",
    "load_tag_config",
    # Context
    "InContext",
    "from_context",
    "tags_context",
    # Sync
    "TagApi",
    "TagFormat",
    "ServiceTagger",
    "ServicePackage",
]
