"""services/route53 - Route 53 서비스 패키지"""

from .find import (
    delete_hosted_zone,
    find_hosted_zone_by_id,
    find_resource_record_sets_for_hosted_zone,
)
from .tags import (
    RESOURCE_TYPE_HEALTH_CHECK,
    RESOURCE_TYPE_HOSTED_ZONE,
    Route53ServicePackage,
    clean_zone_id,
    get_tags_in,
    key_value_tags,
    list_tags,
    set_tags_out,
    tags,
    update_tags,
)

ServicePackage = Route53ServicePackage

# acceptance 검사 메시지용 리소스 이름
RES_NAME_RECORDS_EXCLUSIVE = "Records Exclusive"
RES_NAME_HOSTED_ZONE = "Hosted Zone"

__all__: list[str] = [
    "ServicePackage",
    "RESOURCE_TYPE_HOSTED_ZONE",
    "RESOURCE_TYPE_HEALTH_CHECK",
    "RES_NAME_RECORDS_EXCLUSIVE",
    "RES_NAME_HOSTED_ZONE",
    "clean_zone_id",
    "list_tags",
    "update_tags",
    "tags",
    "key_value_tags",
    "get_tags_in",
    "set_tags_out",
    "find_hosted_zone_by_id",
    "find_resource_record_sets_for_hosted_zone",
    "delete_hosted_zone",
]
