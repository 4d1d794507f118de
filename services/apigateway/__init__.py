"""services/apigateway - API Gateway 서비스 패키지"""

from .tags import (
    APIGatewayServicePackage,
    get_tags_in,
    key_value_tags,
    list_tags,
    set_tags_out,
    tags,
    update_tags,
    vpc_link_arn,
)

ServicePackage = APIGatewayServicePackage

__all__: list[str] = [
    "ServicePackage",
    "list_tags",
    "update_tags",
    "tags",
    "key_value_tags",
    "get_tags_in",
    "set_tags_out",
    "vpc_link_arn",
]
