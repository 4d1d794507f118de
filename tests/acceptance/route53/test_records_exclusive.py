"""
tests/acceptance/route53/test_records_exclusive.py - Route 53 Records Exclusive acceptance 테스트

- basic: 레코드 세트 하나 생성 후 import 검증
- disappears: 호스팅 영역을 외부에서 삭제하면 plan이 비어있지 않아야 함
"""

import pytest

from core import names
from core.acctest import (
    TestCase,
    TestStep,
    check_resource_attr,
    check_resource_attr_pair,
    check_resource_disappears,
    compose_aggregate_check,
    error_check,
    pre_check,
    provider_meta,
    random_domain,
    run_parallel_test,
)
from core.acctest.check import CheckFunc
from core.acctest.state import State
from core.exceptions import (
    ACTION_CHECKING_DESTROYED,
    ACTION_CHECKING_EXISTENCE,
    AAError,
    CheckError,
    NotFoundError,
    provider_error,
)
from services.route53 import RES_NAME_RECORDS_EXCLUSIVE, delete_hosted_zone, find_resource_record_sets_for_hosted_zone

pytestmark = pytest.mark.acceptance

RESOURCE_NAME = "aws_route53_records_exclusive.test"
ZONE_RESOURCE_NAME = "aws_route53_zone.test"

SERVICE = names.human_name(names.ROUTE53)


def test_records_exclusive_basic():
    zone_name = random_domain()
    record_name = zone_name.random_subdomain()

    run_parallel_test(
        TestCase(
            pre_check=pre_check,
            error_check=error_check(names.ROUTE53_SERVICE_ID),
            check_destroy=check_records_exclusive_destroy(),
            steps=[
                TestStep(
                    config=config_basic(str(zone_name), str(record_name).upper()),
                    check=compose_aggregate_check(
                        check_records_exclusive_exists(RESOURCE_NAME),
                        check_resource_attr_pair(RESOURCE_NAME, "zone_id", ZONE_RESOURCE_NAME, "id"),
                        check_resource_attr(RESOURCE_NAME, "resource_record_set.#", "1"),
                    ),
                ),
                TestStep(
                    resource_name=RESOURCE_NAME,
                    import_state=True,
                    import_state_verify=True,
                ),
            ],
        )
    )


def test_records_exclusive_disappears():
    zone_name = random_domain()
    record_name = zone_name.random_subdomain()

    run_parallel_test(
        TestCase(
            pre_check=pre_check,
            error_check=error_check(names.ROUTE53_SERVICE_ID),
            check_destroy=check_records_exclusive_destroy(),
            steps=[
                TestStep(
                    config=config_basic(str(zone_name), str(record_name).upper()),
                    check=compose_aggregate_check(
                        check_records_exclusive_exists(RESOURCE_NAME),
                        check_resource_disappears(ZONE_RESOURCE_NAME, _delete_zone),
                    ),
                    expect_non_empty_plan=True,
                ),
            ],
        )
    )


# =============================================================================
# 검사 함수
# =============================================================================


def _delete_zone(meta, zone_id: str) -> None:
    delete_hosted_zone(meta.route53_conn(), zone_id)


def check_records_exclusive_destroy() -> CheckFunc:
    """호스팅 영역이 없으면 삭제된 것으로 판단"""

    def _check(state: State) -> None:
        conn = provider_meta().route53_conn()

        for resource in state.of_type("aws_route53_records_exclusive"):
            zone_id = resource.attributes.get("zone_id", "")
            try:
                find_resource_record_sets_for_hosted_zone(conn, zone_id)
            except NotFoundError:
                return
            except AAError as e:
                raise provider_error(SERVICE, ACTION_CHECKING_DESTROYED, RES_NAME_RECORDS_EXCLUSIVE, zone_id, e) from e

            raise provider_error(
                SERVICE, ACTION_CHECKING_DESTROYED, RES_NAME_RECORDS_EXCLUSIVE, zone_id, CheckError("not destroyed")
            )

    return _check


def check_records_exclusive_exists(address: str) -> CheckFunc:
    """상태의 레코드 수와 실제 호스팅 영역의 레코드 수가 같은지 확인"""

    def _check(state: State) -> None:
        resource = state.get(address)
        if resource is None:
            raise provider_error(
                SERVICE, ACTION_CHECKING_EXISTENCE, RES_NAME_RECORDS_EXCLUSIVE, address, CheckError("not found")
            )

        zone_id = resource.attributes.get("zone_id", "")
        if not zone_id:
            raise provider_error(
                SERVICE, ACTION_CHECKING_EXISTENCE, RES_NAME_RECORDS_EXCLUSIVE, address, CheckError("not set")
            )

        conn = provider_meta().route53_conn()
        try:
            record_sets = find_resource_record_sets_for_hosted_zone(conn, zone_id)
        except AAError as e:
            raise provider_error(SERVICE, ACTION_CHECKING_EXISTENCE, RES_NAME_RECORDS_EXCLUSIVE, zone_id, e) from e

        if resource.attributes.get("resource_record_set.#") != str(len(record_sets)):
            raise provider_error(
                SERVICE,
                ACTION_CHECKING_EXISTENCE,
                RES_NAME_RECORDS_EXCLUSIVE,
                zone_id,
                CheckError("unexpected resource_record_set count"),
            )

    return _check


# =============================================================================
# 설정
# =============================================================================


def config_basic(zone_name: str, record_name: str) -> str:
    return f"""
resource "aws_route53_zone" "test" {{
  name          = "{zone_name}"
  force_destroy = true
}}

resource "aws_route53_records_exclusive" "test" {{
  zone_id = aws_route53_zone.test.zone_id

  resource_record_set {{
    name = "{record_name}"
    type = "A"
    ttl  = "30"

    resource_records {{
      value = "127.0.0.1"
    }}
    resource_records {{
      value = "127.0.0.27"
    }}
  }}
}}
"""
