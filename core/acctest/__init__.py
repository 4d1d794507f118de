"""
core/acctest - 실제 AWS 대상 acceptance 테스트 하네스

terraform CLI로 설정을 적용하고 상태를 검사합니다. TF_ACC가 설정되어 있지
않으면 모든 테스트를 건너뜁니다.
"""

from .check import (
    CheckFunc,
    check_no_resource_attr,
    check_resource_attr,
    check_resource_attr_pair,
    check_resource_attr_set,
    compose_aggregate_check,
    compose_check,
)
from .naming import Domain, random_domain, random_int, random_string, random_with_prefix
from .provider import check_resource_disappears, error_check, pre_check, provider_meta, run_serial_tests
from .runner import TestCase, TestStep, run_parallel_test, run_test, static_directory
from .state import ResourceState, State
from .statecheck import ExpectKnownValue, expect_known_value

__all__: list[str] = [
    # Runner
    "TestCase",
    "TestStep",
    "run_test",
    "run_parallel_test",
    "static_directory",
    # Provider
    "pre_check",
    "error_check",
    "provider_meta",
    "check_resource_disappears",
    "run_serial_tests",
    # State
    "State",
    "ResourceState",
    "ExpectKnownValue",
    "expect_known_value",
    # Check
    "CheckFunc",
    "check_resource_attr",
    "check_no_resource_attr",
    "check_resource_attr_set",
    "check_resource_attr_pair",
    "compose_check",
    "compose_aggregate_check",
    # Naming
    "Domain",
    "random_domain",
    "random_int",
    "random_string",
    "random_with_prefix",
]
