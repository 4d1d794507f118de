"""
core/acctest/check.py - 상태 검사 함수 (TestStep.check)

검사 함수는 State를 받아 실패 시 CheckError를 발생시키는 callable입니다.

Example:
    check = compose_aggregate_check(
        check_records_exclusive_exists(meta, "aws_route53_records_exclusive.test"),
        check_resource_attr_pair(resource_name, "zone_id", zone_resource_name, "id"),
        check_resource_attr(resource_name, "resource_record_set.#", "1"),
    )
"""

from __future__ import annotations

from collections.abc import Callable

from core.exceptions import CheckError

from .state import ResourceState, State

CheckFunc = Callable[[State], None]


def _resource(state: State, address: str) -> ResourceState:
    resource = state.get(address)
    if resource is None:
        raise CheckError(f"Not found: {address} in root module")
    return resource


def _is_empty_count(key: str, value: str) -> bool:
    # 빈 list/map은 flatmap에 개수 키가 없을 수 있음
    return value == "0" and (key.endswith(".#") or key.endswith(".%"))


def check_resource_attr(address: str, key: str, value: str) -> CheckFunc:
    """속성 값이 정확히 일치하는지 검사"""

    def _check(state: State) -> None:
        attributes = _resource(state, address).attributes
        if key not in attributes:
            if _is_empty_count(key, value):
                return
            raise CheckError(f"{address}: Attribute '{key}' not found")
        if attributes[key] != value:
            raise CheckError(f"{address}: Attribute '{key}' expected {value!r}, got {attributes[key]!r}")

    return _check


def check_no_resource_attr(address: str, key: str) -> CheckFunc:
    """속성이 없는지 검사 (빈 개수 키는 없는 것으로 취급)"""

    def _check(state: State) -> None:
        attributes = _resource(state, address).attributes
        if key in attributes and not _is_empty_count(key, attributes[key]):
            raise CheckError(f"{address}: Attribute '{key}' found when not expected")

    return _check


def check_resource_attr_set(address: str, key: str) -> CheckFunc:
    """속성이 비어있지 않은 값으로 존재하는지 검사"""

    def _check(state: State) -> None:
        if not _resource(state, address).attributes.get(key):
            raise CheckError(f"{address}: Attribute '{key}' expected to be set")

    return _check


def check_resource_attr_pair(address1: str, key1: str, address2: str, key2: str) -> CheckFunc:
    """두 리소스의 속성 값이 같은지 검사"""

    def _check(state: State) -> None:
        value1 = _resource(state, address1).attributes.get(key1)
        value2 = _resource(state, address2).attributes.get(key2)
        if value1 != value2:
            raise CheckError(f"{address1}: Attribute '{key1}' expected {value2!r}, got {value1!r}")

    return _check


def compose_check(*checks: CheckFunc) -> CheckFunc:
    """순서대로 실행, 첫 실패에서 중단"""

    def _check(state: State) -> None:
        for i, check in enumerate(checks):
            try:
                check(state)
            except CheckError as e:
                raise CheckError(f"Check {i + 1}/{len(checks)} error: {e}") from e

    return _check


def compose_aggregate_check(*checks: CheckFunc) -> CheckFunc:
    """전부 실행하고 실패를 모아서 보고"""

    def _check(state: State) -> None:
        errors: list[str] = []
        for i, check in enumerate(checks):
            try:
                check(state)
            except CheckError as e:
                errors.append(f"Check {i + 1}/{len(checks)} error: {e}")
        if errors:
            raise CheckError("\n".join(errors))

    return _check
