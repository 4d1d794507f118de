"""
core/acctest/state.py - terraform show -json 상태 모델

루트 모듈 리소스를 주소(address)로 색인하고, 검사 함수에서 쓰기 쉽도록
속성을 flatmap 형태로도 제공합니다.

flatmap 규칙:
    list/set  -> "name.#" = 개수, "name.0.attr" = 값
    map/object 값 -> "name.%" = 개수, "name.key" = 값
    bool      -> "true" / "false"
    null      -> 생략
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


def flatten(values: dict[str, Any]) -> dict[str, str]:
    """중첩 JSON 값을 flatmap으로 변환"""
    result: dict[str, str] = {}
    for key, value in values.items():
        _flatten_value(result, key, value)
    return result


def _flatten_value(result: dict[str, str], prefix: str, value: Any) -> None:
    if value is None:
        return

    if isinstance(value, list):
        result[f"{prefix}.#"] = str(len(value))
        for i, item in enumerate(value):
            _flatten_value(result, f"{prefix}.{i}", item)
        return

    if isinstance(value, dict):
        # 리스트 원소(블록)는 개수 표시 없이 속성만 펼침
        if not prefix.rsplit(".", 1)[-1].isdigit():
            result[f"{prefix}.%"] = str(len(value))
        for key, item in value.items():
            _flatten_value(result, f"{prefix}.{key}", item)
        return

    if isinstance(value, bool):
        result[prefix] = "true" if value else "false"
    elif isinstance(value, float) and value.is_integer():
        result[prefix] = str(int(value))
    else:
        result[prefix] = str(value)


@dataclass
class ResourceState:
    """상태 내 리소스/데이터 소스 하나

    Attributes:
        address: 주소 (예: aws_route53_zone.test, data.aws_appmesh_route.test)
        mode: "managed" 또는 "data"
        type: 리소스 타입
        name: 리소스 이름
        values: show -json 원본 값
        attributes: flatmap 속성
    """

    address: str
    mode: str
    type: str
    name: str
    values: dict[str, Any] = field(default_factory=dict)
    attributes: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ResourceState:
        values = data.get("values") or {}
        return cls(
            address=data["address"],
            mode=data.get("mode", "managed"),
            type=data.get("type", ""),
            name=data.get("name", ""),
            values=values,
            attributes=flatten(values),
        )

    @property
    def primary_id(self) -> str:
        return self.attributes.get("id", "")


@dataclass
class State:
    """루트 모듈 리소스 모음 (주소 -> ResourceState)"""

    resources: dict[str, ResourceState] = field(default_factory=dict)

    @classmethod
    def from_show_json(cls, doc: dict[str, Any] | str) -> State:
        """terraform show -json 출력에서 생성 (빈 상태면 리소스 없음)"""
        if isinstance(doc, str):
            doc = json.loads(doc) if doc.strip() else {}

        root = (doc.get("values") or {}).get("root_module") or {}
        state = cls()
        for data in root.get("resources", []):
            resource = ResourceState.from_json(data)
            state.resources[resource.address] = resource
        return state

    def get(self, address: str) -> ResourceState | None:
        return self.resources.get(address)

    def of_type(self, resource_type: str) -> list[ResourceState]:
        """특정 타입의 managed 리소스 목록"""
        return [r for r in self.resources.values() if r.type == resource_type and r.mode == "managed"]

    def __len__(self) -> int:
        return len(self.resources)
