"""
core/acctest/tfjsonpath.py - terraform show -json 값 탐색 경로

Example:
    path = Path.new("tags").at_map_key("key1")
    path.resolve({"tags": {"key1": "value1"}})   # "value1"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.exceptions import CheckError


@dataclass(frozen=True)
class Path:
    steps: tuple[str | int, ...]

    @classmethod
    def new(cls, first: str) -> Path:
        return cls((first,))

    def at_map_key(self, key: str) -> Path:
        return Path((*self.steps, key))

    def at_slice_index(self, index: int) -> Path:
        return Path((*self.steps, index))

    def resolve(self, value: Any) -> Any:
        """경로를 따라 값 조회

        Raises:
            CheckError: 경로의 키/인덱스가 없음
        """
        current = value
        for i, step in enumerate(self.steps):
            if isinstance(step, int):
                if not isinstance(current, list) or step >= len(current):
                    raise CheckError(f"경로 {self.prefix(i + 1)}: 인덱스 {step} 없음")
                current = current[step]
            else:
                if not isinstance(current, dict) or step not in current:
                    raise CheckError(f"경로 {self.prefix(i + 1)}: 키 {step!r} 없음")
                current = current[step]
        return current

    def prefix(self, length: int) -> str:
        return str(Path(self.steps[:length]))

    def __str__(self) -> str:
        parts: list[str] = []
        for step in self.steps:
            parts.append(f"[{step}]" if isinstance(step, int) else (f".{step}" if parts else step))
        return "".join(parts)
