"""
core/acctest/knownvalue.py - 상태 값 검사기

terraform show -json 으로 읽은 값(JSON 타입)을 기대값과 비교합니다.
검사 실패 시 CheckError를 발생시킵니다.

Example:
    check = map_exact({"key1": string_exact("value1")})
    check.check({"key1": "value1"})
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from core.exceptions import CheckError


class Check(Protocol):
    def check(self, value: Any) -> None: ...

    def __str__(self) -> str: ...


@dataclass(frozen=True)
class StringExact:
    expected: str

    def check(self, value: Any) -> None:
        if not isinstance(value, str):
            raise CheckError(f"expected string value for StringExact check, got: {type(value).__name__}")
        if value != self.expected:
            raise CheckError(f"expected value {self.expected} for StringExact check, got: {value}")

    def __str__(self) -> str:
        return self.expected


@dataclass(frozen=True)
class BoolExact:
    expected: bool

    def check(self, value: Any) -> None:
        if not isinstance(value, bool):
            raise CheckError(f"expected bool value for BoolExact check, got: {type(value).__name__}")
        if value != self.expected:
            raise CheckError(f"expected value {self.expected} for BoolExact check, got: {value}")

    def __str__(self) -> str:
        return str(self.expected).lower()


@dataclass(frozen=True)
class Int64Exact:
    expected: int

    def check(self, value: Any) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
            raise CheckError(f"expected number value for Int64Exact check, got: {value!r}")
        if int(value) != self.expected:
            raise CheckError(f"expected value {self.expected} for Int64Exact check, got: {int(value)}")

    def __str__(self) -> str:
        return str(self.expected)


@dataclass(frozen=True)
class MapExact:
    expected: dict[str, Check]

    def check(self, value: Any) -> None:
        if not isinstance(value, dict):
            raise CheckError(f"expected map value for MapExact check, got: {type(value).__name__}")
        if len(value) != len(self.expected):
            raise CheckError(
                f"expected {len(self.expected)} elements for MapExact check, got {len(value)} elements"
            )

        for key in sorted(self.expected):
            if key not in value:
                raise CheckError(f"missing element {key} for MapExact check")
            try:
                self.expected[key].check(value[key])
            except CheckError as e:
                raise CheckError(f"{key} map element: {e.message}") from e

    def __str__(self) -> str:
        inner = " ".join(f"{k}:{self.expected[k]}" for k in sorted(self.expected))
        return f"map[{inner}]"


@dataclass(frozen=True)
class MapSizeExact:
    size: int

    def check(self, value: Any) -> None:
        if not isinstance(value, dict):
            raise CheckError(f"expected map value for MapSizeExact check, got: {type(value).__name__}")
        if len(value) != self.size:
            raise CheckError(f"expected map with {self.size} elements, got {len(value)} elements")

    def __str__(self) -> str:
        return str(self.size)


@dataclass(frozen=True)
class ListSizeExact:
    size: int

    def check(self, value: Any) -> None:
        if not isinstance(value, list):
            raise CheckError(f"expected list value for ListSizeExact check, got: {type(value).__name__}")
        if len(value) != self.size:
            raise CheckError(f"expected list with {self.size} elements, got {len(value)} elements")

    def __str__(self) -> str:
        return str(self.size)


class Null:
    def check(self, value: Any) -> None:
        if value is not None:
            raise CheckError(f"expected value to be null for Null check, got: {value!r}")

    def __str__(self) -> str:
        return "null"


class NotNull:
    def check(self, value: Any) -> None:
        if value is None:
            raise CheckError("expected non-nil value for NotNull check, got: null")

    def __str__(self) -> str:
        return "not-null"


def string_exact(expected: str) -> StringExact:
    return StringExact(expected)


def bool_exact(expected: bool) -> BoolExact:
    return BoolExact(expected)


def int64_exact(expected: int) -> Int64Exact:
    return Int64Exact(expected)


def map_exact(expected: dict[str, Check]) -> MapExact:
    return MapExact(dict(expected))


def map_size_exact(size: int) -> MapSizeExact:
    return MapSizeExact(size)


def list_size_exact(size: int) -> ListSizeExact:
    return ListSizeExact(size)


def null() -> Null:
    return Null()


def not_null() -> NotNull:
    return NotNull()
