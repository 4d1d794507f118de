"""core/acctest/statecheck.py - 상태 값 검사 (ConfigStateChecks)"""

from __future__ import annotations

from dataclasses import dataclass

from core.exceptions import CheckError

from .knownvalue import Check
from .state import State
from .tfjsonpath import Path


@dataclass(frozen=True)
class ExpectKnownValue:
    """리소스의 경로 값이 기대값과 일치하는지 검사"""

    address: str
    path: Path
    known_value: Check

    def check_state(self, state: State) -> None:
        resource = state.get(self.address)
        if resource is None:
            raise CheckError(f"{self.address} - Resource not found in state")

        try:
            value = self.path.resolve(resource.values)
            self.known_value.check(value)
        except CheckError as e:
            raise CheckError(f"{self.address} - {self.path}: {e.message}") from e


def expect_known_value(address: str, path: Path, known_value: Check) -> ExpectKnownValue:
    return ExpectKnownValue(address, path, known_value)
