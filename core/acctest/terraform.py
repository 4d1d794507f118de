"""
core/acctest/terraform.py - terraform CLI 래퍼

작업 디렉토리 하나에 대해 init / apply / plan / destroy / import / show를
subprocess로 실행합니다. 실패하면 TerraformError를 발생시킵니다.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import subprocess
import time
from pathlib import Path

from core.config import settings
from core.exceptions import TerraformError

from .state import State

logger = logging.getLogger(__name__)

# plan -detailed-exitcode: 0 변경 없음, 1 오류, 2 변경 있음
PLAN_EXIT_NO_CHANGES = 0
PLAN_EXIT_CHANGES = 2


def terraform_available(binary: str = settings.ACC_TERRAFORM_BINARY) -> bool:
    return shutil.which(binary) is not None


def terraform_env(extra: dict[str, str] | None = None) -> dict[str, str]:
    """비대화형 실행용 환경변수"""
    env = os.environ.copy()
    env["TF_IN_AUTOMATION"] = "1"
    env["TF_INPUT"] = "0"
    env.setdefault("CHECKPOINT_DISABLE", "1")
    if extra:
        env.update(extra)
    return env


class TerraformCLI:
    """작업 디렉토리 단위 terraform 실행기

    Attributes:
        workdir: 설정 파일이 있는 작업 디렉토리
        env: 실행 환경변수
        binary: terraform 실행 파일
        timeout: 명령당 제한 시간 (초)
    """

    def __init__(
        self,
        workdir: str | Path,
        env: dict[str, str] | None = None,
        binary: str = settings.ACC_TERRAFORM_BINARY,
        timeout: int = settings.ACC_COMMAND_TIMEOUT_SECONDS,
    ):
        self.workdir = Path(workdir)
        self.env = env if env is not None else terraform_env()
        self.binary = binary
        self.timeout = timeout

    def _run(self, *args: str, allowed_returncodes: tuple[int, ...] = (0,)) -> subprocess.CompletedProcess[str]:
        command = [self.binary, *args]
        start = time.perf_counter()

        try:
            result = subprocess.run(
                command,
                cwd=str(self.workdir),
                env=self.env,
                check=False,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise TerraformError(command, -1, f"{self.timeout}초 제한 시간 초과", cause=e) from e
        except OSError as e:
            raise TerraformError(command, -1, str(e), cause=e) from e

        duration = time.perf_counter() - start
        logger.debug(f"{' '.join(command)} -> {result.returncode} ({duration:.2f}s)")

        if result.returncode not in allowed_returncodes:
            raise TerraformError(command, result.returncode, result.stderr)
        return result

    def init(self) -> None:
        self._run("init", "-input=false", "-no-color")

    def apply(self) -> None:
        self._run("apply", "-input=false", "-auto-approve", "-no-color")

    def plan(self) -> bool:
        """계획 실행, 변경 사항이 있으면 True"""
        result = self._run(
            "plan",
            "-input=false",
            "-no-color",
            "-detailed-exitcode",
            allowed_returncodes=(PLAN_EXIT_NO_CHANGES, PLAN_EXIT_CHANGES),
        )
        return result.returncode == PLAN_EXIT_CHANGES

    def destroy(self) -> None:
        self._run("destroy", "-input=false", "-auto-approve", "-no-color")

    def import_resource(self, address: str, resource_id: str) -> None:
        self._run("import", "-input=false", "-no-color", address, resource_id)

    def show_state(self) -> State:
        result = self._run("show", "-json", "-no-color")
        output = result.stdout.strip()
        return State.from_show_json(json.loads(output) if output else {})
