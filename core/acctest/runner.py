"""
core/acctest/runner.py - acceptance 테스트 실행기

TestCase의 단계(TestStep)를 임시 작업 디렉토리에서 순서대로 적용하고 검사합니다.
TF_ACC 환경변수가 없으면 테스트를 건너뜁니다.

실행 흐름:
    1. pre_check
    2. 각 단계: 설정 기록 -> init -> apply -> 상태 검사 -> 후속 plan이 비어있는지 확인
       import 단계: 별도 디렉토리에서 import 후 이전 상태와 속성 비교
    3. 항상 destroy
    4. destroy 직전 상태로 check_destroy

Example:
    run_parallel_test(
        TestCase(
            pre_check=pre_check,
            error_check=error_check(names.ROUTE53_SERVICE_ID),
            check_destroy=check_records_exclusive_destroy(),
            steps=[
                TestStep(config=config_basic(zone, record), check=...),
                TestStep(resource_name=resource_name, import_state=True, import_state_verify=True),
            ],
        )
    )
"""

from __future__ import annotations

import json
import logging
import shutil
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from core.config import is_acceptance_enabled, settings
from core.exceptions import CheckError

from .check import CheckFunc
from .state import State
from .statecheck import ExpectKnownValue
from .terraform import TerraformCLI, terraform_available, terraform_env

logger = logging.getLogger(__name__)

PROVIDER_FILE = "acctest_provider.tf"
TFVARS_FILE = "terraform.tfvars.json"

PROVIDER_CONFIG = """\
terraform {
  required_providers {
    aws = {
      source = "hashicorp/aws"
    }
  }
}
"""

ErrorCheckFunc = Callable[[Exception], None]


@dataclass
class TestStep:
    """테스트 단계 하나

    config 또는 config_directory 중 하나로 설정을 지정합니다.
    import_state=True이면 설정을 적용하지 않고 resource_name을 import합니다.
    """

    __test__ = False

    config: str | None = None
    config_directory: Path | None = None
    config_variables: dict[str, Any] | None = None
    check: CheckFunc | None = None
    config_state_checks: list[ExpectKnownValue] = field(default_factory=list)
    expect_non_empty_plan: bool = False

    resource_name: str | None = None
    import_state: bool = False
    import_state_id: str | None = None
    import_state_verify: bool = False
    import_state_verify_ignore: list[str] = field(default_factory=list)


@dataclass
class TestCase:
    """acceptance 테스트 케이스

    Attributes:
        steps: 순서대로 실행할 단계
        pre_check: 시작 전 환경 검사
        error_check: 단계 오류를 받아 skip 여부 결정 (skip하지 않으면 원래 오류 전파)
        check_destroy: destroy 후 리소스가 사라졌는지 검사 (destroy 직전 상태 전달)
    """

    __test__ = False

    steps: list[TestStep]
    pre_check: Callable[[], None] | None = None
    error_check: ErrorCheckFunc | None = None
    check_destroy: CheckFunc | None = None


def static_directory(path: str | Path, relative_to: str | Path | None = None) -> Path:
    """testdata 디렉토리 경로 (relative_to가 파일이면 그 디렉토리 기준)"""
    directory = Path(path)
    if not directory.is_absolute() and relative_to is not None:
        base = Path(relative_to)
        directory = (base.parent if base.is_file() else base) / directory
    return directory


def write_config(workdir: Path, step: TestStep) -> None:
    """단계 설정을 작업 디렉토리에 기록 (이전 단계 .tf 파일은 제거)"""
    for existing in workdir.glob("*.tf"):
        existing.unlink()

    if step.config_directory is not None:
        directory = Path(step.config_directory)
        if not directory.is_dir():
            raise CheckError(f"설정 디렉토리 없음: {directory}")
        for source in sorted(directory.glob("*.tf")):
            shutil.copy2(source, workdir / source.name)
    elif step.config is not None:
        (workdir / "main.tf").write_text(step.config, encoding="utf-8")
    else:
        raise CheckError("TestStep에 config 또는 config_directory가 필요함")

    (workdir / PROVIDER_FILE).write_text(PROVIDER_CONFIG, encoding="utf-8")

    # None 값은 변수 기본값(null)을 쓰도록 생략
    variables = {k: v for k, v in (step.config_variables or {}).items() if v is not None}
    tfvars = workdir / TFVARS_FILE
    if variables:
        tfvars.write_text(json.dumps(variables, indent=2), encoding="utf-8")
    elif tfvars.exists():
        tfvars.unlink()


def _verify_import(step: TestStep, previous: State, imported: State) -> None:
    address = step.resource_name or ""
    expected = previous.get(address)
    actual = imported.get(address)
    if expected is None:
        raise CheckError(f"import 검증: 이전 상태에 {address} 없음")
    if actual is None:
        raise CheckError(f"import 검증: import 결과에 {address} 없음")

    def _filtered(attributes: dict[str, str]) -> dict[str, str]:
        return {
            k: v
            for k, v in attributes.items()
            if not any(k == prefix or k.startswith(prefix) for prefix in step.import_state_verify_ignore)
        }

    want = _filtered(expected.attributes)
    got = _filtered(actual.attributes)
    if want != got:
        diff = sorted(set(want.items()) ^ set(got.items()))
        lines = "\n".join(f"  {k} = {v!r}" for k, v in diff)
        raise CheckError(f"ImportStateVerify attributes not equivalent for {address}:\n{lines}")


class _CaseRunner:
    def __init__(self, case: TestCase, root: Path):
        self.case = case
        self.root = root
        self.workdir = root / "work"
        self.workdir.mkdir()
        self.env = terraform_env({"TF_ACC": "1"})
        self.tf = TerraformCLI(self.workdir, self.env)
        self.applied = False
        self.state = State()

    def run(self) -> None:
        try:
            for i, step in enumerate(self.case.steps, start=1):
                logger.info(f"단계 {i}/{len(self.case.steps)} 실행")
                try:
                    if step.import_state:
                        self._run_import_step(i, step)
                    else:
                        self._run_config_step(step)
                except Exception as e:
                    if self.case.error_check is not None:
                        self.case.error_check(e)
                    raise CheckError(f"Step {i}/{len(self.case.steps)} error", cause=e) from e
        finally:
            self._destroy()

    def _run_config_step(self, step: TestStep) -> None:
        write_config(self.workdir, step)
        self.tf.init()
        self.applied = True
        self.tf.apply()
        self.state = self.tf.show_state()

        if step.check is not None:
            step.check(self.state)
        for state_check in step.config_state_checks:
            state_check.check_state(self.state)

        has_changes = self.tf.plan()
        if has_changes and not step.expect_non_empty_plan:
            raise CheckError("After applying this test step, the plan was not empty.")
        if not has_changes and step.expect_non_empty_plan:
            raise CheckError("Expected a non-empty plan, but got an empty plan")

    def _run_import_step(self, index: int, step: TestStep) -> None:
        if not step.resource_name:
            raise CheckError("import 단계에 resource_name이 필요함")

        resource_id = step.import_state_id
        if resource_id is None:
            resource = self.state.get(step.resource_name)
            if resource is None:
                raise CheckError(f"import 대상이 상태에 없음: {step.resource_name}")
            resource_id = resource.primary_id

        import_dir = self.root / f"import-{index}"
        import_dir.mkdir()
        for source in self.workdir.iterdir():
            if source.suffix == ".tf" or source.name == TFVARS_FILE:
                shutil.copy2(source, import_dir / source.name)

        tf = TerraformCLI(import_dir, self.env)
        tf.init()
        tf.import_resource(step.resource_name, resource_id)
        imported = tf.show_state()

        if step.import_state_verify:
            _verify_import(step, self.state, imported)

    def _destroy(self) -> None:
        if not self.applied:
            return

        pre_destroy = self.state
        try:
            pre_destroy = self.tf.show_state()
        except Exception as e:
            logger.warning(f"destroy 전 상태 조회 실패: {e}")

        self.tf.destroy()
        if self.case.check_destroy is not None:
            self.case.check_destroy(pre_destroy)


def _run(case: TestCase) -> None:
    if not is_acceptance_enabled():
        pytest.skip(f"Acceptance tests skipped unless env '{settings.ACC_ENV}' set")
    if not terraform_available():
        pytest.skip(f"{settings.ACC_TERRAFORM_BINARY} 실행 파일 없음")

    if case.pre_check is not None:
        case.pre_check()

    with tempfile.TemporaryDirectory(prefix="acctest-") as tmp:
        _CaseRunner(case, Path(tmp)).run()


def run_test(case: TestCase) -> None:
    """TestCase 실행 (TF_ACC 없으면 skip)"""
    _run(case)


def run_parallel_test(case: TestCase) -> None:
    """run_test의 별칭

    실행 방식은 run_test와 같습니다. 다른 테스트와 리소스를 공유하지 않아
    pytest-xdist 등 실행기가 동시에 돌려도 된다는 표시로만 사용합니다.
    공유 리소스가 있는 테스트는 run_serial_tests로 묶습니다.
    """
    run_test(case)
