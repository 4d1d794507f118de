"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.
서비스 패키지의 태그 glue를 직접 호출하여 리소스 태그를 조회/동기화합니다.

명령어 구조:
    tagsync --version                         # 버전 표시
    tagsync services                          # 지원 서비스 목록
    tagsync list <service> <identifier>       # 리소스 태그 조회
    tagsync sync <service> <identifier> -t k=v [--dry-run]

    예시:
    tagsync list codeartifact arn:aws:codeartifact:ap-northeast-2:123456789012:domain/my-domain
    tagsync list route53 Z0123456789ABCDEFGHIJ
    tagsync sync appmesh <mesh-arn> -t env=prod -t team=platform --dry-run

프로바이더 태그 설정:
    --config (또는 AA_TAG_CONFIG, 기본 ~/.aa/tags.yaml)의 default_tags는 요청 태그에
    병합되고, ignore_tags에 해당하는 키는 조회/diff에서 제외됩니다.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click
from botocore.exceptions import BotoCoreError
from click import Context

from core import names
from core.config import get_tag_config_path, get_version
from core.conns import AWSClient
from core.exceptions import AAError, format_error_for_user
from core.tags import DefaultConfig, IgnoreConfig, KeyValueTags, load_tag_config, tags_context

# Keep lightweight, centralized logging config
# WARNING 레벨로 설정하여 INFO 로그가 출력에 섞이지 않도록 함
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

VERSION = get_version()


def parse_tag_options(values: tuple[str, ...]) -> KeyValueTags:
    """-t key=value 옵션 목록을 KeyValueTags로 변환

    "=" 없이 키만 주면 빈 값 태그가 됩니다.

    Raises:
        click.BadParameter: 키가 비어있는 경우
    """
    result: dict[str, str] = {}
    for raw in values:
        key, _, value = raw.partition("=")
        key = key.strip()
        if not key:
            raise click.BadParameter(f"태그 키가 비어있음: {raw!r}", param_hint="-t/--tag")
        result[key] = value
    return KeyValueTags.new(result)


def _load_config(config_path: str | None) -> tuple[DefaultConfig, IgnoreConfig]:
    path = Path(config_path) if config_path else get_tag_config_path()
    return load_tag_config(path)


def _fail(error: Exception) -> None:
    from cli.ui import print_error

    logger.debug("명령 실패", exc_info=error)
    print_error(format_error_for_user(error))
    raise SystemExit(1)


def _aws_options(func: Any) -> Any:
    func = click.option("-r", "--region", default=None, help="리전 (기본: AWS_REGION / AWS_DEFAULT_REGION)")(func)
    func = click.option("-p", "--profile", default=None, help="AWS 프로파일")(func)
    return func


@click.group()
@click.version_option(VERSION, prog_name="tagsync")
@click.option("-v", "--verbose", is_flag=True, help="DEBUG 로그 출력")
@click.pass_context
def cli(ctx: Context, verbose: bool) -> None:
    """tagsync - AWS 리소스 태그 동기화 CLI"""
    from cli.ui import setup_logging

    setup_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command("services")
@click.option("--json", "as_json", is_flag=True, help="JSON 형식으로 출력")
def services_command(as_json: bool) -> None:
    """지원 서비스 목록

    \b
    Examples:
        tagsync services
        tagsync services --json
    """
    from services import service_packages

    rows: list[dict[str, str]] = []
    for key in sorted(service_packages()):
        service = names.SERVICES[key]
        rows.append({"service": key, "name": service.human, "service_id": service.service_id})

    if as_json:
        click.echo(json.dumps(rows, ensure_ascii=False, indent=2))
        return

    from cli.ui import print_table

    print_table("지원 서비스", ["Service", "Name", "Service ID"], [list(r.values()) for r in rows])


@cli.command("list")
@click.argument("service")
@click.argument("identifier")
@_aws_options
@click.option("-c", "--config", "config_path", default=None, help="태그 설정 YAML 경로")
@click.option("--json", "as_json", is_flag=True, help="JSON 형식으로 출력")
def list_command(
    service: str,
    identifier: str,
    profile: str | None,
    region: str | None,
    config_path: str | None,
    as_json: bool,
) -> None:
    """리소스 태그 조회

    \b
    Examples:
        tagsync list codeartifact <domain-arn>
        tagsync list route53 Z0123456789ABCDEFGHIJ --json
    """
    from services import get_service_package

    try:
        package = get_service_package(service)
        default_config, ignore_config = _load_config(config_path)
        meta = AWSClient.from_profile(profile, region)

        with tags_context(default_config=default_config, ignore_config=ignore_config) as ctx:
            package.list_tags(meta, identifier)
            tags = (ctx.tags_out or KeyValueTags()).ignore_config(ignore_config)
    except (AAError, BotoCoreError) as e:
        _fail(e)
        return

    if as_json:
        click.echo(json.dumps(tags.map(), ensure_ascii=False, indent=2, sort_keys=True))
        return

    from cli.ui import print_info, print_tags

    if not tags:
        print_info(f"태그 없음: {identifier}")
        return
    print_tags(f"{names.human_name(package.name)} 태그: {identifier}", tags)


@cli.command("sync")
@click.argument("service")
@click.argument("identifier")
@click.option("-t", "--tag", "tag_values", multiple=True, help="원하는 태그 key=value (다중 가능)")
@_aws_options
@click.option("-c", "--config", "config_path", default=None, help="태그 설정 YAML 경로")
@click.option("--dry-run", is_flag=True, help="변경 내역만 출력")
def sync_command(
    service: str,
    identifier: str,
    tag_values: tuple[str, ...],
    profile: str | None,
    region: str | None,
    config_path: str | None,
    dry_run: bool,
) -> None:
    """리소스 태그를 원하는 집합으로 동기화

    -t로 준 태그(+ default_tags)가 리소스의 최종 태그가 됩니다. 목록에 없는 기존 태그는
    제거되며, aws: 등 시스템 태그와 ignore_tags 키는 건드리지 않습니다.

    \b
    Examples:
        tagsync sync codeartifact <arn> -t env=prod -t team=platform
        tagsync sync route53 Z0123456789ABCDEFGHIJ -t env=prod --dry-run
    """
    from cli.ui import print_info, print_success, print_tag_diff

    from services import get_service_package

    desired = parse_tag_options(tag_values)

    try:
        package = get_service_package(service)
        default_config, ignore_config = _load_config(config_path)
        meta = AWSClient.from_profile(profile, region)

        with tags_context(tags_in=desired, default_config=default_config, ignore_config=ignore_config) as ctx:
            package.list_tags(meta, identifier)
            old = (ctx.tags_out or KeyValueTags()).ignore_config(ignore_config)
            new = ctx.tags_all()

            removed = old.removed(new).ignore_system(package.name)
            updated = old.updated(new).ignore_system(package.name)

            if not removed and not updated:
                print_info(f"변경 없음: {identifier}")
                return

            print_tag_diff(old, removed, updated)
            if dry_run:
                print_info("--dry-run: 변경하지 않음")
                return

            package.update_tags(meta, identifier, old, new)
    except (AAError, BotoCoreError) as e:
        _fail(e)
        return

    print_success(f"태그 동기화 완료: 제거 {len(removed)}개, 적용 {len(updated)}개")


if __name__ == "__main__":
    cli()
