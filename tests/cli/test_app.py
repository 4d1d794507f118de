# tests/cli/test_app.py
"""
Tests for cli/app.py - tagsync CLI entry point

Tests cover:
- Version / help
- services 목록
- list: 태그 조회 (ignore_tags 적용)
- sync: diff 출력, --dry-run, 실제 untag/tag 호출
- 오류 처리 (등록되지 않은 서비스, 잘못된 -t 옵션)
"""

from unittest.mock import patch

import click
import pytest
from click.testing import CliRunner

from cli.app import cli, parse_tag_options

ARN = "arn:aws:codeartifact:ap-northeast-2:123456789012:domain/tf-acc-test"


@pytest.fixture(autouse=True)
def no_logging_setup():
    """루트 logger 핸들러 교체 방지"""
    with patch("cli.ui.setup_logging"):
        yield


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def codeartifact(mock_meta):
    """AWSClient.from_profile이 mock_meta를 반환하도록 패치하고 codeartifact client 반환"""
    conn = mock_meta.client("codeartifact")
    conn.list_tags_for_resource.return_value = {
        "tags": [
            {"key": "env", "value": "dev"},
            {"key": "old", "value": "x"},
            {"key": "aws:cloudformation:stack-name", "value": "stack"},
        ]
    }
    with patch("cli.app.AWSClient") as client_class:
        client_class.from_profile.return_value = mock_meta
        yield conn


@pytest.fixture
def tag_config(tmp_path):
    path = tmp_path / "tags.yaml"
    path.write_text(
        "default_tags:\n  owner: platform\nignore_tags:\n  keys:\n    - old\n",
        encoding="utf-8",
    )
    return str(path)


# =============================================================================
# parse_tag_options Tests
# =============================================================================


class TestParseTagOptions:
    """-t key=value 파싱"""

    def test_pairs(self):
        tags = parse_tag_options(("env=prod", "team=platform", "empty"))

        assert tags.map() == {"env": "prod", "team": "platform", "empty": ""}

    def test_value_with_equals(self):
        assert parse_tag_options(("expr=a=b",)).map() == {"expr": "a=b"}

    def test_empty_key(self):
        with pytest.raises(click.BadParameter):
            parse_tag_options(("=value",))


# =============================================================================
# CLI Group Tests
# =============================================================================


class TestCLI:
    """Test main CLI group"""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "tagsync" in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in ("services", "list", "sync"):
            assert command in result.output


class TestServicesCommand:
    """services 명령"""

    def test_json(self, runner):
        import json

        result = runner.invoke(cli, ["services", "--json"])

        assert result.exit_code == 0
        rows = json.loads(result.output)
        assert [r["service"] for r in rows] == ["apigateway", "appmesh", "codeartifact", "route53"]
        assert all(r["service_id"] for r in rows)

    def test_table(self, runner):
        result = runner.invoke(cli, ["services"])

        assert result.exit_code == 0
        assert "route53" in result.output


# =============================================================================
# list Tests
# =============================================================================


class TestListCommand:
    """list 명령"""

    def test_json(self, runner, codeartifact):
        import json

        result = runner.invoke(cli, ["list", "codeartifact", ARN, "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "aws:cloudformation:stack-name": "stack",
            "env": "dev",
            "old": "x",
        }
        codeartifact.list_tags_for_resource.assert_called_once_with(resourceArn=ARN)

    def test_ignore_tags_from_config(self, runner, codeartifact, tag_config):
        import json

        result = runner.invoke(cli, ["list", "codeartifact", ARN, "--json", "-c", tag_config])

        assert result.exit_code == 0, result.output
        assert "old" not in json.loads(result.output)

    def test_no_tags(self, runner, codeartifact):
        codeartifact.list_tags_for_resource.return_value = {"tags": []}

        result = runner.invoke(cli, ["list", "codeartifact", ARN])

        assert result.exit_code == 0
        assert "태그 없음" in result.output

    def test_profile_and_region_passed(self, runner, mock_meta):
        mock_meta.client("codeartifact").list_tags_for_resource.return_value = {"tags": []}

        with patch("cli.app.AWSClient") as client_class:
            client_class.from_profile.return_value = mock_meta
            result = runner.invoke(cli, ["list", "codeartifact", ARN, "-p", "dev", "-r", "us-west-2"])

        assert result.exit_code == 0, result.output
        client_class.from_profile.assert_called_once_with("dev", "us-west-2")

    def test_unknown_service(self, runner):
        result = runner.invoke(cli, ["list", "s3", "bucket"])

        assert result.exit_code == 1

    def test_api_error(self, runner, codeartifact, client_error):
        codeartifact.list_tags_for_resource.side_effect = client_error("AccessDeniedException")

        result = runner.invoke(cli, ["list", "codeartifact", ARN])

        assert result.exit_code == 1


# =============================================================================
# sync Tests
# =============================================================================


class TestSyncCommand:
    """sync 명령"""

    def test_sync_applies_diff(self, runner, codeartifact):
        result = runner.invoke(cli, ["sync", "codeartifact", ARN, "-t", "env=prod", "-t", "team=a"])

        assert result.exit_code == 0, result.output

        codeartifact.untag_resource.assert_called_once()
        assert codeartifact.untag_resource.call_args.kwargs["resourceArn"] == ARN
        assert codeartifact.untag_resource.call_args.kwargs["tagKeys"] == ["old"]

        codeartifact.tag_resource.assert_called_once()
        sent = codeartifact.tag_resource.call_args.kwargs["tags"]
        assert sorted((t["key"], t["value"]) for t in sent) == [("env", "prod"), ("team", "a")]

    def test_dry_run(self, runner, codeartifact):
        result = runner.invoke(cli, ["sync", "codeartifact", ARN, "-t", "env=prod", "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "--dry-run" in result.output
        codeartifact.untag_resource.assert_not_called()
        codeartifact.tag_resource.assert_not_called()

    def test_no_changes(self, runner, codeartifact):
        codeartifact.list_tags_for_resource.return_value = {"tags": [{"key": "env", "value": "prod"}]}

        result = runner.invoke(cli, ["sync", "codeartifact", ARN, "-t", "env=prod"])

        assert result.exit_code == 0
        assert "변경 없음" in result.output
        codeartifact.tag_resource.assert_not_called()

    def test_default_and_ignore_tags(self, runner, codeartifact, tag_config):
        result = runner.invoke(cli, ["sync", "codeartifact", ARN, "-t", "env=dev", "-c", tag_config])

        assert result.exit_code == 0, result.output
        # ignore_tags의 old는 제거하지 않고, default_tags의 owner만 추가
        codeartifact.untag_resource.assert_not_called()
        sent = codeartifact.tag_resource.call_args.kwargs["tags"]
        assert sent == [{"key": "owner", "value": "platform"}]

    def test_update_failure(self, runner, codeartifact, client_error):
        codeartifact.untag_resource.side_effect = client_error("ThrottlingException")

        result = runner.invoke(cli, ["sync", "codeartifact", ARN, "-t", "env=prod"])

        assert result.exit_code == 1
        codeartifact.tag_resource.assert_not_called()

    def test_invalid_tag_option(self, runner):
        result = runner.invoke(cli, ["sync", "codeartifact", ARN, "-t", "=oops"])

        assert result.exit_code == 2
