"""
tests/services/test_route53_tags.py - Route 53 태그 glue 테스트
"""

from unittest.mock import MagicMock

import pytest

from core.exceptions import TagListError, TagUpdateError
from core.tags import tags_context
from services import route53
from services.route53.tags import MAX_TAGS_PER_CHANGE, parse_identifier


@pytest.fixture
def hosted_zone(moto_route53):
    """moto 호스팅 영역 (client, zone_id)"""
    output = moto_route53.create_hosted_zone(Name="tf-acc-test.com", CallerReference="tags-test")
    return moto_route53, output["HostedZone"]["Id"]


class TestIdentifier:
    """식별자 파싱"""

    @pytest.mark.parametrize(
        "identifier,expected",
        [
            ("Z123", ("hostedzone", "Z123")),
            ("/hostedzone/Z123", ("hostedzone", "Z123")),
            ("hostedzone/Z123", ("hostedzone", "Z123")),
            ("healthcheck/abcd-1234", ("healthcheck", "abcd-1234")),
        ],
    )
    def test_parse_identifier(self, identifier, expected):
        assert parse_identifier(identifier) == expected

    def test_clean_zone_id(self):
        assert route53.clean_zone_id("/hostedzone/Z123") == "Z123"
        assert route53.clean_zone_id("Z123") == "Z123"


class TestRoute53TagsMoto:
    """moto Route 53 대상 테스트"""

    def test_list_tags_empty(self, hosted_zone):
        client, zone_id = hosted_zone
        assert len(route53.list_tags(client, zone_id)) == 0

    def test_update_and_list(self, hosted_zone):
        client, zone_id = hosted_zone

        route53.update_tags(client, zone_id, None, {"env": "dev", "team": "platform"})
        assert route53.list_tags(client, zone_id).map() == {"env": "dev", "team": "platform"}

        route53.update_tags(client, zone_id, {"env": "dev", "team": "platform"}, {"env": "prod"})
        assert route53.list_tags(client, zone_id).map() == {"env": "prod"}

    def test_service_package(self, hosted_zone, mock_meta):
        client, zone_id = hosted_zone
        mock_meta.clients["route53"] = client

        package = route53.ServicePackage()
        package.update_tags(mock_meta, zone_id, {}, {"key1": "value1"})

        with tags_context() as ctx:
            package.list_tags(mock_meta, zone_id)

        assert ctx.tags_out.map() == {"key1": "value1"}


class TestRoute53TagsMock:
    """change_tags_for_resource 호출 형태"""

    def test_single_change_call(self):
        conn = MagicMock()

        route53.update_tags(conn, "/hostedzone/Z123", {"old": "x"}, {"new": "y"})

        conn.change_tags_for_resource.assert_called_once_with(
            ResourceType="hostedzone",
            ResourceId="Z123",
            RemoveTagKeys=["old"],
            AddTags=[{"Key": "new", "Value": "y"}],
        )

    def test_no_change(self):
        conn = MagicMock()

        route53.update_tags(conn, "Z123", {"a": "1", "aws:x": "y"}, {"a": "1"})

        conn.change_tags_for_resource.assert_not_called()

    def test_chunked_by_limit(self):
        conn = MagicMock()
        new = {f"k{i:02d}": "v" for i in range(MAX_TAGS_PER_CHANGE + 5)}

        route53.update_tags(conn, "Z123", {"gone": "x"}, new)

        calls = conn.change_tags_for_resource.call_args_list
        assert len(calls) == 2
        assert calls[0].kwargs["RemoveTagKeys"] == ["gone"]
        assert len(calls[0].kwargs["AddTags"]) == MAX_TAGS_PER_CHANGE
        assert "RemoveTagKeys" not in calls[1].kwargs
        assert len(calls[1].kwargs["AddTags"]) == 5

    def test_health_check_resource_type(self):
        conn = MagicMock()
        conn.list_tags_for_resource.return_value = {
            "ResourceTagSet": {"ResourceType": "healthcheck", "ResourceId": "hc-1", "Tags": []}
        }

        route53.list_tags(conn, "healthcheck/hc-1")

        conn.list_tags_for_resource.assert_called_once_with(ResourceType="healthcheck", ResourceId="hc-1")

    def test_list_error(self, client_error):
        conn = MagicMock()
        conn.list_tags_for_resource.side_effect = client_error("NoSuchHostedZone")

        with pytest.raises(TagListError):
            route53.list_tags(conn, "Z404")

    def test_update_error(self, client_error):
        conn = MagicMock()
        conn.change_tags_for_resource.side_effect = client_error("InvalidInput")

        with pytest.raises(TagUpdateError) as exc_info:
            route53.update_tags(conn, "Z123", {}, {"a": "1"})

        assert str(exc_info.value).startswith("tagging resource (Z123): ")
