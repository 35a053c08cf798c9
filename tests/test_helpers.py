"""Tests for the response translation helpers."""

import json

import pytest

from aws_to_terraform.helpers import (
    get_tag_value,
    get_zone_id,
    monitoring_enabled,
    policy_document,
    pretty_json,
    sanitize_resource_name,
    short_name,
    tags_to_dict,
)


def test_short_name_from_instance_profile_arn():
    assert short_name('arn:aws:iam::123456789012:instance-profile/myprofile') == 'myprofile'


def test_short_name_without_path():
    assert short_name('myprofile') == 'myprofile'
    assert short_name(None) is None
    assert short_name('') is None


def test_get_zone_id():
    assert get_zone_id('/hostedzone/Z0123456789ABC') == 'Z0123456789ABC'
    assert get_zone_id('Z0123456789ABC') == 'Z0123456789ABC'
    assert get_zone_id(None) is None


@pytest.mark.parametrize('state,expected', [
    ('disabled', False),
    ('enabled', True),
    ('pending', True),
    ('disabling', True),
])
def test_monitoring_enabled(state, expected):
    assert monitoring_enabled(state) is expected


class TestTags:
    def test_mapping_keyed_by_value(self):
        tags = [
            {'Key': 'Name', 'Value': 'web'},
            {'Key': 'Env', 'Value': 'prod'},
            {'Key': ''.join(['Na', 'me']), 'Value': 'web-2'},
        ]
        # Equal key text collides regardless of which string object carries it
        assert tags_to_dict(tags) == {'Name': 'web-2', 'Env': 'prod'}

    def test_absent_and_empty(self):
        assert tags_to_dict(None) is None
        assert tags_to_dict([]) == {}

    def test_get_tag_value(self):
        assert get_tag_value({'Name': 'web'}, 'Name') == 'web'
        assert get_tag_value({'Name': ''}, 'Name') is None
        assert get_tag_value(None, 'Name') is None


class TestSanitizeResourceName:
    def test_replaces_invalid_characters(self):
        assert sanitize_resource_name('My Web-Server.prod') == 'my_web_server_prod'

    def test_leading_digit(self):
        assert sanitize_resource_name('123-bucket') == '_123_bucket'

    def test_empty_uses_default(self):
        assert sanitize_resource_name('', 'vpc') == 'vpc'


class TestPolicyDocuments:
    DOCUMENT = {'Version': '2012-10-17', 'Statement': [{'Effect': 'Allow', 'Action': 's3:*'}]}

    def test_pretty_json(self):
        assert pretty_json(json.dumps(self.DOCUMENT)) == json.dumps(self.DOCUMENT, indent=2)

    def test_malformed_json_is_fatal(self):
        with pytest.raises(json.JSONDecodeError):
            pretty_json('{"Version": ')

    def test_url_encoded_document(self):
        encoded = '%7B%22Version%22%3A%20%222012-10-17%22%7D'
        assert policy_document(encoded) == '{\n  "Version": "2012-10-17"\n}'

    def test_decoded_document(self):
        assert policy_document(self.DOCUMENT) == json.dumps(self.DOCUMENT, indent=2)

    def test_missing_document(self):
        assert policy_document(None) is None
