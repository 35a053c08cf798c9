"""Shared fixtures. AWS is never contacted: clients are driven by Stubber."""

import boto3
import pytest
from botocore.stub import Stubber

_AWS_ENV = (
    'AWS_ACCESS_KEY_ID',
    'AWS_SECRET_ACCESS_KEY',
    'AWS_SESSION_TOKEN',
    'AWS_SECURITY_TOKEN',
    'AWS_PROFILE',
    'AWS_DEFAULT_PROFILE',
    'AWS_DEFAULT_REGION',
    'AWS_REGION',
)


@pytest.fixture(autouse=True)
def isolated_aws_env(monkeypatch, tmp_path):
    """Keep the developer's own AWS configuration out of the tests."""
    for name in _AWS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('AWS_CONFIG_FILE', str(tmp_path / 'missing-config'))
    monkeypatch.setenv('AWS_SHARED_CREDENTIALS_FILE', str(tmp_path / 'missing-credentials'))
    monkeypatch.setenv('AWS_EC2_METADATA_DISABLED', 'true')


def make_client(service, region='us-east-1'):
    return boto3.client(
        service,
        region_name=region,
        aws_access_key_id='testing',
        aws_secret_access_key='testing',
    )


def _stubbed(service):
    client = make_client(service)
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


@pytest.fixture
def ec2():
    yield from _stubbed('ec2')


@pytest.fixture
def iam():
    yield from _stubbed('iam')


@pytest.fixture
def s3():
    yield from _stubbed('s3')


@pytest.fixture
def route53():
    yield from _stubbed('route53')
