"""Pytest fixtures for cloud_glue tests (moto-backed AWS resources and a fake GitHub API)."""

import os

import pytest
from moto import mock_aws

from cloud_glue import BucketRef, RepositorySettings, StoreCredentials
from tests.helpers import FakeGitHub

REGION = "us-east-1"


@pytest.fixture(scope="function")
def aws_credentials():
    """Set fake AWS credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = REGION


@pytest.fixture
def moto_aws(aws_credentials):
    """Enable moto mock for S3 and SES."""
    with mock_aws():
        yield


@pytest.fixture
def store_credentials() -> StoreCredentials:
    return StoreCredentials(
        access_key_id="testing",
        secret_access_key="testing",
        region=REGION,
    )


@pytest.fixture
def s3_buckets(moto_aws, store_credentials):
    """Create source and destination S3 buckets and return their refs."""
    import boto3

    client = boto3.client("s3", region_name=REGION)
    client.create_bucket(Bucket="test-source-bucket")
    client.create_bucket(Bucket="test-destination-bucket")
    return (
        BucketRef(credentials=store_credentials, bucket_name="test-source-bucket"),
        BucketRef(credentials=store_credentials, bucket_name="test-destination-bucket"),
    )


@pytest.fixture
def verified_sender(moto_aws):
    """Verify a sender identity in SES and return the address."""
    import boto3

    client = boto3.client("ses", region_name=REGION)
    client.verify_email_identity(EmailAddress="sender@example.com")
    return "sender@example.com"


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def repo_settings() -> RepositorySettings:
    return RepositorySettings(owner="acme", name="docs", access_token="ghp_test")
