"""Shared fixtures for smoke test harness tests."""

import io
from datetime import UTC, datetime
from unittest.mock import MagicMock

import boto3
import pytest
from botocore.config import Config
from moto import mock_aws

from s3smoke.logic.runner import SampleObject, build_sample_object

_MINIO_VARS = (
    'MINIO_ENDPOINT',
    'MINIO_ACCESS_KEY',
    'MINIO_SECRET_KEY',
    'MINIO_TEST_BUCKET',
    'MINIO_REGION',
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove MinIO settings from the environment."""
    for name in _MINIO_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fixed_now() -> datetime:
    """Timestamp used for the uploaded sample object.

    Returns:
        Fixed UTC datetime.
    """
    return datetime(2024, 5, 17, 9, 30, 15, tzinfo=UTC)


@pytest.fixture
def sample(fixed_now: datetime) -> SampleObject:
    """Sample object a run started at fixed_now uploads.

    Returns:
        SampleObject built from fixed_now.
    """
    return build_sample_object(fixed_now)


@pytest.fixture
def output() -> io.StringIO:
    """Capture progress output.

    Returns:
        Empty StringIO.
    """
    return io.StringIO()


@pytest.fixture
def mock_s3(monkeypatch):
    """Mock S3 service with path-style addressing.

    Yields:
        boto3 S3 client backed by moto.
    """
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    with mock_aws():
        yield boto3.client(
            's3',
            region_name='us-east-1',
            config=Config(s3={'addressing_style': 'path'}),
        )


@pytest.fixture
def stub_client(sample: SampleObject) -> MagicMock:
    """Client stub where every call succeeds.

    Individual tests override return values or set side effects to
    inject failures.

    Returns:
        MagicMock with S3 client methods configured.
    """
    client = MagicMock()
    client.list_buckets.return_value = {'Buckets': [{'Name': 'existing'}]}
    client.create_bucket.return_value = {}
    client.put_object.return_value = {'ETag': '"abc"'}
    client.list_objects_v2.return_value = {
        'Contents': [{'Key': sample.key}],
    }
    client.get_object.side_effect = lambda **kwargs: {
        'Body': io.BytesIO(sample.content.encode()),
    }
    client.head_object.return_value = {
        'ContentType': 'text/plain',
        'ContentLength': len(sample.content),
        'LastModified': datetime(2024, 5, 17, 9, 30, 16, tzinfo=UTC),
        'ETag': '"abc"',
    }
    client.copy_object.return_value = {}
    client.delete_objects.return_value = {
        'Deleted': [{'Key': sample.key}, {'Key': sample.copy_key}],
    }
    client.delete_bucket.return_value = {}
    return client
