"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import pytest
from minio.error import S3Error

from bucketgate.storage.contracts import GatewayConfig
from bucketgate.storage.s3_gateway import S3Gateway


def make_s3_error(code: str, status: int = 400, bucket: str | None = "bucket1", key: str | None = None) -> S3Error:
    """Build a real provider error; keywords keep it independent of SDK argument order."""
    response = MagicMock()
    response.status = status
    return S3Error(
        code=code,
        message=f"{code} message",
        resource=f"/{bucket}/{key}",
        request_id="request",
        host_id="host",
        response=response,
        bucket_name=bucket,
        object_name=key,
    )


@pytest.fixture
def gateway_config():
    return GatewayConfig(bucket="bucket1", region="us-east-1", access_key="ak", secret_key="sk")


@pytest.fixture
def mock_client():
    """Create a mock MinIO client."""
    client = MagicMock()
    client.presigned_put_object = MagicMock(return_value="https://signed-put")
    client.presigned_get_object = MagicMock(return_value="https://signed-get")
    client.presigned_post_policy = MagicMock(
        return_value={
            "x-amz-algorithm": "AWS4-HMAC-SHA256",
            "x-amz-credential": "ak/20260101/r/s3/aws4_request",
            "x-amz-date": "20260101T000000Z",
            "policy": "cG9saWN5",
            "x-amz-signature": "sig",
        }
    )
    return client


@pytest.fixture
def gateway(gateway_config, mock_client):
    return S3Gateway(gateway_config, mock_client)


def stat_result(size=None, checksum=None, etag="etag", content_type="image/png"):
    stat = MagicMock()
    stat.size = size
    stat.etag = etag
    stat.content_type = content_type
    stat.metadata = {"x-amz-checksum-sha256": checksum} if checksum is not None else {}
    return stat


@pytest.fixture
def s3_error():
    return make_s3_error


@pytest.fixture
def make_stat():
    return stat_result
