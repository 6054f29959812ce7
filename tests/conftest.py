"""
Pytest configuration and fixtures for upload core tests.
Provides AWS mocking and S3 fixtures with proper cleanup.
"""

import os
from collections.abc import Callable
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("STORAGE_S3_BUCKET_NAME", "uploads-test")
os.environ.setdefault("POWERTOOLS_LOG_LEVEL", "DEBUG")

BUCKET_NAME = os.environ["STORAGE_S3_BUCKET_NAME"]
PUBLIC_BASE_URL = f"https://{BUCKET_NAME}.s3.us-east-1.amazonaws.com"


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


def _cleanup_s3_objects(s3_client, bucket_name):
    """Helper to delete all objects from S3 bucket efficiently."""
    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name):
            objects = page.get("Contents", [])
            if objects:
                delete_keys = [{"Key": obj["Key"]} for obj in objects]
                s3_client.delete_objects(
                    Bucket=bucket_name, Delete={"Objects": delete_keys}
                )
    except ClientError as e:
        if e.response["Error"]["Code"] != "NoSuchBucket":
            raise


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create and manage S3 bucket for testing.

    Cleanup Strategy:
    - Objects are deleted after each test (teardown)
    - Bucket is NOT deleted (moto cleans up on context exit)
    """
    try:
        s3_client.head_bucket(Bucket=BUCKET_NAME)
    except ClientError:
        s3_client.create_bucket(Bucket=BUCKET_NAME)

    yield s3_client

    _cleanup_s3_objects(s3_client, BUCKET_NAME)


@pytest.fixture
def s3_put_object(s3_bucket) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("images/user/a.png", b"bytes", "image/png")
    """

    def _put(key: str, body: bytes = b"data", content_type: str = "application/octet-stream"):
        return s3_bucket.put_object(
            Bucket=BUCKET_NAME, Key=key, Body=body, ContentType=content_type
        )

    return _put


@pytest.fixture
def s3_head_object(s3_bucket) -> Callable[[str], dict[str, Any]]:
    """
    Helper to read object headers from S3.

    Usage:
        headers = s3_head_object("images/user/a.png")
    """

    def _head(key: str) -> dict[str, Any]:
        response: dict[str, Any] = s3_bucket.head_object(Bucket=BUCKET_NAME, Key=key)
        return response

    return _head


@pytest.fixture
def s3_keys(s3_bucket) -> Callable[[], list[str]]:
    """Helper returning every key currently in the test bucket."""

    def _keys() -> list[str]:
        response = s3_bucket.list_objects_v2(Bucket=BUCKET_NAME)
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _keys


@pytest.fixture
def sample_file_row() -> dict[str, Any]:
    """Stored file record in persistence (snake_case) shape."""
    return {
        "id": "file_1",
        "filename": "cat.png",
        "file_path": "images/john/1700000000000-abc123.png",
        "file_size": 3145728,
        "mime_type": "image/png",
        "public_url": f"{PUBLIC_BASE_URL}/images/john/1700000000000-abc123.png",
        "user_id": "john",
        "status": "completed",
        "description": "A cat on a sofa.",
        "tags": ["cat", "sofa", "pet", "indoor", "animal"],
        "uploaded_at": "2024-01-01T10:00:00+00:00",
        "updated_at": "2024-01-01T10:00:05+00:00",
    }


@pytest.fixture
def sample_file_payload() -> dict[str, Any]:
    """Same record as `sample_file_row`, keyed in camelCase."""
    return {
        "id": "file_1",
        "filename": "cat.png",
        "filePath": "images/john/1700000000000-abc123.png",
        "fileSize": 3145728,
        "mimeType": "image/png",
        "publicUrl": f"{PUBLIC_BASE_URL}/images/john/1700000000000-abc123.png",
        "userId": "john",
        "status": "completed",
        "description": "A cat on a sofa.",
        "tags": ["cat", "sofa", "pet", "indoor", "animal"],
        "uploadedAt": "2024-01-01T10:00:00+00:00",
        "updatedAt": "2024-01-01T10:00:05+00:00",
    }


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    import base64

    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)
