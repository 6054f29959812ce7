"""Thin adapter for interacting with Amazon S3 or an S3-compatible service."""

from collections.abc import Iterator, Mapping, Sequence
import os
from typing import Any, Protocol
from urllib.parse import quote

import boto3

from upload_core.models.errors import ConfigurationError
from upload_core.utils.constants import (
    DEFAULT_AWS_REGION,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_STORAGE_PUBLIC_BASE_URL,
    ENV_STORAGE_S3_BUCKET_NAME,
)


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def put_object(
        self,
        *,
        Bucket: str,
        Key: str,
        Body: bytes,
        ContentType: str,
        CacheControl: str,
    ) -> Any: ...

    def head_object(self, *, Bucket: str, Key: str) -> Mapping[str, Any]: ...

    def delete_object(self, *, Bucket: str, Key: str) -> Any: ...

    def delete_objects(
        self,
        *,
        Bucket: str,
        Delete: Mapping[str, Any],
    ) -> Mapping[str, Any]: ...

    def get_paginator(self, operation_name: str) -> Any: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (provider-facing)."""

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        cache_control: str,
    ) -> None: ...

    def head_object(self, *, key: str) -> Mapping[str, Any]: ...

    def delete_object(self, *, key: str) -> None: ...

    def delete_objects(self, *, keys: Sequence[str]) -> Mapping[str, Any]: ...

    def list_names(self, *, prefix: str) -> Iterator[str]: ...

    def public_url(self, *, key: str) -> str: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps a boto3 S3 client, injected or built from the environment
    - Does NOT handle errors (lets them bubble up)
    - Provider implementations catch and translate errors
    """

    def __init__(
        self,
        *,
        client: Any | None = None,
        bucket_name: str | None = None,
        public_base_url: str | None = None,
    ) -> None:
        """Bind to a bucket using the given client or environment configuration."""
        bucket = bucket_name or os.getenv(ENV_STORAGE_S3_BUCKET_NAME)
        if not bucket:
            raise ConfigurationError(
                message=f"{ENV_STORAGE_S3_BUCKET_NAME} environment variable is not set",
                details={"env": ENV_STORAGE_S3_BUCKET_NAME},
            )

        endpoint_url = os.getenv(ENV_AWS_ENDPOINT_URL)
        region = os.getenv(ENV_AWS_REGION, DEFAULT_AWS_REGION)

        self._bucket = bucket
        self._client: _Boto3S3Client = client or boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            region_name=region,
        )
        self._public_base_url = (
            public_base_url
            or os.getenv(ENV_STORAGE_PUBLIC_BASE_URL)
            or self._default_public_base_url(bucket, endpoint_url, region)
        ).rstrip("/")

    @property
    def bucket_name(self) -> str:
        return self._bucket

    @property
    def public_base_url(self) -> str:
        return self._public_base_url

    @staticmethod
    def _default_public_base_url(bucket: str, endpoint_url: str | None, region: str) -> str:
        if endpoint_url:
            # Path-style addressing for LocalStack, MinIO and similar endpoints.
            return f"{endpoint_url.rstrip('/')}/{bucket}"
        return f"https://{bucket}.s3.{region}.amazonaws.com"

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        cache_control: str,
    ) -> None:
        """Store object in S3.
        Raises boto3 exceptions - caught by provider implementation.
        """
        self._client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            CacheControl=cache_control,
        )

    def head_object(self, *, key: str) -> Mapping[str, Any]:
        """Fetch object headers.
        Raises ClientError with a 404 code when the key is missing.
        """
        return self._client.head_object(Bucket=self._bucket, Key=key)

    def delete_object(self, *, key: str) -> None:
        """Delete object from S3.
        Raises boto3 exceptions - caught by provider implementation.
        """
        self._client.delete_object(Bucket=self._bucket, Key=key)

    def delete_objects(self, *, keys: Sequence[str]) -> Mapping[str, Any]:
        """Delete several objects in one request.
        Per-key failures are returned under "Errors", not raised.
        """
        return self._client.delete_objects(
            Bucket=self._bucket,
            Delete={"Objects": [{"Key": key} for key in keys], "Quiet": True},
        )

    def list_names(self, *, prefix: str) -> Iterator[str]:
        """Yield names of objects directly under `prefix` (one level deep)."""
        paginator = self._client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=self._bucket, Prefix=prefix, Delimiter="/"):
            for obj in page.get("Contents", []):
                yield obj["Key"][len(prefix):]

    def public_url(self, *, key: str) -> str:
        """Derive the public URL of an object. No network I/O."""
        return f"{self._public_base_url}/{quote(key, safe='/')}"
