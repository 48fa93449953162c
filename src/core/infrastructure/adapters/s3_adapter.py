"""Thin adapter for interacting with Amazon S3."""

from collections.abc import Mapping
from typing import Any, Protocol

import boto3


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def head_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Mapping[str, Any]: ...

    def download_file(
        self,
        Bucket: str,
        Key: str,
        Filename: str,
    ) -> None: ...

    def upload_file(
        self,
        Filename: str,
        Bucket: str,
        Key: str,
        ExtraArgs: Mapping[str, Any] | None = None,
    ) -> None: ...

    def delete_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Any: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (repository-facing)."""

    def head_object(self, *, bucket: str, key: str) -> Mapping[str, Any]: ...

    def download_file(self, *, bucket: str, key: str, filename: str) -> None: ...

    def upload_file(
        self,
        *,
        bucket: str,
        key: str,
        filename: str,
        extra_args: dict[str, Any],
    ) -> None: ...

    def delete_object(self, *, bucket: str, key: str) -> None: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors

    The bucket is passed per call since it comes from the triggering event.
    """

    def __init__(
        self,
        *,
        endpoint_url: str | None = None,
        region_name: str | None = None,
    ) -> None:
        """Create the S3 client once per process."""
        self._client: _Boto3S3Client = boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            region_name=region_name,
        )

    def head_object(self, *, bucket: str, key: str) -> Mapping[str, Any]:
        """Fetch object headers and user metadata.
        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._client.head_object(Bucket=bucket, Key=key)

    def download_file(self, *, bucket: str, key: str, filename: str) -> None:
        """Download object content to a local file.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.download_file(bucket, key, filename)

    def upload_file(
        self,
        *,
        bucket: str,
        key: str,
        filename: str,
        extra_args: dict[str, Any],
    ) -> None:
        """Upload a local file with headers and user metadata.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.upload_file(filename, bucket, key, ExtraArgs=extra_args)

    def delete_object(self, *, bucket: str, key: str) -> None:
        """Delete object from S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.delete_object(Bucket=bucket, Key=key)
