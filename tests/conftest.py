"""
Pytest configuration and fixtures for image-resize tests.
Provides AWS mocking, an S3 bucket with cleanup, and image factories.
"""

import io
import os
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws
from PIL import Image

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_DEV", "false")

TEST_BUCKET_NAME = "image-resize-test-bucket"


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
def s3_bucket(s3_client) -> str:
    """
    Create and manage S3 bucket for testing.

    Cleanup Strategy:
    - Objects are deleted after each test (teardown)
    - Bucket is NOT deleted (moto cleans up on context exit)
    """
    try:
        s3_client.head_bucket(Bucket=TEST_BUCKET_NAME)
    except ClientError:
        s3_client.create_bucket(Bucket=TEST_BUCKET_NAME)

    yield TEST_BUCKET_NAME

    _cleanup_s3_objects(s3_client, TEST_BUCKET_NAME)


@pytest.fixture
def s3_put_object(s3_client, s3_bucket) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("uploads/photo.jpg", image_bytes, "image/jpeg", metadata={...})
    """

    def _put(key: str, body: bytes, content_type: str | None = None, **kwargs: Any):
        params: dict[str, Any] = {"Bucket": s3_bucket, "Key": key, "Body": body}
        if content_type:
            params["ContentType"] = content_type
        if "metadata" in kwargs:
            params["Metadata"] = kwargs.pop("metadata")
        params.update(kwargs)
        return s3_client.put_object(**params)

    return _put


@pytest.fixture
def s3_head_object(s3_client, s3_bucket) -> Callable[[str], dict[str, Any]]:
    """Helper to read headers and user metadata of an object."""

    def _head(key: str) -> dict[str, Any]:
        response: dict[str, Any] = s3_client.head_object(Bucket=s3_bucket, Key=key)
        return response

    return _head


@pytest.fixture
def s3_get_image(s3_client, s3_bucket) -> Callable[[str], Image.Image]:
    """Helper to download an object and open it with Pillow."""

    def _get(key: str) -> Image.Image:
        body = s3_client.get_object(Bucket=s3_bucket, Key=key)["Body"].read()
        image = Image.open(io.BytesIO(body))
        image.load()
        return image

    return _get


@pytest.fixture
def s3_list_keys(s3_client, s3_bucket) -> Callable[[], list[str]]:
    """Helper to list every key in the test bucket."""

    def _list() -> list[str]:
        response = s3_client.list_objects_v2(Bucket=s3_bucket)
        return sorted(obj["Key"] for obj in response.get("Contents", []))

    return _list


def make_image_bytes(
    width: int,
    height: int,
    image_format: str = "JPEG",
    *,
    orientation: int | None = None,
) -> bytes:
    """Create a test image and return its bytes."""
    image = Image.new("RGB", (width, height), color="blue")
    buffer = io.BytesIO()

    if orientation is not None:
        exif = Image.Exif()
        exif[0x0112] = orientation
        image.save(buffer, format=image_format, exif=exif)
    else:
        image.save(buffer, format=image_format)

    return buffer.getvalue()


@pytest.fixture
def image_bytes() -> Callable[..., bytes]:
    """Factory fixture around :func:`make_image_bytes`."""
    return make_image_bytes


@pytest.fixture
def image_file(tmp_path) -> Callable[..., str]:
    """Write a generated image to a local file and return its path."""

    def _write(name: str, width: int, height: int, image_format: str = "JPEG", **kwargs: Any) -> str:
        path = tmp_path / "source" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(make_image_bytes(width, height, image_format, **kwargs))
        return str(path)

    return _write


@pytest.fixture
def scratch_dir(tmp_path) -> str:
    """Dedicated scratch root so leftover files can be detected."""
    path = tmp_path / "scratch"
    path.mkdir()
    return str(path)


def list_files(root: str) -> list[str]:
    """Every regular file below ``root``."""
    return [
        os.path.join(directory, name)
        for directory, _, names in os.walk(root)
        for name in names
    ]


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=512,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


def s3_event(*keys: str, bucket: str = TEST_BUCKET_NAME, event_name: str = "ObjectCreated:Put") -> dict[str, Any]:
    """Build an S3 notification event for the given keys."""
    return {
        "Records": [
            {
                "eventVersion": "2.1",
                "eventSource": "aws:s3",
                "awsRegion": "us-east-1",
                "eventName": event_name,
                "s3": {
                    "s3SchemaVersion": "1.0",
                    "bucket": {"name": bucket, "arn": f"arn:aws:s3:::{bucket}"},
                    "object": {"key": key, "size": 1024},
                },
            }
            for key in keys
        ]
    }
