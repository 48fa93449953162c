#!/usr/bin/env python3
"""
Seed script that uploads generated sample images to trigger the resize function.

Run:
    python seed/upload_sample_images.py \
      --bucket <BUCKET> \
      --prefix uploads/
"""

import argparse
import io
import sys
from typing import Any

from aws_lambda_powertools import Logger
import boto3
from PIL import Image

logger = Logger(service="seed")

LOCALSTACK_URL = "http://localhost:4566"

# (file name, width, height, content type, Pillow format, colour)
SAMPLE_IMAGES: list[tuple[str, int, int, str, str, str]] = [
    ("landscape.jpg", 1600, 900, "image/jpeg", "JPEG", "steelblue"),
    ("portrait.jpg", 900, 1600, "image/jpeg", "JPEG", "darkorange"),
    ("square.png", 1024, 1024, "image/png", "PNG", "seagreen"),
    ("small.webp", 120, 80, "image/webp", "WEBP", "crimson"),
    ("scan.tiff", 2480, 3508, "image/tiff", "TIFF", "lightgray"),
]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Upload sample images to a bucket")

    parser.add_argument(
        "--bucket",
        required=True,
        help="Bucket the resize function listens on",
    )
    parser.add_argument(
        "--prefix",
        default="",
        help="Key prefix for uploaded samples (e.g. 'uploads/')",
    )
    parser.add_argument(
        "--endpoint-url",
        default=LOCALSTACK_URL,
        help="S3 endpoint (LocalStack by default)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=len(SAMPLE_IMAGES),
        help="Number of images to upload",
    )

    return parser.parse_args(argv)


def build_sample_image(width: int, height: int, image_format: str, color: str) -> bytes:
    image = Image.new("RGB", (width, height), color=color)
    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    return buffer.getvalue()


def upload_samples(client: Any, bucket: str, prefix: str = "", limit: int | None = None) -> list[str]:
    """Upload the sample images and return their keys."""
    keys: list[str] = []

    for name, width, height, content_type, image_format, color in SAMPLE_IMAGES[:limit]:
        key = f"{prefix}{name}"
        client.put_object(
            Bucket=bucket,
            Key=key,
            Body=build_sample_image(width, height, image_format, color),
            ContentType=content_type,
        )
        logger.info(
            "Uploaded sample image",
            extra={"key": key, "width": width, "height": height},
        )
        keys.append(key)

    return keys


def main(argv: list[str] | None = None) -> None:
    try:
        args = parse_args(argv)
        client = boto3.client("s3", endpoint_url=args.endpoint_url)

        logger.info(
            "Starting seeding process",
            extra={"bucket": args.bucket, "endpoint_url": args.endpoint_url},
        )
        keys = upload_samples(client, args.bucket, args.prefix, args.limit)
        logger.info("Seeding completed", extra={"uploaded": len(keys)})

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
