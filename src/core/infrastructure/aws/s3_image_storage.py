"""S3-backed implementation of ImageStorageRepository."""

from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import (
    ImageDeletionFailedError,
    ImageDownloadFailedError,
    ImageUploadFailedError,
    NotFoundError,
)
from core.models.image import ObjectDescriptor, UploadMetadata
from core.repositories.storage_repository import ImageStorageRepository

logger = Logger(UTC=True)

_MISSING_OBJECT_CODES = frozenset({"404", "NoSuchKey", "NotFound"})

# UploadMetadata field -> boto3 ExtraArgs key
_UPLOAD_HEADER_ARGS = {
    "content_type": "ContentType",
    "content_disposition": "ContentDisposition",
    "content_encoding": "ContentEncoding",
    "content_language": "ContentLanguage",
    "cache_control": "CacheControl",
}


def _is_missing_object(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") in _MISSING_OBJECT_CODES


class S3ImageStorage(ImageStorageRepository):
    """Image storage implementation backed by Amazon S3."""

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3 = adapter or S3Adapter()

    def describe_image(self, *, bucket: str, key: str) -> ObjectDescriptor:
        """Build the object descriptor from a HEAD request."""
        logger.debug("Describing image", extra={"bucket": bucket, "key": key})

        try:
            response = self._s3.head_object(bucket=bucket, key=key)

        except ClientError as exc:
            if _is_missing_object(exc):
                logger.warning("Image not found", extra={"bucket": bucket, "key": key})
                raise NotFoundError(
                    message="Image not found",
                    details={"bucket": bucket, "key": key},
                ) from exc

            logger.error("S3 head request failed", extra={"bucket": bucket, "key": key})
            raise ImageDownloadFailedError(
                message="Unable to read image metadata",
                details={"bucket": bucket, "key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error reading image metadata")
            raise ImageDownloadFailedError(
                message="Unable to read image metadata",
                details={"bucket": bucket, "key": key},
            ) from exc

        return ObjectDescriptor(
            bucket=bucket,
            key=key,
            content_type=response.get("ContentType"),
            content_encoding=response.get("ContentEncoding"),
            content_disposition=response.get("ContentDisposition"),
            content_language=response.get("ContentLanguage"),
            cache_control=response.get("CacheControl"),
            metadata=dict(response.get("Metadata") or {}),
        )

    def download_image(self, *, bucket: str, key: str, destination: str) -> None:
        """Download the object to ``destination``."""
        logger.debug(
            "Downloading image",
            extra={"bucket": bucket, "key": key, "local_path": destination},
        )

        try:
            self._s3.download_file(bucket=bucket, key=key, filename=destination)
            logger.info(
                "Image downloaded successfully",
                extra={"key": key, "local_path": destination},
            )

        except ClientError as exc:
            logger.error("S3 download failed", extra={"bucket": bucket, "key": key})

            if _is_missing_object(exc):
                raise NotFoundError(
                    message="Image not found",
                    details={"bucket": bucket, "key": key},
                ) from exc

            raise ImageDownloadFailedError(
                message="Unable to download image at this time",
                details={"bucket": bucket, "key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error downloading image")
            raise ImageDownloadFailedError(
                message="Unable to download image at this time",
                details={"bucket": bucket, "key": key},
            ) from exc

    def upload_image(
        self,
        *,
        bucket: str,
        key: str,
        source: str,
        metadata: UploadMetadata,
    ) -> str:
        """Upload ``source`` to ``key`` and return the key."""
        extra_args = self._build_extra_args(metadata)

        logger.debug(
            "Uploading image",
            extra={"bucket": bucket, "key": key, "local_path": source},
        )

        try:
            self._s3.upload_file(
                bucket=bucket,
                key=key,
                filename=source,
                extra_args=extra_args,
            )
            logger.info("Image uploaded successfully", extra={"key": key})
            return key

        except ClientError as exc:
            logger.error("S3 upload failed", extra={"bucket": bucket, "key": key})
            raise ImageUploadFailedError(
                message="Unable to upload image at this time",
                details={"bucket": bucket, "key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error uploading image")
            raise ImageUploadFailedError(
                message="Unable to upload image at this time",
                details={"bucket": bucket, "key": key},
            ) from exc

    def remove_image(self, *, bucket: str, key: str) -> None:
        """Delete an image object from S3."""
        logger.debug("Deleting image", extra={"bucket": bucket, "key": key})

        try:
            self._s3.delete_object(bucket=bucket, key=key)
            logger.info("Image deleted successfully", extra={"key": key})

        except ClientError as exc:
            logger.error("S3 deletion failed", extra={"bucket": bucket, "key": key})
            raise ImageDeletionFailedError(
                message="Unable to delete image at this time",
                details={"bucket": bucket, "key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting image")
            raise ImageDeletionFailedError(
                message="Unable to delete image at this time",
                details={"bucket": bucket, "key": key},
            ) from exc

    @staticmethod
    def _build_extra_args(metadata: UploadMetadata) -> dict[str, Any]:
        """Translate an upload metadata bundle into boto3 ExtraArgs."""
        extra_args: dict[str, Any] = {"Metadata": dict(metadata.metadata)}

        for field, arg in _UPLOAD_HEADER_ARGS.items():
            value = getattr(metadata, field)
            if value is not None:
                extra_args[arg] = value

        return extra_args
