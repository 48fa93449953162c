"""Business logic for resizing a newly stored image.

This module coordinates validation of the stored object, download to local
scratch storage, the concurrent resize-and-upload fan-out and cleanup, while
isolating per-size failures from each other.
"""

import asyncio
import os
import uuid

from aws_lambda_powertools import Logger

from core.infrastructure.adapters.s3_adapter import S3Adapter
from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.infrastructure.imaging.pillow_resizer import PillowImageResizer
from core.models.errors import ImageDeletionFailedError, ImageServiceError
from core.models.image import ObjectDescriptor, ResizeResult, UploadMetadata
from core.models.settings import ResizeSettings
from core.repositories.resizer_repository import ImageResizerRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    DELETE_ORIGINAL_ALWAYS,
    DELETE_ORIGINAL_ON_SUCCESS,
    METADATA_DOWNLOAD_TOKENS,
    METADATA_RESIZED_IMAGE,
    METADATA_RESIZED_IMAGE_VALUE,
    OUTCOME_COMPLETED,
    OUTCOME_FAILED,
    OUTCOME_SKIPPED,
)
from core.utils.paths import (
    ensure_parent_dir,
    remove_scratch_file,
    resized_file_name,
    resized_object_key,
    scratch_path,
)
from core.utils.sizes import parse_size
from core.utils.validators import get_skip_reason

logger = Logger(UTC=True)


def build_upload_metadata(
    descriptor: ObjectDescriptor,
    cache_control_header: str | None = None,
) -> UploadMetadata:
    """Build a fresh metadata bundle for one resized variant.

    User metadata is copied, marked as resized, and any download token is
    replaced with a new random one so variants never share a token.
    """
    metadata = dict(descriptor.metadata)
    metadata[METADATA_RESIZED_IMAGE] = METADATA_RESIZED_IMAGE_VALUE

    if metadata.get(METADATA_DOWNLOAD_TOKENS):
        metadata[METADATA_DOWNLOAD_TOKENS] = str(uuid.uuid4())

    return UploadMetadata(
        content_type=descriptor.content_type,
        content_disposition=descriptor.content_disposition,
        content_encoding=descriptor.content_encoding,
        content_language=descriptor.content_language,
        cache_control=cache_control_header or descriptor.cache_control,
        metadata=metadata,
    )


class ResizeService:
    """Application service responsible for producing resized variants.

    This service orchestrates:
    - Deciding whether the stored object should be processed
    - Downloading the original to local scratch storage
    - Resizing and uploading one variant per configured size, concurrently
    - Removing scratch files and, if configured, the original object
    """

    def __init__(
        self,
        *,
        settings: ResizeSettings,
        storage: ImageStorageRepository,
        resizer: ImageResizerRepository,
    ) -> None:
        self.settings = settings
        self.storage = storage
        self.resizer = resizer

    @classmethod
    def from_settings(cls, settings: ResizeSettings) -> "ResizeService":
        """Wire the S3 and Pillow implementations for ``settings``."""
        adapter = S3Adapter(
            endpoint_url=settings.endpoint_url,
            region_name=settings.region_name,
        )
        return cls(
            settings=settings,
            storage=S3ImageStorage(adapter),
            resizer=PillowImageResizer(),
        )

    def process_object(self, *, bucket: str, key: str) -> str:
        """Process one stored object; see :meth:`process_object_async`."""
        return asyncio.run(self.process_object_async(bucket=bucket, key=key))

    async def process_object_async(self, *, bucket: str, key: str) -> str:
        """Resize one stored object to every configured size.

        The processing flow is:
        1. Describe the object and decide whether to process it
        2. Download the original to scratch storage
        3. Resize and upload every distinct size concurrently
        4. Delete the local original
        5. Delete the remote original if configured

        Never raises for storage or image failures; they are logged.

        Returns:
            One of 'completed', 'failed' or 'skipped'
        """
        logger.info("Started processing image", extra={"bucket": bucket, "key": key})

        try:
            descriptor = await asyncio.to_thread(
                self.storage.describe_image, bucket=bucket, key=key
            )
        except ImageServiceError:
            logger.exception(
                "Unable to read stored object, no resize was attempted",
                extra={"bucket": bucket, "key": key},
            )
            return OUTCOME_FAILED

        reason = get_skip_reason(descriptor)
        if reason:
            logger.info(reason, extra={"key": key, "content_type": descriptor.content_type})
            return OUTCOME_SKIPPED

        original_path: str | None = None
        try:
            original_path = scratch_path(self.settings.scratch_dir, key)
            ensure_parent_dir(original_path)

            logger.info(
                "Downloading image",
                extra={"key": key, "local_path": original_path},
            )
            await asyncio.to_thread(
                self.storage.download_image,
                bucket=bucket,
                key=key,
                destination=original_path,
            )
        except (ImageServiceError, OSError, ValueError):
            logger.exception(
                "Unable to download image, no resize was attempted",
                extra={"bucket": bucket, "key": key},
            )
            remove_scratch_file(original_path)
            return OUTCOME_FAILED

        try:
            results = await self.resize_all(descriptor, original_path)
        finally:
            logger.debug("Deleting temporary original file", extra={"key": key})
            remove_scratch_file(original_path)

        if self._should_delete_original(results):
            await asyncio.to_thread(self._delete_original, descriptor)

        failed_sizes = [result.size for result in results if not result.success]
        if failed_sizes:
            logger.error(
                "Failed to create one or more resized images",
                extra={"key": key, "failed_sizes": failed_sizes},
            )
            return OUTCOME_FAILED

        logger.info(
            "Completed processing image",
            extra={"key": key, "resized_keys": [result.key for result in results]},
        )
        return OUTCOME_COMPLETED

    async def resize_all(
        self,
        descriptor: ObjectDescriptor,
        original_path: str,
    ) -> list[ResizeResult]:
        """Run one resize task per distinct size and wait for all of them.

        A failing task does not cancel its siblings.
        """
        sizes = list(dict.fromkeys(self.settings.image_sizes))
        return list(
            await asyncio.gather(
                *(self.resize_one(descriptor, original_path, size) for size in sizes)
            )
        )

    async def resize_one(
        self,
        descriptor: ObjectDescriptor,
        original_path: str,
        size: str,
    ) -> ResizeResult:
        """Resize to ``size`` and upload the result.

        Any failure is logged and reported as an unsuccessful result.
        """
        destination_key = resized_object_key(
            descriptor.key, size, self.settings.resized_images_path
        )
        resized_path: str | None = None

        try:
            metadata = build_upload_metadata(
                descriptor, self.settings.cache_control_header
            )
            spec = parse_size(size)
            resized_path = os.path.join(
                os.path.dirname(original_path),
                resized_file_name(descriptor.key, size),
            )

            logger.info(
                "Resizing image",
                extra={"local_path": resized_path, "size": size},
            )
            width, height = await asyncio.to_thread(
                self.resizer.resize,
                source_path=original_path,
                destination_path=resized_path,
                size=spec,
                content_type=metadata.content_type,
            )
            logger.info(
                "Image resized",
                extra={"local_path": resized_path, "width": width, "height": height},
            )

            logger.info("Uploading resized image", extra={"key": destination_key})
            await asyncio.to_thread(
                self.storage.upload_image,
                bucket=descriptor.bucket,
                key=destination_key,
                source=resized_path,
                metadata=metadata,
            )

            return ResizeResult(size=size, success=True, key=destination_key)

        except Exception:
            logger.exception(
                "Failed to create resized image",
                extra={"size": size, "key": destination_key},
            )
            return ResizeResult(size=size, success=False, key=destination_key)

        finally:
            remove_scratch_file(resized_path)

    def _should_delete_original(self, results: list[ResizeResult]) -> bool:
        mode = self.settings.delete_original_file
        if mode == DELETE_ORIGINAL_ALWAYS:
            return True
        if mode == DELETE_ORIGINAL_ON_SUCCESS:
            return all(result.success for result in results)
        return False

    def _delete_original(self, descriptor: ObjectDescriptor) -> None:
        """Delete the source object; failures are logged and not retried."""
        logger.info("Deleting original image", extra={"key": descriptor.key})

        try:
            self.storage.remove_image(bucket=descriptor.bucket, key=descriptor.key)
        except ImageDeletionFailedError:
            logger.exception(
                "Failed to delete original image, resized images are kept",
                extra={"key": descriptor.key},
            )
