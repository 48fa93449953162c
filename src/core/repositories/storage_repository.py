"""Abstract contract for image file storage."""

from abc import ABC, abstractmethod

from core.models.image import ObjectDescriptor, UploadMetadata


class ImageStorageRepository(ABC):
    """Contract for reading and writing stored images.

    Implementations could be S3, GCS, local disk, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def describe_image(self, *, bucket: str, key: str) -> ObjectDescriptor:
        """Fetch the headers and user metadata of a stored object.

        Raises:
            NotFoundError: If the object doesn't exist
            ImageDownloadFailedError: If the lookup fails
        """

    @abstractmethod
    def download_image(self, *, bucket: str, key: str, destination: str) -> None:
        """Download an object to a local file.

        Args:
            bucket: Source bucket
            key: Object key
            destination: Local path; parent directories must exist

        Raises:
            NotFoundError: If the object doesn't exist
            ImageDownloadFailedError: If the transfer fails
        """

    @abstractmethod
    def upload_image(
        self,
        *,
        bucket: str,
        key: str,
        source: str,
        metadata: UploadMetadata,
    ) -> str:
        """Upload a local file and return its storage key.

        Raises:
            ImageUploadFailedError: If the upload fails
        """

    @abstractmethod
    def remove_image(self, *, bucket: str, key: str) -> None:
        """Delete an object.

        Raises:
            ImageDeletionFailedError: If deletion fails
        """
