"""Abstract contract for image scaling."""

from abc import ABC, abstractmethod

from core.models.image import SizeSpec


class ImageResizerRepository(ABC):
    """Contract for producing a scaled copy of a local image file.

    Implementations could be Pillow, libvips, ImageMagick, etc.
    """

    @abstractmethod
    def resize(
        self,
        *,
        source_path: str,
        destination_path: str,
        size: SizeSpec,
        content_type: str,
    ) -> tuple[int, int]:
        """Write a scaled copy of ``source_path`` to ``destination_path``.

        The image is rotated according to its stored orientation, then
        fitted inside ``size`` preserving aspect ratio. It is never enlarged.

        Args:
            source_path: Local path of the original image
            destination_path: Local path for the resized image
            size: Target bounding box
            content_type: MIME type to write (e.g. 'image/jpeg')

        Returns:
            Tuple of (width, height) of the written image

        Raises:
            ImageResizeError: If the image cannot be processed
        """
