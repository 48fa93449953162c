"""Pillow-backed implementation of ImageResizerRepository."""

from aws_lambda_powertools import Logger
from PIL import Image, ImageOps

from core.models.errors import ImageResizeError
from core.models.image import SizeSpec
from core.repositories.resizer_repository import ImageResizerRepository
from core.utils.mime import pillow_format_for

logger = Logger(UTC=True)

# Modes Pillow can only scale with nearest-neighbour sampling
_INDEXED_MODES = frozenset({"1", "P"})
_JPEG_MODES = frozenset({"L", "RGB", "CMYK"})


def _prepare_mode(image: Image.Image, image_format: str) -> Image.Image:
    """Convert ``image`` to a mode that resamples smoothly and fits ``image_format``."""
    if image.mode in _INDEXED_MODES:
        mode = "RGBA" if "transparency" in image.info else "RGB"
        logger.debug("Converting indexed image", extra={"from_mode": image.mode, "to_mode": mode})
        image = image.convert(mode)

    # JPEG has no alpha channel
    if image_format == "JPEG" and image.mode not in _JPEG_MODES:
        logger.debug("Converting image for JPEG output", extra={"from_mode": image.mode})
        image = image.convert("RGB")

    return image


class PillowImageResizer(ImageResizerRepository):
    """Image scaling implementation backed by Pillow."""

    def resize(
        self,
        *,
        source_path: str,
        destination_path: str,
        size: SizeSpec,
        content_type: str,
    ) -> tuple[int, int]:
        """Rotate, fit inside ``size`` without enlargement and save."""
        logger.debug(
            "Resizing image",
            extra={
                "source_path": source_path,
                "destination_path": destination_path,
                "size": size.label,
            },
        )

        for dimension in (size.width, size.height):
            if dimension is not None and dimension <= 0:
                raise ImageResizeError(
                    message=f"Size '{size.label}' must have positive dimensions",
                    details={"size": size.label},
                )

        try:
            image_format = pillow_format_for(content_type)

            with Image.open(source_path) as original:
                image = _prepare_mode(ImageOps.exif_transpose(original), image_format)
                bounds = (
                    size.width or image.width,
                    size.height or image.height,
                )
                image.thumbnail(bounds)
                image.save(destination_path, format=image_format)

                return image.size

        except Exception as exc:
            logger.exception(
                "Image resize failed",
                extra={"source_path": source_path, "size": size.label},
            )
            raise ImageResizeError(
                message="Unable to resize image",
                details={"size": size.label, "source_path": source_path},
            ) from exc
