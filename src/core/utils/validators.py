"""Decides whether a stored object should be resized."""

from core.models.image import ObjectDescriptor
from core.utils.constants import (
    GZIP_CONTENT_ENCODING,
    IMAGE_CONTENT_TYPE_PREFIX,
    METADATA_RESIZED_IMAGE,
    METADATA_RESIZED_IMAGE_VALUE,
    SUPPORTED_CONTENT_TYPES,
)

SKIP_NO_CONTENT_TYPE = "File has no Content-Type, no processing is required"
SKIP_NOT_AN_IMAGE = "File of type '{content_type}' is not an image, no processing is required"
SKIP_GZIP_ENCODING = "Images encoded with 'gzip' are not supported by this service"
SKIP_UNSUPPORTED_TYPE = (
    "Image type '{content_type}' is not supported, supported types are: {supported}"
)
SKIP_ALREADY_RESIZED = "File is already a resized image, no processing is required"


def get_skip_reason(descriptor: ObjectDescriptor) -> str | None:
    """Return why ``descriptor`` must not be processed, or None to proceed.

    Checks run in order and the first match wins:
    - missing content type
    - content type outside ``image/*``
    - gzip content encoding
    - image type not supported
    - object written by this service (loop prevention)
    """
    content_type = descriptor.content_type
    if not content_type:
        return SKIP_NO_CONTENT_TYPE

    if not content_type.startswith(IMAGE_CONTENT_TYPE_PREFIX):
        return SKIP_NOT_AN_IMAGE.format(content_type=content_type)

    if descriptor.content_encoding == GZIP_CONTENT_ENCODING:
        return SKIP_GZIP_ENCODING

    if content_type not in SUPPORTED_CONTENT_TYPES:
        return SKIP_UNSUPPORTED_TYPE.format(
            content_type=content_type,
            supported=", ".join(sorted(SUPPORTED_CONTENT_TYPES)),
        )

    if descriptor.metadata.get(METADATA_RESIZED_IMAGE) == METADATA_RESIZED_IMAGE_VALUE:
        return SKIP_ALREADY_RESIZED

    return None
