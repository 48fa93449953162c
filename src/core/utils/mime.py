from collections.abc import Mapping

from core.utils.constants import SUPPORTED_CONTENT_TYPES


def pillow_format_for(content_type: str) -> str:
    formats: Mapping[str, str] = SUPPORTED_CONTENT_TYPES
    image_format = formats.get(content_type)
    if image_format is None:
        raise ValueError(f"Unsupported image type '{content_type}'")

    return image_format
