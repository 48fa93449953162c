"""Parsing of ``W,H`` / ``WxH`` size specifications."""

from core.models.errors import SizeParseError
from core.models.image import SizeSpec
from core.utils.constants import SIZE_AUTO, SIZE_DELIMITERS


def _parse_dimension(raw: str, *, size: str) -> int | None:
    value = raw.strip()
    if value.lower() == SIZE_AUTO:
        return None

    try:
        return int(value, 10)
    except ValueError as exc:
        raise SizeParseError(
            message=f"Invalid dimension '{raw}' in size '{size}'",
            details={"size": size},
        ) from exc


def parse_size(size: str) -> SizeSpec:
    """Parse a size string into a bounding box.

    The string is split on ``,`` if present, otherwise on ``x``. Each half
    is a base-10 integer or ``auto``.

    Example:
        >>> parse_size("100x200")
        SizeSpec(label='100x200', width=100, height=200)

    Raises:
        SizeParseError: If the string is not delimited by ',' or 'x', or a
            half is not a number
    """
    delimiter = next((d for d in SIZE_DELIMITERS if d in size), None)
    if delimiter is None:
        raise SizeParseError(
            message="Height and width are not delimited by a ',' or a 'x'",
            details={"size": size},
        )

    parts = size.split(delimiter)
    if len(parts) != 2:
        raise SizeParseError(
            message=f"Size '{size}' must have exactly two dimensions",
            details={"size": size},
        )

    width, height = parts
    return SizeSpec(
        label=size,
        width=_parse_dimension(width, size=size),
        height=_parse_dimension(height, size=size),
    )
