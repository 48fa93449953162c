"""Local scratch paths and destination keys derived from an object key."""

import os
import posixpath

from aws_lambda_powertools import Logger

logger = Logger(UTC=True)


def split_key(key: str) -> tuple[str, str, str]:
    """Split an object key into (directory, stem, extension).

    Example:
        >>> split_key("albums/2024/photo.jpg")
        ('albums/2024', 'photo', '.jpg')
    """
    directory, name = posixpath.split(key)
    stem, extension = posixpath.splitext(name)
    return directory, stem, extension


def resized_file_name(key: str, size: str) -> str:
    """Return ``<stem>_<size><ext>`` for the given key."""
    _, stem, extension = split_key(key)
    return f"{stem}_{size}{extension}"


def resized_object_key(key: str, size: str, resized_images_path: str | None = None) -> str:
    """Destination key of a resized variant.

    ``<dir>/[<resized_images_path>/]<stem>_<size><ext>``, normalized.
    """
    directory, _, _ = split_key(key)
    parts = [directory]
    if resized_images_path:
        parts.append(resized_images_path.strip("/"))
    parts.append(resized_file_name(key, size))

    return posixpath.normpath(posixpath.join(*[p for p in parts if p]))


def scratch_path(scratch_dir: str, key: str) -> str:
    """Local path mirroring ``key`` below ``scratch_dir``.

    Raises:
        ValueError: If the key resolves outside the scratch directory
    """
    root = os.path.abspath(scratch_dir)
    path = os.path.normpath(os.path.join(root, *key.lstrip("/").split("/")))

    if os.path.commonpath([root, path]) != root or path == root:
        raise ValueError(f"Object key '{key}' resolves outside the scratch directory")

    return path


def ensure_parent_dir(path: str) -> str:
    """Create the parent directories of ``path`` and return the directory."""
    directory = os.path.dirname(path)
    logger.debug("Creating scratch directory", extra={"directory": directory})
    os.makedirs(directory, exist_ok=True)
    return directory


def remove_scratch_file(path: str | None) -> bool:
    """Best-effort removal of a local scratch file.

    Errors are logged and swallowed; a missing file is not an error.

    Returns:
        True if the file is gone afterwards
    """
    if not path:
        return True

    try:
        os.remove(path)
        logger.debug("Scratch file deleted", extra={"local_path": path})
        return True
    except FileNotFoundError:
        return True
    except OSError as exc:
        logger.warning(
            "Failed to delete scratch file",
            extra={"local_path": path, "error": str(exc)},
        )
        return False
