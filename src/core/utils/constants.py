"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Configuration Errors
ERROR_CODE_CONFIGURATION_INVALID = "CONFIGURATION_INVALID"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"

# Storage Errors
ERROR_CODE_S3 = "S3_ERROR"
ERROR_CODE_IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"
ERROR_CODE_IMAGE_DOWNLOAD_FAILED = "IMAGE_DOWNLOAD_FAILED"
ERROR_CODE_IMAGE_DELETION_FAILED = "IMAGE_DELETION_FAILED"

# Processing Errors
ERROR_CODE_INVALID_SIZE = "INVALID_SIZE"
ERROR_CODE_IMAGE_RESIZE_FAILED = "IMAGE_RESIZE_FAILED"

# ============================================================================
# Supported Content
# ============================================================================

# Content type -> Pillow format name used when writing the resized file.
SUPPORTED_CONTENT_TYPES: Final[dict[str, str]] = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
    "image/tiff": "TIFF",
    "image/webp": "WEBP",
}

IMAGE_CONTENT_TYPE_PREFIX = "image/"
GZIP_CONTENT_ENCODING = "gzip"

# ============================================================================
# Object Metadata Keys
# ============================================================================

# S3 lower-cases user metadata keys, so these are stored lower-case.
METADATA_RESIZED_IMAGE = "resized-image"
METADATA_RESIZED_IMAGE_VALUE = "true"
METADATA_DOWNLOAD_TOKENS = "download-tokens"

# ============================================================================
# Size Specification
# ============================================================================

SIZE_DELIMITERS: Final[tuple[str, ...]] = (",", "x")
SIZE_AUTO = "auto"
DEFAULT_IMAGE_SIZES: Final[tuple[str, ...]] = ("200x200",)

# ============================================================================
# Source Deletion Modes
# ============================================================================

DELETE_ORIGINAL_NEVER = "false"
DELETE_ORIGINAL_ALWAYS = "true"
DELETE_ORIGINAL_ON_SUCCESS = "on_success"

DELETE_ORIGINAL_MODES: Final[frozenset[str]] = frozenset(
    {DELETE_ORIGINAL_NEVER, DELETE_ORIGINAL_ALWAYS, DELETE_ORIGINAL_ON_SUCCESS}
)

# ============================================================================
# Event Handling
# ============================================================================

OBJECT_CREATED_EVENT_PREFIX = "ObjectCreated"

OUTCOME_COMPLETED = "completed"
OUTCOME_FAILED = "failed"
OUTCOME_SKIPPED = "skipped"

# ============================================================================
# Observability
# ============================================================================

SERVICE_NAME = "image-resize"
METRICS_NAMESPACE = "ImageResize"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMG_SIZES = "IMG_SIZES"
ENV_RESIZED_IMAGES_PATH = "RESIZED_IMAGES_PATH"
ENV_CACHE_CONTROL_HEADER = "CACHE_CONTROL_HEADER"
ENV_DELETE_ORIGINAL_FILE = "DELETE_ORIGINAL_FILE"
ENV_SCRATCH_DIR = "SCRATCH_DIR"
