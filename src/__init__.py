"""Image Resize Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Serverless image resizing for S3 uploads using AWS Lambda, S3, and Pillow"
)

__all__ = ["handlers", "core"]
