"""Shared image models passed between the resize pipeline stages."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class ObjectDescriptor(BaseModel):
    """Stored object that triggered the invocation."""

    model_config = ConfigDict(frozen=True)

    bucket: StrictStr = Field(..., description="Bucket holding the object")
    key: StrictStr = Field(..., description="Object key (path) inside the bucket")

    content_type: StrictStr | None = Field(None, description="MIME type of the object")
    content_encoding: StrictStr | None = Field(None, description="Content-Encoding header")
    content_disposition: StrictStr | None = Field(None, description="Content-Disposition header")
    content_language: StrictStr | None = Field(None, description="Content-Language header")
    cache_control: StrictStr | None = Field(None, description="Cache-Control header")

    metadata: dict[StrictStr, StrictStr] = Field(
        default_factory=dict, description="User-defined object metadata"
    )


class SizeSpec(BaseModel):
    """Parsed target bounding box. ``None`` means the axis is unconstrained."""

    model_config = ConfigDict(frozen=True)

    label: StrictStr = Field(..., description="Size string as configured, used in output names")
    width: int | None = Field(None, description="Maximum width in pixels")
    height: int | None = Field(None, description="Maximum height in pixels")


class UploadMetadata(BaseModel):
    """Metadata bundle attached to a single resized upload."""

    model_config = ConfigDict(frozen=True)

    content_type: StrictStr = Field(..., description="MIME type of the resized image")
    content_disposition: StrictStr | None = None
    content_encoding: StrictStr | None = None
    content_language: StrictStr | None = None
    cache_control: StrictStr | None = None
    metadata: dict[StrictStr, StrictStr] = Field(default_factory=dict)


class ResizeResult(BaseModel):
    """Outcome of one resize-and-upload task."""

    size: StrictStr = Field(..., description="Configured size string")
    success: StrictBool = Field(..., description="Whether the variant was uploaded")
    key: StrictStr | None = Field(None, description="Destination key of the variant")
