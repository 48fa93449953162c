"""Deployment configuration for the resize function."""

from collections.abc import Mapping
import os
import tempfile

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.models.errors import ConfigurationError
from core.utils.constants import (
    DEFAULT_IMAGE_SIZES,
    DELETE_ORIGINAL_MODES,
    DELETE_ORIGINAL_NEVER,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_CACHE_CONTROL_HEADER,
    ENV_DELETE_ORIGINAL_FILE,
    ENV_IMG_SIZES,
    ENV_RESIZED_IMAGES_PATH,
    ENV_SCRATCH_DIR,
)


class ResizeSettings(BaseModel):
    """Validated settings, fixed for the lifetime of the process."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    image_sizes: tuple[str, ...] = Field(
        DEFAULT_IMAGE_SIZES, description="Distinct target sizes in configuration order"
    )
    resized_images_path: str | None = Field(
        None, description="Optional sub-directory for resized outputs"
    )
    cache_control_header: str | None = Field(
        None, description="Cache-Control applied to every resized output"
    )
    delete_original_file: str = Field(
        DELETE_ORIGINAL_NEVER, description="One of 'false', 'true', 'on_success'"
    )
    scratch_dir: str = Field(
        default_factory=tempfile.gettempdir, description="Local scratch root"
    )
    endpoint_url: str | None = None
    region_name: str | None = None

    @field_validator("image_sizes", mode="before")
    @classmethod
    def normalize_sizes(cls, value: object) -> tuple[str, ...]:
        """
        Accept a comma-separated string or a sequence of sizes.

        Blank entries are dropped and duplicates removed, keeping the
        first occurrence.
        """
        if isinstance(value, str):
            raw = value.split(",")
        elif isinstance(value, (list, tuple)):
            raw = [str(v) for v in value]
        else:
            raise ValueError("image_sizes must be a string or a list of strings")

        sizes = tuple(dict.fromkeys(s.strip() for s in raw if s.strip()))
        if not sizes:
            raise ValueError("At least one image size must be configured")

        return sizes

    @field_validator("delete_original_file", mode="before")
    @classmethod
    def validate_delete_mode(cls, value: object) -> str:
        if isinstance(value, bool):
            value = str(value)

        mode = str(value).strip().lower()
        if mode not in DELETE_ORIGINAL_MODES:
            raise ValueError(
                f"Invalid delete mode '{value}'. "
                f"Allowed values: {', '.join(sorted(DELETE_ORIGINAL_MODES))}"
            )

        return mode

    @field_validator("resized_images_path", "cache_control_header", mode="before")
    @classmethod
    def empty_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ResizeSettings":
        """Build settings from environment variables.

        Raises:
            ConfigurationError: If any value is invalid
        """
        env = os.environ if environ is None else environ

        values: dict[str, object] = {
            "resized_images_path": env.get(ENV_RESIZED_IMAGES_PATH),
            "cache_control_header": env.get(ENV_CACHE_CONTROL_HEADER),
            "endpoint_url": env.get(ENV_AWS_ENDPOINT_URL) or None,
            "region_name": env.get(ENV_AWS_REGION) or None,
        }
        if ENV_IMG_SIZES in env:
            values["image_sizes"] = env[ENV_IMG_SIZES]
        if ENV_DELETE_ORIGINAL_FILE in env:
            values["delete_original_file"] = env[ENV_DELETE_ORIGINAL_FILE]
        if env.get(ENV_SCRATCH_DIR):
            values["scratch_dir"] = env[ENV_SCRATCH_DIR]

        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigurationError(
                message="Invalid resize configuration",
                details={
                    "errors": [
                        {
                            "field": ".".join(str(x) for x in err.get("loc", [])),
                            "message": err.get("msg", "Invalid value"),
                        }
                        for err in exc.errors()
                    ]
                },
            ) from exc
