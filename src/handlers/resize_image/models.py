"""Pydantic models for storage notification records and handler results."""

from collections.abc import Mapping
from typing import Any
from urllib.parse import unquote_plus

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from core.utils.constants import OBJECT_CREATED_EVENT_PREFIX


def _section(value: Any, name: str) -> Any:
    """``value[name]`` if ``value`` is a mapping, else None."""
    if isinstance(value, Mapping):
        return value.get(name)
    return None


class StorageEventRecord(BaseModel):
    """One S3 notification record."""

    model_config = ConfigDict(frozen=True)

    event_name: StrictStr = Field("", description="S3 event name, e.g. ObjectCreated:Put")
    bucket: StrictStr = Field(..., min_length=1, description="Bucket holding the object")
    key: StrictStr = Field(..., min_length=1, description="URL-decoded object key")

    @field_validator("key")
    @classmethod
    def decode_key(cls, value: str) -> str:
        """S3 notifications URL-encode keys (spaces become '+')."""
        return unquote_plus(value)

    @classmethod
    def from_record(cls, record: Any) -> "StorageEventRecord":
        """Build from a raw record; any malformed shape raises ValidationError."""
        s3 = _section(record, "s3")
        return cls.model_validate(
            {
                "event_name": _section(record, "eventName") or "",
                "bucket": _section(_section(s3, "bucket"), "name"),
                "key": _section(_section(s3, "object"), "key"),
            }
        )

    @property
    def is_object_created(self) -> bool:
        # Records without an event name come from manual invocations.
        return not self.event_name or self.event_name.startswith(OBJECT_CREATED_EVENT_PREFIX)


class ProcessingSummary(BaseModel):
    """Per-invocation tally of record outcomes."""

    records: int = Field(0, description="Records received")
    completed: int = Field(0, description="Records resized to every size")
    failed: int = Field(0, description="Records with at least one failure")
    skipped: int = Field(0, description="Records that needed no processing")
