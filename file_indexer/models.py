"""
Pydantic models for the file indexer.

These models define the schemas for:
- Files handed over for extraction
- Self-describing extractor metadata
- Extractor configuration fields

All models are frozen: they are built once and only read afterwards.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ==============================================================================
# File Models
# ==============================================================================


class FileDescriptor(BaseModel):
    """
    A single file handed to the indexer.

    Created per extraction request from either a filesystem path or a
    caller-owned file handle, and discarded after use.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    path: str = Field(
        ...,
        min_length=1,
        description="Filesystem path of the file",
    )

    size: int | None = Field(
        default=None,
        ge=0,
        description="File size in bytes, None if it could not be determined",
    )

    extension: str = Field(
        default="",
        description="Lowercase file extension without the leading dot",
    )

    source_handle: Any = Field(
        default=None,
        description="Caller's original file object, if one was given",
    )

    @field_validator("extension", mode="before")
    @classmethod
    def normalize_extension(cls, v: Any) -> str:
        """Store extensions lowercase and without a leading dot."""
        return str(v or "").lstrip(".").lower()


# ==============================================================================
# Extractor Models
# ==============================================================================


class ConfigFieldKind(str, Enum):
    """Value kind of an extractor config field."""

    INTEGER = "integer"
    TEXT = "text"


class ConfigField(BaseModel):
    """
    A single user-editable setting of an extractor.

    Consumed by whatever renders settings; the indexer itself only reads
    the resulting values from `Settings`.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Settings key, prefixed with the extractor id")
    kind: ConfigFieldKind = Field(default=ConfigFieldKind.INTEGER)
    label: str = Field(..., min_length=1)
    default: int | str | None = None
    description: str = ""
    notes: str = ""


class ExtractorDescriptor(BaseModel):
    """
    Static metadata of an extractor implementation.

    `available` reflects whether the underlying dependency is present in
    the running environment and is computed once per descriptor.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    extensions: tuple[str, ...] = ()
    available: bool = True
    icon: str = "file-o"
    config_schema: tuple[ConfigField, ...] = ()

    @field_validator("extensions", mode="before")
    @classmethod
    def lowercase_extensions(cls, v: Any) -> tuple[str, ...]:
        """Extensions are matched case-insensitively, duplicates dropped."""
        return tuple(dict.fromkeys(str(ext).lstrip(".").lower() for ext in v))

    def supports(self, extension: str) -> bool:
        """Check if this extractor claims the given extension."""
        return extension.lower() in self.extensions
