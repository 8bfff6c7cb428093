"""
Configuration management for the file indexer.

Uses Pydantic Settings for type-safe configuration loading from environment variables.
All configuration is validated at startup to fail fast on misconfiguration.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Built-in extractor ids; order is selection priority
DEFAULT_FILE_INDEXERS: tuple[str, ...] = (
    "spreadsheet",
    "word",
    "pdf_parser",
    "pdf_to_text",
    "plain_text",
)

DEFAULT_PDF_TO_TEXT_TIMEOUT = 60


class Settings(BaseSettings):
    """
    Indexer settings loaded from environment variables.

    Acts as the key-value configuration source for the dispatcher, the
    policy resolver and the extractors. Per-extractor keys are prefixed
    with the extractor id.
    """

    model_config = SettingsConfigDict(
        env_prefix="FILE_INDEXER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Dispatch Configuration
    # ==========================================================================
    enabled_file_indexers: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_FILE_INDEXERS),
        description="Ordered extractor ids to use; earlier ids win for shared extensions",
    )

    # ==========================================================================
    # Policy Configuration
    # ==========================================================================
    max_file_size: str = Field(
        default="",
        description=(
            "Maximum file size in bytes, one value per line with optional extensions "
            "after it; a line without extensions sets the default. Empty or 0 disables the limit."
        ),
    )

    max_text_length: str = Field(
        default="",
        description="Maximum length of indexed text in characters, same format as max_file_size",
    )

    # ==========================================================================
    # Extractor Configuration
    # ==========================================================================
    pdf_parser_decode_memory_limit: int | None = Field(
        default=None,
        ge=0,
        description="Limit in bytes for the UTF-8 size of text extracted by the PDF parser",
    )

    pdf_to_text_timeout: int = Field(
        default=DEFAULT_PDF_TO_TEXT_TIMEOUT,
        ge=0,
        description="Timeout in seconds for the pdftotext process",
    )

    # Static only: never exposed through an extractor config schema
    pdf_to_text_path: Path | None = Field(
        default=None,
        description="Path to the pdftotext binary, looked up on PATH when unset",
    )

    @field_validator("enabled_file_indexers", mode="before")
    @classmethod
    def split_file_indexers(cls, v: Any) -> list[str]:
        """Accept a comma or whitespace separated string as well as a list."""
        if isinstance(v, str):
            v = v.replace(",", " ").split()
        return list(dict.fromkeys(str(item).strip() for item in v if str(item).strip()))

    @field_validator("max_file_size", "max_text_length", mode="before")
    @classmethod
    def coerce_policy_text(cls, v: Any) -> str:
        """Allow a bare number as shorthand for a single default row."""
        if v is None:
            return ""
        return str(v)

    @field_validator("pdf_parser_decode_memory_limit", mode="before")
    @classmethod
    def empty_limit_is_none(cls, v: Any) -> Any:
        """Empty values disable the limit."""
        if v == "" or v == 0 or v == "0":
            return None
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once.
    """
    return Settings()
