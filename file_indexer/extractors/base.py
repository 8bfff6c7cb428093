"""
Base classes for text extraction.

Defines the abstract interface that all extractors must implement,
ensuring consistent behavior across different file formats.
"""

import importlib.util
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import ClassVar

from file_indexer.config import Settings, get_settings
from file_indexer.models import ConfigField, ExtractorDescriptor, FileDescriptor


class ExtractionError(Exception):
    """
    Raised when text extraction fails.

    Contains detailed information about the failure cause.
    """

    def __init__(self, message: str, file_path: str | Path, cause: Exception | None = None):
        self.file_path = str(file_path)
        self.cause = cause
        super().__init__(f"Failed to extract '{file_path}': {message}")


@lru_cache(maxsize=None)
def module_available(name: str) -> bool:
    """Check once whether a module can be imported, without importing it."""
    try:
        return importlib.util.find_spec(name) is not None
    except (ImportError, ValueError):
        return False


class FileExtractor(ABC):
    """
    Abstract base class for file extractors.

    Subclasses declare an id, a label, the extensions they handle and
    optionally a config schema, and implement `get_text`.
    """

    # Unique id used in settings and in the registry
    id: ClassVar[str] = ""
    label: ClassVar[str] = "File extractor"
    icon: ClassVar[str] = "file-o"

    # Lowercase, without the leading dot
    SUPPORTED_EXTENSIONS: ClassVar[tuple[str, ...]] = ()

    CONFIG_FIELDS: ClassVar[tuple[ConfigField, ...]] = ()

    def __init__(self, settings: Settings | None = None):
        self.settings = settings if settings is not None else get_settings()

    @classmethod
    def is_available(cls, settings: Settings | None = None) -> bool:
        """Check whether the dependencies of this extractor are present."""
        return True

    @classmethod
    def get_config_schema(cls) -> tuple[ConfigField, ...]:
        """User-editable settings of this extractor, in display order."""
        return cls.CONFIG_FIELDS

    @classmethod
    def get_info(cls, settings: Settings | None = None) -> ExtractorDescriptor:
        """
        Describe this extractor.

        Args:
            settings: Settings used for the availability check.

        Returns:
            ExtractorDescriptor with availability evaluated now.
        """
        return ExtractorDescriptor(
            id=cls.id,
            label=cls.label,
            icon=cls.icon,
            extensions=cls.SUPPORTED_EXTENSIONS,
            available=cls.is_available(settings),
            config_schema=cls.get_config_schema(),
        )

    @classmethod
    def supports(cls, extension: str) -> bool:
        """
        Check if this extractor supports the given extension.

        Args:
            extension: File extension, with or without the leading dot.

        Returns:
            True if this extractor can handle the file format.
        """
        return extension.lstrip(".").lower() in cls.SUPPORTED_EXTENSIONS

    @abstractmethod
    def get_text(self, file: FileDescriptor) -> str | None:
        """
        Extract text content from the file.

        Args:
            file: The file to read.

        Returns:
            The extracted text, or None if the file yields no usable text.

        Raises:
            ExtractionError: If extraction fails for any reason.
        """
        ...

    def _validate_file(self, file: FileDescriptor) -> Path:
        """
        Validate that the file exists.

        Args:
            file: File to validate.

        Returns:
            The file path.

        Raises:
            ExtractionError: If the file doesn't exist or isn't a regular file.
        """
        path = Path(file.path)

        if not path.exists():
            raise ExtractionError("File does not exist", path)

        if not path.is_file():
            raise ExtractionError("Path is not a file", path)

        return path
