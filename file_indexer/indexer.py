"""
File indexer dispatch.

Picks one extractor per file, bounds what goes in (file size) and what
comes out (text length), and isolates extraction failures so a single
bad file never stops a batch.
"""

import logging
import os
from functools import cached_property
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from file_indexer.config import Settings, get_settings
from file_indexer.extractors.base import FileExtractor
from file_indexer.extractors.registry import ExtractorRegistry
from file_indexer.models import ExtractorDescriptor, FileDescriptor
from file_indexer.policy import PolicyTable

logger = logging.getLogger(__name__)

# Joins the host's base index value and the extracted text
INDEX_VALUE_SEPARATOR = " ... "


class InvalidFileError(TypeError):
    """Raised when the file argument is neither a path nor a file handle."""


@runtime_checkable
class FileHandle(Protocol):
    """A caller-owned file object exposing its path, size and extension."""

    filename: str
    filesize: int
    ext: str


class FileIndexer:
    """
    Extracts size- and length-bounded text from files.

    Settings and registry are read-only once indexing starts, so a single
    instance can serve concurrent workers.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        registry: ExtractorRegistry | None = None,
    ):
        self.settings = settings if settings is not None else get_settings()
        self.registry = registry if registry is not None else ExtractorRegistry()

    @cached_property
    def policies(self) -> PolicyTable:
        """Size and length policies, parsed on first use."""
        return PolicyTable.from_settings(self.settings)

    @cached_property
    def candidates(self) -> list[tuple[ExtractorDescriptor, type[FileExtractor]]]:
        """Enabled extractors in priority order, described once."""
        return [
            (implementation.get_info(self.settings), implementation)
            for implementation in map(
                self.registry.implementation,
                self.registry.list_enabled(self.settings.enabled_file_indexers),
            )
        ]

    def add_extractor(self, extractor_id: str) -> None:
        """
        Register an additional extractor id.

        Call during setup, before the first file is indexed.

        Raises:
            ExtractorNotFoundError: If the id has no implementation.
        """
        self.registry.register(extractor_id)
        self.__dict__.pop("candidates", None)

    def index_file(self, file: Any) -> str | None:
        """
        Extract text from a file if it is of a suitable type and size.

        Args:
            file: Filesystem path or FileHandle.

        Returns:
            The extracted (possibly truncated) text, or None if the file
            was skipped or extraction failed.

        Raises:
            InvalidFileError: If the argument is of the wrong type.
        """
        file_info = self.get_file_info(file)
        if not self.is_valid_file(file_info):
            return None

        extractor = self.get_extractor(file_info)
        if extractor is None:
            return None

        try:
            text = extractor.get_text(file_info)
        except Exception as e:
            logger.error(
                "%s error for file at %s: %s",
                extractor.id,
                file_info.path,
                e,
                extra={"extractor": extractor.id, "file_path": file_info.path, "error": str(e)},
            )
            return None

        if text is None:
            return None
        return self.prepare_text(text, file_info)

    def augment(self, base_value: str | None, file: Any) -> str | None:
        """
        Append a file's text to the host's index value for it.

        Args:
            base_value: Index value computed by the host.
            file: Filesystem path or FileHandle.

        Returns:
            Both values joined by " ... ", or base_value unchanged if no
            text was extracted.
        """
        text = self.index_file(file)
        if not text:
            return base_value
        return INDEX_VALUE_SEPARATOR.join(part for part in (base_value, text) if part)

    def get_file_info(self, file: Any) -> FileDescriptor:
        """
        Describe a file argument.

        Raises:
            InvalidFileError: If the argument is neither a path nor a FileHandle.
        """
        if isinstance(file, (str, os.PathLike)):
            path = os.fspath(file)
            if not path:
                raise InvalidFileError("Invalid file argument, got an empty path")
            try:
                size: int | None = os.path.getsize(path)
            except OSError:
                size = None
            return FileDescriptor(path=path, size=size, extension=Path(path).suffix)

        if isinstance(file, FileHandle):
            return FileDescriptor(
                path=os.fspath(file.filename),
                size=file.filesize,
                extension=file.ext,
                source_handle=file,
            )

        raise InvalidFileError(
            f"Invalid file argument, expected a path or file handle and got {type(file).__name__}"
        )

    def is_valid_file(self, file_info: FileDescriptor) -> bool:
        """Check the file against the max_file_size policy (bytes)."""
        max_file_size = self.policies.limit("max_file_size", file_info.extension)
        if max_file_size is None or file_info.size is None:
            return True
        return file_info.size <= max_file_size

    def get_extractor(self, file_info: FileDescriptor) -> FileExtractor | None:
        """
        Select the first enabled, available extractor for the file's extension.

        Returns:
            An extractor instance, or None if nothing matches.
        """
        for descriptor, implementation in self.candidates:
            if descriptor.available and descriptor.supports(file_info.extension):
                return implementation(self.settings)
        return None

    def prepare_text(self, text: str, file_info: FileDescriptor) -> str:
        """Truncate text to the max_text_length policy (characters)."""
        max_text_length = self.policies.limit("max_text_length", file_info.extension)
        if max_text_length is not None and len(text) > max_text_length:
            text = text[:max_text_length]
        return text
