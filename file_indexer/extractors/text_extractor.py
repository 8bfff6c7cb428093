"""
Plain text file extractor.

Handles .txt files with encoding fallback.
"""

from typing import ClassVar

from file_indexer.extractors.base import ExtractionError, FileExtractor
from file_indexer.models import FileDescriptor


class PlainTextExtractor(FileExtractor):
    """
    Returns the content of plain text files unmodified.

    Always available.
    """

    id: ClassVar[str] = "plain_text"
    label: ClassVar[str] = "PlainText"
    icon: ClassVar[str] = "file-text-o"

    SUPPORTED_EXTENSIONS: ClassVar[tuple[str, ...]] = ("txt",)

    # Encodings to try in order of preference; utf-8-sig also reads plain
    # utf-8 and latin-1 accepts any byte sequence
    ENCODINGS: ClassVar[tuple[str, ...]] = ("utf-8-sig", "cp1252", "latin-1")

    def get_text(self, file: FileDescriptor) -> str | None:
        path = self._validate_file(file)

        try:
            raw = path.read_bytes()
        except OSError as e:
            raise ExtractionError(f"Could not read file: {e}", path, cause=e) from e

        last_error: Exception | None = None
        for encoding in self.ENCODINGS:
            try:
                return raw.decode(encoding)
            except UnicodeDecodeError as e:
                last_error = e

        raise ExtractionError(
            f"Could not decode file with any supported encoding: {self.ENCODINGS}",
            path,
            cause=last_error,
        )
