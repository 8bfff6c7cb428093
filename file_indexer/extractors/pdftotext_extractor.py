"""
PDF document extractor using the pdftotext command line tool.

Requires pdftotext (poppler-utils) to be installed on the host OS. The
binary path can only be overridden through static settings and the
command line flags are fixed.
"""

import shutil
import subprocess
from typing import ClassVar

from file_indexer.config import DEFAULT_PDF_TO_TEXT_TIMEOUT, Settings
from file_indexer.extractors.base import ExtractionError, FileExtractor
from file_indexer.models import ConfigField, ConfigFieldKind, FileDescriptor

PDFTOTEXT_BINARY = "pdftotext"


class PdfToTextExtractor(FileExtractor):
    """
    Extracts text from PDF files by running pdftotext in a subprocess.

    The process is bounded by a timeout; a hung process surfaces as an
    ExtractionError.
    """

    id: ClassVar[str] = "pdf_to_text"
    label: ClassVar[str] = "PdfToText"
    icon: ClassVar[str] = "file-pdf-o"

    SUPPORTED_EXTENSIONS: ClassVar[tuple[str, ...]] = ("pdf",)

    # Write UTF-8 to stdout, no form feeds between pages
    OPTIONS: ClassVar[tuple[str, ...]] = ("-nopgbrk", "-enc", "UTF-8")

    CONFIG_FIELDS: ClassVar[tuple[ConfigField, ...]] = (
        ConfigField(
            name="pdf_to_text_timeout",
            kind=ConfigFieldKind.INTEGER,
            label="Timeout in seconds",
            default=DEFAULT_PDF_TO_TEXT_TIMEOUT,
            description=(
                "In order to avoid timeouts while indexing individual files, "
                "set preferred timeout in seconds."
            ),
            notes=f"Default value is `{DEFAULT_PDF_TO_TEXT_TIMEOUT}` seconds.",
        ),
    )

    @classmethod
    def find_binary(cls, settings: Settings | None = None) -> str | None:
        """Locate the pdftotext executable, honoring the static override."""
        override = settings.pdf_to_text_path if settings is not None else None
        return shutil.which(str(override) if override else PDFTOTEXT_BINARY)

    @classmethod
    def is_available(cls, settings: Settings | None = None) -> bool:
        return cls.find_binary(settings) is not None

    @property
    def timeout(self) -> int:
        return self.settings.pdf_to_text_timeout or DEFAULT_PDF_TO_TEXT_TIMEOUT

    def get_text(self, file: FileDescriptor) -> str | None:
        """
        Run pdftotext and return its standard output.

        Args:
            file: The PDF file.

        Returns:
            The text written by pdftotext.

        Raises:
            ExtractionError: If the binary is missing, fails or times out.
        """
        path = self._validate_file(file)

        binary = self.find_binary(self.settings)
        if binary is None:
            raise ExtractionError("pdftotext binary not found", path)

        command = [binary, *self.OPTIONS, str(path), "-"]
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ExtractionError(
                f"pdftotext did not finish within {self.timeout} seconds", path, cause=e
            ) from e
        except OSError as e:
            raise ExtractionError(f"Could not run pdftotext: {e}", path, cause=e) from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise ExtractionError(
                f"pdftotext exited with status {result.returncode}: {stderr}", path
            )

        return result.stdout.decode("utf-8", errors="replace")
