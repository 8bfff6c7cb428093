"""
PDF document extractor using PyMuPDF.

PyMuPDF (fitz) parses the document in-process. Memory held by the parser
is released explicitly after every file, since long batch runs otherwise
keep accumulating decoded image data.
"""

import gc
from typing import ClassVar

from file_indexer.config import Settings
from file_indexer.extractors.base import ExtractionError, FileExtractor, module_available
from file_indexer.models import ConfigField, ConfigFieldKind, FileDescriptor


class PdfParserExtractor(FileExtractor):
    """
    Extracts text content from PDF files.

    Reads text only; embedded images are never rendered or retained.
    """

    id: ClassVar[str] = "pdf_parser"
    label: ClassVar[str] = "PDF parser"
    icon: ClassVar[str] = "file-pdf-o"

    SUPPORTED_EXTENSIONS: ClassVar[tuple[str, ...]] = ("pdf",)

    CONFIG_FIELDS: ClassVar[tuple[ConfigField, ...]] = (
        ConfigField(
            name="pdf_parser_decode_memory_limit",
            kind=ConfigFieldKind.INTEGER,
            label="Memory limit for decoding operations",
            description=(
                "In order to avoid memory running out while indexing individual files, "
                "you can set a lower memory limit for decoding operations."
            ),
            notes=(
                "Provide value in bytes or leave empty to disable limit. "
                "`1048576` = 1 MiB, `5242880` = 5 MiB, `31457280` = 30 MiB etc. "
                "The limit is measured on the UTF-8 size of the extracted text, "
                "not on decoded PDF streams; files over the limit are not indexed."
            ),
        ),
    )

    @classmethod
    def is_available(cls, settings: Settings | None = None) -> bool:
        return module_available("fitz")

    def get_text(self, file: FileDescriptor) -> str | None:
        """
        Extract text from a PDF file.

        Args:
            file: The PDF file.

        Returns:
            Text of all pages, separated by blank lines.

        Raises:
            ExtractionError: If the PDF cannot be read, is corrupted or
                decodes to more than the configured memory limit.
        """
        import fitz  # PyMuPDF

        path = self._validate_file(file)
        decode_memory_limit = self.settings.pdf_parser_decode_memory_limit

        try:
            pages: list[str] = []
            decoded = 0

            with fitz.open(path) as doc:
                for page in doc:
                    page_text = page.get_text("text")
                    decoded += len(page_text.encode("utf-8"))
                    if decode_memory_limit and decoded > decode_memory_limit:
                        raise ExtractionError(
                            f"Decoded content exceeds memory limit of {decode_memory_limit} bytes",
                            path,
                        )
                    pages.append(page_text)

            return "\n\n".join(pages)

        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(f"Unexpected error: {e}", path, cause=e) from e
        finally:
            self._release_memory(fitz)

    @staticmethod
    def _release_memory(fitz_module) -> None:
        """
        Drop cached objects of the parser and run a collection pass.

        Must run after every parse, successful or not.
        """
        fitz_module.TOOLS.store_shrink(100)
        gc.collect()
