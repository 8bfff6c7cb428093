"""
Text Extraction Module.

Provides pluggable extractors for multiple document formats:
- Spreadsheets (.xls, .xlsx, .ods, .csv)
- Word processor documents (.doc, .docx, .odf, .rtf)
- PDF (.pdf) via PyMuPDF or the pdftotext CLI
- Plain text (.txt)
"""

from file_indexer.extractors.base import ExtractionError, FileExtractor
from file_indexer.extractors.registry import (
    ExtractorNotFoundError,
    ExtractorRegistry,
    get_implementation,
    register_implementation,
    unregister_implementation,
)

__all__ = [
    "ExtractionError",
    "ExtractorNotFoundError",
    "ExtractorRegistry",
    "FileExtractor",
    "get_implementation",
    "register_implementation",
    "unregister_implementation",
]
