"""
File Indexer - text extraction for search indexing.

This package extracts plain text from document files (PDF, spreadsheets,
word processor documents, plain text) with per-extension size and length
limits, so that the text can be stored in a search index.
"""

__version__ = "0.1.0"

from file_indexer.indexer import FileHandle, FileIndexer, InvalidFileError

__all__ = ["FileHandle", "FileIndexer", "InvalidFileError"]
