"""
Extractor registry.

Two layers:
- the implementation catalog maps extractor ids to FileExtractor classes;
- an ExtractorRegistry is the ordered list of ids known to one indexer.
  Selection priority follows the configured list of enabled ids.
"""

from typing import Iterable, Iterator

from file_indexer.config import DEFAULT_FILE_INDEXERS, Settings
from file_indexer.extractors.base import FileExtractor
from file_indexer.extractors.pdf_extractor import PdfParserExtractor
from file_indexer.extractors.pdftotext_extractor import PdfToTextExtractor
from file_indexer.extractors.spreadsheet_extractor import SpreadsheetExtractor
from file_indexer.extractors.text_extractor import PlainTextExtractor
from file_indexer.extractors.word_extractor import WordExtractor
from file_indexer.models import ExtractorDescriptor


class ExtractorNotFoundError(LookupError):
    """Raised when an extractor id has no registered implementation."""

    def __init__(self, extractor_id: str):
        self.extractor_id = extractor_id
        super().__init__(f"File indexer not found: {extractor_id}")


_IMPLEMENTATIONS: dict[str, type[FileExtractor]] = {}


def register_implementation(extractor_cls: type[FileExtractor]) -> type[FileExtractor]:
    """
    Add an extractor class to the implementation catalog.

    Usable as a class decorator. Re-registering an id replaces the
    previous implementation.

    Raises:
        ValueError: If the class does not declare an id.
    """
    if not extractor_cls.id:
        raise ValueError(f"{extractor_cls.__name__} does not declare an extractor id")
    _IMPLEMENTATIONS[extractor_cls.id] = extractor_cls
    return extractor_cls


def unregister_implementation(extractor_id: str) -> None:
    """
    Remove an extractor class from the implementation catalog.

    Registries that already list the id keep it, but looking up its
    implementation fails from then on. Unknown ids are ignored.
    """
    _IMPLEMENTATIONS.pop(extractor_id, None)


def get_implementation(extractor_id: str) -> type[FileExtractor]:
    """
    Look up the class registered for an extractor id.

    Raises:
        ExtractorNotFoundError: If no class is registered for the id.
    """
    try:
        return _IMPLEMENTATIONS[extractor_id]
    except KeyError:
        raise ExtractorNotFoundError(extractor_id) from None


for _extractor_cls in (
    SpreadsheetExtractor,
    WordExtractor,
    PdfParserExtractor,
    PdfToTextExtractor,
    PlainTextExtractor,
):
    register_implementation(_extractor_cls)


class ExtractorRegistry:
    """
    Ordered, duplicate-free list of extractor ids.

    Only ids with a registered implementation can be added, so bad ids
    fail at setup time rather than while indexing.
    """

    def __init__(self, extractor_ids: Iterable[str] = DEFAULT_FILE_INDEXERS):
        self._extractor_ids: list[str] = []
        for extractor_id in extractor_ids:
            self.register(extractor_id)

    def register(self, extractor_id: str) -> None:
        """
        Append an extractor id unless it is already registered.

        Raises:
            ExtractorNotFoundError: If the id has no implementation; the
                registry is left unchanged.
        """
        if extractor_id in self._extractor_ids:
            return
        get_implementation(extractor_id)
        self._extractor_ids.append(extractor_id)

    def list_enabled(self, enabled_ids: Iterable[str]) -> list[str]:
        """
        Filter the enabled ids down to the registered ones.

        Args:
            enabled_ids: Ids enabled in configuration, in priority order;
                ids missing from the registry are ignored.

        Returns:
            Enabled ids in configured (priority) order, without duplicates.
        """
        enabled: list[str] = []
        for extractor_id in enabled_ids:
            if extractor_id in self._extractor_ids and extractor_id not in enabled:
                enabled.append(extractor_id)
        return enabled

    def implementation(self, extractor_id: str) -> type[FileExtractor]:
        return get_implementation(extractor_id)

    def describe(self, settings: Settings | None = None) -> list[ExtractorDescriptor]:
        """Descriptors of all registered extractors, in registry order."""
        return [get_implementation(extractor_id).get_info(settings) for extractor_id in self]

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._extractor_ids))

    def __len__(self) -> int:
        return len(self._extractor_ids)

    def __contains__(self, extractor_id: object) -> bool:
        return extractor_id in self._extractor_ids
