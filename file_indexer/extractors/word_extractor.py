"""
Word processor document extractor using python-docx and odfpy.

Documents are trees of containers (tables, cells, sections, lists) and
text elements nested to arbitrary depth. Text is collected by walking the
tree, joining non-empty pieces with a single space.
"""

from pathlib import Path
from typing import Any, Callable, ClassVar, Iterable

from file_indexer.config import Settings
from file_indexer.extractors.base import ExtractionError, FileExtractor, module_available
from file_indexer.models import FileDescriptor

PIECE_SEPARATOR = " "

ChildrenFn = Callable[[Any], Iterable[Any]]
OwnTextFn = Callable[[Any], str]


def collect_text(element: Any, children: ChildrenFn, own_text: OwnTextFn) -> str:
    """
    Collect the text of an element and everything below it.

    Args:
        element: Root of the (sub)tree.
        children: Returns the child elements of an element.
        own_text: Returns the text an element carries itself.

    Returns:
        Non-empty texts of the children followed by the element's own
        text, joined by a single space.
    """
    pieces = [collect_text(child, children, own_text) for child in children(element)]
    pieces.append(own_text(element))
    return PIECE_SEPARATOR.join(piece for piece in pieces if piece)


class WordExtractor(FileExtractor):
    """
    Extracts text content from word processor documents.

    Handles .docx via python-docx and OpenDocument files via odfpy.
    Legacy binary .doc and .rtf files are claimed, but reading them
    fails with an ExtractionError.
    """

    id: ClassVar[str] = "word"
    label: ClassVar[str] = "Word"
    icon: ClassVar[str] = "file-word-o"

    SUPPORTED_EXTENSIONS: ClassVar[tuple[str, ...]] = ("doc", "docx", "odf", "rtf")

    @classmethod
    def is_available(cls, settings: Settings | None = None) -> bool:
        return module_available("docx")

    def get_text(self, file: FileDescriptor) -> str | None:
        """
        Extract text from a document.

        Args:
            file: The document file.

        Returns:
            Text of all body elements.

        Raises:
            ExtractionError: If the document cannot be read.
        """
        path = self._validate_file(file)
        extension = file.extension or path.suffix.lstrip(".").lower()

        if extension in ("doc", "rtf"):
            raise ExtractionError(f"Reading .{extension} documents is not supported", path)

        try:
            if extension == "odf":
                return self._extract_opendocument(path)
            return self._extract_docx(path)

        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(f"Unexpected error: {e}", path, cause=e) from e

    # ==========================================================================
    # python-docx
    # ==========================================================================

    def _extract_docx(self, path: Path) -> str:
        from docx import Document

        document = Document(str(path))
        return collect_text(document, self._docx_children, self._docx_own_text)

    @staticmethod
    def _docx_children(element: Any) -> Iterable[Any]:
        """Paragraphs and tables of the body or a cell; unique cells of a table."""
        from docx.table import Table
        from docx.text.paragraph import Paragraph

        if isinstance(element, Paragraph):
            return ()
        if isinstance(element, Table):
            seen: set[int] = set()
            cells = []
            for row in element.rows:
                for cell in row.cells:
                    # Merged cells are repeated for every grid position they span
                    if id(cell._tc) not in seen:
                        seen.add(id(cell._tc))
                        cells.append(cell)
            return cells
        if hasattr(element, "iter_inner_content"):
            return element.iter_inner_content()
        return ()

    @staticmethod
    def _docx_own_text(element: Any) -> str:
        from docx.text.paragraph import Paragraph

        if isinstance(element, Paragraph):
            return element.text.strip()
        return ""

    # ==========================================================================
    # odfpy
    # ==========================================================================

    def _extract_opendocument(self, path: Path) -> str:
        from odf.office import Body
        from odf.opendocument import load

        document = load(str(path))
        return PIECE_SEPARATOR.join(
            text
            for text in (
                collect_text(body, self._odf_children, self._odf_own_text)
                for body in document.getElementsByType(Body)
            )
            if text
        )

    @staticmethod
    def _is_odf_paragraph(element: Any) -> bool:
        from odf.namespaces import TEXTNS

        return getattr(element, "qname", None) in ((TEXTNS, "p"), (TEXTNS, "h"))

    @classmethod
    def _odf_children(cls, element: Any) -> Iterable[Any]:
        """Child elements; paragraphs are leaves read as a whole."""
        from odf.element import Element

        if cls._is_odf_paragraph(element):
            return ()
        return [child for child in element.childNodes if isinstance(child, Element)]

    @classmethod
    def _odf_own_text(cls, element: Any) -> str:
        from odf import teletype

        if cls._is_odf_paragraph(element):
            return teletype.extractText(element).strip()
        return ""
