"""
Spreadsheet extractor using openpyxl and pandas.

Reads cell values (not formulas or formatting) from every sheet and
flattens them into a single line of text: cells are joined by ", ",
rows and sheets by " ... ".
"""

import csv
from pathlib import Path
from typing import Any, ClassVar

from file_indexer.config import Settings
from file_indexer.extractors.base import ExtractionError, FileExtractor, module_available
from file_indexer.models import FileDescriptor

CELL_SEPARATOR = ", "
ROW_SEPARATOR = " ... "

Rows = list[list[Any]]


class SpreadsheetExtractor(FileExtractor):
    """
    Extracts text content from spreadsheets.

    Handles .xlsx via openpyxl, .xls and .ods via pandas (xlrd and odf
    engines) and .csv via the csv module.
    """

    id: ClassVar[str] = "spreadsheet"
    label: ClassVar[str] = "Spreadsheet"
    icon: ClassVar[str] = "file-excel-o"

    SUPPORTED_EXTENSIONS: ClassVar[tuple[str, ...]] = ("xls", "xlsx", "ods", "csv")

    # pandas engine per extension
    PANDAS_ENGINES: ClassVar[dict[str, str]] = {"xls": "xlrd", "ods": "odf"}

    @classmethod
    def is_available(cls, settings: Settings | None = None) -> bool:
        return module_available("pandas") and module_available("openpyxl")

    def get_text(self, file: FileDescriptor) -> str | None:
        """
        Extract text from all sheets of a spreadsheet.

        Args:
            file: The spreadsheet file.

        Returns:
            Flattened cell values.

        Raises:
            ExtractionError: If the file cannot be read.
        """
        path = self._validate_file(file)
        extension = file.extension or path.suffix.lstrip(".").lower()

        try:
            if extension == "xlsx":
                sheets = self._read_xlsx(path)
            elif extension == "csv":
                sheets = [self._read_csv(path)]
            elif extension in self.PANDAS_ENGINES:
                sheets = self._read_with_pandas(path, self.PANDAS_ENGINES[extension])
            else:
                raise ExtractionError(f"Unsupported spreadsheet format '{extension}'", path)

            return ROW_SEPARATOR.join(
                sheet_text for sheet_text in map(self._sheet_text, sheets) if sheet_text
            )

        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(f"Unexpected error: {e}", path, cause=e) from e

    def _read_xlsx(self, path: Path) -> list[Rows]:
        """
        Read all sheets of an .xlsx file using openpyxl.

        Args:
            path: Path to the .xlsx file.

        Returns:
            Cell values per sheet.
        """
        from openpyxl import load_workbook

        workbook = load_workbook(path, read_only=True, data_only=True)
        try:
            return [
                [list(row) for row in workbook[sheet_name].iter_rows(values_only=True)]
                for sheet_name in workbook.sheetnames
            ]
        finally:
            workbook.close()

    def _read_with_pandas(self, path: Path, engine: str) -> list[Rows]:
        """
        Read all sheets using pandas.

        Args:
            path: Path to the spreadsheet.
            engine: pandas Excel engine.

        Returns:
            Cell values per sheet.
        """
        import pandas as pd

        excel_data: dict[str, pd.DataFrame] = pd.read_excel(
            path, sheet_name=None, header=None, engine=engine
        )
        return [self._frame_rows(df) for df in excel_data.values()]

    def _read_csv(self, path: Path) -> Rows:
        """Read CSV rows as they are; rows may differ in length."""
        with open(path, newline="", encoding="utf-8-sig", errors="replace") as f:
            return [list(row) for row in csv.reader(f)]

    @staticmethod
    def _frame_rows(df: Any) -> Rows:
        """Convert a DataFrame to row lists with missing values as None."""
        return df.astype(object).where(df.notna(), None).values.tolist()

    def _sheet_text(self, rows: Rows) -> str:
        """
        Flatten the rows of one sheet.

        Rows without any value are skipped.
        """
        lines: list[str] = []

        for row in rows:
            cells = [self._format_cell(cell) for cell in row]
            if any(cells):
                lines.append(CELL_SEPARATOR.join(cells))

        return ROW_SEPARATOR.join(lines)

    @staticmethod
    def _format_cell(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value).strip()
