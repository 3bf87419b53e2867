"""Dataset import service: first sheet of a CSV or Excel upload to headers and rows."""
import csv
import io
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

import xlrd
from openpyxl import load_workbook
from openpyxl.worksheet._read_only import ReadOnlyWorksheet
from openpyxl.worksheet.worksheet import Worksheet

from merge_designer.config import config
from merge_designer.domain.exceptions import ParseError
from merge_designer.domain.models import DatasetImport
from merge_designer.utils.cell_helpers import ensure_unique_headers, is_row_blank, sanitize_cell

logger = logging.getLogger(__name__)


class DatasetImporter:
    """Service for extracting tabular records from an uploaded spreadsheet."""

    def __init__(self, content: bytes, filename: str, import_config=None):
        self.content = content
        self.filename = filename
        self.config = import_config or config.dataset_import

    @property
    def extension(self) -> str:
        return Path(self.filename or "").suffix.lower()

    def read(self) -> DatasetImport:
        """Read the first sheet; the first row holds the headers."""
        if self.extension not in self.config.supported_extensions:
            supported = ", ".join(self.config.supported_extensions)
            raise ParseError(
                f"Unsupported file type '{self.extension or self.filename}'. Use one of: {supported}"
            )

        if self.extension == ".csv":
            rows = self._read_csv_rows()
        elif self.extension == ".xls":
            rows = self._read_legacy_workbook_rows()
        else:
            rows = self._read_workbook_rows()

        dataset = self._build_dataset(rows)
        logger.info(
            "Imported %s: %d header(s), %d row(s)",
            self.filename, len(dataset.headers), dataset.row_count,
        )
        return dataset

    def _read_csv_rows(self) -> List[Sequence[Any]]:
        try:
            text = self.content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"Unable to decode CSV file as UTF-8: {e}") from e
        try:
            return list(csv.reader(io.StringIO(text, newline="")))
        except csv.Error as e:
            raise ParseError(f"Malformed CSV file: {e}") from e

    def _read_workbook_rows(self) -> List[Sequence[Any]]:
        try:
            workbook = load_workbook(io.BytesIO(self.content), read_only=True, data_only=True)
        except Exception as e:
            raise ParseError(f"Unable to read spreadsheet '{self.filename}': {e}") from e

        try:
            if not workbook.sheetnames:
                raise ParseError("The file does not contain any sheets or rows.")
            worksheet = workbook[workbook.sheetnames[0]]
            # The first sheet may be a chartsheet, which has no cells.
            if not isinstance(worksheet, (Worksheet, ReadOnlyWorksheet)):
                raise ParseError("Unable to read the first sheet from the file.")
            try:
                return [tuple(row) for row in worksheet.iter_rows(values_only=True)]
            except Exception as e:
                raise ParseError(f"Unable to read spreadsheet '{self.filename}': {e}") from e
        finally:
            workbook.close()

    def _read_legacy_workbook_rows(self) -> List[Sequence[Any]]:
        try:
            book = xlrd.open_workbook(file_contents=self.content, on_demand=True)
        except Exception as e:
            raise ParseError(f"Unable to read spreadsheet '{self.filename}': {e}") from e

        try:
            if not book.nsheets:
                raise ParseError("The file does not contain any sheets or rows.")
            sheet = book.sheet_by_index(0)
            try:
                return [
                    tuple(_legacy_cell_value(cell, book.datemode) for cell in sheet.row(index))
                    for index in range(sheet.nrows)
                ]
            except Exception as e:
                raise ParseError(f"Unable to read spreadsheet '{self.filename}': {e}") from e
        finally:
            book.release_resources()

    def _build_dataset(self, rows: Iterable[Sequence[Any]]) -> DatasetImport:
        sanitized = [[sanitize_cell(value) for value in row] for row in rows]
        sanitized = [row for row in sanitized if not is_row_blank(row)]
        if not sanitized:
            raise ParseError("The file does not contain any rows.")

        header_row = sanitized[0]
        # Blank header cells are dropped along with their column.
        columns = [(index, label) for index, label in enumerate(header_row) if label]
        headers = ensure_unique_headers([label for _, label in columns])

        records = []
        for cells in sanitized[1:]:
            record = {
                header: _cell_at(cells, index)
                for header, (index, _) in zip(headers, columns)
            }
            if is_row_blank(record.values()):
                continue
            records.append(record)

        return DatasetImport(headers=headers, rows=records)


def _cell_at(cells: Sequence[str], index: int) -> str:
    return cells[index] if index < len(cells) else ""


def _legacy_cell_value(cell, datemode: int) -> Any:
    """Python value of an xlrd cell, ready for sanitize_cell."""
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == xlrd.XL_CELL_ERROR:
        return xlrd.error_text_from_code.get(cell.value, "")
    return cell.value


def read_dataset(content: bytes, filename: str, import_config: Optional[Any] = None) -> DatasetImport:
    """Parse an uploaded CSV/Excel file; raises ParseError when unreadable."""
    return DatasetImporter(content, filename, import_config).read()
