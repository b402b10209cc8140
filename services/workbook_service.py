"""
Workbook Service - Sheet and row access for spreadsheet sources.

The catalog services only need named sheets of rows of string cells. This
module provides that view over .xlsx files (via openpyxl) and over rows
that are already in memory.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Sequence, Union

import openpyxl

logger = logging.getLogger(__name__)

Row = List[str]


def cell_to_text(value: Any) -> str:
    """
    Convert a raw cell value to text.

    Empty cells become '' and integral floats lose their decimal part, so a
    postal code stored as the number 1011.0 reads as '1011'.
    """
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def get_cell(row: Sequence[str], index: int) -> str:
    """Return the cell at a 0-based column index, or '' past the row end."""
    if index < len(row):
        return row[index]
    return ''


def is_blank_row(row: Sequence[str]) -> bool:
    """True if every cell of the row is empty or whitespace."""
    return not any(cell.strip() for cell in row)


class WorkbookSheet:
    """A named sheet yielding rows of string cells (0-indexed)."""

    def __init__(self, name: str, rows: Iterable[Row]):
        self.name = name
        self.rows = rows

    def __repr__(self) -> str:
        return f"<WorkbookSheet(name='{self.name}')>"


class WorkbookSource:
    """Base class for anything that yields named sheets."""

    def sheets(self) -> Iterator[WorkbookSheet]:
        raise NotImplementedError


class InMemoryWorkbookSource(WorkbookSource):
    """Workbook source backed by rows already extracted to memory."""

    def __init__(self, sheets: Dict[str, Iterable[Sequence[Any]]]):
        self._sheets = sheets

    def sheets(self) -> Iterator[WorkbookSheet]:
        for name, rows in self._sheets.items():
            yield WorkbookSheet(name, ([cell_to_text(v) for v in row] for row in rows))


class ExcelWorkbookSource(WorkbookSource):
    """
    Workbook source reading an .xlsx file with openpyxl.

    The file is opened read-only with computed values. Sheets and rows are
    streamed, so each sheet's rows must be consumed before moving on to the
    next sheet.
    """

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = str(file_path)

    def sheets(self) -> Iterator[WorkbookSheet]:
        logger.info(f"Opening workbook: {self.file_path}")
        wb = openpyxl.load_workbook(self.file_path, read_only=True, data_only=True)

        try:
            for sheet_name in wb.sheetnames:
                logger.debug(f"Reading sheet: {sheet_name}")
                yield WorkbookSheet(sheet_name, self._iter_rows(wb[sheet_name]))
        finally:
            wb.close()

    @staticmethod
    def _iter_rows(worksheet) -> Iterator[Row]:
        for row in worksheet.iter_rows(values_only=True):
            yield [cell_to_text(value) for value in row]
