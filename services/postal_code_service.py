"""
Postal Code Service - Attach Magyar Posta postal codes to settlements.

The postal directory workbook splits its data over several sheets, each with
its own row layout:

    Települések     postal code and settlement name per row
    Bp.u.           Budapest streets, keyed by roman-numeral district code
    <City> u.       streets of the large cities; the city comes from the
                    sheet name ("Szeged u." -> "Szeged")

Every other sheet is ignored. Codes are only attached to settlements that
already exist in the catalog.
"""

import logging
from typing import Callable, Dict, Iterator, Tuple

from backend.models.settlement import SettlementCatalog, CAPITAL_NAME, is_valid_postal_code
from backend.models.exceptions import InvalidPostalCodeError, UnknownSettlementError
from services.roman_numerals import roman_to_int
from services.workbook_service import WorkbookSheet, WorkbookSource, get_cell, is_blank_row

logger = logging.getLogger(__name__)

SETTLEMENTS_SHEET = 'Települések'
DISTRICT_SHEET = 'Bp.u.'
CITY_STREET_SHEETS = ('Miskolc u.', 'Debrecen u.', 'Szeged u.', 'Pécs u.', 'Győr u.')
CITY_STREET_SUFFIX = ' u.'

# Margaret Island is administered directly by the capital, not by a district
MARGARET_ISLAND = 'Margitsziget'

SETTLEMENTS_HEADER_ROWS = 2
DISTRICT_HEADER_ROWS = 1
CITY_STREET_HEADER_ROWS = 1

POSTAL_CODE_COLUMN = 0
SETTLEMENT_NAME_COLUMN = 1
STREET_NAME_COLUMN = 1
DISTRICT_COLUMN = 8

# (row index, postal code, target settlement name)
ResolvedRow = Tuple[int, str, str]


def district_settlement_name(district_code: str, street_name: str = '') -> str:
    """
    Map a Budapest street row to its settlement name.

    Args:
        district_code: Roman-numeral district with optional trailing period ("XII.")
        street_name: Street or location name of the row

    Returns:
        "Budapest" for Margaret Island, otherwise "Budapest NN. ker."
    """
    district_code = district_code.strip()

    if district_code == MARGARET_ISLAND or street_name.strip() == MARGARET_ISLAND:
        return CAPITAL_NAME

    district_number = roman_to_int(district_code.rstrip('.'))
    return f"{CAPITAL_NAME} {district_number:02d}. ker."


def city_street_settlement_name(sheet_name: str) -> str:
    """Derive the city from a street sheet name: "Szeged u." -> "Szeged"."""
    return sheet_name.removesuffix(CITY_STREET_SUFFIX)


class PostalCodeMerger:
    """
    Merges postal codes from the postal directory into an existing catalog.

    Must run after the registry loader: the merger never creates
    settlements.
    """

    def __init__(self):
        self._handlers: Dict[str, Callable[[WorkbookSheet], Iterator[ResolvedRow]]] = {
            SETTLEMENTS_SHEET: self._resolve_settlement_rows,
            DISTRICT_SHEET: self._resolve_district_rows,
        }
        for sheet_name in CITY_STREET_SHEETS:
            self._handlers[sheet_name] = self._resolve_city_street_rows

        self.stats = {
            'sheets_processed': 0,
            'sheets_skipped': 0,
            'rows_processed': 0,
            'postal_codes_added': 0,
        }

    def merge(self, source: WorkbookSource, catalog: SettlementCatalog) -> SettlementCatalog:
        """
        Attach the postal codes of every known sheet to the catalog.

        Args:
            source: Postal directory workbook
            catalog: Catalog populated by the registry loader

        Returns:
            The same catalog instance

        Raises:
            UnknownSettlementError: If a row targets a settlement not in the catalog
            InvalidPostalCodeError: If a postal code is not exactly four digits
        """
        for sheet in source.sheets():
            handler = self._handlers.get(sheet.name)

            if handler is None:
                logger.debug(f"Ignoring postal sheet: {sheet.name}")
                self.stats['sheets_skipped'] += 1
                continue

            added = 0
            rows = 0
            for row_index, postal_code, settlement_name in handler(sheet):
                if self._attach(catalog, sheet.name, row_index, postal_code, settlement_name):
                    added += 1
                rows += 1

            self.stats['sheets_processed'] += 1
            self.stats['rows_processed'] += rows
            self.stats['postal_codes_added'] += added
            logger.info(f"Sheet '{sheet.name}': {rows} rows, {added} new postal codes")

        return catalog

    def _attach(self, catalog: SettlementCatalog, sheet_name: str, row_index: int,
                postal_code: str, settlement_name: str) -> bool:
        if settlement_name not in catalog:
            raise UnknownSettlementError(settlement_name, sheet_name=sheet_name, row_index=row_index)

        if not is_valid_postal_code(postal_code):
            raise InvalidPostalCodeError(postal_code, sheet_name=sheet_name, row_index=row_index)

        return catalog.add_postal_code(settlement_name, postal_code)

    def _resolve_settlement_rows(self, sheet: WorkbookSheet) -> Iterator[ResolvedRow]:
        for row_index, row in enumerate(sheet.rows):
            if row_index < SETTLEMENTS_HEADER_ROWS or is_blank_row(row):
                continue

            yield (row_index,
                   get_cell(row, POSTAL_CODE_COLUMN),
                   get_cell(row, SETTLEMENT_NAME_COLUMN).strip())

    def _resolve_district_rows(self, sheet: WorkbookSheet) -> Iterator[ResolvedRow]:
        for row_index, row in enumerate(sheet.rows):
            if row_index < DISTRICT_HEADER_ROWS or is_blank_row(row):
                continue

            settlement_name = district_settlement_name(
                get_cell(row, DISTRICT_COLUMN),
                get_cell(row, STREET_NAME_COLUMN),
            )
            yield row_index, get_cell(row, POSTAL_CODE_COLUMN), settlement_name

    def _resolve_city_street_rows(self, sheet: WorkbookSheet) -> Iterator[ResolvedRow]:
        settlement_name = city_street_settlement_name(sheet.name)

        for row_index, row in enumerate(sheet.rows):
            if row_index < CITY_STREET_HEADER_ROWS or is_blank_row(row):
                continue

            yield row_index, get_cell(row, POSTAL_CODE_COLUMN), settlement_name
