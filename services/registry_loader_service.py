"""
Registry Loader Service - Build the settlement catalog from the KSH registry.

Reads the settlement sheet of the national settlement registry
(Helységnévtár) and creates one Settlement per row, keyed by name.
"""

import logging
from typing import Optional

from backend.models.settlement import Settlement, SettlementCatalog, CAPITAL_NAME
from backend.models.exceptions import (
    DuplicateSettlementError,
    MissingRegionError,
    MissingSettlementNameError,
    RegistrySheetNotFoundError,
)
from services.workbook_service import WorkbookSheet, WorkbookSource, get_cell, is_blank_row

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_SHEET_NAME = 'Helységek 2022.01.01.'

# Rows 0-2 hold the sheet title and column headers
HEADER_ROWS = 3

# First cell of the closing summary row
SUMMARY_ROW_SENTINEL = 'Összesen'

NAME_COLUMN = 0
REGION_COLUMN = 3


class SettlementRegistryLoader:
    """
    Loads settlements (name and region) from the registry workbook.

    Budapest and its districts ("Budapest", "Budapest 01. ker.", ...) belong
    to no region; every other settlement must have one.
    """

    def __init__(self, sheet_name: str = DEFAULT_REGISTRY_SHEET_NAME):
        self.sheet_name = sheet_name

    def load(self, source: WorkbookSource, catalog: Optional[SettlementCatalog] = None) -> SettlementCatalog:
        """
        Load the registry sheet into a catalog.

        Args:
            source: Registry workbook
            catalog: Catalog to fill (default: a new empty catalog)

        Returns:
            The populated catalog

        Raises:
            RegistrySheetNotFoundError: If the workbook has no registry sheet
            DuplicateSettlementError: If a settlement name appears twice
            MissingRegionError: If a non-capital settlement has no region
            MissingSettlementNameError: If a data row has no name
        """
        if catalog is None:
            catalog = SettlementCatalog()

        for sheet in source.sheets():
            if sheet.name != self.sheet_name:
                logger.debug(f"Skipping registry sheet: {sheet.name}")
                continue

            count = self._load_sheet(sheet, catalog)
            logger.info(f"Loaded {count} settlements from sheet '{sheet.name}'")
            return catalog

        raise RegistrySheetNotFoundError(self.sheet_name)

    def _load_sheet(self, sheet: WorkbookSheet, catalog: SettlementCatalog) -> int:
        count = 0

        for row_index, row in enumerate(sheet.rows):
            if row_index < HEADER_ROWS or is_blank_row(row):
                continue

            settlement_name = get_cell(row, NAME_COLUMN).strip()
            if settlement_name == SUMMARY_ROW_SENTINEL:
                continue

            if not settlement_name:
                raise MissingSettlementNameError(sheet_name=sheet.name, row_index=row_index)

            if settlement_name.startswith(CAPITAL_NAME):
                region_name = None
            else:
                region_name = get_cell(row, REGION_COLUMN).strip()
                if not region_name:
                    raise MissingRegionError(settlement_name, sheet_name=sheet.name, row_index=row_index)

            if settlement_name in catalog:
                raise DuplicateSettlementError(settlement_name, sheet_name=sheet.name, row_index=row_index)

            catalog.add(Settlement(settlement_name, region_name))
            count += 1

        return count
