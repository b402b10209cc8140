"""
Data-integrity errors raised while building the settlement catalog.

Every error is fatal for the run. They share a common base class so callers
can catch the whole family or a single condition.
"""

from typing import Optional


class SettlementDataError(ValueError):
    """Base class for all catalog data-integrity errors."""

    def __init__(self, message: str, sheet_name: Optional[str] = None,
                 row_index: Optional[int] = None):
        self.sheet_name = sheet_name
        self.row_index = row_index
        if sheet_name is not None and row_index is not None:
            message = f"{message} (sheet: {sheet_name}, row: {row_index})"
        super().__init__(message)


class DuplicateSettlementError(SettlementDataError):
    """A settlement name appeared twice in the registry."""

    def __init__(self, name: str, **kwargs):
        self.name = name
        super().__init__(f"Duplicated settlement name: {name}", **kwargs)


class MissingRegionError(SettlementDataError):
    """A non-capital settlement has no region."""

    def __init__(self, name: str, **kwargs):
        self.name = name
        super().__init__(f"Region name missing, settlement: {name}", **kwargs)


class MissingSettlementNameError(SettlementDataError):
    """A registry row carries data but no settlement name."""

    def __init__(self, **kwargs):
        super().__init__("Settlement name missing", **kwargs)


class UnknownSettlementError(SettlementDataError):
    """A postal code references a settlement that is not in the catalog."""

    def __init__(self, name: str, **kwargs):
        self.name = name
        super().__init__(f"Settlement not found: {name}", **kwargs)


class InvalidPostalCodeError(SettlementDataError):
    """A postal code is not exactly four digits."""

    def __init__(self, postal_code: str, **kwargs):
        self.postal_code = postal_code
        super().__init__(f"Postal code invalid format: {postal_code!r}", **kwargs)


class RegistrySheetNotFoundError(SettlementDataError):
    """The registry workbook has no sheet with the expected name."""

    def __init__(self, sheet_name: str):
        super().__init__(f"Registry sheet not found: {sheet_name}")
        self.sheet_name = sheet_name
