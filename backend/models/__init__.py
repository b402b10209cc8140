"""Models package for the settlement catalog."""
from backend.models.settlement import Settlement, SettlementCatalog
from backend.models.exceptions import (
    SettlementDataError,
    DuplicateSettlementError,
    MissingRegionError,
    MissingSettlementNameError,
    UnknownSettlementError,
    InvalidPostalCodeError,
    RegistrySheetNotFoundError,
)

__all__ = [
    'Settlement', 'SettlementCatalog',
    'SettlementDataError', 'DuplicateSettlementError', 'MissingRegionError',
    'MissingSettlementNameError', 'UnknownSettlementError',
    'InvalidPostalCodeError', 'RegistrySheetNotFoundError',
]
