"""
In-memory settlement catalog.

A Settlement is one named place (city, town, Budapest district) with an
optional region and the postal codes that belong to it. The catalog maps
settlement names to settlements and is built once per run.
"""

import re
from typing import Dict, Iterator, List, Optional

from backend.models.exceptions import (
    DuplicateSettlementError,
    InvalidPostalCodeError,
    MissingRegionError,
    SettlementDataError,
    UnknownSettlementError,
)

CAPITAL_NAME = 'Budapest'

POSTAL_CODE_PATTERN = re.compile(r'[0-9]{4}')


def is_valid_postal_code(postal_code: str) -> bool:
    """Check that a postal code is exactly four ASCII digits."""
    return isinstance(postal_code, str) and POSTAL_CODE_PATTERN.fullmatch(postal_code) is not None


class Settlement:
    """
    One settlement of the catalog.

    Postal codes are kept in order of first appearance and never removed.
    """

    def __init__(self, name: str, region_name: Optional[str] = None,
                 postal_codes: Optional[List[str]] = None):
        """
        Args:
            name: Settlement name, unique within the catalog
            region_name: Region (county); None for Budapest and its districts
            postal_codes: Initial postal codes, validated and deduplicated

        Raises:
            MissingRegionError: If a non-capital settlement has no region
            SettlementDataError: If Budapest or one of its districts has a region
        """
        self.name = name
        self.region_name = region_name
        self.postal_codes: List[str] = []

        if self.is_capital and region_name is not None:
            raise SettlementDataError(f"Capital settlement cannot have a region: {name}")
        if not self.is_capital and not region_name:
            raise MissingRegionError(name)

        for postal_code in postal_codes or []:
            self.add_postal_code(postal_code)

    @property
    def is_capital(self) -> bool:
        """True for Budapest itself and each of its numbered districts."""
        return self.name.startswith(CAPITAL_NAME)

    def add_postal_code(self, postal_code: str) -> bool:
        """
        Add a postal code unless it is already present.

        Returns:
            True if the code was added, False if it was already known

        Raises:
            InvalidPostalCodeError: If the code is not exactly four digits
        """
        if not is_valid_postal_code(postal_code):
            raise InvalidPostalCodeError(postal_code)

        if postal_code in self.postal_codes:
            return False

        self.postal_codes.append(postal_code)
        return True

    def __repr__(self) -> str:
        return (f"<Settlement(name='{self.name}', region_name={self.region_name!r}, "
                f"postal_codes={len(self.postal_codes)})>")


class SettlementCatalog:
    """
    Settlements keyed by name.

    Names are unique for the lifetime of the catalog: inserting an existing
    name is an error, not a merge.
    """

    def __init__(self):
        self._settlements: Dict[str, Settlement] = {}

    def add(self, settlement: Settlement) -> Settlement:
        """
        Insert a new settlement.

        Raises:
            DuplicateSettlementError: If the name is already in the catalog
        """
        if settlement.name in self._settlements:
            raise DuplicateSettlementError(settlement.name)

        self._settlements[settlement.name] = settlement
        return settlement

    def get(self, name: str) -> Settlement:
        """
        Look up a settlement by name.

        Raises:
            UnknownSettlementError: If no settlement has this name
        """
        settlement = self._settlements.get(name)
        if settlement is None:
            raise UnknownSettlementError(name)
        return settlement

    def add_postal_code(self, name: str, postal_code: str) -> bool:
        """Attach a postal code to an existing settlement."""
        return self.get(name).add_postal_code(postal_code)

    def settlements(self) -> List[Settlement]:
        """All settlements in insertion order."""
        return list(self._settlements.values())

    def postal_code_count(self) -> int:
        return sum(len(s.postal_codes) for s in self._settlements.values())

    def __contains__(self, name: object) -> bool:
        return name in self._settlements

    def __iter__(self) -> Iterator[str]:
        return iter(self._settlements)

    def __len__(self) -> int:
        return len(self._settlements)

    def __repr__(self) -> str:
        return f"<SettlementCatalog(settlements={len(self)})>"
