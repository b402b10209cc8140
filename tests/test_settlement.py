"""
Tests for the Settlement entity and the SettlementCatalog mapping.
"""

import pytest

from backend.models.settlement import Settlement, SettlementCatalog, is_valid_postal_code
from backend.models.exceptions import (
    DuplicateSettlementError,
    InvalidPostalCodeError,
    MissingRegionError,
    SettlementDataError,
    UnknownSettlementError,
)


class TestSettlement:
    """Test postal code handling on a single settlement."""

    def test_add_postal_code(self):
        settlement = Settlement('Szeged', 'Csongrád-Csanád')

        assert settlement.add_postal_code('6720') is True
        assert settlement.add_postal_code('6721') is True
        assert settlement.postal_codes == ['6720', '6721']

    def test_add_same_code_twice_is_idempotent(self):
        settlement = Settlement('Szeged', 'Csongrád-Csanád')

        settlement.add_postal_code('6720')
        assert settlement.add_postal_code('6720') is False
        assert settlement.postal_codes == ['6720']

    def test_insertion_order_preserved(self):
        settlement = Settlement('Aba', 'Fejér')
        for code in ['8127', '8100', '8127', '8000']:
            settlement.add_postal_code(code)

        assert settlement.postal_codes == ['8127', '8100', '8000']

    @pytest.mark.parametrize('code', ['672', '67201', '', '67a0', ' 672', '6720 ', '-720', '６７２０'])
    def test_invalid_postal_code(self, code):
        settlement = Settlement('Szeged', 'Csongrád-Csanád')

        with pytest.raises(InvalidPostalCodeError) as exc_info:
            settlement.add_postal_code(code)

        assert exc_info.value.postal_code == code
        assert settlement.postal_codes == []

    def test_initial_postal_codes_validated_and_deduplicated(self):
        settlement = Settlement('Aba', 'Fejér', ['8127', '8127'])
        assert settlement.postal_codes == ['8127']

        with pytest.raises(InvalidPostalCodeError):
            Settlement('Aba', 'Fejér', ['812'])

    def test_is_capital(self):
        assert Settlement('Budapest').is_capital is True
        assert Settlement('Budapest 05. ker.').is_capital is True
        assert Settlement('Szeged', 'Csongrád-Csanád').is_capital is False

    @pytest.mark.parametrize('region', [None, ''])
    def test_non_capital_requires_region(self, region):
        with pytest.raises(MissingRegionError) as exc_info:
            Settlement('Szeged', region)

        assert exc_info.value.name == 'Szeged'

    def test_capital_rejects_region(self):
        with pytest.raises(SettlementDataError):
            Settlement('Budapest 05. ker.', 'Pest')

    def test_is_valid_postal_code(self):
        assert is_valid_postal_code('1011') is True
        assert is_valid_postal_code('0000') is True
        assert is_valid_postal_code(1011) is False
        assert is_valid_postal_code('1011\n') is False


class TestSettlementCatalog:
    """Test the name-keyed catalog."""

    def test_add_and_get(self):
        catalog = SettlementCatalog()
        szeged = catalog.add(Settlement('Szeged', 'Csongrád-Csanád'))

        assert catalog.get('Szeged') is szeged
        assert 'Szeged' in catalog
        assert len(catalog) == 1
        assert list(catalog) == ['Szeged']

    def test_duplicate_name_rejected(self):
        catalog = SettlementCatalog()
        catalog.add(Settlement('Szeged', 'Csongrád-Csanád'))

        with pytest.raises(DuplicateSettlementError) as exc_info:
            catalog.add(Settlement('Szeged', 'Csongrád-Csanád'))

        assert exc_info.value.name == 'Szeged'
        assert len(catalog) == 1

    def test_unknown_settlement(self):
        catalog = SettlementCatalog()

        with pytest.raises(UnknownSettlementError) as exc_info:
            catalog.get('Atlantisz')
        assert exc_info.value.name == 'Atlantisz'

        with pytest.raises(UnknownSettlementError):
            catalog.add_postal_code('Atlantisz', '1234')

    def test_add_postal_code_by_name(self):
        catalog = SettlementCatalog()
        catalog.add(Settlement('Szeged', 'Csongrád-Csanád'))

        catalog.add_postal_code('Szeged', '6720')
        catalog.add_postal_code('Szeged', '6720')

        assert catalog.get('Szeged').postal_codes == ['6720']
        assert catalog.postal_code_count() == 1

    def test_settlements_in_insertion_order(self):
        catalog = SettlementCatalog()
        for name in ['Szeged', 'Aba', 'Budapest']:
            catalog.add(Settlement(name, None if name == 'Budapest' else 'X'))

        assert [s.name for s in catalog.settlements()] == ['Szeged', 'Aba', 'Budapest']

    def test_errors_share_base_class(self):
        for error_class in (DuplicateSettlementError, UnknownSettlementError, InvalidPostalCodeError):
            assert issubclass(error_class, SettlementDataError)
            assert issubclass(error_class, ValueError)
