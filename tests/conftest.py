"""
Pytest configuration and fixtures for settlement catalog tests.
"""

import pytest
import openpyxl

from backend.config import get_settings
from services.workbook_service import InMemoryWorkbookSource

REGISTRY_SHEET = 'Helységek 2022.01.01.'

REGISTRY_HEADER = [
    ['Magyarország helységnévtára, 2022. január 1.'],
    ['Településszám: 3155'],
    ['Helység megnevezése', 'Helység KSH kódja', 'Helység jogállása', 'Vármegye megnevezése'],
]


def registry_rows(*rows):
    """Registry sheet rows: three header rows, the given rows, then the summary row."""
    return REGISTRY_HEADER + [list(r) for r in rows] + [['Összesen', '', '', '']]


def district_row(postal_code, street_name, district_code):
    """A Bp.u. row with the district code in the ninth column."""
    return [postal_code, street_name, 'utca', '', '', '', '', '', district_code]


@pytest.fixture
def registry_source():
    """A small registry with the capital, two districts and three towns."""
    return InMemoryWorkbookSource({
        'Tartalom': [['Tartalomjegyzék']],
        REGISTRY_SHEET: registry_rows(
            ['Budapest', '13578', 'főváros', ''],
            ['Budapest 01. ker.', '01', 'fővárosi kerület', ''],
            ['Budapest 12. ker.', '12', 'fővárosi kerület', ''],
            ['Szeged', '33367', 'megyei jogú város', 'Csongrád-Csanád'],
            ['Aba', '17376', 'város', 'Fejér'],
            ['Abádszalók', '12441', 'város', 'Jász-Nagykun-Szolnok'],
        ),
    })


@pytest.fixture
def postal_source():
    """A postal directory covering every sheet layout."""
    return InMemoryWorkbookSource({
        'Települések': [
            ['Irányítószámok'],
            ['IRSZ', 'Település', 'Településrész'],
            [8127, 'Aba', ''],
            [5241, 'Abádszalók ', ''],
            [8127, 'Aba', 'Belsőbáránd'],
        ],
        'Bp.u.': [
            ['IRSZ', 'Utca', 'Jelleg', '', '', '', '', '', 'Ker'],
            district_row(1011, 'Apród', 'I.'),
            district_row(1122, 'Alkotás', 'XII.'),
            district_row(1007, 'Margitsziget', ''),
        ],
        'Szeged u.': [
            ['IRSZ', 'Utca'],
            [6720, 'Kárász'],
            [6721, 'Tisza Lajos'],
            [6720, 'Klauzál tér'],
        ],
        'Postafiókok': [
            ['IRSZ', 'Posta'],
            [1900, 'Budapest 1'],
        ],
    })


@pytest.fixture
def write_workbook(tmp_path):
    """Write {sheet: rows} to an .xlsx file and return its path."""
    def _write(sheets, filename='workbook.xlsx'):
        wb = openpyxl.Workbook()
        wb.remove(wb.active)
        for name, rows in sheets.items():
            ws = wb.create_sheet(title=name)
            for row in rows:
                ws.append(list(row))
        path = tmp_path / filename
        wb.save(path)
        return path

    return _write


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep settings and log output away from the working directory."""
    monkeypatch.setenv('LOG_FILE', str(tmp_path / 'settlement_catalog.log'))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
