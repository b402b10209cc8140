"""
Roman numeral decoding for Budapest district codes.

District codes in the postal directory are written as roman numerals
(I. to XXIII.). Decoding is lenient: malformed numerals are not rejected,
they decode to a best-effort number.
"""

from typing import List, Tuple

# Subtractive pairs sit before their single-letter neighbours
ROMAN_SYMBOLS: List[Tuple[str, int]] = [
    ('M', 1000),
    ('CM', 900),
    ('D', 500),
    ('CD', 400),
    ('C', 100),
    ('XC', 90),
    ('L', 50),
    ('XL', 40),
    ('X', 10),
    ('IX', 9),
    ('V', 5),
    ('IV', 4),
    ('I', 1),
]


def roman_to_int(roman_numeral: str) -> int:
    """
    Convert a roman numeral to an integer.

    Walks the symbol table once, consuming each symbol from the head of the
    remaining string for as long as it matches. Characters left over after
    the walk are ignored.

    Examples:
        >>> roman_to_int('XII')
        12
        >>> roman_to_int('MCMXCIV')
        1994
    """
    result = 0
    remaining = roman_numeral

    for symbol, value in ROMAN_SYMBOLS:
        while remaining.startswith(symbol):
            result += value
            remaining = remaining[len(symbol):]

    return result
