"""
code128.patterns - Bar/space patterns of the Code 128 symbology.

Each symbol value 0-105 is 11 modules wide (3 bars + 3 spaces);
the stop symbol (106) carries the 2-module termination bar and is 13 wide.
A '1' is a bar module, a '0' a space module.
"""

from __future__ import annotations

from code128.errors import PatternError

START_B_VALUE = 104
STOP_VALUE    = 106
MODULO        = 103

PATTERN_WIDTH = 11
STOP_WIDTH    = 13

# Indexed by symbol value.  Code Set B data characters are 0-94
# (ASCII 32-126); 95-102 are function/shift codes, 103-105 start codes.
_PATTERNS = (
    "11011001100", "11001101100", "11001100110", "10010011000", "10010001100",  # 0-4
    "10001001100", "10011001000", "10011000100", "10001100100", "11001001000",  # 5-9
    "11001000100", "11000100100", "10110011100", "10011011100", "10011001110",  # 10-14
    "10111001100", "10011101100", "10011100110", "11001110010", "11001011100",  # 15-19
    "11001001110", "11011100100", "11001110100", "11101101110", "11101001100",  # 20-24
    "11100101100", "11100100110", "11101100100", "11100110100", "11100110010",  # 25-29
    "11011011000", "11011000110", "11000110110", "10100011000", "10001011000",  # 30-34
    "10001000110", "10110001000", "10001101000", "10001100010", "11010001000",  # 35-39
    "11000101000", "11000100010", "10110111000", "10110001110", "10001101110",  # 40-44
    "10111011000", "10111000110", "10001110110", "11101110110", "11010001110",  # 45-49
    "11000101110", "11011101000", "11011100010", "11011101110", "11101011000",  # 50-54
    "11101000110", "11100010110", "11101101000", "11101100010", "11100011010",  # 55-59
    "11101111010", "11001000010", "11110001010", "10100110000", "10100001100",  # 60-64
    "10010110000", "10010000110", "10000101100", "10000100110", "10110010000",  # 65-69
    "10110000100", "10011010000", "10011000010", "10000110100", "10000110010",  # 70-74
    "11000010010", "11001010000", "11110111010", "11000010100", "10001111010",  # 75-79
    "10100111100", "10010111100", "10010011110", "10111100100", "10011110100",  # 80-84
    "10011110010", "11110100100", "11110010100", "11110010010", "11011011110",  # 85-89
    "11011110110", "11110110110", "10101111000", "10100011110", "10001011110",  # 90-94
    "10111101000", "10111100010", "11110101000", "11110100010", "10111011110",  # 95-99
    "10111101110", "11101011110", "11110101110", "11010000100", "11010010000",  # 100-104
    "11010011100", "1100011101011",                                             # 105, 106 (STOP)
)

START_CODE_B = _PATTERNS[START_B_VALUE]
STOP_CODE    = _PATTERNS[STOP_VALUE]


def pattern_for(value: int) -> str:
    """
    Return the module pattern for a symbol value.

    Raises PatternError when the value is not in the table.
    """
    # bool is an int subclass; True would otherwise map to value 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise PatternError(value)
    if not 0 <= value <= STOP_VALUE:
        raise PatternError(value)
    return _PATTERNS[value]
