"""
code128 - Code 128-B symbol encoder.

Public API:
    encode(value)         → bit-string for the full symbol
    extract_bars(bits)    → [Bar(start, width), ...] for drawing
    pattern_for(value)    → 11-bit pattern of one symbol value
"""

from code128.errors import Code128Error, PatternError, UnencodableCharacterError  # noqa: F401
from code128.patterns import START_CODE_B, STOP_CODE, pattern_for                 # noqa: F401
from code128.encoder import (                                                     # noqa: F401
    char_value, is_encodable, count_encodable, expected_length,
    checksum_value, compute_checksum_pattern, encode,
)
from code128.bars import Bar, runs, extract_bars                                  # noqa: F401
