"""
code128.encoder - Code 128-B symbol assembly.

Symbol layout:  START_B | data patterns | checksum | STOP

The checksum weighs every character of the input, including characters
skipped from the body for being outside Code Set B.  Strict mode refuses
such input instead.
"""

from __future__ import annotations

import logging

from code128.errors import UnencodableCharacterError
from code128.patterns import (
    MODULO, PATTERN_WIDTH, START_B_VALUE, START_CODE_B, STOP_CODE, STOP_WIDTH,
    pattern_for,
)

logger = logging.getLogger(__name__)

# Code Set B covers ASCII 32-126 → values 0-94
CODE_B_OFFSET = 32
CODE_B_SIZE   = 95


def char_value(char: str) -> int:
    """Code Set B value of a single character (may be out of range)."""
    return ord(char) - CODE_B_OFFSET


def is_encodable(char: str) -> bool:
    return 0 <= char_value(char) < CODE_B_SIZE


def count_encodable(value: str) -> int:
    return sum(1 for ch in value if is_encodable(ch))


def expected_length(value: str) -> int:
    """Module count of the symbol encode() emits for *value*."""
    return PATTERN_WIDTH * (2 + count_encodable(value)) + STOP_WIDTH


def checksum_value(value: str) -> int:
    """
    Mod-103 checksum over Start B plus the position-weighted
    character values.  ``""`` → 104 % 103 = 1.
    """
    total = START_B_VALUE
    for pos, ch in enumerate(value, 1):
        total += char_value(ch) * pos
    return total % MODULO


def compute_checksum_pattern(value: str) -> str:
    return pattern_for(checksum_value(value))


def encode(value: str, strict: bool = False) -> str:
    """
    Encode *value* as a Code 128-B bit-string ('1' = bar, '0' = space).

    Characters outside ASCII 32-126 are dropped from the body but still
    counted in the checksum.  With ``strict=True`` they raise
    UnencodableCharacterError instead.
    """
    parts = [START_CODE_B]
    skipped = 0

    for pos, ch in enumerate(value):
        if is_encodable(ch):
            parts.append(pattern_for(char_value(ch)))
        elif strict:
            raise UnencodableCharacterError(ch, pos)
        else:
            skipped += 1

    if skipped:
        logger.debug(f"Skipped {skipped} character(s) outside Code Set B in {value!r}")

    parts.append(compute_checksum_pattern(value))
    parts.append(STOP_CODE)
    return "".join(parts)
