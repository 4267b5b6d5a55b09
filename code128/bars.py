"""
code128.bars - Collapse a symbol bit-string into drawable bars.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Bar:
    start: int
    width: int

    @property
    def end(self) -> int:
        return self.start + self.width

    def to_dict(self) -> dict:
        return {"start": self.start, "width": self.width}


def runs(bits: str) -> Iterator[tuple[str, int, int]]:
    """
    Yield every maximal run of equal bits as (bit, start, width),
    left to right.  Widths of all runs add up to len(bits).
    """
    i = 0
    n = len(bits)
    while i < n:
        bit = bits[i]
        if bit not in "01":
            raise ValueError(f"invalid bit {bit!r} at offset {i}")
        j = i + 1
        while j < n and bits[j] == bit:
            j += 1
        yield bit, i, j - i
        i = j


def extract_bars(bits: str) -> list[Bar]:
    """Bars for every run of '1's; runs of '0' are the gaps between them."""
    return [Bar(start, width) for bit, start, width in runs(bits) if bit == "1"]
