"""
Tests for bar-run extraction.
"""

import pytest

from code128 import Bar, START_CODE_B, STOP_CODE, encode, extract_bars, runs


def test_runs_and_gaps():
    assert extract_bars("111011100") == [Bar(0, 3), Bar(4, 3)]


def test_trailing_bar_is_emitted():
    assert extract_bars(STOP_CODE) == [Bar(0, 2), Bar(5, 3), Bar(9, 1), Bar(11, 2)]


def test_start_code_bars():
    assert extract_bars(START_CODE_B) == [Bar(0, 2), Bar(3, 1), Bar(6, 1)]


def test_empty_and_blank_inputs():
    assert extract_bars("") == []
    assert extract_bars("0000") == []
    assert extract_bars("1") == [Bar(0, 1)]


def test_invalid_bit_rejected():
    with pytest.raises(ValueError):
        extract_bars("1102")


def test_bar_helpers():
    bar = Bar(4, 3)
    assert bar.end == 7
    assert bar.to_dict() == {"start": 4, "width": 3}


@pytest.mark.parametrize("value", ["", "A", "R-7K2Q9XAB", "A\nB"])
def test_runs_cover_whole_symbol(value):
    bits = encode(value)
    all_runs = list(runs(bits))
    assert sum(width for _, _, width in all_runs) == len(bits)
    # Rebuilding from runs gives back the bit-string
    assert "".join(bit * width for bit, _, width in all_runs) == bits


@pytest.mark.parametrize("value", ["", "A", "R-7K2Q9XAB", "Hello, World!"])
def test_bars_are_sorted_and_disjoint(value):
    bars = extract_bars(encode(value))
    assert all(b.width >= 1 for b in bars)
    for left, right in zip(bars, bars[1:]):
        assert left.end < right.start


def test_bars_match_ink_modules():
    bits = encode("AB")
    assert sum(b.width for b in extract_bars(bits)) == bits.count("1")
