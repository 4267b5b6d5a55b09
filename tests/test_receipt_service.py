"""
Tests for the receipt model and its SVG/PNG rendering.
"""

import random
import re
from io import BytesIO

import pytest
from PIL import Image

import config
from code128 import UnencodableCharacterError, encode
from services.receipt_service import (
    LineItem, Receipt, ReceiptError, ReceiptSettings, generate_item_id,
    generate_receipt_no, layout_height, layout_receipt, receipt_filename,
    render_receipt_png, render_receipt_svg, png_canvas_width,
    LINE_HEIGHTS, RECEIPT_PADDING, RECEIPT_WIDTH,
)


def _receipt(**kwargs):
    kwargs.setdefault("receipt_no", "R-TEST0001")
    kwargs.setdefault("date", "2024-05-01")
    return Receipt(**kwargs)


# --------------------------------------------------------------------------- #
# Identifiers
# --------------------------------------------------------------------------- #

def test_receipt_no_format():
    for _ in range(20):
        assert re.fullmatch(r"R-[A-Z0-9]{8}", generate_receipt_no())


def test_receipt_no_seeded_is_reproducible():
    assert generate_receipt_no(random.Random(7)) == generate_receipt_no(random.Random(7))


def test_item_id_format():
    assert re.fullmatch(r"[0-9a-z]{7}", generate_item_id())


# --------------------------------------------------------------------------- #
# Model
# --------------------------------------------------------------------------- #

def test_defaults():
    receipt = Receipt()
    assert receipt.cashier == "STAFF"
    assert [it.name for it in receipt.items] == ["COFFEE BEAN (250G)", "CROISSANT", "GREEN TEA"]
    assert receipt.total == "$24.30"
    assert receipt.settings.header_title == config.STORE_NAME
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", receipt.date)


def test_default_items_are_not_shared():
    a, b = Receipt(), Receipt()
    a.add_item("EXTRA")
    assert len(b.items) == 3


def test_add_update_remove_item():
    receipt = _receipt()
    item = receipt.add_item()
    assert (item.name, item.qty, item.price) == ("New Item", "1", "$0.00")

    receipt.update_item(item.id, "price", "$3.00")
    assert receipt.items[-1].price == "$3.00"

    receipt.remove_item(item.id)
    assert item.id not in [it.id for it in receipt.items]
    receipt.remove_item("missing")        # no-op
    assert len(receipt.items) == 3


def test_update_item_rejects_unknown_field_and_id():
    receipt = _receipt()
    with pytest.raises(ReceiptError):
        receipt.update_item(receipt.items[0].id, "id", "x")
    with pytest.raises(ReceiptError):
        receipt.update_item("missing", "name", "x")


def test_add_item_limit(monkeypatch):
    monkeypatch.setattr(config, "MAX_LINE_ITEMS", 3)
    with pytest.raises(ReceiptError):
        _receipt().add_item()


def test_from_dict_fills_defaults():
    receipt = Receipt.from_dict({
        "receipt_no": "R-ABC",
        "items": [{"name": "TEA", "price": "$1.00"}],
        "settings": {"header_title": "CORNER SHOP"},
    })
    assert receipt.receipt_no == "R-ABC"
    assert receipt.cashier == "STAFF"
    assert receipt.items[0].qty == "1"
    assert receipt.settings.header_title == "CORNER SHOP"
    assert receipt.settings.total_label == "TOTAL:"


def test_to_dict_from_dict_round_trip():
    receipt = _receipt()
    assert Receipt.from_dict(receipt.to_dict()) == receipt


@pytest.mark.parametrize("payload", [
    [],
    {"bogus": "x"},
    {"total": 24.3},
    {"items": "TEA"},
    {"items": [{"name": "TEA", "colour": "red"}]},
    {"settings": {"header": "X"}},
    {"settings": "X"},
    {"settings": []},
    {"settings": 0},
    {"settings": ""},
])
def test_from_dict_rejects_bad_payloads(payload):
    with pytest.raises(ReceiptError):
        Receipt.from_dict(payload)


def test_settings_from_dict():
    settings = ReceiptSettings.from_dict({"tax_label": "VAT:"})
    assert settings.tax_label == "VAT:"


def test_line_item_from_dict_keeps_id():
    assert LineItem.from_dict({"id": "abc1234"}).id == "abc1234"


def test_filename():
    assert receipt_filename(_receipt()) == "receipt-R-TEST0001-2024-05-01.png"
    assert receipt_filename(_receipt(receipt_no="R/1\n"), "svg") == "receipt-R_1_-2024-05-01.svg"


# --------------------------------------------------------------------------- #
# Layout & rendering
# --------------------------------------------------------------------------- #

def test_layout_numbers_items_and_ends_with_barcode_footer():
    lines = layout_receipt(_receipt())
    items = [ln for ln in lines if ln.kind == "item"]
    assert items[0].left == "01  COFFEE BEAN (250G)"
    assert items[2].right == "$4.00"
    kinds = [ln.kind for ln in lines]
    assert kinds[0] == "title"
    assert kinds[-3:] == ["barcode", "footer", "footer"]
    barcode = lines[-3]
    assert barcode.left == barcode.right == "R-TEST0001"


def test_svg_contains_fields_and_barcode():
    svg = render_receipt_svg(_receipt(cashier="A&B"))
    assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "R-TEST0001" in svg
    assert "A&amp;B" in svg
    assert 'fill="black"' in svg
    assert "THANK YOU FOR YOUR PATRONAGE" in svg


def test_svg_inline_has_no_xml_declaration():
    assert render_receipt_svg(_receipt(), standalone=False).startswith("<svg")


def test_png_size_follows_pixel_ratio():
    receipt = _receipt()
    image = Image.open(BytesIO(render_receipt_png(receipt, pixel_ratio=2)))
    assert image.size == (RECEIPT_WIDTH * 2, layout_height(layout_receipt(receipt)) * 2)
    assert image.getpixel((0, 0)) == (0xFD, 0xFC, 0xF5)


def test_strict_encoding_applies_to_receipts(monkeypatch):
    monkeypatch.setattr(config, "STRICT_ENCODING", True)
    with pytest.raises(UnencodableCharacterError):
        render_receipt_svg(_receipt(receipt_no="R-\x01"))


def test_from_dict_null_settings_take_defaults():
    receipt = Receipt.from_dict({"settings": None})
    assert receipt.settings == ReceiptSettings()


def test_png_keeps_standard_width_for_short_numbers():
    receipt = _receipt()
    assert png_canvas_width(layout_receipt(receipt)) == RECEIPT_WIDTH


def test_png_widens_for_long_barcode():
    """A symbol wider than the usable area grows the canvas instead of clipping."""
    receipt = _receipt(receipt_no="R-" + "X" * 40)
    bar_w = len(encode(receipt.receipt_no))
    assert bar_w == 497
    width = png_canvas_width(layout_receipt(receipt))
    assert width == bar_w + 2 * RECEIPT_PADDING

    image = Image.open(BytesIO(render_receipt_png(receipt, pixel_ratio=1)))
    assert image.width == width
    lines = layout_receipt(receipt)
    bar_top = RECEIPT_PADDING + sum(LINE_HEIGHTS[ln.kind] for ln in lines[:-3]) + 4
    row = bar_top + 10
    ink = (0x3B, 0x3A, 0x36)
    # start code begins at the left padding, stop code ends at the right padding
    assert image.getpixel((RECEIPT_PADDING - 1, row)) != ink
    assert image.getpixel((RECEIPT_PADDING, row)) == ink
    assert image.getpixel((width - RECEIPT_PADDING - 1, row)) == ink
    assert image.getpixel((width - RECEIPT_PADDING, row)) != ink
