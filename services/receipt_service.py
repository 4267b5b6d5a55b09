"""
services.receipt_service - Receipt model and rendering.

A receipt carries editable labels, line items and totals, and is
stamped with a receipt number that is printed as a Code 128 barcode
in the footer.  Rendering goes through a flat list of layout lines so
the SVG and PNG outputs stay in step.
"""

from __future__ import annotations

import logging
import random
import re
import string
from dataclasses import dataclass, field, fields, asdict
from datetime import date as _date
from io import BytesIO
from typing import Optional
from xml.sax.saxutils import escape

from PIL import Image, ImageDraw, ImageFont, ImageColor

import config
from code128 import encode
from services.barcode_service import (
    draw_barcode, generate_barcode_group_centered,
)

logger = logging.getLogger(__name__)

RECEIPT_NO_PREFIX   = "R-"
RECEIPT_NO_ALPHABET = string.ascii_uppercase + string.digits
RECEIPT_NO_LENGTH   = 8
ITEM_ID_ALPHABET    = string.digits + string.ascii_lowercase
ITEM_ID_LENGTH      = 7

TEXT_COLOR   = "#3B3A36"
MUTED_COLOR  = "#8A877C"


class ReceiptError(ValueError):
    """Invalid receipt payload or edit."""


def generate_receipt_no(rng: Optional[random.Random] = None) -> str:
    """'R-' followed by 8 characters from A-Z0-9, e.g. 'R-7K2Q9XAB'."""
    rng = rng or random
    return RECEIPT_NO_PREFIX + "".join(
        rng.choice(RECEIPT_NO_ALPHABET) for _ in range(RECEIPT_NO_LENGTH)
    )


def generate_item_id(rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    return "".join(rng.choice(ITEM_ID_ALPHABET) for _ in range(ITEM_ID_LENGTH))


# ── Model ──────────────────────────────────────────────────────────────

@dataclass
class ReceiptSettings:
    """Every printed label on the receipt."""
    header_title: str = field(default_factory=lambda: config.STORE_NAME)
    receipt_label: str = "RECEIPT #:"
    date_label: str = "DATE:"
    cashier_label: str = "CASHIER:"
    item_label: str = "ITEM"
    amount_label: str = "AMOUNT"
    subtotal_label: str = "SUBTOTAL:"
    tax_label: str = "TAX:"
    total_label: str = "TOTAL:"
    tendered_label: str = "TENDERED:"
    change_label: str = "CHANGE:"
    footer_thanks: str = "THANK YOU FOR YOUR PATRONAGE"
    footer_contact: str = "Returns accepted within 30 days"

    @classmethod
    def from_dict(cls, data: dict) -> "ReceiptSettings":
        return cls(**_checked_strings(cls, data, "settings"))


@dataclass
class LineItem:
    name: str = "New Item"
    qty: str = "1"
    price: str = "$0.00"
    id: str = field(default_factory=generate_item_id)

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        return cls(**_checked_strings(cls, data, "item"))


def _default_items() -> list[LineItem]:
    return [
        LineItem("COFFEE BEAN (250G)", "1", "$12.50"),
        LineItem("CROISSANT", "2", "$6.00"),
        LineItem("GREEN TEA", "1", "$4.00"),
    ]


@dataclass
class Receipt:
    receipt_no: str = field(default_factory=generate_receipt_no)
    date: str = field(default_factory=lambda: _date.today().isoformat())
    cashier: str = "STAFF"
    items: list[LineItem] = field(default_factory=_default_items)
    subtotal: str = "$22.50"
    tax: str = "$1.80"
    total: str = "$24.30"
    tendered: str = "$20.00"
    change: str = "$4.50"
    settings: ReceiptSettings = field(default_factory=ReceiptSettings)

    # ── item editing ────────────────────────────────────────────────
    def add_item(self, name: str = "New Item", qty: str = "1",
                 price: str = "$0.00") -> LineItem:
        if len(self.items) >= config.MAX_LINE_ITEMS:
            raise ReceiptError(f"receipt holds at most {config.MAX_LINE_ITEMS} items")
        item = LineItem(name, qty, price)
        self.items.append(item)
        return item

    def remove_item(self, item_id: str) -> None:
        """Drop the item with *item_id*; unknown ids are ignored."""
        self.items = [it for it in self.items if it.id != item_id]

    def update_item(self, item_id: str, field_name: str, value: str) -> LineItem:
        if field_name not in ("name", "qty", "price"):
            raise ReceiptError(f"cannot edit item field {field_name!r}")
        if not isinstance(value, str):
            raise ReceiptError(f"item {field_name} must be a string")
        for item in self.items:
            if item.id == item_id:
                setattr(item, field_name, value)
                return item
        raise ReceiptError(f"no item with id {item_id!r}")

    # ── (de)serialisation ───────────────────────────────────────────
    @classmethod
    def from_dict(cls, data: dict) -> "Receipt":
        """
        Build a receipt from a JSON payload.  Missing keys take the
        defaults; unknown keys or non-string values raise ReceiptError.
        """
        if not isinstance(data, dict):
            raise ReceiptError("receipt must be a JSON object")
        data = dict(data)
        settings = data.pop("settings", None)
        items = data.pop("items", None)

        kwargs = _checked_strings(cls, data, "receipt",
                                  exclude=("items", "settings"))
        if items is not None:
            if not isinstance(items, list):
                raise ReceiptError("items must be a list")
            if len(items) > config.MAX_LINE_ITEMS:
                raise ReceiptError(f"receipt holds at most {config.MAX_LINE_ITEMS} items")
            kwargs["items"] = [LineItem.from_dict(it) for it in items]
        if settings is not None:
            kwargs["settings"] = ReceiptSettings.from_dict(settings)
        return cls(**kwargs)

    def to_dict(self) -> dict:
        return asdict(self)


def _checked_strings(cls, data, what: str, exclude=()) -> dict:
    if not isinstance(data, dict):
        raise ReceiptError(f"{what} must be a JSON object")
    allowed = {f.name for f in fields(cls)} - set(exclude)
    unknown = set(data) - allowed
    if unknown:
        raise ReceiptError(f"unknown {what} field(s): {', '.join(sorted(unknown))}")
    for key, val in data.items():
        if not isinstance(val, str):
            raise ReceiptError(f"{what} field {key!r} must be a string")
    return dict(data)


def receipt_filename(receipt: Receipt, ext: str = "png") -> str:
    """receipt-<no>-<date>.<ext>, with anything unsafe in a header replaced by '_'."""
    safe = re.sub(r"[^A-Za-z0-9._-]", "_", f"{receipt.receipt_no}-{receipt.date}")
    return f"receipt-{safe}.{ext}"


# ── Layout ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ReceiptLine:
    kind: str           # title | divider | field | heading | item | total | barcode | footer
    left: str = ""
    right: str = ""
    bold: bool = False


# Row heights in layout units (1 unit = 1 px at pixel ratio 1)
LINE_HEIGHTS = {
    "title": 28, "divider": 14, "field": 18, "heading": 20,
    "item": 18, "total": 18, "barcode": 66, "footer": 16,
}
RECEIPT_WIDTH   = 420
RECEIPT_PADDING = 16
BARCODE_HEIGHT  = 44


def layout_receipt(receipt: Receipt) -> list[ReceiptLine]:
    s = receipt.settings
    divider = ReceiptLine("divider")
    lines = [
        ReceiptLine("title", s.header_title, bold=True),
        divider,
        ReceiptLine("field", s.receipt_label, receipt.receipt_no),
        ReceiptLine("field", s.date_label, receipt.date),
        ReceiptLine("field", s.cashier_label, receipt.cashier),
        divider,
        ReceiptLine("heading", s.item_label, s.amount_label),
    ]
    for idx, item in enumerate(receipt.items, 1):
        lines.append(ReceiptLine("item", f"{idx:02d}  {item.name}", item.price))
    lines += [
        divider,
        ReceiptLine("total", s.subtotal_label, receipt.subtotal),
        ReceiptLine("total", s.tax_label, receipt.tax),
        ReceiptLine("total", s.total_label, receipt.total, bold=True),
        divider,
        ReceiptLine("total", s.tendered_label, receipt.tendered),
        ReceiptLine("total", s.change_label, receipt.change),
        divider,
        ReceiptLine("barcode", receipt.receipt_no, receipt.receipt_no),
        ReceiptLine("footer", s.footer_thanks),
        ReceiptLine("footer", s.footer_contact),
    ]
    return lines


def layout_height(lines: list[ReceiptLine]) -> int:
    return 2 * RECEIPT_PADDING + sum(LINE_HEIGHTS[ln.kind] for ln in lines)


# ── SVG ────────────────────────────────────────────────────────────────

def render_receipt_svg(receipt: Receipt, standalone: bool = True) -> str:
    """
    Receipt as SVG, barcode included.  With standalone=False the XML
    declaration is left out so the markup can be inlined into HTML.
    """
    lines = layout_receipt(receipt)
    width = RECEIPT_WIDTH
    height = layout_height(lines)
    left = RECEIPT_PADDING
    right = width - RECEIPT_PADDING
    mid = width / 2

    out = []
    y = RECEIPT_PADDING
    for ln in lines:
        h = LINE_HEIGHTS[ln.kind]
        base = y + h - 5
        weight = ' font-weight="bold"' if ln.bold else ""
        if ln.kind == "title":
            out.append(f'<text x="{mid:g}" y="{base}" font-size="15" text-anchor="middle"'
                       f'{weight}>{escape(ln.left)}</text>')
        elif ln.kind == "divider":
            out.append(f'<line x1="{left}" y1="{y + h / 2:g}" x2="{right}" y2="{y + h / 2:g}" '
                       f'stroke="{MUTED_COLOR}" stroke-width="1" stroke-dasharray="4,3"/>')
        elif ln.kind == "footer":
            out.append(f'<text x="{mid:g}" y="{base}" font-size="10" text-anchor="middle" '
                       f'fill="{MUTED_COLOR}">{escape(ln.left)}</text>')
        elif ln.kind == "barcode":
            out.append(generate_barcode_group_centered(
                ln.left, mid, y + 4, width=right - left, height=BARCODE_HEIGHT,
                strict=config.STRICT_ENCODING))
            out.append(f'<text x="{mid:g}" y="{y + BARCODE_HEIGHT + 18}" font-size="10" '
                       f'text-anchor="middle" letter-spacing="2">{escape(ln.right)}</text>')
        else:
            label_fill = f' fill="{MUTED_COLOR}"' if ln.kind in ("field", "heading") else ""
            out.append(f'<text x="{left}" y="{base}" font-size="11"{label_fill}{weight}>'
                       f'{escape(ln.left)}</text>')
            out.append(f'<text x="{right}" y="{base}" font-size="11" text-anchor="end"{weight}>'
                       f'{escape(ln.right)}</text>')
        y += h

    body = "\n  ".join(out)
    prolog = '<?xml version="1.0" encoding="UTF-8"?>\n' if standalone else ""
    return prolog + f'''<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" xmlns="http://www.w3.org/2000/svg" font-family="ui-monospace, Menlo, Consolas, 'Courier New', monospace" fill="{TEXT_COLOR}">
  <rect x="0" y="0" width="{width}" height="{height}" fill="{config.PNG_BACKGROUND}"/>
  {body}
</svg>'''


# ── PNG ────────────────────────────────────────────────────────────────

def png_canvas_width(lines: list[ReceiptLine]) -> int:
    """
    Receipt width in pixels.  Grows past RECEIPT_WIDTH when a barcode
    needs more than one pixel per module of the usable width.
    """
    widest = max((len(encode(ln.left, strict=config.STRICT_ENCODING))
                  for ln in lines if ln.kind == "barcode"), default=0)
    return max(RECEIPT_WIDTH, widest + 2 * RECEIPT_PADDING)


def render_receipt_png(receipt: Receipt, pixel_ratio: Optional[int] = None) -> bytes:
    """
    Rasterise the receipt with Pillow at 1 px per layout unit,
    then upscale by *pixel_ratio*.
    """
    pixel_ratio = pixel_ratio or config.PNG_PIXEL_RATIO
    if pixel_ratio < 1:
        raise ValueError("pixel ratio must be >= 1")

    lines = layout_receipt(receipt)
    width = png_canvas_width(lines)
    height = layout_height(lines)
    left = RECEIPT_PADDING
    right = width - RECEIPT_PADDING

    image = Image.new("RGB", (width, height), ImageColor.getrgb(config.PNG_BACKGROUND))
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()
    ink = ImageColor.getrgb(TEXT_COLOR)
    muted = ImageColor.getrgb(MUTED_COLOR)

    def centered(text, top, fill):
        draw.text(((width - draw.textlength(text, font=font)) / 2, top), text, fill=fill, font=font)

    y = RECEIPT_PADDING
    for ln in lines:
        h = LINE_HEIGHTS[ln.kind]
        top = y + 3
        if ln.kind == "title":
            centered(ln.left, y + 8, ink)
        elif ln.kind == "divider":
            mid_y = y + h // 2
            for x in range(left, right, 7):
                draw.line([(x, mid_y), (min(x + 3, right), mid_y)], fill=muted)
        elif ln.kind == "footer":
            centered(ln.left, top, muted)
        elif ln.kind == "barcode":
            bar_w = len(encode(ln.left, strict=config.STRICT_ENCODING))
            module = max(1, (right - left) // bar_w)
            x0 = (width - bar_w * module) // 2
            draw_barcode(draw, ln.left, x0, y + 4, module, BARCODE_HEIGHT, fill=ink,
                         strict=config.STRICT_ENCODING)
            centered(ln.right, y + BARCODE_HEIGHT + 8, ink)
        else:
            label_fill = muted if ln.kind in ("field", "heading") else ink
            draw.text((left, top), ln.left, fill=label_fill, font=font)
            draw.text((right - draw.textlength(ln.right, font=font), top), ln.right,
                      fill=ink, font=font)
        y += h

    if pixel_ratio > 1:
        image = image.resize((width * pixel_ratio, height * pixel_ratio),
                             Image.Resampling.NEAREST)

    buf = BytesIO()
    image.save(buf, format="PNG")
    logger.info(f"Rendered receipt {receipt.receipt_no}: {image.width}x{image.height}px")
    return buf.getvalue()
