"""
services.barcode_service - Code 128 barcode rendering for receipts.

Turns the bars produced by the code128 encoder into SVG elements
and PNG images.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Optional
from xml.sax.saxutils import escape

from PIL import Image, ImageDraw

import config
from code128 import encode, extract_bars, checksum_value

logger = logging.getLogger(__name__)


def describe_barcode(text: str, strict: bool = False) -> dict:
    """Bits, checksum and bar layout of *text* as a JSON-ready dict."""
    bits = encode(text, strict=strict)
    return {
        "value": text,
        "bits": bits,
        "length": len(bits),
        "checksum": checksum_value(text),
        "bars": [bar.to_dict() for bar in extract_bars(bits)],
    }


def generate_barcode_svg(text: str, height: Optional[int] = None,
                         label: Optional[str] = None, width: str = "100%",
                         strict: bool = False) -> str:
    """
    Standalone SVG document of the barcode.

    The viewBox is one unit per module, so it stretches to any
    *width* without resampling.  A *label* is drawn under the bars.

    Args:
        text: Text to encode
        height: Bar height in viewBox units (default config.BARCODE_HEIGHT)
        label: Optional human-readable caption
        width: Value of the svg width attribute
        strict: Reject characters outside Code Set B
    """
    height = height or config.BARCODE_HEIGHT
    bits = encode(text, strict=strict)
    total = len(bits)
    label_h = 14 if label else 0

    rects = "".join(
        f'<rect x="{bar.start}" y="0" width="{bar.width}" height="{height}" fill="currentColor"/>'
        for bar in extract_bars(bits)
    )
    caption = ""
    if label:
        caption = (f'<text x="{total / 2:g}" y="{height + 11}" font-size="10" '
                   f'font-family="monospace" text-anchor="middle" '
                   f'fill="currentColor">{escape(label)}</text>')

    return (f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {total} {height + label_h}" '
            f'width="{width}" preserveAspectRatio="none">'
            f'<rect x="0" y="0" width="{total}" height="{height}" fill="transparent"/>'
            f'{rects}{caption}</svg>')


def generate_barcode_group(text: str, width: float = 150, height: float = 50,
                           strict: bool = False) -> str:
    """
    SVG group element containing the barcode scaled to *width*.

    Returns:
        SVG <g> element string containing one <rect> per bar
    """
    bits = encode(text, strict=strict)
    scale = width / len(bits)

    rects = []
    for bar in extract_bars(bits):
        bar_x = bar.start * scale
        bar_w = bar.width * scale
        rects.append(f'<rect x="{bar_x:.2f}" y="0" width="{bar_w:.2f}" height="{height}" fill="black"/>')

    return f'<g>{"".join(rects)}</g>'


def generate_barcode_group_centered(text: str, center_x: float, y: float,
                                    width: float = 150, height: float = 50,
                                    strict: bool = False) -> str:
    """
    SVG barcode centered at a given x position.

    Args:
        text: Text to encode
        center_x: X coordinate for center of barcode
        y: Y coordinate for top of barcode
        width: Total barcode width
        height: Bar height

    Returns:
        SVG <g> element with transform for positioning
    """
    barcode = generate_barcode_group(text, width, height, strict=strict)
    x = center_x - (width / 2)
    return f'<g transform="translate({x:.2f},{y})">{barcode}</g>'


def draw_barcode(draw: ImageDraw.ImageDraw, text: str, x: int, y: int,
                 module_width: int, height: int, fill=0,
                 strict: bool = False) -> int:
    """
    Paint the bars onto an existing Pillow canvas.

    Returns the drawn width in pixels.
    """
    bits = encode(text, strict=strict)
    for bar in extract_bars(bits):
        x0 = x + bar.start * module_width
        x1 = x + bar.end * module_width - 1
        draw.rectangle([x0, y, x1, y + height - 1], fill=fill)
    return len(bits) * module_width


def render_barcode_png(text: str, module_width: Optional[int] = None,
                       height: Optional[int] = None,
                       quiet_zone: Optional[int] = None,
                       strict: bool = False) -> bytes:
    """
    Render the barcode to a 1-bit PNG.

    Args:
        text: Text to encode
        module_width: Pixels per module
        height: Bar height in pixels
        quiet_zone: Blank modules left and right of the symbol
    """
    module_width = module_width or config.BARCODE_MODULE_WIDTH
    height = height or config.BARCODE_HEIGHT
    quiet_zone = config.BARCODE_QUIET_ZONE if quiet_zone is None else quiet_zone
    if module_width < 1 or height < 1 or quiet_zone < 0:
        raise ValueError("module width and height must be positive, quiet zone non-negative")

    bits_len = len(encode(text, strict=strict))
    margin = quiet_zone * module_width
    image = Image.new("1", (bits_len * module_width + 2 * margin, height), 1)
    draw_barcode(ImageDraw.Draw(image), text, margin, 0, module_width, height, strict=strict)

    buf = BytesIO()
    image.save(buf, format="PNG")
    logger.debug(f"Rendered barcode PNG for {text!r}: {image.width}x{image.height}px")
    return buf.getvalue()
