"""
services - Rendering layer sitting between API/UI and the code128 encoder.
"""

from services.barcode_service import (                               # noqa: F401
    describe_barcode, generate_barcode_svg, render_barcode_png,
)
from services.receipt_service import Receipt, ReceiptError           # noqa: F401
