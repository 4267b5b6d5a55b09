"""
Receipts - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR       = Path(__file__).resolve().parent
TEMPLATES_DIR  = Path(os.environ.get("RECEIPTS_TEMPLATES", BASE_DIR / "templates"))
LOG_FILE       = os.environ.get("RECEIPTS_LOG_FILE") or None

# ── Server ─────────────────────────────────────────────────────────────
HOST      = os.environ.get("RECEIPTS_HOST", "0.0.0.0")
PORT      = int(os.environ.get("RECEIPTS_PORT", "5000"))
DEBUG     = os.environ.get("RECEIPTS_DEBUG", "0") == "1"
SECRET    = os.environ.get("RECEIPTS_SECRET", "receipts-dev-key-change-in-prod")
LOG_LEVEL = os.environ.get("RECEIPTS_LOG_LEVEL", "INFO").upper()

# ── Barcode ────────────────────────────────────────────────────────────
# Height is in viewBox units; one module = one unit along x
BARCODE_HEIGHT       = int(os.environ.get("RECEIPTS_BARCODE_HEIGHT", "60"))
BARCODE_MODULE_WIDTH = int(os.environ.get("RECEIPTS_BARCODE_MODULE_WIDTH", "2"))
BARCODE_QUIET_ZONE   = int(os.environ.get("RECEIPTS_BARCODE_QUIET_ZONE", "10"))
# "1" → reject characters outside ASCII 32-126 instead of skipping them
STRICT_ENCODING      = os.environ.get("RECEIPTS_STRICT_ENCODING", "0") == "1"

# ── Receipt rendering ──────────────────────────────────────────────────
STORE_NAME       = os.environ.get("RECEIPTS_STORE_NAME", "RINGO STORE")
PNG_PIXEL_RATIO  = int(os.environ.get("RECEIPTS_PNG_PIXEL_RATIO", "2"))
PNG_BACKGROUND   = "#FDFCF5"
MAX_LINE_ITEMS   = 100
