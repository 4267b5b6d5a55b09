"""
ui.routes_receipt - Receipt page, preview and download.
"""

from flask import render_template, request, Response, jsonify

from ui import ui_bp
from services.receipt_service import (
    Receipt, receipt_filename, render_receipt_png, render_receipt_svg,
)

FORMATS = {
    "svg": (render_receipt_svg, "image/svg+xml"),
    "png": (render_receipt_png, "image/png"),
}


def _receipt_from_args() -> Receipt:
    """Default receipt stamped with ?no= and, if given, ?date= / ?cashier=."""
    receipt = Receipt(receipt_no=request.args.get("no", "").strip())
    if request.args.get("date"):
        receipt.date = request.args["date"].strip()
    if request.args.get("cashier"):
        receipt.cashier = request.args["cashier"].strip()
    return receipt


@ui_bp.route("/")
def receipt_page():
    """Receipt page with a freshly numbered default receipt."""
    receipt = Receipt()
    return render_template("receipt.html", receipt=receipt,
                           receipt_svg=render_receipt_svg(receipt, standalone=False))


@ui_bp.route("/receipt/preview")
def receipt_preview():
    """
    GET /receipt/preview?no=R-...&date=...&cashier=...

    Receipt SVG for preview.
    """
    if not request.args.get("no", "").strip():
        return jsonify({"error": "no required"}), 400
    try:
        svg = render_receipt_svg(_receipt_from_args())
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return Response(svg, mimetype="image/svg+xml")


@ui_bp.route("/receipt/download")
def receipt_download():
    """
    GET /receipt/download?no=R-...&format=png

    Download the receipt as PNG (default) or SVG file.
    """
    fmt = request.args.get("format", "png").lower()
    if not request.args.get("no", "").strip():
        return jsonify({"error": "no required"}), 400
    if fmt not in FORMATS:
        return jsonify({"error": f"Invalid format. Valid: {list(FORMATS)}"}), 400

    receipt = _receipt_from_args()
    renderer, mimetype = FORMATS[fmt]
    try:
        body = renderer(receipt)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    return Response(
        body,
        mimetype=mimetype,
        headers={"Content-Disposition": f"attachment; filename={receipt_filename(receipt, fmt)}"}
    )
