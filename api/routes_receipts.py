"""
api.routes_receipts - /api/v1/receipts endpoints.
"""

import logging

from flask import request, jsonify, Response

from api import api_bp
from services.receipt_service import (
    Receipt, generate_receipt_no, receipt_filename,
    render_receipt_png, render_receipt_svg,
)

logger = logging.getLogger(__name__)

RENDERERS = {
    "svg": (render_receipt_svg, "image/svg+xml"),
    "png": (render_receipt_png, "image/png"),
}


@api_bp.route("/receipts/number")
def new_receipt_number():
    """GET /api/v1/receipts/number → {receipt_no}"""
    return jsonify({"receipt_no": generate_receipt_no()})


@api_bp.route("/receipts/default")
def default_receipt():
    """GET /api/v1/receipts/default - fresh receipt with default labels and items."""
    return jsonify(Receipt().to_dict())


@api_bp.route("/receipts/render", methods=["POST"])
def render_receipt():
    """
    POST /api/v1/receipts/render?format=svg|png&download=1

    JSON body: receipt fields (missing ones take defaults).
    Encoding and payload errors come back as 400 via api.errors.
    """
    fmt = request.args.get("format", "svg").lower()
    if fmt not in RENDERERS:
        return jsonify({"error": f"Invalid format. Valid: {list(RENDERERS)}"}), 400

    data = request.get_json(silent=True)
    if data is None:
        if request.get_data(cache=True).strip():
            return jsonify({"error": "body is not valid JSON"}), 400
        data = {}
    receipt = Receipt.from_dict(data)

    renderer, mimetype = RENDERERS[fmt]
    body = renderer(receipt)

    headers = {}
    if request.args.get("download", "0") == "1":
        filename = receipt_filename(receipt, fmt)
        headers["Content-Disposition"] = f"attachment; filename={filename}"
        logger.info(f"Receipt download: {filename}")
    return Response(body, mimetype=mimetype, headers=headers)
