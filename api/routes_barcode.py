"""
api.routes_barcode - /api/v1/barcode endpoints.
"""

from flask import request, jsonify, Response

from api import api_bp
from services.barcode_service import (
    describe_barcode, generate_barcode_svg, render_barcode_png,
)
import config


def _strict() -> bool:
    default = "1" if config.STRICT_ENCODING else "0"
    raw = request.args.get("strict", default).strip()
    if raw not in ("0", "1"):
        raise ValueError("strict must be 0 or 1")
    return raw == "1"


def _int_arg(name: str, default, lo: int, hi: int):
    raw = request.args.get(name, "").strip()
    if not raw:
        return default
    try:
        val = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer") from None
    if not lo <= val <= hi:
        raise ValueError(f"{name} must be between {lo} and {hi}")
    return val


@api_bp.route("/barcode")
def barcode_info():
    """
    GET /api/v1/barcode?value=R-12345678&strict=0

    Bit-string, checksum and bar layout for *value*.  An empty value
    is valid and yields the minimal symbol.
    """
    if "value" not in request.args:
        return jsonify({"error": "value required"}), 400
    try:
        return jsonify(describe_barcode(request.args["value"], strict=_strict()))
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400


@api_bp.route("/barcode.svg")
def barcode_svg():
    """GET /api/v1/barcode.svg?value=...&label=...&height=60"""
    if "value" not in request.args:
        return jsonify({"error": "value required"}), 400
    try:
        height = _int_arg("height", config.BARCODE_HEIGHT, 1, 1000)
        svg = generate_barcode_svg(request.args["value"], height=height,
                                   label=request.args.get("label") or None,
                                   strict=_strict())
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return Response(svg, mimetype="image/svg+xml")


@api_bp.route("/barcode.png")
def barcode_png():
    """GET /api/v1/barcode.png?value=...&module=2&height=60&quiet=10"""
    if "value" not in request.args:
        return jsonify({"error": "value required"}), 400
    try:
        png = render_barcode_png(
            request.args["value"],
            module_width=_int_arg("module", config.BARCODE_MODULE_WIDTH, 1, 20),
            height=_int_arg("height", config.BARCODE_HEIGHT, 1, 1000),
            quiet_zone=_int_arg("quiet", config.BARCODE_QUIET_ZONE, 0, 100),
            strict=_strict(),
        )
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return Response(png, mimetype="image/png")
