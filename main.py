#!/usr/bin/env python3
"""
Receipts - Receipt generator with Code 128 barcodes
====================================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

import logging

from flask import Flask, render_template

import config
from api import api_bp
from ui import ui_bp
from logging_config import setup_logging

logger = logging.getLogger("main")


def create_app() -> Flask:
    """Flask application factory."""

    app = Flask(
        __name__,
        template_folder=str(config.TEMPLATES_DIR),
    )
    app.secret_key = config.SECRET

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)
    app.register_blueprint(ui_bp)

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return render_template("error.html", code=404,
                               message="Page not found"), 404

    @app.errorhandler(500)
    def _500(e):
        logger.error(f"Unhandled error: {e}")
        return render_template("error.html", code=500,
                               message="Internal server error"), 500

    return app


def main():
    setup_logging(getattr(logging, config.LOG_LEVEL, logging.INFO), config.LOG_FILE)

    print("=" * 56)
    print("  Receipts - Code 128 receipt generator")
    print("=" * 56)

    app = create_app()

    print(f"\n  http://{config.HOST}:{config.PORT}")
    print(f"  Barcode API: http://{config.HOST}:{config.PORT}/api/v1/barcode?value=R-12345678")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
