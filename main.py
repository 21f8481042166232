#!/usr/bin/env python3
"""
Wareflow - Warehouse inventory import service
=============================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

import asyncio
import logging
from typing import Optional

from flask import Flask, jsonify

import config
from db import init_db, get_session, WarehouseStore
from api import api_bp
from import_engine import run_import
from services.setup_service import SetupService

# Multipart framing on top of the largest accepted CSV
_UPLOAD_OVERHEAD = 1024 * 1024


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def create_app(db_url: Optional[str] = None) -> Flask:
    """Flask application factory."""

    app = Flask(__name__)
    app.secret_key = config.SECRET
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_IMPORT_BYTES + _UPLOAD_OVERHEAD

    # ── Initialise database ─────────────────────────────────────────
    db_url = db_url or config.DB_URL
    asyncio.run(init_db(db_url))
    print(f"  Database: {db_url}")

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(413)
    def _413(e):
        mb = config.MAX_IMPORT_BYTES // (1024 * 1024)
        return jsonify({"error": f"File is too large. Maximum size is {mb} MB."}), 413

    return app


async def _seed_if_empty():
    """Auto-import seed CSV when the database holds no products."""
    async with get_session() as session:
        store = WarehouseStore(session)
        if not await SetupService.is_setup_required(store):
            print(f"\n  Database has {await store.count_products()} products.")
            return

        if not config.CSV_SEED_PATH.exists():
            print(f"\n  No seed CSV at {config.CSV_SEED_PATH} - starting empty.")
            return

        print(f"\n  Database empty → auto-importing {config.CSV_SEED_PATH.name} …")
        content = config.CSV_SEED_PATH.read_bytes()
        report = await run_import(store, content, config.CSV_SEED_PATH.name)

    if report.error:
        print(f"  Seed import failed: {report.error}")
        if report.validation:
            print("  First errors (max 10):")
            for err in report.validation.errors[:10]:
                print(f"    Row {err.row}: {err.message}")
        return

    print(f"  Done: {report.imported} imported / {report.total_rows} rows")


def main():
    configure_logging()

    print("=" * 56)
    print("  Wareflow - Inventory Import")
    print("=" * 56)

    app = create_app()
    asyncio.run(_seed_if_empty())

    print(f"\n  http://{config.HOST}:{config.PORT}")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
