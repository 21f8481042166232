"""
api.routes_setup - first-run status, reset, and the imported product list.
"""

from flask import request, jsonify

from api import api_bp
from db import WarehouseStore, get_session
from services.setup_service import SetupService
import config


@api_bp.route("/setup/status")
async def api_setup_status():
    """GET /api/v1/setup/status → {setup_required, products}"""
    async with get_session() as session:
        store = WarehouseStore(session)
        count = await store.count_products()
        required = await SetupService.is_setup_required(store)
    return jsonify({"setup_required": required, "products": count})


@api_bp.route("/setup/reset", methods=["POST"])
async def api_setup_reset():
    """POST /api/v1/setup/reset - delete every warehouse, sector, zone and product."""
    async with get_session() as session:
        await SetupService.reset(WarehouseStore(session))
    return jsonify({"reset": True})


@api_bp.route("/products")
async def api_list_products():
    """GET /api/v1/products?limit=100&offset=0"""
    try:
        limit = int(request.args.get("limit", config.API_DEFAULT_LIMIT))
        offset = int(request.args.get("offset", 0))
    except ValueError:
        return jsonify({"error": "limit and offset must be integers"}), 400

    limit = max(1, min(limit, config.API_MAX_LIMIT))
    offset = max(0, offset)

    async with get_session() as session:
        store = WarehouseStore(session)
        total = await store.count_products()
        products = await store.list_products(limit, offset)
        return jsonify({
            "total": total,
            "offset": offset,
            "limit": limit,
            "products": [p.to_dict() for p in products],
        })
