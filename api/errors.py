"""
api.errors - JSON error handlers for the API blueprint.
"""

import logging

from flask import jsonify

import config
from api import api_bp
from import_engine import CommitRefused, ParseError

logger = logging.getLogger(__name__)


@api_bp.errorhandler(ParseError)
def api_parse_error(e):
    return jsonify({"error": str(e)}), 400


@api_bp.errorhandler(CommitRefused)
def api_commit_refused(e):
    return jsonify({"error": str(e), "validation": e.validation.to_dict()}), 422


@api_bp.errorhandler(404)
def api_not_found(_e):
    return jsonify({"error": "not found"}), 404


@api_bp.errorhandler(400)
def api_bad_request(e):
    return jsonify({"error": getattr(e, "description", None) or "bad request"}), 400


@api_bp.errorhandler(413)
def api_too_large(_e):
    mb = config.MAX_IMPORT_BYTES // (1024 * 1024)
    return jsonify({"error": f"File is too large. Maximum size is {mb} MB."}), 413


@api_bp.errorhandler(500)
def api_server_error(e):
    logger.error(f"Unhandled API error: {getattr(e, 'original_exception', e)!r}")
    return jsonify({"error": "internal server error"}), 500
