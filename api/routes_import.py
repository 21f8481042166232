"""
api.routes_import - /api/v1/import endpoints.

The wizard drives the pipeline one step at a time:
    parse → (mapping) → validate → commit
POST /import runs all of it at once for scripted uploads.
"""

from __future__ import annotations

from flask import request, jsonify
from sqlalchemy.exc import SQLAlchemyError

import config
from api import api_bp
from db import WarehouseStore, get_session
from import_engine import (
    CommitRefused,
    clean_mapping,
    commit_import,
    infer_mapping,
    mapping_summary,
    parse_file,
    run_import,
    validate_rows,
)
from schema import IMPORT_FIELDS


@api_bp.route("/import/fields")
def api_import_fields():
    """GET /api/v1/import/fields - the canonical field schema, in order."""
    return jsonify({"fields": [f.to_dict() for f in IMPORT_FIELDS]})


@api_bp.route("/import/parse", methods=["POST"])
def api_parse_csv():
    """
    POST /api/v1/import/parse

    Multipart: field name 'csv_file'
    Or: raw CSV as request body with ?filename=inventory.csv
    """
    upload, err = _read_upload()
    if err:
        return err
    filename, content = upload

    table = parse_file(content, filename)
    mapping = infer_mapping(table.headers)
    return jsonify({
        "file_name": filename,
        "headers": table.headers,
        "rows": table.rows,
        "row_count": table.row_count,
        "preview": table.preview(config.PREVIEW_ROWS),
        "mapping": mapping,
        "summary": mapping_summary(mapping, table.rows),
    })


@api_bp.route("/import/mapping", methods=["POST"])
def api_suggest_mapping():
    """POST /api/v1/import/mapping {headers} - suggested mapping."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict) or not isinstance(body.get("headers"), list):
        return jsonify({"error": "expected JSON body with a 'headers' list"}), 400

    headers = [str(h) for h in body["headers"]]
    return jsonify({"mapping": infer_mapping(headers)})


@api_bp.route("/import/validate", methods=["POST"])
def api_validate_rows():
    """POST /api/v1/import/validate {rows, mapping} → ValidationResult"""
    payload, err = _read_rows_and_mapping()
    if err:
        return err
    rows, mapping = payload
    return jsonify(validate_rows(rows, mapping).to_dict())


@api_bp.route("/import/commit", methods=["POST"])
async def api_commit_rows():
    """
    POST /api/v1/import/commit {rows, mapping} → {imported}

    Rows are validated again; an invalid dataset is refused with 422.
    """
    payload, err = _read_rows_and_mapping()
    if err:
        return err
    rows, mapping = payload

    validation = validate_rows(rows, mapping)
    if not validation.is_valid:
        raise CommitRefused(validation)

    async with get_session() as session:
        try:
            result = await commit_import(WarehouseStore(session), rows, mapping)
        except SQLAlchemyError as exc:
            return jsonify({"error": f"Import failed: {exc}"}), 500

    return jsonify(result.to_dict())


@api_bp.route("/import", methods=["POST"])
async def api_import_csv():
    """
    POST /api/v1/import

    Multipart: field name 'csv_file'
    Or: raw CSV as request body with ?filename=inventory.csv
    Parses, infers the mapping, validates and commits in one go.
    """
    upload, err = _read_upload()
    if err:
        return err
    filename, content = upload

    async with get_session() as session:
        try:
            report = await run_import(WarehouseStore(session), content, filename)
        except SQLAlchemyError as exc:
            return jsonify({"error": f"Import failed: {exc}"}), 500

    status = 200 if report.ok else (422 if report.validation else 400)
    return jsonify(report.to_dict()), status


# ── Private helpers ────────────────────────────────────────────────────

def _read_upload():
    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("csv_file")
        if not f:
            return None, (jsonify({"error": "no csv_file in upload"}), 400)
        # Read one byte past the limit so oversize files are still rejected
        return (f.filename or "", f.read(config.MAX_IMPORT_BYTES + 1)), None

    content = request.get_data()
    if not content:
        return None, (jsonify({"error": "empty body"}), 400)
    return (request.args.get("filename", "upload.csv"), content), None


def _read_rows_and_mapping():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return None, (jsonify({"error": "expected a JSON object"}), 400)

    raw_rows = body.get("rows")
    raw_mapping = body.get("mapping")
    if not isinstance(raw_rows, list) or not isinstance(raw_mapping, dict):
        return None, (jsonify({"error": "expected 'rows' list and 'mapping' object"}), 400)
    if not all(isinstance(r, dict) for r in raw_rows):
        return None, (jsonify({"error": "every row must be an object"}), 400)

    rows = [
        {str(k): "" if v is None else str(v) for k, v in r.items()}
        for r in raw_rows
    ]
    return (rows, clean_mapping(raw_mapping)), None
