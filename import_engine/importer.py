"""
import_engine.importer - Top-level orchestrator.

commit_import() writes already-validated rows through a WarehouseStore
as one transaction: resolve (or create) the default warehouse and the
target sector, then bulk-insert one Product per row.

run_import() chains csv_parser → field_map → validator → commit_import
for callers that want the whole pipeline in one call (seed import,
one-shot API upload) and produces a structured ImportReport.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Optional

from db.models import Product, Sector, Warehouse
from db.store import WarehouseStore
from import_engine.csv_parser import ParseError, parse_file
from import_engine.field_map import infer_mapping
from import_engine.report import ImportReport, ImportResult
from import_engine.row_processor import CommitDefaults, coerce_row, sector_name_for
from import_engine.validator import validate_rows

logger = logging.getLogger(__name__)


class CommitRefused(Exception):
    """Raised when asked to commit rows that do not pass validation."""

    def __init__(self, validation):
        super().__init__(f"{len(validation.errors)} validation error(s) block the import")
        self.validation = validation


async def commit_import(
    store: WarehouseStore,
    rows: Sequence[Mapping[str, str]],
    mapping: Mapping[str, str],
    *,
    defaults: Optional[CommitDefaults] = None,
) -> ImportResult:
    """
    Persist *rows* as Products.  Either every row is committed or,
    on any persistence error, nothing is and the error propagates.
    """
    defaults = defaults or CommitDefaults()
    now = datetime.now(timezone.utc)

    sector_name = sector_name_for(list(rows), mapping, defaults)

    try:
        warehouse = await _resolve_warehouse(store, defaults, now)
        sector = await _resolve_sector(store, sector_name, warehouse, now)

        products = [
            Product(
                **coerce_row(row, mapping, defaults).to_dict(),
                sector_id=sector.id,
                created_at=now,
                updated_at=now,
            )
            for row in rows
        ]
        imported = await store.bulk_add_products(products)
        await store.commit()
    except Exception:
        logger.exception("Import commit failed, rolling back")
        await store.rollback()
        raise

    logger.info(f"Imported {imported} products into sector {sector_name!r}")
    return ImportResult(imported=imported)


async def run_import(
    store: WarehouseStore,
    file_content: str | bytes,
    filename: str,
    *,
    mapping: Optional[Mapping[str, str]] = None,
    defaults: Optional[CommitDefaults] = None,
) -> ImportReport:
    """
    Import a CSV blob end to end.

    Parameters
    ----------
    store        : persistence handle (session owned by the caller)
    file_content : raw CSV (bytes or str)
    filename     : original file name, used for the extension check
    mapping      : explicit field → header mapping; inferred when omitted

    Returns
    -------
    ImportReport; input and validation problems are reported, not raised.
    Persistence errors propagate.
    """
    report = ImportReport()
    try:
        table = parse_file(file_content, filename)
    except ParseError as exc:
        report.error = str(exc)
        return report

    report.total_rows = table.row_count
    report.headers = table.headers
    report.mapping = dict(mapping) if mapping is not None else infer_mapping(table.headers)

    report.validation = validate_rows(table.rows, report.mapping)
    if not report.validation.is_valid:
        report.error = str(CommitRefused(report.validation))
        return report

    result = await commit_import(store, table.rows, report.mapping, defaults=defaults)
    report.imported = result.imported
    return report


# ── Private helpers ────────────────────────────────────────────────────

async def _resolve_warehouse(
    store: WarehouseStore, defaults: CommitDefaults, now: datetime,
) -> Warehouse:
    warehouse = await store.first_warehouse()
    if warehouse is None:
        warehouse = await store.add_warehouse(Warehouse(
            name=defaults.warehouse_name,
            floors=defaults.warehouse_floors,
            created_at=now,
            updated_at=now,
        ))
        logger.info(f"Created default warehouse {warehouse.name!r} (id={warehouse.id})")
    return warehouse


async def _resolve_sector(
    store: WarehouseStore, name: str, warehouse: Warehouse, now: datetime,
) -> Sector:
    sector = await store.find_sector(name)
    if sector is None:
        sector = await store.add_sector(Sector(
            warehouse_id=warehouse.id,
            name=name,
            created_at=now,
            updated_at=now,
        ))
        logger.info(f"Created sector {name!r} (id={sector.id})")
    else:
        logger.debug(f"Reusing sector {name!r} (id={sector.id})")
    return sector
