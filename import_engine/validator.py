"""
import_engine.validator - Check mapped rows before anything is written.

Pure function of (rows, mapping).  Errors block the commit, warnings
are informational.  Row numbers are 1-based data rows; row 0 means
the mapping itself is incomplete.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from schema import IMPORT_FIELDS, ImportField, required_fields
from import_engine.report import ValidationResult
from import_engine.row_processor import format_number, parse_number


def validate_rows(
    rows: Sequence[Mapping[str, str]],
    mapping: Mapping[str, str],
    fields: Sequence[ImportField] = IMPORT_FIELDS,
) -> ValidationResult:
    result = ValidationResult()

    # Required columns first; row checks are meaningless without them
    for field in required_fields(fields):
        if not mapping.get(field.key.value):
            result.add_error(0, field.key.value,
                             f'Required field "{field.label}" is not mapped')
    if result.errors:
        return result

    sku_col = mapping.get("sku")
    name_col = mapping.get("name")
    qty_col = mapping.get("quantity")

    seen_skus: set[str] = set()

    for row_num, row in enumerate(rows, start=1):
        if sku_col:
            _check_sku(result, row_num, row.get(sku_col) or "", seen_skus)
        if name_col:
            _check_name(result, row_num, row.get(name_col) or "")
        if qty_col:
            _check_quantity(result, row_num, row.get(qty_col) or "")

    return result


# ── Per-cell checks ────────────────────────────────────────────────────

def _check_sku(result: ValidationResult, row_num: int, sku: str, seen: set[str]):
    if not sku.strip():
        result.add_error(row_num, "sku", "SKU is required")
    elif sku in seen:
        result.add_warning(row_num, "sku", f"Duplicate SKU: {sku}")
    else:
        seen.add(sku)


def _check_name(result: ValidationResult, row_num: int, name: str):
    if not name.strip():
        result.add_error(row_num, "name", "Name is required")


def _check_quantity(result: ValidationResult, row_num: int, quantity: str):
    if not quantity.strip():
        return
    number = parse_number(quantity)
    if number is None:
        result.add_error(row_num, "quantity", "Invalid quantity: must be a number")
    elif number < 0:
        result.add_warning(row_num, "quantity",
                           f"Negative quantity: {format_number(number)}")
