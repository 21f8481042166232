"""
import_engine.row_processor - Transform one CSV row into Product fields.

Single-responsibility: given a dict-row, the column mapping and the
commit defaults, return the plain values a Product is built from.
No session, no I/O - every coercion rule for imported cells lives here.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Optional

import config

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class CommitDefaults:
    unit: str = config.DEFAULT_UNIT
    quantity: float = 0
    floor: int = 0
    sector_name: str = config.DEFAULT_SECTOR_NAME
    warehouse_name: str = config.DEFAULT_WAREHOUSE_NAME
    warehouse_floors: int = config.DEFAULT_WAREHOUSE_FLOORS


@dataclass(frozen=True)
class ProductFields:
    sku: str
    name: str
    quantity: float
    floor: int
    description: Optional[str]
    category: Optional[str]
    unit: str

    def to_dict(self) -> dict:
        return asdict(self)


def parse_number(value: Optional[str]) -> Optional[float]:
    """Parse a cell as a finite number; None when blank or not numeric."""
    if value is None:
        return None
    text = value.strip()
    if not text or "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def format_number(number: float) -> str:
    """Render 3.0 as '3' and 2.5 as '2.5'."""
    return str(int(number)) if number.is_integer() else repr(number)


def cell(row: Mapping[str, str], mapping: Mapping[str, str], key: str) -> str:
    """Value of the column mapped to *key*; empty string when unmapped."""
    header = mapping.get(key)
    if not header:
        return ""
    return row.get(header) or ""


def coerce_row(
    row: Mapping[str, str],
    mapping: Mapping[str, str],
    defaults: CommitDefaults = CommitDefaults(),
) -> ProductFields:
    quantity = parse_number(cell(row, mapping, "quantity"))
    floor = parse_number(cell(row, mapping, "floor"))

    return ProductFields(
        sku=cell(row, mapping, "sku"),
        name=cell(row, mapping, "name"),
        quantity=quantity if quantity is not None else defaults.quantity,
        floor=int(floor) if floor is not None and _fits_int64(floor) else defaults.floor,
        description=cell(row, mapping, "description") or None,
        category=cell(row, mapping, "category") or None,
        unit=cell(row, mapping, "unit") or defaults.unit,
    )


def _fits_int64(number: float) -> bool:
    return _INT64_MIN <= number <= _INT64_MAX


def sector_name_for(
    rows: list[Mapping[str, str]],
    mapping: Mapping[str, str],
    defaults: CommitDefaults = CommitDefaults(),
) -> str:
    """The whole import lands in one sector, named by the first row."""
    if not rows:
        return defaults.sector_name
    return cell(rows[0], mapping, "sector") or defaults.sector_name
