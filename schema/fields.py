"""
schema.fields - The fixed set of canonical import fields.

The order of IMPORT_FIELDS is significant: mapping inference walks it
front to back and the wizard renders it in this order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import config


class FieldKey(str, Enum):
    sku = "sku"
    name = "name"
    quantity = "quantity"
    sector = "sector"
    zone = "zone"
    floor = "floor"
    description = "description"
    category = "category"
    unit = "unit"


@dataclass(frozen=True, slots=True)
class ImportField:
    key: FieldKey
    label: str
    required: bool = False
    default_value: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "key": self.key.value,
            "label": self.label,
            "required": self.required,
            "defaultValue": self.default_value,
        }


IMPORT_FIELDS: tuple[ImportField, ...] = (
    ImportField(FieldKey.sku,         "SKU",         required=True),
    ImportField(FieldKey.name,        "Name",        required=True),
    ImportField(FieldKey.quantity,    "Quantity",    required=True),
    ImportField(FieldKey.sector,      "Sector"),
    ImportField(FieldKey.zone,        "Zone"),
    ImportField(FieldKey.floor,       "Floor"),
    ImportField(FieldKey.description, "Description"),
    ImportField(FieldKey.category,    "Category"),
    ImportField(FieldKey.unit,        "Unit", default_value=config.DEFAULT_UNIT),
)


# ── Public helpers ────────────────────────────────────────────────────

def get_field(key: str | FieldKey) -> Optional[ImportField]:
    """Return the schema entry for *key*, or None if unknown."""
    for field in IMPORT_FIELDS:
        if field.key == key:
            return field
    return None


def required_fields(fields: Sequence[ImportField] = IMPORT_FIELDS) -> list[ImportField]:
    return [f for f in fields if f.required]


def field_keys() -> list[str]:
    return [f.key.value for f in IMPORT_FIELDS]
