"""
import_engine.field_map - Column-name → import-field mapping.

infer_mapping() proposes a column for every field by trying a short,
ordered list of matcher strategies.  The first strategy that finds a
header wins for that field; later headers are never considered.

A header may be proposed for more than one field.  Resolving such
collisions is left to the operator.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Optional

import config
from schema import IMPORT_FIELDS, ImportField, field_keys

# (header, field) → does this header describe this field?
Matcher = Callable[[str, ImportField], bool]

ColumnMapping = dict[str, str]


def exact_match(header: str, field: ImportField) -> bool:
    h = header.lower()
    return h == field.label.lower() or h == field.key.value.lower()


def partial_match(header: str, field: ImportField) -> bool:
    h = header.lower()
    if not h.strip():
        return False
    return field.key.value.lower() in h or h in field.label.lower()


MATCHERS: tuple[Matcher, ...] = (exact_match, partial_match)


def find_header(
    headers: Sequence[str],
    field: ImportField,
    matchers: Sequence[Matcher] = MATCHERS,
) -> Optional[str]:
    """Return the first header picked by the first matcher that picks one."""
    for matcher in matchers:
        for header in headers:
            if matcher(header, field):
                return header
    return None


def infer_mapping(
    headers: Sequence[str],
    fields: Sequence[ImportField] = IMPORT_FIELDS,
) -> ColumnMapping:
    """Best-effort field → header mapping.  Unmatched fields are left out."""
    mapping: ColumnMapping = {}
    for field in fields:
        header = find_header(headers, field)
        if header is not None:
            mapping[field.key.value] = header
    return mapping


def clean_mapping(raw: Mapping[str, object]) -> ColumnMapping:
    """
    Normalise a mapping received from the outside world: drop unknown
    field keys, non-string values and empty selections.
    """
    known = set(field_keys())
    return {
        key: value
        for key, value in raw.items()
        if key in known and isinstance(value, str) and value
    }


def mapping_summary(
    mapping: Mapping[str, str],
    rows: Sequence[Mapping[str, str]] = (),
    fields: Sequence[ImportField] = IMPORT_FIELDS,
) -> dict:
    """Counts and sample values shown next to the mapping editor."""
    sample_rows = rows[:config.SAMPLE_ROWS]
    samples = {
        key: [row.get(header, "") for row in sample_rows]
        for key, header in mapping.items()
        if header
    }
    return {
        "mapped": sum(1 for f in fields if mapping.get(f.key.value)),
        "total": len(fields),
        "required_mapped": all(mapping.get(f.key.value) for f in fields if f.required),
        "samples": samples,
    }
