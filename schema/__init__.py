"""
schema - Canonical import field schema.

Public API:
    FieldKey, ImportField, IMPORT_FIELDS
    get_field / required_fields / field_keys
"""

from schema.fields import (                         # noqa: F401
    FieldKey,
    ImportField,
    IMPORT_FIELDS,
    get_field,
    required_fields,
    field_keys,
)
