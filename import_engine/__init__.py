"""
import_engine - CSV import pipeline.

Public API:
    parse_file(content, filename)        → ParsedTable   (raises ParseError)
    infer_mapping(headers)               → {field key: header}
    validate_rows(rows, mapping)         → ValidationResult
    await commit_import(store, rows, mapping) → ImportResult
    await run_import(store, content, filename) → ImportReport
"""

from import_engine.csv_parser import ParseError, ParsedTable, parse_file      # noqa: F401
from import_engine.field_map import (                                         # noqa: F401
    clean_mapping,
    infer_mapping,
    mapping_summary,
)
from import_engine.importer import CommitRefused, commit_import, run_import   # noqa: F401
from import_engine.report import (                                            # noqa: F401
    ImportReport,
    ImportResult,
    ValidationIssue,
    ValidationResult,
)
from import_engine.row_processor import CommitDefaults, coerce_row            # noqa: F401
from import_engine.validator import validate_rows                             # noqa: F401
