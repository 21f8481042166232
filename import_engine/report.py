"""
import_engine.report - Structured results of validation and import runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ValidationIssue:
    row: int            # 1-based data row, 0 for mapping-level issues
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"row": self.row, "field": self.field, "message": self.message}


@dataclass
class ValidationResult:
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, row: int, field: str, message: str):
        self.errors.append(ValidationIssue(row, field, message))

    def add_warning(self, row: int, field: str, message: str):
        self.warnings.append(ValidationIssue(row, field, message))

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
        }


@dataclass(frozen=True)
class ImportResult:
    imported: int

    def to_dict(self) -> dict:
        return {"imported": self.imported}


@dataclass
class ImportReport:
    """Outcome of a one-shot run_import(): parse → map → validate → commit."""
    total_rows: int = 0
    imported: int = 0
    headers: list[str] = field(default_factory=list)
    mapping: dict[str, str] = field(default_factory=dict)
    validation: Optional[ValidationResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "imported": self.imported,
            "headers": self.headers,
            "mapping": self.mapping,
            "validation": self.validation.to_dict() if self.validation else None,
            "error": self.error,
        }
