"""
import_engine.csv_parser - Low-level CSV reading and cleaning.

Responsibilities:
  • Extension and size checks (before any decoding)
  • BOM removal (UTF-8 / UTF-8-SIG)
  • Quote-aware splitting via the csv module
  • Header / cell whitespace and stray-quote stripping
  • Returns a ParsedTable of string-keyed rows in file order
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import PurePath

import config

logger = logging.getLogger(__name__)

_QUOTES = "\"'"


class ParseError(Exception):
    """Raised when a file cannot be turned into headers + rows."""
    pass


@dataclass
class ParsedTable:
    headers: list[str] = field(default_factory=list)
    rows: list[dict[str, str]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def preview(self, limit: int = config.PREVIEW_ROWS) -> list[dict[str, str]]:
        return self.rows[:limit]

    def to_dict(self) -> dict:
        return {"headers": self.headers, "rows": self.rows, "row_count": self.row_count}


def parse_file(raw: str | bytes, filename: str) -> ParsedTable:
    """
    Turn an uploaded file into a ParsedTable.
    Raises ParseError with a user-facing message on any input problem.
    """
    check_extension(filename)
    check_size(raw)

    text = _decode(raw)
    reader = csv.reader(io.StringIO(text, newline=""),
                        skipinitialspace=True, strict=True)

    try:
        lines = [(reader.line_num, cells) for cells in reader if not _is_empty_line(cells)]
    except csv.Error as exc:
        logger.warning(f"CSV structure error in {filename}: {exc}")
        raise ParseError(f"Parsing error: {exc}") from exc

    if not lines or all(not _clean(h) for h in lines[0][1]):
        raise ParseError("File has no headers")

    _, header_cells = lines[0]
    headers = _dedupe([_clean(h) for h in header_cells])

    rows: list[dict[str, str]] = []
    for line_num, cells in lines[1:]:
        rows.append(_build_row(headers, [_clean(c) for c in cells], line_num))

    if not rows:
        raise ParseError("File is empty")

    logger.debug(f"Parsed {filename}: {len(headers)} columns, {len(rows)} rows")
    return ParsedTable(headers=headers, rows=rows)


def check_extension(filename: str) -> None:
    ext = PurePath(filename or "").suffix.lower()
    if ext not in config.ACCEPTED_EXTENSIONS:
        logger.warning(f"Rejected {filename!r}: unsupported extension {ext!r}")
        raise ParseError(
            f"Invalid file type. Accepted: {', '.join(config.ACCEPTED_EXTENSIONS)}"
        )


def check_size(raw: str | bytes) -> None:
    size = len(raw) if isinstance(raw, bytes) else len(raw.encode("utf-8"))
    if size > config.MAX_IMPORT_BYTES:
        logger.warning(f"Rejected upload of {size} bytes (limit {config.MAX_IMPORT_BYTES})")
        raise ParseError(
            f"File is too large. Maximum size is "
            f"{config.MAX_IMPORT_BYTES // (1024 * 1024)} MB."
        )


# ── Private helpers ────────────────────────────────────────────────────

def _decode(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        # Strip UTF-8 BOM
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        return raw.decode("utf-8", errors="replace")
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw


def _clean(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        value = value[1:-1].strip()
    return value


def _is_empty_line(cells: list[str]) -> bool:
    """A line with no delimiter and nothing but whitespace.  ',,' is not empty."""
    return not cells or (len(cells) == 1 and not cells[0].strip())


def _dedupe(headers: list[str]) -> list[str]:
    """Make header names distinct: a repeated 'Qty' becomes 'Qty_1', 'Qty_2' …"""
    seen: dict[str, int] = {}
    out: list[str] = []
    for h in headers:
        name = h
        while name in seen:
            seen[h] += 1
            name = f"{h}_{seen[h]}"
        seen.setdefault(name, 0)
        out.append(name)
    return out


def _build_row(headers: list[str], cells: list[str], line_num: int) -> dict[str, str]:
    if len(cells) > len(headers):
        extra = cells[len(headers):]
        if any(extra):
            raise ParseError(
                f"Parsing error: line {line_num} has {len(cells)} fields "
                f"but the header has {len(headers)}"
            )
        cells = cells[:len(headers)]
    cells = cells + [""] * (len(headers) - len(cells))
    return dict(zip(headers, cells))
