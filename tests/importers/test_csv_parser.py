import pytest

import config
from import_engine.csv_parser import ParseError, parse_file


def test_headers_and_rows_in_file_order(csv_bytes):
    """Headers keep column order; rows keep line order."""
    table = parse_file(
        csv_bytes("SKU,Name,Quantity", "X1,Widget,10", "X2,Gadget,-3"),
        "inventory.csv",
    )
    assert table.headers == ["SKU", "Name", "Quantity"]
    assert table.rows == [
        {"SKU": "X1", "Name": "Widget", "Quantity": "10"},
        {"SKU": "X2", "Name": "Gadget", "Quantity": "-3"},
    ]
    assert table.row_count == 2


def test_quoted_delimiter_stays_in_one_cell(csv_bytes):
    table = parse_file(
        csv_bytes('SKU,Name,Description', 'A1,"Bolt, M6","Zinc, 50 pack"'),
        "inventory.csv",
    )
    assert table.rows[0] == {"SKU": "A1", "Name": "Bolt, M6", "Description": "Zinc, 50 pack"}


def test_cells_are_trimmed_and_unquoted(csv_bytes):
    table = parse_file(csv_bytes(" SKU , Name ", "  A1 ,  'Nut'  "), "inventory.csv")
    assert table.headers == ["SKU", "Name"]
    assert table.rows[0] == {"SKU": "A1", "Name": "Nut"}


def test_blank_lines_are_skipped(csv_bytes):
    table = parse_file(csv_bytes("", "SKU,Name", "", "A1,Nut", "   ", "A2,Bolt"), "inventory.csv")
    assert table.headers == ["SKU", "Name"]
    assert [r["SKU"] for r in table.rows] == ["A1", "A2"]


def test_short_rows_are_padded(csv_bytes):
    table = parse_file(csv_bytes("SKU,Name,Quantity", "A1,Nut"), "inventory.csv")
    assert table.rows[0] == {"SKU": "A1", "Name": "Nut", "Quantity": ""}


def test_trailing_empty_cells_are_ignored(csv_bytes):
    table = parse_file(csv_bytes("SKU,Name", "A1,Nut,,"), "inventory.csv")
    assert table.rows[0] == {"SKU": "A1", "Name": "Nut"}


def test_extra_cells_with_content_fail(csv_bytes):
    with pytest.raises(ParseError, match="line 2 has 3 fields"):
        parse_file(csv_bytes("SKU,Name", "A1,Nut,oops"), "inventory.csv")


def test_missing_header_slot_is_empty_string(csv_bytes):
    table = parse_file(csv_bytes("SKU,,Quantity", "A1,x,3"), "inventory.csv")
    assert table.headers == ["SKU", "", "Quantity"]
    assert table.rows[0][""] == "x"


def test_repeated_headers_are_made_distinct(csv_bytes):
    table = parse_file(csv_bytes("SKU,Qty,Qty", "A1,1,2"), "inventory.csv")
    assert table.headers == ["SKU", "Qty", "Qty_1"]
    assert table.rows[0] == {"SKU": "A1", "Qty": "1", "Qty_1": "2"}


def test_utf8_bom_is_stripped():
    table = parse_file(b"\xef\xbb\xbfSKU,Name\nA1,N\xc3\xbcsse\n", "inventory.csv")
    assert table.headers == ["SKU", "Name"]
    assert table.rows[0]["Name"] == "Nüsse"


def test_accepts_text_content():
    table = parse_file("SKU,Name\r\nA1,Nut\r\n", "inventory.csv")
    assert table.rows == [{"SKU": "A1", "Name": "Nut"}]


def test_extension_is_case_insensitive(csv_bytes):
    assert parse_file(csv_bytes("SKU", "A1"), "INVENTORY.CSV").row_count == 1


@pytest.mark.parametrize("filename", ["inventory.xlsx", "inventory.txt", "inventory", ""])
def test_unsupported_extension(filename, csv_bytes):
    with pytest.raises(ParseError, match="Invalid file type"):
        parse_file(csv_bytes("SKU", "A1"), filename)


def test_extension_checked_before_content():
    """Garbage in a .xls file is rejected for its name, not its content."""
    with pytest.raises(ParseError, match="Invalid file type"):
        parse_file(b'"unterminated', "stock.xls")


def test_too_large(monkeypatch, csv_bytes):
    monkeypatch.setattr(config, "MAX_IMPORT_BYTES", 16)
    with pytest.raises(ParseError, match="too large"):
        parse_file(csv_bytes("SKU,Name", "A1,Some long product name"), "inventory.csv")


def test_limit_is_ten_mib():
    assert config.MAX_IMPORT_BYTES == 10 * 1024 * 1024


def test_no_headers():
    with pytest.raises(ParseError, match="no headers"):
        parse_file(b"\n  \n\n", "inventory.csv")


def test_header_only_is_empty(csv_bytes):
    with pytest.raises(ParseError, match="File is empty"):
        parse_file(csv_bytes("SKU,Name,Quantity"), "inventory.csv")


def test_structural_error_carries_csv_message(csv_bytes):
    with pytest.raises(ParseError, match="Parsing error"):
        parse_file(csv_bytes("SKU,Name", 'A1,"Nut'), "inventory.csv")


def test_preview_is_capped(csv_bytes):
    lines = ["SKU"] + [f"S{i}" for i in range(25)]
    table = parse_file(csv_bytes(*lines), "inventory.csv")
    assert len(table.preview()) == config.PREVIEW_ROWS
    assert table.preview(3) == [{"SKU": "S0"}, {"SKU": "S1"}, {"SKU": "S2"}]


def test_delimiter_only_line_is_an_empty_row(csv_bytes):
    """',,' is not an empty line; it becomes a row of empty cells."""
    table = parse_file(csv_bytes("SKU,Name,Quantity", "A,Nut,1", ",,", "B,Bolt,2"), "inventory.csv")
    assert table.row_count == 3
    assert table.rows[1] == {"SKU": "", "Name": "", "Quantity": ""}


def test_delimiter_only_header_has_no_headers(csv_bytes):
    with pytest.raises(ParseError, match="no headers"):
        parse_file(csv_bytes(",,", "A,Nut,1", "B,Bolt,2"), "inventory.csv")


def test_blank_quoted_header_cells_have_no_headers(csv_bytes):
    with pytest.raises(ParseError, match="no headers"):
        parse_file(csv_bytes('" ",""', "A,Nut"), "inventory.csv")
