import pytest

from import_engine.row_processor import (
    CommitDefaults,
    coerce_row,
    format_number,
    parse_number,
    sector_name_for,
)


FULL_MAPPING = {
    "sku": "SKU", "name": "Name", "quantity": "Qty", "sector": "Sector",
    "floor": "Floor", "description": "Desc", "category": "Cat", "unit": "Unit",
}


@pytest.mark.parametrize("raw,expected", [
    ("10", 10.0), (" 2.5 ", 2.5), ("-3", -3.0), ("1e2", 100.0),
    ("", None), ("   ", None), (None, None), ("abc", None), ("nan", None), ("-inf", None),
])
def test_parse_number(raw, expected):
    assert parse_number(raw) == expected


@pytest.mark.parametrize("number,text", [(3.0, "3"), (-5.0, "-5"), (2.5, "2.5"), (0.0, "0")])
def test_format_number(number, text):
    assert format_number(number) == text


def test_coerce_full_row():
    row = {"SKU": "A1", "Name": "Nut", "Qty": "12", "Sector": "North", "Floor": "2",
           "Desc": "Hex nut", "Cat": "Fasteners", "Unit": "box"}
    fields = coerce_row(row, FULL_MAPPING)
    assert fields.to_dict() == {
        "sku": "A1", "name": "Nut", "quantity": 12.0, "floor": 2,
        "description": "Hex nut", "category": "Fasteners", "unit": "box",
    }


def test_coerce_applies_defaults_for_blank_and_bad_cells():
    row = {"SKU": "A1", "Name": "Nut", "Qty": "oops", "Floor": "", "Desc": "", "Cat": "", "Unit": ""}
    fields = coerce_row(row, FULL_MAPPING)
    assert fields.quantity == 0
    assert fields.floor == 0
    assert fields.description is None
    assert fields.category is None
    assert fields.unit == "pcs"


def test_coerce_with_minimal_mapping():
    fields = coerce_row({"S": "A1"}, {"sku": "S"})
    assert fields.sku == "A1"
    assert fields.name == ""
    assert fields.quantity == 0
    assert fields.unit == "pcs"


def test_floor_is_truncated_to_int():
    assert coerce_row({"Floor": "3.7"}, {"floor": "Floor"}).floor == 3


def test_negative_quantity_is_kept():
    assert coerce_row({"Qty": "-4"}, {"quantity": "Qty"}).quantity == -4.0


def test_custom_defaults():
    defaults = CommitDefaults(unit="kg", quantity=1, floor=5)
    fields = coerce_row({}, FULL_MAPPING, defaults)
    assert (fields.unit, fields.quantity, fields.floor) == ("kg", 1, 5)


def test_sector_name_comes_from_first_row():
    rows = [{"Sector": "North"}, {"Sector": "South"}]
    assert sector_name_for(rows, {"sector": "Sector"}) == "North"


@pytest.mark.parametrize("rows,mapping", [
    ([{"Sector": ""}, {"Sector": "South"}], {"sector": "Sector"}),
    ([{"Sector": "North"}], {}),
    ([], {"sector": "Sector"}),
])
def test_sector_name_defaults(rows, mapping):
    assert sector_name_for(rows, mapping) == "Default"


@pytest.mark.parametrize("raw", ["1_000", "1_0.5", "_1"])
def test_parse_number_rejects_underscores(raw):
    assert parse_number(raw) is None


@pytest.mark.parametrize("raw", ["1e20", "-1e20", "9223372036854775808"])
def test_floor_outside_int64_uses_default(raw):
    assert coerce_row({"Floor": raw}, {"floor": "Floor"}).floor == 0
    assert coerce_row({"Floor": raw}, {"floor": "Floor"}, CommitDefaults(floor=4)).floor == 4


def test_floor_at_int64_edge_is_kept():
    assert coerce_row({"Floor": "-9223372036854775808"}, {"floor": "Floor"}).floor == -(2 ** 63)
