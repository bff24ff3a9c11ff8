import sys
from datetime import date, datetime, timezone

import pytest

from order_export_template.catalogue import default_catalogue
from order_export_template.columns import Column, ColumnSet
from order_export_template.export import (
    BOM,
    CSV_MIME_TYPE,
    build_export,
    default_filename,
    encode_document,
    escape_field,
    serialize,
    write_export,
)
from order_export_template.synthetic import EXPORTED_TIMESTAMP, SyntheticFieldProvider

NAME = Column("name", "Order Name", "raw.name")


def test_serialize_two_rows_crlf():
    records = [{"name": "A"}, {"name": "B"}]
    assert serialize([NAME], records) == "Order Name\r\nA\r\nB"


def test_serialize_header_only_without_records():
    assert serialize([NAME], []) == "Order Name"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Smith, John", '"Smith, John"'),
        ('Say "hi"', '"Say ""hi"""'),
        ("line\nbreak", '"line\nbreak"'),
        ("carriage\rreturn", '"carriage\rreturn"'),
        ("plain", "plain"),
        ("", ""),
        (None, ""),
        (42, "42"),
        (1.5, "1.5"),
        (2.0, "2"),
        (True, "true"),
        (False, "false"),
        (float("nan"), "NaN"),
    ],
)
def test_escape_field(value, expected):
    assert escape_field(value) == expected


def test_serialize_escapes_values_and_labels():
    columns = [Column("c", "Customer, Name", "raw.customer.name"), Column("n", "Note", "raw.note")]
    records = [{"customer": {"name": "Smith, John"}, "note": 'Say "hi"'}]
    assert serialize(columns, records) == '"Customer, Name",Note\r\n"Smith, John","Say ""hi"""'


def test_serialize_keeps_zero_and_false_distinct_from_empty():
    columns = [
        Column("q", "Qty", "raw.qty"),
        Column("t", "Test", "raw.test"),
        Column("m", "Missing", "raw.missing"),
        Column("a", "Attrs", "raw.attrs"),
    ]
    records = [{"qty": 0, "test": False, "attrs": [{"name": "gift"}]}]
    assert serialize(columns, records).split("\r\n")[1] == '0,false,,"[{""name"":""gift""}]"'


@pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no int digit limit")
def test_serialize_int_past_digit_limit_is_empty_cell():
    columns = [Column("n", "N", "raw.n"), NAME]
    assert serialize(columns, [{"n": 10 ** 5000, "name": "A"}]) == "N,Order Name\r\n,A"


def test_serialize_snapshots_inputs():
    column_set = ColumnSet(default_catalogue(), [NAME])
    records = [{"name": "A"}]
    text = serialize(column_set, records)
    column_set.add("raw.email")
    records.append({"name": "B"})
    assert text == "Order Name\r\nA"


def test_serialize_synthetic_column():
    column = Column(EXPORTED_TIMESTAMP, "Exported Timestamp", EXPORTED_TIMESTAMP)
    provider = SyntheticFieldProvider(clock=lambda: datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))
    text = serialize([NAME, column], [{"name": "A"}], provider)
    assert text == "Order Name,Exported Timestamp\r\nA,2024-05-01T09:00:00.000Z"


def test_encode_document_has_bom():
    data = encode_document("Tên,Giá")
    assert data.startswith(b"\xef\xbb\xbf")
    assert data.decode("utf-8-sig") == "Tên,Giá"
    assert BOM == "\ufeff"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Daily orders", "Daily orders-2024-05-01.csv"),
        ("  ", "order-export-template-2024-05-01.csv"),
        (None, "order-export-template-2024-05-01.csv"),
        ("a/b\\c", "a-b-c-2024-05-01.csv"),
    ],
)
def test_default_filename(name, expected):
    assert default_filename(name, date(2024, 5, 1)) == expected


def test_build_and_write_export(tmp_path):
    result = build_export([NAME], [{"name": "A"}], "orders", today=date(2024, 5, 1))
    assert result.filename == "orders-2024-05-01.csv"
    assert result.mime_type == CSV_MIME_TYPE
    assert result.row_count == 1

    path = write_export(result, tmp_path / "out")
    assert path == tmp_path / "out" / "orders-2024-05-01.csv"
    assert path.read_bytes() == b"\xef\xbb\xbfOrder Name\r\nA"
