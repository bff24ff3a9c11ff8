import json

import pytest

from order_export_template.catalogue import default_catalogue
from order_export_template.columns import ColumnSet
from order_export_template.handlers import (
    LAYOUT_BY_FIELD,
    LAYOUT_BY_ORDER,
    cancel_fields_handler,
    column_table,
    export_data_handler,
    handle_root_change,
    load_orders_handler,
    open_picker_handler,
    remove_column_handler,
    reorder_handler,
    save_fields_handler,
    search_fields_handler,
    select_fields_handler,
)
from order_export_template.picker import PickerState
from order_export_template.settings import Settings

ORDERS = {
    "orders": [
        {"id": "1", "raw": {"name": "#1001", "financial_status": "paid", "email": "a@example.com"}},
        {"id": "2", "raw": {"name": "#1002", "financial_status": "pending"}},
    ]
}


@pytest.fixture
def catalogue():
    return default_catalogue()


@pytest.fixture
def columns(catalogue):
    return ColumnSet(catalogue)


@pytest.fixture
def settings(tmp_path):
    return Settings(output_dir=str(tmp_path), preview_limit=50)


@pytest.fixture
def upload(tmp_path):
    path = tmp_path / "orders.json"
    path.write_text(json.dumps(ORDERS), encoding="utf-8")
    return str(path)


def test_load_orders_handler(upload, columns, settings):
    data, records, message, count, preview = load_orders_handler(upload, "orders", columns, LAYOUT_BY_FIELD, settings)

    assert data == ORDERS
    assert [r["name"] for r in records] == ["#1001", "#1002"]
    assert message == "Successfully loaded 2 orders."
    assert count == "Orders: 2"
    assert list(preview.columns) == ["Field", "Row 1", "Row 2"]


def test_load_orders_handler_reports_bad_upload(tmp_path, columns, settings):
    bad = tmp_path / "bad.json"
    bad.write_text("[", encoding="utf-8")
    data, records, message, count, preview = load_orders_handler(str(bad), "(root)", columns, LAYOUT_BY_FIELD, settings)
    assert data is None and records == [] and preview is None
    assert message.startswith("Error parsing JSON")


def test_root_change_reloads_records(columns, settings):
    records, count, preview = handle_root_change(ORDERS, "orders", columns, LAYOUT_BY_ORDER, settings)
    assert count == "Orders: 2"
    assert preview["Order Name"].tolist() == ["#1001", "#1002"]

    assert handle_root_change(None, "orders", columns, LAYOUT_BY_ORDER, settings) == ([], "", None)


def test_reorder_and_remove_handlers(columns, settings):
    records = [o["raw"] for o in ORDERS["orders"]]

    state, table, move_from, move_to, remove, preview = reorder_handler(
        columns, "financialStatus", "name", records, LAYOUT_BY_ORDER, settings
    )
    assert state is columns
    assert [row[2] for row in table] == ["financialStatus", "name", "createdAt", "totalPrice"]
    assert move_from["choices"][0] == ("Financial Status", "financialStatus")
    assert list(preview.columns)[0] == "Financial Status"

    state, table, *_ = remove_column_handler(columns, "raw.created_at", records, LAYOUT_BY_ORDER, settings)
    assert [row[1] for row in table] == ["raw.financial_status", "raw.name", "raw.subtotal_price_set.shop_money.amount"]


def test_picker_flow(columns, catalogue, settings):
    state, panel, query_box, choices = open_picker_handler(PickerState(), columns, catalogue)
    assert panel["visible"] is True
    assert len(choices["choices"]) == len(catalogue)

    state, panel, query_box, choices = search_fields_handler(state, "customer", catalogue)
    assert all(label.startswith("Customer") for label, _ in choices["choices"])
    assert choices["value"] == []

    state = select_fields_handler(state, ["raw.customer.email"], catalogue)
    outputs = save_fields_handler(state, columns, [], LAYOUT_BY_FIELD, catalogue, settings)
    state, panel = outputs[0], outputs[1]

    assert panel["visible"] is False
    assert state.query == ""
    assert columns.paths()[-1] == "raw.customer.email"
    assert column_table(columns)[-1] == ["Customer Email", "raw.customer.email", "raw.customer.email"]


def test_cancel_picker_keeps_columns(columns, catalogue):
    state, *_ = open_picker_handler(PickerState(), columns, catalogue)
    state = select_fields_handler(state, [], catalogue)
    state, panel, *_ = cancel_fields_handler(state, columns, catalogue)
    assert panel["visible"] is False
    assert state.draft == tuple(columns.paths())
    assert len(columns) == 4


def test_export_handler_writes_bom_csv(columns, settings, tmp_path):
    records = [o["raw"] for o in ORDERS["orders"]]
    path, message = export_data_handler(columns, records, "daily", settings)

    assert message.startswith("Export successful! 2 orders")
    content = open(path, "rb").read()
    assert content.startswith(b"\xef\xbb\xbf")
    lines = content.decode("utf-8-sig").split("\r\n")
    assert lines[0] == "Order Name,Order Created Date,Financial Status,Subtotal Price Set"
    assert lines[1] == "#1001,,paid,"


def test_export_handler_guards(catalogue, settings):
    assert export_data_handler(ColumnSet(catalogue), None, "", settings) == (None, "No data loaded.")
    assert export_data_handler(ColumnSet(catalogue), [], "", settings) == (None, "No data loaded.")
    records = [{"name": "#1"}]
    assert export_data_handler(ColumnSet(catalogue, []), records, "", settings) == (None, "No fields selected.")
