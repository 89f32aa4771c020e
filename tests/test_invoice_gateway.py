from datetime import date

import pytest

from dashboard import db
from dashboard.errors import PersistenceError
from dashboard.models import Invoice


def test_insert_generates_identifier(gateway):
    invoice_id = gateway.insert("cust-1", 1050, "pending", date(2024, 1, 2))

    stored = db.session.get(Invoice, invoice_id)
    assert len(invoice_id) == 36
    assert (stored.customer_id, stored.amount, stored.status, stored.date) == (
        "cust-1",
        1050,
        "pending",
        date(2024, 1, 2),
    )


def test_update_rewrites_mutable_columns_only(gateway):
    invoice_id = gateway.insert("cust-1", 1050, "pending", date(2024, 1, 2))

    gateway.update(invoice_id, "cust-2", 9999, "paid")

    db.session.expire_all()
    stored = db.session.get(Invoice, invoice_id)
    assert stored.customer_id == "cust-2"
    assert stored.amount == 9999
    assert stored.status == "paid"
    assert stored.date == date(2024, 1, 2)


def test_delete_removes_row(gateway):
    invoice_id = gateway.insert("cust-1", 1050, "pending", date(2024, 1, 2))

    gateway.delete(invoice_id)

    db.session.expire_all()
    assert gateway.get(invoice_id) is None


def test_missing_rows_are_ignored(gateway):
    gateway.update("does-not-exist", "cust-1", 100, "paid")
    gateway.delete("does-not-exist")
    assert Invoice.query.count() == 0


def test_constraint_violation_raises_persistence_error(gateway):
    with pytest.raises(PersistenceError) as excinfo:
        gateway.insert("cust-1", 0, "pending", date(2024, 1, 2))

    assert excinfo.value.operation == "create"
    assert excinfo.value.__cause__ is not None
    # The shared session is rolled back and stays usable
    gateway.insert("cust-1", 1, "pending", date(2024, 1, 2))
    assert Invoice.query.count() == 1


def test_update_failure_carries_invoice_id(gateway):
    invoice_id = gateway.insert("cust-1", 1050, "pending", date(2024, 1, 2))

    with pytest.raises(PersistenceError) as excinfo:
        gateway.update(invoice_id, "cust-1", 1050, "overdue")

    assert excinfo.value.invoice_id == invoice_id
    assert invoice_id in str(excinfo.value)


def test_list_page_orders_newest_first(gateway):
    gateway.insert("older", 100, "paid", date(2024, 1, 1))
    gateway.insert("newer", 200, "pending", date(2024, 2, 1))
    gateway.insert("middle", 300, "pending", date(2024, 1, 15))

    page = gateway.list_page(page=1, per_page=2)

    assert [inv.customer_id for inv in page.items] == ["newer", "middle"]
    assert page.total == 3
    assert page.pages == 2


def test_out_of_range_amount_raises_persistence_error(gateway):
    with pytest.raises(PersistenceError) as excinfo:
        gateway.insert("cust-1", 10**20, "pending", date(2024, 1, 2))

    assert excinfo.value.operation == "create"
    gateway.insert("cust-1", 1, "pending", date(2024, 1, 2))
    assert Invoice.query.count() == 1
