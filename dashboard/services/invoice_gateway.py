"""Single-statement persistence for the ``invoices`` table."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from flask import current_app
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from dashboard.errors import PersistenceError
from dashboard.models import Invoice, generate_invoice_id


def _logger():
    return current_app.logger if current_app else logging.getLogger(__name__)


class InvoiceGateway:
    """Issue insert, update and delete statements through one shared handle.

    ``database`` is the process-wide Flask-SQLAlchemy extension; its scoped
    session gives every request its own connection checkout.  Each write is
    committed on its own and rolled back on failure so the handle stays
    usable for the next request.
    """

    def __init__(self, database) -> None:
        self.database = database

    @property
    def session(self):
        return self.database.session

    def _execute(self, operation: str, statement, invoice_id: Optional[str]):
        try:
            result = self.session.execute(statement)
            self.session.commit()
        except (SQLAlchemyError, OverflowError) as exc:
            # sqlite3 raises OverflowError for integers beyond 64 bits
            self.session.rollback()
            raise PersistenceError(operation, invoice_id) from exc
        return result

    def insert(
        self, customer_id: str, amount_cents: int, status: str, issued_on: date
    ) -> str:
        """Append one invoice row and return its generated identifier."""
        invoice_id = generate_invoice_id()
        statement = insert(Invoice).values(
            id=invoice_id,
            customer_id=customer_id,
            amount=amount_cents,
            status=status,
            date=issued_on,
        )
        self._execute("create", statement, None)
        _logger().info("Created invoice %s", invoice_id)
        return invoice_id

    def update(
        self, invoice_id: str, customer_id: str, amount_cents: int, status: str
    ) -> None:
        """Rewrite the mutable columns of ``invoice_id``.

        A missing row is not an error; the affected row count is ignored.
        """
        statement = (
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(customer_id=customer_id, amount=amount_cents, status=status)
        )
        self._execute("update", statement, invoice_id)
        _logger().info("Updated invoice %s", invoice_id)

    def delete(self, invoice_id: str) -> None:
        """Remove ``invoice_id``; deleting a missing row is a no-op."""
        statement = delete(Invoice).where(Invoice.id == invoice_id)
        self._execute("delete", statement, invoice_id)
        _logger().info("Deleted invoice %s", invoice_id)

    def get(self, invoice_id: str) -> Optional[Invoice]:
        return self.session.get(Invoice, invoice_id)

    def list_page(self, page: int, per_page: int):
        """Return a pagination object of invoices, newest first."""
        query = select(Invoice).order_by(Invoice.date.desc(), Invoice.id)
        return self.database.paginate(
            query, page=page, per_page=per_page, error_out=False
        )
