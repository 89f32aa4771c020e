"""Exceptions raised by the invoice services."""

from __future__ import annotations

from typing import Optional


class PersistenceError(Exception):
    """Raised when a statement against the invoices table fails.

    Connectivity problems and constraint violations are not distinguished;
    the original database exception is kept as ``__cause__``.
    """

    def __init__(self, operation: str, invoice_id: Optional[str] = None) -> None:
        self.operation = operation
        self.invoice_id = invoice_id
        target = f" {invoice_id}" if invoice_id else ""
        super().__init__(f"Failed to {operation} invoice{target}")
