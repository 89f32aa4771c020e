"""Create, update and delete handlers for invoice form submissions.

Each handler runs one pass: extract the submitted fields, validate them,
issue a single statement through :class:`InvoiceGateway`, invalidate the
cached invoice listing and report the outcome.  Navigation is left to the
caller, which receives one of :class:`Success`, :class:`ValidationFailure`
or :class:`PersistenceFailure`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone as dt_timezone
from typing import Callable, Dict, List, Mapping, Optional, Union

from flask import current_app
from werkzeug.datastructures import MultiDict

from dashboard.errors import PersistenceError
from dashboard.forms import WIRE_FIELD_NAMES, InvoiceForm
from dashboard.services.invoice_gateway import InvoiceGateway
from dashboard.utils.numeric import to_cents
from dashboard.utils.route_cache import INVOICES_PATH, revalidate_path

CREATE_VALIDATION_MESSAGE = "Missing Fields. Failed to Create Invoice."
UPDATE_VALIDATION_MESSAGE = "Missing Fields. Failed to Update Invoice."
CREATE_DATABASE_MESSAGE = "Database Error: Failed to Create Invoice."
UPDATE_DATABASE_MESSAGE = "Database Error: Failed to Update Invoice."
DELETE_DATABASE_MESSAGE = "Database Error: Failed to Delete Invoice."


@dataclass(frozen=True)
class Success:
    """The write went through; the caller should navigate to ``redirect_to``."""

    redirect_to: str
    invoice_id: Optional[str] = None


@dataclass(frozen=True)
class ValidationFailure:
    message: str
    errors: Dict[str, List[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class PersistenceFailure:
    message: str


ActionResult = Union[Success, ValidationFailure, PersistenceFailure]


def _utc_today() -> date:
    """Return the current UTC date used as the invoice issue date."""

    return datetime.now(dt_timezone.utc).date()


def _logger():
    return current_app.logger if current_app else logging.getLogger(__name__)


def extract_fields(formdata: Mapping) -> MultiDict:
    """Pick the invoice fields out of a submitted form.

    Keys are translated from the HTML field names to :class:`InvoiceForm`
    attribute names; absent fields stay absent.
    """

    fields = MultiDict()
    for attribute, wire_name in WIRE_FIELD_NAMES.items():
        value = formdata.get(wire_name)
        if value is not None:
            fields.add(attribute, value)
    return fields


class InvoiceActions:
    """Form handlers bound to a gateway and a cache invalidation hook."""

    def __init__(
        self,
        gateway: InvoiceGateway,
        revalidate: Callable[[str], None] = revalidate_path,
        today: Callable[[], date] = _utc_today,
        listing_path: str = INVOICES_PATH,
    ) -> None:
        self.gateway = gateway
        self.revalidate = revalidate
        self.today = today
        self.listing_path = listing_path

    def _validate(self, formdata: Mapping, message: str):
        form = InvoiceForm(formdata=extract_fields(formdata), meta={"csrf": False})
        if form.validate():
            return form, None
        return None, ValidationFailure(message, form.wire_errors())

    def _succeeded(self, invoice_id: Optional[str] = None) -> Success:
        self.revalidate(self.listing_path)
        return Success(self.listing_path, invoice_id)

    def create_invoice(self, formdata: Mapping) -> ActionResult:
        form, failure = self._validate(formdata, CREATE_VALIDATION_MESSAGE)
        if failure is not None:
            return failure

        try:
            invoice_id = self.gateway.insert(
                form.customer_id.data,
                to_cents(form.amount.data),
                form.status.data,
                self.today(),
            )
        except PersistenceError:
            _logger().exception(CREATE_DATABASE_MESSAGE)
            return PersistenceFailure(CREATE_DATABASE_MESSAGE)
        return self._succeeded(invoice_id)

    def update_invoice(self, invoice_id: str, formdata: Mapping) -> ActionResult:
        form, failure = self._validate(formdata, UPDATE_VALIDATION_MESSAGE)
        if failure is not None:
            return failure

        try:
            self.gateway.update(
                invoice_id,
                form.customer_id.data,
                to_cents(form.amount.data),
                form.status.data,
            )
        except PersistenceError:
            _logger().exception(UPDATE_DATABASE_MESSAGE)
            return PersistenceFailure(UPDATE_DATABASE_MESSAGE)
        return self._succeeded(invoice_id)

    def delete_invoice(self, invoice_id: str) -> ActionResult:
        try:
            self.gateway.delete(invoice_id)
        except PersistenceError:
            _logger().exception(DELETE_DATABASE_MESSAGE)
            return PersistenceFailure(DELETE_DATABASE_MESSAGE)
        return self._succeeded(invoice_id)


def get_invoice_actions() -> InvoiceActions:
    """Return handlers bound to the application's shared gateway."""

    return InvoiceActions(current_app.extensions["invoice_gateway"])
