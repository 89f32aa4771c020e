from decimal import Decimal

from flask import (
    Blueprint,
    abort,
    current_app,
    flash,
    redirect,
    render_template,
    request,
)

from dashboard.forms import DeleteForm
from dashboard.models import INVOICE_STATUSES
from dashboard.services.invoice_actions import (
    PersistenceFailure,
    Success,
    ValidationFailure,
    get_invoice_actions,
)
from dashboard.utils.pagination import build_pagination_args, get_per_page
from dashboard.utils.route_cache import INVOICES_PATH, cached_route

invoice = Blueprint("invoice", __name__)


def _gateway():
    return current_app.extensions["invoice_gateway"]


def _invoice_values(record):
    """Return form values for an existing invoice row."""
    return {
        "customerId": record.customer_id,
        "amount": f"{Decimal(record.amount) / 100:.2f}",
        "status": record.status,
    }


def _render_listing(message=None, status=200):
    page = request.args.get("page", 1, type=int)
    per_page = get_per_page()
    invoices = _gateway().list_page(page, per_page)
    return (
        render_template(
            "invoices/view_invoices.html",
            invoices=invoices,
            message=message,
            per_page=per_page,
            pagination_args=build_pagination_args(per_page),
        ),
        status,
    )


def _render_form(title, action_url, values, result=None, invoice_id=None):
    """Render the invoice form, surfacing a failed action result if any."""
    status = 200
    message = None
    errors = {}
    if isinstance(result, ValidationFailure):
        status, message, errors = 400, result.message, result.errors
    elif isinstance(result, PersistenceFailure):
        status, message = 500, result.message
    return (
        render_template(
            "invoices/invoice_form.html",
            title=title,
            action_url=action_url,
            values=values,
            message=message,
            errors=errors,
            statuses=INVOICE_STATUSES,
            invoice_id=invoice_id,
            delete_form=DeleteForm() if invoice_id else None,
        ),
        status,
    )


@invoice.route(INVOICES_PATH)
@cached_route()
def view_invoices():
    """List invoices, newest first."""
    return _render_listing()


@invoice.route(f"{INVOICES_PATH}/create", methods=["GET", "POST"])
def create_invoice():
    """Create an invoice from the submitted form."""
    action_url = request.path
    if request.method == "GET":
        return _render_form("Create Invoice", action_url, {})

    result = get_invoice_actions().create_invoice(request.form)
    if isinstance(result, Success):
        flash("Invoice created successfully!", "success")
        return redirect(result.redirect_to)
    return _render_form("Create Invoice", action_url, request.form, result)


@invoice.route(f"{INVOICES_PATH}/<invoice_id>/edit", methods=["GET", "POST"])
def edit_invoice(invoice_id):
    """Edit the customer, amount and status of an invoice."""
    action_url = request.path
    if request.method == "GET":
        record = _gateway().get(invoice_id)
        if record is None:
            abort(404)
        return _render_form(
            "Edit Invoice",
            action_url,
            _invoice_values(record),
            invoice_id=invoice_id,
        )

    result = get_invoice_actions().update_invoice(invoice_id, request.form)
    if isinstance(result, Success):
        flash("Invoice updated successfully!", "success")
        return redirect(result.redirect_to)
    return _render_form(
        "Edit Invoice", action_url, request.form, result, invoice_id=invoice_id
    )


@invoice.route(f"{INVOICES_PATH}/<invoice_id>/delete", methods=["POST"])
def delete_invoice(invoice_id):
    """Delete an invoice."""
    form = DeleteForm()
    if not form.validate_on_submit():
        abort(400)
    result = get_invoice_actions().delete_invoice(invoice_id)
    if isinstance(result, Success):
        flash("Invoice deleted successfully!", "success")
        return redirect(result.redirect_to)
    return _render_listing(message=result.message, status=500)
