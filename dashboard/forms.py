from decimal import Decimal

from flask_wtf import FlaskForm
from wtforms import DecimalField, StringField, SubmitField
from wtforms.validators import AnyOf, DataRequired, ValidationError

from dashboard.models import INVOICE_STATUSES
from dashboard.utils.numeric import coerce_amount

CUSTOMER_REQUIRED_MESSAGE = "Please select a customer"
AMOUNT_POSITIVE_MESSAGE = "Please enter an amount greater than 0$"
STATUS_CHOICE_MESSAGE = "Please select an invoice status"

# Largest amount whose cents fit the 32-bit ``invoices.amount`` column
MAX_AMOUNT = Decimal("21474836.47")

# Form attribute name -> field name used by the submitted HTML form.
WIRE_FIELD_NAMES = {
    "customer_id": "customerId",
    "amount": "amount",
    "status": "status",
}


class GreaterThan:
    """Validate that a numeric field is strictly greater than ``minimum``.

    Missing or unparseable values fail with the same message so the user
    sees a single hint for the field.  An optional ``maximum`` caps the
    accepted value under that message too.
    """

    def __init__(self, minimum, message=None, maximum=None):
        self.minimum = minimum
        self.maximum = maximum
        self.message = message or f"Enter a value greater than {minimum}."

    def __call__(self, form, field):
        if field.data is None or field.data <= self.minimum:
            raise ValidationError(self.message)
        if self.maximum is not None and field.data > self.maximum:
            raise ValidationError(self.message)


class AmountField(DecimalField):
    """Decimal field that coerces formatted monetary input to cents precision.

    Unlike :class:`wtforms.DecimalField` a value that cannot be parsed does
    not add its own error; ``data`` is left as ``None`` and the field
    validators decide the message.
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("places", 2)
        super().__init__(*args, **kwargs)

    def process_formdata(self, valuelist):
        if not valuelist:
            self.data = None
            return
        self.data = coerce_amount(valuelist[0])


class InvoiceForm(FlaskForm):
    customer_id = StringField(
        "Customer", validators=[DataRequired(message=CUSTOMER_REQUIRED_MESSAGE)]
    )
    amount = AmountField(
        "Amount",
        validators=[
            GreaterThan(
                Decimal("0"), AMOUNT_POSITIVE_MESSAGE, maximum=MAX_AMOUNT
            )
        ],
    )
    status = StringField(
        "Status",
        validators=[AnyOf(INVOICE_STATUSES, message=STATUS_CHOICE_MESSAGE)],
    )

    def wire_errors(self):
        """Return field errors keyed by the submitted form field names."""
        return {
            WIRE_FIELD_NAMES[name]: list(errors)
            for name, errors in self.errors.items()
            if name in WIRE_FIELD_NAMES
        }


class DeleteForm(FlaskForm):
    """Simple form used for CSRF protection on delete actions."""

    submit = SubmitField("Delete")
