import uuid

from dashboard import db

INVOICE_STATUSES = ("pending", "paid")


def generate_invoice_id() -> str:
    return str(uuid.uuid4())


class Invoice(db.Model):
    __tablename__ = "invoices"

    id = db.Column(
        db.String(36), primary_key=True, default=generate_invoice_id
    )
    customer_id = db.Column(db.String(255), nullable=False, index=True)
    # Stored in cents to avoid floating point currency values
    amount = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), nullable=False)
    date = db.Column(db.Date, nullable=False, index=True)

    __table_args__ = (
        db.CheckConstraint("amount > 0", name="ck_invoices_amount_positive"),
        db.CheckConstraint(
            "status IN ('pending', 'paid')", name="ck_invoices_status"
        ),
    )

    def __repr__(self):
        return f"<Invoice {self.id} {self.status} {self.amount}>"
