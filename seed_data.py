from datetime import date, timedelta

from dashboard import create_app, db
from dashboard.models import Invoice

SAMPLE_INVOICES = [
    ("3958dc9e-712f-4377-85e9-fec4b6a6442a", 15795, "pending", 0),
    ("3958dc9e-742f-4377-85e9-fec4b6a6442a", 20348, "pending", 3),
    ("3958dc9e-737f-4377-85e9-fec4b6a6442a", 3040, "paid", 12),
    ("50ca3e18-62cd-11ee-8c99-0242ac120002", 44800, "paid", 30),
    ("76d65c26-f784-44a2-ac19-586678f7c2f2", 34577, "pending", 45),
]


def seed_initial_data() -> None:
    """Create the invoices table and add sample rows when it is empty."""
    app = create_app(["--demo"])
    with app.app_context():
        if Invoice.query.count():
            print("Invoices already present, nothing to seed.")
            return
        today = date.today()
        db.session.add_all(
            Invoice(
                customer_id=customer_id,
                amount=amount,
                status=status,
                date=today - timedelta(days=age_days),
            )
            for customer_id, amount, status, age_days in SAMPLE_INVOICES
        )
        db.session.commit()
        print(f"Seeded {len(SAMPLE_INVOICES)} invoices.")


if __name__ == "__main__":
    seed_initial_data()
