import os
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from backend.app.core.logging import configure_logging, get_logger
from backend.app.core.settings import get_settings
from backend.app.crud.crud_payment import payment_crud
from backend.app.schemas.payment import PaymentCreate

logger = get_logger(__name__)

DEMO_PAYMENTS = [
    PaymentCreate(amount=Decimal("2500.00"), currency="USD", scheduled_date=date(2025, 9, 15), recipient="John Doe"),
    PaymentCreate(amount=Decimal("5000.00"), currency="USD", scheduled_date=date(2025, 7, 26), recipient="John Doe"),
    PaymentCreate(amount=Decimal("7500.00"), currency="USD", scheduled_date=date(2025, 7, 25), recipient="Jane Smith"),
    PaymentCreate(amount=Decimal("1000.00"), currency="USD", scheduled_date=date(2024, 12, 1), recipient="Bob Wilson"),
    PaymentCreate(amount=Decimal("1250.50"), currency="EUR", scheduled_date=date(2025, 8, 1), recipient="Acme Corp", status="processing"),
    PaymentCreate(amount=Decimal("320.00"), currency="GBP", scheduled_date=date(2025, 6, 30), recipient="Jane Smith", status="completed"),
]


def ensure_demo_payments(db: Session, force: bool = False) -> int:
    """
    Insert demo payments for local development when the table is empty.
    Skips execution when running under pytest unless forced.
    Returns the number of rows inserted.
    """
    if os.getenv("PYTEST_CURRENT_TEST") and not force:
        return 0
    if payment_crud.count(db) > 0:
        return 0

    created = payment_crud.create_many(db, objs_in=DEMO_PAYMENTS)
    logger.info("Seeded %d demo payments", len(created))
    return len(created)


if __name__ == "__main__":
    from backend.app.db.base import Base
    from backend.app.db.session import SessionLocal, engine

    settings = get_settings()
    configure_logging(settings.log_level, settings.json_logs)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_demo_payments(db, force=True)
    finally:
        db.close()
