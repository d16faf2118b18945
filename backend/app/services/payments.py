"""Payment listing service: shapes stored rows into the public page contract."""

from typing import List

from sqlalchemy.orm import Session

from backend.app.core.logging import get_logger
from backend.app.core.settings import get_settings
from backend.app.crud.crud_payment import build_payment_query, payment_crud
from backend.app.models.payment import Payment
from backend.app.schemas.payment import PaymentFilters, PaymentItem, PaymentPage

logger = get_logger(__name__)


def to_payment_item(payment: Payment) -> PaymentItem:
    """Project a stored row onto the public fields only."""
    return PaymentItem(
        id=str(payment.id),
        amount=payment.amount,
        currency=payment.currency,
        scheduled_date=payment.scheduled_date,
        recipient=payment.recipient,
        status=payment.status,
        created_at=payment.created_at,
        updated_at=payment.updated_at,
    )


def get_payments(db: Session, filters: PaymentFilters) -> PaymentPage:
    spec = build_payment_query(filters, default_limit=get_settings().default_page_size)
    rows, total = payment_crud.get_page(db, spec=spec)
    items = [to_payment_item(row) for row in rows]
    logger.debug("Returning %d payments (total=%d)", len(items), total)
    return PaymentPage.build(items, total=total, limit=spec.limit, offset=spec.offset)


def get_unique_recipients(db: Session) -> List[str]:
    return payment_crud.get_unique_recipients(db)
