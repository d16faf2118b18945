"""Payment queries: filter translation, paged fetch and recipient lookup."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import DisconnectionError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from backend.app.core.exceptions import StorageError, StorageUnavailable
from backend.app.core.logging import get_logger
from backend.app.models.payment import Payment
from backend.app.schemas.payment import PaymentCreate, PaymentFilters

logger = get_logger(__name__)

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0


@dataclass(frozen=True)
class PaymentQuerySpec:
    recipient_terms: Tuple[str, ...] = ()
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET


def parse_recipient_terms(raw: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated recipient filter into trimmed, non-empty terms."""
    if not raw:
        return ()
    return tuple(term.strip() for term in raw.split(",") if term.strip())


def build_payment_query(filters: PaymentFilters, default_limit: int = DEFAULT_LIMIT) -> PaymentQuerySpec:
    """Translate request filters into predicates and pagination, with defaults for falsy values."""
    return PaymentQuerySpec(
        recipient_terms=parse_recipient_terms(filters.recipient),
        date_from=filters.scheduled_date_from,
        date_to=filters.scheduled_date_to,
        limit=filters.limit or default_limit,
        offset=filters.offset or DEFAULT_OFFSET,
    )


def apply_payment_filters(query: Query, spec: PaymentQuerySpec) -> Query:
    if spec.recipient_terms:
        query = query.filter(
            or_(*[Payment.recipient.icontains(term, autoescape=True) for term in spec.recipient_terms])
        )
    if spec.date_from is not None:
        query = query.filter(Payment.scheduled_date >= spec.date_from)
    if spec.date_to is not None:
        query = query.filter(Payment.scheduled_date <= spec.date_to)
    return query


def _storage_error(exc: SQLAlchemyError) -> StorageError:
    if isinstance(exc, (OperationalError, DisconnectionError)):
        return StorageUnavailable("Payment store is unavailable")
    return StorageError("Payment store query failed")


class CRUDPayment:
    def get_page(self, db: Session, *, spec: PaymentQuerySpec) -> Tuple[List[Payment], int]:
        try:
            query = apply_payment_filters(db.query(Payment), spec)
            total = query.count()
            items = (
                query.order_by(Payment.scheduled_date.desc(), Payment.id.asc())
                .offset(spec.offset)
                .limit(spec.limit)
                .all()
            )
        except SQLAlchemyError as exc:
            raise _storage_error(exc) from exc
        logger.debug(
            "Fetched %d of %d payments (terms=%s, from=%s, to=%s, limit=%d, offset=%d)",
            len(items),
            total,
            spec.recipient_terms,
            spec.date_from,
            spec.date_to,
            spec.limit,
            spec.offset,
        )
        return items, total

    def get_unique_recipients(self, db: Session) -> List[str]:
        try:
            rows = db.query(Payment.recipient).distinct().order_by(Payment.recipient.asc()).all()
        except SQLAlchemyError as exc:
            raise _storage_error(exc) from exc
        return [row[0] for row in rows]

    def count(self, db: Session) -> int:
        try:
            return db.query(Payment).count()
        except SQLAlchemyError as exc:
            raise _storage_error(exc) from exc

    def create_many(self, db: Session, *, objs_in: List[PaymentCreate]) -> List[Payment]:
        objs = [Payment(**obj_in.model_dump()) for obj_in in objs_in]
        db.add_all(objs)
        db.commit()
        for obj in objs:
            db.refresh(obj)
        return objs


payment_crud = CRUDPayment()
