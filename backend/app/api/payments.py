"""Payment listing endpoints."""

import re
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.exceptions import RequestValidationError
from sqlalchemy.orm import Session

from backend.app.db.session import get_db
from backend.app.schemas.payment import PaymentFilters, PaymentPage
from backend.app.services import payments as payments_service

router = APIRouter(prefix="/payments", tags=["payments"])

# Largest value bound as a signed 32-bit SQL integer.
MAX_QUERY_INT = 2**31 - 1

ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}(?:$|[T ])")


def parse_iso_date(value: str) -> date:
    """Parse an ISO-8601 calendar date, or the date part of an ISO-8601 datetime."""
    if not ISO_DATE_PREFIX.match(value):
        raise ValueError(f"{value!r} is not an ISO-8601 date")
    if len(value) == 10:
        return date.fromisoformat(value)
    return datetime.fromisoformat(value).date()


def _date_param(value: Optional[str], name: str) -> Optional[date]:
    if value is None:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise RequestValidationError(
            [
                {
                    "type": "date_parsing",
                    "loc": ("query", name),
                    "msg": f"{name} must be an ISO-8601 date string",
                    "input": value,
                }
            ]
        )


def get_payment_filters(
    recipient: Optional[str] = Query(None, description="Recipient name, comma-separated for several"),
    scheduled_date_from: Optional[str] = Query(None, alias="scheduledDateFrom"),
    scheduled_date_to: Optional[str] = Query(None, alias="scheduledDateTo"),
    limit: Optional[int] = Query(None, ge=0, le=MAX_QUERY_INT),
    offset: Optional[int] = Query(None, ge=0, le=MAX_QUERY_INT),
) -> PaymentFilters:
    return PaymentFilters(
        recipient=recipient,
        scheduled_date_from=_date_param(scheduled_date_from, "scheduledDateFrom"),
        scheduled_date_to=_date_param(scheduled_date_to, "scheduledDateTo"),
        limit=limit,
        offset=offset,
    )


@router.get("", response_model=PaymentPage)
def list_payments(
    filters: PaymentFilters = Depends(get_payment_filters),
    db: Session = Depends(get_db),
):
    return payments_service.get_payments(db, filters)


@router.get("/recipients", response_model=List[str])
def list_recipients(db: Session = Depends(get_db)):
    return payments_service.get_unique_recipients(db)
