"""Payment schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from backend.app.schemas.pagination import Page


class PaymentFilters(BaseModel):
    """Optional constraints for one payments listing request."""

    recipient: Optional[str] = None
    scheduled_date_from: Optional[date] = None
    scheduled_date_to: Optional[date] = None
    limit: Optional[int] = None
    offset: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class PaymentCreate(BaseModel):
    amount: Decimal
    currency: str = Field(min_length=3, max_length=3)
    scheduled_date: date
    recipient: str = Field(min_length=1, max_length=255)
    status: str = Field(default="pending", min_length=1, max_length=50)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaymentItem(BaseModel):
    id: str
    amount: Decimal
    currency: str
    scheduled_date: date
    recipient: str
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


PaymentPage = Page[PaymentItem]
