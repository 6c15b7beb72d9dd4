from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field

from rental_agreement.models.enums import PaymentType


class PaymentCreate(BaseModel):
    contract_id: str
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    tx_hash: str = Field(min_length=1, max_length=100)
    payment_type: PaymentType = PaymentType.RENT
    paid_at: datetime | None = None


class PaymentRead(BaseModel):
    id: str
    contract_id: str
    amount: Decimal
    tx_hash: str
    payment_type: PaymentType
    paid_at: datetime
    created_at: datetime

    model_config = {"from_attributes": True}
