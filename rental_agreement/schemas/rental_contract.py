"""Contract schemas: creation terms, API bodies and the read model."""

from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel, Field, model_validator

from rental_agreement.models.enums import ContractStatus


class _TermsBase(BaseModel):
    agreement_id_on_chain: int
    security_deposit: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    rent_per_month: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def _start_not_after_end(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class ContractTerms(_TermsBase):
    """Everything a contract carries beyond what its accepted request provides."""

    owner_id: int


class RentalContractCreate(_TermsBase):
    request_id: str


class KeyDeliveryUpdate(BaseModel):
    is_key_delivered: bool


class RentalContractRead(BaseModel):
    id: str
    agreement_id_on_chain: int
    request_id: str
    owner_id: int
    tenant_id: int
    property_id: int
    security_deposit: Decimal
    rent_per_month: Decimal
    start_date: date
    end_date: date
    is_key_delivered: bool
    is_payment_released: bool
    state: ContractStatus
    created_at: datetime

    model_config = {"from_attributes": True}
