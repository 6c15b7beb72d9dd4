from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel

from rental_agreement.models.enums import RequestStatus


class RentalRequestCreate(BaseModel):
    property_id: int


class RentalRequestStatusUpdate(BaseModel):
    status: RequestStatus


class RentalRequestRead(BaseModel):
    id: str
    property_id: int
    tenant_id: int
    status: RequestStatus
    created_at: datetime

    model_config = {"from_attributes": True}
