"""Pydantic request/response schemas."""

from rental_agreement.schemas.rental_request import (
    RentalRequestCreate, RentalRequestRead, RentalRequestStatusUpdate,
)
from rental_agreement.schemas.rental_contract import (
    ContractTerms, RentalContractCreate, RentalContractRead, KeyDeliveryUpdate,
)
from rental_agreement.schemas.payment import PaymentCreate, PaymentRead
from rental_agreement.schemas.error import ErrorResponse

__all__ = [
    "RentalRequestCreate", "RentalRequestRead", "RentalRequestStatusUpdate",
    "ContractTerms", "RentalContractCreate", "RentalContractRead", "KeyDeliveryUpdate",
    "PaymentCreate", "PaymentRead",
    "ErrorResponse",
]
