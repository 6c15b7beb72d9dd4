"""SQLAlchemy ORM models."""

from rental_agreement.models.base import Base
from rental_agreement.models.enums import RequestStatus, ContractStatus, PaymentType
from rental_agreement.models.rental_request import RentalRequest
from rental_agreement.models.rental_contract import RentalContract
from rental_agreement.models.payment import Payment

__all__ = [
    "Base",
    "RequestStatus", "ContractStatus", "PaymentType",
    "RentalRequest", "RentalContract", "Payment",
]
