from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from rental_agreement.models import RequestStatus, PaymentType
from rental_agreement.schemas import (
    RentalRequestCreate,
    RentalRequestStatusUpdate,
    RentalContractCreate,
    KeyDeliveryUpdate,
    PaymentCreate,
)


def test_rental_request_create_valid():
    body = RentalRequestCreate(property_id=5)
    assert body.property_id == 5


def test_status_update_parses_enum():
    body = RentalRequestStatusUpdate(status="ACCEPTED")
    assert body.status is RequestStatus.ACCEPTED


def test_status_update_rejects_unknown_status():
    with pytest.raises(ValidationError):
        RentalRequestStatusUpdate(status="MAYBE")


def test_contract_create_valid():
    body = RentalContractCreate(
        request_id="01ABC",
        agreement_id_on_chain=1,
        security_deposit="500.00",
        rent_per_month="250.50",
        start_date="2024-01-01",
        end_date="2024-12-31",
    )
    assert body.rent_per_month == Decimal("250.50")
    assert body.start_date == date(2024, 1, 1)


def test_contract_create_rejects_inverted_dates():
    with pytest.raises(ValidationError):
        RentalContractCreate(
            request_id="01ABC",
            agreement_id_on_chain=1,
            security_deposit="500.00",
            rent_per_month="250.00",
            start_date="2024-12-31",
            end_date="2024-01-01",
        )


def test_key_delivery_update():
    assert KeyDeliveryUpdate(is_key_delivered=True).is_key_delivered is True


def test_payment_create_defaults_to_rent():
    body = PaymentCreate(contract_id="01ABC", amount="100.00", tx_hash="0x1")
    assert body.payment_type is PaymentType.RENT
    assert body.paid_at is None


def test_payment_create_rejects_zero_amount():
    with pytest.raises(ValidationError):
        PaymentCreate(contract_id="01ABC", amount="0", tx_hash="0x1")
