"""Closed status enumerations for requests, contracts and payments."""

from __future__ import annotations

import enum


class RequestStatus(str, enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


# Statuses that still occupy a property for the requesting tenant.
LIVE_REQUEST_STATUSES = frozenset({RequestStatus.PENDING, RequestStatus.ACCEPTED})

# Requests that may be deleted without orphaning a contract.
DELETABLE_REQUEST_STATUSES = frozenset({RequestStatus.PENDING, RequestStatus.REJECTED})

REQUEST_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.PENDING: frozenset({RequestStatus.ACCEPTED, RequestStatus.REJECTED}),
    RequestStatus.ACCEPTED: frozenset(),
    RequestStatus.REJECTED: frozenset(),
}


class ContractStatus(str, enum.Enum):
    PENDING_RESERVATION = "PENDING_RESERVATION"
    ACTIVE = "ACTIVE"


class PaymentType(str, enum.Enum):
    DEPOSIT = "DEPOSIT"
    RENT = "RENT"
