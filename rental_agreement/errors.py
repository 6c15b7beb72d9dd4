"""Lifecycle error kinds raised by the rental state machines.

Each kind carries a human-readable reason. ``status_code`` is only consulted
by the HTTP adapter in ``rental_agreement.main``; the services never look at it.
"""

from __future__ import annotations


class RentalError(Exception):
    """Base class for business-rule violations. Never retried."""

    status_code = 400
    error = "bad_request"

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class NotFound(RentalError):
    status_code = 404
    error = "not_found"


class Conflict(RentalError):
    """A live duplicate already exists."""

    status_code = 409
    error = "conflict"


class InvalidTransition(RentalError):
    """The requested status change is not defined from the current status."""

    status_code = 422
    error = "invalid_transition"

    def __init__(self, current, target):
        super().__init__(f"Cannot transition from {current.value} to {target.value}")
        self.current = current
        self.target = target


class InvalidState(RentalError):
    """The operation is not permitted at the current lifecycle stage."""

    status_code = 409
    error = "invalid_state"


class Forbidden(RentalError):
    status_code = 403
    error = "forbidden"


class PropertyLookupFailed(Exception):
    """The property directory could not be reached or answered garbage."""

    status_code = 502
    error = "bad_gateway"
