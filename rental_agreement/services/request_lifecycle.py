"""Rental request state machine.

    PENDING --accept--> ACCEPTED   (siblings PENDING for the property -> REJECTED)
    PENDING --reject--> REJECTED

ACCEPTED and REJECTED are terminal. Every mutation re-reads the row under the
property lock before deciding, so two overlapping accepts cannot both win.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from rental_agreement.db import crud
from rental_agreement.errors import NotFound, InvalidTransition, InvalidState
from rental_agreement.models import RentalRequest, RequestStatus
from rental_agreement.models.enums import REQUEST_TRANSITIONS, DELETABLE_REQUEST_STATUSES
from rental_agreement.services.consistency_guard import assert_no_live_request, reject_siblings
from rental_agreement.services.property_directory import PropertyDirectory
from rental_agreement.services.unit_of_work import locked_transaction, property_locks

logger = logging.getLogger(__name__)


async def _require(db: AsyncSession, request_id: str) -> RentalRequest:
    req = await crud.get_request(db, request_id, fresh=True)
    if req is None:
        raise NotFound(f"Rental request {request_id} not found")
    return req


async def create(
    db: AsyncSession, property_id: int, tenant_id: int, directory: PropertyDirectory,
) -> RentalRequest:
    """Open a PENDING request for (property, tenant)."""
    info = await directory.lookup(property_id)
    if not info.exists:
        raise NotFound(f"Property {property_id} not found")

    async with locked_transaction(db, property_locks, property_id):
        await assert_no_live_request(db, property_id, tenant_id)
        req = await crud.add_request(db, property_id, tenant_id)

    logger.info("Tenant %s requested property %s (request %s)", tenant_id, property_id, req.id)
    return req


async def transition(
    db: AsyncSession, request_id: str, target_status: RequestStatus, actor: int,
) -> RentalRequest:
    """Apply an owner decision to a PENDING request.

    Accepting rejects every other PENDING request for the same property in the
    same commit; if that fan-out fails nothing is committed.
    """
    target_status = RequestStatus(target_status)
    req = await _require(db, request_id)

    async with locked_transaction(db, property_locks, req.property_id):
        req = await _require(db, request_id)
        current = req.status
        if target_status not in REQUEST_TRANSITIONS[current]:
            raise InvalidTransition(current, target_status)
        if target_status is RequestStatus.ACCEPTED:
            await reject_siblings(db, req.property_id, req.id)
        req.status = target_status

    logger.info(
        "Request %s %s -> %s by user %s", req.id, current.value, target_status.value, actor,
    )
    return req


async def delete(db: AsyncSession, request_id: str, actor: int) -> None:
    """Remove a request that has not been accepted.

    ACCEPTED requests are kept: a contract may already have been produced from them.
    """
    req = await _require(db, request_id)

    async with locked_transaction(db, property_locks, req.property_id):
        req = await _require(db, request_id)
        if req.status not in DELETABLE_REQUEST_STATUSES:
            raise InvalidState(
                f"Rental request {request_id} is {req.status.value} and can no longer be deleted"
            )
        await db.delete(req)

    logger.info("Request %s deleted by user %s", request_id, actor)


# ── Reads ─────────────────────────────────────────────────

async def get(db: AsyncSession, request_id: str) -> RentalRequest:
    return await _require(db, request_id)


async def list_for_property(db: AsyncSession, property_id: int) -> list[RentalRequest]:
    return await crud.find_requests(db, property_id)


async def list_for_tenant(db: AsyncSession, tenant_id: int) -> list[RentalRequest]:
    return await crud.list_requests_for_tenant(db, tenant_id)


async def list_all(db: AsyncSession) -> list[RentalRequest]:
    return await crud.list_requests(db)
