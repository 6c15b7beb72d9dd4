"""Invariants that span several requests for the same property.

Both checks assume the caller already holds ``property_locks[property_id]``
inside a ``locked_transaction``; they flush but never commit.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from rental_agreement.db import crud
from rental_agreement.errors import Conflict
from rental_agreement.models import RentalRequest, RequestStatus
from rental_agreement.models.enums import LIVE_REQUEST_STATUSES

logger = logging.getLogger(__name__)


async def assert_no_live_request(db: AsyncSession, property_id: int, tenant_id: int) -> None:
    """Raise Conflict if the tenant already holds a PENDING or ACCEPTED request for the property."""
    live = await crud.find_requests(
        db, property_id, tenant_id=tenant_id, statuses=LIVE_REQUEST_STATUSES,
    )
    if live:
        raise Conflict(
            f"Tenant {tenant_id} already has a {live[0].status.value} request "
            f"for property {property_id}"
        )


async def reject_siblings(
    db: AsyncSession, property_id: int, accepting_request_id: str,
) -> list[RentalRequest]:
    """Move every other PENDING request for the property to REJECTED."""
    pending = await crud.find_requests(db, property_id, statuses=[RequestStatus.PENDING])
    rejected = []
    for req in pending:
        if req.id == accepting_request_id:
            continue
        req.status = RequestStatus.REJECTED
        rejected.append(req)
    await db.flush()
    if rejected:
        logger.info(
            "Rejected %d sibling request(s) for property %s after accepting %s",
            len(rejected), property_id, accepting_request_id,
        )
    return rejected
