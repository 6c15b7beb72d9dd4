"""Turns an accepted rental request into a contract.

This is the only place that links the two state machines: it checks the
request side and hands the validated request to the contract lifecycle, which
never reads the request store itself.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from rental_agreement.errors import NotFound, Forbidden, InvalidState
from rental_agreement.models import RentalContract, RequestStatus
from rental_agreement.schemas.rental_contract import ContractTerms, RentalContractCreate
from rental_agreement.services import contract_lifecycle, request_lifecycle
from rental_agreement.services.property_directory import PropertyDirectory


async def open_contract(
    db: AsyncSession,
    body: RentalContractCreate,
    actor: int,
    directory: PropertyDirectory,
) -> RentalContract:
    req = await request_lifecycle.get(db, body.request_id)
    if req.status is not RequestStatus.ACCEPTED:
        raise InvalidState(f"Rental request {req.id} is {req.status.value}, not ACCEPTED")
    if actor != req.tenant_id:
        raise Forbidden("Only the requesting tenant can open the contract")

    info = await directory.lookup(req.property_id)
    if not info.exists or info.owner_id is None:
        raise NotFound(f"Property {req.property_id} not found")

    terms = ContractTerms(owner_id=info.owner_id, **body.model_dump(exclude={"request_id"}))
    return await contract_lifecycle.create_from_accepted_request(db, req, terms)
