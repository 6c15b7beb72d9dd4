"""Rental contract state machine.

    PENDING_RESERVATION --confirm_key_delivery(True)--> ACTIVE

Activation sets ``is_key_delivered`` and ``is_payment_released`` in the same
commit; nothing else ever touches those flags. ACTIVE is terminal here.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rental_agreement.db import crud
from rental_agreement.errors import NotFound, Conflict, Forbidden, InvalidState
from rental_agreement.models import RentalContract, RentalRequest, ContractStatus
from rental_agreement.schemas.rental_contract import ContractTerms
from rental_agreement.services.unit_of_work import (
    locked_transaction, property_locks, contract_locks,
)

logger = logging.getLogger(__name__)


async def _require(db: AsyncSession, contract_id: str) -> RentalContract:
    contract = await crud.get_contract(db, contract_id, fresh=True)
    if contract is None:
        raise NotFound(f"Rental contract {contract_id} not found")
    return contract


async def create_from_accepted_request(
    db: AsyncSession, accepted_request: RentalRequest, terms: ContractTerms,
) -> RentalContract:
    """Produce a PENDING_RESERVATION contract for an already-accepted request.

    The caller is responsible for having checked that the request is ACCEPTED.
    """
    async with locked_transaction(db, property_locks, accepted_request.property_id):
        if await crud.find_contract_by_request(db, accepted_request.id):
            raise Conflict(f"Rental request {accepted_request.id} already has a contract")
        if await crud.find_contract_by_agreement(db, terms.agreement_id_on_chain):
            raise Conflict(f"Agreement {terms.agreement_id_on_chain} is already recorded")

        contract = RentalContract(
            agreement_id_on_chain=terms.agreement_id_on_chain,
            request_id=accepted_request.id,
            owner_id=terms.owner_id,
            tenant_id=accepted_request.tenant_id,
            property_id=accepted_request.property_id,
            security_deposit=terms.security_deposit,
            rent_per_month=terms.rent_per_month,
            start_date=terms.start_date,
            end_date=terms.end_date,
            is_key_delivered=False,
            is_payment_released=False,
            state=ContractStatus.PENDING_RESERVATION,
        )
        db.add(contract)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict("A contract for this request or agreement already exists") from e

    logger.info(
        "Contract %s opened for request %s (property %s, tenant %s)",
        contract.id, accepted_request.id, contract.property_id, contract.tenant_id,
    )
    return contract


async def confirm_key_delivery(
    db: AsyncSession, contract_id: str, delivered: bool, actor: int,
) -> RentalContract:
    """Tenant confirms key handover; activates the contract and releases the first payment.

    Confirming an already-delivered contract returns it unchanged. ``delivered=False``
    on a reserved contract is accepted and changes nothing.
    """
    async with locked_transaction(db, contract_locks, contract_id):
        contract = await _require(db, contract_id)
        if actor != contract.tenant_id:
            raise Forbidden("Only the tenant is authorized to confirm key delivery")
        if delivered and contract.is_key_delivered:
            return contract
        if contract.state is not ContractStatus.PENDING_RESERVATION:
            raise InvalidState(
                f"Contract {contract_id} is {contract.state.value}, not PENDING_RESERVATION"
            )
        if not delivered:
            # TODO: confirm with product whether withdrawing a confirmation should be rejected
            logger.info("Key delivery for contract %s left unconfirmed by tenant %s", contract_id, actor)
            return contract

        contract.is_key_delivered = True
        contract.state = ContractStatus.ACTIVE
        contract.is_payment_released = True

    logger.info("Contract %s activated: keys delivered, first payment released", contract_id)
    return contract


# ── Reads ─────────────────────────────────────────────────

async def get(db: AsyncSession, contract_id: str) -> RentalContract:
    return await _require(db, contract_id)


async def list_for_user(db: AsyncSession, user_id: int) -> list[RentalContract]:
    """Contracts where the user is either the owner or the tenant."""
    return await crud.list_contracts_for_user(db, user_id)
