"""Payment records reported back by the external ledger.

Payments are facts about a contract, never inputs to its state machine: this
module appends and reads them, it does not compute amounts or move funds.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rental_agreement.db import crud
from rental_agreement.errors import NotFound, Conflict, Forbidden
from rental_agreement.models import Payment, PaymentType, RentalContract
from rental_agreement.models.base import utcnow
from rental_agreement.services.unit_of_work import locked_transaction, contract_locks

logger = logging.getLogger(__name__)


async def _contract_for(db: AsyncSession, contract_id: str, actor: int | None = None) -> RentalContract:
    contract = await crud.get_contract(db, contract_id)
    if contract is None:
        raise NotFound(f"Rental contract {contract_id} not found")
    if actor is not None and not contract.is_party(actor):
        raise Forbidden("Only the owner or tenant of the contract can view its payments")
    return contract


async def record_payment(
    db: AsyncSession,
    contract_id: str,
    amount: Decimal,
    tx_hash: str,
    payment_type: PaymentType = PaymentType.RENT,
    paid_at: datetime | None = None,
) -> Payment:
    async with locked_transaction(db, contract_locks, contract_id):
        await _contract_for(db, contract_id)
        if await crud.find_payment_by_tx_hash(db, tx_hash):
            raise Conflict(f"Payment {tx_hash} is already recorded")

        payment = Payment(
            contract_id=contract_id,
            amount=amount,
            tx_hash=tx_hash,
            payment_type=PaymentType(payment_type),
            paid_at=paid_at or utcnow(),
        )
        db.add(payment)
        try:
            await db.flush()
        except IntegrityError as e:
            raise Conflict(f"Payment {tx_hash} is already recorded") from e

    logger.info("Recorded %s payment %s of %s on contract %s", payment.payment_type.value, tx_hash, amount, contract_id)
    return payment


async def get_payment(db: AsyncSession, payment_id: str, actor: int) -> Payment:
    payment = await crud.get_payment(db, payment_id)
    if payment is None:
        raise NotFound(f"Payment {payment_id} not found")
    await _contract_for(db, payment.contract_id, actor)
    return payment


async def list_for_contract(db: AsyncSession, contract_id: str, actor: int) -> list[Payment]:
    await _contract_for(db, contract_id, actor)
    return await crud.list_payments_for_contract(db, contract_id)
