"""Query and insert helpers for requests, contracts and payments.

Unlike a plain CRUD layer these helpers never commit: the lifecycle services
own the unit of work and decide when it is committed or rolled back.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from rental_agreement.models import (
    RentalRequest, RentalContract, Payment, RequestStatus,
)


# ── RentalRequest ─────────────────────────────────────────

async def get_request(db: AsyncSession, request_id: str, *, fresh: bool = False) -> RentalRequest | None:
    """Load a request; ``fresh`` bypasses the identity map and re-reads the row."""
    if not fresh:
        return await db.get(RentalRequest, request_id)
    result = await db.execute(
        select(RentalRequest)
        .where(RentalRequest.id == request_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def find_requests(
    db: AsyncSession,
    property_id: int,
    *,
    tenant_id: int | None = None,
    statuses: Iterable[RequestStatus] | None = None,
) -> list[RentalRequest]:
    stmt = select(RentalRequest).where(RentalRequest.property_id == property_id)
    if tenant_id is not None:
        stmt = stmt.where(RentalRequest.tenant_id == tenant_id)
    if statuses is not None:
        stmt = stmt.where(RentalRequest.status.in_(list(statuses)))
    result = await db.execute(
        stmt.order_by(RentalRequest.created_at).execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def list_requests_for_tenant(db: AsyncSession, tenant_id: int) -> list[RentalRequest]:
    result = await db.execute(
        select(RentalRequest)
        .where(RentalRequest.tenant_id == tenant_id)
        .order_by(RentalRequest.created_at.desc())
    )
    return list(result.scalars().all())


async def list_requests(db: AsyncSession) -> list[RentalRequest]:
    result = await db.execute(select(RentalRequest).order_by(RentalRequest.created_at.desc()))
    return list(result.scalars().all())


async def add_request(db: AsyncSession, property_id: int, tenant_id: int) -> RentalRequest:
    req = RentalRequest(property_id=property_id, tenant_id=tenant_id, status=RequestStatus.PENDING)
    db.add(req)
    await db.flush()
    return req


# ── RentalContract ────────────────────────────────────────

async def get_contract(db: AsyncSession, contract_id: str, *, fresh: bool = False) -> RentalContract | None:
    if not fresh:
        return await db.get(RentalContract, contract_id)
    result = await db.execute(
        select(RentalContract)
        .where(RentalContract.id == contract_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def find_contract_by_agreement(db: AsyncSession, agreement_id_on_chain: int) -> RentalContract | None:
    result = await db.execute(
        select(RentalContract).where(RentalContract.agreement_id_on_chain == agreement_id_on_chain)
    )
    return result.scalars().first()


async def find_contract_by_request(db: AsyncSession, request_id: str) -> RentalContract | None:
    result = await db.execute(select(RentalContract).where(RentalContract.request_id == request_id))
    return result.scalars().first()


async def list_contracts_for_user(db: AsyncSession, user_id: int) -> list[RentalContract]:
    result = await db.execute(
        select(RentalContract)
        .where(or_(RentalContract.owner_id == user_id, RentalContract.tenant_id == user_id))
        .order_by(RentalContract.created_at.desc())
    )
    return list(result.scalars().all())


# ── Payment ───────────────────────────────────────────────

async def get_payment(db: AsyncSession, payment_id: str) -> Payment | None:
    return await db.get(Payment, payment_id)


async def find_payment_by_tx_hash(db: AsyncSession, tx_hash: str) -> Payment | None:
    result = await db.execute(select(Payment).where(Payment.tx_hash == tx_hash))
    return result.scalars().first()


async def list_payments_for_contract(db: AsyncSession, contract_id: str) -> list[Payment]:
    result = await db.execute(
        select(Payment)
        .where(Payment.contract_id == contract_id)
        .order_by(Payment.paid_at, Payment.id)
    )
    return list(result.scalars().all())
