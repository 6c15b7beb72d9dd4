"""Payment history endpoints.

``POST /api/payments`` is meant for the ledger listener reporting settled
transactions, not for end users.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rental_agreement.db.engine import get_db
from rental_agreement.dependencies import require_auth
from rental_agreement.schemas import PaymentCreate, PaymentRead
from rental_agreement.services import payment_ledger
from rental_agreement.services.auth import AuthContext

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post("", response_model=PaymentRead, status_code=201)
async def create_payment(
    body: PaymentCreate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    return await payment_ledger.record_payment(
        db, body.contract_id, body.amount, body.tx_hash, body.payment_type, body.paid_at,
    )


@router.get("/contract/{contract_id}", response_model=list[PaymentRead])
async def get_payment_history(
    contract_id: str,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    return await payment_ledger.list_for_contract(db, contract_id, auth.user_id)


@router.get("/{payment_id}", response_model=PaymentRead)
async def get_payment(
    payment_id: str,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    return await payment_ledger.get_payment(db, payment_id, auth.user_id)
