from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rental_agreement.db.engine import get_db
from rental_agreement.dependencies import require_auth, get_property_directory
from rental_agreement.schemas import RentalContractCreate, RentalContractRead, KeyDeliveryUpdate
from rental_agreement.services import contract_lifecycle
from rental_agreement.services.auth import AuthContext
from rental_agreement.services.contract_orchestrator import open_contract
from rental_agreement.services.property_directory import PropertyDirectory

router = APIRouter(prefix="/api/rental-contracts", tags=["rental_contracts"])


@router.post("", response_model=RentalContractRead, status_code=201)
async def create_contract(
    body: RentalContractCreate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
    directory: PropertyDirectory = Depends(get_property_directory),
):
    return await open_contract(db, body, auth.user_id, directory)


@router.get("", response_model=list[RentalContractRead])
async def list_my_contracts(
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    return await contract_lifecycle.list_for_user(db, auth.user_id)


@router.get("/{contract_id}", response_model=RentalContractRead)
async def get_contract(
    contract_id: str,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    return await contract_lifecycle.get(db, contract_id)


@router.put("/{contract_id}/key-delivery", response_model=RentalContractRead)
async def update_key_delivery(
    contract_id: str,
    body: KeyDeliveryUpdate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    return await contract_lifecycle.confirm_key_delivery(
        db, contract_id, body.is_key_delivered, auth.user_id,
    )
