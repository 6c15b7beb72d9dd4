from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from rental_agreement.db.engine import get_db
from rental_agreement.dependencies import require_auth, get_property_directory
from rental_agreement.schemas import RentalRequestCreate, RentalRequestRead, RentalRequestStatusUpdate
from rental_agreement.services import request_lifecycle
from rental_agreement.services.auth import AuthContext
from rental_agreement.services.property_directory import PropertyDirectory

router = APIRouter(prefix="/api/rental-requests", tags=["rental_requests"])


@router.post("", response_model=RentalRequestRead, status_code=201)
async def create_request(
    body: RentalRequestCreate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
    directory: PropertyDirectory = Depends(get_property_directory),
):
    return await request_lifecycle.create(db, body.property_id, auth.user_id, directory)


@router.get("", response_model=list[RentalRequestRead])
async def list_requests(
    property_id: int | None = None,
    tenant_id: int | None = None,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    if property_id is not None:
        requests = await request_lifecycle.list_for_property(db, property_id)
        if tenant_id is not None:
            requests = [r for r in requests if r.tenant_id == tenant_id]
        return requests
    if tenant_id is not None:
        return await request_lifecycle.list_for_tenant(db, tenant_id)
    return await request_lifecycle.list_all(db)


@router.get("/{request_id}", response_model=RentalRequestRead)
async def get_request(
    request_id: str,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    return await request_lifecycle.get(db, request_id)


@router.put("/{request_id}/status", response_model=RentalRequestRead)
async def update_request_status(
    request_id: str,
    body: RentalRequestStatusUpdate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    return await request_lifecycle.transition(db, request_id, body.status, auth.user_id)


@router.delete("/{request_id}", status_code=204)
async def delete_request(
    request_id: str,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    await request_lifecycle.delete(db, request_id, auth.user_id)
    return Response(status_code=204)
