"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from rental_agreement.api.rental_requests import router as rental_requests_router
from rental_agreement.api.rental_contracts import router as rental_contracts_router
from rental_agreement.api.payments import router as payments_router

api_router = APIRouter()
api_router.include_router(rental_requests_router)
api_router.include_router(rental_contracts_router)
api_router.include_router(payments_router)
