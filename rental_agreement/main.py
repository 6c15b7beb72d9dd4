"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rental_agreement.api.router import api_router
from rental_agreement.db.engine import create_tables, engine
from rental_agreement.errors import RentalError, PropertyLookupFailed
from rental_agreement.schemas import ErrorResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    yield
    await engine.dispose()


app = FastAPI(
    title="Rental Agreements",
    description="Rental request and contract lifecycle: requests, owner decisions, key handover and payment release.",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(api_router)


def _error_response(request: Request, status: int, error: str, message: str) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=status,
        error=error,
        message=message,
        path=request.url.path,
    )
    return JSONResponse(status_code=status, content=body.model_dump(mode="json"))


@app.exception_handler(RentalError)
async def rental_error_handler(request: Request, exc: RentalError):
    return _error_response(request, exc.status_code, exc.error, exc.reason)


@app.exception_handler(PropertyLookupFailed)
async def property_lookup_failed_handler(request: Request, exc: PropertyLookupFailed):
    logger.warning("Upstream property lookup failed on %s: %s", request.url.path, exc)
    return _error_response(request, exc.status_code, exc.error, str(exc))
