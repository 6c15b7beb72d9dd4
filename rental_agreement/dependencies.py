"""FastAPI dependency providers for settings, caller identity and the property directory."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Request

from rental_agreement.config import Settings, get_settings
from rental_agreement.services.auth import AuthContext, get_current_user
from rental_agreement.services.property_directory import HttpPropertyDirectory, PropertyDirectory


@lru_cache
def get_settings_dep() -> Settings:
    return get_settings()


async def require_auth(request: Request) -> AuthContext:
    """Require a gateway-asserted caller identity. Returns AuthContext."""
    return get_current_user(request)


@lru_cache
def get_property_directory() -> PropertyDirectory:
    settings = get_settings_dep()
    return HttpPropertyDirectory(
        settings.property_service.url,
        timeout=settings.property_service.timeout_seconds,
    )
