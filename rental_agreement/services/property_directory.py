"""Client for the remote property catalog.

The lifecycle only needs to know whether a property exists and who owns it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from rental_agreement.errors import PropertyLookupFailed

logger = logging.getLogger(__name__)

PROPERTY_PATH = "/api/property-microservice/properties/{property_id}"


@dataclass(frozen=True)
class PropertyInfo:
    property_id: int
    exists: bool
    owner_id: int | None = None


class PropertyDirectory(Protocol):
    async def lookup(self, property_id: int) -> PropertyInfo: ...


class HttpPropertyDirectory:
    """Looks properties up over HTTP. A 404 means the property does not exist."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def lookup(self, property_id: int) -> PropertyInfo:
        url = self._base_url + PROPERTY_PATH.format(property_id=property_id)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                r = await client.get(url)
        except httpx.HTTPError as e:
            logger.warning("Property lookup for %s failed: %s", property_id, e)
            raise PropertyLookupFailed(f"Property service unreachable: {e}") from e

        if r.status_code == 404:
            return PropertyInfo(property_id=property_id, exists=False)
        if r.status_code >= 400:
            logger.warning("Property lookup for %s returned HTTP %s", property_id, r.status_code)
            raise PropertyLookupFailed(f"Property service returned HTTP {r.status_code}")

        try:
            data = r.json()
            owner_id = data.get("ownerId")
            return PropertyInfo(
                property_id=int(data.get("idProperty", property_id)),
                exists=True,
                owner_id=int(owner_id) if owner_id is not None else None,
            )
        except (ValueError, TypeError, AttributeError) as e:
            raise PropertyLookupFailed(f"Malformed property payload for {property_id}") from e
