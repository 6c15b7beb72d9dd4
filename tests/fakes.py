"""In-memory stand-ins for the remote collaborators."""

from __future__ import annotations

from rental_agreement.services.property_directory import PropertyInfo


class FakePropertyDirectory:
    """Property catalog backed by a {property_id: owner_id} dict."""

    def __init__(self, owners: dict[int, int] | None = None):
        self.owners = dict(owners or {})
        self.lookups: list[int] = []

    async def lookup(self, property_id: int) -> PropertyInfo:
        self.lookups.append(property_id)
        if property_id not in self.owners:
            return PropertyInfo(property_id=property_id, exists=False)
        return PropertyInfo(property_id=property_id, exists=True, owner_id=self.owners[property_id])
