"""Pet repository (device pairing lookups)."""

from __future__ import annotations

from app.models.pet import Pet
from app.repositories.base import BaseRepository


class PetRepository(BaseRepository[Pet]):
    """Persistence-only repository for :class:`Pet`."""

    model = Pet

    def _filterable_fields(self):
        return {"device_id": Pet.device_id}

    def get_by_device_id(self, device_id: str) -> Pet | None:
        """Return the pet paired with ``device_id`` or ``None``."""
        return self.find_one(device_id=device_id)
