"""Device pairing lookups backing device login."""

from __future__ import annotations

from app.services._shared.base import BaseService
from app.services._shared.ports import DeviceDirectory, PairedPet


class PetDeviceDirectory(BaseService, DeviceDirectory):
    """Resolve a tracker's hardware id to the pet it is paired with."""

    def find_by_device_id(self, device_id: str) -> PairedPet | None:
        """
        Look up the pet paired with ``device_id``.

        :param device_id: Hardware identifier sent by the tracker.
        :type device_id: str
        :returns: Paired pet, or ``None`` when the device is unknown.
        :rtype: PairedPet | None
        """
        with self.rw_uow() as uow:
            pet = uow.pets.get_by_device_id(device_id)
            if pet is None:
                return None
            return PairedPet(pet_id=pet.id, device_id=device_id)
