"""Factory Boy definition for :class:`app.models.pet.Pet`."""

from __future__ import annotations

from app.models.pet import Pet

import factory
from tests.factories import BaseFactory


class PetFactory(BaseFactory):
    """Build persisted pets paired with a tracker."""

    class Meta:
        model = Pet

    id = None  # let autoincrement handle it
    name = factory.Faker("first_name")
    device_id = factory.Sequence(lambda n: f"TRK-{n:06d}")
