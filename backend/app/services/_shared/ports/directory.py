from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class DirectoryUser:
    """
    Read-model of an account as seen by the session core.

    :ivar principal_id: Account UUID (string form).
    :ivar email: Normalized email.
    :ivar name: Display name.
    :ivar profile_url: Avatar URL.
    :ivar role: Persisted role (``USER`` / ``ADMIN``).
    :ivar status: Lifecycle status name.
    """

    principal_id: str
    email: str
    name: str | None
    profile_url: str | None
    role: str
    status: str


@dataclass(frozen=True, slots=True)
class PairedPet:
    """
    Pet resolved from a hardware device id.

    :ivar pet_id: Pet primary key.
    :ivar device_id: Hardware identifier.
    """

    pet_id: int
    device_id: str


class UserDirectory(Protocol):
    """Account lookup and provisioning used by the login flows."""

    def find_or_provision(
        self, email: str, name: str | None, avatar_url: str | None
    ) -> DirectoryUser:
        """Return the account for ``email``, creating a ``REGISTER`` one if missing."""

    def get(self, principal_id: str) -> DirectoryUser | None: ...

    def get_by_email(self, email: str) -> DirectoryUser | None: ...

    def complete_registration(self, email: str, nickname: str) -> DirectoryUser: ...

    def mark_deleted(self, principal_id: str) -> DirectoryUser: ...


class DeviceDirectory(Protocol):
    """Resolves the pet a tracking device is paired with."""

    def find_by_device_id(self, device_id: str) -> PairedPet | None: ...
