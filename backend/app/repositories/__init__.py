"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from app.repositories.base import BaseRepository
from app.repositories.pet import PetRepository
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "PetRepository",
    "UserRepository",
]
