"""Pet model, reduced to what device authentication needs."""

from __future__ import annotations

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Pet(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Pet paired (optionally) with a tracking device.

    Fields
    ------
    name : str
        Pet display name.
    device_id : str | None
        Hardware identifier of the paired tracker. Unique when present.
    """

    __tablename__ = "pets"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    device_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    __table_args__ = (UniqueConstraint("device_id", name="uq_pets_device_id"),)
