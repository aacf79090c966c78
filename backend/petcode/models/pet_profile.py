"""Pet profile model."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petcode.db.base import Base
from petcode.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from petcode.models import Client, QROrder


class PetProfile(TimestampMixin, Base):
    """A registered animal and the source of its public emergency page."""

    __tablename__ = "pet_profiles"

    __table_args__ = (
        Index("ix_pet_profiles_client_created", "client_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"), nullable=False
    )
    pet_name: Mapped[str] = mapped_column(String(120), nullable=False)
    breed: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    age: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    vaccinations: Mapped[str] = mapped_column(Text, nullable=False, default="")
    observations: Mapped[str] = mapped_column(Text, nullable=False, default="")
    photo: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    photo_optimized: Mapped[str] = mapped_column(
        String(1024), nullable=False, default=""
    )
    # Public slug; random and independent of the pet name.
    profile_url: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # Nullable so rows written before the lost flag existed can be backfilled.
    is_lost: Mapped[bool | None] = mapped_column(Boolean, default=False)
    owner_message: Mapped[str | None] = mapped_column(Text, default="")

    client: Mapped["Client"] = relationship("Client", back_populates="pets")
    orders: Mapped[list["QROrder"]] = relationship(
        "QROrder", back_populates="pet_profile"
    )
