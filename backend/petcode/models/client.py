"""Client (pet owner) model."""
from __future__ import annotations

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petcode.db.base import Base
from petcode.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from petcode.models import PetProfile, QROrder


class ClientRole(str, enum.Enum):
    """Role enumeration for platform permissions."""

    ADMIN = "admin"
    USER = "user"


class Client(TimestampMixin, Base):
    """A registered owner, keyed by the identity provider subject."""

    __tablename__ = "clients"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    user_id: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, default="")
    first_name: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    city: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    postal_code: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    country: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    role: Mapped[ClientRole] = mapped_column(
        Enum(ClientRole, values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=ClientRole.USER,
    )

    pets: Mapped[list["PetProfile"]] = relationship(
        "PetProfile", back_populates="client"
    )
    orders: Mapped[list["QROrder"]] = relationship("QROrder", back_populates="client")

    @property
    def is_admin(self) -> bool:
        return self.role == ClientRole.ADMIN

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def is_profile_complete(self) -> bool:
        """Whether every contact and shipping field needed for a QR order is set."""
        required = (
            self.first_name,
            self.last_name,
            self.phone,
            self.address,
            self.city,
            self.postal_code,
            self.country,
        )
        return all(value and value.strip() for value in required)
