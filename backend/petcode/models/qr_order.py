"""QR tag fulfillment order model."""

from __future__ import annotations

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petcode.db.base import Base
from petcode.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from petcode.models import Client, PetProfile


class OrderStatus(str, enum.Enum):
    """Shipping pipeline for a physical QR tag."""

    PENDIENTE = "pendiente"
    IMPRESO = "impreso"
    ENVIADO = "enviado"
    CANCELADO = "cancelado"


class QROrder(TimestampMixin, Base):
    """Tracks production and shipment of the QR tag for one pet."""

    __tablename__ = "qr_orders"

    __table_args__ = (
        Index("ix_qr_orders_client_created", "client_id", "created_at"),
        Index("ix_qr_orders_status", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"), nullable=False
    )
    pet_profile_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("pet_profiles.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    # Contact and shipping snapshot taken when the pet was registered.
    client_email: Mapped[str] = mapped_column(String(320), nullable=False, default="")
    client_first_name: Mapped[str] = mapped_column(
        String(120), nullable=False, default=""
    )
    client_last_name: Mapped[str] = mapped_column(
        String(120), nullable=False, default=""
    )
    client_phone: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    client_address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    client_city: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    client_postal_code: Mapped[str] = mapped_column(
        String(32), nullable=False, default=""
    )
    client_country: Mapped[str] = mapped_column(String(120), nullable=False, default="")

    pet_name: Mapped[str] = mapped_column(String(120), nullable=False)
    profile_url: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, values_callable=lambda items: [i.value for i in items]),
        nullable=False,
        default=OrderStatus.PENDIENTE,
    )

    client: Mapped["Client"] = relationship("Client", back_populates="orders")
    pet_profile: Mapped["PetProfile"] = relationship(
        "PetProfile", back_populates="orders"
    )

    @property
    def address_editable(self) -> bool:
        return self.status == OrderStatus.PENDIENTE
