"""Clients, pet profiles, QR orders and audit events.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

CLIENT_ROLE = sa.Enum("admin", "user", name="clientrole")
ORDER_STATUS = sa.Enum(
    "pendiente", "impreso", "enviado", "cancelado", name="orderstatus"
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(length=128), nullable=False, unique=True),
        sa.Column("email", sa.String(length=320), nullable=False, server_default=""),
        sa.Column("first_name", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("last_name", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("phone", sa.String(length=32), nullable=False, server_default=""),
        sa.Column("address", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("city", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("postal_code", sa.String(length=32), nullable=False, server_default=""),
        sa.Column("country", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("role", CLIENT_ROLE, nullable=False, server_default="user"),
        *_timestamps(),
    )

    op.create_table(
        "pet_profiles",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "client_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("clients.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("pet_name", sa.String(length=120), nullable=False),
        sa.Column("breed", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("age", sa.String(length=64), nullable=False, server_default=""),
        sa.Column("vaccinations", sa.Text(), nullable=False, server_default=""),
        sa.Column("observations", sa.Text(), nullable=False, server_default=""),
        sa.Column("photo", sa.String(length=1024), nullable=False, server_default=""),
        sa.Column(
            "photo_optimized", sa.String(length=1024), nullable=False, server_default=""
        ),
        sa.Column("profile_url", sa.String(length=64), nullable=False, unique=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_lost", sa.Boolean(), nullable=True),
        sa.Column("owner_message", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_pet_profiles_client_created", "pet_profiles", ["client_id", "created_at"]
    )

    op.create_table(
        "qr_orders",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "client_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("clients.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "pet_profile_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("pet_profiles.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("client_email", sa.String(length=320), nullable=False, server_default=""),
        sa.Column(
            "client_first_name", sa.String(length=120), nullable=False, server_default=""
        ),
        sa.Column(
            "client_last_name", sa.String(length=120), nullable=False, server_default=""
        ),
        sa.Column("client_phone", sa.String(length=32), nullable=False, server_default=""),
        sa.Column(
            "client_address", sa.String(length=255), nullable=False, server_default=""
        ),
        sa.Column("client_city", sa.String(length=120), nullable=False, server_default=""),
        sa.Column(
            "client_postal_code", sa.String(length=32), nullable=False, server_default=""
        ),
        sa.Column(
            "client_country", sa.String(length=120), nullable=False, server_default=""
        ),
        sa.Column("pet_name", sa.String(length=120), nullable=False),
        sa.Column("profile_url", sa.String(length=64), nullable=False),
        sa.Column("status", ORDER_STATUS, nullable=False, server_default="pendiente"),
        *_timestamps(),
    )
    op.create_index(
        "ix_qr_orders_client_created", "qr_orders", ["client_id", "created_at"]
    )
    op.create_index("ix_qr_orders_status", "qr_orders", ["status"])

    op.create_table(
        "audit_events",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "client_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("clients.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("event_type", sa.String(length=120), nullable=False),
        sa.Column("description", sa.String(length=1024), nullable=True),
        sa.Column("payload", sa.JSON(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("audit_events")
    op.drop_index("ix_qr_orders_status", table_name="qr_orders")
    op.drop_index("ix_qr_orders_client_created", table_name="qr_orders")
    op.drop_table("qr_orders")
    op.drop_index("ix_pet_profiles_client_created", table_name="pet_profiles")
    op.drop_table("pet_profiles")
    op.drop_table("clients")
    ORDER_STATUS.drop(op.get_bind(), checkfirst=True)
    CLIENT_ROLE.drop(op.get_bind(), checkfirst=True)
