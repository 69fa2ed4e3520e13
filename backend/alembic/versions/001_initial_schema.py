# backend/alembic/versions/001_initial_schema.py
"""Initial schema - users, studios, equipment, reservations

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-01-06 00:00:00.000000

Creates every table in its final form. Enum columns are VARCHAR with a
CHECK constraint so the same migration runs on PostgreSQL and SQLite.
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _enum(name: str, *values: str) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True, length=32)


def _timestamps(with_updated: bool = True) -> list:
    columns = [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]
    if with_updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now())
        )
    return columns


def upgrade() -> None:
    """Create all tables, constraints and indexes."""
    print("Creating initial schema...")

    op.create_table(
        "users",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("avatar", sa.String(500), nullable=True),
        sa.Column(
            "role",
            _enum("user_role", "ADMIN", "STUDIO_OWNER", "ARTIST", "TECHNICIAN", "USER"),
            nullable=False,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("token_version", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "studios",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("city", sa.String(100), nullable=False),
        sa.Column("postal_code", sa.String(20), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False, server_default="EUR"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("owner_id", sa.String(26), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.CheckConstraint("capacity > 0", name="ck_studios_capacity_positive"),
        sa.CheckConstraint("hourly_rate >= 0", name="ck_studios_rate_non_negative"),
    )
    op.create_index("ix_studios_id", "studios", ["id"])
    op.create_index("studios_city_country_idx", "studios", ["city", "country"])
    op.create_index("studios_owner_id_idx", "studios", ["owner_id"])

    op.create_table(
        "studio_availabilities",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("studio_id", sa.String(26), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("opening_time", sa.Time(), nullable=False),
        sa.Column("closing_time", sa.Time(), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["studio_id"], ["studios.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "studio_id", "day_of_week", name="studio_availabilities_studio_id_day_of_week_key"
        ),
        sa.CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_studio_availabilities_day"),
    )

    op.create_table(
        "equipment",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("brand", sa.String(100), nullable=True),
        sa.Column("model", sa.String(100), nullable=True),
        sa.Column("serial_number", sa.String(100), nullable=True),
        sa.Column(
            "type",
            _enum(
                "equipment_type",
                "MICROPHONE",
                "MIXING_CONSOLE",
                "AUDIO_INTERFACE",
                "INSTRUMENT",
                "AMPLIFIER",
                "SPEAKER",
                "HEADPHONES",
                "SOFTWARE",
                "ACCESSORY",
                "OTHER",
            ),
            nullable=False,
        ),
        sa.Column(
            "status",
            _enum("equipment_status", "AVAILABLE", "IN_USE", "MAINTENANCE", "OUT_OF_ORDER"),
            nullable=False,
            server_default="AVAILABLE",
        ),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("daily_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("studio_id", sa.String(26), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["studio_id"], ["studios.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_equipment_id", "equipment", ["id"])
    op.create_index("ix_equipment_studio_id", "equipment", ["studio_id"])

    op.create_table(
        "reservations",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "status",
            _enum("reservation_status", "PENDING", "CONFIRMED", "CANCELLED", "COMPLETED", "PAID"),
            nullable=False,
            server_default="PENDING",
        ),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False, server_default="EUR"),
        sa.Column("studio_id", sa.String(26), nullable=False),
        sa.Column("created_by", sa.String(26), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["studio_id"], ["studios.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="CASCADE"),
        sa.CheckConstraint("end_time > start_time", name="ck_reservations_time_order"),
    )
    op.create_index("ix_reservations_id", "reservations", ["id"])
    op.create_index(
        "reservations_studio_time_idx", "reservations", ["studio_id", "start_time", "end_time"]
    )
    op.create_index("reservations_created_by_idx", "reservations", ["created_by"])

    op.create_table(
        "reservation_participants",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("reservation_id", sa.String(26), nullable=False),
        sa.Column("user_id", sa.String(26), nullable=False),
        sa.Column(
            "role",
            _enum("participant_role", "PRODUCER", "ENGINEER", "MUSICIAN"),
            nullable=False,
            server_default="MUSICIAN",
        ),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["reservation_id"], ["reservations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "reservation_id", "user_id", name="reservation_participants_reservation_user_key"
        ),
    )

    op.create_table(
        "equipment_bookings",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("reservation_id", sa.String(26), nullable=False),
        sa.Column("equipment_id", sa.String(26), nullable=False),
        sa.Column("user_id", sa.String(26), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "status",
            _enum("equipment_booking_status", "RESERVED", "IN_USE", "RETURNED"),
            nullable=False,
            server_default="RESERVED",
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["reservation_id"], ["reservations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["equipment_id"], ["equipment.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "reservation_id", "equipment_id", name="equipment_bookings_reservation_equipment_key"
        ),
        sa.CheckConstraint("quantity >= 1", name="ck_equipment_bookings_quantity"),
    )
    op.create_index(
        "equipment_bookings_equipment_time_idx",
        "equipment_bookings",
        ["equipment_id", "start_time", "end_time"],
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("reservation_id", sa.String(26), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False, server_default="EUR"),
        sa.Column(
            "status",
            _enum("payment_status", "PENDING", "PROCESSING", "SUCCEEDED", "FAILED"),
            nullable=False,
            server_default="PENDING",
        ),
        sa.Column("payment_method", sa.String(50), nullable=True),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["reservation_id"], ["reservations.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("reservation_id", name="payments_reservation_id_key"),
    )
    op.create_index("ix_payments_id", "payments", ["id"])

    op.create_table(
        "projects",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "status",
            _enum("project_status", "RECORDING", "MIXING", "MASTERING", "COMPLETED"),
            nullable=False,
            server_default="RECORDING",
        ),
        sa.Column("studio_id", sa.String(26), nullable=True),
        sa.Column("reservation_id", sa.String(26), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["studio_id"], ["studios.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reservation_id"], ["reservations.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_projects_id", "projects", ["id"])

    op.create_table(
        "files",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("url", sa.String(1000), nullable=False),
        sa.Column("type", _enum("file_type", "AUDIO", "DOCUMENT", "IMAGE"), nullable=False),
        sa.Column("project_id", sa.String(26), nullable=False),
        sa.Column("uploaded_by", sa.String(26), nullable=False),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["uploaded_by"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_files_id", "files", ["id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("user_id", sa.String(26), nullable=False),
        sa.Column(
            "type",
            _enum("notification_type", "RESERVATION_CONFIRMED", "PAYMENT_RECEIVED"),
            nullable=False,
        ),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(with_updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_notifications_id", "notifications", ["id"])
    op.create_index("notifications_user_read_idx", "notifications", ["user_id", "is_read"])

    print("Initial schema created successfully!")


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    print("Dropping initial schema...")

    for table in (
        "notifications",
        "files",
        "projects",
        "payments",
        "equipment_bookings",
        "reservation_participants",
        "reservations",
        "equipment",
        "studio_availabilities",
        "studios",
        "users",
    ):
        op.drop_table(table)

    print("Initial schema dropped successfully!")
