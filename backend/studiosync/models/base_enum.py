# backend/studiosync/models/base_enum.py
"""
Safe enum helpers for SQLAlchemy.

Columns built with ``create_safe_enum`` persist enum VALUES rather than
member names, so rows written by raw SQL (seeds, migrations) and rows written
through the ORM always agree.

Usage:
    from studiosync.models.base_enum import create_safe_enum

    class Studio(Base):
        status = Column(
            create_safe_enum(EquipmentStatus, "equipment_status"),
            nullable=False,
            default=EquipmentStatus.AVAILABLE,
        )
"""

from enum import Enum
from typing import Sequence, Type

from sqlalchemy import Enum as SAEnum


def create_safe_enum(
    enum_class: Type[Enum],
    name: str,
    *,
    native_enum: bool = False,
    validate_strings: bool = True,
) -> SAEnum:
    """
    Create a SQLAlchemy Enum that stores enum values (not names).

    ``native_enum`` defaults to False so the same column definition works on
    PostgreSQL and on the SQLite test database; a CHECK constraint keeps the
    column closed over the enum values.
    """
    return SAEnum(
        enum_class,
        name=name,
        native_enum=native_enum,
        create_constraint=not native_enum,
        validate_strings=validate_strings,
        values_callable=_get_enum_values,
        length=32,
    )


def _get_enum_values(enum_class: Type[Enum]) -> Sequence[str]:
    return [member.value for member in enum_class]
