#!/usr/bin/env python
# backend/studiosync/commands/seed.py
"""
Seed the database with an example dataset.

Creates an admin, a studio owner and an artist (password ``password123``),
the "Studio Harmony" studio in Paris open 09:00-22:00 every day, and two
equipment items.

Usage:
    python -m studiosync.commands.seed                  # Seed if not already seeded
    python -m studiosync.commands.seed --create-tables  # Create tables first (dev/SQLite)
"""

import argparse
from datetime import time
from decimal import Decimal
import logging
import sys
from typing import Dict, Optional

from sqlalchemy.orm import Session

from ..auth import get_password_hash
from ..database import Database
from ..models.equipment import Equipment, EquipmentStatus, EquipmentType
from ..models.studio import Studio, StudioAvailability
from ..models.user import User, UserRole
from ..repositories.factory import RepositoryFactory

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

SEED_PASSWORD = "password123"

SEED_USERS = (
    ("admin@studiosync.dev", "Admin", "Studio", UserRole.ADMIN),
    ("owner@studiosync.dev", "Jean", "Dupont", UserRole.STUDIO_OWNER),
    ("artist@studiosync.dev", "Marie", "Martin", UserRole.ARTIST),
)


def seed(db: Session) -> Dict[str, int]:
    """
    Insert the example dataset into ``db``.

    Returns:
        Counts of created rows; all zero when the dataset already exists
    """
    created = {"users": 0, "studios": 0, "equipment": 0}
    user_repository = RepositoryFactory.create_user_repository(db)
    if user_repository.get_by_email(SEED_USERS[0][0]) is not None:
        logger.info("Seed data already present, skipping")
        return created

    password_hash = get_password_hash(SEED_PASSWORD)
    users = {}
    for email, first_name, last_name, role in SEED_USERS:
        users[role] = User(
            email=email,
            hashed_password=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role,
            email_verified=True,
        )
        db.add(users[role])
    db.flush()
    created["users"] = len(users)

    studio = Studio(
        name="Studio Harmony",
        description="Live room and control room in central Paris",
        address="123 Rue de la Musique",
        city="Paris",
        postal_code="75001",
        country="France",
        capacity=10,
        hourly_rate=Decimal("50.00"),
        currency="EUR",
        owner_id=users[UserRole.STUDIO_OWNER].id,
    )
    db.add(studio)
    db.flush()
    for day in range(7):
        db.add(
            StudioAvailability(
                studio_id=studio.id,
                day_of_week=day,
                opening_time=time(9, 0),
                closing_time=time(22, 0),
                is_available=True,
            )
        )
    created["studios"] = 1

    db.add_all(
        [
            Equipment(
                name="Neumann U87",
                brand="Neumann",
                model="U87 Ai",
                type=EquipmentType.MICROPHONE,
                status=EquipmentStatus.AVAILABLE,
                hourly_rate=Decimal("10.00"),
                studio_id=studio.id,
            ),
            Equipment(
                name="SSL SiX",
                brand="Solid State Logic",
                model="SiX",
                type=EquipmentType.MIXING_CONSOLE,
                status=EquipmentStatus.AVAILABLE,
                daily_rate=Decimal("120.00"),
                studio_id=studio.id,
            ),
        ]
    )
    created["equipment"] = 2
    db.flush()
    return created


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the StudioSync database")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding (use migrations in production)",
    )
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    args = parser.parse_args(argv)

    database = Database(url=args.database_url)
    try:
        if args.create_tables:
            database.create_all()
        with database.session_scope() as db:
            created = seed(db)
    finally:
        database.dispose()

    logger.info(
        f"Seed complete: {created['users']} users, {created['studios']} studios, "
        f"{created['equipment']} equipment items"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
