# backend/tests/conftest.py
"""
Pytest configuration.

Every test gets a fresh in-memory SQLite database (one shared connection via
StaticPool so the TestClient threadpool sees the same data). Fixtures commit
their rows so that a service-level rollback never removes them.
"""

import os
import sys

# Set testing mode BEFORE any studiosync imports
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["STUDIO_TIMEZONE"] = "UTC"
os.environ["SECRET_KEY"] = "test-secret-key-for-studiosync-tests-0123456789abcdef"

# Add the backend directory to Python path so imports work
backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, backend_dir)

from studiosync.core.config import settings

settings.rate_limit_enabled = False
settings.studio_timezone = "UTC"

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Callable, Dict, Iterator, Tuple

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from studiosync.api.dependencies.database import get_db
from studiosync.auth import create_access_token, get_password_hash
from studiosync.database import Base, Database
from studiosync.main import create_app
from studiosync.models.equipment import Equipment, EquipmentStatus, EquipmentType
from studiosync.models.studio import Studio, StudioAvailability
from studiosync.models.user import User, UserRole

TEST_PASSWORD = "TestPassword123!"


@pytest.fixture
def test_password() -> str:
    return TEST_PASSWORD


@pytest.fixture(scope="session")
def test_password_hash() -> str:
    """bcrypt is slow; hash the shared test password once."""
    return get_password_hash(TEST_PASSWORD)


@pytest.fixture(scope="function")
def test_db() -> Iterator[Database]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database = Database(engine=engine)
    database.create_all()
    yield database
    Base.metadata.drop_all(bind=engine)
    database.dispose()


@pytest.fixture(scope="function")
def db(test_db: Database) -> Iterator[Session]:
    """Create a new database session for each test."""
    session = test_db.SessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def app(test_db: Database, db: Session):
    application = create_app(database=test_db)

    def override_get_db():
        yield db

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    """Create a test client with the test database."""
    test_client = TestClient(app)
    yield test_client
    test_client.close()


@pytest.fixture
def make_user(db: Session, test_password_hash: str) -> Callable[..., User]:
    counter = {"n": 0}

    def _make_user(role: UserRole = UserRole.ARTIST, **overrides) -> User:
        counter["n"] += 1
        fields = {
            "email": f"{role.value.lower()}{counter['n']}@example.com",
            "hashed_password": test_password_hash,
            "first_name": "Test",
            "last_name": role.value.title(),
            "role": role,
            "is_active": True,
        }
        fields.update(overrides)
        user = User(**fields)
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def user(make_user) -> User:
    """An artist; the default booking user."""
    return make_user(UserRole.ARTIST)


@pytest.fixture
def other_user(make_user) -> User:
    return make_user(UserRole.ARTIST)


@pytest.fixture
def owner(make_user) -> User:
    return make_user(UserRole.STUDIO_OWNER)


@pytest.fixture
def admin(make_user) -> User:
    return make_user(UserRole.ADMIN)


@pytest.fixture
def make_studio(db: Session) -> Callable[..., Studio]:
    def _make_studio(
        owner: User,
        opening: time = time(9, 0),
        closing: time = time(22, 0),
        days=range(7),
        **overrides,
    ) -> Studio:
        fields = {
            "name": "Studio Harmony",
            "address": "123 Rue de la Musique",
            "city": "Paris",
            "postal_code": "75001",
            "country": "France",
            "capacity": 10,
            "hourly_rate": Decimal("50.00"),
            "currency": "EUR",
            "owner_id": owner.id,
        }
        fields.update(overrides)
        studio = Studio(**fields)
        db.add(studio)
        db.flush()
        for day in days:
            db.add(
                StudioAvailability(
                    studio_id=studio.id,
                    day_of_week=day,
                    opening_time=opening,
                    closing_time=closing,
                    is_available=True,
                )
            )
        db.commit()
        return studio

    return _make_studio


@pytest.fixture
def studio(make_studio, owner: User) -> Studio:
    """Studio open 09:00-22:00 every day, 50.00 EUR per hour."""
    return make_studio(owner)


@pytest.fixture
def make_equipment(db: Session) -> Callable[..., Equipment]:
    def _make_equipment(studio: Studio, **overrides) -> Equipment:
        fields = {
            "name": "Neumann U87",
            "type": EquipmentType.MICROPHONE,
            "status": EquipmentStatus.AVAILABLE,
            "hourly_rate": Decimal("10.00"),
            "studio_id": studio.id,
        }
        fields.update(overrides)
        item = Equipment(**fields)
        db.add(item)
        db.commit()
        return item

    return _make_equipment


@pytest.fixture
def equipment(make_equipment, studio: Studio) -> Equipment:
    return make_equipment(studio)


@pytest.fixture
def booking_day() -> date:
    return date.today() + timedelta(days=30)


@pytest.fixture
def slot(booking_day: date) -> Callable[..., Tuple[datetime, datetime]]:
    """Build an aware UTC interval on ``booking_day`` from hours."""

    def _slot(start_hour: float, end_hour: float, day_offset: int = 0) -> Tuple[datetime, datetime]:
        base = datetime.combine(booking_day + timedelta(days=day_offset), time(0), tzinfo=timezone.utc)
        return base + timedelta(hours=start_hour), base + timedelta(hours=end_hour)

    return _slot


def _headers_for(user: User) -> Dict[str, str]:
    token = create_access_token(user.id, user.token_version or 0)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for() -> Callable[[User], Dict[str, str]]:
    return _headers_for


@pytest.fixture
def auth_headers(user: User) -> Dict[str, str]:
    return _headers_for(user)


@pytest.fixture
def owner_headers(owner: User) -> Dict[str, str]:
    return _headers_for(owner)


@pytest.fixture
def admin_headers(admin: User) -> Dict[str, str]:
    return _headers_for(admin)
