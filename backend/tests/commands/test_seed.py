from sqlalchemy import create_engine, func, select

from studiosync.auth import verify_password
from studiosync.commands.seed import SEED_PASSWORD, main, seed
from studiosync.models.equipment import Equipment
from studiosync.models.studio import Studio
from studiosync.models.user import User, UserRole


def test_seed_creates_example_dataset(db):
    created = seed(db)
    db.commit()

    assert created == {"users": 3, "studios": 1, "equipment": 2}
    owner = db.query(User).filter(User.email == "owner@studiosync.dev").one()
    assert owner.role == UserRole.STUDIO_OWNER
    assert verify_password(SEED_PASSWORD, owner.hashed_password)

    studio = db.query(Studio).one()
    assert studio.name == "Studio Harmony"
    assert studio.owner_id == owner.id
    assert len(studio.availabilities) == 7
    assert {item.name for item in db.query(Equipment)} == {"Neumann U87", "SSL SiX"}


def test_seed_is_idempotent(db):
    seed(db)
    db.commit()
    assert seed(db) == {"users": 0, "studios": 0, "equipment": 0}
    assert db.query(User).count() == 3


def test_main_creates_tables_and_seeds(tmp_path):
    url = f"sqlite:///{tmp_path / 'seed.db'}"
    assert main(["--create-tables", "--database-url", url]) == 0

    engine = create_engine(url)
    with engine.connect() as conn:
        assert conn.execute(select(func.count()).select_from(User.__table__)).scalar() == 3
    engine.dispose()
