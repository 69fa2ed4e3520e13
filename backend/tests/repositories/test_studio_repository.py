from datetime import time

import pytest

from studiosync.models.studio import StudioAvailability
from studiosync.repositories.studio_repository import StudioRepository


@pytest.fixture
def repository(db):
    return StudioRepository(db)


def test_replace_availability_swaps_rows(db, repository, studio):
    rows = repository.replace_availability(
        studio,
        [
            {"day_of_week": 5, "opening_time": time(10), "closing_time": time(0), "is_available": True},
            {"day_of_week": 2, "opening_time": time(9), "closing_time": time(17), "is_available": True},
        ],
    )
    db.commit()
    assert [row.day_of_week for row in rows] == [2, 5]
    assert [row.day_of_week for row in repository.get_availability(studio.id)] == [2, 5]
    assert [row.day_of_week for row in studio.availabilities] == [2, 5]


def test_replace_with_same_days_does_not_violate_unique_key(db, repository, studio):
    entries = [
        {"day_of_week": day, "opening_time": time(8), "closing_time": time(20), "is_available": True}
        for day in range(7)
    ]
    repository.replace_availability(studio, entries)
    db.commit()
    assert db.query(StudioAvailability).filter_by(studio_id=studio.id).count() == 7
    assert all(row.opening_time == time(8) for row in repository.get_availability(studio.id))


def test_list_filters_case_insensitive(repository, make_studio, owner):
    make_studio(owner, city="Paris")
    make_studio(owner, name="Annex", city="Berlin", country="Germany", is_active=False)
    assert repository.list_studios(city="PARIS")["total"] == 1
    assert repository.list_studios(country="germany")["total"] == 1
    assert repository.list_studios(is_active=True)["total"] == 1
    assert repository.list_studios(owner_id=owner.id)["total"] == 2
