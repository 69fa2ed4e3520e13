from decimal import Decimal

import pytest

from studiosync.core.config import settings

API = settings.api_prefix


@pytest.fixture
def studio_payload():
    return {
        "name": "Blue Room",
        "description": "Live room with a Steinway",
        "address": "5 Quai de Jemmapes",
        "city": "Paris",
        "postal_code": "75010",
        "country": "France",
        "capacity": 6,
        "hourly_rate": "65.50",
        "currency": "eur",
        "availability": [
            {"day_of_week": 1, "opening_time": "10:00", "closing_time": "20:00"},
            {"day_of_week": 6, "opening_time": "12:00", "closing_time": "00:00"},
        ],
    }


class TestCreateStudio:
    def test_owner_creates_and_reads_back(self, client, owner, owner_headers, studio_payload):
        response = client.post(f"{API}/studios", json=studio_payload, headers=owner_headers)
        assert response.status_code == 201
        created = response.json()["data"]
        assert created["owner_id"] == owner.id
        assert created["currency"] == "EUR"
        assert created["is_active"] is True

        fetched = client.get(f"{API}/studios/{created['id']}").json()["data"]
        for key in ("name", "address", "city", "postal_code", "country", "capacity"):
            assert fetched[key] == studio_payload[key]
        assert Decimal(fetched["hourly_rate"]) == Decimal("65.50")
        assert [(a["day_of_week"], a["opening_time"], a["closing_time"]) for a in fetched["availability"]] == [
            (1, "10:00:00", "20:00:00"),
            (6, "12:00:00", "00:00:00"),
        ]

    def test_artist_cannot_create(self, client, auth_headers, studio_payload):
        response = client.post(f"{API}/studios", json=studio_payload, headers=auth_headers)
        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    def test_admin_can_create(self, client, admin_headers, studio_payload):
        assert client.post(f"{API}/studios", json=studio_payload, headers=admin_headers).status_code == 201

    def test_duplicate_days_rejected(self, client, owner_headers, studio_payload):
        day = {"day_of_week": 2, "opening_time": "09:00", "closing_time": "17:00"}
        studio_payload["availability"] = [day, day]
        response = client.post(f"{API}/studios", json=studio_payload, headers=owner_headers)
        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_closing_before_opening_rejected(self, client, owner_headers, studio_payload):
        studio_payload["availability"] = [
            {"day_of_week": 2, "opening_time": "18:00", "closing_time": "09:00"}
        ]
        response = client.post(f"{API}/studios", json=studio_payload, headers=owner_headers)
        assert response.status_code == 422


class TestReadStudios:
    def test_list_is_public_and_filters_by_city(self, client, make_studio, owner):
        make_studio(owner)
        make_studio(owner, name="Lyon Sound", city="Lyon")
        listing = client.get(f"{API}/studios", params={"city": "lyon"}).json()["data"]
        assert listing["total"] == 1
        assert listing["items"][0]["name"] == "Lyon Sound"
        assert client.get(f"{API}/studios").json()["data"]["total"] == 2

    def test_unknown_studio_is_404(self, client):
        response = client.get(f"{API}/studios/01HZZZZZZZZZZZZZZZZZZZZZZZ")
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"


class TestChangeStudio:
    def test_owner_updates(self, client, studio, owner_headers):
        response = client.patch(
            f"{API}/studios/{studio.id}", json={"hourly_rate": "55.00"}, headers=owner_headers
        )
        assert response.status_code == 200
        assert Decimal(response.json()["data"]["hourly_rate"]) == Decimal("55.00")

    def test_non_owner_cannot_update(self, client, studio, auth_headers):
        response = client.patch(f"{API}/studios/{studio.id}", json={"name": "Mine"}, headers=auth_headers)
        assert response.status_code == 403

    def test_replace_availability(self, client, studio, owner_headers):
        schedule = {
            "availability": [{"day_of_week": 0, "opening_time": "08:00", "closing_time": "12:00"}]
        }
        response = client.put(
            f"{API}/studios/{studio.id}/availability", json=schedule, headers=owner_headers
        )
        assert response.status_code == 200
        rows = client.get(f"{API}/studios/{studio.id}/availability").json()["data"]
        assert rows == [
            {
                "day_of_week": 0,
                "opening_time": "08:00:00",
                "closing_time": "12:00:00",
                "is_available": True,
            }
        ]

    def test_delete(self, client, studio, owner_headers, auth_headers):
        assert client.delete(f"{API}/studios/{studio.id}", headers=auth_headers).status_code == 403
        response = client.delete(f"{API}/studios/{studio.id}", headers=owner_headers)
        assert response.status_code == 200
        assert client.get(f"{API}/studios/{studio.id}").status_code == 404
