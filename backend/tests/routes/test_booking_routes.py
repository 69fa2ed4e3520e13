"""
Tests for booking routes.

Exercises the HTTP contract: status codes, the error envelope and the
``/api`` compatibility mount.
"""

from decimal import Decimal

import pytest

from studiosync.core.config import settings
from studiosync.models.equipment import EquipmentStatus

API = settings.api_prefix


@pytest.fixture
def booking_payload(studio, slot):
    def _payload(start_hour=10, end_hour=12, **extra):
        start, end = slot(start_hour, end_hour)
        body = {
            "studio_id": studio.id,
            "title": "Album tracking",
            "start_time": start.isoformat(),
            "end_time": end.isoformat(),
        }
        body.update(extra)
        return body

    return _payload


def test_overlapping_booking_scenario(client, auth_headers, booking_payload):
    first = client.post(f"{API}/bookings", json=booking_payload(10, 12), headers=auth_headers)
    assert first.status_code == 201
    data = first.json()["data"]
    assert data["status"] == "PENDING"
    assert Decimal(data["total_price"]) == Decimal("100.00")

    second = client.post(f"{API}/bookings", json=booking_payload(11, 13), headers=auth_headers)
    assert second.status_code == 409
    body = second.json()
    assert body["success"] is False
    assert body["code"] == "STUDIO_CONFLICT"
    assert body["details"]["conflicting_reservation_id"] == data["id"]


def test_abutting_booking_accepted(client, auth_headers, booking_payload):
    assert client.post(f"{API}/bookings", json=booking_payload(10, 12), headers=auth_headers).status_code == 201
    assert client.post(f"{API}/bookings", json=booking_payload(12, 14), headers=auth_headers).status_code == 201


def test_unauthenticated_create_is_401(client, booking_payload):
    response = client.post(f"{API}/bookings", json=booking_payload())
    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "Authentication required",
        "code": "UNAUTHORIZED",
    }


def test_garbage_token_is_401(client, booking_payload):
    response = client.post(
        f"{API}/bookings",
        json=booking_payload(),
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


def test_empty_interval_is_invalid_range(client, auth_headers, booking_payload):
    payload = booking_payload(10, 10)
    response = client.post(f"{API}/bookings", json=payload, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_RANGE"


def test_outside_opening_hours_is_unavailable(client, auth_headers, booking_payload):
    response = client.post(f"{API}/bookings", json=booking_payload(7, 9), headers=auth_headers)
    assert response.status_code == 422
    assert response.json()["code"] == "STUDIO_UNAVAILABLE"


def test_equipment_in_maintenance_is_conflict(
    client, auth_headers, booking_payload, make_equipment, studio
):
    item = make_equipment(studio, status=EquipmentStatus.MAINTENANCE)
    payload = booking_payload(equipment=[{"equipment_id": item.id}])
    response = client.post(f"{API}/bookings", json=payload, headers=auth_headers)
    assert response.status_code == 409
    assert response.json()["code"] == "EQUIPMENT_CONFLICT"


def test_unknown_studio_is_404(client, auth_headers, booking_payload):
    payload = booking_payload(studio_id="01HZZZZZZZZZZZZZZZZZZZZZZZ")
    response = client.post(f"{API}/bookings", json=payload, headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_malformed_body_is_validation_error(client, auth_headers, studio):
    response = client.post(
        f"{API}/bookings", json={"studio_id": studio.id, "title": "x"}, headers=auth_headers
    )
    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    fields = {tuple(error["loc"])[-1] for error in body["details"]["errors"]}
    assert {"start_time", "end_time"} <= fields


def test_naive_times_read_in_studio_timezone(client, auth_headers, studio, booking_day):
    payload = {
        "studio_id": studio.id,
        "title": "Naive",
        "start_time": f"{booking_day.isoformat()}T10:00:00",
        "end_time": f"{booking_day.isoformat()}T11:30:00",
    }
    response = client.post(f"{API}/bookings", json=payload, headers=auth_headers)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["start_time"] == f"{booking_day.isoformat()}T10:00:00+00:00"
    assert Decimal(data["total_price"]) == Decimal("75.00")


def test_get_and_list_bookings(client, auth_headers, headers_for, other_user, booking_payload):
    created = client.post(f"{API}/bookings", json=booking_payload(), headers=auth_headers).json()["data"]

    fetched = client.get(f"{API}/bookings/{created['id']}", headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json()["data"]["participants"][0]["role"] == "MUSICIAN"

    listing = client.get(f"{API}/bookings", headers=auth_headers).json()["data"]
    assert listing["total"] == 1
    assert listing["items"][0]["id"] == created["id"]

    stranger = headers_for(other_user)
    assert client.get(f"{API}/bookings", headers=stranger).json()["data"]["total"] == 0
    forbidden = client.get(f"{API}/bookings/{created['id']}", headers=stranger)
    assert forbidden.status_code == 403
    assert forbidden.json()["code"] == "FORBIDDEN"


def test_repeated_patch_is_idempotent(client, auth_headers, booking_payload, slot):
    created = client.post(f"{API}/bookings", json=booking_payload(), headers=auth_headers).json()["data"]
    start, end = slot(14, 16)
    patch = {"title": "Overdubs", "start_time": start.isoformat(), "end_time": end.isoformat()}

    first = client.patch(f"{API}/bookings/{created['id']}", json=patch, headers=auth_headers)
    second = client.patch(f"{API}/bookings/{created['id']}", json=patch, headers=auth_headers)
    assert first.status_code == second.status_code == 200

    def state(response):
        data = response.json()["data"]
        return {key: data[key] for key in ("title", "start_time", "end_time", "status", "total_price")}

    assert state(first) == state(second)
    assert state(first)["title"] == "Overdubs"


def test_cancel_then_patch_is_rejected(client, auth_headers, booking_payload):
    created = client.post(f"{API}/bookings", json=booking_payload(), headers=auth_headers).json()["data"]
    url = f"{API}/bookings/{created['id']}"
    assert client.patch(url, json={"status": "CANCELLED"}, headers=auth_headers).status_code == 200
    # Same terminal status again changes nothing
    assert client.patch(url, json={"status": "CANCELLED"}, headers=auth_headers).status_code == 200
    response = client.patch(url, json={"title": "Too late"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_payment_flow(client, auth_headers, booking_payload):
    created = client.post(f"{API}/bookings", json=booking_payload(), headers=auth_headers).json()["data"]
    url = f"{API}/bookings/{created['id']}/payment"

    paid = client.post(url, json={"payment_method": "card"}, headers=auth_headers)
    assert paid.status_code == 200
    data = paid.json()["data"]
    assert data["status"] == "PAID"
    assert data["payment"]["status"] == "SUCCEEDED"
    assert Decimal(data["payment"]["amount"]) == Decimal("100.00")

    again = client.post(url, headers=auth_headers)
    assert again.status_code == 409
    assert again.json()["code"] == "DUPLICATE_ENTRY"


def test_unversioned_mount_serves_same_routes(client, auth_headers, booking_payload):
    response = client.post("/api/bookings", json=booking_payload(), headers=auth_headers)
    assert response.status_code == 201
    booking_id = response.json()["data"]["id"]
    assert client.get(f"{API}/bookings/{booking_id}", headers=auth_headers).status_code == 200
