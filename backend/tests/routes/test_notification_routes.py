from studiosync.core.config import settings

API = settings.api_prefix


def _confirmed_booking(client, studio, slot, auth_headers, owner_headers):
    start, end = slot(10, 12)
    created = client.post(
        f"{API}/bookings",
        json={
            "studio_id": studio.id,
            "title": "Mixdown",
            "start_time": start.isoformat(),
            "end_time": end.isoformat(),
        },
        headers=auth_headers,
    ).json()["data"]
    response = client.patch(
        f"{API}/bookings/{created['id']}", json={"status": "CONFIRMED"}, headers=owner_headers
    )
    assert response.status_code == 200
    return created


def test_confirmation_creates_notification(client, studio, slot, auth_headers, owner_headers):
    _confirmed_booking(client, studio, slot, auth_headers, owner_headers)

    listing = client.get(f"{API}/notifications", headers=auth_headers).json()["data"]
    assert listing["total"] == 1
    notification = listing["items"][0]
    assert notification["type"] == "RESERVATION_CONFIRMED"
    assert notification["is_read"] is False
    assert "Mixdown" in notification["message"]

    # Owner receives nothing for their own confirmation
    assert client.get(f"{API}/notifications", headers=owner_headers).json()["data"]["total"] == 0


def test_mark_read(client, studio, slot, auth_headers, owner_headers):
    _confirmed_booking(client, studio, slot, auth_headers, owner_headers)
    notification_id = client.get(f"{API}/notifications", headers=auth_headers).json()["data"][
        "items"
    ][0]["id"]

    response = client.post(f"{API}/notifications/{notification_id}/read", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["is_read"] is True

    unread = client.get(
        f"{API}/notifications", params={"unread_only": "true"}, headers=auth_headers
    ).json()["data"]
    assert unread["total"] == 0


def test_cannot_read_someone_elses_notification(client, studio, slot, auth_headers, owner_headers):
    _confirmed_booking(client, studio, slot, auth_headers, owner_headers)
    notification_id = client.get(f"{API}/notifications", headers=auth_headers).json()["data"][
        "items"
    ][0]["id"]
    response = client.post(f"{API}/notifications/{notification_id}/read", headers=owner_headers)
    assert response.status_code == 404
