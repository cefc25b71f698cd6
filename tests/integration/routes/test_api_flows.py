"""
End-to-end HTTP tests: authentication, error mapping and the main user journeys.
"""

import pytest

OWNER_EMAIL = "owner@example.com"
GUEST_EMAIL = "guest@example.com"


@pytest.mark.integration
def test_missing_identity_headers_return_401(client) -> None:
    response = client.get("/api/connections")

    assert response.status_code == 401


@pytest.mark.integration
def test_owner_adds_availability_and_dates_are_enumerated(
    client, host_id, owner_id, as_user
) -> None:
    headers = as_user(owner_id, OWNER_EMAIL)
    for start, end in [("2025-12-01", "2025-12-03"), ("2025-12-03", "2025-12-04")]:
        response = client.post(
            f"/api/hosts/{host_id}/availabilities",
            json={"start_date": start, "end_date": end},
            headers=headers,
        )
        assert response.status_code == 201
        assert response.json()["id"]

    dates = client.get(
        "/api/availabilities/dates",
        params={"start_date": "2025-11-30", "end_date": "2025-12-31"},
    )
    listed = client.get(f"/api/hosts/{host_id}/availabilities")

    assert dates.json() == {
        "dates": ["2025-12-01", "2025-12-02", "2025-12-03", "2025-12-04"]
    }
    assert [row["start_date"] for row in listed.json()] == ["2025-12-01", "2025-12-03"]


@pytest.mark.integration
def test_non_owner_cannot_add_availability(client, host_id, guest_id, as_user) -> None:
    response = client.post(
        f"/api/hosts/{host_id}/availabilities",
        json={"start_date": "2025-12-01", "end_date": "2025-12-03"},
        headers=as_user(guest_id, GUEST_EMAIL),
    )

    assert response.status_code == 403


@pytest.mark.integration
def test_reversed_range_maps_to_422_with_code(client, host_id, owner_id, as_user) -> None:
    response = client.post(
        f"/api/hosts/{host_id}/availabilities",
        json={"start_date": "2025-12-05", "end_date": "2025-12-01"},
        headers=as_user(owner_id, OWNER_EMAIL),
    )

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "invalid_range"


@pytest.mark.integration
def test_unbounded_date_window_maps_to_422(client) -> None:
    response = client.get(
        "/api/availabilities/dates",
        params={"start_date": "0001-01-01", "end_date": "9999-12-31"},
    )

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "invalid_range"


@pytest.mark.integration
def test_search_finds_open_host_with_text_filter(client, host_id, owner_id, as_user) -> None:
    client.post(
        f"/api/hosts/{host_id}/availabilities",
        json={"start_date": "2025-12-01", "end_date": "2025-12-31"},
        headers=as_user(owner_id, OWNER_EMAIL),
    )

    hit = client.get(
        "/api/hosts/search",
        params={"start_date": "2025-12-10", "end_date": "2025-12-12", "q": "cabin"},
    )
    miss = client.get(
        "/api/hosts/search",
        params={"start_date": "2025-12-10", "end_date": "2025-12-12", "q": "castle"},
    )

    assert [host["id"] for host in hit.json()] == [host_id]
    assert miss.json() == []


@pytest.mark.integration
def test_booking_request_approval_journey(
    client, host_id, owner_id, guest_id, as_user
) -> None:
    guest = as_user(guest_id, GUEST_EMAIL)
    owner = as_user(owner_id, OWNER_EMAIL)

    created = client.post(
        "/api/booking-requests",
        json={
            "host_id": host_id,
            "start_date": "2025-12-01",
            "end_date": "2025-12-07",
            "guests": 2,
            "message": "Hi!",
        },
        headers=guest,
    )
    assert created.status_code == 201
    request_id = created.json()["id"]
    assert client.get("/api/booking-requests/incoming/count", headers=owner).json() == {
        "pending": 1
    }

    forbidden = client.patch(
        f"/api/booking-requests/{request_id}", json={"status": "approved"}, headers=guest
    )
    approved = client.patch(
        f"/api/booking-requests/{request_id}",
        json={"status": "approved", "response_message": "Welcome"},
        headers=owner,
    )
    again = client.patch(
        f"/api/booking-requests/{request_id}", json={"status": "declined"}, headers=owner
    )

    assert forbidden.status_code == 403
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"
    assert again.status_code == 409
    assert again.json()["detail"]["code"] == "invalid_state"
    calendar = client.get(f"/api/hosts/{host_id}/availabilities").json()
    assert [(row["start_date"], row["status"]) for row in calendar] == [("2025-12-01", "booked")]
    assert [row["id"] for row in client.get("/api/booking-requests/mine", headers=guest).json()] == [
        request_id
    ]
    assert client.get("/api/booking-requests/incoming/count", headers=owner).json() == {
        "pending": 0
    }


@pytest.mark.integration
def test_booking_request_over_host_capacity_is_rejected(
    client, host_id, guest_id, as_user
) -> None:
    response = client.post(
        "/api/booking-requests",
        json={
            "host_id": host_id,
            "start_date": "2025-12-01",
            "end_date": "2025-12-07",
            "guests": 7,
        },
        headers=as_user(guest_id, GUEST_EMAIL),
    )

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "invalid_guest_count"


@pytest.mark.integration
def test_booking_request_for_unknown_host_is_404(client, guest_id, as_user) -> None:
    response = client.post(
        "/api/booking-requests",
        json={
            "host_id": "missing",
            "start_date": "2025-12-01",
            "end_date": "2025-12-07",
            "guests": 1,
        },
        headers=as_user(guest_id, GUEST_EMAIL),
    )

    assert response.status_code == 404


@pytest.mark.integration
def test_connection_journey(client, owner_id, guest_id, as_user) -> None:
    owner = as_user(owner_id, OWNER_EMAIL)
    guest = as_user(guest_id, GUEST_EMAIL)

    created = client.post(
        "/api/connections", json={"email": GUEST_EMAIL, "relationship": "friend"}, headers=owner
    )
    duplicate = client.post("/api/connections", json={"email": OWNER_EMAIL}, headers=guest)
    assert created.status_code == 201
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"]["code"] == "already_connected"

    connection_id = created.json()["id"]
    requests = client.get("/api/connections/requests", headers=guest).json()
    assert requests[0]["requester"]["email"] == OWNER_EMAIL

    early_delete = client.delete(f"/api/connections/{connection_id}", headers=owner)
    assert early_delete.status_code == 409

    accepted = client.patch(
        f"/api/connections/{connection_id}", json={"status": "accepted"}, headers=guest
    )
    assert accepted.json()["status"] == "accepted"
    listed = client.get("/api/connections", headers=owner).json()
    assert [item["connected_user"]["email"] for item in listed] == [GUEST_EMAIL]

    assert client.delete(f"/api/connections/{connection_id}", headers=guest).json() == {
        "deleted": True
    }
    assert client.delete(f"/api/connections/{connection_id}", headers=guest).json() == {
        "deleted": False
    }


@pytest.mark.integration
def test_invitation_journey_for_new_user(client, owner_id, clock, as_user) -> None:
    owner = as_user(owner_id, OWNER_EMAIL)

    created = client.post(
        "/api/invitations", json={"email": "new@example.com", "message": "Join us"}, headers=owner
    )
    assert created.status_code == 201
    token = created.json()["token"]
    duplicate = client.post("/api/invitations", json={"email": "new@example.com"}, headers=owner)
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"]["code"] == "duplicate_invitation"

    assert client.get(f"/api/invitations/{token}").json()["status"] == "pending"

    mismatch = client.post(
        f"/api/invitations/{token}/accept", json={}, headers=as_user("x", "other@example.com")
    )
    assert mismatch.status_code == 403
    assert mismatch.json()["detail"]["code"] == "email_mismatch"

    accepted = client.post(
        f"/api/invitations/{token}/accept",
        json={"name": "New Person"},
        headers=as_user("new-user", "new@example.com"),
    )
    assert accepted.status_code == 200
    assert accepted.json() == {
        "id": "new-user",
        "email": "new@example.com",
        "name": "New Person",
        "image": None,
    }
    reused = client.post(
        f"/api/invitations/{token}/accept", json={}, headers=as_user("new-user", "new@example.com")
    )
    assert reused.status_code == 409
    assert reused.json()["detail"]["code"] == "already_used"

    friends = client.get("/api/connections", headers=owner).json()
    assert [item["connected_user"]["id"] for item in friends] == ["new-user"]


@pytest.mark.integration
def test_expired_invitation_returns_410(client, owner_id, clock, as_user) -> None:
    created = client.post(
        "/api/invitations",
        json={"email": "late@example.com"},
        headers=as_user(owner_id, OWNER_EMAIL),
    )
    token = created.json()["token"]
    clock.advance(days=31)

    lookup = client.get(f"/api/invitations/{token}")
    accept = client.post(
        f"/api/invitations/{token}/accept", json={}, headers=as_user("late", "late@example.com")
    )

    assert lookup.json()["status"] == "expired"
    assert accept.status_code == 410
    assert accept.json()["detail"]["code"] == "expired"


@pytest.mark.integration
def test_invitation_cancel_and_delete(client, owner_id, guest_id, as_user) -> None:
    owner = as_user(owner_id, OWNER_EMAIL)
    created = client.post("/api/invitations", json={"email": "maybe@example.com"}, headers=owner)
    invitation_id = created.json()["id"]

    stranger = client.post(
        f"/api/invitations/{invitation_id}/cancel", headers=as_user(guest_id, GUEST_EMAIL)
    )
    cancelled = client.post(f"/api/invitations/{invitation_id}/cancel", headers=owner)
    deleted = client.delete(f"/api/invitations/{invitation_id}", headers=owner)

    assert stranger.status_code == 403
    assert cancelled.json() == {"cancelled": True}
    assert deleted.json() == {"deleted": True}
    assert client.get("/api/invitations", headers=owner).json() == []


@pytest.mark.integration
def test_inviting_a_member_sends_connection_request(client, owner_id, guest_id, as_user) -> None:
    response = client.post(
        "/api/invitations", json={"email": GUEST_EMAIL}, headers=as_user(owner_id, OWNER_EMAIL)
    )

    assert response.status_code == 201
    assert response.json()["status"] == "connection-sent"
    requests = client.get("/api/connections/requests", headers=as_user(guest_id, GUEST_EMAIL))
    assert [item["user_id"] for item in requests.json()] == [owner_id]


@pytest.mark.integration
def test_invitation_email_stub(client) -> None:
    ok = client.post(
        "/api/invitations/email",
        json={"email": "friend@example.com", "invitation_url": "http://localhost/invite/abc"},
    )
    bad = client.post(
        "/api/invitations/email",
        json={"email": "nope", "invitation_url": "http://localhost/invite/abc"},
    )

    assert ok.json() == {"invitation_url": "http://localhost/invite/abc"}
    assert bad.status_code == 422
