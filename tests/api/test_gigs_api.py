from datetime import date, timedelta


def test_venue_creates_gig(client, venue, auth_headers, gig_payload):
    response = client.post("/api/v1/venues/gigs", json=gig_payload(), headers=auth_headers(venue))

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    assert body["message"] == "Gig created successfully"
    gig = body["data"]["gig"]
    assert gig["userId"] == venue.id
    assert gig["totalHours"] == "03:00:00"
    assert gig["hourlyRate"] == 100
    assert gig["fullGigAmount"] is None


def test_artist_cannot_create_gig(client, artist, auth_headers, gig_payload):
    response = client.post("/api/v1/venues/gigs", json=gig_payload(), headers=auth_headers(artist))

    assert response.status_code == 403
    assert response.json()["status"] == "fail"


def test_gig_with_both_payments_is_rejected(client, venue, auth_headers, gig_payload):
    response = client.post(
        "/api/v1/venues/gigs",
        json=gig_payload(fullGigAmount=500),
        headers=auth_headers(venue),
    )

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation Error"
    assert {"field": "payment", "message": "Cannot provide both hourly rate and full gig amount"} in body["error"]


def test_gig_missing_required_field_is_a_validation_error(client, venue, auth_headers, gig_payload):
    payload = gig_payload()
    del payload["venue"]
    response = client.post("/api/v1/venues/gigs", json=payload, headers=auth_headers(venue))

    assert response.status_code == 400
    assert any(error["field"] == "venue" for error in response.json()["error"])


def test_venue_lists_only_own_gigs(client, venue, other_venue, auth_headers, create_gig):
    create_gig(venue, name="Mine")
    create_gig(other_venue, name="Theirs")

    response = client.get("/api/v1/venues/gigs", headers=auth_headers(venue))

    assert response.status_code == 200
    data = response.json()["data"]
    assert [g["name"] for g in data["gigs"]] == ["Mine"]
    assert data["pagination"]["total"] == 1


def test_artist_browses_all_gigs_with_search_and_paging(client, venue, other_venue, artist, auth_headers, create_gig):
    create_gig(venue, name="Jazz Brunch")
    create_gig(other_venue, name="Rock Night")
    create_gig(venue, name="Late Jazz")

    response = client.get("/api/v1/artists/gigs?search=jazz&limit=1", headers=auth_headers(artist))

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["gigs"]) == 1
    assert data["pagination"] == {
        "total": 2,
        "page": 1,
        "limit": 1,
        "totalPages": 2,
        "hasNextPage": True,
        "hasPrevPage": False,
    }


def test_invalid_paging_is_rejected(client, artist, auth_headers):
    response = client.get("/api/v1/artists/gigs?page=0&limit=101", headers=auth_headers(artist))

    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["error"]}
    assert fields == {"page", "limit"}


def test_artist_gets_single_gig(client, venue, artist, auth_headers, create_gig):
    gig = create_gig(venue)

    response = client.get(f"/api/v1/artists/gigs/{gig['id']}", headers=auth_headers(artist))

    assert response.status_code == 200
    assert response.json()["data"]["gig"]["id"] == gig["id"]


def test_update_switches_payment_term(client, venue, auth_headers, create_gig):
    gig = create_gig(venue)

    response = client.patch(
        f"/api/v1/venues/gigs/{gig['id']}",
        json={"hourlyRate": None, "fullGigAmount": 750},
        headers=auth_headers(venue),
    )

    assert response.status_code == 200
    updated = response.json()["data"]["gig"]
    assert updated["hourlyRate"] is None
    assert updated["fullGigAmount"] == 750


def test_update_rechecks_invariants(client, venue, auth_headers, create_gig):
    gig = create_gig(venue)

    response = client.patch(
        f"/api/v1/venues/gigs/{gig['id']}",
        json={"fullGigAmount": 750},
        headers=auth_headers(venue),
    )

    assert response.status_code == 400


def test_other_venue_cannot_touch_gig(client, venue, other_venue, auth_headers, create_gig):
    gig = create_gig(venue)

    patch = client.patch(
        f"/api/v1/venues/gigs/{gig['id']}", json={"name": "Hijacked"}, headers=auth_headers(other_venue)
    )
    delete = client.delete(f"/api/v1/venues/gigs/{gig['id']}", headers=auth_headers(other_venue))

    assert patch.status_code == 404
    assert delete.status_code == 404


def test_delete_gig(client, venue, auth_headers, create_gig):
    gig = create_gig(venue)

    response = client.delete(f"/api/v1/venues/gigs/{gig['id']}", headers=auth_headers(venue))
    assert response.status_code == 204

    response = client.get(f"/api/v1/venues/gigs/{gig['id']}", headers=auth_headers(venue))
    assert response.status_code == 404
    assert response.json()["message"] == "Gig not found"


def test_times_with_negative_offset_match_gig_date(client, venue, auth_headers, gig_payload):
    payload = gig_payload()
    day = payload["date"]
    payload.update(startTime=f"{day}T20:00:00-05:00", endTime=f"{day}T23:00:00-05:00")

    response = client.post("/api/v1/venues/gigs", json=payload, headers=auth_headers(venue))

    assert response.status_code == 201, response.text
    gig = response.json()["data"]["gig"]
    assert gig["totalHours"] == "03:00:00"
    next_day = (date.fromisoformat(day) + timedelta(days=1)).isoformat()
    # Normalized to UTC for storage
    assert gig["startTime"] == f"{next_day}T01:00:00"


def test_short_gig_name_is_rejected(client, venue, auth_headers, gig_payload):
    response = client.post("/api/v1/venues/gigs", json=gig_payload(name="DJ"), headers=auth_headers(venue))

    assert response.status_code == 400
    assert {"field": "name", "message": "Gig name must be at least 3 characters long"} in response.json()["error"]
