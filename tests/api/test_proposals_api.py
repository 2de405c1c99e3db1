def test_artist_submits_proposal(client, venue, artist, auth_headers, create_gig):
    gig = create_gig(venue)

    response = client.post(
        f"/api/v1/artists/gigs/{gig['id']}/proposal",
        json={"fullGigAmount": 400, "coverLetter": "  Swing quartet, own PA  "},
        headers=auth_headers(artist),
    )

    assert response.status_code == 201
    proposal = response.json()["data"]["proposal"]
    assert proposal["status"] == "pending"
    assert proposal["gigId"] == gig["id"]
    assert proposal["artistId"] == artist.id
    assert proposal["fullGigAmount"] == 400
    assert proposal["hourlyRate"] is None
    assert proposal["coverLetter"] == "Swing quartet, own PA"
    assert proposal["hiredAt"] is None
    assert proposal["completionRequest"] is None


def test_venue_cannot_submit_proposal(client, venue, auth_headers, create_gig):
    gig = create_gig(venue)

    response = client.post(
        f"/api/v1/artists/gigs/{gig['id']}/proposal",
        json={"hourlyRate": 90, "coverLetter": "Pick me"},
        headers=auth_headers(venue),
    )

    assert response.status_code == 403
    assert response.json()["message"] == "Only artist users can submit proposals"


def test_proposal_for_unknown_gig(client, artist, auth_headers):
    response = client.post(
        "/api/v1/artists/gigs/999/proposal",
        json={"hourlyRate": 90, "coverLetter": "Pick me"},
        headers=auth_headers(artist),
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Gig not found"


def test_proposal_needs_exactly_one_payment(client, venue, artist, auth_headers, create_gig):
    gig = create_gig(venue)

    neither = client.post(
        f"/api/v1/artists/gigs/{gig['id']}/proposal",
        json={"coverLetter": "Pick me"},
        headers=auth_headers(artist),
    )
    both = client.post(
        f"/api/v1/artists/gigs/{gig['id']}/proposal",
        json={"hourlyRate": 90, "fullGigAmount": 300, "coverLetter": "Pick me"},
        headers=auth_headers(artist),
    )

    assert neither.status_code == 400
    assert neither.json()["error"][0]["message"] == "Either hourly rate or full gig amount must be provided"
    assert both.status_code == 400
    assert both.json()["error"][0]["message"] == "Cannot provide both hourly rate and full gig amount"


def test_proposal_needs_cover_letter(client, venue, artist, auth_headers, create_gig):
    gig = create_gig(venue)

    response = client.post(
        f"/api/v1/artists/gigs/{gig['id']}/proposal",
        json={"hourlyRate": 90, "coverLetter": "   "},
        headers=auth_headers(artist),
    )

    assert response.status_code == 400
    assert {"field": "coverLetter", "message": "Cover letter is required"} in response.json()["error"]


def test_venue_hires_artist(client, venue, artist, auth_headers, create_gig, submit_proposal):
    gig = create_gig(venue)
    proposal = submit_proposal(gig["id"], artist)

    response = client.post(f"/api/v1/venues/proposals/{proposal['id']}/hire", headers=auth_headers(venue))

    assert response.status_code == 200
    hired = response.json()["data"]["proposal"]
    assert hired["status"] == "in-progress"
    assert hired["hiredAt"] is not None


def test_second_hire_is_rejected_and_keeps_first_timestamp(client, venue, auth_headers, hired_proposal):
    _, proposal = hired_proposal

    response = client.post(f"/api/v1/venues/proposals/{proposal['id']}/hire", headers=auth_headers(venue))

    assert response.status_code == 400
    assert response.json()["message"] == "This proposal is no longer pending"

    listing = client.get(f"/api/v1/venues/gigs/{proposal['gigId']}/proposals", headers=auth_headers(venue))
    assert listing.json()["data"]["proposals"][0]["hiredAt"] == proposal["hiredAt"]


def test_hire_unknown_proposal(client, venue, auth_headers):
    response = client.post("/api/v1/venues/proposals/4242/hire", headers=auth_headers(venue))

    assert response.status_code == 404
    assert response.json()["message"] == "Proposal not found"


def test_hire_on_someone_elses_gig_is_hidden(client, venue, other_venue, artist, auth_headers, create_gig, submit_proposal):
    gig = create_gig(venue)
    proposal = submit_proposal(gig["id"], artist)

    response = client.post(
        f"/api/v1/venues/proposals/{proposal['id']}/hire", headers=auth_headers(other_venue)
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Gig not found or you don't have permission"


def test_artist_cannot_hire(client, venue, artist, auth_headers, create_gig, submit_proposal):
    gig = create_gig(venue)
    proposal = submit_proposal(gig["id"], artist)

    response = client.post(f"/api/v1/venues/proposals/{proposal['id']}/hire", headers=auth_headers(artist))

    assert response.status_code == 403
    assert response.json()["message"] == "Only venue users can hire artists"


def test_listings(client, venue, artist, other_artist, auth_headers, create_gig, submit_proposal):
    gig = create_gig(venue)
    first = submit_proposal(gig["id"], artist)
    second = submit_proposal(gig["id"], artist, hourlyRate=120)
    submit_proposal(gig["id"], other_artist)

    mine = client.get("/api/v1/artists/proposals", headers=auth_headers(artist))
    received = client.get(f"/api/v1/venues/gigs/{gig['id']}/proposals", headers=auth_headers(venue))

    assert [p["id"] for p in mine.json()["data"]["proposals"]] == [second["id"], first["id"]]
    assert len(received.json()["data"]["proposals"]) == 3
