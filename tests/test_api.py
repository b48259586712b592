"""API tests against the FastAPI app with an in-memory SQLite database."""

from datetime import datetime, timedelta, timezone

import jwt

from src.config import settings

SUBMISSION = {
    "subject": "No water",
    "description": "There has been no water in our sector since Monday, the pipe is broken.",
    "citizen_contact": "+250788000000",
    "language_preference": "english",
}


async def _submit(client, **overrides):
    response = await client.post("/api/submissions", json={**SUBMISSION, **overrides})
    assert response.status_code == 201, response.text
    return response.json()["data"]["ticket_id"]


async def _submission_id(client, ticket_id):
    response = await client.get(f"/api/submissions/{ticket_id}")
    return response.json()["data"]["id"]


# ========== Citizen endpoints ==========

async def test_create_submission(client):
    response = await client.post("/api/submissions", json=SUBMISSION)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Submission received successfully."
    assert body["data"]["ticket_id"].startswith("CE-")
    assert "X-Correlation-ID" in response.headers


async def test_consecutive_submissions_get_sequential_ids(client):
    first = await _submit(client)
    second = await _submit(client)

    assert first != second
    assert int(second.rsplit("-", 1)[1]) == int(first.rsplit("-", 1)[1]) + 1


async def test_track_submission(client):
    ticket_id = await _submit(client)

    response = await client.get(f"/api/submissions/{ticket_id}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["ticket_id"] == ticket_id
    assert data["status"] == "Received"
    assert data["category"]["name"] == "Water & Sanitation"
    assert data["agency"]["name"] == "Water Agency"
    assert "citizen_contact" not in data


async def test_kinyarwanda_submission_is_classified(client):
    ticket_id = await _submit(
        client,
        description="Amashanyarazi yabuze mu kagari kacu kuva ejo",
        language_preference="kinyarwanda",
    )

    data = (await client.get(f"/api/submissions/{ticket_id}")).json()["data"]

    assert data["category"]["name"] == "Electricity"


async def test_unmatched_submission_goes_to_general(client):
    ticket_id = await _submit(client, description="I want to thank the sector leaders for their work")

    data = (await client.get(f"/api/submissions/{ticket_id}")).json()["data"]

    assert data["category"]["name"] == "General"
    assert data["agency"]["name"] == "Local Government"


async def test_explicit_category_overrides_description(client):
    categories = (await client.get("/api/categories")).json()["data"]
    electricity = next(c for c in categories if c["name"] == "Electricity")

    ticket_id = await _submit(client, category_id=electricity["id"])
    data = (await client.get(f"/api/submissions/{ticket_id}")).json()["data"]

    assert data["category_id"] == electricity["id"]
    assert data["agency_id"] == electricity["agency_id"]


async def test_track_unknown_ticket(client):
    response = await client.get("/api/submissions/CE-19990101-00001")

    assert response.status_code == 404
    assert response.json()["success"] is False


async def test_invalid_submission_is_rejected(client):
    response = await client.post("/api/submissions", json={**SUBMISSION, "description": "short"})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "description" in response.json()["message"]


async def test_unsupported_language_is_rejected(client):
    response = await client.post("/api/submissions", json={**SUBMISSION, "language_preference": "french"})

    assert response.status_code == 400


async def test_list_agencies_and_categories(client):
    agencies = (await client.get("/api/agencies")).json()["data"]
    categories = (await client.get("/api/categories")).json()["data"]

    assert {a["name"] for a in agencies} == {"Water Agency", "Energy Agency", "Local Government"}
    assert len(categories) == 4


async def test_stats_summary(client):
    await _submit(client)
    await _submit(client, description="Blackout in the whole village since yesterday")

    data = (await client.get("/api/stats/summary")).json()["data"]

    assert data["total_submissions"] == 2
    assert data["submissions_by_status"] == {"Received": 2}
    assert {c["category_name"]: c["count"] for c in data["submissions_by_category"]} == {
        "Water & Sanitation": 1,
        "Electricity": 1,
    }


# ========== Admin endpoints ==========

async def test_login_rejects_bad_password(client):
    response = await client.post("/api/admin/login", json={"username": "water_admin", "password": "nope"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials."


async def test_login_returns_user(client):
    response = await client.post(
        "/api/admin/login", json={"username": "water_admin", "password": "water-pass"}
    )

    data = response.json()["data"]
    assert data["token_type"] == "bearer"
    assert data["user"]["username"] == "water_admin"
    assert data["user"]["role"] == "admin"


async def test_admin_routes_require_token(client):
    assert (await client.get("/api/admin/submissions")).status_code == 401

    response = await client.get("/api/admin/submissions", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


async def test_expired_token_is_rejected(client):
    claims = {"sub": "1", "exp": datetime.now(timezone.utc) - timedelta(minutes=1)}
    token = jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    response = await client.get("/api/admin/submissions", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


async def test_admin_lists_only_own_agency(client, login):
    water_ticket = await _submit(client)
    await _submit(client, description="Blackout in the whole village since yesterday")
    headers = await login("water_admin", "water-pass")

    response = await client.get("/api/admin/submissions", headers=headers)

    data = response.json()["data"]
    assert [s["ticket_id"] for s in data] == [water_ticket]
    assert data[0]["citizen_contact"] == SUBMISSION["citizen_contact"]


async def test_admin_updates_submission(client, login):
    ticket_id = await _submit(client)
    submission_id = await _submission_id(client, ticket_id)
    headers = await login("water_admin", "water-pass")

    response = await client.put(
        f"/api/admin/submissions/{submission_id}",
        json={"status": "In Progress", "admin_response": "A technician is on the way."},
        headers=headers,
    )

    assert response.status_code == 200
    tracked = (await client.get(f"/api/submissions/{ticket_id}")).json()["data"]
    assert tracked["status"] == "In Progress"
    assert tracked["admin_response"] == "A technician is on the way."
    assert tracked["category"]["name"] == "Water & Sanitation"


async def test_update_without_response_keeps_it(client, login):
    ticket_id = await _submit(client)
    submission_id = await _submission_id(client, ticket_id)
    headers = await login("water_admin", "water-pass")
    await client.put(
        f"/api/admin/submissions/{submission_id}",
        json={"status": "In Progress", "admin_response": "On it."},
        headers=headers,
    )

    response = await client.put(
        f"/api/admin/submissions/{submission_id}", json={"status": "Resolved"}, headers=headers
    )

    data = response.json()["data"]
    assert data["status"] == "Resolved"
    assert data["admin_response"] == "On it."


async def test_other_agency_cannot_update(client, login):
    ticket_id = await _submit(client)
    submission_id = await _submission_id(client, ticket_id)
    headers = await login("energy_admin", "energy-pass")

    response = await client.put(
        f"/api/admin/submissions/{submission_id}", json={"status": "Closed"}, headers=headers
    )

    assert response.status_code == 403
    tracked = (await client.get(f"/api/submissions/{ticket_id}")).json()["data"]
    assert tracked["status"] == "Received"


async def test_non_admin_role_is_forbidden(client, login):
    ticket_id = await _submit(client)
    submission_id = await _submission_id(client, ticket_id)
    headers = await login("water_viewer", "viewer-pass")

    listed = await client.get("/api/admin/submissions", headers=headers)
    updated = await client.put(
        f"/api/admin/submissions/{submission_id}", json={"status": "Closed"}, headers=headers
    )

    assert listed.status_code == 403
    assert listed.json()["message"] == "Forbidden: Access is restricted to administrators."
    assert updated.status_code == 403
    tracked = (await client.get(f"/api/submissions/{ticket_id}")).json()["data"]
    assert tracked["status"] == "Received"


async def test_invalid_status_is_rejected(client, login):
    ticket_id = await _submit(client)
    submission_id = await _submission_id(client, ticket_id)
    headers = await login("water_admin", "water-pass")

    response = await client.put(
        f"/api/admin/submissions/{submission_id}", json={"status": "Done"}, headers=headers
    )

    assert response.status_code == 400


async def test_unknown_submission_is_not_found(client, login):
    headers = await login("water_admin", "water-pass")

    response = await client.get("/api/admin/submissions/9999", headers=headers)

    assert response.status_code == 404


# ========== Operational ==========

async def test_root(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert "intake" in response.json()["modules"]


async def test_health_reports_lexicon(client):
    response = await client.get("/health")

    checks = response.json()["checks"]
    assert checks["lexicon"] == {"english": 4, "kinyarwanda": 3}
