"""End-to-end tests through the HTTP layer."""
from foms.services.status_catalog import StatusCatalog


NEW_REQUEST = {
    "requested_datetime": "2026-03-10T14:30:00",
    "requestor_name": "Jane Doe",
    "requestor_org": "North Valley EMS",
    "requestor_phone": "(555) 010-2000",
    "facility": "Hospital A",
    "description": "After-hours access for equipment pickup",
    "contact": "Dr. Amy Foster",
    "poc_phone": "(555) 010-3000",
}


def _create(client, **overrides):
    body = dict(NEW_REQUEST)
    body.update(overrides)
    response = client.post("/api/requests", json=body)
    assert response.status_code == 201
    return response.json()["id"]


class TestRequestLifecycle:

    def test_create_then_get_round_trip(self, client, db_session):
        StatusCatalog(db_session).seed()
        request_id = _create(client, dfl_code="DFL-100")

        response = client.get(f"/api/requests/{request_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["status_code"] == "R"
        assert body["status_value"] == "Requested"
        assert body["dfl_code"] == "DFL-100"
        for key in ("requestor_name", "requestor_org", "facility", "contact", "poc_phone"):
            assert body[key] == NEW_REQUEST[key]

    def test_blank_required_field_is_rejected(self, client):
        body = dict(NEW_REQUEST, requestor_name="   ")
        assert client.post("/api/requests", json=body).status_code == 422

    def test_missing_request_is_404(self, client):
        assert client.get("/api/requests/no-such-id").status_code == 404

    def test_approve_then_filter_by_status(self, client, db_session, auth_headers):
        """Create, see it first in the default listing, approve, find it under Approved."""
        StatusCatalog(db_session).seed()
        request_id = _create(client)

        listing = client.get("/api/requests").json()
        assert listing["page"][0]["id"] == request_id

        response = client.put(
            f"/api/requests/{request_id}/status",
            json={"status_code": "A"},
            headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["status_value"] == "Approved"

        approved = client.get("/api/requests", params={"status_code": "A"}).json()
        assert [r["id"] for r in approved["page"]] == [request_id]

    def test_deny_then_search_by_reason(self, client, db_session, auth_headers):
        StatusCatalog(db_session).seed()
        request_id = _create(client)

        response = client.put(
            f"/api/requests/{request_id}/status",
            json={"status_code": "D", "denied_description": "Missing paperwork"},
            headers=auth_headers
        )
        assert response.json()["status_value"] == "Denied"

        found = client.get("/api/requests", params={"search_query": "Missing"}).json()
        assert [r["id"] for r in found["page"]] == [request_id]


class TestStatusErrors:

    def test_unauthenticated_transition_is_401(self, client):
        request_id = _create(client)

        response = client.put(f"/api/requests/{request_id}/status", json={"status_code": "A"})

        assert response.status_code == 401

    def test_invalid_token_is_401(self, client):
        request_id = _create(client)

        response = client.put(
            f"/api/requests/{request_id}/status",
            json={"status_code": "A"},
            headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401

    def test_deny_without_reason_is_422(self, client, auth_headers):
        request_id = _create(client)

        response = client.put(
            f"/api/requests/{request_id}/status",
            json={"status_code": "D", "denied_description": "  "},
            headers=auth_headers
        )

        assert response.status_code == 422

    def test_unknown_request_is_404(self, client, auth_headers):
        response = client.put(
            "/api/requests/no-such-id/status",
            json={"status_code": "A"},
            headers=auth_headers
        )
        assert response.status_code == 404

    def test_bad_cursor_is_422(self, client):
        assert client.get("/api/requests", params={"cursor": "garbage"}).status_code == 422


class TestStatusesAndSeeding:

    def test_seed_statuses_is_idempotent(self, client):
        client.post("/api/statuses/seed")
        response = client.post("/api/statuses/seed")

        assert [s["status_code"] for s in response.json()] == ["R", "D", "C", "A"]
        assert len(client.get("/api/statuses").json()) == 4

    def test_seed_mock_requires_sign_in(self, client):
        assert client.post("/api/requests/seed-mock").status_code == 401

    def test_seed_mock(self, client, auth_headers):
        response = client.post("/api/requests/seed-mock", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"inserted": 20}


class TestAuthGateEndpoints:

    def test_single_public_route_becomes_default(self, client):
        client.put("/api/auth-gate/settings", json={"route_path": "/foms", "requires_auth": False})

        state = client.get("/api/auth-gate/state").json()

        assert state == {"default_public_route": "/foms", "public_paths": ["/foms"]}
        assert client.get("/api/auth-gate/redirect", params={"path": "/"}).json() == {
            "redirect_to": "/foms"
        }

    def test_list_settings_and_routes(self, client):
        client.put("/api/auth-gate/settings", json={"route_path": "/foms", "requires_auth": False})

        settings = client.get("/api/auth-gate/settings").json()
        routes = client.get("/api/auth-gate/routes").json()

        assert settings == [{"route_path": "/foms", "requires_auth": False}]
        assert {"path": "/", "label": "Home", "requires_auth": True} in routes
