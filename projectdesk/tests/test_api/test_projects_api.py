"""Tests for the project CRUD routes.

Tests cover:
- Create (201, defaults, sanitization) and validation failures (400 with details)
- Length limits measured on the trimmed input, before escaping
- Get / update / delete including 404s
- Listing filters and envelopes
- Server health and banner routes
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from projectdesk.api.app import create_app


def _payload(**overrides):
    data = {
        "name": "Website Redesign",
        "description": "Rebuild the public marketing site",
        "start_date": "2024-01-15T00:00:00Z",
        "end_date": "2024-06-30T00:00:00Z",
    }
    data.update(overrides)
    return data


def _fields(response):
    return {d["field"] for d in response.json()["details"]}


# ── Tests: Create ─────────────────────────────────────────────────────────


class TestCreateProject:
    """Tests for POST /api/projects."""

    def test_create(self, client):
        response = client.post("/api/projects", json=_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Project created successfully"
        assert body["data"]["status"] == "PENDING"
        assert body["data"]["start_date"] == "2024-01-15T00:00:00Z"
        assert isinstance(body["data"]["id"], int)

    def test_create_sanitizes_text(self, client):
        response = client.post("/api/projects", json=_payload(name="  <b>Launch</b> plan "))
        assert response.json()["data"]["name"] == "&lt;b&gt;Launch&lt;&#x2F;b&gt; plan"

    def test_missing_required_fields(self, client):
        response = client.post("/api/projects", json={"name": "Only a name"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Validation error"
        assert {"description", "start_date"} <= _fields(response)
        assert all(d["location"] == "body" for d in body["details"])

    def test_name_too_short(self, client):
        response = client.post("/api/projects", json=_payload(name="ab"))
        assert response.status_code == 400
        detail = response.json()["details"][0]
        assert detail["field"] == "name"
        assert detail["value"] == "ab"
        assert detail["message"].startswith("Name must be between 3 and 255")

    def test_length_counts_characters_before_escaping(self, client):
        response = client.post("/api/projects", json=_payload(name="<>"))

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "name"

    def test_name_at_max_length_with_escapable_characters(self, client):
        name = "&" + "a" * 254

        response = client.post("/api/projects", json=_payload(name=name))

        assert response.status_code == 201
        assert response.json()["data"]["name"] == "&amp;" + "a" * 254

    def test_description_length_counts_characters_before_escaping(self, client):
        short = client.post("/api/projects", json=_payload(description="<<<>>>"))
        assert short.status_code == 400
        assert "description" in _fields(short)

        longest = client.post("/api/projects", json=_payload(description="/" * 2000))
        assert longest.status_code == 201

    def test_invalid_status(self, client):
        response = client.post("/api/projects", json=_payload(status="ARCHIVED"))
        assert response.status_code == 400
        assert "status" in _fields(response)

    def test_start_date_in_future(self, client):
        future = (datetime.now(timezone.utc) + timedelta(days=5)).isoformat()
        response = client.post("/api/projects", json=_payload(start_date=future, end_date=None))
        assert response.status_code == 400
        assert "start_date" in _fields(response)

    def test_end_date_before_start(self, client):
        response = client.post("/api/projects", json=_payload(end_date="2024-01-01T00:00:00Z"))
        assert response.status_code == 400
        assert "End date must be after the start date" in response.json()["details"][0]["message"]


# ── Tests: Read / Update / Delete ─────────────────────────────────────────


class TestProjectLifecycle:
    """Tests for GET/PUT/DELETE /api/projects/{id}."""

    def test_get(self, client):
        created = client.post("/api/projects", json=_payload()).json()["data"]

        response = client.get(f"/api/projects/{created['id']}")

        assert response.status_code == 200
        assert response.json()["data"] == created

    def test_get_missing(self, client):
        response = client.get("/api/projects/999")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "Not found",
            "message": "Project with ID 999 not found",
        }

    def test_invalid_id(self, client):
        assert client.get("/api/projects/0").status_code == 400
        assert client.get("/api/projects/abc").status_code == 400

    def test_partial_update(self, client):
        created = client.post("/api/projects", json=_payload()).json()["data"]

        response = client.put(f"/api/projects/{created['id']}", json={"status": "DONE"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "DONE"
        assert data["name"] == created["name"]
        assert data["end_date"] == created["end_date"]

    def test_update_breaking_date_order(self, client):
        created = client.post("/api/projects", json=_payload()).json()["data"]

        response = client.put(
            f"/api/projects/{created['id']}", json={"end_date": "2023-12-31T00:00:00Z"}
        )

        assert response.status_code == 400
        assert response.json()["details"] == [
            {"field": "end_date", "message": "End date must be after the start date"}
        ]

    def test_update_missing(self, client):
        assert client.put("/api/projects/999", json={"status": "DONE"}).status_code == 404

    def test_delete(self, client):
        created = client.post("/api/projects", json=_payload()).json()["data"]

        response = client.delete(f"/api/projects/{created['id']}")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert client.get(f"/api/projects/{created['id']}").status_code == 404
        assert client.delete(f"/api/projects/{created['id']}").status_code == 404


# ── Tests: Listing ────────────────────────────────────────────────────────


class TestListProjects:
    """Tests for GET /api/projects."""

    def test_empty(self, client):
        body = client.get("/api/projects").json()
        assert body == {"success": True, "data": [], "count": 0, "total": 0}

    def test_newest_first_and_filter(self, client):
        client.post("/api/projects", json=_payload(name="First one"))
        client.post("/api/projects", json=_payload(name="Second one", status="DONE"))

        listed = client.get("/api/projects").json()
        assert [p["name"] for p in listed["data"]] == ["Second one", "First one"]

        done = client.get("/api/projects", params={"status": "DONE"}).json()
        assert [p["name"] for p in done["data"]] == ["Second one"]
        assert done["total"] == 1

    def test_sort_and_limit(self, client):
        for name in ("Charlie", "Alpha", "Bravo"):
            client.post("/api/projects", json=_payload(name=name))

        body = client.get(
            "/api/projects", params={"sort_by": "name", "sort_order": "asc", "limit": 2}
        ).json()

        assert [p["name"] for p in body["data"]] == ["Alpha", "Bravo"]
        assert body["count"] == 2
        assert body["total"] == 3

    def test_invalid_query(self, client):
        assert client.get("/api/projects", params={"limit": 101}).status_code == 400
        assert client.get("/api/projects", params={"sort_by": "password"}).status_code == 400
        assert client.get("/api/projects", params={"status": "archived"}).status_code == 400


# ── Tests: Service Routes ─────────────────────────────────────────────────


class TestServiceRoutes:
    """Tests for /health, / and unknown routes."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        database = response.json()["data"]["database"]
        assert database["status"] == "healthy"
        assert database["table_exists"] is True

    def test_banner(self, client):
        body = client.get("/").json()
        assert body["version"] == "1.0.0"
        assert body["endpoints"]["projects"] == "/api/projects"

    def test_unknown_route(self, client):
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json()["error"] == "Route not found"

    def test_health_database_down(self, app_settings, make_ai_client, ai_calls):
        db = MagicMock()
        db.health_check.return_value = {
            "status": "unhealthy", "database": "disconnected", "error": "refused",
        }
        app = create_app(settings=app_settings, db_manager=db, ai_client=make_ai_client(ai_calls[1]))

        response = TestClient(app).get("/health")

        assert response.status_code == 503
        body = response.json()
        assert body["success"] is False
        assert body["details"]["database"] == "disconnected"
