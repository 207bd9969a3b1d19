"""Tests for GET /api/charts."""


def _create(client, name, status):
    client.post("/api/projects", json={
        "name": name,
        "description": "Chart fixture project",
        "status": status,
        "start_date": "2024-01-01T00:00:00Z",
    })


def test_charts_empty(client):
    data = client.get("/api/charts").json()["data"]

    assert data["pie_chart"]["labels"] == []
    assert data["pie_chart"]["datasets"][0]["data"] == []
    assert data["stats"] == {"total": 0, "completed": 0, "in_progress": 0, "pending": 0}
    assert data["last_updated"].endswith("Z")


def test_charts_counts(client):
    _create(client, "Done one", "DONE")
    _create(client, "Done two", "DONE")
    _create(client, "Running", "IN_PROGRESS")
    _create(client, "Dropped", "CANCELLED")

    response = client.get("/api/charts")

    assert response.status_code == 200
    data = response.json()["data"]
    pie = data["pie_chart"]
    assert dict(zip(pie["labels"], pie["datasets"][0]["data"])) == {
        "Done": 2, "In Progress": 1, "Cancelled": 1,
    }
    assert pie["datasets"][0]["backgroundColor"] == ["#FF6384", "#36A2EB", "#4BC0C0", "#FFCE56"]
    assert data["stats"] == {"total": 4, "completed": 2, "in_progress": 1, "pending": 0}
