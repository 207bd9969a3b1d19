"""Tests for the analysis routes through the HTTP layer."""

import httpx


def _seed(client, count=2):
    for i in range(count):
        client.post("/api/projects", json={
            "name": f"Project number {i}",
            "description": "Something worth tracking",
            "status": "IN_PROGRESS",
            "start_date": "2024-01-01T00:00:00Z",
            "end_date": "2030-01-01T00:00:00Z",
        })


def _down(request):
    return httpx.Response(503)


class TestGetAnalysis:
    """Tests for GET /api/analysis."""

    def test_empty_portfolio(self, client, ai_calls):
        body = client.get("/api/analysis").json()

        assert body["is_fallback"] is True
        assert body["structured_sections"] is None
        assert "no projects to analyze" in body["raw_text"]
        assert ai_calls[0] == []

    def test_ai_result(self, client, ai_calls, ai_answer):
        _seed(client)

        response = client.get("/api/analysis")

        assert response.status_code == 200
        body = response.json()
        assert body["is_fallback"] is False
        assert body["raw_text"] == ai_answer
        assert body["structured_sections"]["overview"].startswith("Two active projects")
        assert body["word_count"] > 0
        assert body["timestamp"].endswith("Z")

        prompt = ai_calls[0][0]["messages"][1]["content"]
        assert "Project number 0" in prompt and "Project number 1" in prompt

    def test_degrades_when_ai_down(self, make_client):
        client = make_client(_down)
        _seed(client, count=3)

        response = client.get("/api/analysis")

        assert response.status_code == 200
        body = response.json()
        assert body["is_fallback"] is True
        assert body["structured_sections"]["state_distribution"] == {"IN_PROGRESS": 3}
        assert body["error_note"] == (
            "AI service temporarily unavailable: The AI service reported an internal error"
        )

    def test_rate_limit_degrades(self, make_client, ai_calls):
        client = make_client(rate_limit_max_requests=1)
        _seed(client)

        first = client.get("/api/analysis").json()
        second = client.get("/api/analysis").json()

        assert first["is_fallback"] is False
        assert second["is_fallback"] is True
        assert second["error_note"].endswith("Analysis request limit reached. Please wait a moment")
        assert len(ai_calls[0]) == 1


class TestOtherAnalysisRoutes:
    """Tests for regenerate, cache and health."""

    def test_regenerate(self, make_client):
        client = make_client(_down)
        _seed(client)

        body = client.post("/api/analysis/regenerate").json()

        assert body["is_fallback"] is True
        assert body["error_note"].startswith("Could not regenerate analysis")

    def test_clear_cache(self, client):
        body = client.delete("/api/analysis/cache").json()
        assert body["message"] == "Analysis cache cleared successfully"

    def test_health_ok(self, client):
        response = client.get("/api/analysis/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_health_reports_rate_limit_window(self, client):
        _seed(client)
        client.get("/api/analysis")

        rate_limit = client.get("/api/analysis/health").json()["rate_limit"]

        assert rate_limit["request_count"] == 1
        assert rate_limit["max_requests"] == 50
        assert rate_limit["window_seconds"] == 60

    def test_health_unhealthy(self, make_client):
        response = make_client(_down).get("/api/analysis/health")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["service"] == "deepseek-chat"
        assert "503" in body["error"]
        assert body["rate_limit"]["request_count"] == 0
