"""Tests for the analysis engine (AI path with rule-based degrade).

Tests cover:
- Empty portfolio short-circuit
- Successful AI result passthrough, including recovery after retries
- Degrade to fallback for every AI failure mode, with an error note
- Regenerate, cache clear and health delegation
"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import httpx
import pytest

from projectdesk.core.analysis import AnalysisEngine, RateLimitExceeded
from projectdesk.core.analysis.fallback import EMPTY_STATE_TEXT
from projectdesk.core.analysis.models import ProjectSnapshot


NOW = datetime(2024, 6, 1)


# ── Fixtures ──────────────────────────────────────────────────────────────


def _completion(content: str) -> dict:
    return {"choices": [{"message": {"content": content}}]}


def _four_statuses():
    return [
        ProjectSnapshot(name=f"P-{status}", status=status, start_date=NOW - timedelta(days=10),
                        end_date=NOW + timedelta(days=10))
        for status in ("PENDING", "IN_PROGRESS", "DONE", "CANCELLED")
    ]


def _failing_handler(status=503):
    def handler(request):
        return httpx.Response(status)
    return handler


def _unreachable_handler(request):
    raise httpx.ConnectError("connection refused", request=request)


# ── Tests ─────────────────────────────────────────────────────────────────


class TestAnalysisEngine:
    """Tests for AnalysisEngine.get_project_analysis."""

    def test_empty_portfolio_returns_onboarding_without_ai_call(self):
        ai = MagicMock()
        engine = AnalysisEngine(ai)

        result = engine.get_project_analysis([])

        assert result.raw_text == EMPTY_STATE_TEXT
        assert result.structured_sections is None
        ai.request_summary.assert_not_called()

    def test_ai_unreachable_degrades_to_fallback(self, make_ai_client):
        engine = AnalysisEngine(make_ai_client(_unreachable_handler), clock=lambda: NOW)

        result = engine.get_project_analysis(_four_statuses())

        assert result.is_fallback is True
        assert result.structured_sections["state_distribution"] == {
            "PENDING": 1, "IN_PROGRESS": 1, "DONE": 1, "CANCELLED": 1,
        }
        assert "• Focus on finishing projects to demonstrate progress" in \
            result.structured_sections["recommendations"]
        assert result.error_note == (
            "AI service temporarily unavailable: The AI service is not reachable"
        )

    def test_recovers_on_third_attempt(self, make_ai_client, ai_answer):
        attempts = []

        def handler(request):
            attempts.append(request)
            if len(attempts) < 3:
                return httpx.Response(503)
            return httpx.Response(200, json=_completion(ai_answer))

        engine = AnalysisEngine(make_ai_client(handler, max_retries=3))

        result = engine.get_project_analysis(_four_statuses())

        assert len(attempts) == 3
        assert result.is_fallback is False
        assert result.error_note is None
        assert result.raw_text == ai_answer

    @pytest.mark.parametrize("handler,overrides", [
        (_failing_handler(503), {}),
        (_failing_handler(401), {}),
        (_failing_handler(429), {}),
        (_unreachable_handler, {}),
        (_failing_handler(200), {}),
        (_failing_handler(503), {"api_key": ""}),
    ])
    def test_never_raises_for_any_ai_failure(self, make_ai_client, handler, overrides):
        engine = AnalysisEngine(make_ai_client(handler, **overrides))

        result = engine.get_project_analysis(_four_statuses())

        assert result.is_fallback is True
        assert result.raw_text
        assert result.error_note

    def test_rate_limit_degrades_without_network_call(self):
        ai = MagicMock()
        ai.request_summary.side_effect = RateLimitExceeded("Rate limit exceeded")
        engine = AnalysisEngine(ai, clock=lambda: NOW)

        result = engine.get_project_analysis(_four_statuses())

        assert result.is_fallback is True
        assert result.error_note.endswith("Analysis request limit reached. Please wait a moment")
        ai.execute_with_retry.assert_not_called()

    def test_unexpected_exception_degrades(self):
        ai = MagicMock()
        ai.request_summary.side_effect = RuntimeError("boom")
        engine = AnalysisEngine(ai)

        result = engine.get_project_analysis(_four_statuses())

        assert result.is_fallback is True
        assert result.error_note.startswith("AI service temporarily unavailable")


class TestEngineOperations:
    """Tests for regenerate_analysis, clear_cache and health_check."""

    def test_regenerate_uses_its_own_note(self, make_ai_client):
        engine = AnalysisEngine(make_ai_client(_failing_handler(500)))

        result = engine.regenerate_analysis(_four_statuses())

        assert result.is_fallback is True
        assert result.error_note.startswith("Could not regenerate analysis: ")

    def test_regenerate_always_calls_ai(self):
        ai = MagicMock()
        ai.request_summary.return_value = MagicMock(word_count=10)
        engine = AnalysisEngine(ai)

        engine.regenerate_analysis(_four_statuses())
        engine.regenerate_analysis(_four_statuses())

        assert ai.request_summary.call_count == 2

    def test_clear_cache_acknowledges(self):
        ack = AnalysisEngine(MagicMock()).clear_cache()
        assert ack["message"] == "Analysis cache cleared successfully"
        assert ack["timestamp"].endswith("Z")

    def test_health_check_delegates(self):
        ai = MagicMock()
        ai.check_health.return_value = {"status": "healthy"}
        assert AnalysisEngine(ai).health_check() == {"status": "healthy"}
