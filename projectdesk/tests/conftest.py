"""Shared fixtures: in-memory database, stubbed AI transport, test app."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from projectdesk.api.app import create_app
from projectdesk.core.analysis import AIClient
from projectdesk.core.db import DatabaseManager
from projectdesk.setting import AISettings, AppSettings, DatabaseSettings, ServerSettings

AI_BASE_URL = "https://ai.test/v1"

AI_ANSWER = """## OVERVIEW
Two active projects and one finished.

## STATUS ANALYSIS
Most work is in progress.

## TIMELINE TRENDS
Deadlines cluster in the second quarter.

## IDENTIFIED RISKS
One project has no end date.

## RECOMMENDATIONS
Set an end date for every project."""


def completion_body(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def ai_settings():
    return AISettings(
        base_url=AI_BASE_URL,
        api_key="test-key",
        retry_base_seconds=0,
        retry_cap_seconds=0,
    )


@pytest.fixture
def make_ai_client(ai_settings):
    """Build an AIClient whose outbound calls go to `handler`."""
    clients = []

    def _make(handler, **overrides):
        settings = ai_settings.model_copy(update=overrides)
        http = httpx.Client(base_url=settings.base_url, transport=httpx.MockTransport(handler))
        client = AIClient(settings, http_client=http)
        clients.append(http)
        return client

    yield _make
    for http in clients:
        http.close()


@pytest.fixture
def ai_calls():
    """Recorded outbound requests plus a handler that answers with AI_ANSWER."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(json.loads(request.content))
        return httpx.Response(200, json=completion_body(AI_ANSWER))

    return calls, handler


@pytest.fixture
def db_manager():
    db = DatabaseManager("sqlite://")
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def app_settings(ai_settings):
    return AppSettings(
        ai=ai_settings,
        database=DatabaseSettings(url="sqlite://"),
        server=ServerSettings(),
    )


@pytest.fixture
def make_client(app_settings, db_manager, make_ai_client, ai_calls):
    """TestClient factory; pass an AI handler to override the default answer."""

    def _make(handler=None, **ai_overrides):
        ai_client = make_ai_client(handler or ai_calls[1], **ai_overrides)
        app = create_app(settings=app_settings, db_manager=db_manager, ai_client=ai_client)
        return TestClient(app, raise_server_exceptions=False)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def ai_answer():
    return AI_ANSWER
