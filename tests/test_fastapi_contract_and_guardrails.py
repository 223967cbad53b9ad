"""
Test Suite: FastAPI Contract & Guardrail Validation

These tests exercise the public HTTP surface without calling real LLM
providers, search APIs or browsers:

1. Health & availability (`/health`)
2. Input validation: malformed JSON, missing/blank/extra fields -> 400
3. Configuration faults: missing LLM credential -> 500
4. End-to-end chat through the real orchestrator with a fake browser
   session and a fake LLM client
5. Raw streaming variant and the catch-all 500 handler

The orchestrator and config are injected with FastAPI dependency overrides.
"""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from config.config import Config
from orchestrator.core import SportsChatOrchestrator
from server import dependencies as deps
from server.app import create_app
from tools.web.browse_retriever import BrowseRetriever

pytestmark = pytest.mark.integration

GAME_URL = "https://www.espn.com/nba/game/_/gameId/401585001"


@pytest.fixture()
def orchestrator(make_llm, make_session, clock, scoreboard_payload):
    llm = make_llm(text=f"The Lakers beat the Warriors 112-108. Box score: {GAME_URL}")
    retriever = BrowseRetriever(
        session_factory=lambda: make_session(scoreboard=scoreboard_payload), clock=clock
    )
    return SportsChatOrchestrator(llm_client=llm, retriever=retriever)


def build_app(orchestrator=None, mode="json"):
    app = create_app()

    # Clear singleton cache to avoid cross-test leakage
    if hasattr(deps.get_orchestrator, "_instance"):
        delattr(deps.get_orchestrator, "_instance")

    app.dependency_overrides[deps.get_config] = lambda: SimpleNamespace(CHAT_RESPONSE_MODE=mode)
    if orchestrator is not None:
        app.dependency_overrides[deps.get_orchestrator] = lambda: orchestrator
    return app


@pytest.fixture()
def client(orchestrator):
    return TestClient(build_app(orchestrator))


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_unknown_path_is_404(client):
    assert client.get("/api/unknown").status_code == 404


def test_lakers_vs_warriors_returns_game_score(client):
    r = client.post("/api/chat", json={"message": "Lakers vs Warriors score"})
    assert r.status_code == 200

    body = r.json()
    assert body["success"] is True
    assert body["answer"] == "The Lakers beat the Warriors 112-108. Box score:"
    assert body["links"] == [{"title": "ESPN", "url": GAME_URL}]
    assert body["thinking"]["result_type"] == "game_score"

    data = body["data"]
    assert data["type"] == "game_score"
    event = data["events"][0]
    assert event["home_team"] == "Golden State Warriors"
    assert event["away_team"] == "Los Angeles Lakers"
    assert event["home_score"] == 108
    assert event["away_score"] == 112


def test_missing_message_is_400(client):
    assert client.post("/api/chat", json={}).status_code == 400


def test_malformed_json_is_400(client):
    r = client.post(
        "/api/chat",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400


@pytest.mark.parametrize(
    "payload",
    [
        {"message": ""},
        {"message": "   "},
        {"message": 42},
        {"message": "hi", "history": [{"role": "user", "content": "earlier"}]},
        {"query": "Lakers score"},
    ],
)
def test_invalid_bodies_are_400(client, payload):
    r = client.post("/api/chat", json=payload)
    assert r.status_code == 400
    assert "detail" in r.json()


def test_missing_llm_credential_is_500(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    monkeypatch.setenv("OPENAI_API_KEY", "")
    app = build_app()
    app.dependency_overrides[deps.get_config] = Config

    r = TestClient(app).post("/api/chat", json={"message": "Lakers vs Warriors score"})
    assert r.status_code == 500
    assert "OPENAI_API_KEY" in r.json()["detail"]


def test_stream_mode_returns_plain_text(orchestrator):
    client = TestClient(build_app(orchestrator, mode="stream"))
    r = client.post("/api/chat", json={"message": "Lakers vs Warriors score"})

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert r.headers["cache-control"] == "no-cache"
    assert r.text == "Lakers won 112-108."


def test_unexpected_fault_is_generic_500():
    class ExplodingOrchestrator:
        async def ask(self, message):
            raise RuntimeError("kaboom")

    client = TestClient(build_app(ExplodingOrchestrator()), raise_server_exceptions=False)
    r = client.post("/api/chat", json={"message": "Lakers vs Warriors score"})

    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}
