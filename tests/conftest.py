from collections.abc import Iterator
from datetime import datetime, timezone

import pytest
from dotenv import load_dotenv

from api.base_client import BaseAIClient
from models.unified_response import NormalizedError, TokenUsage, UnifiedResponse

# Load environment variables from .env file for tests
load_dotenv()

LAKERS_GAME_URL = "https://www.espn.com/nba/game/_/gameId/401585001"
CELTICS_GAME_URL = "https://www.espn.com/nba/game/_/gameId/401585002"


def fixed_clock() -> datetime:
    # 02:00 UTC on Jan 16 is still Jan 15 on the US east coast
    return datetime(2025, 1, 16, 2, 0, tzinfo=timezone.utc)


class FakeBrowserSession:
    """In-memory stand-in for BrowserSession keyed by URL fragments."""

    def __init__(
        self,
        scoreboard=None,
        summaries=None,
        page_text="",
        start_error: Exception | None = None,
        fetch_error: Exception | None = None,
    ):
        self.scoreboard = scoreboard if scoreboard is not None else {"events": []}
        self.summaries = summaries or {}
        self.text = page_text
        self.start_error = start_error
        self.fetch_error = fetch_error
        self.started = False
        self.close_calls = 0
        self.fetched: list[str] = []

    async def start(self):
        if self.start_error:
            raise self.start_error
        self.started = True

    async def fetch_json(self, url: str):
        self.fetched.append(url)
        if self.fetch_error:
            raise self.fetch_error
        if "/scoreboard" in url:
            return self.scoreboard
        game_id = url.rsplit("event=", 1)[-1]
        return self.summaries.get(game_id, {"boxscore": {"players": []}})

    async def page_text(self, url: str) -> str:
        self.fetched.append(url)
        return self.text

    async def close(self):
        self.close_calls += 1


class FakeLLMClient(BaseAIClient):
    """Deterministic LLM client; records the messages it was given."""

    provider = "fake"

    def __init__(self, text="OK", error: NormalizedError | None = None, chunks=None, stream_error=None):
        super().__init__(api_key="test-key", model_name="fake-model")
        self.text = text
        self.error = error
        self.chunks = chunks if chunks is not None else ["Lakers ", "won ", "112-108."]
        self.stream_error = stream_error
        self.calls: list[list[dict[str, str]]] = []

    def get_completion(self, messages, **kwargs) -> UnifiedResponse:
        self.calls.append(messages)
        if self.error:
            return self._create_error_response(
                request_id="req-fake", error=self.error, latency_ms=1, model=self.model_name
            )
        return UnifiedResponse(
            request_id="req-fake",
            text=self.text,
            provider=self.provider,
            model=self.model_name,
            latency_ms=1,
            token_usage=TokenUsage(prompt_tokens=10, completion_tokens=5),
            finish_reason="stop",
        )

    def stream_completion(self, messages, **kwargs) -> Iterator[str]:
        self.calls.append(messages)
        for chunk in self.chunks:
            yield chunk
        if self.stream_error:
            raise self.stream_error


@pytest.fixture
def clock():
    return fixed_clock


@pytest.fixture
def scoreboard_payload():
    """Two finished NBA games in the shape of the ESPN scoreboard endpoint."""
    return {
        "events": [
            {
                "id": "401585001",
                "date": "2025-01-15T03:00Z",
                "status": {"type": {"detail": "Final", "shortDetail": "Final"}},
                "competitions": [
                    {
                        "competitors": [
                            {
                                "homeAway": "home",
                                "score": "108",
                                "team": {"displayName": "Golden State Warriors"},
                            },
                            {
                                "homeAway": "away",
                                "score": "112",
                                "team": {"displayName": "Los Angeles Lakers"},
                            },
                        ]
                    }
                ],
                "links": [{"href": LAKERS_GAME_URL}],
            },
            {
                "id": "401585002",
                "date": "2025-01-15T00:30Z",
                "status": {"type": {"detail": "Final/OT"}},
                "competitions": [
                    {
                        "competitors": [
                            {
                                "homeAway": "home",
                                "score": "120",
                                "team": {"displayName": "Boston Celtics"},
                            },
                            {
                                "homeAway": "away",
                                "score": "117",
                                "team": {"displayName": "Miami Heat"},
                            },
                        ]
                    }
                ],
                "links": [{"href": CELTICS_GAME_URL}],
            },
        ]
    }


@pytest.fixture
def boxscore_payload():
    """Boxscore for the Lakers game with five stat labels per athlete."""
    return {
        "boxscore": {
            "players": [
                {
                    "team": {"displayName": "Los Angeles Lakers"},
                    "statistics": [
                        {
                            "labels": ["MIN", "PTS", "REB", "AST", "FG"],
                            "athletes": [
                                {
                                    "athlete": {"displayName": "Anthony Davis"},
                                    "stats": ["38", "27", "14", "3", "11-19"],
                                },
                                {
                                    "athlete": {"displayName": "LeBron James"},
                                    "stats": ["36", "31", "8", "9", "12-20"],
                                },
                            ],
                        }
                    ],
                },
                {
                    "team": {"displayName": "Golden State Warriors"},
                    "statistics": [
                        {
                            "labels": ["MIN", "PTS", "REB", "AST", "FG"],
                            "athletes": [
                                {
                                    "athlete": {"displayName": "Stephen Curry"},
                                    "stats": ["35", "29", "5", "7", "10-22"],
                                }
                            ],
                        }
                    ],
                },
            ]
        }
    }


@pytest.fixture
def make_session():
    return FakeBrowserSession


@pytest.fixture
def make_llm():
    return FakeLLMClient
