"""Tests for the search-backed retriever with the HTTP client stubbed out."""

import pytest

import tools.web.search_providers as providers
from models.query import Query, Sport
from tools.web.contracts import ResultKind
from tools.web.search_retriever import (
    NO_RESULTS_MESSAGE,
    RATE_LIMIT_MESSAGE,
    VALIDATION_MESSAGE,
    SearchRetriever,
)


class StubResponse:
    def __init__(self, status_code=200, payload=None, reason_phrase="OK"):
        self.status_code = status_code
        self._payload = payload or {}
        self.reason_phrase = reason_phrase

    def json(self):
        return self._payload


def install_client(monkeypatch, response=None, error=None):
    """Replace httpx.AsyncClient in the providers module; returns the call log."""
    calls = []

    class StubAsyncClient:
        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def get(self, url, **kwargs):
            calls.append(("GET", url, kwargs))
            if error:
                raise error
            return response

        async def post(self, url, **kwargs):
            calls.append(("POST", url, kwargs))
            if error:
                raise error
            return response

    monkeypatch.setattr(providers.httpx, "AsyncClient", StubAsyncClient)
    return calls


def brave_payload(count):
    return {
        "web": {
            "results": [
                {
                    "title": f"Result {i}",
                    "description": f"Lakers beat Warriors {i}",
                    "url": f"https://www.espn.com/nba/story/{i}",
                }
                for i in range(count)
            ]
        }
    }


def query(raw="Lakers vs Warriors score"):
    return Query(raw=raw, sport=Sport.NBA, optimized=f"{raw} NBA")


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["", "null", "undefined", "   "])
async def test_blank_query_is_rejected_without_http(monkeypatch, raw):
    calls = install_client(monkeypatch, response=StubResponse(payload=brave_payload(1)))
    result = await SearchRetriever(api_key="brave-key").search(Query(raw=raw))

    assert result.kind is ResultKind.VALIDATION_ERROR
    assert result.text == VALIDATION_MESSAGE
    assert calls == []


@pytest.mark.asyncio
async def test_missing_key_fails_fast(monkeypatch):
    calls = install_client(monkeypatch, response=StubResponse(payload=brave_payload(1)))
    result = await SearchRetriever(api_key=None).search(query())

    assert result.kind is ResultKind.CONFIG_ERROR
    assert result.text == "Brave API key is not available."
    assert calls == []


@pytest.mark.asyncio
async def test_rate_limit_is_distinct(monkeypatch):
    install_client(monkeypatch, response=StubResponse(429, reason_phrase="Too Many Requests"))
    result = await SearchRetriever(api_key="brave-key").search(query())

    assert result.kind is ResultKind.RATE_LIMITED
    assert result.text == RATE_LIMIT_MESSAGE


@pytest.mark.asyncio
async def test_other_error_status_includes_code(monkeypatch):
    install_client(monkeypatch, response=StubResponse(503, reason_phrase="Service Unavailable"))
    result = await SearchRetriever(api_key="brave-key").search(query())

    assert result.kind is ResultKind.PROVIDER_ERROR
    assert result.text == "API error: 503 Service Unavailable"


@pytest.mark.asyncio
async def test_error_in_body_is_provider_error(monkeypatch):
    install_client(monkeypatch, response=StubResponse(payload={"error": {"message": "bad token"}}))
    result = await SearchRetriever(api_key="brave-key").search(query())

    assert result.kind is ResultKind.PROVIDER_ERROR
    assert result.text == "Brave API error: bad token"


@pytest.mark.asyncio
async def test_zero_results_is_not_an_error(monkeypatch):
    install_client(monkeypatch, response=StubResponse(payload={"web": {"results": []}}))
    result = await SearchRetriever(api_key="brave-key").search(query())

    assert result.kind is ResultKind.NO_RESULTS
    assert result.text == NO_RESULTS_MESSAGE


@pytest.mark.asyncio
async def test_network_error_is_reported(monkeypatch):
    install_client(monkeypatch, error=ConnectionError("connection refused"))
    result = await SearchRetriever(api_key="brave-key").search(query())

    assert result.kind is ResultKind.ERROR
    assert result.text == "Unable to fetch data: connection refused. This might be due to network issues."


@pytest.mark.asyncio
async def test_success_renders_blocks_and_sends_optimized_query(monkeypatch):
    calls = install_client(monkeypatch, response=StubResponse(payload=brave_payload(2)))
    result = await SearchRetriever(api_key="brave-key").search(query())

    assert result.kind is ResultKind.SEARCH_RESULTS
    assert result.text == (
        "Title: Result 0\nDescription: Lakers beat Warriors 0\n"
        "Source: https://www.espn.com/nba/story/0\nURL: https://www.espn.com/nba/story/0\n\n"
        "Title: Result 1\nDescription: Lakers beat Warriors 1\n"
        "Source: https://www.espn.com/nba/story/1\nURL: https://www.espn.com/nba/story/1"
    )
    assert result.urls == ("https://www.espn.com/nba/story/0", "https://www.espn.com/nba/story/1")

    method, url, kwargs = calls[0]
    assert method == "GET"
    assert url == providers.BRAVE_SEARCH_URL
    assert kwargs["params"] == {"q": "Lakers vs Warriors score NBA", "count": 10}
    assert kwargs["headers"]["X-Subscription-Token"] == "brave-key"


@pytest.mark.asyncio
async def test_results_capped_at_ten(monkeypatch):
    install_client(monkeypatch, response=StubResponse(payload=brave_payload(15)))
    result = await SearchRetriever(api_key="brave-key").search(query())

    assert result.count == 10
    assert result.text.count("Title: ") == 10


@pytest.mark.asyncio
async def test_snippet_used_when_description_missing(monkeypatch):
    payload = {"web": {"results": [{"title": "T", "snippet": "S", "url": "https://nba.com/a"}]}}
    install_client(monkeypatch, response=StubResponse(payload=payload))
    result = await SearchRetriever(api_key="brave-key").search(query())

    assert "Description: S" in result.text


@pytest.mark.asyncio
async def test_tavily_provider(monkeypatch):
    payload = {"results": [{"title": "Recap", "content": "Lakers win", "url": "https://www.nba.com/recap"}]}
    calls = install_client(monkeypatch, response=StubResponse(payload=payload))
    result = await SearchRetriever(api_key="tvly-key", provider="tavily").search(query())

    assert result.kind is ResultKind.SEARCH_RESULTS
    assert "Description: Lakers win" in result.text
    method, url, kwargs = calls[0]
    assert method == "POST"
    assert kwargs["json"]["query"] == "Lakers vs Warriors score NBA"


@pytest.mark.asyncio
async def test_tavily_missing_key_message(monkeypatch):
    install_client(monkeypatch)
    result = await SearchRetriever(api_key="", provider="tavily").search(query())
    assert result.text == "Tavily API key is not available."


def test_unknown_provider_rejected():
    with pytest.raises(ValueError):
        SearchRetriever(api_key="k", provider="bing")
