"""HTTP adapters for web search providers.

Adapters return the raw status so the retriever can tell rate limiting
apart from other provider failures.
"""

from dataclasses import dataclass, field
from typing import Any

import httpx

from .contracts import SearchResult

BRAVE_SEARCH_URL = "https://api.search.brave.com/res/v1/web/search"
TAVILY_SEARCH_URL = "https://api.tavily.com/search"


@dataclass
class ProviderResponse:
    status_code: int
    reason: str = ""
    results: list[SearchResult] = field(default_factory=list)
    error: str | None = None  # provider-reported error inside a 2xx body

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def _error_message(payload: Any) -> str | None:
    if not isinstance(payload, dict) or not payload.get("error"):
        return None
    error = payload["error"]
    if isinstance(error, dict):
        return str(error.get("message") or error.get("detail") or error)
    return str(error)


async def search_brave(
    *,
    query: str,
    count: int,
    api_key: str,
    base_url: str = BRAVE_SEARCH_URL,
    timeout: float = 10.0,
) -> ProviderResponse:
    """Search with Brave API and normalize results."""
    async with httpx.AsyncClient() as client:
        response = await client.get(
            base_url,
            params={"q": query, "count": count},
            headers={
                "Accept": "application/json",
                "X-Subscription-Token": api_key,
            },
            timeout=timeout,
        )

    if not 200 <= response.status_code < 300:
        return ProviderResponse(status_code=response.status_code, reason=response.reason_phrase)

    payload = response.json()
    error = _error_message(payload)
    if error:
        return ProviderResponse(status_code=response.status_code, error=error)

    results = (payload.get("web") or {}).get("results") or []
    return ProviderResponse(
        status_code=response.status_code,
        results=[
            SearchResult(
                title=item.get("title", ""),
                url=item.get("url", ""),
                description=item.get("description") or item.get("snippet") or "",
            )
            for item in results[:count]
        ],
    )


async def search_tavily(
    *,
    query: str,
    count: int,
    api_key: str,
    base_url: str = TAVILY_SEARCH_URL,
    timeout: float = 10.0,
) -> ProviderResponse:
    """Search with Tavily API and normalize results."""
    async with httpx.AsyncClient() as client:
        response = await client.post(
            base_url,
            json={
                "api_key": api_key,
                "query": query,
                "max_results": count,
                "search_depth": "basic",
            },
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )

    if not 200 <= response.status_code < 300:
        return ProviderResponse(status_code=response.status_code, reason=response.reason_phrase)

    payload = response.json()
    error = _error_message(payload)
    if error:
        return ProviderResponse(status_code=response.status_code, error=error)

    hits: list[SearchResult] = []
    for item in (payload.get("results") or [])[:count]:
        hits.append(
            SearchResult(
                title=item.get("title", ""),
                url=item.get("url", ""),
                description=item.get("content", "") or item.get("snippet", ""),
            )
        )
    return ProviderResponse(status_code=response.status_code, results=hits)
