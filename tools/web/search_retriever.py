"""
Search-backed retriever.

Sends the optimized query to a web search provider and renders the hits as
plain text blocks; the language model does the extraction from there.
"""

import logging

from models.query import Query
from utils.api_key_utils import mask_api_key
from utils.logger import extra_fields

from .base_retriever import DataRetriever, is_blank_query
from .contracts import ResultKind, RetrievalResult, SearchResult
from .search_providers import ProviderResponse, search_brave, search_tavily

MAX_RESULTS = 10

VALIDATION_MESSAGE = (
    "Query parameter is required. The tool needs a specific sports-related question "
    'like "NBA games yesterday" or "NFL stats today".'
)
RATE_LIMIT_MESSAGE = (
    "Rate limit exceeded (Free tier: 2,000 queries/month). Please try again later."
)
NO_RESULTS_MESSAGE = (
    "No relevant results found. Try rephrasing your query or check for current season data."
)

PROVIDERS = {
    "brave": ("Brave", search_brave),
    "tavily": ("Tavily", search_tavily),
}


def format_results(results: list[SearchResult]) -> str:
    """Render hits as Title/Description/Source/URL blocks separated by blank lines."""
    blocks = [
        f"Title: {r.title}\nDescription: {r.description}\nSource: {r.url}\nURL: {r.url}"
        for r in results
    ]
    return "\n\n".join(blocks).strip()


class SearchRetriever(DataRetriever):
    """Retriever backed by a third-party web search API (Brave or Tavily)."""

    name = "search"

    def __init__(
        self,
        api_key: str | None,
        provider: str = "brave",
        count: int = MAX_RESULTS,
        timeout: float = 10.0,
        logger: logging.Logger | None = None,
    ):
        super().__init__(logger)
        if provider not in PROVIDERS:
            raise ValueError(
                f"Unknown search provider '{provider}'. Must be one of: {', '.join(PROVIDERS)}"
            )
        self.api_key = api_key
        self.provider = provider
        self.count = min(count, MAX_RESULTS)
        self.timeout = timeout

    @property
    def provider_label(self) -> str:
        return PROVIDERS[self.provider][0]

    async def search(self, query: Query) -> RetrievalResult:
        if is_blank_query(query.raw):
            self.logger.warning(
                "Rejected blank search query",
                extra=extra_fields(provider=self.provider),
            )
            return self._failure(ResultKind.VALIDATION_ERROR, query, VALIDATION_MESSAGE)

        if not self.api_key:
            self.logger.error(
                "Search API key missing",
                extra=extra_fields(provider=self.provider),
            )
            return self._failure(
                ResultKind.CONFIG_ERROR,
                query,
                f"{self.provider_label} API key is not available.",
            )

        search_fn = PROVIDERS[self.provider][1]
        self.logger.info(
            "Searching web",
            extra=extra_fields(
                provider=self.provider,
                query=query.search_text,
                count=self.count,
                api_key=mask_api_key(self.api_key),
            ),
        )

        try:
            response = await search_fn(
                query=query.search_text,
                count=self.count,
                api_key=self.api_key,
                timeout=self.timeout,
            )
        except Exception as e:
            self.logger.error(
                "Search request failed",
                extra=extra_fields(provider=self.provider, error_type=type(e).__name__, error=str(e)),
            )
            return self._failure(
                ResultKind.ERROR,
                query,
                f"Unable to fetch data: {e}. This might be due to network issues.",
            )

        return self._interpret(query, response)

    def _interpret(self, query: Query, response: ProviderResponse) -> RetrievalResult:
        if response.status_code == 429:
            self.logger.warning("Search provider rate limited", extra=extra_fields(provider=self.provider))
            return self._failure(ResultKind.RATE_LIMITED, query, RATE_LIMIT_MESSAGE)

        if not response.ok:
            self.logger.warning(
                "Search provider returned error status",
                extra=extra_fields(
                    provider=self.provider,
                    status_code=response.status_code,
                    reason=response.reason,
                ),
            )
            return self._failure(
                ResultKind.PROVIDER_ERROR,
                query,
                f"API error: {response.status_code} {response.reason}".strip(),
            )

        if response.error:
            self.logger.warning(
                "Search provider reported error",
                extra=extra_fields(provider=self.provider, error=response.error),
            )
            return self._failure(
                ResultKind.PROVIDER_ERROR,
                query,
                f"{self.provider_label} API error: {response.error}",
            )

        results = response.results[:MAX_RESULTS]
        if not results:
            self.logger.info("Search returned no results", extra=extra_fields(provider=self.provider))
            return self._failure(ResultKind.NO_RESULTS, query, NO_RESULTS_MESSAGE)

        self.logger.info(
            "Search completed",
            extra=extra_fields(provider=self.provider, results_count=len(results)),
        )
        return RetrievalResult(
            kind=ResultKind.SEARCH_RESULTS,
            query=query.raw,
            text=format_results(results),
            results=tuple(results),
            urls=tuple(r.url for r in results if r.url),
            source=self.name,
        )
