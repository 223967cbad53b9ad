import logging

from models.query import Query
from utils.logger import extra_fields

from .base_retriever import DataRetriever
from .contracts import ResultKind, RetrievalResult


class FallbackRetriever(DataRetriever):
    """
    Compose two retrievers as primary + fallback behind one interface.

    The fallback runs only when the primary produced no data. If both fail,
    the primary's result is returned since it reflects the preferred source.
    """

    def __init__(
        self,
        primary: DataRetriever,
        fallback: DataRetriever,
        logger: logging.Logger | None = None,
    ):
        super().__init__(logger)
        self.primary = primary
        self.fallback = fallback
        self.name = f"{primary.name}_then_{fallback.name}"

    async def search(self, query: Query) -> RetrievalResult:
        first = await self.primary.search(query)
        if first.ok or first.kind is ResultKind.VALIDATION_ERROR:
            return first

        self.logger.info(
            "Primary retriever produced no data, trying fallback",
            extra=extra_fields(
                primary=self.primary.name,
                fallback=self.fallback.name,
                primary_result=first.kind.value,
            ),
        )
        second = await self.fallback.search(query)
        return second if second.ok else first
