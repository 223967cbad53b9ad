import logging
from abc import ABC, abstractmethod

from models.query import Query
from utils.logger import get_logger

from .contracts import ResultKind, RetrievalResult

PLACEHOLDER_QUERIES = {"null", "undefined"}


def is_blank_query(text: str | None) -> bool:
    """True for empty, whitespace-only, or placeholder ("null"/"undefined") text."""
    if text is None:
        return True
    stripped = text.strip()
    return not stripped or stripped in PLACEHOLDER_QUERIES


class DataRetriever(ABC):
    """
    Abstract capability: fetch live sports information for a query.

    Implementations must never raise out of ``search``; every failure is
    reported as a RetrievalResult whose kind names the condition.
    """

    name: str = "retriever"

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or get_logger(type(self).__module__)

    @abstractmethod
    async def search(self, query: Query) -> RetrievalResult:
        """
        Retrieve sports data for a query.

        Args:
            query: Classified and optimized query

        Returns:
            RetrievalResult describing data found or the failure condition
        """

    def _failure(self, kind: ResultKind, query: Query, message: str) -> RetrievalResult:
        return RetrievalResult(kind=kind, query=query.raw, text=message, source=self.name)
