"""Live sports data retrieval for the chat service."""

from .base_retriever import DataRetriever
from .contracts import PlayerStatRecord, ResultKind, RetrievalResult, SearchResult, StructuredEvent
from .factory import create_retriever_from_config

__all__ = [
    "DataRetriever",
    "PlayerStatRecord",
    "ResultKind",
    "RetrievalResult",
    "SearchResult",
    "StructuredEvent",
    "create_retriever_from_config",
]
