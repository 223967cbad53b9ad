"""
Models package: request-scoped domain objects and the unified LLM response.
"""

from .chat import ChatResult, ChatTurn, Link
from .query import Query, Sport, TemporalQualifier
from .unified_response import NormalizedError, TokenUsage, UnifiedResponse

__all__ = [
    "ChatResult",
    "ChatTurn",
    "Link",
    "NormalizedError",
    "Query",
    "Sport",
    "TemporalQualifier",
    "TokenUsage",
    "UnifiedResponse",
]
