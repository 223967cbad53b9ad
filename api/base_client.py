import time
import uuid
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any

from models.unified_response import FinishReason, NormalizedError, TokenUsage, UnifiedResponse


class BaseAIClient(ABC):
    """
    Abstract base class for AI model clients.
    All model-specific clients should inherit from this class and implement its methods.

    Clients never raise from ``get_completion``: failures come back as a
    UnifiedResponse carrying a NormalizedError.
    """

    provider: str = "unknown"

    def __init__(self, api_key: str, **kwargs):
        """
        Initialize the AI client.

        Args:
            api_key: API key for the AI service
            **kwargs: Additional model-specific parameters
        """
        self.api_key = api_key
        self.model_name = kwargs.get("model_name")
        self.temperature = kwargs.get("temperature", 0.3)
        self.max_tokens = kwargs.get("max_tokens", 1024)

    @abstractmethod
    def get_completion(self, messages: list[dict[str, str]], **kwargs) -> UnifiedResponse:
        """
        Get a completion from the AI model.

        Args:
            messages: List of message dicts with 'role' and 'content' keys
            **kwargs: Additional parameters for the API call

        Returns:
            UnifiedResponse: Normalized response object
        """

    @abstractmethod
    def stream_completion(self, messages: list[dict[str, str]], **kwargs) -> Iterator[str]:
        """
        Stream a completion as text deltas.

        Unlike ``get_completion`` this may raise; the caller decides how a
        fault mid-stream ends the response.
        """

    # Shared helpers

    def _generate_request_id(self) -> str:
        return str(uuid.uuid4())

    def _measure_latency(self, start_time: float) -> int:
        return int((time.time() - start_time) * 1000)

    def _normalize_finish_reason(self, reason: Any, provider: str) -> FinishReason:
        if reason is None:
            return None
        value = str(getattr(reason, "name", reason)).lower()
        mapping = {
            "stop": "stop",
            "end_turn": "stop",
            "length": "length",
            "max_tokens": "length",
            "tool_calls": "tool",
            "function_call": "tool",
            "content_filter": "content_filter",
            "safety": "content_filter",
        }
        return mapping.get(value)

    def _normalize_error(self, exc: Exception, provider: str) -> NormalizedError:
        """Map a provider exception onto the shared error codes."""
        message = str(exc)
        lowered = message.lower()
        name = type(exc).__name__.lower()

        if isinstance(exc, TimeoutError) or "timeout" in name or "timed out" in lowered:
            code, retryable = "timeout", True
        elif "401" in lowered or "403" in lowered or "unauthorized" in lowered or "authentication" in name:
            code, retryable = "auth", False
        elif "429" in lowered or "rate limit" in lowered or "too many requests" in lowered or "ratelimit" in name:
            code, retryable = "rate_limit", True
        elif "400" in lowered or "bad request" in lowered or "badrequest" in name:
            code, retryable = "bad_request", False
        elif any(status in lowered for status in ("500", "502", "503", "504")) or "unavailable" in lowered:
            code, retryable = "provider_error", True
        else:
            code, retryable = "unknown", False

        return NormalizedError(
            code=code,
            message=message,
            provider=provider,
            retryable=retryable,
            details={"exception_type": type(exc).__name__},
        )

    def _create_error_response(
        self, request_id: str, error: NormalizedError, latency_ms: int, model: str
    ) -> UnifiedResponse:
        return UnifiedResponse(
            request_id=request_id,
            text="",
            provider=self.provider,
            model=model,
            latency_ms=latency_ms,
            token_usage=TokenUsage(),
            finish_reason="error",
            error=error,
        )
