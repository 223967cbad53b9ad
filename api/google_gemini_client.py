import time
from collections.abc import Iterator

from google import genai

from models.unified_response import TokenUsage, UnifiedResponse
from utils.logger import get_logger

from .base_client import BaseAIClient

logger = get_logger(__name__)


def _split_messages(messages: list[dict[str, str]]) -> tuple[str, list[dict]]:
    """Gemini takes system text as a config field and calls the assistant 'model'."""
    system_parts = []
    contents = []
    for message in messages:
        if message["role"] == "system":
            system_parts.append(message["content"])
            continue
        role = "model" if message["role"] == "assistant" else "user"
        contents.append({"role": role, "parts": [{"text": message["content"]}]})
    return "\n\n".join(system_parts), contents


class GeminiClient(BaseAIClient):
    """
    A client for interacting with the Google Gemini API using the google.genai package.
    All responses are normalized to UnifiedResponse format.
    """

    provider = "gemini"

    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash-lite", **kwargs):
        super().__init__(api_key, model_name=model_name, **kwargs)

        if not api_key:
            raise ValueError("API key is required for Gemini")

        self.client = genai.Client(api_key=api_key)
        self.model_name = model_name

    def _config(self, system_instruction: str, **kwargs) -> dict:
        config = {
            "temperature": kwargs.get("temperature", self.temperature),
            "max_output_tokens": kwargs.get("max_tokens", self.max_tokens),
        }
        if system_instruction:
            config["system_instruction"] = system_instruction
        return config

    def get_completion(self, messages: list[dict[str, str]], **kwargs) -> UnifiedResponse:
        """
        Get a completion from the Gemini API.

        IMPORTANT: Never raises exceptions - returns UnifiedResponse with error instead
        """
        request_id = self._generate_request_id()
        start_time = time.time()
        model = kwargs.get("model", self.model_name)

        try:
            system_instruction, contents = _split_messages(messages)
            response = self.client.models.generate_content(
                model=model,
                contents=contents,
                config=self._config(system_instruction, **kwargs),
            )
            latency_ms = self._measure_latency(start_time)

            text = getattr(response, "text", None) or ""
            usage_metadata = getattr(response, "usage_metadata", None)
            token_usage = TokenUsage(
                prompt_tokens=getattr(usage_metadata, "prompt_token_count", 0) or 0,
                completion_tokens=getattr(usage_metadata, "candidates_token_count", 0) or 0,
                total_tokens=getattr(usage_metadata, "total_token_count", 0) or 0,
            )
            candidates = getattr(response, "candidates", None) or []
            finish_reason = self._normalize_finish_reason(
                getattr(candidates[0], "finish_reason", None) if candidates else None,
                provider="gemini",
            )

            logger.info(
                "Gemini completion successful",
                extra={
                    "extra_fields": {
                        "request_id": request_id,
                        "model": model,
                        "latency_ms": latency_ms,
                        "tokens": token_usage.total_tokens,
                    }
                },
            )

            return UnifiedResponse(
                request_id=request_id,
                text=text,
                provider=self.provider,
                model=model,
                latency_ms=latency_ms,
                token_usage=token_usage,
                finish_reason=finish_reason,
            )

        except Exception as e:
            latency_ms = self._measure_latency(start_time)
            error = self._normalize_error(e, provider=self.provider)

            logger.error(
                f"Gemini completion failed: {error.code}",
                extra={
                    "extra_fields": {
                        "request_id": request_id,
                        "model": model,
                        "error_code": error.code,
                        "error_message": error.message,
                    }
                },
            )

            return self._create_error_response(
                request_id=request_id, error=error, latency_ms=latency_ms, model=model
            )

    def stream_completion(self, messages: list[dict[str, str]], **kwargs) -> Iterator[str]:
        model = kwargs.get("model", self.model_name)
        system_instruction, contents = _split_messages(messages)
        for chunk in self.client.models.generate_content_stream(
            model=model,
            contents=contents,
            config=self._config(system_instruction, **kwargs),
        ):
            text = getattr(chunk, "text", None)
            if text:
                yield text
