"""Build the configured LLM client."""

from config.config import Config, ConfigurationError, ModelType

from .base_client import BaseAIClient
from .google_gemini_client import GeminiClient
from .openai_client import OpenAIClient


def create_llm_client(config: Config) -> BaseAIClient:
    """
    Create the client for LLM_PROVIDER.

    Raises:
        ConfigurationError: If the provider is unknown or its API key is missing
    """
    api_key = config.require_llm_credentials()
    options = {"temperature": config.LLM_TEMPERATURE, "max_tokens": config.LLM_MAX_TOKENS}

    if config.LLM_PROVIDER == ModelType.GEMINI.value:
        return GeminiClient(api_key=api_key, model_name=config.DEFAULT_MODEL, **options)
    if config.LLM_PROVIDER == ModelType.OPENAI.value:
        return OpenAIClient(
            api_key=api_key,
            model_name=config.DEFAULT_MODEL,
            base_url=config.OPENAI_BASE_URL,
            **options,
        )
    raise ConfigurationError(f"Unsupported LLM provider: {config.LLM_PROVIDER}")
