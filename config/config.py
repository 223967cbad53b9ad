import os
from dotenv import load_dotenv
from pathlib import Path
from enum import Enum


class ModelType(Enum):
    """Supported model types."""
    OPENAI = "openai"
    GEMINI = "gemini"


class RetrievalStrategy(Enum):
    """Deployable retrieval strategies."""
    SEARCH = "search"
    BROWSE = "browse"
    BROWSE_THEN_SEARCH = "browse_then_search"
    SEARCH_THEN_BROWSE = "search_then_browse"


class ConfigurationError(ValueError):
    """Raised when a required credential or binding is missing."""


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


class Config:
    """Configuration management for the application."""

    def __init__(self):
        """Initialize configuration with environment variables."""
        # Load environment variables from .env file if it exists
        env_path = Path(__file__).parent.parent / '.env'
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # LLM Configuration
        self.LLM_PROVIDER = os.getenv('LLM_PROVIDER', ModelType.OPENAI.value).lower()
        self.OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
        self.OPENAI_BASE_URL = os.getenv('OPENAI_BASE_URL') or None
        self.GOOGLE_GEMINI_API_KEY = os.getenv('GOOGLE_GEMINI_API_KEY')
        self.DEFAULT_OPENAI_MODEL = os.getenv('DEFAULT_OPENAI_MODEL', 'gpt-4o-mini')
        self.DEFAULT_GEMINI_MODEL = os.getenv('DEFAULT_GEMINI_MODEL', 'gemini-2.5-flash-lite')
        self.LLM_TEMPERATURE = float(os.getenv('LLM_TEMPERATURE', '0.3'))
        self.LLM_MAX_TOKENS = int(os.getenv('LLM_MAX_TOKENS', '1024'))

        if self.LLM_PROVIDER == ModelType.GEMINI.value:
            self.DEFAULT_MODEL = self.DEFAULT_GEMINI_MODEL
        else:
            self.DEFAULT_MODEL = self.DEFAULT_OPENAI_MODEL

        # Retrieval Configuration
        self.RETRIEVAL_STRATEGY = os.getenv('RETRIEVAL_STRATEGY', RetrievalStrategy.SEARCH.value).lower()
        self.SEARCH_PROVIDER = os.getenv('SEARCH_PROVIDER', 'brave').lower()
        self.BRAVE_API_KEY = os.getenv('BRAVE_API_KEY')
        self.TAVILY_API_KEY = os.getenv('TAVILY_API_KEY')
        self.SEARCH_RESULT_COUNT = int(os.getenv('SEARCH_RESULT_COUNT', '10'))
        self.SEARCH_TIMEOUT_SECONDS = float(os.getenv('SEARCH_TIMEOUT_SECONDS', '10'))

        self.BROWSER_TIMEOUT_MS = int(os.getenv('BROWSER_TIMEOUT_MS', '15000'))
        self.BROWSER_HEADLESS = _env_flag('BROWSER_HEADLESS', 'true')
        self.SCOREBOARD_TIMEZONE = os.getenv('SCOREBOARD_TIMEZONE', 'America/New_York')

        # Heuristic only: months up to the cutoff still belong to last year's NFL season
        self.NFL_SEASON_CUTOFF_MONTH = int(os.getenv('NFL_SEASON_CUTOFF_MONTH', '8'))

        # Response Configuration
        self.CHAT_RESPONSE_MODE = os.getenv('CHAT_RESPONSE_MODE', 'json').lower()

    @property
    def search_api_key(self) -> str | None:
        """API key for the configured search provider."""
        if self.SEARCH_PROVIDER == 'tavily':
            return self.TAVILY_API_KEY
        return self.BRAVE_API_KEY

    def require_llm_credentials(self) -> str:
        """
        Return the API key for the configured LLM provider.

        Raises:
            ConfigurationError: If the provider is unknown or its key is missing
        """
        if self.LLM_PROVIDER == ModelType.OPENAI.value:
            if not self.OPENAI_API_KEY:
                raise ConfigurationError("OPENAI_API_KEY is not set")
            return self.OPENAI_API_KEY
        if self.LLM_PROVIDER == ModelType.GEMINI.value:
            if not self.GOOGLE_GEMINI_API_KEY:
                raise ConfigurationError("GOOGLE_GEMINI_API_KEY is not set")
            return self.GOOGLE_GEMINI_API_KEY
        raise ConfigurationError(
            f"Unknown LLM_PROVIDER '{self.LLM_PROVIDER}'. "
            f"Must be one of: {', '.join([e.value for e in ModelType])}"
        )

    def validate(self) -> bool:
        """
        Validate that all required configuration is present for the selected provider and strategy.

        Returns:
            bool: True if configuration is valid, False otherwise
        """
        try:
            self.require_llm_credentials()
        except ConfigurationError:
            return False

        if self.RETRIEVAL_STRATEGY not in {e.value for e in RetrievalStrategy}:
            return False
        if self.CHAT_RESPONSE_MODE not in {"json", "stream"}:
            return False
        return True

    def get_model_info(self) -> str:
        """
        Get information about the currently selected model.

        Returns:
            str: Formatted string with model information
        """
        if self.LLM_PROVIDER == ModelType.OPENAI.value:
            return f"OpenAI ({self.DEFAULT_MODEL})"
        elif self.LLM_PROVIDER == ModelType.GEMINI.value:
            return f"Google Gemini ({self.DEFAULT_MODEL})"
        return "Unknown"
