"""Factory for creating the configured retriever from application config."""

from config.config import Config, RetrievalStrategy
from utils.logger import get_logger

from .base_retriever import DataRetriever
from .browse_retriever import BrowseRetriever
from .browser_session import BrowserSession
from .fallback import FallbackRetriever
from .search_retriever import SearchRetriever

logger = get_logger(__name__)


def create_search_retriever(config: Config) -> SearchRetriever:
    return SearchRetriever(
        api_key=config.search_api_key,
        provider=config.SEARCH_PROVIDER,
        count=config.SEARCH_RESULT_COUNT,
        timeout=config.SEARCH_TIMEOUT_SECONDS,
        logger=get_logger("tools.web.search_retriever"),
    )


def create_browse_retriever(config: Config) -> BrowseRetriever:
    def session_factory() -> BrowserSession:
        return BrowserSession(
            headless=config.BROWSER_HEADLESS,
            timeout_ms=config.BROWSER_TIMEOUT_MS,
            logger=get_logger("tools.web.browser_session"),
        )

    return BrowseRetriever(
        session_factory=session_factory,
        tz=config.SCOREBOARD_TIMEZONE,
        logger=get_logger("tools.web.browse_retriever"),
    )


def create_retriever_from_config(config: Config) -> DataRetriever:
    """
    Create the retriever for the configured strategy.

    Strategies:
        search: web search API only
        browse: headless browser against the sports data endpoints only
        browse_then_search / search_then_browse: primary + fallback

    Raises:
        ValueError: If RETRIEVAL_STRATEGY is not a known strategy
    """
    try:
        strategy = RetrievalStrategy(config.RETRIEVAL_STRATEGY)
    except ValueError:
        raise ValueError(
            f"Unknown RETRIEVAL_STRATEGY '{config.RETRIEVAL_STRATEGY}'. "
            f"Must be one of: {', '.join(e.value for e in RetrievalStrategy)}"
        ) from None

    if strategy is RetrievalStrategy.SEARCH:
        retriever: DataRetriever = create_search_retriever(config)
    elif strategy is RetrievalStrategy.BROWSE:
        retriever = create_browse_retriever(config)
    elif strategy is RetrievalStrategy.BROWSE_THEN_SEARCH:
        retriever = FallbackRetriever(create_browse_retriever(config), create_search_retriever(config))
    else:
        retriever = FallbackRetriever(create_search_retriever(config), create_browse_retriever(config))

    logger.info(f"Using {retriever.name} retriever")
    return retriever
