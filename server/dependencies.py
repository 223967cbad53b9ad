"""FastAPI dependencies for configuration and orchestrator access."""

from fastapi import Depends, HTTPException, status

from config.config import Config
from utils.logger import extra_fields, get_logger

logger = get_logger(__name__)


def get_config() -> Config:
    """Dependency to get application config (singleton pattern)."""
    if not hasattr(get_config, "_instance"):
        get_config._instance = Config()
    return get_config._instance


def build_orchestrator(config: Config):
    from api.factory import create_llm_client
    from orchestrator.core import SportsChatOrchestrator
    from orchestrator.query_optimizer import QueryOptimizer
    from tools.web import create_retriever_from_config

    llm_client = create_llm_client(config)
    retriever = create_retriever_from_config(config)
    optimizer = QueryOptimizer(season_cutoff_month=config.NFL_SEASON_CUTOFF_MONTH)
    return SportsChatOrchestrator(
        llm_client=llm_client,
        retriever=retriever,
        optimizer=optimizer,
        logger=get_logger("orchestrator.core"),
    )


def get_orchestrator(config: Config = Depends(get_config)):
    """
    Dependency to get orchestrator instance (singleton pattern).

    A missing credential or unknown binding is a server-side fault: 500,
    raised before any outbound call. Nothing is cached on failure.
    """
    if not hasattr(get_orchestrator, "_instance"):
        try:
            get_orchestrator._instance = build_orchestrator(config)
        except ValueError as e:  # ConfigurationError included
            logger.error(
                "Orchestrator configuration invalid",
                extra=extra_fields(error_type=type(e).__name__, error=str(e)),
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Server is missing required configuration: {e}",
            ) from e
    return get_orchestrator._instance
