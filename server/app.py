"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from server.dependencies import get_config
from server.routes import chat, health
from server.utils import summarize_validation_errors
from utils.logger import extra_fields, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    logger.info("FastAPI server starting up")
    config = get_config()
    if not config.validate():
        logger.warning(
            "Configuration incomplete; chat requests will fail until it is fixed",
            extra=extra_fields(
                llm_provider=config.LLM_PROVIDER,
                retrieval_strategy=config.RETRIEVAL_STRATEGY,
                response_mode=config.CHAT_RESPONSE_MODE,
            ),
        )

    yield

    logger.info("FastAPI server shutting down")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = summarize_validation_errors(exc.errors())
    logger.warning(
        "Request validation failed",
        extra=extra_fields(path=request.url.path, errors=errors),
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": errors})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error",
        extra=extra_fields(path=request.url.path, error_type=type(exc).__name__, error=str(exc)),
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app() -> FastAPI:
    """Factory function to create FastAPI application."""
    app = FastAPI(
        title="Sports Scout Chat API",
        description="Stateless NBA/NFL question answering over live sports data",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health.router)
    app.include_router(chat.router)

    return app
