"""Chat endpoint: one stateless sports question per request."""

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from config.config import Config
from models.chat import ChatTurn
from orchestrator.core import SportsChatOrchestrator
from server.dependencies import get_config, get_orchestrator
from server.schemas.requests import ChatRequest
from server.schemas.responses import ChatResponseDTO
from server.utils import STREAM_HEADERS, STREAM_MEDIA_TYPE
from utils.logger import extra_fields, get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Chat"])


@router.post("/chat", response_model=ChatResponseDTO)
async def chat(
    request: ChatRequest,
    orchestrator: SportsChatOrchestrator = Depends(get_orchestrator),
    config: Config = Depends(get_config),
):
    """Answer a sports question, as JSON or as a plain-text stream."""
    logger.info(
        "Chat request received",
        extra=extra_fields(mode=config.CHAT_RESPONSE_MODE, message_chars=len(request.message)),
    )

    if config.CHAT_RESPONSE_MODE == "stream":
        prepared = await orchestrator.prepare(ChatTurn.from_user(request.message))
        return StreamingResponse(
            orchestrator.stream_answer(prepared),
            media_type=STREAM_MEDIA_TYPE,
            headers=STREAM_HEADERS,
        )

    result = await orchestrator.ask(request.message)
    return ChatResponseDTO.from_chat_result(result)
