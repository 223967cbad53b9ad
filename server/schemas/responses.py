"""Pydantic response models for FastAPI endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from models.chat import ChatResult


class LinkDTO(BaseModel):
    title: str
    url: str


class ChatResponseDTO(BaseModel):
    answer: str
    links: list[LinkDTO] = Field(default_factory=list)
    thinking: dict[str, Any] = Field(default_factory=dict)
    data: dict[str, Any] = Field(default_factory=dict)
    success: bool

    @classmethod
    def from_chat_result(cls, result: ChatResult) -> "ChatResponseDTO":
        return cls(
            answer=result.answer,
            links=[LinkDTO(title=link.title, url=link.url) for link in result.links],
            thinking=result.thinking,
            data=result.data,
            success=result.success,
        )


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str = "1.0.0"
