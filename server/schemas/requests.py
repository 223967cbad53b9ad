"""Pydantic request models for FastAPI endpoints."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class ChatRequest(BaseModel):
    """One stateless chat request: the message is the only input."""

    model_config = ConfigDict(extra="forbid")

    message: StrictStr = Field(..., min_length=1)

    @field_validator("message")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be blank")
        return value
