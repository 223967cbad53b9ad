from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class Link:
    title: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "url": self.url}


@dataclass(frozen=True)
class ChatTurn:
    role: Role
    content: str
    links: tuple[Link, ...] = ()
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    )

    def __post_init__(self):
        if self.role not in ("user", "assistant"):
            raise ValueError(f"Unsupported chat role: {self.role}")

    @classmethod
    def from_user(cls, message: str) -> "ChatTurn":
        return cls(role="user", content=message)


@dataclass(frozen=True)
class ChatResult:
    """Assembled answer for one stateless chat request."""

    turn: ChatTurn
    thinking: dict[str, Any] = field(default_factory=dict)
    data: dict[str, Any] = field(default_factory=dict)
    success: bool = True

    @property
    def answer(self) -> str:
        return self.turn.content

    @property
    def links(self) -> tuple[Link, ...]:
        return self.turn.links

    def to_dict(self) -> dict[str, Any]:
        return {
            "answer": self.answer,
            "links": [link.to_dict() for link in self.links],
            "thinking": self.thinking,
            "data": self.data,
            "success": self.success,
        }
