"""Data contracts shared by every retriever."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class SearchResult:
    """Result from a search provider, in provider relevance order."""

    title: str
    url: str
    description: str = ""


@dataclass(frozen=True)
class StructuredEvent:
    """One game: identity, schedule, status and score."""

    game_id: str
    scheduled_at: str
    status: str
    home_team: str
    home_score: int | None
    away_team: str
    away_score: int | None
    source: str = "api"  # "api" | "scraped"
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "game_id": self.game_id,
            "scheduled_at": self.scheduled_at,
            "status": self.status,
            "home_team": self.home_team,
            "home_score": self.home_score,
            "away_team": self.away_team,
            "away_score": self.away_score,
            "source": self.source,
            "url": self.url,
        }

    def summary(self) -> str:
        home = f"{self.home_team} {self.home_score if self.home_score is not None else '-'}"
        away = f"{self.away_team} {self.away_score if self.away_score is not None else '-'}"
        return f"{away} @ {home} ({self.status})"


@dataclass(frozen=True)
class PlayerStatRecord:
    player_name: str
    team_name: str
    game_id: str
    stats: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "player_name": self.player_name,
            "team_name": self.team_name,
            "game_id": self.game_id,
            "stats": dict(self.stats),
        }


class ResultKind(str, Enum):
    SEARCH_RESULTS = "search_results"
    SCOREBOARD = "scoreboard"
    GAME_SCORE = "game_score"
    PLAYER_STATS = "player_stats"
    SCRAPED_SCORES = "scraped_scores"
    NO_RESULTS = "no_results"
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"
    CONFIG_ERROR = "config_error"
    RATE_LIMITED = "rate_limited"
    PROVIDER_ERROR = "provider_error"
    UNAVAILABLE = "unavailable"
    ERROR = "error"


DATA_KINDS = frozenset(
    {
        ResultKind.SEARCH_RESULTS,
        ResultKind.SCOREBOARD,
        ResultKind.GAME_SCORE,
        ResultKind.PLAYER_STATS,
        ResultKind.SCRAPED_SCORES,
    }
)


@dataclass(frozen=True)
class RetrievalResult:
    """
    Outcome of one retrieval attempt.

    Failures are values, not exceptions: ``kind`` names the condition and
    ``text`` carries the human-readable message handed to the language model.
    """

    kind: ResultKind
    query: str
    text: str = ""
    results: tuple[SearchResult, ...] = ()
    events: tuple[StructuredEvent, ...] = ()
    player_stats: PlayerStatRecord | None = None
    urls: tuple[str, ...] = ()
    source: str = ""

    @property
    def ok(self) -> bool:
        return self.kind in DATA_KINDS

    @property
    def count(self) -> int:
        if self.results:
            return len(self.results)
        if self.events:
            return len(self.events)
        return 1 if self.player_stats else 0

    def to_tool_output(self) -> str:
        """Render the result as the plain text the language model reads."""
        if self.text:
            return self.text
        if self.player_stats:
            record = self.player_stats
            stats = ", ".join(f"{label}: {value}" for label, value in record.stats.items())
            return f"{record.player_name} ({record.team_name}, game {record.game_id}): {stats}"
        if self.events:
            lines = [event.summary() for event in self.events]
            return "\n".join(lines)
        return ""

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.kind.value,
            "query": self.query,
            "source": self.source,
        }
        if self.results:
            payload["results"] = [
                {"title": r.title, "description": r.description, "url": r.url}
                for r in self.results
            ]
        if self.events:
            payload["events"] = [event.to_dict() for event in self.events]
        if self.player_stats:
            payload["player_stats"] = self.player_stats.to_dict()
        if not self.ok:
            payload["message"] = self.text
        return payload
