from dataclasses import dataclass
from enum import Enum


class Sport(str, Enum):
    NBA = "NBA"
    NFL = "NFL"
    BOTH = "both"

    @property
    def is_specific(self) -> bool:
        return self is not Sport.BOTH


class TemporalQualifier(str, Enum):
    EXPLICIT_YEAR = "explicit_year"
    RELATIVE = "relative"
    NONE = "none"


@dataclass(frozen=True)
class Query:
    """One user question after classification and optimization. Built per request."""

    raw: str
    sport: Sport = Sport.BOTH
    temporal: TemporalQualifier = TemporalQualifier.NONE
    optimized: str = ""

    @property
    def search_text(self) -> str:
        return self.optimized or self.raw

    def to_dict(self) -> dict[str, str]:
        return {
            "raw": self.raw,
            "sport": self.sport.value,
            "temporal": self.temporal.value,
            "optimized": self.optimized,
        }
