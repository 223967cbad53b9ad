"""Rewrite a raw sports question into a search-engine friendly query."""

import re
from collections.abc import Callable
from datetime import datetime, timezone

from models.query import Query, Sport, TemporalQualifier
from orchestrator.sport_classifier import SportClassifier

YEAR_PATTERN = re.compile(r"\b\d{4}\b")
WEEK_PATTERN = re.compile(r"week\s*\d+", re.IGNORECASE)
LAST_SEASON_PATTERN = re.compile(r"last (year|season)", re.IGNORECASE)

TEMPORAL_TERMS = (
    "today",
    "tonight",
    "yesterday",
    "this week",
    "this season",
    "last night",
    "tomorrow",
    "recent",
    "last game",
    "last year",
    "last season",
    "previous season",
)

BROAD_COVERAGE_SUFFIX = "NBA NFL basketball football sports scores stats"

DEFAULT_NFL_SEASON_CUTOFF_MONTH = 8


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class QueryOptimizer:
    """
    Builds an immutable Query from raw text.

    Rules run in a fixed order: explicit years win over inferred seasons,
    and only the literal "last year"/"last season" phrase is rewritten.
    Other relative phrases ("next season", "two years ago") pass through.
    """

    def __init__(
        self,
        classifier: SportClassifier | None = None,
        clock: Callable[[], datetime] = _utc_now,
        season_cutoff_month: int = DEFAULT_NFL_SEASON_CUTOFF_MONTH,
        suffix: str = BROAD_COVERAGE_SUFFIX,
    ):
        self._classifier = classifier or SportClassifier()
        self._clock = clock
        self._season_cutoff_month = season_cutoff_month
        self._suffix = suffix

    def build(self, raw: str) -> Query:
        sport = self._classifier.classify(raw)
        temporal = self.detect_temporal(raw)
        return Query(
            raw=raw,
            sport=sport,
            temporal=temporal,
            optimized=self.optimize(raw, sport),
        )

    def detect_temporal(self, text: str) -> TemporalQualifier:
        if YEAR_PATTERN.search(text or ""):
            return TemporalQualifier.EXPLICIT_YEAR
        if self._has_temporal_cue(text or ""):
            return TemporalQualifier.RELATIVE
        return TemporalQualifier.NONE

    def season_year(self, sport: Sport) -> int:
        now = self._clock()
        year = now.year
        if sport is Sport.NFL and now.month <= self._season_cutoff_month:
            year -= 1
        return year

    def season_qualifier(self, sport: Sport) -> str:
        year = self.season_year(sport)
        if sport is Sport.NBA:
            return f"{year}-{(year + 1) % 100:02d} season"
        if sport is Sport.NFL:
            return f"{year} season"
        return str(year)

    def optimize(self, raw: str, sport: Sport) -> str:
        text = raw or ""
        lowered = text.lower()
        has_year = bool(YEAR_PATTERN.search(text))
        has_temporal = self._has_temporal_cue(text)

        optimized = text
        if not has_year and not has_temporal:
            optimized = f"{text} {self.season_qualifier(sport)}"
        elif "last year" in lowered or "last season" in lowered:
            last_year = self._clock().year - 1
            optimized = LAST_SEASON_PATTERN.sub(f"{last_year} season", text, count=1)

        if sport is Sport.NBA and "nba" not in lowered:
            optimized += " NBA"
        elif sport is Sport.NFL and "nfl" not in lowered:
            optimized += " NFL"

        if self._suffix:
            optimized += f" {self._suffix}"
        return optimized

    def _has_temporal_cue(self, text: str) -> bool:
        lowered = text.lower()
        if any(term in lowered for term in TEMPORAL_TERMS):
            return True
        return bool(WEEK_PATTERN.search(text))
