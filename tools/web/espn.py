"""
ESPN public site API helpers: endpoint URLs and payload parsing.

Everything here is pure; network access lives in the browser session.
"""

import logging
import re
from datetime import date
from typing import Any

from models.query import Sport
from utils.logger import extra_fields

from .contracts import PlayerStatRecord, StructuredEvent

SITE_API_BASE = "https://site.api.espn.com/apis/site/v2/sports"
SCOREBOARD_PAGE = "https://www.espn.com/{league}/scoreboard"

# "Lakers 112 - Warriors 108 Final" (away team first, as the page lists it)
SCRAPE_PATTERN = re.compile(
    r"^\s*(?P<away>[A-Za-z0-9][A-Za-z0-9 .'&]*?)\s+(?P<away_score>\d{1,3})"
    r"\s+-\s+"
    r"(?P<home>[A-Za-z0-9][A-Za-z0-9 .'&]*?)\s+(?P<home_score>\d{1,3})"
    r"\s+(?P<status>[A-Za-z][^\n]*?)\s*$",
    re.MULTILINE,
)


def league_path(sport: Sport) -> tuple[str, str]:
    if sport is Sport.NFL:
        return "football", "nfl"
    return "basketball", "nba"


def scoreboard_url(sport: Sport, day: date) -> str:
    category, league = league_path(sport)
    return f"{SITE_API_BASE}/{category}/{league}/scoreboard?dates={day:%Y%m%d}"


def summary_url(sport: Sport, game_id: str) -> str:
    category, league = league_path(sport)
    return f"{SITE_API_BASE}/{category}/{league}/summary?event={game_id}"


def scoreboard_page_url(sport: Sport) -> str:
    return SCOREBOARD_PAGE.format(league=league_path(sport)[1])


def _score(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_event(event: dict[str, Any]) -> StructuredEvent | None:
    competitions = event.get("competitions") or []
    if not competitions:
        return None
    competitors = competitions[0].get("competitors") or []
    home = next((c for c in competitors if c.get("homeAway") == "home"), None)
    away = next((c for c in competitors if c.get("homeAway") == "away"), None)
    if home is None or away is None:
        return None

    status = (event.get("status") or {}).get("type") or {}
    links = event.get("links") or []
    return StructuredEvent(
        game_id=str(event.get("id", "")),
        scheduled_at=event.get("date", ""),
        status=status.get("detail") or status.get("shortDetail") or status.get("description", ""),
        home_team=(home.get("team") or {}).get("displayName", ""),
        home_score=_score(home.get("score")),
        away_team=(away.get("team") or {}).get("displayName", ""),
        away_score=_score(away.get("score")),
        source="api",
        url=links[0].get("href") if links else None,
    )


def parse_scoreboard(payload: dict[str, Any]) -> list[StructuredEvent]:
    """Map a scoreboard payload to StructuredEvents, skipping malformed entries."""
    events = []
    for raw in payload.get("events") or []:
        event = parse_event(raw)
        if event is not None:
            events.append(event)
    return events


def event_matches_teams(event: StructuredEvent, teams: list[str]) -> bool:
    """True when every team name appears in one of the event's competitors."""
    competitors = (event.home_team.lower(), event.away_team.lower())
    return all(any(team.lower() in name for name in competitors) for team in teams)


def find_player_stats(
    summary: dict[str, Any],
    player: str,
    game_id: str,
    logger: logging.Logger,
) -> PlayerStatRecord | None:
    """
    Scan a boxscore summary for a player and pair stat labels with values.

    A label/value length mismatch never yields a record; it is logged and
    the scan moves on.
    """
    wanted = player.lower()
    for team_block in (summary.get("boxscore") or {}).get("players") or []:
        team_name = (team_block.get("team") or {}).get("displayName", "")
        for group in team_block.get("statistics") or []:
            labels = group.get("labels") or []
            for entry in group.get("athletes") or []:
                name = (entry.get("athlete") or {}).get("displayName", "")
                if wanted not in name.lower():
                    continue
                values = entry.get("stats") or []
                if len(labels) != len(values):
                    logger.warning(
                        "Stat label/value length mismatch",
                        extra=extra_fields(
                            player=name,
                            game_id=game_id,
                            labels=len(labels),
                            values=len(values),
                        ),
                    )
                    continue
                return PlayerStatRecord(
                    player_name=name,
                    team_name=team_name,
                    game_id=game_id,
                    stats=dict(zip(labels, values)),
                )
    return None


def scrape_scores(text: str, url: str | None = None) -> list[StructuredEvent]:
    """Pattern-match visible scoreboard page text into scraped events."""
    events = []
    for index, match in enumerate(SCRAPE_PATTERN.finditer(text or "")):
        events.append(
            StructuredEvent(
                game_id=f"scraped-{index + 1}",
                scheduled_at="",
                status=match.group("status"),
                home_team=match.group("home"),
                home_score=int(match.group("home_score")),
                away_team=match.group("away"),
                away_score=int(match.group("away_score")),
                source="scraped",
                url=url,
            )
        )
    return events
