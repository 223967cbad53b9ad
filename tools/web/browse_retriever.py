"""
Browse-backed retriever.

Drives a headless browser session against the ESPN site API to answer
scoreboard, specific-game and player-stat questions directly, falling back
to pattern-matching the HTML scoreboard page.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from models.query import Query
from orchestrator.sport_classifier import find_player_mentions, find_team_mentions
from utils.logger import extra_fields

from . import espn
from .base_retriever import DataRetriever, is_blank_query
from .browser_session import BrowserSession
from .contracts import ResultKind, RetrievalResult, StructuredEvent

SCOREBOARD_KEYWORDS = ("scoreboard", "games", "today", "yesterday")

EMPTY_QUERY_MESSAGE = "A sports question is required to browse for game data."


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BrowseRetriever(DataRetriever):
    """Retriever that reads structured game data through a browser session."""

    name = "browse"

    def __init__(
        self,
        session_factory: Callable[[], BrowserSession],
        clock: Callable[[], datetime] = _utc_now,
        tz: str = "America/New_York",
        logger: logging.Logger | None = None,
    ):
        super().__init__(logger)
        self._session_factory = session_factory
        self._clock = clock
        self._tz = ZoneInfo(tz)

    def target_date(self, text: str) -> date:
        today = self._clock().astimezone(self._tz).date()
        if "yesterday" in text.lower():
            return today - timedelta(days=1)
        return today

    async def search(self, query: Query) -> RetrievalResult:
        if is_blank_query(query.raw):
            return self._failure(ResultKind.VALIDATION_ERROR, query, EMPTY_QUERY_MESSAGE)

        session: BrowserSession | None = None
        try:
            try:
                session = self._session_factory()
                await session.start()
            except Exception as e:
                self.logger.error(
                    "Browser session unavailable",
                    extra=extra_fields(error_type=type(e).__name__, error=str(e)),
                )
                return self._failure(
                    ResultKind.UNAVAILABLE,
                    query,
                    f"Browser session is unavailable: {e}",
                )
            return await self._dispatch(session, query)
        except (PlaywrightTimeoutError, asyncio.TimeoutError) as e:
            self.logger.warning("Browser navigation timed out", extra=extra_fields(error=str(e)))
            return self._failure(
                ResultKind.ERROR,
                query,
                f"Timed out while loading sports data: {e}",
            )
        except Exception as e:
            self.logger.error(
                "Browse retrieval failed",
                extra=extra_fields(error_type=type(e).__name__, error=str(e)),
            )
            return self._failure(
                ResultKind.ERROR,
                query,
                f"Unable to load sports data: {e}",
            )
        finally:
            if session is not None:
                await self._release(session)

    async def _release(self, session: BrowserSession) -> None:
        try:
            await session.close()
        except Exception as e:
            self.logger.warning(
                "Browser session close failed",
                extra=extra_fields(error_type=type(e).__name__, error=str(e)),
            )

    async def _dispatch(self, session: BrowserSession, query: Query) -> RetrievalResult:
        text = query.raw.lower()
        day = self.target_date(text)
        events: list[StructuredEvent] | None = None

        async def load_events() -> list[StructuredEvent]:
            nonlocal events
            if events is None:
                url = espn.scoreboard_url(query.sport, day)
                self.logger.info("Fetching scoreboard", extra=extra_fields(url=url))
                events = espn.parse_scoreboard(await session.fetch_json(url))
            return events

        if any(keyword in text for keyword in SCOREBOARD_KEYWORDS):
            games = await load_events()
            if games:
                return self._events_result(ResultKind.SCOREBOARD, query, games)

        teams = find_team_mentions(query.raw, query.sport)
        if len(teams) >= 2:
            for event in await load_events():
                if espn.event_matches_teams(event, teams):
                    return self._events_result(ResultKind.GAME_SCORE, query, [event])
            self.logger.info("No game matched teams", extra=extra_fields(teams=teams))

        players = find_player_mentions(query.raw)
        if len(players) == 1:
            player = players[0]
            for event in await load_events():
                summary = await session.fetch_json(espn.summary_url(query.sport, event.game_id))
                record = espn.find_player_stats(summary, player, event.game_id, self.logger)
                if record is not None:
                    return RetrievalResult(
                        kind=ResultKind.PLAYER_STATS,
                        query=query.raw,
                        player_stats=record,
                        urls=(event.url,) if event.url else (),
                        source=self.name,
                    )
            self.logger.info("Player not found in boxscores", extra=extra_fields(player=player))

        page_url = espn.scoreboard_page_url(query.sport)
        scraped = espn.scrape_scores(await session.page_text(page_url), url=page_url)
        if scraped:
            return self._events_result(ResultKind.SCRAPED_SCORES, query, scraped)

        return self._failure(
            ResultKind.NOT_FOUND,
            query,
            f'No scoreboard, game or player data found for "{query.raw}".',
        )

    def _events_result(
        self, kind: ResultKind, query: Query, events: list[StructuredEvent]
    ) -> RetrievalResult:
        urls: list[str] = []
        for event in events:
            if event.url and event.url not in urls:
                urls.append(event.url)
        self.logger.info(
            "Browse retrieval succeeded",
            extra=extra_fields(result_type=kind.value, events=len(events)),
        )
        return RetrievalResult(
            kind=kind,
            query=query.raw,
            events=tuple(events),
            urls=tuple(urls),
            source=self.name,
        )
