"""Turn completion text plus retrieval URLs into display text and source links."""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from urllib.parse import urlparse

from models.chat import Link

URL_PATTERN = re.compile(r"https?://[^\s<>\"'`]+")
TRAILING_PUNCTUATION = ".,;:!?)]}'\"*_"
SENTENCE_PUNCTUATION = ".,;:!?"
CLOSING_BRACKETS = {"(": ")", "[": "]"}

# a URL together with the space, bracket and emphasis markup wrapped around it
URL_SITE_PATTERN = re.compile(
    r"(?P<lead>[ \t]*)(?P<open>[(\[]?)(?P<wrap>[*_]{0,2})(?P<url>" + URL_PATTERN.pattern + ")"
)

MIN_URL_LENGTH = 10
MAX_URL_LENGTH = 500
MAX_LINKS = 8

KNOWN_SOURCES = {
    "espn.com": "ESPN",
    "nba.com": "NBA.com",
    "nfl.com": "NFL.com",
    "sports.yahoo.com": "Yahoo Sports",
    "bleacherreport.com": "Bleacher Report",
    "theathletic.com": "The Athletic",
    "sportingnews.com": "Sporting News",
    "cbssports.com": "CBS Sports",
    "foxsports.com": "Fox Sports",
    "nbcsports.com": "NBC Sports",
}


@dataclass(frozen=True)
class AssembledResponse:
    text: str
    links: tuple[Link, ...]


def normalize_url(url: str) -> str:
    return url.rstrip(TRAILING_PUNCTUATION)


def source_title(url: str) -> str:
    """Human-readable title for a URL's host."""
    host = (urlparse(url).hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    for domain, title in KNOWN_SOURCES.items():
        if host == domain or host.endswith("." + domain):
            return title
    first_label = host.split(".")[0] if host else ""
    return first_label.capitalize() or url


class ResponseAssembler:
    def __init__(self, max_links: int = MAX_LINKS):
        self.max_links = max_links

    def extract_links(self, text: str, captured_urls: Iterable[str] = ()) -> list[Link]:
        """
        Unique links from the text followed by captured URLs, in discovery order.

        URLs are compared after trailing punctuation is stripped, and the
        list is capped at ``max_links``.
        """
        seen: set[str] = set()
        links: list[Link] = []
        candidates = [m.group(0) for m in URL_PATTERN.finditer(text or "")]
        candidates.extend(captured_urls)

        for raw in candidates:
            url = normalize_url(raw)
            if not MIN_URL_LENGTH <= len(url) <= MAX_URL_LENGTH:
                continue
            if url in seen:
                continue
            seen.add(url)
            links.append(Link(title=source_title(url), url=url))
            if len(links) >= self.max_links:
                break
        return links

    @staticmethod
    def _strip_url_site(match: re.Match) -> str:
        raw = match.group("url")
        tail = raw[len(normalize_url(raw)):]
        wrap = match.group("wrap")
        if wrap and tail.startswith(wrap):
            tail = tail[len(wrap):]
        opener = match.group("open")
        if opener and tail.startswith(CLOSING_BRACKETS[opener]):
            opener, tail = "", tail[1:]
        if not opener and tail and tail[0] in SENTENCE_PUNCTUATION:
            return tail
        return match.group("lead") + opener + tail

    def clean_text(self, text: str) -> str:
        """
        Remove raw URLs from display text and collapse leftover whitespace.

        Brackets and emphasis wrapped around a URL go with it; punctuation
        that followed it stays. Text away from URLs is left alone.
        """
        stripped = URL_SITE_PATTERN.sub(self._strip_url_site, text or "")
        stripped = re.sub(r"[ \t]+", " ", stripped)
        stripped = re.sub(r" +\n", "\n", stripped)
        stripped = re.sub(r"\n{3,}", "\n\n", stripped)
        return stripped.strip()

    def assemble(self, text: str, captured_urls: Iterable[str] = ()) -> AssembledResponse:
        links = self.extract_links(text, captured_urls)
        return AssembledResponse(text=self.clean_text(text), links=tuple(links))
