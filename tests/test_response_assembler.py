"""Tests for link extraction, deduplication, titling and text cleanup."""

import pytest

from orchestrator.response_assembler import ResponseAssembler, source_title


@pytest.fixture
def assembler():
    return ResponseAssembler()


def test_same_url_with_different_trailing_punctuation_is_one_link(assembler):
    text = (
        "Scores are at https://www.espn.com/nba/scoreboard. "
        "See also https://www.espn.com/nba/scoreboard, and (https://www.espn.com/nba/scoreboard)"
    )
    links = assembler.extract_links(text)
    assert len(links) == 1
    assert links[0].url == "https://www.espn.com/nba/scoreboard"
    assert links[0].title == "ESPN"


def test_links_capped_at_eight(assembler):
    text = " ".join(f"https://example.com/game/{i}" for i in range(20))
    links = assembler.extract_links(text)
    assert len(links) == 8
    assert links[0].url == "https://example.com/game/0"
    assert links[-1].url == "https://example.com/game/7"


def test_captured_urls_follow_text_urls_without_duplicates(assembler):
    text = "Recap: https://www.nba.com/game/lal-vs-gsw"
    captured = ["https://www.nba.com/game/lal-vs-gsw", "https://www.cbssports.com/nba/scoreboard/"]
    links = assembler.extract_links(text, captured)
    assert [link.url for link in links] == [
        "https://www.nba.com/game/lal-vs-gsw",
        "https://www.cbssports.com/nba/scoreboard/",
    ]
    assert [link.title for link in links] == ["NBA.com", "CBS Sports"]


def test_urls_outside_length_band_are_dropped(assembler):
    long_url = "https://example.com/" + "a" * 600
    links = assembler.extract_links(f"short http://x and long {long_url}")
    assert links == []


@pytest.mark.parametrize(
    "url, title",
    [
        ("https://www.espn.com/nfl/game", "ESPN"),
        ("https://sports.yahoo.com/nba/", "Yahoo Sports"),
        ("https://bleacherreport.com/nba", "Bleacher Report"),
        ("https://theathletic.com/nfl/", "The Athletic"),
        ("https://www.sportingnews.com/us/nba", "Sporting News"),
        ("https://www.foxsports.com/nfl", "Fox Sports"),
        ("https://www.nbcsports.com/nba", "NBC Sports"),
        ("https://www.nfl.com/scores/", "NFL.com"),
        ("https://www.hoopshype.com/salaries/", "Hoopshype"),
        ("https://basketball-reference.com/boxscores/", "Basketball-reference"),
    ],
)
def test_source_titles(url, title):
    assert source_title(url) == title


def test_clean_text_strips_urls_and_collapses_whitespace(assembler):
    text = "Lakers won (https://www.espn.com/nba/game/1).  Great   game\n\n\n\nSource: https://www.nba.com/x"
    assert assembler.clean_text(text) == "Lakers won. Great game\n\nSource:"


def test_assemble_returns_text_and_links(assembler):
    assembled = assembler.assemble(
        "Final: Lakers 112, Warriors 108 https://www.espn.com/nba/game/1",
        captured_urls=("https://www.espn.com/nba/game/1",),
    )
    assert assembled.text == "Final: Lakers 112, Warriors 108"
    assert len(assembled.links) == 1


def test_emphasized_url_and_plain_url_are_one_link(assembler):
    text = "Box score: **https://www.espn.com/nba/game/1** (also https://www.espn.com/nba/game/1)"
    links = assembler.extract_links(text)
    assert [link.url for link in links] == ["https://www.espn.com/nba/game/1"]


def test_clean_text_drops_emphasis_and_brackets_around_urls(assembler):
    text = "Box score: **https://www.espn.com/nba/game/1**\nRecap [ESPN](https://www.espn.com/nba/recap/1)."
    assert assembler.clean_text(text) == "Box score:\nRecap [ESPN]."


def test_clean_text_leaves_text_without_urls_alone(assembler):
    text = "Record (home) is 20-5 ; away [road] is 12-13 !"
    assert assembler.clean_text(text) == text
