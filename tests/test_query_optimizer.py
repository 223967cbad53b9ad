"""Tests for query optimization rules, using an injected clock."""

from datetime import datetime, timezone

import pytest

from models.query import Sport, TemporalQualifier
from orchestrator.query_optimizer import BROAD_COVERAGE_SUFFIX, QueryOptimizer


def at(year, month, day=10):
    return lambda: datetime(year, month, day, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def optimizer():
    return QueryOptimizer(clock=at(2025, 3))


def test_nba_gets_split_season_qualifier(optimizer):
    query = optimizer.build("Lakers standings")
    assert query.sport is Sport.NBA
    assert query.temporal is TemporalQualifier.NONE
    assert query.optimized == f"Lakers standings 2025-26 season NBA {BROAD_COVERAGE_SUFFIX}"


def test_nfl_before_cutoff_uses_previous_year(optimizer):
    query = optimizer.build("Chiefs record")
    assert query.optimized == f"Chiefs record 2024 season NFL {BROAD_COVERAGE_SUFFIX}"


def test_nfl_after_cutoff_uses_current_year():
    optimizer = QueryOptimizer(clock=at(2025, 10))
    assert optimizer.optimize("Chiefs record", Sport.NFL).startswith("Chiefs record 2025 season NFL")


def test_nfl_cutoff_is_configurable():
    optimizer = QueryOptimizer(clock=at(2025, 3), season_cutoff_month=2)
    assert optimizer.season_year(Sport.NFL) == 2025


def test_ambiguous_sport_gets_bare_year(optimizer):
    query = optimizer.build("who won the championship")
    assert query.sport is Sport.BOTH
    assert query.optimized == f"who won the championship 2025 {BROAD_COVERAGE_SUFFIX}"


@pytest.mark.parametrize("text", ["Lakers 2023 playoffs", "Chiefs 2019 super bowl", "finals 2016"])
def test_explicit_year_suppresses_season_qualifier(optimizer, text):
    query = optimizer.build(text)
    assert query.temporal is TemporalQualifier.EXPLICIT_YEAR
    assert query.optimized.startswith(text)
    assert "season" not in query.optimized


def test_temporal_cue_suppresses_season_qualifier(optimizer):
    query = optimizer.build("Lakers score yesterday")
    assert query.temporal is TemporalQualifier.RELATIVE
    assert query.optimized == f"Lakers score yesterday NBA {BROAD_COVERAGE_SUFFIX}"


def test_nfl_week_pattern_is_a_temporal_cue(optimizer):
    query = optimizer.build("Chiefs week 5 score")
    assert query.temporal is TemporalQualifier.RELATIVE
    assert "season" not in query.optimized


def test_last_year_replaced_once_with_prior_season(optimizer):
    query = optimizer.build("Chiefs last year record, last year playoffs")
    assert query.optimized.count("2024 season") == 1
    assert query.optimized.startswith("Chiefs 2024 season record, last year playoffs")


def test_last_season_is_replaced(optimizer):
    optimized = optimizer.optimize("Lakers Last Season MVP", Sport.NBA)
    assert optimized.startswith("Lakers 2024 season MVP NBA")


def test_next_season_is_not_rewritten(optimizer):
    optimized = optimizer.optimize("Lakers next season outlook", Sport.NBA)
    assert "next season" in optimized


def test_sport_name_not_duplicated(optimizer):
    optimized = optimizer.optimize("nba scores today", Sport.NBA)
    assert optimized == f"nba scores today {BROAD_COVERAGE_SUFFIX}"


def test_query_is_immutable(optimizer):
    query = optimizer.build("Lakers standings")
    with pytest.raises(AttributeError):
        query.raw = "changed"
