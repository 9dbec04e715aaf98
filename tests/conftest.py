"""Shared pytest fixtures for stats tracker tests.

This module contains fixtures used across multiple test modules:
- Configuration fixtures (isolated settings and log directory)
- Sample statlines (the worked examples used throughout the metrics tests)
- League fixtures (two rostered teams and a tournament)
- A live session between the two teams

Example:
    def test_something(sample_statline, home_team):
        # sample_statline is the 18-point game used in the metrics tests
        # home_team is a rostered Team with seven players
        pass
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Generator

import pytest

from hoopstats.config import Settings, get_settings, reset_settings
from hoopstats.game.session import LiveGameSession
from hoopstats.league.models import Player, Team, Tournament
from hoopstats.metrics.statline import PlayerGameStatline


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Point log output at a temp directory and reset the settings singleton."""
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def test_settings() -> Settings:
    """Provide settings with debug logging."""
    settings = Settings(LOG_LEVEL="DEBUG")
    settings.ensure_directories()
    return settings


# =============================================================================
# Statlines
# =============================================================================


@pytest.fixture
def sample_statline() -> PlayerGameStatline:
    """Return a full-featured single-game statline.

    18 PTS on 7/15 FG (2/5 3P, 2/2 FT), 2 ORB, 5 DRB, 6 AST, 2 STL, 1 BLK,
    3 TO, 2 PF.
    """
    return PlayerGameStatline(
        player_id="p1",
        points=18,
        fg_made=7,
        fg_attempted=15,
        three_made=2,
        three_attempted=5,
        ft_made=2,
        ft_attempted=2,
        orb=2,
        drb=5,
        assists=6,
        steals=2,
        blocks=1,
        turnovers=3,
        fouls=2,
        minutes_played=32.5,
    )


@pytest.fixture
def season_statlines() -> list[PlayerGameStatline]:
    """Return two games for one player (20 and 10 points)."""
    return [
        PlayerGameStatline(
            player_id="p1",
            points=20,
            fg_made=8,
            fg_attempted=16,
            ft_made=4,
            ft_attempted=4,
            assists=5,
            drb=4,
            minutes_played=30.0,
        ),
        PlayerGameStatline(
            player_id="p1",
            points=10,
            fg_made=4,
            fg_attempted=10,
            ft_made=2,
            ft_attempted=3,
            assists=3,
            orb=2,
            minutes_played=20.0,
        ),
    ]


@pytest.fixture
def statlines_file(tmp_path: Path) -> Path:
    """Write a JSON list of two players' statlines and return its path."""
    data: list[dict[str, Any]] = [
        {
            "player_id": "p1",
            "points": 18,
            "fg_made": 7,
            "fg_attempted": 15,
            "three_made": 2,
            "three_attempted": 5,
            "ft_made": 2,
            "ft_attempted": 2,
            "orb": 2,
            "drb": 5,
            "assists": 6,
            "steals": 2,
            "blocks": 1,
            "turnovers": 3,
            "fouls": 2,
            "minutes_played": 32.5,
        },
        {
            "playerId": "p2",
            "points": 4,
            "fg_made": 2,
            "fg_attempted": 6,
            "drb": 3,
            "minutes_played": 15,
        },
    ]
    path = tmp_path / "statlines.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# =============================================================================
# League
# =============================================================================


def _roster(prefix: str, count: int = 7) -> list[Player]:
    return [
        Player(player_id=f"{prefix}{i}", name=f"{prefix.upper()} Player {i}", number=i)
        for i in range(1, count + 1)
    ]


@pytest.fixture
def home_team() -> Team:
    """Return the home team with players h1-h7."""
    return Team(team_id="home", name="Hawks", abbreviation="HAW", players=_roster("h"))


@pytest.fixture
def away_team() -> Team:
    """Return the away team with players a1-a7."""
    return Team(team_id="away", name="Aces", abbreviation="ACE", players=_roster("a"))


@pytest.fixture
def tournament() -> Tournament:
    """Return an empty summer tournament."""
    return Tournament(tournament_id="t1", name="Summer League", year=2024, month="Jul")


@pytest.fixture
def session(home_team: Team, away_team: Team) -> LiveGameSession:
    """Return a fresh live session; starters are h1-h5 and a1-a5."""
    return LiveGameSession("g1", home_team, away_team, settings=get_settings())
