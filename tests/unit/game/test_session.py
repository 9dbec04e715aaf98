"""Tests for the live game session."""
from __future__ import annotations

import pytest

from hoopstats.config import Settings
from hoopstats.game.events import (
    FoulEvent,
    FoulType,
    FreeThrowEvent,
    PeriodEndEvent,
    ReboundEvent,
    ShotEvent,
    SubstitutionEvent,
    TeamPointsEvent,
    TurnoverEvent,
    TurnoverType,
)
from hoopstats.game.session import GameRecord, LiveGameSession
from hoopstats.league.models import Team
from hoopstats.types import GameStateError, InvalidEventError, InvalidTeamError


def home_shot(clock: str = "11:40", period: int = 1, **kwargs) -> ShotEvent:
    fields = {"player_id": "h1", "made": True, "is_three": False, "x": 50.0, "y": 80.0}
    fields.update(kwargs)
    return ShotEvent(team_id="home", period=period, game_clock=clock, **fields)


def foul(player_id: str = "h1", clock: str = "10:00", **kwargs) -> FoulEvent:
    team_id = "home" if player_id.startswith("h") else "away"
    return FoulEvent(team_id=team_id, period=1, game_clock=clock, player_id=player_id, **kwargs)


class TestSessionSetup:
    """Tests for starting a session."""

    def test_initial_state(self, session: LiveGameSession) -> None:
        """A new session should be at Q1 12:00 with a 0-0 score."""
        assert session.score == (0, 0)
        assert session.period == 1
        assert session.period_label == "Q1"
        assert session.game_clock == "12:00"
        assert not session.is_completed
        assert session.events == ()

    def test_zero_statlines_for_every_player(self, session: LiveGameSession) -> None:
        """Both rosters should be seeded with zero statlines."""
        statlines = session.statlines()

        assert len(statlines) == 14
        assert all(s.points == 0 for s in statlines)
        assert len(session.statlines("home")) == 7

    def test_default_starters(self, session: LiveGameSession) -> None:
        """Starters should default to the first five rostered players."""
        assert session.on_court("home") == ["h1", "h2", "h3", "h4", "h5"]
        assert session.on_court("away") == ["a1", "a2", "a3", "a4", "a5"]

    def test_custom_starters(self, home_team: Team, away_team: Team) -> None:
        """Explicit starters should be used."""
        session = LiveGameSession(
            "g1", home_team, away_team, home_starters=["h3", "h4", "h5", "h6", "h7"]
        )

        assert session.on_court("home") == ["h3", "h4", "h5", "h6", "h7"]

    def test_team_cannot_play_itself(self, home_team: Team) -> None:
        """The same team on both sides should be rejected."""
        with pytest.raises(InvalidTeamError):
            LiveGameSession("g1", home_team, home_team)

    def test_unknown_starter(self, home_team: Team, away_team: Team) -> None:
        """Starters must be on the roster."""
        with pytest.raises(InvalidTeamError, match="not on"):
            LiveGameSession("g1", home_team, away_team, home_starters=["a1"])

    def test_too_many_starters(self, home_team: Team, away_team: Team) -> None:
        """More than five starters should be rejected."""
        with pytest.raises(InvalidTeamError):
            LiveGameSession(
                "g1", home_team, away_team, home_starters=home_team.player_ids[:6]
            )


class TestRecording:
    """Tests for recording events."""

    def test_made_shot_updates_score_and_statline(self, session: LiveGameSession) -> None:
        """A made two should add two points for the team and shooter."""
        session.record(home_shot(assisted_by="h2"))

        assert session.score == (2, 0)
        assert session.statline("h1").points == 2
        assert session.statline("h2").assists == 1
        assert session.game_clock == "11:40"

    def test_plus_minus_for_players_on_court(self, session: LiveGameSession) -> None:
        """Scoring should credit players on court and debit opponents on court."""
        session.record(home_shot(is_three=True, x=10.0, y=40.0))

        assert session.statline("h1").plus_minus == 3
        assert session.statline("h5").plus_minus == 3
        assert session.statline("h6").plus_minus == 0
        assert session.statline("a1").plus_minus == -3

    def test_free_throws_and_team_points(self, session: LiveGameSession) -> None:
        """Free throws and untracked team points should both reach the score."""
        session.record(
            FreeThrowEvent(
                team_id="away",
                period=1,
                game_clock="11:00",
                player_id="a1",
                attempts=(True, True),
            )
        )
        session.record(TeamPointsEvent(team_id="home", period=1, game_clock="10:30", points=3))

        assert session.score == (3, 2)
        assert session.statline("a1").ft_made == 2
        assert session.statline("h2").plus_minus == 1

    def test_team_rebound(self, session: LiveGameSession) -> None:
        """A rebound without a player should count for the team."""
        session.record(
            ReboundEvent(team_id="away", period=1, game_clock="11:00", player_id=None, offensive=False)
        )

        assert session.team_rebounds("away") == 1
        assert session.team_rebounds("home") == 0

    def test_clock_cannot_run_backwards(self, session: LiveGameSession) -> None:
        """An event later than the current clock should be rejected."""
        session.record(home_shot(clock="10:00"))

        with pytest.raises(InvalidEventError, match="later"):
            session.record(home_shot(clock="10:30"))

    def test_same_clock_allowed(self, session: LiveGameSession) -> None:
        """Several events may share a clock value."""
        session.record(home_shot(clock="10:00", made=False))
        session.record(
            ReboundEvent(team_id="home", period=1, game_clock="10:00", player_id="h2", offensive=True)
        )

        assert session.statline("h2").orb == 1

    def test_wrong_period(self, session: LiveGameSession) -> None:
        """Events must belong to the current period."""
        with pytest.raises(InvalidEventError, match="period"):
            session.record(home_shot(period=2))

    def test_player_on_wrong_team(self, session: LiveGameSession) -> None:
        """The acting player must be on the event's team."""
        with pytest.raises(InvalidEventError):
            session.record(home_shot(player_id="a1"))

    def test_unknown_team(self, session: LiveGameSession) -> None:
        """Events for teams not in the game should be rejected."""
        event = ShotEvent(
            team_id="other",
            period=1,
            game_clock="11:00",
            player_id="h1",
            made=True,
            is_three=False,
            x=50.0,
            y=80.0,
        )
        with pytest.raises(InvalidEventError):
            session.record(event)

    def test_assister_must_be_teammate(self, session: LiveGameSession) -> None:
        """Assists must come from the shooter's team."""
        with pytest.raises(InvalidEventError):
            session.record(home_shot(assisted_by="a2"))

    def test_blocker_must_be_opponent(self, session: LiveGameSession) -> None:
        """Blocks must come from the opposing team."""
        with pytest.raises(InvalidEventError):
            session.record(home_shot(made=False, blocked_by="h2"))

    def test_stealer_must_be_opponent(self, session: LiveGameSession) -> None:
        """Steals must come from the opposing team."""
        with pytest.raises(InvalidEventError):
            session.record(
                TurnoverEvent(
                    team_id="home",
                    period=1,
                    game_clock="11:00",
                    player_id="h1",
                    turnover_type=TurnoverType.LOST_BALL,
                    stolen_by="h2",
                )
            )

    def test_rejected_event_not_logged(self, session: LiveGameSession) -> None:
        """A rejected event should leave the log unchanged."""
        with pytest.raises(InvalidEventError):
            session.record(home_shot(player_id="a1"))

        assert session.events == ()
        assert session.score == (0, 0)

    def test_statline_is_a_copy(self, session: LiveGameSession) -> None:
        """Returned statlines should not alias session state."""
        session.statline("h1").points = 50

        assert session.statline("h1").points == 0

    def test_statline_unknown_player(self, session: LiveGameSession) -> None:
        """Unknown players should raise."""
        with pytest.raises(InvalidEventError):
            session.statline("zz")


class TestSubstitutionsAndMinutes:
    """Tests for lineups and minutes from the game clock."""

    def test_substitution_swaps_lineup(self, session: LiveGameSession) -> None:
        """Subbed players should leave and enter the court."""
        session.record(
            SubstitutionEvent(
                team_id="home", period=1, game_clock="06:00", players_out=("h1",), players_in=("h6",)
            )
        )

        assert session.on_court("home") == ["h6", "h2", "h3", "h4", "h5"]

    def test_minutes_from_clock(self, session: LiveGameSession) -> None:
        """Stints should be credited by game-clock deltas."""
        session.record(
            SubstitutionEvent(
                team_id="home", period=1, game_clock="06:00", players_out=("h1",), players_in=("h6",)
            )
        )
        session.end_period()

        assert session.statline("h1").minutes_played == 6.0
        assert session.statline("h6").minutes_played == 6.0
        assert session.statline("h2").minutes_played == 12.0
        assert session.statline("h7").minutes_played == 0.0

    def test_bench_player_not_credited_plus_minus(self, session: LiveGameSession) -> None:
        """Points scored while a player sits should not count for them."""
        session.record(
            SubstitutionEvent(
                team_id="home", period=1, game_clock="06:00", players_out=("h1",), players_in=("h6",)
            )
        )
        session.record(home_shot(clock="05:00", player_id="h6"))

        assert session.statline("h1").plus_minus == 0
        assert session.statline("h6").plus_minus == 2

    def test_sub_out_player_not_on_court(self, session: LiveGameSession) -> None:
        """Only players on court can be subbed out."""
        with pytest.raises(InvalidEventError, match="not on court"):
            session.record(
                SubstitutionEvent(
                    team_id="home", period=1, game_clock="06:00", players_out=("h6",), players_in=("h7",)
                )
            )

    def test_sub_in_player_already_on_court(self, session: LiveGameSession) -> None:
        """Players already on court cannot be subbed in."""
        with pytest.raises(InvalidEventError, match="already on court"):
            session.record(
                SubstitutionEvent(
                    team_id="home", period=1, game_clock="06:00", players_out=("h1",), players_in=("h2",)
                )
            )


class TestPeriods:
    """Tests for period transitions."""

    def test_end_period_resets_clock(self, session: LiveGameSession) -> None:
        """Ending a period should start the next at full length."""
        event = session.end_period()

        assert isinstance(event, PeriodEndEvent)
        assert session.period == 2
        assert session.period_label == "Q2"
        assert session.game_clock == "12:00"

    def test_overtime(self, session: LiveGameSession) -> None:
        """Periods past regulation should be overtime with a shorter clock."""
        for _ in range(4):
            session.end_period()

        assert session.period == 5
        assert session.period_label == "OT1"
        assert session.game_clock == "05:00"

    def test_custom_period_length(self, home_team: Team, away_team: Team) -> None:
        """Period length should follow settings."""
        settings = Settings(PERIOD_MINUTES=10)
        session = LiveGameSession("g1", home_team, away_team, settings=settings)

        assert session.game_clock == "10:00"


class TestFouls:
    """Tests for foul counting."""

    def test_team_fouls_exclude_technicals(self, session: LiveGameSession) -> None:
        """Team foul count should skip technical fouls."""
        session.record(foul("h1"))
        session.record(foul("h2", foul_type=FoulType.TECHNICAL))
        session.record(foul("h3", foul_type=FoulType.UNSPORTSMANLIKE))

        assert session.team_fouls("home") == 2
        assert session.team_fouls("away") == 0

    def test_fouls_per_period(self, session: LiveGameSession) -> None:
        """Fouls should be countable per period."""
        session.record(foul("h1"))
        session.end_period()
        session.record(
            FoulEvent(team_id="home", period=2, game_clock="11:00", player_id="h1")
        )

        assert session.player_fouls("h1") == 2
        assert session.player_fouls("h1", period=1) == 1
        assert session.team_fouls("home", period=2) == 1

    def test_fouled_out(self, session: LiveGameSession) -> None:
        """Reaching the foul limit should mark the player fouled out."""
        for _ in range(4):
            session.record(foul("a1"))
        assert not session.is_fouled_out("a1")

        session.record(foul("a1"))
        assert session.is_fouled_out("a1")

    def test_fouled_player_credited(self, session: LiveGameSession) -> None:
        """The fouled opponent should be credited with a foul drawn."""
        session.record(foul("h1", fouled_player="a3"))

        assert session.statline("a3").fouls_drawn == 1

    def test_fouled_player_must_be_opponent(self, session: LiveGameSession) -> None:
        """A player cannot draw a foul from a teammate."""
        with pytest.raises(InvalidEventError):
            session.record(foul("h1", fouled_player="h2"))


class TestUndo:
    """Tests for undo by replay."""

    def test_undo_restores_state(self, session: LiveGameSession) -> None:
        """Undo should remove the last event and its effects."""
        first = home_shot(clock="11:00")
        second = home_shot(clock="10:00", player_id="h2", is_three=True)
        session.record(first)
        session.record(second)

        assert session.undo() == second
        assert session.score == (2, 0)
        assert session.statline("h2").points == 0
        assert session.statline("h3").plus_minus == 2
        assert session.game_clock == "11:00"

    def test_undo_substitution(self, session: LiveGameSession) -> None:
        """Undoing a substitution should restore the lineup."""
        session.record(
            SubstitutionEvent(
                team_id="home", period=1, game_clock="06:00", players_out=("h1",), players_in=("h6",)
            )
        )
        session.undo()

        assert session.on_court("home") == ["h1", "h2", "h3", "h4", "h5"]

    def test_undo_period_end(self, session: LiveGameSession) -> None:
        """Undoing a period end should return to the previous period."""
        session.end_period()
        session.undo()

        assert session.period == 1

    def test_undo_empty_log(self, session: LiveGameSession) -> None:
        """Undo with no events should return None."""
        assert session.undo() is None


class TestLedger:
    """Tests for the event ledger views."""

    def test_recent_events_newest_first(self, session: LiveGameSession) -> None:
        """recent_events should list the newest events first."""
        events = [home_shot(clock=f"11:{50 - i:02d}") for i in range(10)]
        for event in events:
            session.record(event)

        recent = session.recent_events()
        assert len(recent) == 8
        assert recent[0] == events[-1]
        assert session.recent_events(0) == []

    def test_describe_event(self, session: LiveGameSession) -> None:
        """Events should render as one-line ledger entries."""
        assert session.describe_event(home_shot()) == "H Player 1 #1 made 2PT shot"
        assert (
            session.describe_event(TeamPointsEvent(team_id="away", period=1, game_clock="11:00", points=2))
            == "Aces +2"
        )
        assert session.describe_event(PeriodEndEvent(team_id="home", period=4)) == "End of Q4"

    def test_shots_listed(self, session: LiveGameSession) -> None:
        """Only shot attempts should appear in shots."""
        session.record(home_shot(clock="11:00"))
        session.record(foul("a1", clock="10:00"))

        assert len(session.shots) == 1


class TestComplete:
    """Tests for completing a game."""

    def test_complete_returns_record(self, session: LiveGameSession) -> None:
        """complete should return the final game record."""
        session.record(home_shot(clock="10:00"))
        record = session.complete()

        assert isinstance(record, GameRecord)
        assert (record.home_score, record.away_score) == (2, 0)
        assert record.winner_id == "home"
        assert record.points_for("away") == 0
        assert record.points_against("away") == 2
        assert len(record.shots) == 1
        assert len(record.team_statlines("home")) == 7

    def test_open_stints_credited(self, session: LiveGameSession) -> None:
        """Players on court at completion should get minutes to the current clock."""
        session.record(home_shot(clock="10:00"))
        record = session.complete()

        assert record.statlines["h1"].minutes_played == 2.0
        assert record.statlines["h6"].minutes_played == 0.0

    def test_session_matches_record_after_completion(self, session: LiveGameSession) -> None:
        """Session statlines should include the stints closed by complete."""
        session.record(
            SubstitutionEvent(
                team_id="home", period=1, game_clock="06:00", players_out=("h1",), players_in=("h6",)
            )
        )
        session.record(home_shot(clock="03:00", player_id="h2"))
        record = session.complete()

        assert session.statline("h2").minutes_played == 9.0
        assert session.statline("h6").minutes_played == 3.0
        assert session.statline("h1").minutes_played == 6.0
        for stat in session.statlines():
            assert stat == record.statlines[stat.player_id]

    def test_record_statlines_read_only(self, session: LiveGameSession) -> None:
        """A completed record should not be changed through its accessors."""
        session.record(home_shot(clock="10:00"))
        record = session.complete()

        record.team_statlines("home")[0].points += 50
        with pytest.raises(TypeError):
            record.statlines["h1"] = record.statlines["h2"]  # type: ignore[index]

        assert record.statlines["h1"].points == 2
        assert record.team_statlines("home")[0].points == 2

    def test_commands_rejected_after_completion(self, session: LiveGameSession) -> None:
        """A completed game should reject further commands."""
        session.complete()

        assert session.is_completed
        with pytest.raises(GameStateError):
            session.record(home_shot())
        with pytest.raises(GameStateError):
            session.undo()
        with pytest.raises(GameStateError):
            session.end_period()
        with pytest.raises(GameStateError):
            session.complete()

    def test_tie_has_no_winner(self, session: LiveGameSession) -> None:
        """A tied record should have no winner."""
        assert session.complete().winner_id is None

    def test_points_for_unknown_team(self, session: LiveGameSession) -> None:
        """Asking for a team that did not play should raise."""
        record = session.complete()

        with pytest.raises(InvalidEventError):
            record.points_for("other")
