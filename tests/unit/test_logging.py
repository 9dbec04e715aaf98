"""Tests for logging module."""
from __future__ import annotations

import logging
from pathlib import Path

from loguru import logger

from hoopstats.config import Settings
from hoopstats.game.session import LiveGameSession
from hoopstats.league.models import Team
from hoopstats.logging import (
    FAIL,
    NO_GAME,
    SUCCESS,
    WARN,
    InterceptHandler,
    get_logger,
    setup_logging,
)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_creates_directory(self, tmp_path: Path) -> None:
        """setup_logging should create log directory if it doesn't exist."""
        log_dir = tmp_path / "nested" / "logs"
        setup_logging(log_dir=str(log_dir))

        assert log_dir.exists()

    def test_setup_logging_accepts_path(self, tmp_path: Path) -> None:
        """setup_logging should accept a Path for the log directory."""
        log_dir = tmp_path / "logs"
        setup_logging(level="DEBUG", log_dir=log_dir)

        assert log_dir.exists()

    def test_setup_logging_all_parameters(self, tmp_path: Path) -> None:
        """setup_logging should accept all custom parameters."""
        log_dir = tmp_path / "logs"
        setup_logging(
            level="WARNING",
            log_dir=str(log_dir),
            rotation="100 MB",
            retention="7 days",
            serialize=False,
        )

        assert log_dir.exists()

    def test_writes_log_file(self, tmp_path: Path) -> None:
        """Messages should reach the rotating log file."""
        log_dir = tmp_path / "logs"
        setup_logging(log_dir=log_dir, serialize=False)
        get_logger("test").info("Recorded event for game {}", "g1")
        logger.complete()

        files = list(log_dir.glob("hoopstats_*.log"))
        assert len(files) == 1
        assert "Recorded event for game g1" in files[0].read_text(encoding="utf-8")

    def test_defaults_from_settings(self, tmp_path: Path) -> None:
        """Unset keywords should fall back to the log settings."""
        settings = Settings(LOG_DIR=str(tmp_path / "configured"), LOG_SERIALIZE=False)
        log_dir = setup_logging(settings)
        get_logger("test").info("Configured sink")
        logger.complete()

        assert log_dir == tmp_path / "configured"
        text = next(log_dir.glob("hoopstats_*.log")).read_text(encoding="utf-8")
        assert "Configured sink" in text

    def test_keyword_overrides_settings(self, tmp_path: Path) -> None:
        """Explicit keywords should win over settings."""
        settings = Settings(LOG_DIR=str(tmp_path / "configured"))
        log_dir = setup_logging(settings, log_dir=tmp_path / "override")

        assert log_dir == tmp_path / "override"
        assert not (tmp_path / "configured").exists()

    def test_stdlib_logging_intercepted(self, tmp_path: Path) -> None:
        """stdlib logging should be routed through loguru."""
        setup_logging(log_dir=tmp_path / "logs")

        root_handlers = logging.getLogger().handlers
        assert any(isinstance(h, InterceptHandler) for h in root_handlers)


class TestGetLogger:
    """Tests for get_logger function."""

    def test_game_context_in_file(self, tmp_path: Path) -> None:
        """Bound game ids should appear on each line, with a dash otherwise."""
        log_dir = setup_logging(log_dir=tmp_path / "logs", serialize=False)
        get_logger("test", game_id="g7").info("Tip-off")
        get_logger("test").info("Between games")
        logger.complete()

        text = next(log_dir.glob("hoopstats_*.log")).read_text(encoding="utf-8")
        assert "game=g7 | Tip-off" in text
        assert f"game={NO_GAME} | Between games" in text

    def test_session_lines_carry_game_id(
        self, tmp_path: Path, home_team: Team, away_team: Team
    ) -> None:
        """A live session should log under its own game id."""
        log_dir = setup_logging(log_dir=tmp_path / "logs", serialize=False)
        LiveGameSession("g42", home_team, away_team)
        logger.complete()

        text = next(log_dir.glob("hoopstats_*.log")).read_text(encoding="utf-8")
        assert "game=g42 | Started: Hawks vs Aces" in text

    def test_get_logger_with_module_name(self) -> None:
        """get_logger should accept module name."""
        log = get_logger("hoopstats.game.session")

        assert log is not None

    def test_get_logger_can_log_with_formatting(self, tmp_path: Path) -> None:
        """Logger should support brace formatting."""
        setup_logging(log_dir=str(tmp_path / "logs"))
        log = get_logger("test")

        # Should not raise
        log.info("Game {} final: {} - {}", "g1", 80, 75)


class TestLoggerExports:
    """Tests for module exports."""

    def test_status_tags(self) -> None:
        """Status tags should carry their labels."""
        assert "[SUCCESS]" in SUCCESS
        assert "[FAIL]" in FAIL
        assert "[WARN]" in WARN

    def test_all_exports_available(self) -> None:
        """All expected exports should be available."""
        from hoopstats.logging import __all__

        assert "setup_logging" in __all__
        assert "get_logger" in __all__
        assert "logger" in __all__
