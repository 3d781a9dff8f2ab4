"""Tests for configuration module."""

from __future__ import annotations

from pathlib import Path

import pytest

from courtside.config import Settings, get_settings, reset_settings


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self) -> None:
        """Settings should have sensible defaults."""
        settings = Settings()

        assert settings.quarter_seconds == 720
        assert settings.quarters == 4
        assert settings.tick_interval == 1.0
        assert settings.scoring_mode == "home"
        assert settings.log_level == "INFO"

    def test_path_properties(self) -> None:
        """Path properties should return Path objects."""
        settings = Settings()

        assert isinstance(settings.log_dir_obj, Path)

    def test_loads_game_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        # pydantic_settings uses aliases as env var names
        monkeypatch.setenv("COURTSIDE_QUARTER_SECONDS", "600")
        monkeypatch.setenv("COURTSIDE_QUARTERS", "2")
        monkeypatch.setenv("COURTSIDE_TICK_INTERVAL", "0.5")
        monkeypatch.setenv("COURTSIDE_SCORING_MODE", "team")

        settings = Settings()

        assert settings.quarter_seconds == 600
        assert settings.quarters == 2
        assert settings.tick_interval == 0.5
        assert settings.scoring_mode == "team"

    def test_validation_rejects_empty_path(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Empty paths should be rejected."""
        monkeypatch.setenv("LOG_DIR", "   ")
        with pytest.raises(ValueError, match="cannot be empty"):
            Settings()

    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("COURTSIDE_QUARTER_SECONDS", "0"),
            ("COURTSIDE_QUARTERS", "0"),
            ("COURTSIDE_TICK_INTERVAL", "-1"),
            ("COURTSIDE_SCORING_MODE", "visitor"),
            ("LOG_LEVEL", "LOUD"),
        ],
    )
    def test_validation_rejects_invalid_values(
        self, monkeypatch: pytest.MonkeyPatch, name: str, value: str
    ) -> None:
        """Out-of-range values should fail validation."""
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError):
            Settings()

    def test_reads_env_file(self, tmp_path: Path) -> None:
        """A .env file in the working directory should be honored."""
        (tmp_path / ".env").write_text("COURTSIDE_QUARTER_SECONDS=300\n")

        settings = Settings()

        assert settings.quarter_seconds == 300


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_singleton(self) -> None:
        """get_settings should return the same instance."""
        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

    def test_loads_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings should load from environment variables."""
        monkeypatch.setenv("COURTSIDE_QUARTER_SECONDS", "480")

        reset_settings()
        settings = get_settings()

        assert settings.quarter_seconds == 480


class TestResetSettings:
    """Tests for reset_settings function."""

    def test_reset_clears_singleton(self) -> None:
        """reset_settings should clear the cached instance."""
        settings1 = get_settings()
        reset_settings()
        settings2 = get_settings()

        # They should be equal but not the same object
        assert settings1 is not settings2
        assert settings1.quarter_seconds == settings2.quarter_seconds
