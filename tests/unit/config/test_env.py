"""Tests for EnvReader class."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mmtk.config.env import EnvReader


class TestEnvReaderGetStr:
    """Tests for EnvReader.get_str method."""

    def test_returns_value_when_set(self) -> None:
        """Should return the value when environment variable is set."""
        reader = EnvReader(env={"MMTK_VAR": "hello"})
        assert reader.get_str("MMTK_VAR") == "hello"

    def test_returns_default_when_not_set(self) -> None:
        """Should return default when environment variable is not set."""
        reader = EnvReader(env={})
        assert reader.get_str("MMTK_VAR", "default") == "default"

    def test_blank_value_counts_as_unset(self) -> None:
        """Whitespace-only values fall back to the default."""
        reader = EnvReader(env={"MMTK_VAR": "   "})
        assert reader.get_str("MMTK_VAR", "default") == "default"

    def test_strips_whitespace(self) -> None:
        reader = EnvReader(env={"MMTK_VAR": " /usr/bin/ffmpeg \n"})
        assert reader.get_str("MMTK_VAR") == "/usr/bin/ffmpeg"


class TestEnvReaderGetInt:
    """Tests for EnvReader.get_int method."""

    def test_returns_value_when_set(self) -> None:
        """Should parse and return integer when environment variable is set."""
        reader = EnvReader(env={"MMTK_VAR": "42"})
        assert reader.get_int("MMTK_VAR") == 42

    def test_returns_default_when_not_set(self) -> None:
        reader = EnvReader(env={})
        assert reader.get_int("MMTK_VAR", 100) == 100

    def test_invalid_value_warns_and_returns_default(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Unparseable integers log a warning and use the default."""
        reader = EnvReader(env={"MMTK_VAR": "four"})
        with caplog.at_level(logging.WARNING):
            assert reader.get_int("MMTK_VAR", 2) == 2
        assert "Invalid integer value for MMTK_VAR" in caplog.text


class TestEnvReaderGetBool:
    """Tests for EnvReader.get_bool method."""

    @pytest.mark.parametrize("value", ["true", "1", "YES", "On"])
    def test_truthy_values(self, value: str) -> None:
        assert EnvReader(env={"MMTK_VAR": value}).get_bool("MMTK_VAR") is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "maybe"])
    def test_other_values_are_false(self, value: str) -> None:
        assert EnvReader(env={"MMTK_VAR": value}).get_bool("MMTK_VAR", True) is False

    def test_default_when_not_set(self) -> None:
        assert EnvReader(env={}).get_bool("MMTK_VAR", True) is True


class TestEnvReaderGetPath:
    """Tests for EnvReader.get_path method."""

    def test_expands_user(self) -> None:
        """Tilde is expanded to the home directory."""
        path = EnvReader(env={"MMTK_VAR": "~/media"}).get_path("MMTK_VAR")
        assert path == Path.home() / "media"

    def test_default_when_not_set(self) -> None:
        assert EnvReader(env={}).get_path("MMTK_VAR", Path("/tmp")) == Path("/tmp")


class TestEnvReaderGetChoice:
    """Tests for EnvReader.get_choice method."""

    def test_case_insensitive(self) -> None:
        reader = EnvReader(env={"MMTK_VAR": "FLAC"})
        assert reader.get_choice("MMTK_VAR", ("mp3", "flac"), "mp3") == "flac"

    def test_invalid_choice_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        """Values outside the choices fall back to the default."""
        reader = EnvReader(env={"MMTK_VAR": "wma"})
        with caplog.at_level(logging.WARNING):
            assert reader.get_choice("MMTK_VAR", ("mp3", "flac"), "mp3") == "mp3"
        assert "expected one of mp3, flac" in caplog.text
