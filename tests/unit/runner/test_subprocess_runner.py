"""Unit tests for SubprocessRunner."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from mmtk.exceptions import ToolLaunchError, ToolNotFoundError
from mmtk.runner import SubprocessRunner

RUN_TARGET = "mmtk.runner.subprocess_runner.subprocess.run"


class TestSubprocessRunner:
    """Tests for SubprocessRunner.run."""

    def test_captures_output(self) -> None:
        """Exit code, stdout and stderr are returned as text."""
        completed = MagicMock(returncode=0, stdout="out", stderr="err")
        with patch(RUN_TARGET, return_value=completed) as mock_run:
            result = SubprocessRunner().run(["ffmpeg", "-version"])

        assert result.exit_code == 0
        assert result.stdout == "out"
        assert result.stderr == "err"
        assert result.success
        args, kwargs = mock_run.call_args
        assert args[0] == ["ffmpeg", "-version"]
        assert kwargs["capture_output"] is True
        assert kwargs["text"] is True
        assert kwargs["errors"] == "replace"
        assert "shell" not in kwargs

    def test_non_zero_exit(self) -> None:
        completed = MagicMock(returncode=1, stdout="", stderr="Invalid data")
        with patch(RUN_TARGET, return_value=completed):
            result = SubprocessRunner().run(["ffmpeg", "-i", "bad.mp3"])
        assert result.exit_code == 1
        assert not result.success

    def test_timeout_returns_timed_out_result(self) -> None:
        """A timeout is a result, not an exception."""
        error = subprocess.TimeoutExpired(["ffmpeg"], 5, output=b"partial", stderr=None)
        with patch(RUN_TARGET, side_effect=error):
            result = SubprocessRunner().run(["ffmpeg", "-i", "x"], timeout=5)
        assert result.timed_out
        assert result.exit_code == -1
        assert result.stdout == "partial"
        assert not result.success

    def test_default_timeout_used(self) -> None:
        completed = MagicMock(returncode=0, stdout="", stderr="")
        with patch(RUN_TARGET, return_value=completed) as mock_run:
            SubprocessRunner(default_timeout=30).run(["ffmpeg"])
        assert mock_run.call_args.kwargs["timeout"] == 30

    def test_explicit_timeout_wins(self) -> None:
        completed = MagicMock(returncode=0, stdout="", stderr="")
        with patch(RUN_TARGET, return_value=completed) as mock_run:
            SubprocessRunner(default_timeout=30).run(["ffmpeg"], timeout=2)
        assert mock_run.call_args.kwargs["timeout"] == 2

    def test_missing_executable(self) -> None:
        with patch(RUN_TARGET, side_effect=FileNotFoundError("ffmpeg")):
            with pytest.raises(ToolNotFoundError) as exc_info:
                SubprocessRunner().run(["/missing/ffmpeg", "-version"])
        assert exc_info.value.tool == "/missing/ffmpeg"

    def test_permission_denied(self) -> None:
        error = PermissionError(13, "Permission denied")
        with patch(RUN_TARGET, side_effect=error):
            with pytest.raises(ToolLaunchError) as exc_info:
                SubprocessRunner().run(["/opt/ffmpeg", "-version"])
        assert not isinstance(exc_info.value, ToolNotFoundError)
        assert str(exc_info.value) == "Could not start /opt/ffmpeg: Permission denied"
