"""Fixtures for driving the CLI with a scripted runner and probe.

The CLI accepts a prepared config and MediaOperations through the click
context object, so these tests never start ffmpeg or ffprobe.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner
from fakes import CliHarness, FakeProbe, FakeRunner

from mmtk.config import DefaultsConfig, LoggingConfig, ToolkitConfig


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def harness(temp_dir: Path, fake_runner: FakeRunner, fake_probe: FakeProbe) -> CliHarness:
    media_dir = temp_dir / "media"
    media_dir.mkdir()
    input_file = media_dir / "talk.mp4"
    input_file.write_bytes(b"\x00")

    output_dir = temp_dir / "out"
    config = ToolkitConfig(
        defaults=DefaultsConfig(output_dir=output_dir, temp_dir=temp_dir / "tmp"),
        logging=LoggingConfig(level="error"),
    )
    return CliHarness(
        runner=fake_runner,
        probe=fake_probe,
        config=config,
        input_file=input_file,
        output_dir=output_dir,
    )
