"""Shared test fixtures for the multimedia toolkit."""

import shutil
import tempfile
from pathlib import Path

import pytest
from fakes import FakeProbe, FakeRunner

from mmtk.compiler import CompilerContext
from mmtk.domain.models import Chapter
from mmtk.operations import MediaOperations


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def ctx() -> CompilerContext:
    """Compiler context over the built-in presets."""
    return CompilerContext()


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def operations(
    ctx: CompilerContext, fake_runner: FakeRunner, fake_probe: FakeProbe, temp_dir: Path
) -> MediaOperations:
    """MediaOperations wired to the fake runner and probe."""
    return MediaOperations(ctx, fake_runner, fake_probe, temp_dir=temp_dir / "work")


@pytest.fixture
def sample_chapters() -> list[Chapter]:
    return [
        Chapter(id=0, title="Intro", start_time=0.0, end_time=30.0),
        Chapter(id=1, title="Part: One", start_time=30.0, end_time=95.5),
        Chapter(id=2, title="Outro", start_time=95.5, end_time=120.0),
    ]
