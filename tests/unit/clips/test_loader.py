"""Unit tests for clip file loading."""

from pathlib import Path

import pytest

from mmtk.clips import ClipFileError, load_clip_file, load_clip_file_from_data
from mmtk.domain.enums import AudioFormat
from mmtk.domain.models import TimeClip


def _write(temp_dir: Path, text: str) -> Path:
    path = temp_dir / "clips.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadClipFile:
    """Tests for load_clip_file."""

    def test_mapping_form(self, temp_dir: Path) -> None:
        path = _write(
            temp_dir,
            """
format: flac
quality: music_high
clips:
  - start: "00:01:30"
    end: "00:02:00"
    label: intro
  - start: 120
    duration: 15
""",
        )
        clip_file = load_clip_file(path)
        assert clip_file.format == AudioFormat.FLAC
        assert clip_file.quality == "music_high"
        assert [c.to_clip() for c in clip_file.clips] == [
            TimeClip(start_time="00:01:30", end_time="00:02:00", label="intro"),
            TimeClip(start_time="120", duration=15.0),
        ]

    def test_list_form(self, temp_dir: Path) -> None:
        """A bare list of clips is accepted."""
        path = _write(temp_dir, "- start: 0\n  duration: 5\n- start: 10\n  end: 20\n")
        clip_file = load_clip_file(path)
        assert len(clip_file.clips) == 2
        assert clip_file.format is None

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(ClipFileError, match="not found"):
            load_clip_file(temp_dir / "nope.yaml")

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        path = _write(temp_dir, "clips: [start: 1\n")
        with pytest.raises(ClipFileError, match="Invalid YAML"):
            load_clip_file(path)

    def test_empty_file(self, temp_dir: Path) -> None:
        with pytest.raises(ClipFileError, match="empty"):
            load_clip_file(_write(temp_dir, ""))

    def test_not_utf8(self, temp_dir: Path) -> None:
        path = temp_dir / "clips.yaml"
        path.write_bytes(b"clips:\n  - {start: 0, duration: 5, label: \xff\xfe}\n")
        with pytest.raises(ClipFileError, match="not valid UTF-8"):
            load_clip_file(path)

    def test_unreadable_path(self, temp_dir: Path) -> None:
        """A directory where the file should be is reported, not raised raw."""
        path = temp_dir / "clips.yaml"
        path.mkdir()
        with pytest.raises(ClipFileError, match="Cannot read clip file"):
            load_clip_file(path)


class TestValidation:
    """Tests for clip entry validation."""

    def test_entry_needs_window(self) -> None:
        with pytest.raises(ClipFileError, match="clips.0"):
            load_clip_file_from_data({"clips": [{"start": "10"}]})

    def test_bad_time_value(self) -> None:
        with pytest.raises(ClipFileError, match="Invalid time value"):
            load_clip_file_from_data([{"start": "soon", "duration": 5}])

    def test_non_positive_duration(self) -> None:
        with pytest.raises(ClipFileError, match="duration"):
            load_clip_file_from_data([{"duration": 0}])

    def test_unknown_key(self) -> None:
        with pytest.raises(ClipFileError, match="stop"):
            load_clip_file_from_data([{"start": 0, "stop": 5}])

    def test_unknown_format(self) -> None:
        with pytest.raises(ClipFileError, match="format"):
            load_clip_file_from_data({"format": "wma", "clips": [{"duration": 5}]})

    def test_no_clips(self) -> None:
        with pytest.raises(ClipFileError):
            load_clip_file_from_data({"clips": []})

    def test_scalar_document(self) -> None:
        with pytest.raises(ClipFileError, match="mapping or list"):
            load_clip_file_from_data("clips")

    def test_sexagesimal_integer(self) -> None:
        """YAML reads unquoted 01:30 as 90, which is the same time."""
        clip_file = load_clip_file_from_data([{"start": 90, "end": 120.5}])
        clip = clip_file.clips[0].to_clip()
        assert clip.start_time == "90"
        assert clip.end_time == "120.5"
