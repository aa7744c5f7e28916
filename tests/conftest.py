"""Shared fixtures: an in-memory tag editor and helpers for building collections."""

from __future__ import annotations

from pathlib import Path

import pytest

from music_classifier.core.genre_resolver import GenreEntry, GenreResolver
from music_classifier.core.tag_editor import TagSnapshot
from music_classifier.models.config import AppConfig, MusicNameOrigin
from music_classifier.utils.exceptions import TagError


class FakeTagEditor:
    """Stands in for TagEditor; tags live in a dict keyed by path."""

    def __init__(self, tags: dict[Path, TagSnapshot] | None = None) -> None:
        self.tags: dict[Path, TagSnapshot] = dict(tags or {})
        self.writes: list[Path] = []

    def read_tags(self, path: Path) -> TagSnapshot:
        if not path.exists():
            raise TagError(path, "file not found for tag reading")
        return self.tags.get(path, TagSnapshot())

    def write_tags(self, path: Path, title: str, artist: str, genre: str) -> None:
        if not path.exists():
            raise TagError(path, "file not found for tag writing")
        self.tags[path] = TagSnapshot(title=title, artist=artist, genre=genre)
        self.writes.append(path)


def make_audio_file(directory: Path, name: str, payload: bytes = b"\x00" * 128) -> Path:
    """Create a dummy audio file for testing."""
    p = directory / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(payload)
    return p


def make_mp3_file(directory: Path, name: str) -> Path:
    """Create an untagged MP3 that mutagen can parse: twenty silent MPEG frames."""
    # MPEG1 Layer3 128kbps 44100Hz, 417 bytes per frame including the header
    frame = bytes([0xFF, 0xFB, 0x90, 0x00]) + b"\x00" * 413
    return make_audio_file(directory, name, frame * 20)


@pytest.fixture
def music_root(tmp_path: Path) -> Path:
    """Return a temporary musics root directory."""
    root = tmp_path / "music"
    root.mkdir()
    return root


@pytest.fixture
def tag_editor() -> FakeTagEditor:
    return FakeTagEditor()


@pytest.fixture
def genre_resolver() -> GenreResolver:
    return GenreResolver([
        GenreEntry("Daft Punk", ("French House",)),
        GenreEntry("Foo", ("Techno",)),
        GenreEntry("Bar", ("House", "Disco")),
    ])


@pytest.fixture
def file_name_config(music_root: Path) -> AppConfig:
    return AppConfig(
        music_path_directory=str(music_root),
        music_name_origin=MusicNameOrigin.FILE_NAME,
        print_error_logs=True,
    )


@pytest.fixture
def metadata_config(music_root: Path) -> AppConfig:
    return AppConfig(
        music_path_directory=str(music_root),
        music_name_origin=MusicNameOrigin.METADATA,
        print_error_logs=True,
    )
