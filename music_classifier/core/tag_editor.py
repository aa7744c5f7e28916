"""Tag editor -- reads and writes title/artist/genre tags via mutagen."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import mutagen
from mutagen.asf import ASF
from mutagen.easyid3 import EasyID3
from mutagen.flac import FLAC
from mutagen.id3 import ID3NoHeaderError
from mutagen.mp4 import MP4
from mutagen.oggopus import OggOpus
from mutagen.oggvorbis import OggVorbis

from music_classifier.utils.exceptions import TagError
from music_classifier.utils.logger import get_logger

logger = get_logger("core.tag_editor")


# --- Tag key mapping for formats without an easy interface ---
# ID3 and Vorbis use the easy/vorbis key names ("title", "artist", "genre").

_ASF_MAP = {
    "title": "Title",
    "artist": "Author",
    "genre": "WM/Genre",
}

_MP4_MAP = {
    "title": "\xa9nam",
    "artist": "\xa9ART",
    "genre": "\xa9gen",
}


@dataclass(frozen=True)
class TagSnapshot:
    """The embedded tags the classifier cares about. Missing tags are ``""``."""

    title: str = ""
    artist: str = ""
    genre: str = ""


class TagEditor:
    """Reads and writes metadata tags on audio files.

    Supports MP3, FLAC, M4A, OGG Vorbis, OGG Opus, WMA, APE and WavPack.
    Uses mutagen under the hood. Does not modify audio data, only tags.
    Every failure is raised as ``TagError``; a run cannot continue with a
    file whose tags it cannot trust.
    """

    def read_tags(self, path: Path) -> TagSnapshot:
        """Read title, artist and genre from an audio file.

        Args:
            path: Audio file.

        Returns:
            The tag values, stripped, with ``""`` for absent tags.

        Raises:
            TagError: If the file is missing or mutagen cannot parse it.
        """
        if not path.exists():
            raise TagError(path, "file not found for tag reading")

        try:
            audio = mutagen.File(path, easy=True)
        except (mutagen.MutagenError, OSError, ValueError) as e:
            raise TagError(path, f"cannot read tags: {e}") from e
        if audio is None:
            raise TagError(path, "mutagen could not open file")

        keys = _ASF_MAP if isinstance(audio, ASF) else {k: k for k in _ASF_MAP}
        snapshot = TagSnapshot(
            title=self._get_tag(audio, keys["title"]),
            artist=self._get_tag(audio, keys["artist"]),
            genre=self._get_tag(audio, keys["genre"]),
        )
        logger.debug("Read tags for: %s -> %s - %s", path.name, snapshot.artist, snapshot.title)
        return snapshot

    def write_tags(self, path: Path, title: str, artist: str, genre: str) -> None:
        """Write title, artist and genre to the audio file and save it.

        Args:
            path: Audio file.
            title: Track title.
            artist: Artist tag, several artists joined with ``/``.
            genre: Genre tag, several genres joined with ``, ``.

        Raises:
            TagError: If the file is missing or the tags cannot be saved.
        """
        if not path.exists():
            raise TagError(path, "file not found for tag writing")

        values = {"title": title, "artist": artist, "genre": genre}
        suffix = path.suffix.lower()
        try:
            if suffix == ".mp3":
                self._write_mp3_tags(path, values)
            elif suffix == ".flac":
                self._write_vorbis_file(FLAC(path), values)
            elif suffix in (".m4a", ".mp4"):
                self._write_mp4_tags(path, values)
            elif suffix == ".ogg":
                self._write_vorbis_file(OggVorbis(path), values)
            elif suffix == ".opus":
                self._write_vorbis_file(OggOpus(path), values)
            elif suffix in (".wma", ".asf"):
                self._write_asf_tags(path, values)
            else:
                # Try generic easy tags for APE, WavPack, etc.
                self._write_easy_tags(path, values)
        except (mutagen.MutagenError, OSError, ValueError) as e:
            raise TagError(path, f"cannot write tags: {e}") from e

        logger.debug("Wrote tags: %s", path.name)

    # --- Private: Read helpers ---

    def _get_tag(self, audio: mutagen.FileType, key: str) -> str:
        """Extract a single tag value from a mutagen file object.

        Args:
            audio: Mutagen file object (opened with easy=True).
            key: Tag key name.

        Returns:
            Tag value as a stripped string, or ``""``.
        """
        try:
            value = audio.get(key)
        except (KeyError, IndexError, TypeError):
            return ""
        if not value:
            return ""
        # Mutagen returns lists for most tag types
        if isinstance(value, list):
            value = value[0]
        return str(value).strip()

    # --- Private: Write helpers per format ---

    def _write_mp3_tags(self, path: Path, values: dict[str, str]) -> None:
        """Write tags to an MP3 file using EasyID3."""
        try:
            audio = EasyID3(path)
        except ID3NoHeaderError:
            audio = EasyID3()
            audio.save(path)
            audio = EasyID3(path)

        self._set_tags(audio, values)
        audio.save()

    def _write_vorbis_file(self, audio: Any, values: dict[str, str]) -> None:
        """Write Vorbis comments (FLAC, OGG Vorbis, OGG Opus)."""
        if audio.tags is None:
            audio.add_tags()
        self._set_tags(audio, values)
        audio.save()

    def _write_mp4_tags(self, path: Path, values: dict[str, str]) -> None:
        """Write tags to an M4A/MP4 file."""
        audio = MP4(path)
        if audio.tags is None:
            audio.add_tags()
        for field_name, atom in _MP4_MAP.items():
            audio[atom] = [values[field_name]]
        audio.save()

    def _write_asf_tags(self, path: Path, values: dict[str, str]) -> None:
        """Write tags to a WMA/ASF file."""
        audio = ASF(path)
        for field_name, tag_key in _ASF_MAP.items():
            audio[tag_key] = [values[field_name]]
        audio.save()

    def _write_easy_tags(self, path: Path, values: dict[str, str]) -> None:
        """Write tags using the generic mutagen easy interface."""
        audio = mutagen.File(path, easy=True)
        if audio is None:
            raise TagError(path, "cannot open for writing")
        if audio.tags is None:
            audio.add_tags()
        self._set_tags(audio, values)
        audio.save()

    def _set_tags(self, audio: Any, values: dict[str, str]) -> None:
        """Set tags on an easy-interface or Vorbis-comment mutagen object."""
        for key, value in values.items():
            audio[key] = [value]
