"""Genre resolver -- static artist -> genres lookup loaded once per run."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import yaml

from music_classifier.utils.constants import UNKNOWN_GENRE
from music_classifier.utils.exceptions import ConfigurationError
from music_classifier.utils.logger import get_logger

logger = get_logger("core.genre_resolver")


@dataclass(frozen=True)
class GenreEntry:
    """One row of the lookup table."""

    artist: str
    genres: tuple[str, ...]


class GenreResolver:
    """Maps artist names to genre tags.

    Matching is exact and case-sensitive. An artist listed in several
    entries gets the genres of all of them, in table order. Lookups are
    cheap linear scans over an immutable table, so callers query again
    whenever they need the genres instead of keeping the result around.

    Usage:
        resolver = GenreResolver(load_genre_table("genres.yaml"))
        resolver.resolve("Daft Punk", "Pharrell Williams")
    """

    def __init__(self, entries: Sequence[GenreEntry]) -> None:
        if not entries:
            raise ConfigurationError("genre table is empty")
        self._entries = tuple(entries)

    def resolve(self, *artists: str) -> list[str]:
        """Return the genres of every entry matching any of ``artists``.

        Returns:
            Genres in table order (not deduplicated), or ``["UNKNOWN"]``
            when no entry matches.
        """
        wanted = set(artists)
        genres = [
            genre
            for entry in self._entries
            if entry.artist in wanted
            for genre in entry.genres
        ]
        return genres or [UNKNOWN_GENRE]


def load_genre_table(path: Path | str) -> list[GenreEntry]:
    """Load the lookup table from a YAML (or JSON) list of records.

    Each record looks like ``{artist: "Daft Punk", genres: ["French House"]}``.

    Args:
        path: Table file.

    Returns:
        Entries in file order.

    Raises:
        ConfigurationError: If the file is missing, unparseable, malformed,
            or contains no entries.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"genre table not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"cannot parse genre table {path}: {e}") from e

    if not raw:
        raise ConfigurationError(f"no genres found in {path}")
    if not isinstance(raw, list):
        raise ConfigurationError(f"genre table {path} must be a list of records")

    entries = [_parse_entry(record, idx, path) for idx, record in enumerate(raw)]
    logger.info("Loaded %d genre entries from %s", len(entries), path)
    return entries


def _parse_entry(record: object, idx: int, path: Path) -> GenreEntry:
    if not isinstance(record, dict):
        raise ConfigurationError(f"{path}: entry {idx} is not a mapping")

    artist = record.get("artist")
    if not isinstance(artist, str) or not artist:
        raise ConfigurationError(f"{path}: entry {idx} has no artist")

    genres = record.get("genres") or []
    if isinstance(genres, str):
        genres = [genres]
    if not isinstance(genres, list) or not all(isinstance(g, str) for g in genres):
        raise ConfigurationError(f"{path}: genres of {artist!r} must be a list of strings")

    return GenreEntry(artist=artist, genres=tuple(genres))
