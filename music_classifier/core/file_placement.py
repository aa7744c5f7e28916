"""File placement -- per-artist links and per-genre copies of renamed tracks."""

from __future__ import annotations

from pathlib import Path

from music_classifier.models.track import Track
from music_classifier.utils.constants import ARTISTS_DIRECTORY, GENRE_DIRECTORY
from music_classifier.utils.file_utils import (
    copy_file,
    ensure_directory,
    link_file,
    sanitize_path_component,
)
from music_classifier.utils.logger import get_logger

logger = get_logger("core.file_placement")


class FilePlacer:
    """Distributes canonically named tracks into derived directory trees.

    Structure:
        /Musics/Artists/<artist>/<canonical artists> - <title>.<ext>  (hard link)
        /Musics/Genre/<genre>/<canonical artists> - <title>.<ext>     (copy)

    Genre views are full copies so they never share an inode with the
    artist views or the source file. Existing destinations are left alone,
    which makes both operations safe to repeat.
    """

    def __init__(self, musics_root: Path | str) -> None:
        """Initialize the placer.

        Args:
            musics_root: Root directory; ``Artists/`` and ``Genre/`` are
                created directly below it.
        """
        self._musics_root = Path(musics_root)

    def place_per_artist(self, track: Track) -> list[Path]:
        """Hard-link the track into ``Artists/<artist>/`` for each artist.

        Args:
            track: Track that went through the naming pass.

        Returns:
            Destinations that were newly created; already existing ones are
            skipped silently.

        Raises:
            ValueError: If the track has not been named yet.
            OSError: If a directory or link cannot be created.
        """
        created: list[Path] = []
        for artist in track.unique_artists:
            dest = self.artist_destination(track, artist)
            ensure_directory(dest.parent)
            if link_file(track.file_path, dest):
                logger.info("Linked: %s -> %s", track.file_path.name, dest)
                created.append(dest)
        return created

    def place_per_genre(self, track: Track) -> list[Path]:
        """Copy the track into ``Genre/<genre>/`` for each genre.

        Args:
            track: Track that went through the naming pass.

        Returns:
            Destinations that were newly created.

        Raises:
            ValueError: If the track has not been named yet.
            OSError: If a directory cannot be created or the copy fails.
        """
        created: list[Path] = []
        for genre in dict.fromkeys(track.genres):
            dest = self.genre_destination(track, genre)
            ensure_directory(dest.parent)
            if copy_file(track.file_path, dest):
                logger.info("Copied: %s -> %s", track.file_path.name, dest)
                created.append(dest)
        return created

    def artist_destination(self, track: Track, artist: str) -> Path:
        return self._destination(ARTISTS_DIRECTORY, artist, track)

    def genre_destination(self, track: Track, genre: str) -> Path:
        return self._destination(GENRE_DIRECTORY, genre, track)

    def _destination(self, tree: str, folder: str, track: Track) -> Path:
        return self._musics_root / tree / sanitize_path_component(folder) / track.canonical_filename
