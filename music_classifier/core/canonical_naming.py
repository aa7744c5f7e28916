"""Canonical naming -- popularity-ordered artist credits and in-place renames."""

from __future__ import annotations

from music_classifier.models.popularity import PopularityTable
from music_classifier.models.track import Track
from music_classifier.utils.constants import ARTIST_JOIN_SEPARATOR
from music_classifier.utils.file_utils import rename_file
from music_classifier.utils.logger import get_logger

logger = get_logger("core.canonical_naming")


def canonical_artist_order(artists: list[str], table: PopularityTable) -> str:
    """Join a track's distinct artists, most popular first.

    Ties on popularity are broken by name so the result never depends on
    the order the artists were credited in.

    Args:
        artists: Artist names as parsed.
        table: A complete popularity table for the whole collection.

    Returns:
        Names joined with ``", "``.
    """
    return ARTIST_JOIN_SEPARATOR.join(table.sort_artists(dict.fromkeys(artists)))


class CanonicalNamer:
    """Renames tracks to ``"<canonical artists> - <title><ext>"``.

    Must only be given a table that every track has already contributed to;
    a partial snapshot would order the same artists differently from one
    file to the next.
    """

    def __init__(self, table: PopularityTable) -> None:
        self._table = table

    def apply(self, track: Track) -> Track:
        """Compute the track's canonical artist order and rename the file.

        Args:
            track: Resolved track.

        Returns:
            The same Track with ``canonical_artist_order`` and ``file_path``
            updated.

        Raises:
            FileExistsError: If a different file already has the target name.
            OSError: If the rename fails.
        """
        track.canonical_artist_order = canonical_artist_order(track.artists, self._table)
        destination = track.source_directory / track.canonical_filename

        if destination == track.file_path:
            logger.debug("Already canonical: %s", destination.name)
            return track

        track.file_path = rename_file(track.file_path, destination)
        logger.info("Renamed: %s -> %s", track.original_path.name, destination.name)
        return track
