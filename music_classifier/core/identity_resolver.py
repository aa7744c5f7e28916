"""Identity resolvers -- turn one audio file into a (title, artists) Track.

Two interchangeable strategies exist, picked once per run from the config:

* ``MetadataIdentityResolver`` trusts the embedded title/artist tags.
* ``FileNameIdentityResolver`` parses ``"<artists> - <title>.<ext>"``.

Both write the resolved title, artists and genres back into the file's tags,
so the collection ends up self-describing whichever source was used.
Unusable files come back as ``Skipped``; I/O and tag failures are raised.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path

from music_classifier.core.genre_resolver import GenreResolver
from music_classifier.core.tag_editor import TagEditor
from music_classifier.models.config import AppConfig, MusicNameOrigin
from music_classifier.models.identity import IdentityOutcome, Resolved, Skipped
from music_classifier.models.track import Track
from music_classifier.utils.constants import (
    FILENAME_ARTIST_SEPARATORS,
    FILENAME_FIELD_SEPARATOR,
    GENERATED_DIRECTORIES,
    TAG_ARTIST_SEPARATOR,
    TAG_GENRE_SEPARATOR,
)
from music_classifier.utils.logger import get_logger

logger = get_logger("core.identity_resolver")


def split_artists(raw: str, separators: tuple[str, ...]) -> list[str]:
    """Split an artist credit into trimmed, non-empty names.

    Args:
        raw: Credit string, e.g. ``"Foo/Bar"`` or ``"Foo, Bar"``.
        separators: Single-character separators to split on.

    Returns:
        Names in credit order. Duplicates are kept.
    """
    pattern = "[" + re.escape("".join(separators)) + "]"
    return [name.strip() for name in re.split(pattern, raw) if name.strip()]


def truncate_malformed_title(title: str) -> str:
    """Cut a tag title containing ``/`` down to its leading segment.

    Titles like ``"Song/Other Artist - Remix"`` come from taggers that stuffed
    credits into the title. The title is cut at the first ``/`` and what is
    left is cut again at the first ``-``. Titles without ``/`` are returned
    unchanged, even if they contain ``-``.
    """
    if TAG_ARTIST_SEPARATOR not in title:
        return title
    title = title.split(TAG_ARTIST_SEPARATOR, 1)[0]
    title = title.split(FILENAME_FIELD_SEPARATOR, 1)[0]
    return title.strip()


class IdentityResolver(ABC):
    """Resolves the identity of one file at a time.

    Subclasses implement ``_resolve``; the shared part skips generated output
    trees, resolves genres, and persists everything back into the tags.
    """

    def __init__(
        self,
        config: AppConfig,
        genre_resolver: GenreResolver,
        tag_editor: TagEditor,
    ) -> None:
        self._config = config
        self._genre_resolver = genre_resolver
        self._tag_editor = tag_editor

    def resolve(self, path: Path) -> IdentityOutcome:
        """Resolve one file.

        Args:
            path: Audio file under the musics root.

        Returns:
            ``Resolved`` with a Track whose title and artists are non-empty,
            or ``Skipped`` with the reason.

        Raises:
            TagError: If tags cannot be read or written.
        """
        if self._is_generated_output(path):
            logger.debug("Skipping generated output: %s", path)
            return Skipped(path, "inside a generated Artists/Genre tree")
        return self._resolve(path)

    @abstractmethod
    def _resolve(self, path: Path) -> IdentityOutcome:
        """Strategy-specific extraction."""

    def _finish(
        self,
        path: Path,
        title: str,
        artists: list[str],
        mention_title: str | None = None,
    ) -> Resolved:
        self._tag_editor.write_tags(
            path,
            title=title,
            artist=TAG_ARTIST_SEPARATOR.join(artists),
            genre=TAG_GENRE_SEPARATOR.join(self._genre_resolver.resolve(*artists)),
        )
        track = Track(
            file_path=path,
            title=title,
            artists=artists,
            genres=self._genre_resolver.resolve(*artists),
            mention_title=mention_title or title,
        )
        logger.debug("Resolved %s -> %s / %s", path.name, artists, title)
        return Resolved(track)

    def _skip(self, path: Path, reason: str) -> Skipped:
        if self._config.print_error_logs:
            logger.warning("%s: %s", reason, path)
        else:
            logger.debug("%s: %s", reason, path)
        return Skipped(path, reason)

    def _is_generated_output(self, path: Path) -> bool:
        """True for files inside ``<root>/Artists/...`` or ``<root>/Genre/...``."""
        try:
            relative = path.parent.relative_to(self._config.musics_root)
        except ValueError:
            return False
        return bool(relative.parts) and relative.parts[0] in GENERATED_DIRECTORIES


class MetadataIdentityResolver(IdentityResolver):
    """Reads title and ``/``-separated artists from the embedded tags."""

    def _resolve(self, path: Path) -> IdentityOutcome:
        tags = self._tag_editor.read_tags(path)
        artists = split_artists(tags.artist, (TAG_ARTIST_SEPARATOR,))
        if not tags.title or not artists:
            return self._skip(path, "Invalid metadata")

        title = tags.title
        if self._config.truncate_malformed_titles:
            title = truncate_malformed_title(title)
        if not title:
            return self._skip(path, "Invalid metadata")

        # The popularity bonus looks at the title as tagged, before truncation.
        return self._finish(path, title, artists, mention_title=tags.title)


class FileNameIdentityResolver(IdentityResolver):
    """Parses ``"<artists> - <title>.<ext>"`` file names.

    The name is split at the first ``-``. Artists may be separated by ``/``
    or ``,``. An artist whose own name contains ``-`` cannot be told apart
    from the separator and ends up split.
    """

    def _resolve(self, path: Path) -> IdentityOutcome:
        artist_segment, separator, title_segment = path.name.partition(FILENAME_FIELD_SEPARATOR)
        if not separator:
            return self._skip(path, "Invalid file name")

        if path.suffix and title_segment.endswith(path.suffix):
            title_segment = title_segment[: -len(path.suffix)]
        title = title_segment.strip()
        artists = split_artists(artist_segment, FILENAME_ARTIST_SEPARATORS)
        if not title or not artists:
            return self._skip(path, "Invalid file name")

        return self._finish(path, title, artists)


_RESOLVERS: dict[MusicNameOrigin, type[IdentityResolver]] = {
    MusicNameOrigin.METADATA: MetadataIdentityResolver,
    MusicNameOrigin.FILE_NAME: FileNameIdentityResolver,
}


def create_identity_resolver(
    config: AppConfig,
    genre_resolver: GenreResolver,
    tag_editor: TagEditor | None = None,
) -> IdentityResolver:
    """Build the resolver selected by ``config.music_name_origin``."""
    resolver_cls = _RESOLVERS[MusicNameOrigin.parse(config.music_name_origin)]
    return resolver_cls(config, genre_resolver, tag_editor or TagEditor())
