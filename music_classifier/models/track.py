"""Track data model -- one audio file moving through the classification pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from music_classifier.utils.constants import TITLE_SEPARATOR
from music_classifier.utils.file_utils import sanitize_path_component


@dataclass
class Track:
    """Represents a single audio file with its resolved identity.

    A Track is filled in two passes: the identity pass sets ``title``,
    ``artists`` and ``genres``; the naming pass sets
    ``canonical_artist_order`` and moves ``file_path`` to the canonical name.

    Attributes:
        file_path: Current path of the audio file on disk.
        title: Track title.
        artists: Artist names in the order they were parsed. May contain
            duplicates when the source data does.
        genres: Genre tags resolved from the lookup table.
        source_directory: Directory the file lives in; renames stay inside it.
        canonical_artist_order: Popularity-ranked, comma-joined artists.
            Empty until the naming pass.
        original_path: Path before the naming pass renamed the file.
        mention_title: Title the popularity bonus is checked against. For
            tag-sourced tracks this is the tag as read, before truncation.
            Defaults to ``title``.
    """

    # --- Required ---
    file_path: Path
    title: str
    artists: list[str]

    # --- Classification ---
    genres: list[str] = field(default_factory=list)
    source_directory: Path | None = None
    canonical_artist_order: str = ""

    # --- History ---
    original_path: Path | None = None
    mention_title: str = ""

    def __post_init__(self) -> None:
        """Ensure paths are Path objects and fill in derived defaults."""
        if isinstance(self.file_path, str):
            self.file_path = Path(self.file_path)
        if self.source_directory is None:
            self.source_directory = self.file_path.parent
        elif isinstance(self.source_directory, str):
            self.source_directory = Path(self.source_directory)
        if self.original_path is None:
            self.original_path = self.file_path
        if not self.mention_title:
            self.mention_title = self.title

    @property
    def extension(self) -> str:
        """File suffix including the dot, preserved across renames."""
        return self.file_path.suffix

    @property
    def unique_artists(self) -> list[str]:
        """Artists with duplicates removed, first occurrence wins."""
        return list(dict.fromkeys(self.artists))

    @property
    def is_named(self) -> bool:
        """True once the naming pass has computed the canonical artist order."""
        return bool(self.canonical_artist_order)

    @property
    def canonical_filename(self) -> str:
        """``"<canonical artists> - <title><ext>"`` for renames and placements.

        Raises:
            ValueError: If the naming pass has not run for this track yet.
        """
        if not self.is_named:
            raise ValueError(f"canonical artist order not computed for {self.file_path}")
        stem = f"{self.canonical_artist_order}{TITLE_SEPARATOR}{self.title}"
        return sanitize_path_component(stem) + self.extension
