"""Classification pipeline -- identity pass, naming pass, placement.

The two passes are strictly sequential: the naming pass needs the popularity
of every artist in the collection, so it cannot start before the identity
pass has seen every file. The identity pass therefore returns the tracks and
the finished popularity table, and the naming pass takes both as arguments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from music_classifier.core.canonical_naming import CanonicalNamer
from music_classifier.core.file_placement import FilePlacer
from music_classifier.core.genre_resolver import GenreResolver
from music_classifier.core.identity_resolver import create_identity_resolver
from music_classifier.core.popularity import record_track
from music_classifier.core.scanner import FileScanner
from music_classifier.core.tag_editor import TagEditor
from music_classifier.models.config import AppConfig
from music_classifier.models.identity import Skipped
from music_classifier.models.popularity import PopularityTable
from music_classifier.models.track import Track
from music_classifier.utils.exceptions import MusicClassifierError
from music_classifier.utils.logger import get_logger

logger = get_logger("core.pipeline")


@dataclass
class IdentityPassResult:
    """Everything the identity pass produces."""

    tracks: list[Track]
    popularity: PopularityTable
    skipped: list[Skipped] = field(default_factory=list)


@dataclass
class RunSummary:
    """Outcome of a full run, for logging and reporting."""

    tracks: list[Track]
    popularity: PopularityTable
    skipped: list[Skipped] = field(default_factory=list)
    linked: list[Path] = field(default_factory=list)
    copied: list[Path] = field(default_factory=list)


class ClassificationPipeline:
    """Runs a whole classification over the configured musics directory.

    Usage:
        pipeline = ClassificationPipeline(config, GenreResolver(entries))
        summary = pipeline.run()
    """

    def __init__(
        self,
        config: AppConfig,
        genre_resolver: GenreResolver,
        tag_editor: TagEditor | None = None,
        scanner: FileScanner | None = None,
    ) -> None:
        self._config = config
        self._resolver = create_identity_resolver(config, genre_resolver, tag_editor)
        self._scanner = scanner or FileScanner(config.audio_extensions)
        self._placer = FilePlacer(config.musics_root)

    def run(self) -> RunSummary:
        """Scan, resolve, rename and place every audio file.

        Raises:
            ConfigurationError: If no audio file exists under the root.
            MusicClassifierError: If no file could be resolved.
            TagError: If tags cannot be read or written.
            OSError: If any rename, link, copy or mkdir fails.
        """
        paths = self._scanner.scan(self._config.musics_root)
        identity = self.identify(paths)
        tracks = self.name(identity.tracks, identity.popularity)

        summary = RunSummary(
            tracks=tracks,
            popularity=identity.popularity,
            skipped=identity.skipped,
        )
        if self._config.save_music_per_artist:
            summary.linked = self.place_per_artist(tracks)
        if self._config.save_music_per_genre:
            summary.copied = self.place_per_genre(tracks)

        logger.info(
            "Run complete: %d tracks, %d skipped, %d links, %d copies",
            len(summary.tracks), len(summary.skipped), len(summary.linked), len(summary.copied),
        )
        return summary

    def identify(self, paths: Iterable[Path]) -> IdentityPassResult:
        """Phase 1: resolve every file and accumulate popularity.

        Raises:
            MusicClassifierError: If every file was skipped.
        """
        result = IdentityPassResult(tracks=[], popularity=PopularityTable())
        for path in paths:
            outcome = self._resolver.resolve(path)
            if isinstance(outcome, Skipped):
                result.skipped.append(outcome)
                continue
            record_track(result.popularity, outcome.track, self._config.title_mention_bonus)
            result.tracks.append(outcome.track)

        if not result.tracks:
            raise MusicClassifierError("no music data found")

        logger.info(
            "Identity pass: %d tracks resolved, %d skipped, %d artists",
            len(result.tracks), len(result.skipped), len(result.popularity),
        )
        return result

    def name(self, tracks: list[Track], popularity: PopularityTable) -> list[Track]:
        """Phase 2: order artists by the finished table and rename each file."""
        namer = CanonicalNamer(popularity)
        for track in tracks:
            namer.apply(track)
        return tracks

    def place_per_artist(self, tracks: list[Track]) -> list[Path]:
        created: list[Path] = []
        for track in tracks:
            created.extend(self._placer.place_per_artist(track))
        return created

    def place_per_genre(self, tracks: list[Track]) -> list[Path]:
        created: list[Path] = []
        for track in tracks:
            created.extend(self._placer.place_per_genre(track))
        return created
