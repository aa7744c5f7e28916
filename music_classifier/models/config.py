"""Typed configuration model for Music Classifier.

The config is read once at startup, validated, and then handed explicitly to
every component that needs it. Nothing looks configuration up globally.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path

from music_classifier.utils.constants import (
    DEFAULT_AUDIO_EXTENSIONS,
    DEFAULT_GENRES_FILENAME,
    LOG_LEVELS,
    SUPPORTED_EXTENSIONS,
)
from music_classifier.utils.exceptions import ConfigurationError


class MusicNameOrigin(str, Enum):
    """Where a track's title and artists are read from."""

    METADATA = "METADATA"
    FILE_NAME = "FILE_NAME"

    @classmethod
    def parse(cls, value: object) -> MusicNameOrigin:
        """Validate a raw config value against the closed set of origins.

        Raises:
            ConfigurationError: If the value is not a known origin.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(origin.value for origin in cls)
            raise ConfigurationError(
                f"invalid music name origin {value!r} (expected one of: {allowed})"
            ) from None


_BOOL_FIELDS = (
    "save_music_per_artist",
    "save_music_per_genre",
    "print_artist_popularity",
    "print_error_logs",
    "truncate_malformed_titles",
    "title_mention_bonus",
)

_STR_FIELDS = (
    "music_path_directory",
    "genres_file",
    "log_level",
    "log_file",
)


@dataclass
class AppConfig:
    """Strongly-typed configuration for a classification run.

    Attributes:
        music_path_directory: Root of the collection; output trees are
            created directly below it.
        music_name_origin: Identity source, metadata tags or file names.
        save_music_per_artist: Hard-link every track into ``Artists/<artist>``.
        save_music_per_genre: Copy every track into ``Genre/<genre>``.
        print_artist_popularity: Print the popularity table at the end.
        print_error_logs: Report skipped files at WARNING instead of DEBUG.
        genres_file: Path to the artist -> genres lookup table.
        audio_extensions: File suffixes picked up by the scanner.
        truncate_malformed_titles: Cut tag titles containing ``/`` at the
            first ``/`` and then at the first ``-``.
        title_mention_bonus: Count an artist once more when the track title
            mentions it.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_file: Path to log file (None = console only).
    """

    # --- Required ---
    music_path_directory: str = ""
    music_name_origin: MusicNameOrigin = MusicNameOrigin.FILE_NAME

    # --- Output ---
    save_music_per_artist: bool = False
    save_music_per_genre: bool = False
    print_artist_popularity: bool = False
    print_error_logs: bool = False

    # --- Inputs ---
    genres_file: str = DEFAULT_GENRES_FILENAME
    audio_extensions: list[str] = field(default_factory=lambda: list(DEFAULT_AUDIO_EXTENSIONS))

    # --- Heuristics ---
    truncate_malformed_titles: bool = True
    title_mention_bonus: bool = True

    # --- Logging ---
    log_level: str = "INFO"
    log_file: str | None = None

    @classmethod
    def from_dict(cls, data: dict, base_dir: Path | None = None) -> AppConfig:
        """Create a validated AppConfig from a raw dictionary (e.g., from YAML).

        Unknown keys are silently ignored so config files with extra keys
        don't break older code. ``genres_file`` is resolved against
        ``base_dir`` when it is relative.

        Args:
            data: Dictionary of configuration values.
            base_dir: Directory of the config file, if any.

        Returns:
            Populated AppConfig instance.

        Raises:
            ConfigurationError: If a required field is missing or invalid.
        """
        if not isinstance(data, dict):
            raise ConfigurationError("configuration must be a mapping of keys to values")

        known_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in known_fields and v is not None}

        if "music_name_origin" not in filtered:
            raise ConfigurationError("music_name_origin is required")
        filtered["music_name_origin"] = MusicNameOrigin.parse(filtered["music_name_origin"])

        for name in _BOOL_FIELDS:
            if name in filtered and not isinstance(filtered[name], bool):
                raise ConfigurationError(f"{name} must be true or false, got {filtered[name]!r}")
        for name in _STR_FIELDS:
            if name in filtered and not isinstance(filtered[name], str):
                raise ConfigurationError(f"{name} must be a string, got {filtered[name]!r}")

        extensions = filtered.get("audio_extensions")
        if extensions is not None:
            if isinstance(extensions, str):
                extensions = [extensions]
            if not isinstance(extensions, list):
                raise ConfigurationError("audio_extensions must be a list of suffixes")
            filtered["audio_extensions"] = [_normalize_extension(ext) for ext in extensions]

        config = cls(**filtered)
        if base_dir is not None and not Path(config.genres_file).is_absolute():
            config.genres_file = str(base_dir / config.genres_file)
        config.validate()
        return config

    def validate(self) -> None:
        """Check the invariants the pipeline relies on.

        Raises:
            ConfigurationError: On the first violated invariant.
        """
        if not isinstance(self.music_path_directory, str) or not self.music_path_directory.strip():
            raise ConfigurationError("music_path_directory is empty")
        MusicNameOrigin.parse(self.music_name_origin)
        if not self.audio_extensions:
            raise ConfigurationError("audio_extensions is empty")
        if not self.genres_file:
            raise ConfigurationError("genres_file is empty")
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"invalid log_level {self.log_level!r} (expected one of: {', '.join(LOG_LEVELS)})"
            )

    @property
    def musics_root(self) -> Path:
        """The musics directory as an expanded Path."""
        return Path(self.music_path_directory).expanduser()


def _normalize_extension(ext: object) -> str:
    if not isinstance(ext, str) or not ext.strip(".").strip():
        raise ConfigurationError(f"invalid audio extension {ext!r}")
    ext = ext.strip().lower()
    ext = ext if ext.startswith(".") else f".{ext}"
    if ext not in SUPPORTED_EXTENSIONS:
        raise ConfigurationError(f"audio extension {ext!r} is not supported for tag writing")
    return ext
