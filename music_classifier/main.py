"""Music Classifier -- Entry point and run wiring."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

import yaml

from music_classifier.utils.constants import (
    APP_NAME,
    APP_VERSION,
    CLI_NAME,
    DEFAULT_CONFIG_FILENAME,
    LOG_LEVELS,
)
from music_classifier.utils.exceptions import ConfigurationError, MusicClassifierError
from music_classifier.utils.logger import get_logger, setup_logger, shutdown_logger

# Directories that should never be used as a musics root (exact matches).
# The classifier renames files and creates trees directly below the root.
_DANGEROUS_PATHS = frozenset(
    {
        "/",
        "C:\\",
        "C:\\Windows",
        "C:\\Program Files",
        "/usr",
        "/etc",
        "/var",
        "/tmp",
        "/System",
        "/Library",
        "/Applications",
        "/bin",
        "/sbin",
        "/lib",
        "/opt",
    }
)

# Minimum number of path components (after the root) for a musics root.
_MIN_PATH_DEPTH = 2


def _is_dangerous_path(resolved: str) -> str | None:
    """Check if a resolved path is too dangerous to use as the musics root.

    Uses two strategies:
    1. Exact blocklist for known system directories.
    2. Depth check -- paths with fewer than ``_MIN_PATH_DEPTH`` components
       after the filesystem root are considered dangerous (e.g. ``/home``).

    Args:
        resolved: Resolved, normalized path string.

    Returns:
        A human-readable reason string if the path is dangerous, or None
        if it's safe.
    """
    normalized = resolved.rstrip("/\\") or resolved

    for dangerous in _DANGEROUS_PATHS:
        if normalized.lower() == dangerous.lower():
            return (
                f"resolves to a known system directory ({normalized}). "
                f"Renaming files there could damage the system."
            )

    depth = len(Path(resolved).parts) - 1
    if depth < _MIN_PATH_DEPTH:
        return (
            f"is only {depth} level(s) deep from the filesystem root. "
            f"Musics paths should be at least {_MIN_PATH_DEPTH} levels deep "
            f"to prevent accidental damage (e.g. '/home/me/Music')."
        )
    return None


def validate_config(config: dict) -> list[str]:
    """Check a raw configuration for risky but legal values.

    Hard errors (missing or invalid required fields) are raised later by
    ``AppConfig.from_dict``; this only collects warnings.

    Args:
        config: Configuration dictionary.

    Returns:
        List of human-readable warning strings. Empty if all checks pass.
    """
    warnings: list[str] = []

    music_path = config.get("music_path_directory", "")
    if isinstance(music_path, str) and music_path:
        reason = _is_dangerous_path(str(Path(music_path).expanduser().resolve()))
        if reason:
            warnings.append(f"music_path_directory '{music_path}' {reason}")

    return warnings


def load_config(config_path: Path) -> dict:
    """Load the raw configuration from a YAML (or JSON) file.

    Args:
        config_path: Path to the config file.

    Returns:
        Configuration dictionary (suitable for ``AppConfig.from_dict()``).

    Raises:
        ConfigurationError: If the file is missing or cannot be parsed.
    """
    if not config_path.is_file():
        raise ConfigurationError(f"config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"cannot parse config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"config file {config_path} must contain a mapping")
    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=CLI_NAME,
        description="Classify audio files by artist and genre and organize them "
        "under popularity-ordered names.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path(DEFAULT_CONFIG_FILENAME),
        help=f"path to the YAML config file (default: ./{DEFAULT_CONFIG_FILENAME})",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        help="override log_level from the config file",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser


def run(config_path: Path, log_level: str | None = None) -> int:
    """Load everything, run the pipeline, and print the popularity report.

    Raises:
        MusicClassifierError: On configuration, input or tag failures.
        OSError: On any file-system failure.
    """
    from music_classifier.core.genre_resolver import GenreResolver, load_genre_table
    from music_classifier.core.pipeline import ClassificationPipeline
    from music_classifier.core.popularity import format_popularity_report
    from music_classifier.models.config import AppConfig

    raw_config = load_config(config_path)
    config_warnings = validate_config(raw_config)
    config = AppConfig.from_dict(raw_config, base_dir=config_path.parent)

    setup_logger(log_level=log_level or config.log_level, log_file=config.log_file)
    logger = get_logger("main")
    logger.info("%s v%s starting", APP_NAME, APP_VERSION)

    for warning in config_warnings:
        logger.warning("Config: %s", warning)

    genre_resolver = GenreResolver(load_genre_table(config.genres_file))
    pipeline = ClassificationPipeline(config, genre_resolver)
    summary = pipeline.run()

    if config.print_artist_popularity:
        for line in format_popularity_report(summary.popularity):
            print(line)

    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Application entry point. Exits non-zero with the error message on any failure."""
    args = build_parser().parse_args(argv)
    try:
        exit_code = run(args.config, args.log_level)
    except (MusicClassifierError, OSError) as e:
        if get_logger().handlers:
            get_logger("main").critical("Aborted: %s", e)
        sys.exit(f"{CLI_NAME}: {e}")
    finally:
        shutdown_logger()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
