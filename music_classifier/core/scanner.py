"""File scanner -- discovers audio files under the musics directory."""

from __future__ import annotations

from pathlib import Path
from typing import Generator, Iterable

from music_classifier.utils.constants import DEFAULT_AUDIO_EXTENSIONS
from music_classifier.utils.exceptions import ConfigurationError
from music_classifier.utils.file_utils import is_audio_file
from music_classifier.utils.logger import get_logger

logger = get_logger("core.scanner")


class FileScanner:
    """Discovers audio files in a directory tree.

    Usage:
        scanner = FileScanner([".mp3"])
        paths = scanner.scan("/path/to/music")
    """

    def __init__(self, extensions: Iterable[str] = DEFAULT_AUDIO_EXTENSIONS) -> None:
        self._extensions = tuple(extensions)

    def scan(self, root: Path | str) -> list[Path]:
        """Scan a directory tree and return every matching audio file.

        Args:
            root: Root directory to scan.

        Returns:
            Sorted list of audio file paths.

        Raises:
            FileNotFoundError: If root directory does not exist.
            NotADirectoryError: If root is not a directory.
            ConfigurationError: If no audio file was found.
        """
        root = Path(root)
        if not root.exists():
            raise FileNotFoundError(f"Directory not found: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")

        logger.info("Scanning directory: %s", root)
        audio_files = list(self._discover_audio_files(root))
        if not audio_files:
            raise ConfigurationError(
                f"no files with extensions {', '.join(self._extensions)} found in path: {root}"
            )

        logger.info("Found %d audio files", len(audio_files))
        return audio_files

    def _discover_audio_files(self, root: Path) -> Generator[Path, None, None]:
        """Recursively yield audio files under a root directory, in path order."""
        for entry in sorted(root.rglob("*")):
            if entry.is_file() and is_audio_file(entry, self._extensions):
                yield entry
