"""Exception hierarchy for Music Classifier.

Everything raised from here is fatal to a run. Recoverable per-file
problems (unparseable names, missing tags) are reported as ``Skipped``
outcomes by the identity resolvers instead.
"""

from __future__ import annotations

from pathlib import Path


class MusicClassifierError(Exception):
    """Base class for all application-specific errors."""


class ConfigurationError(MusicClassifierError):
    """Raised for invalid configuration, genre tables, or empty inputs."""


class TagError(MusicClassifierError):
    """Raised when embedded tags cannot be read or written."""

    def __init__(self, file_path: Path | str, reason: str) -> None:
        self.file_path = Path(file_path)
        self.reason = reason
        super().__init__(f"{file_path}: {reason}")
