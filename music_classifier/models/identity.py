"""Outcomes of resolving one file's identity.

A resolver either produces a Track or says why the file was skipped.
Anything worse than a skip is raised, never returned.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from music_classifier.models.track import Track


@dataclass(frozen=True)
class Resolved:
    """The file yielded a usable title and artist list."""

    track: Track


@dataclass(frozen=True)
class Skipped:
    """The file was left alone; the run continues with the next one."""

    path: Path
    reason: str


IdentityOutcome = Union[Resolved, Skipped]
