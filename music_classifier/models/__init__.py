"""Data models for Music Classifier."""

from music_classifier.models.config import AppConfig, MusicNameOrigin
from music_classifier.models.identity import IdentityOutcome, Resolved, Skipped
from music_classifier.models.popularity import ArtistPopularity, PopularityTable
from music_classifier.models.track import Track

__all__ = [
    "AppConfig",
    "ArtistPopularity",
    "IdentityOutcome",
    "MusicNameOrigin",
    "PopularityTable",
    "Resolved",
    "Skipped",
    "Track",
]
