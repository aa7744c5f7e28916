"""Music Classifier -- sorts an audio collection by artist popularity and genre."""

from music_classifier.utils.constants import APP_VERSION

__version__ = APP_VERSION
