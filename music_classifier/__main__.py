"""Allow ``python -m music_classifier``."""

from music_classifier.main import main

main()
