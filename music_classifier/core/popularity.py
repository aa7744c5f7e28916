"""Artist popularity -- accumulation during the identity pass and reporting."""

from __future__ import annotations

from music_classifier.models.popularity import PopularityTable
from music_classifier.models.track import Track

# Points per (track, artist) pair.
OCCURRENCE_POINTS = 1
TITLE_MENTION_POINTS = 1


def popularity_points(title: str, artist: str, mention_bonus: bool = True) -> int:
    """Points one track contributes to one of its artists.

    One point for appearing on the track, plus one when the title contains
    the artist's name (self-titled tracks, "feat." credits in titles).
    """
    points = OCCURRENCE_POINTS
    if mention_bonus and artist in title:
        points += TITLE_MENTION_POINTS
    return points


def record_track(table: PopularityTable, track: Track, mention_bonus: bool = True) -> None:
    """Add a resolved track's contribution to the table.

    Each distinct artist is counted once, even if the credit repeats it.
    The bonus is checked against ``track.mention_title``.
    """
    for artist in track.unique_artists:
        table.increment(artist, popularity_points(track.mention_title, artist, mention_bonus))


def format_popularity_report(table: PopularityTable) -> list[str]:
    """Render the table as ``"<artist>: <count>"`` lines, most popular first."""
    return [f"{entry.artist}: {entry.count}" for entry in table.ranked()]
