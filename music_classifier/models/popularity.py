"""Artist popularity model -- per-artist counters and their ranking order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class ArtistPopularity:
    """A single artist and how often it was seen across the collection."""

    artist: str
    count: int = 0

    @property
    def sort_key(self) -> tuple[int, str]:
        """Count descending, then name ascending. A strict total order."""
        return (-self.count, self.artist)


class PopularityTable:
    """Accumulated popularity of every artist seen during the identity pass.

    Counts only ever go up. Looking up an artist that was never seen yields
    zero rather than an error.

    Usage:
        table = PopularityTable()
        table.increment("Foo", 2)
        table.sort_artists(["Bar", "Foo"])  # ["Foo", "Bar"]
    """

    def __init__(self, counts: dict[str, int] | None = None) -> None:
        self._counts: dict[str, int] = {}
        for artist, count in (counts or {}).items():
            self.increment(artist, count)

    def increment(self, artist: str, amount: int = 1) -> int:
        """Add ``amount`` to an artist's count and return the new count.

        Raises:
            ValueError: If ``amount`` is negative.
        """
        if amount < 0:
            raise ValueError(f"popularity can only grow, got {amount} for {artist!r}")
        self._counts[artist] = self._counts.get(artist, 0) + amount
        return self._counts[artist]

    def count(self, artist: str) -> int:
        return self._counts.get(artist, 0)

    def entry(self, artist: str) -> ArtistPopularity:
        return ArtistPopularity(artist=artist, count=self.count(artist))

    def ranked(self) -> list[ArtistPopularity]:
        """All entries, most popular first, ties broken by name."""
        return sorted(
            (ArtistPopularity(artist, count) for artist, count in self._counts.items()),
            key=lambda entry: entry.sort_key,
        )

    def sort_artists(self, artists: Iterable[str]) -> list[str]:
        """Order artist names by this table's ranking."""
        return [entry.artist for entry in sorted(map(self.entry, artists), key=lambda e: e.sort_key)]

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        return f"PopularityTable({self._counts!r})"
