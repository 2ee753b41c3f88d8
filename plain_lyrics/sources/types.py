from __future__ import annotations

from dataclasses import dataclass

# Opaque page reference produced by a provider's search call.
# Only meaningful to the provider that produced it.
Locator = str


@dataclass(frozen=True, slots=True)
class TrackKey:
    artist: str
    title: str

    @property
    def display(self) -> str:
        if self.artist and self.title:
            return f"{self.artist} - {self.title}"
        return self.title or self.artist or "Unknown track"


@dataclass(frozen=True, slots=True)
class SearchHit:
    """One candidate record of a list-shaped search response."""
    kind: str
    locator: Locator
