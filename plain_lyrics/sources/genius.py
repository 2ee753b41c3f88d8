from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from .base import LyricsSource, PageFetcher
from .errors import FormatError
from .http import Timeouts, http_get, parse_json
from .types import Locator, SearchHit, TrackKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeniusConfig:
    token: str = ""
    api_url: str = "https://api.genius.com"
    site_url: str = "https://genius.com"
    container_selector: str = "div.lyrics p"
    strip_selectors: tuple[str, ...] = ()
    timeouts: Timeouts = field(default_factory=Timeouts)


def parse_hits(data: Any) -> Iterator[SearchHit]:
    """
    {"response": {"hits": [{"type": ..., "result": {"path": ...}}, ...]}} -> SearchHit, ...

    Hits are validated one at a time as they are consumed, so records after
    the one a caller stops at are never looked at. Only song hits need a
    path; other kinds (artists, albums, ...) get an empty locator.
    """
    try:
        hits = data["response"]["hits"]
    except (KeyError, TypeError) as e:
        raise FormatError(f"genius search answer has no response.hits: {e!r}") from e
    if not isinstance(hits, list):
        raise FormatError(f"genius hits is {type(hits).__name__}, expected list")

    for hit in hits:
        if not isinstance(hit, dict) or not isinstance(hit.get("type"), str):
            raise FormatError(f"malformed genius hit: {hit!r}")
        kind = hit["type"]
        path = ""
        if kind == "song":
            result = hit.get("result")
            path = result.get("path") if isinstance(result, dict) else None
            if not isinstance(path, str):
                raise FormatError(f"genius song hit without result.path: {hit!r}")
        yield SearchHit(kind=kind, locator=path)


def first_song(hits: Iterable[SearchHit]) -> Locator | None:
    # First song wins; titles and artists of hits are not compared against the query.
    for hit in hits:
        if hit.kind == "song":
            return hit.locator or None
    return None


class GeniusSource(LyricsSource):
    name = "genius"

    def __init__(self, cfg: GeniusConfig | None = None):
        self.cfg = cfg or GeniusConfig()
        if not self.cfg.token:
            logger.warning("genius: no API token configured, searches will be rejected")
        self.pages = PageFetcher(
            container_selector=self.cfg.container_selector,
            strip_selectors=self.cfg.strip_selectors,
            base_url=self.cfg.site_url,
            timeouts=self.cfg.timeouts,
        )

    def search(self, track: TrackKey) -> Locator | None:
        r = http_get(
            self.cfg.api_url.rstrip("/") + "/search",
            params={"q": f"{track.artist} {track.title}"},
            headers={"Authorization": f"Bearer {self.cfg.token}"},
            timeouts=self.cfg.timeouts,
        )
        return first_song(parse_hits(parse_json(r)))

    def fetch_page(self, locator: Locator) -> str | None:
        return self.pages.fetch(locator)
