from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .base import LyricsSource, PageFetcher
from .errors import FormatError
from .http import Timeouts, http_get, parse_json
from .types import Locator, TrackKey


@dataclass(frozen=True)
class LyricWikiConfig:
    api_url: str = "https://lyrics.wikia.com/api.php"
    container_selector: str = "div.lyricbox"
    strip_selectors: tuple[str, ...] = ("div.rtMatcher", "div.lyricsbreak", "script")
    timeouts: Timeouts = field(default_factory=Timeouts)


def song_url(data: Any) -> Locator | None:
    """
    getSong answer {"page_id": ..., "url": ...} -> page url.

    An empty or missing page_id means the wiki page was never created; url
    is then meaningless and is not looked at. Any other value, 0 included,
    is a real page id.
    """
    if not isinstance(data, dict):
        raise FormatError(f"getSong answer is {type(data).__name__}, expected object")
    page_id = data.get("page_id")
    if page_id is None or page_id == "":
        return None
    url = data.get("url")
    if not isinstance(url, str) or not url:
        raise FormatError(f"getSong answer has page_id but no url: {data!r}")
    return url


class LyricWikiSource(LyricsSource):
    name = "lyricwiki"

    def __init__(self, cfg: LyricWikiConfig | None = None):
        self.cfg = cfg or LyricWikiConfig()
        # urls from getSong are absolute and may point at another host
        self.pages = PageFetcher(
            container_selector=self.cfg.container_selector,
            strip_selectors=self.cfg.strip_selectors,
            timeouts=self.cfg.timeouts,
        )

    def search(self, track: TrackKey) -> Locator | None:
        r = http_get(
            self.cfg.api_url,
            params={
                "func": "getSong",
                "fmt": "realjson",
                "artist": track.artist,
                "song": track.title,
            },
            headers={"Accept-Encoding": "gzip"},
            timeouts=self.cfg.timeouts,
        )
        return song_url(parse_json(r))

    def fetch_page(self, locator: Locator) -> str | None:
        return self.pages.fetch(locator)
