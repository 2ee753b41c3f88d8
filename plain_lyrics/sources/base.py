from __future__ import annotations

import logging
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from plain_lyrics.extract import extract_text, strip_elements

from .errors import FormatError, LookupFailure, ParseError
from .http import Timeouts, decode_body, http_get
from .types import Locator, TrackKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FetchResult:
    text: str | None
    source: str
    error: LookupFailure | None = None

    @property
    def found(self) -> bool:
        return bool(self.text)


@dataclass(frozen=True)
class PageFetcher:
    """Second lookup stage: locator -> HTML page -> lyrics container -> text."""

    container_selector: str
    strip_selectors: tuple[str, ...] = ()
    base_url: str | None = None
    timeouts: Timeouts = field(default_factory=Timeouts)

    def page_url(self, locator: Locator) -> str:
        """
        {base_url}{locator} when a base is configured, the locator itself otherwise.

        Relative locators always stay on the base host, whatever they look like.
        """
        if self.base_url:
            url = self.base_url.rstrip("/") + "/" + locator.lstrip("/")
        else:
            url = locator
        try:
            parts = urlsplit(url)
        except ValueError as e:
            raise FormatError(f"bad page locator {locator!r}: {e}") from e
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise FormatError(f"bad page locator {locator!r}")
        return url

    def fetch(self, locator: Locator) -> str | None:
        url = self.page_url(locator)
        r = http_get(url, timeouts=self.timeouts)
        try:
            soup = BeautifulSoup(decode_body(r), "html.parser")
        except ParserRejectedMarkup as e:
            raise ParseError(f"unparseable page {url}: {e}") from e

        container = soup.select_one(self.container_selector)
        if container is None:
            raise ParseError(f"no '{self.container_selector}' on {url}")

        if self.strip_selectors:
            strip_elements(container, self.strip_selectors)
        return extract_text(container)


class LyricsSource:
    """
    A remote lyrics provider: search call -> page fetch -> text.

    Subclasses implement search() and fetch_page(); fetch() glues them and
    is the only entry point callers should use. Instances hold configuration
    only and are safe to share between threads.
    """

    name: str

    def search(self, track: TrackKey) -> Locator | None:
        raise NotImplementedError

    def fetch_page(self, locator: Locator) -> str | None:
        raise NotImplementedError

    def fetch(self, track: TrackKey) -> FetchResult:
        try:
            locator = self.search(track)
            if not locator:
                logger.debug("%s: nothing found for %s", self.name, track.display)
                return FetchResult(None, self.name)

            text = self.fetch_page(locator)
        except LookupFailure as e:
            logger.warning("%s lookup failed for %s: %s", self.name, track.display, e)
            return FetchResult(None, self.name, error=e)

        text = (text or "").strip()
        if not text:
            logger.debug("%s: empty lyrics page for %s", self.name, track.display)
            return FetchResult(None, self.name)
        return FetchResult(text, self.name)

    def resolve(self, artist: str, title: str) -> str | None:
        return self.fetch(TrackKey(artist=artist, title=title)).text
