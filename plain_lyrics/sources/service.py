from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from plain_lyrics.config import AppConfig

from .base import LyricsSource
from .genius import GeniusConfig, GeniusSource
from .http import Timeouts
from .lyricwiki import LyricWikiConfig, LyricWikiSource
from .sidecar import read_sidecar
from .types import TrackKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LyricsResponse:
    text: str | None
    source: str | None

    @property
    def has_lyrics(self) -> bool:
        return bool(self.text)


NOT_FOUND = LyricsResponse(text=None, source=None)


class LyricsService:
    """
    Tries, in order and stopping at the first hit:
      1. lyrics handed in by the caller (e.g. read from embedded tags),
      2. the sidecar file next to the media file,
      3. every configured remote source, highest priority first.
    """

    def __init__(self, cfg: AppConfig, sources: Sequence[LyricsSource] | None = None):
        self.cfg = cfg
        self.sources: tuple[LyricsSource, ...] = (
            tuple(sources) if sources is not None else self._build_sources(cfg)
        )

    @staticmethod
    def _build_sources(cfg: AppConfig) -> tuple[LyricsSource, ...]:
        timeouts = Timeouts(connect_s=cfg.connect_timeout_s, read_s=cfg.read_timeout_s)
        out: list[LyricsSource] = []
        for s in cfg.sources:
            name = s.strip().lower()
            if name == "genius":
                out.append(
                    GeniusSource(
                        GeniusConfig(
                            token=cfg.genius_token,
                            api_url=cfg.genius_api_url,
                            site_url=cfg.genius_site_url,
                            timeouts=timeouts,
                        )
                    )
                )
            elif name in ("lyricwiki", "lyrics.wikia", "wikia"):
                out.append(LyricWikiSource(LyricWikiConfig(api_url=cfg.lyricwiki_api_url, timeouts=timeouts)))
            else:
                logger.info("Unknown source '%s' in config, skipping", s)
        return tuple(out)

    def get_lyrics(
        self,
        track: TrackKey,
        *,
        media_path: Path | str | None = None,
        embedded: str | None = None,
    ) -> LyricsResponse:
        if embedded and embedded.strip():
            logger.debug("Using embedded lyrics for %s", track.display)
            return LyricsResponse(text=embedded, source="embedded")

        if media_path is not None:
            text = read_sidecar(media_path, self.cfg.sidecar_ext)
            if text:
                logger.debug("Using sidecar lyrics for %s", track.display)
                return LyricsResponse(text=text, source="sidecar")

        for src in self.sources:
            res = src.fetch(track)
            if res.found:
                logger.info("Lyrics for %s found at %s", track.display, res.source)
                return LyricsResponse(text=res.text, source=res.source)

        logger.info("No lyrics found for %s", track.display)
        return NOT_FOUND


class LookupWorker:
    """
    Runs lookups off the caller's thread, one thread per request.

    A new submit() supersedes the previous one: the old thread is left to
    finish or time out on its own, but its callback is never invoked.
    """

    def __init__(self, service: LyricsService):
        self.service = service
        # reentrant: a callback may submit() the next lookup itself
        self._lock = threading.RLock()
        self._generation = 0
        self._thread: threading.Thread | None = None

    def submit(
        self,
        track: TrackKey,
        callback: Callable[[LyricsResponse], None],
        *,
        media_path: Path | str | None = None,
        embedded: str | None = None,
    ) -> int:
        with self._lock:
            self._generation += 1
            generation = self._generation

        def _run() -> None:
            try:
                res = self.service.get_lyrics(track, media_path=media_path, embedded=embedded)
            except Exception:
                logger.exception("Lyrics lookup for %s crashed", track.display)
                res = NOT_FOUND
            # held while delivering so cancel() or submit() cannot slip in between
            with self._lock:
                if generation != self._generation:
                    logger.debug("Dropping superseded result for %s", track.display)
                    return
                callback(res)

        thread = threading.Thread(target=_run, name=f"lyrics-lookup-{generation}", daemon=True)
        self._thread = thread
        thread.start()
        return generation

    def cancel(self) -> None:
        """Forget the in-flight lookup; its result will be dropped."""
        with self._lock:
            self._generation += 1

    def wait(self, timeout: float | None = None) -> bool:
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()
