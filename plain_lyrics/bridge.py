"""
Boundary with an external tag editor that owns embedded file metadata.

The editor is reached through whatever transport the host application uses;
this module only fixes the field name and the shape of the exchange.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)

LYRICS_FIELD = "LYRICS"


class TagEditor(Protocol):
    def read_fields(self, media: Path, keys: Sequence[str]) -> Sequence[str | None]:
        ...

    def write_fields(self, media: Path, values: dict[str, str]) -> None:
        ...


def lyrics_from_reply(values: Sequence[str | None] | None) -> str | None:
    """First value of a read reply, if there is a non-blank one."""
    if not values:
        return None
    first = values[0]
    if not first or not first.strip():
        return None
    return first


def read_embedded_lyrics(editor: TagEditor, media: Path) -> str | None:
    return lyrics_from_reply(editor.read_fields(media, [LYRICS_FIELD]))


def write_embedded_lyrics(editor: TagEditor, media: Path, text: str) -> None:
    if not text or not text.strip():
        raise ValueError("Refusing to write empty lyrics")
    logger.info("Handing lyrics for %s to tag editor", media)
    editor.write_fields(media, {LYRICS_FIELD: text})
