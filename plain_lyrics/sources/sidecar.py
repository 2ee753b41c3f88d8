from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".lrc"


def sidecar_path(media_path: Path | str, extension: str = DEFAULT_EXTENSION) -> Path:
    """/music/a/song.flac -> /music/a/song.lrc"""
    if not extension.startswith("."):
        extension = "." + extension
    return Path(media_path).with_suffix(extension)


def read_sidecar(media_path: Path | str, extension: str = DEFAULT_EXTENSION) -> str | None:
    """
    Whole sidecar file as-is, or None when missing, unreadable or blank.

    The file is an opaque blob: timestamps (if any) are left untouched.
    """
    try:
        path = sidecar_path(media_path, extension)
    except ValueError as e:
        # e.g. an empty media path has no name to take the suffix from
        logger.debug("No sidecar for %r: %s", media_path, e)
        return None
    if not path.is_file():
        return None
    try:
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read sidecar %s: %s", path, e)
        return None
    if not text.strip():
        return None
    return text
