from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "plain-lyrics"
    return Path.home() / ".config" / "plain-lyrics"


def _config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path

    # Sources, highest priority first
    sources: tuple[str, ...]

    # Genius
    genius_token: str
    genius_api_url: str
    genius_site_url: str

    # LyricWiki
    lyricwiki_api_url: str

    # Network
    connect_timeout_s: float
    read_timeout_s: float

    # Local files
    sidecar_ext: str


def load_config() -> AppConfig:
    sources_env = os.getenv("PLAIN_LYRICS_SOURCES", "genius,lyricwiki")
    sources = tuple(s.strip() for s in sources_env.split(",") if s.strip())

    config_dir = _config_dir()

    return AppConfig(
        config_dir=config_dir,
        sources=sources,
        genius_token=_load_token(config_dir),
        genius_api_url=os.getenv("PLAIN_LYRICS_GENIUS_API_URL", "https://api.genius.com"),
        genius_site_url=os.getenv("PLAIN_LYRICS_GENIUS_SITE_URL", "https://genius.com"),
        lyricwiki_api_url=os.getenv("PLAIN_LYRICS_LYRICWIKI_API_URL", "https://lyrics.wikia.com/api.php"),
        connect_timeout_s=float(os.getenv("PLAIN_LYRICS_CONNECT_TIMEOUT", "15.0")),
        read_timeout_s=float(os.getenv("PLAIN_LYRICS_READ_TIMEOUT", "10.0")),
        sidecar_ext=os.getenv("PLAIN_LYRICS_SIDECAR_EXT", ".lrc"),
    )


def _read_config_json(cfg_path: Path) -> dict:
    if not cfg_path.exists():
        return {}
    try:
        data = json.loads(cfg_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", cfg_path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _load_token(config_dir: Path) -> str:
    # Priority: PLAIN_LYRICS_GENIUS_TOKEN → config.json → ""
    env_token = os.getenv("PLAIN_LYRICS_GENIUS_TOKEN")
    if env_token:
        return env_token.strip()
    token = _read_config_json(config_dir / "config.json").get("genius_token") or ""
    return str(token).strip()


def save_config_token(token: str) -> Path:
    token = token.strip()
    if not token:
        raise ValueError("Genius token must not be empty")
    cfg_path = _config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data = _read_config_json(cfg_path)
    data["genius_token"] = token
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return cfg_path
