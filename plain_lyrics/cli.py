from __future__ import annotations

import dataclasses
from pathlib import Path

import typer

from plain_lyrics.config import load_config, save_config_token
from plain_lyrics.logging_setup import setup_logging
from plain_lyrics.sources.service import LyricsService
from plain_lyrics.sources.sidecar import sidecar_path
from plain_lyrics.sources.types import TrackKey


app = typer.Typer(no_args_is_help=True, add_completion=False)


@app.command()
def fetch(
    artist: str = typer.Argument(..., help="Artist or band name"),
    title: str = typer.Argument(..., help="Song title"),
    media: Path | None = typer.Option(None, "--media", help="Media file; its .lrc sidecar is checked first"),
    embedded: str | None = typer.Option(None, "--embedded", help="Lyrics already known (e.g. from tags)"),
    source: list[str] | None = typer.Option(None, "--source", "-s", help="Remote source to use (repeatable, in order)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Find plain-text lyrics for a song.
    """
    setup_logging(debug)
    cfg = load_config()
    if source:
        cfg = dataclasses.replace(cfg, sources=tuple(source))

    res = LyricsService(cfg).get_lyrics(TrackKey(artist=artist, title=title), media_path=media, embedded=embedded)
    if not res.has_lyrics:
        typer.echo("No lyrics found", err=True)
        raise typer.Exit(code=1)

    typer.echo(res.text)
    if debug:
        typer.echo(f"source={res.source}", err=True)


@app.command()
def sources():
    """List remote sources in the order they are tried."""
    cfg = load_config()
    for i, src in enumerate(LyricsService(cfg).sources, 1):
        typer.echo(f"{i}. {src.name}")


@app.command()
def sidecar(media: Path):
    """Show where the sidecar lyrics file for MEDIA is expected."""
    cfg = load_config()
    path = sidecar_path(media, cfg.sidecar_ext)
    state = "present" if path.is_file() else "missing"
    typer.echo(f"{path} ({state})")


@app.command()
def config(
    genius_token: str | None = typer.Option(None, "--genius-token", help="Store Genius API token"),
):
    """Manage stored settings."""
    if genius_token is None:
        cfg = load_config()
        typer.echo(f"config_dir={cfg.config_dir}")
        typer.echo(f"sources={','.join(cfg.sources)}")
        typer.echo(f"genius_token={'set' if cfg.genius_token else 'unset'}")
        return

    try:
        path = save_config_token(genius_token)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    typer.echo(f"Token saved: {path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
