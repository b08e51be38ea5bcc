import logging
import sys

import click

from .config import ViewConfig
from .exceptions import ChordViewError
from .formatter import TextFormatter
from .layout import render_song
from .metadata import extract_metadata
from .models import DisplayMode
from .transpose import transpose_token

_MODE_NAMES = [mode.value for mode in DisplayMode]

# Directives already shown in the info header.
_HEADER_DIRECTIVES = ("title", "artist", "key")


def _load_config(path: str | None) -> ViewConfig:
    if path is None:
        return ViewConfig()
    try:
        return ViewConfig.load(path)
    except ChordViewError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def _key_label(base: str | None, offset: int) -> str:
    if not base:
        return "Key: —"
    if offset:
        return f"Key: {base} → {transpose_token(base, offset)}"
    return f"Key: {base}"


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
def main(verbose: bool) -> None:
    """Transpose and lay out ChordPro-style chord charts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("-m", "--mode", type=click.Choice(_MODE_NAMES, case_sensitive=False), default=None,
              help="Display mode (default: from config, else over).")
@click.option("-t", "--transpose", "offset", type=click.IntRange(-11, 11, clamp=True), default=0,
              show_default=True, help="Semitones to transpose by, clamped to -11..11.")
@click.option("-c", "--columns", type=click.IntRange(min=1), default=None,
              help="Wrap over-mode lines at N characters.")
@click.option("-w", "--width", "pixel_width", type=float, default=None, metavar="PX",
              help="Available width in pixels; converted to columns using the font size.")
@click.option("--font-size", type=click.FloatRange(min=1), default=None,
              help="Font size used with --width (default: from config, else 16).")
@click.option("--color/--no-color", default=None, help="Colour chord names.")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="JSON file with display preferences.")
def render(source, mode, offset, columns, pixel_width, font_size, color, config_path) -> None:
    """Print SOURCE laid out in the chosen display mode.

    \b
    Modes:
      over    chords above lyrics, wrapped to the column width
      inline  chords in brackets inside the lyric
      lyrics  lyrics only
      chords  chords only
    """
    config = _load_config(config_path)
    if font_size is not None:
        config.font_size = font_size

    display_mode = DisplayMode.from_name(mode) if mode else config.mode
    if columns is None and pixel_width is not None:
        columns = config.columns_for(pixel_width)
    use_color = config.color if color is None else color

    units = render_song(source.read(), display_mode, columns, config.clamp_offset(offset))
    click.echo(TextFormatter(color=use_color).render(units), nl=False)


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("-k", "--key", "song_key", default=None,
              help="Song key stored outside the chart; overrides keys found in it.")
@click.option("-t", "--transpose", "offset", type=click.IntRange(-11, 11, clamp=True), default=0,
              show_default=True, help="Semitones to transpose by, clamped to -11..11.")
def info(source, song_key, offset) -> None:
    """Print the title, artist, key and directives of SOURCE."""
    meta = extract_metadata(source.read(), song_key=song_key)

    click.echo(f"Title: {meta.title or '—'}")
    click.echo(f"Artist: {meta.artist or '—'}")
    click.echo(_key_label(meta.declared_key, offset))
    for name, value in meta.directives.items():
        if name not in _HEADER_DIRECTIVES:
            click.echo(f"{name}: {value}")
