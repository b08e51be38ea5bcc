"""Mode layout engine.

Turns parsed lines into display units for one of four modes:

+------------+----------------------------------------------------------+
| Mode       | Output per line                                          |
+============+==========================================================+
| ``inline`` | ``TextLine`` with the bracketed form, ``[C]Amazing``     |
+------------+----------------------------------------------------------+
| ``over``   | ``ChordLyricBlock`` of chord/lyric segments, wrapped to  |
|            | the column width; chord-less lines become a ``TextLine`` |
+------------+----------------------------------------------------------+
| ``lyrics`` | ``TextLine`` with the lyric only                         |
+------------+----------------------------------------------------------+
| ``chords`` | ``TextLine`` with the chord line only                    |
+------------+----------------------------------------------------------+

A ``||`` line splits a document into a preamble and a body.  Preamble lines
are always rendered as plain text with bare chord names, whatever the mode.

Usage::

    from chordview.layout import render_song
    from chordview.models import DisplayMode
    units = render_song(text, DisplayMode.OVER, columns=40, offset=2)
"""

import logging
import math
from collections.abc import Iterable, Sequence

from .document import to_display_lines
from .models import (
    ChordCallback,
    ChordLyricBlock,
    DisplayMode,
    DisplayUnit,
    LayoutSegment,
    LineKind,
    ParsedLine,
    TextLine,
    spans_in,
)
from .parser import chord_line, inline_spans, parse_line, strip_brackets, to_inline
from .transpose import transpose_song

logger = logging.getLogger(__name__)

SENTINEL = "||"

# Width/height ratio of the monospace glyphs chords and lyrics are set in.
CHAR_WIDTH_RATIO = 0.62
MIN_COLUMNS = 8


def estimate_columns(
    pixel_width: float | None,
    font_size: float,
    ratio: float = CHAR_WIDTH_RATIO,
    minimum: int = MIN_COLUMNS,
) -> int | None:
    """Return how many monospace characters fit in *pixel_width*.

    Returns None while the width or glyph size is unknown, which disables
    wrapping.
    """
    if not pixel_width or pixel_width <= 0 or not math.isfinite(pixel_width):
        return None
    glyph_width = font_size * ratio
    if not glyph_width > 0 or not math.isfinite(glyph_width):
        return None
    return max(minimum, math.floor(pixel_width / glyph_width))


def _usable_columns(columns: float | None) -> int | None:
    if columns is None or not math.isfinite(columns) or columns < 1:
        return None
    return int(columns)


def slice_by_columns(chords: str, lyric: str, columns: int) -> list[LayoutSegment]:
    """Cut a chord line and its lyric into windows of *columns* characters.

    Both lines are cut at the same columns so every chord stays above the
    lyric character it was anchored to.
    """
    width = max(len(chords), len(lyric))
    segments = [
        LayoutSegment(chords[i:i + columns], lyric[i:i + columns])
        for i in range(0, width, columns)
    ]
    return segments or [LayoutSegment(chords, lyric)]


def layout_line(
    parsed: ParsedLine,
    mode: DisplayMode,
    columns: float | None = None,
    on_chord: ChordCallback | None = None,
) -> DisplayUnit:
    if mode is DisplayMode.LYRICS:
        return TextLine(parsed.lyric, LineKind.LYRIC, on_chord=on_chord)

    if mode is DisplayMode.CHORDS:
        chords = chord_line(parsed)
        return TextLine(chords, LineKind.CHORDS, spans_in(chords), on_chord=on_chord)

    if mode is DisplayMode.INLINE:
        text = to_inline(parsed, keep_empty=False)
        return TextLine(text, LineKind.INLINE, inline_spans(parsed, keep_empty=False), on_chord=on_chord)

    # DisplayMode.OVER
    chords = chord_line(parsed)
    if not chords.strip():
        return TextLine(parsed.lyric, LineKind.LYRIC, on_chord=on_chord)

    width = _usable_columns(columns)
    if width is None:
        segments = [LayoutSegment(chords, parsed.lyric)]
    else:
        segments = slice_by_columns(chords, parsed.lyric, width)
        if len(segments) > 1:
            logger.debug("Wrapped %r into %d segments of %d columns", parsed.lyric, len(segments), width)
    return ChordLyricBlock(segments, on_chord=on_chord)


def layout(
    parsed_lines: Iterable[ParsedLine],
    mode: DisplayMode,
    columns: float | None = None,
    on_chord: ChordCallback | None = None,
) -> list[DisplayUnit]:
    """Lay out every parsed line in *mode*.

    *columns* is the number of character cells available per line.  None,
    zero or infinity disables over-mode wrapping.
    """
    return [layout_line(parsed, mode, columns, on_chord) for parsed in parsed_lines]


def _is_sentinel(line: str) -> bool:
    return line.strip() == SENTINEL


def layout_document(
    lines: Sequence[str],
    mode: DisplayMode,
    columns: float | None = None,
    on_chord: ChordCallback | None = None,
) -> list[DisplayUnit]:
    """Lay out raw display lines, honouring the ``||`` preamble sentinel.

    Without a sentinel every line follows *mode*.  With one, lines before the
    first sentinel are emitted as passthrough text and sentinel lines
    themselves are dropped.
    """
    in_preamble = any(_is_sentinel(line) for line in lines)
    units: list[DisplayUnit] = []

    for line in lines:
        if _is_sentinel(line):
            in_preamble = False
            continue
        if in_preamble:
            text, spans = strip_brackets(line)
            units.append(TextLine(text, LineKind.PASSTHROUGH, spans, on_chord=on_chord))
            continue
        units.append(layout_line(parse_line(line), mode, columns, on_chord))

    return units


def render_song(
    text: str,
    mode: DisplayMode,
    columns: float | None = None,
    offset: int = 0,
    on_chord: ChordCallback | None = None,
) -> list[DisplayUnit]:
    """Transpose *text* by *offset* semitones and lay it out in *mode*."""
    lines = to_display_lines(transpose_song(text, offset))
    return layout_document(lines, mode, columns, on_chord)
