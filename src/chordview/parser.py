"""Inline chord annotation parsing.

Splits a ChordPro-style line into its lyric and the chords anchored in it, and
rebuilds the line shapes the layout engine needs from that split:

  1. parse_line():     "Amaz[C]ing [G]grace" → lyric + [(C, 4), (G, 8)]
  2. to_inline():      the inverse of parse_line(), brackets re-inserted
  3. chord_line():     "    C   G", chord names padded to their offsets
  4. strip_brackets(): "AmazCing Ggrace", chord names shown bare

Malformed input never raises: an unterminated ``[`` is literal text, and an
empty ``[]`` parses to a chord with an empty name.
"""

import re
from collections.abc import Iterable

from .models import ChordSpan, ChordToken, ParsedLine

# A marker ends at the first "]" after its "[".  Contents may be empty.
MARKER_RE = re.compile(r"\[([^\]]*)\]")


def parse_line(raw: str) -> ParsedLine:
    """Split *raw* into its lyric and a list of :class:`ChordToken`.

    Each chord's offset is the length of the lyric accumulated before its
    marker, so offsets are non-decreasing from left to right.
    """
    lyric_parts: list[str] = []
    chords: list[ChordToken] = []
    length = 0
    last = 0

    for m in MARKER_RE.finditer(raw):
        text = raw[last:m.start()]
        lyric_parts.append(text)
        length += len(text)
        chords.append(ChordToken(m.group(1), length))
        last = m.end()

    lyric_parts.append(raw[last:])
    return ParsedLine(lyric="".join(lyric_parts), chords=chords)


def parse_lines(lines: Iterable[str]) -> list[ParsedLine]:
    return [parse_line(line) for line in lines]


def to_inline(parsed: ParsedLine, keep_empty: bool = True) -> str:
    """Re-insert ``[name]`` markers into the lyric at their offsets.

    ``to_inline(parse_line(s)) == s`` for any single line *s*.  With
    *keep_empty* false, empty ``[]`` markers are left out.
    """
    result = []
    pos = 0
    for chord in parsed.chords:
        # Offsets past the end of the lyric are appended rather than dropped
        offset = min(chord.offset, len(parsed.lyric))
        if offset > pos:
            result.append(parsed.lyric[pos:offset])
            pos = offset
        if chord.name or keep_empty:
            result.append(f"[{chord.name}]")
    result.append(parsed.lyric[pos:])
    return "".join(result)


def inline_spans(parsed: ParsedLine, keep_empty: bool = True) -> list[ChordSpan]:
    """Columns of each chord name inside the text returned by :func:`to_inline`."""
    spans = []
    inserted = 0
    for chord in parsed.chords:
        bracket_pos = min(chord.offset, len(parsed.lyric)) + inserted
        if chord.name:
            spans.append(ChordSpan(chord.name, bracket_pos + 1))
        if chord.name or keep_empty:
            inserted += len(chord.name) + 2
    return spans


def chord_line(parsed: ParsedLine) -> str:
    """Return a line with every chord name starting at its lyric offset.

    Chords whose offset is already covered by the previous chord are appended
    directly after it.  Empty chord names reserve no space.
    """
    line = ""
    for chord in parsed.chords:
        if not chord.name:
            continue
        if len(line) < chord.offset:
            line += " " * (chord.offset - len(line))
        line += chord.name
    return line


def strip_brackets(raw: str) -> tuple[str, list[ChordSpan]]:
    """Replace every ``[name]`` marker in *raw* by the bare chord name.

    Returns the resulting text and the column of each chord name in it.
    """
    parts: list[str] = []
    spans: list[ChordSpan] = []
    length = 0
    last = 0

    for m in MARKER_RE.finditer(raw):
        text = raw[last:m.start()]
        parts.append(text)
        length += len(text)
        name = m.group(1)
        if name:
            spans.append(ChordSpan(name, length))
            parts.append(name)
            length += len(name)
        last = m.end()

    parts.append(raw[last:])
    return "".join(parts), spans
