"""Plain-text rendering of display units.

Renders the output of :func:`chordview.layout.render_song` for a terminal.
Each ``TextLine`` becomes one line; each over-mode ``ChordLyricBlock`` becomes
a chord line followed by its lyric line for every wrapped segment.

Usage::

    from chordview.formatter import TextFormatter
    print(TextFormatter(color=True).render(units), end="")
"""

import click

from .models import ChordLyricBlock, ChordSpan, DisplayUnit, TextLine


class TextFormatter:
    """Render display units to text, optionally colouring chord names."""

    def __init__(self, color: bool = False, chord_style: dict | None = None):
        self.color = color
        self.chord_style = chord_style or {"fg": "cyan", "bold": True}

    def render(self, units: list[DisplayUnit]) -> str:
        """Return the rendered text, ending with a single newline."""
        lines: list[str] = []
        for unit in units:
            if isinstance(unit, ChordLyricBlock):
                for segment in unit.segments:
                    lines.append(self._paint(segment.chord_line.rstrip(), segment.chords))
                    lines.append(segment.lyric_line.rstrip())
            elif isinstance(unit, TextLine):
                lines.append(self._paint(unit.text.rstrip(), unit.chords))
        return "\n".join(lines) + "\n"

    def _paint(self, text: str, spans: list[ChordSpan]) -> str:
        if not self.color or not spans:
            return text
        out = []
        pos = 0
        for span in sorted(spans, key=lambda s: s.column):
            end = span.column + len(span.name)
            if span.column < pos or end > len(text):
                continue
            out.append(text[pos:span.column])
            out.append(click.style(text[span.column:end], **self.chord_style))
            pos = end
        out.append(text[pos:])
        return "".join(out)
