"""Chord annotation, transposition and layout for ChordPro-style charts."""

from .document import to_display_lines
from .layout import estimate_columns, layout, layout_document, render_song
from .metadata import extract_metadata
from .models import (
    ChordLyricBlock,
    ChordSpan,
    ChordToken,
    DisplayMode,
    LayoutSegment,
    LineKind,
    ParsedLine,
    SongMetadata,
    TextLine,
)
from .parser import parse_line
from .transpose import transpose_song, transpose_token

__all__ = [
    "ChordLyricBlock",
    "ChordSpan",
    "ChordToken",
    "DisplayMode",
    "LayoutSegment",
    "LineKind",
    "ParsedLine",
    "SongMetadata",
    "TextLine",
    "estimate_columns",
    "extract_metadata",
    "layout",
    "layout_document",
    "parse_line",
    "render_song",
    "to_display_lines",
    "transpose_song",
    "transpose_token",
]
