"""Directive and key extraction from a song body.

Directive lines look like ``{title: Amazing Grace}``.  The declared key is
resolved in this order:

  1. an explicit song-level key supplied by the caller
  2. a ``{key: ...}`` directive
  3. the first plain ``key: ...`` line anywhere in the body
"""

import re

from .document import split_lines
from .models import SongMetadata

# Whole-line directive with a value: {name: value}
DIRECTIVE_RE = re.compile(r"^\{\s*([^:{}]+?)\s*:([^{}]*)\}$")

# Plain "Key: G" line, outside brace/bracket syntax
PLAIN_KEY_RE = re.compile(r"^\s*key\s*:", re.IGNORECASE)


def parse_directive(line: str) -> tuple[str, str] | None:
    """Return ``(name, value)`` if *line* is a ``{name:value}`` directive."""
    m = DIRECTIVE_RE.match(line.strip())
    if not m:
        return None
    return m.group(1).lower(), m.group(2).strip()


def extract_directives(text: str) -> dict[str, str]:
    """Return every directive in *text*, later duplicates winning."""
    directives: dict[str, str] = {}
    for line in split_lines(text):
        directive = parse_directive(line)
        if directive:
            name, value = directive
            directives[name] = value
    return directives


def normalize_key(value: str | None) -> str | None:
    """Reduce a free-form key value to its first token.

    ``"[G] major"`` → ``"G"``; blank or missing values → ``None``.
    """
    if not value:
        return None
    cleaned = value.replace("[", "").replace("]", "").strip()
    if not cleaned:
        return None
    return cleaned.split()[0]


def key_from_body(text: str) -> str | None:
    """Return the key named by the first plain ``key:`` line, if any."""
    for line in split_lines(text):
        if PLAIN_KEY_RE.match(line):
            return normalize_key(line.split(":", 1)[1])
    return None


def resolve_key(
    song_key: str | None = None,
    directive_key: str | None = None,
    body_key: str | None = None,
) -> str | None:
    for candidate in (song_key, directive_key, body_key):
        key = normalize_key(candidate)
        if key:
            return key
    return None


def extract_metadata(text: str, song_key: str | None = None) -> SongMetadata:
    """Return the directives of *text* and its declared key.

    *song_key* is a key stored alongside the song (outside its body); when set
    it takes precedence over anything found in the text.
    """
    directives = extract_directives(text)
    declared = resolve_key(song_key, directives.get("key"), key_from_body(text))
    return SongMetadata(directives=directives, declared_key=declared)
