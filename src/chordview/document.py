import re

_NEWLINE_RE = re.compile(r"\r?\n")

# Trimmed line prefixes that never reach the display: directives and comments.
HIDDEN_PREFIXES = ("{", "#", "%")


def split_lines(text: str) -> list[str]:
    return _NEWLINE_RE.split(text)


def strip_directives(text: str) -> str:
    """Drop directive and comment lines from *text*, keeping blank lines."""
    kept = [line for line in split_lines(text) if not line.strip().startswith(HIDDEN_PREFIXES)]
    return "\n".join(kept)


def to_display_lines(text: str) -> list[str]:
    """Return the lines of *text* to be laid out, with chords still inline."""
    return split_lines(strip_directives(text))
