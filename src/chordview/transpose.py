"""Semitone transposition of chord names, keys and whole songs.

Spelling rules
--------------

+-------------------------+----------------------------+
| Root spelled as         | Transposed root spelled as |
+=========================+============================+
| flat (``Bb``, ``Eb``)   | flat                       |
+-------------------------+----------------------------+
| sharp (``F#``, ``C#``)  | sharp                      |
+-------------------------+----------------------------+
| natural (``C``, ``G``)  | sharp                      |
+-------------------------+----------------------------+

Slash chords are split at the first ``/`` and each side is transposed on its
own, so ``C/E`` +2 gives ``D/F#`` and ``Bb/D`` +2 gives ``C/E``.

Tokens without a recognizable root (``N.C.``, ``Capo 2``, ``Chorus``) are
returned unchanged.

Usage::

    from chordview.transpose import transpose_song, transpose_token
    transpose_token("Bbmaj7", 2)         # "Cmaj7"
    transpose_song("[G]Amazing grace", 2)  # "[A]Amazing grace"
"""

import logging
import re

logger = logging.getLogger(__name__)

SHARPS = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
FLATS = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B")

PITCH_CLASS = {name: i for scale in (SHARPS, FLATS) for i, name in enumerate(scale)}

# Longest names first so "C#" is tried before "C".
_ROOT_NAMES = sorted(PITCH_CLASS, key=len, reverse=True)

# What may follow a root: qualities, extensions and alterations.
# Shape check only; "C7sus4add13" passes, "Capo 2" and "Chorus" do not.
_SUFFIX_RE = re.compile(
    r"^(?:maj|min|mi|ma|dim|aug|sus|add|alt|omit|no|m|M|o|[#b♭♯](?=\d)|\d+|[+\-°øΔ^(),])*$"
)

# Same marker shape as the parser, kept on one line.
_MARKER_RE = re.compile(r"\[([^\]\r\n]*)\]")

_KEY_DIRECTIVE_RE = re.compile(r"^([ \t]*\{[ \t]*key[ \t]*:[ \t]*)([^\s{}]+)", re.IGNORECASE | re.MULTILINE)
_PLAIN_KEY_RE = re.compile(r"^([ \t]*key[ \t]*:[ \t]*)(\S+)", re.IGNORECASE | re.MULTILINE)


def split_root(token: str) -> tuple[str, str] | None:
    """Return ``(root, suffix)`` for a chord token without a slash.

    Returns None when *token* does not start with a note name followed by a
    chord-shaped suffix.
    """
    for name in _ROOT_NAMES:
        if token.startswith(name):
            suffix = token[len(name):]
            if _SUFFIX_RE.match(suffix):
                return name, suffix
            return None
    return None


def transpose_note(note: str, offset: int, prefer_flats: bool = False) -> str:
    """Shift a bare note name by *offset* semitones.

    Unknown note names are returned unchanged.
    """
    pitch = PITCH_CLASS.get(note)
    if pitch is None:
        return note
    scale = FLATS if prefer_flats else SHARPS
    return scale[(pitch + offset) % 12]


def _transpose_part(part: str, offset: int) -> str:
    stripped = part.strip()
    split = split_root(stripped)
    if split is None:
        if stripped:
            logger.debug("No chord root in %r, leaving it unchanged", part)
        return part
    root, suffix = split
    prefer_flats = len(root) == 2 and root[1] == "b"
    new = transpose_note(root, offset, prefer_flats) + suffix
    return part.replace(stripped, new, 1)


def transpose_token(token: str, offset: int) -> str:
    """Transpose a chord or key token by *offset* semitones.

    Any integer offset is accepted; it is reduced modulo 12.
    """
    if "/" in token:
        upper, bass = token.split("/", 1)
        return f"{_transpose_part(upper, offset)}/{_transpose_part(bass, offset)}"
    return _transpose_part(token, offset)


def transpose_song(text: str, offset: int) -> str:
    """Transpose every ``[Chord]`` marker and key declaration in *text*.

    ``{key: ...}`` directives and plain ``key: ...`` lines have their first
    token transposed as well.  A zero offset returns *text* unchanged.
    """
    if offset % 12 == 0:
        return text

    def _marker(m: re.Match) -> str:
        return f"[{transpose_token(m.group(1), offset)}]"

    def _key(m: re.Match) -> str:
        return m.group(1) + transpose_token(m.group(2), offset)

    text = _MARKER_RE.sub(_marker, text)
    text = _KEY_DIRECTIVE_RE.sub(_key, text)
    return _PLAIN_KEY_RE.sub(_key, text)
