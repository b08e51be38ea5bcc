from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from .exceptions import UnknownModeError

ChordCallback = Callable[[str], None]


class DisplayMode(Enum):
    """How chords are laid out against lyrics."""

    INLINE = "inline"  # [C]lyric, brackets kept
    OVER = "over"  # chord line above lyric line, wrapped to the column width
    LYRICS = "lyrics"  # chords dropped
    CHORDS = "chords"  # lyrics dropped

    @classmethod
    def from_name(cls, name: str) -> "DisplayMode":
        """Return the mode called *name* (case-insensitive).

        Raises UnknownModeError for anything else.
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise UnknownModeError(name) from None


class LineKind(Enum):
    LYRIC = "lyric"
    CHORDS = "chords"
    INLINE = "inline"
    PASSTHROUGH = "passthrough"  # before the || sentinel


@dataclass(frozen=True)
class ChordToken:
    """A chord anchored to a character of the marker-stripped lyric.

    Example: "Amaz[C]ing" parses to lyric "Amazing" with ChordToken("C", 4).
    """

    name: str
    offset: int


@dataclass
class ParsedLine:
    """One raw line split into its lyric and the chords anchored in it."""

    lyric: str
    chords: list[ChordToken] = field(default_factory=list)


@dataclass(frozen=True)
class ChordSpan:
    """A chord name and the column it starts at within a rendered line."""

    name: str
    column: int


@dataclass
class LayoutSegment:
    """One fixed-width window of a chord line and the lyric below it."""

    chord_line: str
    lyric_line: str

    @property
    def chords(self) -> list[ChordSpan]:
        return spans_in(self.chord_line)


class _Pressable:
    on_chord: ChordCallback | None

    def press(self, name: str) -> None:
        """Forward a press on chord *name* to the unit's callback, if any."""
        if self.on_chord is not None:
            self.on_chord(name)


@dataclass
class TextLine(_Pressable):
    """A single rendered line."""

    text: str
    kind: LineKind
    chords: list[ChordSpan] = field(default_factory=list)
    on_chord: ChordCallback | None = field(default=None, repr=False, compare=False)


@dataclass
class ChordLyricBlock(_Pressable):
    """Over-mode rendering of one source line: one or more wrapped segments."""

    segments: list[LayoutSegment] = field(default_factory=list)
    on_chord: ChordCallback | None = field(default=None, repr=False, compare=False)


DisplayUnit = TextLine | ChordLyricBlock


@dataclass
class SongMetadata:
    """Directives found in a song body plus its best-effort declared key."""

    directives: dict[str, str] = field(default_factory=dict)
    declared_key: str | None = None

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.directives.get(name.lower(), default)

    @property
    def title(self) -> str | None:
        return self.get("title")

    @property
    def artist(self) -> str | None:
        return self.get("artist")


def spans_in(chord_line: str) -> list[ChordSpan]:
    """Return a ChordSpan for every whitespace-delimited run in *chord_line*."""
    spans = []
    column = 0
    for word in chord_line.split(" "):
        if word:
            spans.append(ChordSpan(word, column))
        column += len(word) + 1
    return spans
