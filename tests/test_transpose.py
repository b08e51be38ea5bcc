import pytest

from chordview.transpose import (
    FLATS,
    PITCH_CLASS,
    SHARPS,
    split_root,
    transpose_note,
    transpose_song,
    transpose_token,
)


def _pitch(token: str) -> int:
    root, _ = split_root(token.split("/")[0])
    return PITCH_CLASS[root]


# ---------------------------------------------------------------------------
# split_root
# ---------------------------------------------------------------------------


def test_split_root_prefers_longest_name():
    assert split_root("C#m7") == ("C#", "m7")
    assert split_root("Bbmaj7") == ("Bb", "maj7")


def test_split_root_natural():
    assert split_root("Csus4") == ("C", "sus4")
    assert split_root("G") == ("G", "")


@pytest.mark.parametrize("token", ["Capo 2", "Chorus", "N.C.", "x", "", "Dim light"])
def test_split_root_rejects_non_chords(token):
    assert split_root(token) is None


@pytest.mark.parametrize("token", [
    "Cadd9", "Am7b5", "E7#9", "Gmaj7(#11)", "D+", "Bdim7", "F6", "Asus2",
    "Gma7", "Co7", "CΔ7", "Bm7♭5", "G7♯9",
])
def test_split_root_accepts_extensions(token):
    assert split_root(token) is not None


# ---------------------------------------------------------------------------
# transpose_note
# ---------------------------------------------------------------------------


def test_transpose_note_sharp_scale():
    assert transpose_note("C", 1) == "C#"
    assert transpose_note("B", 1) == "C"


def test_transpose_note_flat_scale():
    assert transpose_note("C", 1, prefer_flats=True) == "Db"


def test_transpose_note_unknown_unchanged():
    assert transpose_note("H", 3) == "H"


def test_scales_align_on_pitch_class():
    for sharp, flat in zip(SHARPS, FLATS):
        assert PITCH_CLASS[sharp] == PITCH_CLASS[flat]


# ---------------------------------------------------------------------------
# transpose_token
# ---------------------------------------------------------------------------


def test_transpose_simple():
    assert transpose_token("G", 2) == "A"
    assert transpose_token("Am", 3) == "Cm"


def test_transpose_suffix_passed_through():
    assert transpose_token("Dsus4", 2) == "Esus4"
    assert transpose_token("Cadd9", -1) == "Badd9"


def test_transpose_natural_defaults_to_sharp():
    assert transpose_token("F", 1) == "F#"


def test_transpose_flat_stays_flat():
    assert transpose_token("Eb", 2) == "F"
    assert transpose_token("Bb", 1) == "B"
    assert transpose_token("Ab", 1) == "A"
    assert transpose_token("Db", 2) == "Eb"
    assert transpose_token("Bbm7", 3) == "Dbm7"


def test_transpose_sharp_stays_sharp():
    assert transpose_token("F#", 1) == "G"
    assert transpose_token("C#m", 1) == "Dm"
    assert transpose_token("G#", 2) == "A#"


def test_accidental_preserved_at_zero():
    assert transpose_token("Bb", 0) == "Bb"
    assert transpose_token("F#", 0) == "F#"


def test_non_chord_passthrough():
    assert transpose_token("Capo 2", 5) == "Capo 2"
    assert transpose_token("N.C.", 5) == "N.C."
    assert transpose_token("", 5) == ""


def test_slash_chord():
    assert transpose_token("C/E", 2) == "D/F#"
    assert transpose_token("F#/A#", 1) == "G/B"
    assert transpose_token("Bb/D", 2) == "C/E"


def test_slash_chord_unrecognized_side_passes_through():
    assert transpose_token("C/x", 2) == "D/x"
    assert transpose_token("Bb6/9", 2) == "C6/9"


def test_surrounding_whitespace_kept():
    assert transpose_token(" G ", 2) == " A "


def test_negative_offset():
    assert transpose_token("C", -1) == "B"
    assert transpose_token("Eb", -3) == "C"


def test_large_offsets_wrap():
    assert transpose_token("C", 25) == "C#"
    assert transpose_token("C", -13) == "B"


@pytest.mark.parametrize("token", ["C", "F#m", "Bb", "Ebmaj7", "G/B", "Capo 2"])
@pytest.mark.parametrize("n", [-30, -12, -5, 0, 7, 12, 19])
def test_periodicity(token, n):
    assert transpose_token(token, n) == transpose_token(token, n % 12)


@pytest.mark.parametrize("token", ["C", "F#m7", "G#", "Asus4", "D/F#"])
@pytest.mark.parametrize("a,b", [(1, 2), (5, -3), (-7, 11), (4, 4)])
def test_composability_sharp_and_natural(token, a, b):
    assert transpose_token(transpose_token(token, a), b) == transpose_token(token, a + b)


@pytest.mark.parametrize("token", ["Bb", "Ebm", "Ab7", "Db/F"])
@pytest.mark.parametrize("a,b", [(1, 2), (5, -3), (-7, 11), (4, 4)])
def test_composability_pitch_class(token, a, b):
    assert _pitch(transpose_token(transpose_token(token, a), b)) == _pitch(transpose_token(token, a + b))


# ---------------------------------------------------------------------------
# transpose_song
# ---------------------------------------------------------------------------


SONG = """{title: Amazing Grace}
{key: G}
Amaz[G]ing [G7]grace how [C]sweet the [G]sound
[Capo 2] [N.C.]
"""


def test_song_identity():
    assert transpose_song(SONG, 0) == SONG


def test_song_full_octave_identity():
    assert transpose_song(SONG, 12) == SONG


def test_song_rewrites_markers():
    out = transpose_song(SONG, 2)
    assert "Amaz[A]ing [A7]grace how [D]sweet the [A]sound" in out


def test_song_leaves_annotations():
    assert "[Capo 2] [N.C.]" in transpose_song(SONG, 2)


def test_song_rewrites_key_directive():
    assert "{key: A}" in transpose_song(SONG, 2)


def test_song_rewrites_plain_key_line():
    out = transpose_song("Key: Eb major\n[Eb]la", 2)
    assert out == "Key: F major\n[F]la"


def test_song_key_line_without_value_does_not_reach_next_line():
    assert transpose_song("key:\nG here", 2) == "key:\nG here"


def test_song_title_untouched():
    assert "{title: Amazing Grace}" in transpose_song(SONG, 5)


@pytest.mark.parametrize("token,expected", [
    ("Gma7", "Ama7"),
    ("Co7", "Do7"),
    ("CΔ7", "DΔ7"),
    ("Bm7♭5", "C#m7♭5"),
    ("G7♯9", "A7♯9"),
])
def test_transpose_alternate_notations(token, expected):
    assert transpose_token(token, 2) == expected


def test_song_rewrites_alternate_notations():
    assert transpose_song("[G]a [Gma7]b [Co7]c", 2) == "[A]a [Ama7]b [Do7]c"
