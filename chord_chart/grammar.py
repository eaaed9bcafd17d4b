"""Chord symbol grammar for song charts.

This module recognizes chord tokens, validates them against the canonical
root and quality tables, and maps a chord's column on its line to one of the
five placement slots above the lyric.
"""

from __future__ import annotations

import re
from types import MappingProxyType

from chord_chart import config
from chord_chart.exceptions import MalformedTokenError
from chord_chart.models import ParsedChord, RawChordToken
from chord_chart.pitch_class import is_root_note, normalize_note

# Ordered so that longer qualities win ("maj7" before "m", "m13" before "m")
CHORD_QUALITIES: tuple[str, ...] = (
    "maj7",
    "mMaj7",
    "dim7",
    "m7b5",
    "maj9",
    "maj11",
    "maj13",
    "sus4",
    "sus2",
    "aug",
    "dim",
    "m13",
    "m11",
    "m9",
    "m7",
    "7",
    "9",
    "11",
    "13",
    "m",
    "",
)

# Descriptive name for each quality
QUALITY_NAMES: MappingProxyType[str, str] = MappingProxyType(
    {
        "": "major",
        "m": "minor",
        "dim": "diminished",
        "aug": "augmented",
        "sus2": "sus2",
        "sus4": "sus4",
        "7": "dominant7",
        "maj7": "major7",
        "m7": "minor7",
        "mMaj7": "minorMajor7",
        "dim7": "diminished7",
        "m7b5": "halfDiminished7",
        "9": "dominant9",
        "maj9": "major9",
        "m9": "minor9",
        "11": "dominant11",
        "maj11": "major11",
        "m11": "minor11",
        "13": "dominant13",
        "maj13": "major13",
        "m13": "minor13",
    }
)

# Regex building blocks, shared with the line classifier
ROOT_PATTERN = r"[A-G][#b]?"
QUALITY_PATTERN = "|".join(re.escape(q) for q in CHORD_QUALITIES if q)

# Root, optional quality, optional slash root with its own optional quality
CHORD_TOKEN_RE = re.compile(
    rf"(?P<root>{ROOT_PATTERN})"
    rf"(?P<quality>{QUALITY_PATTERN})?"
    rf"(?:/(?P<slash>{ROOT_PATTERN})(?:{QUALITY_PATTERN})?)?"
)

DASH_SEPARATOR_RE = re.compile(r"\s*-\s*")
WHITESPACE_RE = re.compile(r"\s+")


def parse_chord(token: str) -> ParsedChord | None:
    """Parse a chord token into its root, quality and slash root.

    Flat spellings are folded onto sharps before validation, so the result
    only ever uses the twelve canonical roots.

    Parameters
    ----------
    token : str
        The chord text (e.g., "Bbm7", "C/G").

    Returns
    -------
    ParsedChord | None
        The parsed chord, or None if the token does not match the grammar or
        uses a root outside the canonical set (e.g., "E#").

    Examples
    --------
    >>> parse_chord("Db")
    ParsedChord(root_note='C#', quality='', slash_root='')
    >>> parse_chord("Cmaj7").quality
    'maj7'
    >>> parse_chord("H7") is None
    True
    """
    match = CHORD_TOKEN_RE.fullmatch(token)
    if not match:
        return None

    root_note = normalize_note(match.group("root"))
    quality = match.group("quality") or ""
    slash_root = match.group("slash")
    if slash_root:
        slash_root = normalize_note(slash_root)

    if (
        is_root_note(root_note)
        and quality in CHORD_QUALITIES
        and (not slash_root or is_root_note(slash_root))
    ):
        return ParsedChord(
            root_note=root_note,
            quality=quality,
            slash_root=slash_root or "",
        )

    return None


def parse_chord_strict(token: str) -> ParsedChord:
    """Parse a chord token, raising instead of returning None.

    Raises
    ------
    MalformedTokenError
        If the token is not a valid chord.
    """
    chord = parse_chord(token)
    if chord is None:
        raise MalformedTokenError(token)
    return chord


def is_chord(token: str) -> bool:
    """Check if ``token`` is a valid chord symbol."""
    return parse_chord(token) is not None


def extract_chords_with_position(line: str) -> list[RawChordToken]:
    """Find every chord token on a line together with its column.

    The line is scanned as given. Callers pass the original, untrimmed chord
    line because the offsets feed the slot computation.

    Parameters
    ----------
    line : str
        A chord line.

    Returns
    -------
    list[RawChordToken]
        Tokens in left-to-right order.

    Examples
    --------
    >>> [(t.chord_text, t.char_offset) for t in extract_chords_with_position("  G   Em7")]
    [('G', 2), ('Em7', 6)]
    """
    return [
        RawChordToken(chord_text=match.group(0), char_offset=match.start())
        for match in CHORD_TOKEN_RE.finditer(line)
    ]


def normalize_chord_line(line: str) -> str:
    """Turn dash-separated chords into space-separated ones.

    Examples
    --------
    >>> normalize_chord_line("G - F - A")
    'G F A'
    >>> normalize_chord_line("F-A-G")
    'F A G'
    """
    line = DASH_SEPARATOR_RE.sub(" ", line)
    return WHITESPACE_RE.sub(" ", line).strip()


def calculate_chord_position(char_offset: int, reference_length: int) -> int:
    """Map a chord's column to one of the five slots above the lyric.

    Parameters
    ----------
    char_offset : int
        Column of the chord in its original line.
    reference_length : int
        Width of the chord/lyric pair (longest of the two original lines).

    Returns
    -------
    int
        Slot from 1 (start of line) to 5 (end of line).

    Examples
    --------
    >>> calculate_chord_position(0, 40)
    1
    >>> calculate_chord_position(20, 40)
    3
    >>> calculate_chord_position(5, 0)
    1
    """
    if reference_length == 0:
        return 1

    percentage = char_offset / reference_length * 100

    for slot, boundary in enumerate(config.SLOT_BOUNDARIES, start=1):
        if percentage < boundary:
            return slot
    return config.SLOT_COUNT


def get_chord_qualities() -> list[str]:
    """Return the chord qualities as a new list."""
    return list(CHORD_QUALITIES)

