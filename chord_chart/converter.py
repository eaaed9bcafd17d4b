"""Chord notation export for stored chords.

This module writes parsed or stored chords out in pychord notation (e.g.,
"Gm7-5") and Harte notation (e.g., "G:hdim7"), and lists chord tones through
pychord.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pychord import Chord as PyChord

if TYPE_CHECKING:
    from chord_chart.chart.models import ChordMark
    from chord_chart.models import ParsedChord

# Mapping from chart qualities to pychord quality names
QUALITY_TO_PYCHORD: dict[str, str] = {
    "": "",
    "m": "m",
    "dim": "dim",
    "aug": "aug",
    "sus2": "sus2",
    "sus4": "sus4",
    "7": "7",
    "maj7": "maj7",
    "m7": "m7",
    "mMaj7": "mmaj7",
    "dim7": "dim7",
    "m7b5": "m7-5",
    "9": "9",
    "maj9": "maj9",
    "m9": "m9",
    "11": "11",
    "maj11": "maj11",
    "m11": "m11",
    "13": "13",
    "maj13": "maj13",
    "m13": "m13",
}

# Mapping from chart qualities to Harte shorthand
QUALITY_TO_HARTE: dict[str, str] = {
    "": "maj",
    "m": "min",
    "dim": "dim",
    "aug": "aug",
    "sus2": "sus2",
    "sus4": "sus4",
    "7": "7",
    "maj7": "maj7",
    "m7": "min7",
    "mMaj7": "minmaj7",
    "dim7": "dim7",
    "m7b5": "hdim7",
    "9": "9",
    "maj9": "maj9",
    "m9": "min9",
    "11": "11",
    "maj11": "maj11",
    "m11": "min11",
    "13": "13",
    "maj13": "maj13",
    "m13": "min13",
}


def quality_to_pychord(quality: str) -> str:
    """Convert a chart quality to its pychord name.

    Raises
    ------
    ValueError
        If the quality is not recognized.

    Examples
    --------
    >>> quality_to_pychord("m7b5")
    'm7-5'
    """
    if quality in QUALITY_TO_PYCHORD:
        return QUALITY_TO_PYCHORD[quality]
    msg = f"Unknown chart quality: {quality}"
    raise ValueError(msg)


def quality_to_harte(quality: str) -> str:
    """Convert a chart quality to Harte shorthand.

    Raises
    ------
    ValueError
        If the quality is not recognized.

    Examples
    --------
    >>> quality_to_harte("")
    'maj'
    >>> quality_to_harte("mMaj7")
    'minmaj7'
    """
    if quality in QUALITY_TO_HARTE:
        return QUALITY_TO_HARTE[quality]
    msg = f"Unknown chart quality: {quality}"
    raise ValueError(msg)


def to_pychord(chord: ParsedChord | ChordMark) -> str:
    """Write a chord in pychord notation.

    Examples
    --------
    >>> from chord_chart.models import ParsedChord
    >>> to_pychord(ParsedChord("A#", "m7b5", "E"))
    'A#m7-5/E'
    """
    result = f"{chord.root_note}{quality_to_pychord(chord.quality)}"
    if chord.slash_root:
        result = f"{result}/{chord.slash_root}"
    return result


def to_harte(chord: ParsedChord | ChordMark) -> str:
    """Write a chord in Harte notation.

    Examples
    --------
    >>> from chord_chart.models import ParsedChord
    >>> to_harte(ParsedChord("G", "m7"))
    'G:min7'
    >>> to_harte(ParsedChord("C", "", "E"))
    'C:maj/E'
    """
    result = f"{chord.root_note}:{quality_to_harte(chord.quality)}"
    if chord.slash_root:
        result = f"{result}/{chord.slash_root}"
    return result


def chord_tones(chord: ParsedChord | ChordMark) -> tuple[str, ...] | None:
    """List the notes of a chord using pychord.

    Parameters
    ----------
    chord : ParsedChord | ChordMark
        The chord to spell.

    Returns
    -------
    tuple[str, ...] | None
        Note names from the bass up, or None if pychord cannot build the
        chord.

    Examples
    --------
    >>> from chord_chart.models import ParsedChord
    >>> chord_tones(ParsedChord("A", "m7"))
    ('A', 'C', 'E', 'G')
    """
    try:
        return tuple(PyChord(to_pychord(chord)).components())
    except ValueError:
        return None
