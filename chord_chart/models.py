"""Chord data models for chord-chart.

This module provides the parsed representation of a single chord symbol as
read from a chart, independent of where it sits on the line.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParsedChord:
    """A validated chord symbol.

    Parameters
    ----------
    root_note : str
        The root note, sharp spelling (e.g., "C", "F#").
    quality : str
        One of the fixed chord qualities (e.g., "m7", "maj7"); ``""`` is major.
    slash_root : str
        The bass note of a slash chord, or ``""`` when there is none.

    Examples
    --------
    >>> chord = ParsedChord(root_note="C#", quality="m7", slash_root="G#")
    >>> chord.symbol
    'C#m7/G#'
    """

    root_note: str
    quality: str = ""
    slash_root: str = ""

    @property
    def symbol(self) -> str:
        """Return the chord written back as a lead-sheet symbol."""
        result = f"{self.root_note}{self.quality}"
        if self.slash_root:
            result = f"{result}/{self.slash_root}"
        return result

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class RawChordToken:
    """A chord-shaped substring found on a chord line.

    Parameters
    ----------
    chord_text : str
        The matched text (e.g., "Bbm7").
    char_offset : int
        Column of the first character in the original, untrimmed line.
    """

    chord_text: str
    char_offset: int
