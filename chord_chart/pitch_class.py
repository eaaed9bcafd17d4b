"""Pitch spelling tables and note canonicalization.

Charts mix flat and sharp spellings freely ("Bb", "A#"). Everything that is
stored uses the twelve sharp spellings below, so flats are folded onto their
sharp equivalents as soon as a chord is parsed.
"""

from __future__ import annotations

from types import MappingProxyType

# The twelve canonical pitch classes, sharp spelling, C first
ROOT_NOTES: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)

FLAT_TO_SHARP: MappingProxyType[str, str] = MappingProxyType(
    {
        "Cb": "B",
        "Db": "C#",
        "Eb": "D#",
        "Fb": "E",
        "Gb": "F#",
        "Ab": "G#",
        "Bb": "A#",
    }
)


def normalize_note(note: str) -> str:
    """Fold a flat spelling onto its sharp equivalent.

    Parameters
    ----------
    note : str
        Note name (e.g., "Bb", "C#", "E").

    Returns
    -------
    str
        The sharp spelling for the seven flat names, otherwise ``note``
        unchanged.

    Examples
    --------
    >>> normalize_note("Db")
    'C#'
    >>> normalize_note("Cb")
    'B'
    >>> normalize_note("G")
    'G'
    """
    return FLAT_TO_SHARP.get(note, note)


def is_root_note(note: str) -> bool:
    """Check whether ``note`` is one of the canonical sharp spellings."""
    return note in ROOT_NOTES


def get_root_notes() -> list[str]:
    """Return the canonical root notes as a new list."""
    return list(ROOT_NOTES)
