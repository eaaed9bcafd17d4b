"""Data models for chart parsing.

This module defines the song sections, the stored lyric line and chord mark
records, and the intermediate structures the assembler passes between
classification, slot placement and persistence.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chord_chart.models import ParsedChord


class StructureSection(IntEnum):
    """Song section a lyric line belongs to."""

    INTRO = 1
    VERSE = 2
    PRE_CHORUS = 3
    CHORUS = 4
    BRIDGE = 5
    INTERLUDE = 6
    SOLO = 7
    OUTRO = 8

    @property
    def title(self) -> str:
        """Human-readable section name (e.g., "Pre-Chorus")."""
        return self.name.replace("_", "-").title()


@dataclass(frozen=True)
class SourceLine:
    """A non-blank chart line paired with its untrimmed original.

    Chord columns are measured on ``original``; classification and lyric text
    use ``cleaned``.

    Parameters
    ----------
    cleaned : str
        The trimmed line.
    original : str
        The line exactly as it appeared in the chart.
    source_number : int
        1-based line number in the raw chart, blank lines included.
    """

    cleaned: str
    original: str
    source_number: int


@dataclass(frozen=True)
class ParsedContent:
    """Non-blank lines of a chart in source order.

    Parameters
    ----------
    lines : tuple[SourceLine, ...]
        The cleaned/original line pairs.
    """

    lines: tuple[SourceLine, ...]

    @property
    def cleaned_lines(self) -> list[str]:
        """The trimmed lines, used for classification and validation."""
        return [line.cleaned for line in self.lines]

    @property
    def line_mapping(self) -> dict[int, str]:
        """Map each cleaned-line index to its original, untrimmed line."""
        return {index: line.original for index, line in enumerate(self.lines)}

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class StructureLine:
    """A bracketed section label such as ``(coro)``."""

    source: SourceLine
    structure: StructureSection


@dataclass(frozen=True)
class ChordLine:
    """A line that holds chords for the lyric below it."""

    source: SourceLine


@dataclass(frozen=True)
class LyricTextLine:
    """A line of lyric text."""

    source: SourceLine


ClassifiedLine = StructureLine | ChordLine | LyricTextLine


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a chart validation pass.

    Parameters
    ----------
    valid : bool
        True when no line failed.
    errors : tuple[str, ...]
        One message per offending line.
    """

    valid: bool
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class SlottedChord:
    """A chord token with its calculated and final slot.

    Parameters
    ----------
    chord_text : str
        The raw chord text.
    char_offset : int
        Column in the original chord line.
    calculated_slot : int
        Slot derived from the column alone.
    final_slot : int
        Slot after collisions are resolved.
    """

    chord_text: str
    char_offset: int
    calculated_slot: int
    final_slot: int


@dataclass(frozen=True)
class PlacedChord:
    """A validated chord assigned to a slot, ready to be stored."""

    chord: ParsedChord
    slot_position: int


@dataclass(frozen=True)
class AssembledLine:
    """A lyric line produced by the assembler, not yet stored.

    Parameters
    ----------
    position : int
        1-based order of the line within the chart.
    structure : StructureSection
        Section the line belongs to.
    text : str
        Normalized lyric text.
    chords : tuple[PlacedChord, ...]
        Chords ordered left to right.
    """

    position: int
    structure: StructureSection
    text: str
    chords: tuple[PlacedChord, ...] = ()


@dataclass(frozen=True)
class LinePatch:
    """Replacement text and chords for one existing lyric line."""

    text: str
    chords: tuple[PlacedChord, ...] = ()


@dataclass(frozen=True)
class LyricLine:
    """A stored lyric line.

    Parameters
    ----------
    id : int
        Record id.
    song_id : int
        Owning song.
    structure_id : int
        A :class:`StructureSection` value.
    position : int
        1-based order within the song.
    text : str
        Normalized lyric text.
    """

    id: int
    song_id: int
    structure_id: int
    position: int
    text: str

    @property
    def structure(self) -> StructureSection:
        return StructureSection(self.structure_id)


@dataclass(frozen=True)
class ChordMark:
    """A stored chord placed above a lyric line.

    Parameters
    ----------
    id : int
        Record id.
    lyric_line_id : int
        Owning lyric line.
    root_note : str
        Sharp-spelled root.
    quality : str
        Chord quality (``""`` is major).
    slash_root : str
        Bass note of a slash chord, or ``""``.
    slot_position : int
        Slot 1-5, unique within the owning line.
    """

    id: int
    lyric_line_id: int
    root_note: str
    quality: str
    slash_root: str
    slot_position: int

    @property
    def symbol(self) -> str:
        """Return the chord as a lead-sheet symbol (e.g., "C#m7/G#")."""
        result = f"{self.root_note}{self.quality}"
        if self.slash_root:
            result = f"{result}/{self.slash_root}"
        return result


@dataclass(frozen=True)
class LineWithChords:
    """A stored lyric line together with its chord marks ordered by slot."""

    line: LyricLine
    chords: tuple[ChordMark, ...]
