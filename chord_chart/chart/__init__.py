"""Song chart parser for chord/lyric charts.

This module turns plain-text charts (chord lines above lyric lines, with
optional bracketed section labels) into ordered lyric lines tagged with their
section and carrying up to five slotted chords.
"""

from chord_chart.chart.assembler import assemble, assemble_single_line, place_chords
from chord_chart.chart.classifier import (
    classify_line,
    detect_structure,
    get_structure_map,
    has_chords,
    parse_file_content,
    validate_max_chords_per_line,
)
from chord_chart.chart.models import (
    AssembledLine,
    ChordLine,
    ChordMark,
    ClassifiedLine,
    LinePatch,
    LineWithChords,
    LyricLine,
    LyricTextLine,
    ParsedContent,
    PlacedChord,
    SlottedChord,
    SourceLine,
    StructureLine,
    StructureSection,
    ValidationResult,
)
from chord_chart.chart.slots import optimize_distribution, redistribute_positions

__all__ = [
    "AssembledLine",
    "ChordLine",
    "ChordMark",
    "ClassifiedLine",
    "LinePatch",
    "LineWithChords",
    "LyricLine",
    "LyricTextLine",
    "ParsedContent",
    "PlacedChord",
    "SlottedChord",
    "SourceLine",
    "StructureLine",
    "StructureSection",
    "ValidationResult",
    "assemble",
    "assemble_single_line",
    "classify_line",
    "detect_structure",
    "get_structure_map",
    "has_chords",
    "optimize_distribution",
    "parse_file_content",
    "place_chords",
    "redistribute_positions",
    "validate_max_chords_per_line",
]
