"""Chord chart library for worship song charts.

This library parses plain-text chord charts into lyric lines with positioned
chords and stores them through a pluggable store.

Examples
--------
>>> from chord_chart import ChartService, InMemoryChartStore

>>> service = ChartService(InMemoryChartStore())
>>> result = service.import_chart(1, "(coro)\\nG       D\\nSanto santo")
>>> result.lines_created, result.chords_created
(1, 2)

>>> # Chord grammar helpers
>>> from chord_chart import parse_chord, normalize_note
>>> parse_chord("Bbm7").symbol
'A#m7'
>>> normalize_note("Eb")
'D#'
"""

from chord_chart.chart.models import ChordMark, LyricLine, StructureSection
from chord_chart.exceptions import (
    ChartValidationError,
    ChordChartError,
    EmptyChartError,
    LineNotFoundError,
    MalformedTokenError,
    PositionConflictError,
)
from chord_chart.grammar import (
    calculate_chord_position,
    extract_chords_with_position,
    get_chord_qualities,
    normalize_chord_line,
    parse_chord,
)
from chord_chart.models import ParsedChord, RawChordToken
from chord_chart.normalizer import normalize
from chord_chart.pitch_class import get_root_notes, normalize_note
from chord_chart.service import ChartService, ImportResult, NormalizeReport
from chord_chart.store import ChartStore, InMemoryChartStore

__all__ = [
    "ChartService",
    "ChartStore",
    "ChartValidationError",
    "ChordChartError",
    "ChordMark",
    "EmptyChartError",
    "ImportResult",
    "InMemoryChartStore",
    "LineNotFoundError",
    "LyricLine",
    "MalformedTokenError",
    "NormalizeReport",
    "ParsedChord",
    "PositionConflictError",
    "RawChordToken",
    "StructureSection",
    "calculate_chord_position",
    "extract_chords_with_position",
    "get_chord_qualities",
    "get_root_notes",
    "normalize",
    "normalize_chord_line",
    "normalize_note",
    "parse_chord",
]
