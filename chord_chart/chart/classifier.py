"""Section detection and line classification for song charts.

This module splits a raw chart into lines, recognizes bracketed section
labels, tells chord lines apart from lyric lines, and enforces the
chords-per-line limit before anything is stored.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Sequence
from types import MappingProxyType

from chord_chart import config
from chord_chart.chart.models import (
    ChordLine,
    ClassifiedLine,
    LyricTextLine,
    ParsedContent,
    SourceLine,
    StructureLine,
    StructureSection,
    ValidationResult,
)
from chord_chart.grammar import (
    QUALITY_PATTERN,
    ROOT_PATTERN,
    extract_chords_with_position,
    normalize_chord_line,
)

# Section names in English and Spanish, lowercase and without accents
STRUCTURE_ALIASES: MappingProxyType[str, StructureSection] = MappingProxyType(
    {
        # English
        "intro": StructureSection.INTRO,
        "introduction": StructureSection.INTRO,
        "verse": StructureSection.VERSE,
        "pre-chorus": StructureSection.PRE_CHORUS,
        "prechorus": StructureSection.PRE_CHORUS,
        "chorus": StructureSection.CHORUS,
        "refrain": StructureSection.CHORUS,
        "bridge": StructureSection.BRIDGE,
        "interlude": StructureSection.INTERLUDE,
        "solo": StructureSection.SOLO,
        "outro": StructureSection.OUTRO,
        # Spanish
        "introduccion": StructureSection.INTRO,
        "verso": StructureSection.VERSE,
        "pre-coro": StructureSection.PRE_CHORUS,
        "precoro": StructureSection.PRE_CHORUS,
        "coro": StructureSection.CHORUS,
        "estribillo": StructureSection.CHORUS,
        "puente": StructureSection.BRIDGE,
        "interludio": StructureSection.INTERLUDE,
        "intermedio": StructureSection.SOLO,
        "final": StructureSection.OUTRO,
        "salida": StructureSection.OUTRO,
    }
)

STRUCTURE_LABEL_RE = re.compile(r"^\(([^)]+)\)$")
TRAILING_NUMBER_RE = re.compile(r"\s*\d+\s*$")
LINE_SPLIT_RE = re.compile(r"\r?\n")
BYTE_ORDER_MARK = "\ufeff"

# A whole token that is a chord (slash root without its own quality)
BARE_CHORD_RE = re.compile(
    rf"^{ROOT_PATTERN}(?:{QUALITY_PATTERN})?(?:/{ROOT_PATTERN})?$"
)

# A chord-shaped substring standing on its own within a longer line
LOOSE_CHORD_RE = re.compile(
    rf"(?:^|\s)"
    rf"{ROOT_PATTERN}(?:{QUALITY_PATTERN})?"
    rf"(?:/{ROOT_PATTERN}(?:{QUALITY_PATTERN})?)?"
    rf"(?:\s|$|-)"
)


def strip_accents(text: str) -> str:
    """Remove combining marks after NFD decomposition.

    Examples
    --------
    >>> strip_accents("introducción")
    'introduccion'
    """
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def detect_structure(line: str) -> StructureSection | None:
    """Detect a bracketed section label.

    Parameters
    ----------
    line : str
        A trimmed chart line.

    Returns
    -------
    StructureSection | None
        The section the label names, or None if the line is not a known
        label.

    Examples
    --------
    >>> detect_structure("(Verso 2)")
    <StructureSection.VERSE: 2>
    >>> detect_structure("(pre coro)")
    <StructureSection.PRE_CHORUS: 3>
    >>> detect_structure("This is a lyric") is None
    True
    """
    match = STRUCTURE_LABEL_RE.match(line)
    if not match:
        return None

    name = strip_accents(match.group(1).lower().strip())

    # "verso 1", "coro2"
    name = TRAILING_NUMBER_RE.sub("", name)

    # "pre coro" -> "precoro"
    compact = re.sub(r"\s+", "", name)

    return STRUCTURE_ALIASES.get(name) or STRUCTURE_ALIASES.get(compact)


def has_chords(line: str) -> bool:
    """Decide whether a line is a chord line.

    Short lines vote: a line of at most six words is a chord line when at
    least half of its words are chords. This keeps short lyrics such as
    "Te alabo señor" from being taken for chords. Longer lines only need one
    chord-shaped word.

    Parameters
    ----------
    line : str
        The line to check.

    Returns
    -------
    bool
        True for a chord line.

    Examples
    --------
    >>> has_chords("C G Am")
    True
    >>> has_chords("Aleluya aleluya gloria a dios")
    False
    >>> has_chords("G - D - Em")
    True
    """
    words = line.split()
    if not words:
        return False

    if len(words) <= config.SHORT_LINE_MAX_WORDS:
        potential_chords = sum(
            1 for word in words if BARE_CHORD_RE.match(re.sub(r"[-\s]", "", word))
        )
        return potential_chords >= len(words) * config.CHORD_LINE_THRESHOLD

    return LOOSE_CHORD_RE.search(line) is not None


def classify_line(source: SourceLine) -> ClassifiedLine:
    """Classify a chart line as a section label, chord line or lyric line.

    Examples
    --------
    >>> from chord_chart.chart.models import SourceLine
    >>> classify_line(SourceLine("(coro)", "(coro)", 1)).structure
    <StructureSection.CHORUS: 4>
    >>> type(classify_line(SourceLine("Am  F", "  Am  F", 2))).__name__
    'ChordLine'
    """
    structure = detect_structure(source.cleaned)
    if structure is not None:
        return StructureLine(source=source, structure=structure)

    if has_chords(source.cleaned):
        return ChordLine(source=source)

    return LyricTextLine(source=source)


def classify_lines(content: ParsedContent) -> list[ClassifiedLine]:
    """Classify every line of a parsed chart."""
    return [classify_line(source) for source in content.lines]


def validate_max_chords_per_line(
    lines: Sequence[str],
    max_chords: int | None = None,
) -> ValidationResult:
    """Check that no chord line holds more chords than there are slots.

    Section labels and lyric lines are not checked. Every offending line is
    reported, not just the first.

    Parameters
    ----------
    lines : Sequence[str]
        Cleaned chart lines.
    max_chords : int | None
        Limit per line; defaults to ``config.MAX_CHORDS_PER_LINE``.

    Returns
    -------
    ValidationResult
        ``valid`` is False when at least one line exceeds the limit.

    Examples
    --------
    >>> validate_max_chords_per_line(["C D E F G A B"]).valid
    False
    >>> validate_max_chords_per_line(["(verse)", "C D E F G"]).valid
    True
    """
    if max_chords is None:
        max_chords = config.MAX_CHORDS_PER_LINE

    errors: list[str] = []

    for number, line in enumerate(lines, start=1):
        if detect_structure(line) is not None:
            continue

        if not has_chords(line):
            continue

        chord_count = len(extract_chords_with_position(normalize_chord_line(line)))
        if chord_count > max_chords:
            errors.append(
                f'Line {number} has {chord_count} chords (max {max_chords}): "{line}"'
            )

    return ValidationResult(valid=not errors, errors=tuple(errors))


def parse_file_content(raw: str) -> ParsedContent:
    """Split a raw chart into its non-blank lines.

    Each kept line is trimmed for classification and paired with the
    untrimmed original, which is what chord columns are measured against.

    Parameters
    ----------
    raw : str
        The chart text, ``\\n`` or ``\\r\\n`` line endings. A leading byte
        order mark is ignored.

    Returns
    -------
    ParsedContent
        Non-blank lines in source order.

    Examples
    --------
    >>> content = parse_file_content("(coro)\\r\\n\\n   G   D\\nSanto")
    >>> content.cleaned_lines
    ['(coro)', 'G   D', 'Santo']
    >>> content.line_mapping[1]
    '   G   D'
    """
    raw = raw.removeprefix(BYTE_ORDER_MARK)
    lines = tuple(
        SourceLine(cleaned=original.strip(), original=original, source_number=number)
        for number, original in enumerate(LINE_SPLIT_RE.split(raw), start=1)
        if original.strip()
    )
    return ParsedContent(lines=lines)


def get_structure_map() -> dict[str, int]:
    """Return the section alias table as a new ``{alias: section id}`` dict."""
    return {alias: int(section) for alias, section in STRUCTURE_ALIASES.items()}
