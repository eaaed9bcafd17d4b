"""Chart assembly: from classified lines to lyric lines with placed chords.

This module walks a parsed chart with one line of lookahead, pairs each chord
line with the lyric line below it, and places the chords on the five slots
above that lyric. It does not store anything; the service layer persists the
result.
"""

from __future__ import annotations

from chord_chart import config
from chord_chart.chart.classifier import (
    classify_lines,
    parse_file_content,
    validate_max_chords_per_line,
)
from chord_chart.chart.models import (
    AssembledLine,
    ChordLine,
    LinePatch,
    LyricTextLine,
    ParsedContent,
    PlacedChord,
    SourceLine,
    StructureLine,
    StructureSection,
)
from chord_chart.chart.slots import PlacementStrategy, assign_slots, get_placement_strategy
from chord_chart.exceptions import ChartValidationError, EmptyChartError, MalformedTokenError
from chord_chart.grammar import extract_chords_with_position, parse_chord_strict
from chord_chart.normalizer import normalize
from chord_chart.utils.logging import get_logger

logger = get_logger(__name__)


def _as_content(content: ParsedContent | str) -> ParsedContent:
    if isinstance(content, str):
        return parse_file_content(content)
    return content


def ensure_valid(content: ParsedContent) -> None:
    """Reject a chart with too many chords on any line.

    Raises
    ------
    ChartValidationError
        Carrying one message per offending line.
    """
    validation = validate_max_chords_per_line(content.cleaned_lines)
    if not validation.valid:
        logger.warning("Chart rejected: %d invalid line(s)", len(validation.errors))
        raise ChartValidationError(validation.errors)


def place_chords(
    chord_line: str,
    lyric_line: str,
    placement: PlacementStrategy,
) -> tuple[PlacedChord, ...]:
    """Place the chords of a chord line above its lyric line.

    Parameters
    ----------
    chord_line : str
        The original, untrimmed chord line.
    lyric_line : str
        The original, untrimmed lyric line.
    placement : PlacementStrategy
        Collision resolution strategy.

    Returns
    -------
    tuple[PlacedChord, ...]
        Valid chords in reading order. Tokens that fail validation are
        dropped.
    """
    tokens = extract_chords_with_position(chord_line)
    if not tokens:
        return ()

    reference_length = max(len(chord_line), len(lyric_line))
    slotted = placement(assign_slots(tokens, reference_length))

    placed: list[PlacedChord] = []
    for chord in slotted:
        try:
            parsed = parse_chord_strict(chord.chord_text)
        except MalformedTokenError as exc:
            logger.warning("Dropping chord: %s", exc)
            continue
        placed.append(PlacedChord(chord=parsed, slot_position=chord.final_slot))
        logger.debug(
            "%s at column %d -> slot %d (calculated %d)",
            chord.chord_text,
            chord.char_offset,
            chord.final_slot,
            chord.calculated_slot,
        )

    return tuple(placed)


def assemble(
    content: ParsedContent | str,
    placement: str | None = None,
    start_position: int = 1,
) -> list[AssembledLine]:
    """Turn a chart into ordered lyric lines with placed chords.

    Rules, applied line by line:

    - A section label switches the current section and takes no position.
    - A lyric line becomes a lyric line without chords.
    - A chord line followed by a lyric line becomes that lyric with the
      chords placed above it; the lyric line is consumed.
    - A chord line followed by another chord line is kept as lyric text.
    - A chord line with nothing below it, or only a section label, is
      skipped.

    Parameters
    ----------
    content : ParsedContent | str
        The chart, parsed or raw.
    placement : str | None
        Placement strategy name; defaults to ``config.PLACEMENT_STRATEGY``.
    start_position : int
        Position given to the first lyric line.

    Returns
    -------
    list[AssembledLine]
        Lines in chart order with consecutive positions.

    Raises
    ------
    ChartValidationError
        If any chord line holds too many chords. Raised before any line is
        assembled.

    Examples
    --------
    >>> lines = assemble("(coro)\\nG       D\\nSanto santo")
    >>> lines[0].structure, lines[0].text
    (<StructureSection.CHORUS: 4>, 'Santo Santo')
    >>> [(c.chord.symbol, c.slot_position) for c in lines[0].chords]
    [('G', 1), ('D', 4)]
    """
    content = _as_content(content)
    ensure_valid(content)
    strategy = get_placement_strategy(placement)

    classified = classify_lines(content)
    assembled: list[AssembledLine] = []
    structure = StructureSection(config.DEFAULT_STRUCTURE_ID)
    position = start_position

    i = 0
    n = len(classified)
    while i < n:
        current = classified[i]
        following = classified[i + 1] if i + 1 < n else None

        match current:
            case StructureLine(structure=section):
                structure = section

            case LyricTextLine(source=source):
                assembled.append(
                    AssembledLine(
                        position=position,
                        structure=structure,
                        text=normalize(source.cleaned),
                    )
                )
                position += 1

            case ChordLine(source=source):
                match following:
                    case None | StructureLine():
                        logger.warning(
                            "Skipping chord line %d with no lyric below it: %r",
                            source.source_number,
                            source.cleaned,
                        )

                    case ChordLine():
                        assembled.append(
                            AssembledLine(
                                position=position,
                                structure=structure,
                                text=normalize(source.cleaned),
                            )
                        )
                        position += 1

                    case LyricTextLine(source=lyric):
                        assembled.append(
                            AssembledLine(
                                position=position,
                                structure=structure,
                                text=normalize(lyric.cleaned),
                                chords=place_chords(source.original, lyric.original, strategy),
                            )
                        )
                        position += 1
                        i += 1

        i += 1

    return assembled


def assemble_single_line(
    content: ParsedContent | str,
    placement: str | None = None,
) -> LinePatch:
    """Parse the replacement text for one existing lyric line.

    Section labels are ignored. The first chord line provides the chords and
    the first lyric line after it provides the text. Without any lyric line
    the first remaining line is used as the text.

    Parameters
    ----------
    content : ParsedContent | str
        A short chart, usually a chord line and a lyric line.
    placement : str | None
        Placement strategy name; defaults to ``config.PLACEMENT_STRATEGY``.

    Returns
    -------
    LinePatch
        Normalized text and placed chords.

    Raises
    ------
    ChartValidationError
        If a chord line holds too many chords.
    EmptyChartError
        If the content holds nothing but section labels.

    Examples
    --------
    >>> patch = assemble_single_line("       Em      D\\nMi Dios eres mi fortaleza")
    >>> patch.text
    'Mi Dios eres mi fortaleza'
    >>> [c.chord.symbol for c in patch.chords]
    ['Em', 'D']
    """
    content = _as_content(content)
    ensure_valid(content)
    strategy = get_placement_strategy(placement)

    lines = [line for line in classify_lines(content) if not isinstance(line, StructureLine)]
    if not lines:
        raise EmptyChartError("No valid lyrics found in the text content")

    chord_source: SourceLine | None = None
    lyric_source: SourceLine | None = None

    for index, line in enumerate(lines):
        if isinstance(line, ChordLine):
            if chord_source is None:
                chord_source = line.source
                following = lines[index + 1] if index + 1 < len(lines) else None
                if isinstance(following, LyricTextLine):
                    lyric_source = following.source
                    break
        else:
            lyric_source = line.source
            break

    if lyric_source is None:
        lyric_source = lines[0].source

    chords: tuple[PlacedChord, ...] = ()
    if chord_source is not None:
        chords = place_chords(chord_source.original, lyric_source.original, strategy)

    return LinePatch(text=normalize(lyric_source.cleaned), chords=chords)
