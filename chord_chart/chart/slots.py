"""Chord slot placement for chart lines.

Each chord above a lyric line is stored in one of five slots (1 = start of the
line, 5 = end). A slot is first derived from the chord's column; when two
chords land on the same slot the collision is resolved here.

Two placement strategies exist:

``redistribute``
    Keeps the column-derived slots and pushes colliding chords to the right,
    compressing the whole line when it runs out of room. This is the default.
``optimize``
    Ignores columns and spreads the chords over a fixed pattern for their
    count (one chord in the middle, two at 2 and 4, ...).
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import replace
from types import MappingProxyType

from chord_chart import config
from chord_chart.chart.models import SlottedChord
from chord_chart.exceptions import ConfigError
from chord_chart.grammar import calculate_chord_position
from chord_chart.models import RawChordToken

PlacementStrategy = Callable[[Sequence[SlottedChord]], list[SlottedChord]]

# Canonical slots for each chord count
OPTIMIZED_SLOTS: MappingProxyType[int, tuple[int, ...]] = MappingProxyType(
    {
        1: (3,),
        2: (2, 4),
        3: (1, 3, 5),
        4: (1, 2, 4, 5),
        5: (1, 2, 3, 4, 5),
    }
)


def assign_slots(
    tokens: Sequence[RawChordToken], reference_length: int
) -> list[SlottedChord]:
    """Compute the column-derived slot of each chord token.

    Parameters
    ----------
    tokens : Sequence[RawChordToken]
        Chord tokens from the original chord line.
    reference_length : int
        Width of the chord/lyric pair.

    Returns
    -------
    list[SlottedChord]
        One entry per token; ``final_slot`` equals ``calculated_slot``.

    Examples
    --------
    >>> from chord_chart.models import RawChordToken
    >>> [c.calculated_slot for c in assign_slots([RawChordToken("G", 0), RawChordToken("D", 30)], 40)]
    [1, 5]
    """
    slotted: list[SlottedChord] = []
    for token in tokens:
        slot = calculate_chord_position(token.char_offset, reference_length)
        slotted.append(
            SlottedChord(
                chord_text=token.chord_text,
                char_offset=token.char_offset,
                calculated_slot=slot,
                final_slot=slot,
            )
        )
    return slotted


def compress_positions(count: int) -> list[int]:
    """Spread ``count`` chords proportionally over the five slots.

    Any duplicate left by the proportional spread is moved to the nearest
    free slot, searching right first and then left.

    Examples
    --------
    >>> compress_positions(2)
    [3, 5]
    >>> compress_positions(4)
    [2, 3, 4, 5]
    """
    proportional = [
        max(1, min(config.SLOT_COUNT, math.ceil((i + 1) * config.SLOT_COUNT / count)))
        for i in range(count)
    ]

    used: set[int] = set()
    result: list[int] = []
    for slot in proportional:
        candidate = slot
        while candidate in used and candidate <= config.SLOT_COUNT:
            candidate += 1

        if candidate > config.SLOT_COUNT:
            candidate = slot - 1
            while candidate >= 1 and candidate in used:
                candidate -= 1

        result.append(candidate)
        used.add(candidate)

    return result


def redistribute_positions(chords: Sequence[SlottedChord]) -> list[SlottedChord]:
    """Resolve slot collisions while keeping chords in reading order.

    Chords are visited left to right by column. When a chord wants a slot an
    earlier chord already holds, it moves to the next free slot to its right.
    If no slot is free up to 5, the whole line is compressed with
    :func:`compress_positions`. The scan repeats until no collision is left.

    Parameters
    ----------
    chords : Sequence[SlottedChord]
        Chords with their calculated slots.

    Returns
    -------
    list[SlottedChord]
        Chords ordered by column with unique ``final_slot`` values in 1-5.

    Raises
    ------
    ValueError
        If there are more chords than slots.

    Examples
    --------
    >>> from chord_chart.chart.models import SlottedChord
    >>> chords = [SlottedChord("G", 0, 1, 1), SlottedChord("D", 2, 1, 1)]
    >>> [c.final_slot for c in redistribute_positions(chords)]
    [1, 2]
    """
    if not chords:
        return []

    if len(chords) > config.SLOT_COUNT:
        msg = f"Cannot place {len(chords)} chords in {config.SLOT_COUNT} slots"
        raise ValueError(msg)

    ordered = sorted(chords, key=lambda c: c.char_offset)
    slots = [c.calculated_slot for c in ordered]

    has_conflict = True
    while has_conflict:
        has_conflict = False
        used: set[int] = set()

        for i, slot in enumerate(slots):
            if slot in used:
                has_conflict = True

                # The later chord moves right
                new_slot = slot + 1
                while new_slot <= config.SLOT_COUNT and new_slot in used:
                    new_slot += 1

                if new_slot > config.SLOT_COUNT:
                    # No room to the right; compression leaves no collision
                    slots = compress_positions(len(slots))
                    has_conflict = False
                    break

                slots[i] = slot = new_slot

            used.add(slot)

    return [replace(chord, final_slot=slot) for chord, slot in zip(ordered, slots)]


def optimize_distribution(chords: Sequence[SlottedChord]) -> list[SlottedChord]:
    """Place chords on the canonical slots for their count.

    Counts without a canonical pattern keep their calculated slots.

    Examples
    --------
    >>> from chord_chart.chart.models import SlottedChord
    >>> chords = [SlottedChord("G", 0, 1, 1), SlottedChord("D", 9, 5, 5)]
    >>> [c.final_slot for c in optimize_distribution(chords)]
    [2, 4]
    """
    ordered = sorted(chords, key=lambda c: c.char_offset)
    pattern = OPTIMIZED_SLOTS.get(len(ordered))

    if pattern is None:
        return [replace(chord, final_slot=chord.calculated_slot) for chord in ordered]

    return [replace(chord, final_slot=slot) for chord, slot in zip(ordered, pattern)]


PLACEMENT_STRATEGIES: MappingProxyType[str, PlacementStrategy] = MappingProxyType(
    {
        "redistribute": redistribute_positions,
        "optimize": optimize_distribution,
    }
)


def get_placement_strategy(name: str | None = None) -> PlacementStrategy:
    """Look up a placement strategy by name.

    Parameters
    ----------
    name : str | None
        ``"redistribute"`` or ``"optimize"``; defaults to
        ``config.PLACEMENT_STRATEGY``.

    Raises
    ------
    ConfigError
        If the name is unknown.
    """
    if name is None:
        name = config.PLACEMENT_STRATEGY
    try:
        return PLACEMENT_STRATEGIES[name]
    except KeyError:
        raise ConfigError(f"Unknown placement strategy: {name}") from None
