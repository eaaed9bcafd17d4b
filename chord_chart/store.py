"""Persistence of lyric lines and chord marks.

The service layer only talks to :class:`ChartStore`. Implementations are
expected to run calls in the order they are made and to roll back every write
made inside :meth:`ChartStore.transaction` when it exits with an exception.
Chord marks are never removed implicitly: a lyric line can only be deleted
once its chord marks are gone.
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import replace

from chord_chart import config
from chord_chart.chart.models import ChordMark, LyricLine


class ChartStore(ABC):
    """Abstract base class for lyric line and chord mark storage."""

    @abstractmethod
    def create_line(
        self, song_id: int, structure_id: int, position: int, text: str
    ) -> LyricLine:
        """Store a new lyric line and return it with its id."""

    @abstractmethod
    def get_line(self, line_id: int) -> LyricLine | None:
        """Return the lyric line with ``line_id``, or None."""

    @abstractmethod
    def update_line(
        self,
        line_id: int,
        *,
        text: str | None = None,
        position: int | None = None,
        structure_id: int | None = None,
    ) -> LyricLine:
        """Change the given fields of a lyric line and return it."""

    @abstractmethod
    def delete_line(self, line_id: int) -> LyricLine:
        """Delete a lyric line that has no chord marks left."""

    @abstractmethod
    def list_lines(self, song_id: int) -> list[LyricLine]:
        """Return the lyric lines of a song ordered by position."""

    @abstractmethod
    def create_chord(
        self,
        lyric_line_id: int,
        root_note: str,
        quality: str,
        slash_root: str,
        slot_position: int,
    ) -> ChordMark:
        """Store a new chord mark and return it with its id."""

    @abstractmethod
    def list_chords(self, lyric_line_id: int) -> list[ChordMark]:
        """Return the chord marks of a lyric line ordered by slot."""

    @abstractmethod
    def delete_chords(self, lyric_line_ids: Iterable[int]) -> int:
        """Delete every chord mark of the given lines; return how many."""

    @abstractmethod
    def transaction(self):
        """Context manager grouping writes into one all-or-nothing unit."""


class InMemoryChartStore(ChartStore):
    """Dictionary-backed store.

    Enforces the same integrity rules a relational schema would: chord marks
    need an existing line, slots are unique per line and within 1-5, and a
    line with chord marks cannot be deleted.
    """

    def __init__(self) -> None:
        self._lines: dict[int, LyricLine] = {}
        self._chords: dict[int, ChordMark] = {}
        self._line_ids = itertools.count(1)
        self._chord_ids = itertools.count(1)
        self._depth = 0

    def create_line(
        self, song_id: int, structure_id: int, position: int, text: str
    ) -> LyricLine:
        line = LyricLine(
            id=next(self._line_ids),
            song_id=song_id,
            structure_id=structure_id,
            position=position,
            text=text,
        )
        self._lines[line.id] = line
        return line

    def get_line(self, line_id: int) -> LyricLine | None:
        return self._lines.get(line_id)

    def update_line(
        self,
        line_id: int,
        *,
        text: str | None = None,
        position: int | None = None,
        structure_id: int | None = None,
    ) -> LyricLine:
        line = self._require_line(line_id)
        changes: dict[str, object] = {}
        if text is not None:
            changes["text"] = text
        if position is not None:
            changes["position"] = position
        if structure_id is not None:
            changes["structure_id"] = structure_id
        line = replace(line, **changes)
        self._lines[line_id] = line
        return line

    def delete_line(self, line_id: int) -> LyricLine:
        line = self._require_line(line_id)
        if any(chord.lyric_line_id == line_id for chord in self._chords.values()):
            msg = f"Lyric line {line_id} still has chord marks"
            raise ValueError(msg)
        del self._lines[line_id]
        return line

    def list_lines(self, song_id: int) -> list[LyricLine]:
        lines = [line for line in self._lines.values() if line.song_id == song_id]
        return sorted(lines, key=lambda line: (line.position, line.id))

    def create_chord(
        self,
        lyric_line_id: int,
        root_note: str,
        quality: str,
        slash_root: str,
        slot_position: int,
    ) -> ChordMark:
        self._require_line(lyric_line_id)
        if not 1 <= slot_position <= config.SLOT_COUNT:
            msg = f"Slot {slot_position} out of range 1-{config.SLOT_COUNT}"
            raise ValueError(msg)
        if any(c.slot_position == slot_position for c in self.list_chords(lyric_line_id)):
            msg = f"Slot {slot_position} already taken on lyric line {lyric_line_id}"
            raise ValueError(msg)

        chord = ChordMark(
            id=next(self._chord_ids),
            lyric_line_id=lyric_line_id,
            root_note=root_note,
            quality=quality,
            slash_root=slash_root,
            slot_position=slot_position,
        )
        self._chords[chord.id] = chord
        return chord

    def list_chords(self, lyric_line_id: int) -> list[ChordMark]:
        chords = [c for c in self._chords.values() if c.lyric_line_id == lyric_line_id]
        return sorted(chords, key=lambda c: c.slot_position)

    def delete_chords(self, lyric_line_ids: Iterable[int]) -> int:
        targets = set(lyric_line_ids)
        doomed = [cid for cid, c in self._chords.items() if c.lyric_line_id in targets]
        for chord_id in doomed:
            del self._chords[chord_id]
        return len(doomed)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        # Nested blocks join the outermost one
        if self._depth:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        lines = dict(self._lines)
        chords = dict(self._chords)
        self._depth = 1
        try:
            yield
        except BaseException:
            self._lines = lines
            self._chords = chords
            raise
        finally:
            self._depth = 0

    def _require_line(self, line_id: int) -> LyricLine:
        line = self._lines.get(line_id)
        if line is None:
            msg = f"Lyric line {line_id} does not exist"
            raise KeyError(msg)
        return line
