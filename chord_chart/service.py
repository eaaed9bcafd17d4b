"""Chart import and lyric line maintenance on top of a :class:`ChartStore`.

The service is what callers use: it imports whole charts, re-parses a single
line after an edit, and keeps a song's lines tidy (listing, deleting,
re-normalizing, reordering). Every operation that writes more than one record
runs inside a store transaction, and charts are validated before the first
write.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from chord_chart.chart.assembler import assemble, assemble_single_line
from chord_chart.chart.classifier import parse_file_content
from chord_chart.chart.models import LineWithChords, LyricLine, PlacedChord
from chord_chart.exceptions import ChordChartError, LineNotFoundError, PositionConflictError
from chord_chart.normalizer import normalize
from chord_chart.store import ChartStore
from chord_chart.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImportResult:
    """Summary of a successful chart import.

    Parameters
    ----------
    song_id : int
        The song the lines were added to.
    lines_created : int
        Number of lyric lines stored.
    chords_created : int
        Number of chord marks stored.
    """

    song_id: int
    lines_created: int
    chords_created: int


@dataclass
class NormalizeReport:
    """Per-line outcome of :meth:`ChartService.normalize_lines`."""

    success: list[int] = field(default_factory=list)
    failed: list[tuple[int, str]] = field(default_factory=list)
    not_found: list[int] = field(default_factory=list)

    @property
    def message(self) -> str:
        total = len(self.success) + len(self.failed) + len(self.not_found)
        return f"Normalized {len(self.success)} of {total} lyrics"


class ChartService:
    """Parse charts into a store and maintain the stored lines.

    Parameters
    ----------
    store : ChartStore
        Where lines and chord marks live.
    placement : str | None
        Placement strategy name; defaults to ``config.PLACEMENT_STRATEGY``.
    """

    def __init__(self, store: ChartStore, placement: str | None = None) -> None:
        self.store = store
        self.placement = placement

    def import_chart(self, song_id: int, text: str) -> ImportResult:
        """Parse a chart and store its lines and chords.

        Lines are appended after the song's last stored line. Nothing is
        written when the chart fails validation.

        Raises
        ------
        ChartValidationError
            If any chord line holds too many chords.
        """
        content = parse_file_content(text)
        existing = self.store.list_lines(song_id)
        start_position = existing[-1].position + 1 if existing else 1

        assembled = assemble(content, self.placement, start_position=start_position)

        chords_created = 0
        with self.store.transaction():
            for line in assembled:
                record = self.store.create_line(
                    song_id=song_id,
                    structure_id=int(line.structure),
                    position=line.position,
                    text=line.text,
                )
                chords_created += self._store_chords(record.id, line.chords)

        logger.info(
            "Imported %d lines and %d chords into song %d",
            len(assembled),
            chords_created,
            song_id,
        )
        return ImportResult(
            song_id=song_id,
            lines_created=len(assembled),
            chords_created=chords_created,
        )

    def import_chart_bytes(
        self, song_id: int, data: bytes, encoding: str = "utf-8-sig"
    ) -> ImportResult:
        """Import an uploaded chart file.

        A leading byte order mark is dropped. Bytes that are not valid in
        ``encoding`` are replaced with U+FFFD rather than failing the upload.
        """
        return self.import_chart(song_id, data.decode(encoding, errors="replace"))

    def reparse_line(self, song_id: int, line_id: int, text: str) -> LineWithChords:
        """Replace the text and chords of one stored line.

        ``text`` is a short chart, usually one chord line and one lyric line.
        The line keeps its id, position and section.

        Raises
        ------
        LineNotFoundError
            If the line does not exist or belongs to another song.
        ChartValidationError
            If a chord line holds too many chords.
        EmptyChartError
            If ``text`` holds nothing but section labels.
        """
        self._require_line(song_id, line_id)
        patch = assemble_single_line(text, self.placement)

        with self.store.transaction():
            self.store.delete_chords([line_id])
            self.store.update_line(line_id, text=patch.text)
            self._store_chords(line_id, patch.chords)

        logger.info("Re-parsed line %d of song %d", line_id, song_id)
        return self.get_line(song_id, line_id)

    def get_line(self, song_id: int, line_id: int) -> LineWithChords:
        line = self._require_line(song_id, line_id)
        return LineWithChords(line=line, chords=tuple(self.store.list_chords(line.id)))

    def list_lines(self, song_id: int) -> list[LineWithChords]:
        """Return a song's lines in order, each with its chord marks."""
        return [
            LineWithChords(line=line, chords=tuple(self.store.list_chords(line.id)))
            for line in self.store.list_lines(song_id)
        ]

    def delete_line(self, song_id: int, line_id: int) -> LyricLine:
        """Delete one line after removing its chord marks."""
        self._require_line(song_id, line_id)
        with self.store.transaction():
            self.store.delete_chords([line_id])
            return self.store.delete_line(line_id)

    def delete_all_lines(self, song_id: int) -> int:
        """Delete every line of a song and its chord marks.

        Returns
        -------
        int
            Number of lines deleted.
        """
        line_ids = [line.id for line in self.store.list_lines(song_id)]
        if not line_ids:
            return 0

        with self.store.transaction():
            self.store.delete_chords(line_ids)
            for line_id in line_ids:
                self.store.delete_line(line_id)

        logger.info("Deleted %d lines of song %d", len(line_ids), song_id)
        return len(line_ids)

    def normalize_lines(self, song_id: int, line_ids: Iterable[int]) -> NormalizeReport:
        """Re-apply lyric normalization to stored lines.

        Each line is handled on its own; a failure is recorded in the report
        and does not stop the others.
        """
        report = NormalizeReport()

        for line_id in line_ids:
            line = self.store.get_line(line_id)
            if line is None or line.song_id != song_id:
                report.not_found.append(line_id)
                continue

            try:
                self.store.update_line(line_id, text=normalize(line.text))
            except (ChordChartError, KeyError, ValueError) as exc:
                logger.warning("Could not normalize line %d: %s", line_id, exc)
                report.failed.append((line_id, str(exc)))
                continue

            report.success.append(line_id)

        logger.info(report.message)
        return report

    def reorder_lines(self, song_id: int, positions: Mapping[int, int]) -> list[LyricLine]:
        """Move lines to new positions.

        Parameters
        ----------
        positions : Mapping[int, int]
            New position for each line id.

        Raises
        ------
        LineNotFoundError
            If any id is not a line of the song. Nothing is moved.
        PositionConflictError
            If two lines of the song would share a position, counting the
            lines that are not moved. Nothing is moved.
        """
        for line_id in positions:
            self._require_line(song_id, line_id)

        final = Counter(
            positions.get(line.id, line.position) for line in self.store.list_lines(song_id)
        )
        clashes = [position for position, count in final.items() if count > 1]
        if clashes:
            raise PositionConflictError(song_id, clashes)

        with self.store.transaction():
            for line_id, position in positions.items():
                self.store.update_line(line_id, position=position)

        return self.store.list_lines(song_id)

    def _store_chords(self, line_id: int, chords: Iterable[PlacedChord]) -> int:
        count = 0
        for placed in chords:
            self.store.create_chord(
                lyric_line_id=line_id,
                root_note=placed.chord.root_note,
                quality=placed.chord.quality,
                slash_root=placed.chord.slash_root,
                slot_position=placed.slot_position,
            )
            count += 1
        return count

    def _require_line(self, song_id: int, line_id: int) -> LyricLine:
        line = self.store.get_line(line_id)
        if line is None or line.song_id != song_id:
            raise LineNotFoundError(song_id, line_id)
        return line
