import pytest

from chord_chart.chart.models import ChordMark
from chord_chart.converter import (
    chord_tones,
    quality_to_harte,
    quality_to_pychord,
    to_harte,
    to_pychord,
)
from chord_chart.grammar import CHORD_QUALITIES, parse_chord
from chord_chart.models import ParsedChord


class TestQualityMapping:
    def test_major_to_harte(self):
        assert quality_to_harte("") == "maj"

    def test_minor_to_harte(self):
        assert quality_to_harte("m") == "min"

    def test_minor7_to_harte(self):
        assert quality_to_harte("m7") == "min7"

    def test_half_diminished_to_harte(self):
        assert quality_to_harte("m7b5") == "hdim7"

    def test_minor_major7_to_harte(self):
        assert quality_to_harte("mMaj7") == "minmaj7"

    def test_half_diminished_to_pychord(self):
        assert quality_to_pychord("m7b5") == "m7-5"

    def test_minor_major7_to_pychord(self):
        assert quality_to_pychord("mMaj7") == "mmaj7"

    @pytest.mark.parametrize("quality", CHORD_QUALITIES)
    def test_every_quality_mapped(self, quality):
        """Every chart quality has both notations."""
        assert isinstance(quality_to_harte(quality), str)
        assert isinstance(quality_to_pychord(quality), str)

    def test_unknown_quality(self):
        with pytest.raises(ValueError, match="Unknown chart quality"):
            quality_to_harte("add9")
        with pytest.raises(ValueError, match="Unknown chart quality"):
            quality_to_pychord("add9")


class TestToHarte:
    def test_major(self):
        assert to_harte(ParsedChord("C")) == "C:maj"

    def test_sharp_minor7(self):
        assert to_harte(ParsedChord("F#", "m7")) == "F#:min7"

    def test_slash(self):
        assert to_harte(ParsedChord("C", "", "E")) == "C:maj/E"

    def test_from_parsed_token(self):
        """Flat input comes out sharp."""
        assert to_harte(parse_chord("Bbm7b5")) == "A#:hdim7"


class TestToPychord:
    def test_major(self):
        assert to_pychord(ParsedChord("G")) == "G"

    def test_slash(self):
        assert to_pychord(ParsedChord("A#", "m7b5", "E")) == "A#m7-5/E"

    def test_stored_chord_mark(self):
        mark = ChordMark(
            id=1, lyric_line_id=1, root_note="D", quality="sus4", slash_root="", slot_position=2
        )
        assert to_pychord(mark) == "Dsus4"
        assert to_harte(mark) == "D:sus4"


class TestChordTones:
    def test_major_triad(self):
        assert chord_tones(ParsedChord("C")) == ("C", "E", "G")

    def test_minor_seventh(self):
        assert chord_tones(ParsedChord("A", "m7")) == ("A", "C", "E", "G")

    def test_minor_triad(self):
        assert chord_tones(ParsedChord("E", "m")) == ("E", "G", "B")

    def test_returns_tuple_or_none(self):
        """Every quality either spells out or reports None."""
        for quality in CHORD_QUALITIES:
            tones = chord_tones(ParsedChord("C", quality))
            assert tones is None or (isinstance(tones, tuple) and tones[0] == "C")
