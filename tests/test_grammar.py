"""Tests for note canonicalization and the chord grammar."""

import pytest

from chord_chart.exceptions import MalformedTokenError
from chord_chart.grammar import (
    CHORD_QUALITIES,
    QUALITY_NAMES,
    calculate_chord_position,
    extract_chords_with_position,
    get_chord_qualities,
    is_chord,
    normalize_chord_line,
    parse_chord,
    parse_chord_strict,
)
from chord_chart.models import ParsedChord
from chord_chart.pitch_class import ROOT_NOTES, get_root_notes, normalize_note


class TestNormalizeNote:
    """Test flat-to-sharp folding."""

    @pytest.mark.parametrize(
        ("flat", "sharp"),
        [
            ("Cb", "B"),
            ("Db", "C#"),
            ("Eb", "D#"),
            ("Fb", "E"),
            ("Gb", "F#"),
            ("Ab", "G#"),
            ("Bb", "A#"),
        ],
    )
    def test_flats_become_sharps(self, flat: str, sharp: str) -> None:
        """Test that every flat spelling maps to its sharp equivalent."""
        assert normalize_note(flat) == sharp

    @pytest.mark.parametrize("note", list(ROOT_NOTES))
    def test_canonical_notes_unchanged(self, note: str) -> None:
        """Test that sharp and natural spellings pass through."""
        assert normalize_note(note) == note

    def test_unknown_spelling_passes_through(self) -> None:
        """Test that spellings outside the table are not touched."""
        assert normalize_note("E#") == "E#"
        assert normalize_note("H") == "H"


class TestParseChord:
    """Test chord token parsing."""

    def test_flat_major(self) -> None:
        """Test that a flat root is stored as a sharp."""
        assert parse_chord("Db") == ParsedChord(root_note="C#", quality="", slash_root="")

    def test_major_seventh(self) -> None:
        """Test that maj7 is not read as minor."""
        chord = parse_chord("Cmaj7")
        assert chord is not None
        assert chord.root_note == "C"
        assert chord.quality == "maj7"
        assert chord.slash_root == ""

    def test_slash_chord(self) -> None:
        """Test parsing a slash chord."""
        chord = parse_chord("C/G")
        assert chord is not None
        assert chord.root_note == "C"
        assert chord.quality == ""
        assert chord.slash_root == "G"

    def test_flat_slash_root(self) -> None:
        """Test that the slash root is also normalized."""
        chord = parse_chord("Ebm7/Bb")
        assert chord is not None
        assert chord.root_note == "D#"
        assert chord.quality == "m7"
        assert chord.slash_root == "A#"

    def test_slash_root_quality_is_dropped(self) -> None:
        """Test that a quality after the slash root is accepted but not kept."""
        chord = parse_chord("G/Bm")
        assert chord is not None
        assert chord.slash_root == "B"
        assert chord.symbol == "G/B"

    @pytest.mark.parametrize(
        ("token", "quality"),
        [
            ("Am", "m"),
            ("Am7", "m7"),
            ("Bm7b5", "m7b5"),
            ("CmMaj7", "mMaj7"),
            ("Ddim7", "dim7"),
            ("Edim", "dim"),
            ("Faug", "aug"),
            ("Gsus4", "sus4"),
            ("Gsus2", "sus2"),
            ("Am13", "m13"),
            ("Am11", "m11"),
            ("Am9", "m9"),
            ("C7", "7"),
            ("C9", "9"),
            ("C11", "11"),
            ("C13", "13"),
            ("Cmaj9", "maj9"),
            ("Cmaj11", "maj11"),
            ("Cmaj13", "maj13"),
        ],
    )
    def test_qualities(self, token: str, quality: str) -> None:
        """Test that each quality in the table is recognized."""
        chord = parse_chord(token)
        assert chord is not None
        assert chord.quality == quality

    @pytest.mark.parametrize("token", ["H7", "X", "123", "", "Hello", "C#maj7x", "c"])
    def test_invalid_tokens(self, token: str) -> None:
        """Test that tokens outside the grammar are rejected."""
        assert parse_chord(token) is None
        assert is_chord(token) is False

    @pytest.mark.parametrize("token", ["E#", "B#m", "C/E#"])
    def test_non_canonical_roots_rejected(self, token: str) -> None:
        """Test that roots which match the pattern but are not pitch classes fail."""
        assert parse_chord(token) is None

    def test_strict_raises(self) -> None:
        """Test that the strict parser raises for malformed tokens."""
        with pytest.raises(MalformedTokenError, match="E#"):
            parse_chord_strict("E#")

    def test_strict_returns_chord(self) -> None:
        """Test that the strict parser returns valid chords."""
        assert parse_chord_strict("Bb").root_note == "A#"


class TestExtractChordsWithPosition:
    """Test chord token extraction from chord lines."""

    def test_offsets_on_untrimmed_line(self) -> None:
        """Test that offsets count leading whitespace."""
        tokens = extract_chords_with_position("    G           C")
        assert [(t.chord_text, t.char_offset) for t in tokens] == [("G", 4), ("C", 16)]

    def test_dash_separated(self) -> None:
        """Test extraction from dash-separated chords."""
        tokens = extract_chords_with_position("G-D-Em")
        assert [t.chord_text for t in tokens] == ["G", "D", "Em"]
        assert [t.char_offset for t in tokens] == [0, 2, 4]

    def test_longest_quality_wins(self) -> None:
        """Test that maj7 is matched as a whole."""
        tokens = extract_chords_with_position("Cmaj7  Am7  F/A")
        assert [t.chord_text for t in tokens] == ["Cmaj7", "Am7", "F/A"]

    def test_empty_line(self) -> None:
        """Test that a blank line yields no tokens."""
        assert extract_chords_with_position("   ") == []


class TestNormalizeChordLine:
    """Test dash and whitespace normalization."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("G - F - A", "G F A"),
            ("F-A-G", "F A G"),
            ("  C    D  ", "C D"),
            ("Am -G", "Am G"),
        ],
    )
    def test_normalize(self, line: str, expected: str) -> None:
        """Test normalization of chord lines."""
        assert normalize_chord_line(line) == expected


class TestCalculateChordPosition:
    """Test column-to-slot mapping."""

    @pytest.mark.parametrize(
        ("offset", "slot"),
        [
            (0, 1),
            (14, 1),
            (15, 2),
            (34, 2),
            (35, 3),
            (54, 3),
            (55, 4),
            (74, 4),
            (75, 5),
            (99, 5),
            (100, 5),
        ],
    )
    def test_buckets(self, offset: int, slot: int) -> None:
        """Test bucket boundaries with a reference length of 100."""
        assert calculate_chord_position(offset, 100) == slot

    def test_zero_reference_length(self) -> None:
        """Test that an empty reference forces slot 1."""
        assert calculate_chord_position(10, 0) == 1


class TestIntrospection:
    """Test the table accessors."""

    def test_root_notes(self) -> None:
        """Test that there are twelve sharp-spelled roots."""
        roots = get_root_notes()
        assert len(roots) == 12
        assert all("b" not in note for note in roots)

    def test_root_notes_copy(self) -> None:
        """Test that the returned list can be changed safely."""
        roots = get_root_notes()
        roots.clear()
        assert len(get_root_notes()) == 12

    def test_chord_qualities(self) -> None:
        """Test the quality table size and major entry."""
        qualities = get_chord_qualities()
        assert len(qualities) == 21
        assert "" in qualities
        assert qualities.index("maj7") < qualities.index("m")

    def test_every_quality_has_a_name(self) -> None:
        """Test that each quality has a descriptive name."""
        assert set(QUALITY_NAMES) == set(CHORD_QUALITIES)
        assert QUALITY_NAMES[""] == "major"
