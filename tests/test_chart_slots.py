"""Tests for chord slot placement."""

import pytest

from chord_chart import config
from chord_chart.chart.models import SlottedChord
from chord_chart.chart.slots import (
    assign_slots,
    compress_positions,
    get_placement_strategy,
    optimize_distribution,
    redistribute_positions,
)
from chord_chart.exceptions import ConfigError
from chord_chart.models import RawChordToken


def make_chords(*slots: int) -> list[SlottedChord]:
    """Build chords at increasing columns with the given calculated slots."""
    return [
        SlottedChord(chord_text=f"C{i}", char_offset=i * 4, calculated_slot=slot, final_slot=slot)
        for i, slot in enumerate(slots)
    ]


def final_slots(chords: list[SlottedChord]) -> list[int]:
    return [chord.final_slot for chord in chords]


class TestAssignSlots:
    """Test column-derived slot assignment."""

    def test_columns_to_slots(self) -> None:
        """Test slots for tokens at the start and three quarters in."""
        tokens = [RawChordToken("G", 0), RawChordToken("D", 30)]
        slotted = assign_slots(tokens, 40)
        assert [c.calculated_slot for c in slotted] == [1, 5]
        assert [c.final_slot for c in slotted] == [1, 5]

    def test_keeps_text_and_offset(self) -> None:
        """Test that the token is carried over."""
        (chord,) = assign_slots([RawChordToken("Am7", 12)], 20)
        assert chord.chord_text == "Am7"
        assert chord.char_offset == 12
        assert chord.calculated_slot == 4


class TestCompressPositions:
    """Test proportional compression."""

    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (1, [5]),
            (2, [3, 5]),
            (3, [2, 4, 5]),
            (4, [2, 3, 4, 5]),
            (5, [1, 2, 3, 4, 5]),
        ],
    )
    def test_counts(self, count: int, expected: list[int]) -> None:
        """Test the compressed slots for each chord count."""
        assert compress_positions(count) == expected


class TestRedistributePositions:
    """Test collision resolution by pushing chords right."""

    def test_no_collision_unchanged(self) -> None:
        """Test that unique slots are kept."""
        assert final_slots(redistribute_positions(make_chords(1, 3, 5))) == [1, 3, 5]

    def test_collisions_pushed_right(self) -> None:
        """Test that later chords move to the next free slot."""
        assert final_slots(redistribute_positions(make_chords(1, 1, 1))) == [1, 2, 3]

    def test_compresses_when_no_room(self) -> None:
        """Test compression when a chord would pass slot 5."""
        assert final_slots(redistribute_positions(make_chords(5, 5))) == [3, 5]
        assert final_slots(redistribute_positions(make_chords(4, 5, 5))) == [2, 4, 5]

    def test_five_chords_in_one_slot(self) -> None:
        """Test that five colliding chords fill every slot."""
        assert final_slots(redistribute_positions(make_chords(3, 3, 3, 3, 3))) == [1, 2, 3, 4, 5]

    @pytest.mark.parametrize(
        "slots",
        [
            (1,),
            (2, 2),
            (5, 1, 5),
            (3, 3, 3, 3),
            (5, 5, 5, 5, 5),
            (1, 2, 2, 4, 4),
        ],
    )
    def test_unique_slots_in_range(self, slots: tuple[int, ...]) -> None:
        """Test that final slots are unique and between 1 and 5."""
        result = final_slots(redistribute_positions(make_chords(*slots)))
        assert len(result) == len(slots)
        assert len(set(result)) == len(result)
        assert all(1 <= slot <= config.SLOT_COUNT for slot in result)

    def test_sorted_by_column(self) -> None:
        """Test that chords are returned in column order."""
        chords = [
            SlottedChord("D", 20, 3, 3),
            SlottedChord("G", 0, 3, 3),
        ]
        result = redistribute_positions(chords)
        assert [c.chord_text for c in result] == ["G", "D"]
        assert final_slots(result) == [3, 4]

    def test_calculated_slot_kept(self) -> None:
        """Test that only the final slot changes."""
        result = redistribute_positions(make_chords(2, 2))
        assert [c.calculated_slot for c in result] == [2, 2]
        assert final_slots(result) == [2, 3]

    def test_empty(self) -> None:
        """Test that no chords yields no placements."""
        assert redistribute_positions([]) == []

    def test_too_many_chords(self) -> None:
        """Test that six chords cannot be placed."""
        with pytest.raises(ValueError, match="6 chords"):
            redistribute_positions(make_chords(1, 2, 3, 4, 5, 5))


class TestOptimizeDistribution:
    """Test the canonical slot patterns."""

    @pytest.mark.parametrize(
        ("slots", "expected"),
        [
            ((1,), [3]),
            ((1, 5), [2, 4]),
            ((1, 1, 1), [1, 3, 5]),
            ((5, 5, 5, 5), [1, 2, 4, 5]),
            ((2, 2, 2, 2, 2), [1, 2, 3, 4, 5]),
        ],
    )
    def test_patterns(self, slots: tuple[int, ...], expected: list[int]) -> None:
        """Test the pattern used for each chord count."""
        assert final_slots(optimize_distribution(make_chords(*slots))) == expected

    def test_count_without_pattern(self) -> None:
        """Test that counts without a pattern keep their calculated slots."""
        result = optimize_distribution(make_chords(1, 1, 2, 3, 4, 5))
        assert final_slots(result) == [1, 1, 2, 3, 4, 5]

    def test_empty(self) -> None:
        """Test that no chords yields no placements."""
        assert optimize_distribution([]) == []


class TestGetPlacementStrategy:
    """Test strategy lookup."""

    def test_by_name(self) -> None:
        """Test both registered names."""
        assert get_placement_strategy("redistribute") is redistribute_positions
        assert get_placement_strategy("optimize") is optimize_distribution

    def test_default_from_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the configured strategy is used when no name is given."""
        monkeypatch.setattr(config, "PLACEMENT_STRATEGY", "optimize")
        assert get_placement_strategy() is optimize_distribution

    def test_unknown(self) -> None:
        """Test that unknown names raise ConfigError."""
        with pytest.raises(ConfigError, match="sideways"):
            get_placement_strategy("sideways")
