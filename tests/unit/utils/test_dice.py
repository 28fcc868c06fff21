# ABOUTME: Unit tests for the Traveller dice resolver and DM helpers.
# ABOUTME: Covers injectable dice sources, characteristic DMs and difficulty names.

import random

import pytest

from traveller_chargen.utils.dice import (
    MAX_DICE,
    Difficulty,
    characteristic_dm,
    difficulty_name,
    format_dm,
    roll_2d6,
    roll_d6,
    roll_dice,
    seeded_dice,
)


class TestRollDice:
    """Test the default DiceFunction"""

    def test_roll_within_range(self):
        for _ in range(200):
            assert 2 <= roll_dice(2, 6) <= 12

    def test_roll_uses_supplied_rng(self):
        first = [roll_dice(2, 6, rng=random.Random(42)) for _ in range(5)]
        second = [roll_dice(2, 6, rng=random.Random(42)) for _ in range(5)]
        assert first == second

    def test_invalid_dice_rejected(self):
        with pytest.raises(ValueError):
            roll_dice(0, 6)

    def test_too_many_dice_rejected(self):
        with pytest.raises(ValueError, match="cannot exceed"):
            roll_dice(MAX_DICE + 1, 6)

    def test_one_sided_die_rejected(self):
        with pytest.raises(ValueError, match="at least 2 sides"):
            roll_dice(2, 1)

    def test_seeded_dice_is_reproducible(self):
        first = seeded_dice(7)
        second = seeded_dice(7)
        assert [first(2, 6) for _ in range(10)] == [second(2, 6) for _ in range(10)]

    def test_roll_helpers_pass_dice_shape(self):
        """roll_2d6 and roll_d6 ask the dice source for the right dice"""
        calls = []

        def recording_dice(count, sides):
            calls.append((count, sides))
            return count

        assert roll_2d6(recording_dice) == 2
        assert roll_d6(recording_dice) == 1
        assert calls == [(2, 6), (1, 6)]


class TestCharacteristicDM:
    """Test the standard characteristic modifier table"""

    @pytest.mark.parametrize("value,expected", [
        (0, -3), (1, -2), (2, -2), (3, -1), (5, -1), (6, 0), (8, 0),
        (9, 1), (11, 1), (12, 2), (14, 2), (15, 3), (17, 3), (18, 4),
    ])
    def test_dm_table(self, value, expected):
        assert characteristic_dm(value) == expected

    def test_format_dm(self):
        assert format_dm(1) == "+1"
        assert format_dm(0) == "+0"
        assert format_dm(-2) == "-2"


class TestDifficultyName:
    def test_named_difficulties(self):
        assert difficulty_name(Difficulty.AVERAGE) == "average"
        assert difficulty_name(12) == "very difficult"

    def test_unnamed_target(self):
        assert difficulty_name(7) == "difficulty 7"
