# ABOUTME: Traveller dice resolver with characteristic DM lookup and difficulty names.
# ABOUTME: Engines take an injectable DiceFunction; roll_dice and seeded_dice are the default sources.

import random
from collections.abc import Callable
from enum import IntEnum


# Signature of every dice source the engine accepts: (count, sides) -> summed total
DiceFunction = Callable[[int, int], int]

MAX_DICE = 100


class Difficulty(IntEnum):
    """Common Traveller task difficulties (target on 2d6 + DM)"""
    SIMPLE = 2
    EASY = 4
    ROUTINE = 6
    AVERAGE = 8
    DIFFICULT = 10
    VERY_DIFFICULT = 12
    FORMIDABLE = 14
    IMPOSSIBLE = 16


def _validate_dice(count: int, sides: int) -> None:
    if count < 1:
        raise ValueError(
            f"Number of dice must be at least 1, got {count}"
        )

    if count > MAX_DICE:
        raise ValueError(
            f"Number of dice cannot exceed {MAX_DICE}, got {count}"
        )

    if sides < 2:
        raise ValueError(
            f"Dice must have at least 2 sides, got d{sides}"
        )


def roll_dice(count: int, sides: int, rng: random.Random | None = None) -> int:
    """
    Sum of N dice of S sides.

    This is the default DiceFunction used by the career engine.

    Args:
        count: Number of dice to roll
        sides: Sides per die
        rng: Optional random source (default: module-level random)

    Returns:
        Total of all dice

    Raises:
        ValueError: If count or sides are out of range
    """
    _validate_dice(count, sides)
    source = rng or random
    return sum(source.randint(1, sides) for _ in range(count))


def seeded_dice(seed: int | None) -> DiceFunction:
    """
    Build a DiceFunction backed by its own random.Random instance.

    Useful for reproducible runs from the CLI (--seed).
    """
    rng = random.Random(seed)

    def _roll(count: int, sides: int) -> int:
        return roll_dice(count, sides, rng=rng)

    return _roll


def roll_2d6(dice: DiceFunction = roll_dice) -> int:
    """Standard Traveller check roll"""
    return dice(2, 6)


def roll_d6(dice: DiceFunction = roll_dice) -> int:
    """Single d6, used for table lookups and the draft"""
    return dice(1, 6)


def characteristic_dm(value: int) -> int:
    """
    Standard Traveller characteristic modifier.

    0 -> -3, 1-2 -> -2, 3-5 -> -1, 6-8 -> 0, 9-11 -> +1,
    12-14 -> +2, 15-17 -> +3, 18+ -> +4
    """
    if value <= 0:
        return -3
    if value <= 2:
        return -2
    if value <= 5:
        return -1
    if value <= 8:
        return 0
    if value <= 11:
        return 1
    if value <= 14:
        return 2
    if value <= 17:
        return 3
    return 4


def format_dm(dm: int) -> str:
    """Signed DM string for event text ("+1", "-2", "+0")"""
    return f"+{dm}" if dm >= 0 else f"{dm}"


def difficulty_name(target: int) -> str:
    """Human name for a difficulty target, e.g. 8 -> 'average'"""
    try:
        return Difficulty(target).name.replace('_', ' ').lower()
    except ValueError:
        return f"difficulty {target}"
