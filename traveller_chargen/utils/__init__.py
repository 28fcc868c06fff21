# ABOUTME: Utility module exports for dice resolution and structured logging.
# ABOUTME: Provides dice.py (Traveller dice and DMs) and logging.py (loguru config).

from traveller_chargen.utils.dice import (
    DiceFunction,
    Difficulty,
    characteristic_dm,
    roll_dice,
    seeded_dice,
)
from traveller_chargen.utils.logging import get_logger, setup_logging

__all__ = [
    "DiceFunction",
    "Difficulty",
    "characteristic_dm",
    "roll_dice",
    "seeded_dice",
    "setup_logging",
    "get_logger",
]
