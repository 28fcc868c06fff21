# ABOUTME: Rule evaluator summing conditional DMs against characteristics, plus 2d6 check resolution.
# ABOUTME: evaluate_dms is pure and deterministic; resolve_check adds a single injected dice roll.

from collections.abc import Mapping

from pydantic import BaseModel

from traveller_chargen.models.career import THRESHOLD_PATTERN, CareerCheck
from traveller_chargen.models.characteristics import Characteristic, CharacteristicSet
from traveller_chargen.utils.dice import DiceFunction, format_dm, roll_2d6

DMTable = Mapping[Characteristic | str, Mapping[str, int]]


class CheckOutcome(BaseModel):
    """Result of one 2d6 + DM check against a target"""

    roll: int
    dm: int
    total: int
    target: int
    passed: bool

    model_config = {"frozen": True}

    @property
    def natural_two(self) -> bool:
        return self.roll == 2

    @property
    def natural_twelve(self) -> bool:
        return self.roll == 12

    def describe(self) -> str:
        """Roll arithmetic for event text, e.g. 'rolled 7+1=8 vs 6'"""
        return f"rolled {self.roll}{format_dm(self.dm)}={self.total} vs {self.target}"


def threshold_met(condition: str, value: int) -> bool:
    """
    Whether a characteristic value satisfies a threshold key.

    "8+" (or a bare "8") means value >= 8; "5-" means value <= 5.

    Raises:
        ValueError: If the condition can't be parsed
    """
    match = THRESHOLD_PATTERN.match(condition)
    if not match:
        raise ValueError(
            f"Invalid DM threshold '{condition}'. Expected format: '8+' or '5-'"
        )

    threshold = int(match.group(1))
    if match.group(2) == '-':
        return value <= threshold
    return value >= threshold


def evaluate_dms(dm_table: DMTable, characteristics: CharacteristicSet) -> int:
    """
    Sum every modifier whose characteristic condition is met.

    Pure function: the same table and characteristics always give the same
    total, regardless of table ordering.

    Args:
        dm_table: {characteristic: {threshold: modifier}}
        characteristics: Character's characteristic set

    Returns:
        Total DM (0 for an empty table)
    """
    total = 0
    for characteristic, conditions in dm_table.items():
        value = characteristics.value(characteristic)
        for condition, modifier in conditions.items():
            if threshold_met(condition, value):
                total += modifier
    return total


def resolve_check(
    check: CareerCheck,
    characteristics: CharacteristicSet,
    dice: DiceFunction
) -> CheckOutcome:
    """
    Roll 2d6, add the check's DMs, and compare against its target.

    Natural-roll rules (survival's automatic failure on 2, advancement's
    mandatory continuation on 12) are applied by the phase handlers.
    """
    roll = roll_2d6(dice)
    dm = evaluate_dms(check.dm, characteristics)
    total = roll + dm
    return CheckOutcome(
        roll=roll,
        dm=dm,
        total=total,
        target=check.target,
        passed=total >= check.target
    )
