# ABOUTME: Pluggable aging policies turning an aging roll into characteristic reductions.
# ABOUTME: The default policy records the roll only; TravellerAgingTable applies the aging table.

from typing import Protocol

from traveller_chargen.models.characteristics import (
    MENTAL_CHARACTERISTICS,
    PHYSICAL_CHARACTERISTICS,
    Characteristic,
    CharacteristicSet,
)


class AgingPolicy(Protocol):
    """Maps an aging roll to characteristic changes (negative values are reductions)"""

    def effects(
        self,
        aging_roll: int,
        characteristics: CharacteristicSet
    ) -> dict[Characteristic, int]: ...


class RecordOnlyAging:
    """Records the aging roll without any characteristic effect"""

    def effects(
        self,
        aging_roll: int,
        characteristics: CharacteristicSet
    ) -> dict[Characteristic, int]:
        return {}


# Aging table: result -> (physical reductions, mental reductions)
# Reductions are applied to physical characteristics highest-first, then mental.
AGING_TABLE: dict[int, tuple[tuple[int, ...], tuple[int, ...]]] = {
    0: ((1,), ()),
    -1: ((1, 1), ()),
    -2: ((1, 1, 1), ()),
    -3: ((2, 1, 1), ()),
    -4: ((2, 2, 1), ()),
    -5: ((2, 2, 2), ()),
    -6: ((2, 2, 2), (1,)),
}


class TravellerAgingTable:
    """
    Aging table policy: a result of 1+ has no effect, 0 to -6 reduces
    physical characteristics (and a mental one at -6). Results below -6
    use the -6 row.

    Physical reductions go to the highest characteristic first so the
    outcome is deterministic for a given characteristic set.
    """

    def effects(
        self,
        aging_roll: int,
        characteristics: CharacteristicSet
    ) -> dict[Characteristic, int]:
        if aging_roll >= 1:
            return {}

        physical, mental = AGING_TABLE[max(aging_roll, -6)]
        changes: dict[Characteristic, int] = {}

        for characteristic, amount in zip(
            self._highest_first(PHYSICAL_CHARACTERISTICS, characteristics), physical
        ):
            changes[characteristic] = -amount

        for characteristic, amount in zip(
            self._highest_first(MENTAL_CHARACTERISTICS[:2], characteristics), mental
        ):
            changes[characteristic] = -amount

        return changes

    @staticmethod
    def _highest_first(
        group: tuple[Characteristic, ...],
        characteristics: CharacteristicSet
    ) -> list[Characteristic]:
        # Stable sort keeps STR, DEX, END (INT, EDU) order on ties
        return sorted(group, key=lambda c: -characteristics.value(c))
