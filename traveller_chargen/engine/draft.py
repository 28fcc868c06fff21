# ABOUTME: Draft resolver assigning a fallback career after a failed qualification roll.
# ABOUTME: Maps 1d6 onto an injected career order; falls back to a catalog-independent Drifter.

from collections.abc import Sequence

from loguru import logger
from pydantic import BaseModel

from traveller_chargen.engine.catalog import CareerCatalog
from traveller_chargen.models.career import Assignment, Career, CareerCheck
from traveller_chargen.models.characteristics import Characteristic
from traveller_chargen.utils.dice import DiceFunction, roll_d6


class DraftResult(BaseModel):
    """Outcome of a draft: the career is always set"""

    roll: int
    career: Career
    assignment: Assignment | None = None
    drifter: bool = False

    model_config = {"frozen": True}


def build_drifter_career(career_id: str = "drifter", name: str = "Drifter") -> Career:
    """
    Fallback occupation used when the drafted career is missing from the catalog.

    It has no assignments and no skill tables, so training phases grant
    nothing; survival and advancement use plain 2d6 targets.
    """
    return Career(
        id=career_id,
        name=name,
        description="Wanders between odd jobs without a formal career",
        qualification=CareerCheck(characteristic=Characteristic.END, target=2),
        survival=CareerCheck(characteristic=Characteristic.END, target=5),
        advancement=CareerCheck(characteristic=Characteristic.INT, target=7),
    )


class DraftResolver:
    """
    Forced enlistment after a failed qualification.

    The career order is injected (from settings by default), keeping game
    specific career names out of the engine. The draft never fails: a
    drafted career is auto-qualified, and a gap in the catalog yields the
    Drifter occupation instead.
    """

    def __init__(
        self,
        catalog: CareerCatalog,
        draft_order: Sequence[str],
        drifter: Career | None = None
    ):
        if not draft_order:
            raise ValueError("draft_order must list at least one career id")

        self.catalog = catalog
        self.draft_order = list(draft_order)
        self.drifter = drifter or build_drifter_career()

    def resolve(self, dice: DiceFunction) -> DraftResult:
        """Roll 1d6 and enlist the character into the mapped career"""
        draft_roll = roll_d6(dice)

        # Rolls past the configured order land on the Drifter fallback
        career_id = (
            self.draft_order[draft_roll - 1]
            if draft_roll <= len(self.draft_order)
            else None
        )
        career = self.catalog.find(career_id) if career_id else None

        if career is not None:
            logger.bind(draft_roll=draft_roll, career_id=career.id).info(
                f"Drafted into {career.name}"
            )
            return DraftResult(
                roll=draft_roll,
                career=career,
                assignment=career.default_assignment
            )

        logger.bind(draft_roll=draft_roll, missing_career=career_id).warning(
            f"Draft career '{career_id}' not in catalog; assigning {self.drifter.name}"
        )
        return DraftResult(roll=draft_roll, career=self.drifter, drifter=True)
