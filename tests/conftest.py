# ABOUTME: Shared pytest fixtures for all test modules (unit and integration).
# ABOUTME: Provides a scripted dice source, sample careers, catalogs and characters.

import pytest

from traveller_chargen.config.settings import Settings
from traveller_chargen.engine.catalog import CareerCatalog
from traveller_chargen.models.career import (
    Assignment,
    Career,
    CareerCheck,
    CareerRank,
    RankBonus,
    SkillTables,
)
from traveller_chargen.models.character import CareerSelection, Character
from traveller_chargen.models.characteristics import CharacteristicSet, Skill


# --- Helper Classes ---

class ScriptedDice:
    """
    Deterministic DiceFunction returning queued totals in call order.

    Each call records (count, sides); a queued total outside the possible
    range for that roll fails the test immediately.
    """

    def __init__(self, *totals: int):
        self.totals = list(totals)
        self.calls: list[tuple[int, int]] = []

    def __call__(self, count: int, sides: int) -> int:
        self.calls.append((count, sides))
        if not self.totals:
            raise AssertionError(f"ScriptedDice exhausted on roll {count}d{sides}")
        total = self.totals.pop(0)
        if not count <= total <= count * sides:
            raise AssertionError(f"Scripted total {total} impossible on {count}d{sides}")
        return total

    def queue(self, *totals: int) -> None:
        self.totals.extend(totals)

    @property
    def remaining(self) -> int:
        return len(self.totals)


# --- Helper Functions ---

def make_career(
    career_id: str,
    name: str | None = None,
    qualification: CareerCheck | None = None,
    survival: CareerCheck | None = None,
    advancement: CareerCheck | None = None,
    assignments: list[Assignment] | None = None,
    service: list[str] | None = None,
    officer: list[str] | None = None,
    ranks: list[CareerRank] | None = None
) -> Career:
    """Helper to build a Career with sensible defaults for tests"""
    name = name or career_id.title()
    if assignments is None:
        assignments = [
            Assignment(
                id=f"{career_id}_a",
                name=f"{name} A",
                skill_table=["Recon", "Stealth", "Melee", "Drive", "Survival", "Tactics"]
            ),
            Assignment(
                id=f"{career_id}_b",
                name=f"{name} B",
                skill_table=["Pilot", "Gunner", "Mechanic", "Engineer", "Electronics", "Flyer"]
            ),
        ]
    return Career(
        id=career_id,
        name=name,
        qualification=qualification or CareerCheck(characteristic="INT", target=6),
        survival=survival or CareerCheck(characteristic="END", target=5),
        advancement=advancement or CareerCheck(characteristic="EDU", target=7),
        assignments=assignments,
        skill_tables=SkillTables(
            personal=["STR", "DEX", "END", "INT", "EDU", "SOC"],
            service=service if service is not None else ["Pilot", "Vacc Suit", "Athletics", "Gunner", "Mechanic", "Gun Combat"],
            advanced=["Electronics", "Astrogation", "Engineer", "Drive", "Navigation", "Admin"],
            officer=officer or [],
        ),
        ranks=ranks or [
            CareerRank(id=0, name="Rank 0", title="Crewman"),
            CareerRank(id=1, name="Rank 1", title="Able Spacehand", bonus=RankBonus(skill="Mechanic", level=1)),
            CareerRank(id=2, name="Rank 2", title="Petty Officer"),
            CareerRank(id=3, name="Rank 3", title="Lieutenant"),
        ],
    )


# --- Dice Fixtures ---

@pytest.fixture
def dice() -> ScriptedDice:
    """Empty scripted dice; tests queue the rolls they need"""
    return ScriptedDice()


# --- Settings Fixtures ---

@pytest.fixture
def settings() -> Settings:
    """Default rule settings independent of the environment"""
    return Settings(_env_file=None)


# --- Career Fixtures ---

@pytest.fixture
def navy() -> Career:
    return make_career(
        "navy",
        qualification=CareerCheck(characteristic="INT", target=6, dm={"EDU": {"9+": 1}}),
        survival=CareerCheck(characteristic="INT", target=5, dm={"INT": {"9+": 1}}),
        advancement=CareerCheck(characteristic="EDU", target=7),
    )


@pytest.fixture
def marines() -> Career:
    return make_career("marines", service=["Athletics", "Vacc Suit", "Tactics", "Heavy Weapons", "Gun Combat", "Stealth"])


@pytest.fixture
def scout() -> Career:
    return make_career("scout", service=["Pilot", "Survival", "Mechanic", "Astrogation", "Vacc Suit", "Gun Combat"])


@pytest.fixture
def catalog(navy: Career, marines: Career, scout: Career) -> CareerCatalog:
    """Catalog with navy, marines and scout (no army, merchant or agent)"""
    return CareerCatalog([navy, marines, scout])


# --- Character Fixtures ---

@pytest.fixture
def characteristics() -> CharacteristicSet:
    return CharacteristicSet(STR=7, DEX=8, END=8, INT=9, EDU=7, SOC=6)


@pytest.fixture
def character(characteristics: CharacteristicSet) -> Character:
    """Fresh 18-year-old with no career history"""
    return Character(
        name="Jamison",
        characteristics=characteristics,
        skills=[Skill(name="Admin", level=0, source="Homeworld")]
    )


@pytest.fixture
def navy_recruit(characteristics: CharacteristicSet) -> Character:
    """Character whose navy career was selected in an earlier step"""
    return Character(
        name="Kinsey",
        characteristics=characteristics,
        career_selection=CareerSelection(career_id="navy", assignment_id="navy_a")
    )
