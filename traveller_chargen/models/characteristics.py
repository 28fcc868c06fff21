# ABOUTME: Pydantic models for Traveller characteristics and skills.
# ABOUTME: Defines the six-characteristic set read by the rule evaluator and the Skill record.

from enum import Enum

from pydantic import BaseModel, Field


class Characteristic(str, Enum):
    """The six Traveller characteristics"""
    STR = "STR"
    DEX = "DEX"
    END = "END"
    INT = "INT"
    EDU = "EDU"
    SOC = "SOC"


# Physical and mental groupings used by aging policies
PHYSICAL_CHARACTERISTICS = (Characteristic.STR, Characteristic.DEX, Characteristic.END)
MENTAL_CHARACTERISTICS = (Characteristic.INT, Characteristic.EDU, Characteristic.SOC)


class CharacteristicSet(BaseModel):
    """
    A character's six characteristic scores.

    Read-only for the career engine: phase handlers only evaluate DMs
    against these values, they never change them.

    Example:
        stats = CharacteristicSet(STR=7, DEX=8, END=8, INT=9, EDU=7, SOC=6)
        stats.value(Characteristic.INT)  # 9
    """

    STR: int = Field(ge=1, le=18, description="Strength")
    DEX: int = Field(ge=1, le=18, description="Dexterity")
    END: int = Field(ge=1, le=18, description="Endurance")
    INT: int = Field(ge=1, le=18, description="Intellect")
    EDU: int = Field(ge=1, le=18, description="Education")
    SOC: int = Field(ge=1, le=18, description="Social Standing")

    model_config = {"frozen": True}

    def value(self, characteristic: Characteristic | str) -> int:
        """Return the score for a characteristic (enum member or code)"""
        return getattr(self, Characteristic(characteristic).value)

    def as_dict(self) -> dict[str, int]:
        return self.model_dump()


class Skill(BaseModel):
    """A skill known by a character, with the source that granted it"""

    name: str = Field(min_length=1, description="Skill name (e.g., 'Pilot', 'Vacc Suit')")
    level: int = Field(default=0, ge=0, description="Skill level (0 = basic familiarity)")
    source: str | None = Field(
        default=None,
        description="What granted the skill (e.g., 'Navy Basic Training')"
    )


def knows_skill(skills: list[Skill], name: str) -> bool:
    """Whether a skill with this name is already present (case-insensitive)"""
    target = name.strip().lower()
    return any(skill.name.strip().lower() == target for skill in skills)
