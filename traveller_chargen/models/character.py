# ABOUTME: Pydantic models for the character sheet consumed and produced by career progression.
# ABOUTME: Includes the prior career selection seed and the CareerProgressResult output payload.

from pydantic import BaseModel, Field

from traveller_chargen.models.characteristics import CharacteristicSet, Skill
from traveller_chargen.models.term_state import CareerRecord, CareerTerm, ProgressExit


class CareerSelection(BaseModel):
    """
    Career already chosen in an earlier creation step, or a career in progress.

    Either way the engine starts with the career active and skips the first
    qualification. An in-progress career also carries its rank, commission
    and the terms already served in it.
    """

    career_id: str = Field(min_length=1)
    assignment_id: str | None = None
    rank: int = Field(default=0, ge=0)
    commissioned: bool = False
    terms_served: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class Character(BaseModel):
    """
    Character sheet fields relevant to career progression.

    Example:
        Character(
            name="Jamison",
            characteristics=CharacteristicSet(STR=7, DEX=8, END=8, INT=9, EDU=7, SOC=6),
            skills=[Skill(name="Admin", level=0, source="Homeworld")]
        )
    """

    name: str = Field(default="Traveller", min_length=1)
    characteristics: CharacteristicSet
    skills: list[Skill] = Field(default_factory=list)
    age: int = Field(default=18, ge=0)
    terms: int = Field(
        default=0,
        ge=0,
        description="Total career terms served so far"
    )
    careers: list[CareerRecord] = Field(default_factory=list)
    graduated: bool = Field(
        default=False,
        description="Whether pre-career education was completed with graduation"
    )
    career_selection: CareerSelection | None = None

    @property
    def latest_career(self) -> CareerRecord | None:
        return self.careers[-1] if self.careers else None


class CareerProgressResult(BaseModel):
    """Payload handed back when career progression concludes"""

    exit: ProgressExit
    character: Character
    career_terms: list[CareerTerm] = Field(default_factory=list)
    total_terms: int = Field(ge=0)

    model_config = {"frozen": True}

    @property
    def events_by_term(self) -> list[list[str]]:
        """Ordered event strings of every concluded term, for narrative rendering"""
        return [list(term.events) for term in self.career_terms]
