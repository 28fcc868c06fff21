# ABOUTME: Pydantic models for career-term phases, typed phase results, term records and choices.
# ABOUTME: Defines the 7-phase term cycle, the mutable CareerTermState and the immutable CareerTerm.

from enum import Enum

from pydantic import BaseModel, Field

from traveller_chargen.models.career import Assignment, Career
from traveller_chargen.models.characteristics import Characteristic, Skill


class TermPhaseTag(str, Enum):
    """Phases of a single 4-year career term, in order"""
    QUALIFICATION = "qualification"
    BASIC_TRAINING = "basic_training"
    SKILL_TRAINING = "skill_training"
    SURVIVAL = "survival"
    ADVANCEMENT = "advancement"
    AGING = "aging"
    DECISION = "decision"


TERM_PHASE_ORDER: tuple[TermPhaseTag, ...] = tuple(TermPhaseTag)


class ChoiceType(str, Enum):
    """Options offered at the end-of-term decision"""
    CONTINUE = "continue"
    CHANGE_CAREER = "change_career"
    CHANGE_ASSIGNMENT = "change_assignment"
    UNIVERSITY = "university"
    END_CAREER = "end_career"


class ProgressExit(str, Enum):
    """How career progression handed control back to the caller"""
    MUSTERING_OUT = "mustering_out"
    UNIVERSITY = "university"
    CAREER_ENDED_BY_MISHAP = "career_ended_by_mishap"


# ============================================================================
# Per-phase result records
# ============================================================================


class QualificationResult(BaseModel):
    """Outcome of the qualification phase (rolled, drafted, or already qualified)"""
    career_id: str
    passed: bool
    roll: int | None = None
    dm: int = 0
    total: int | None = None
    target: int | None = None
    already_qualified: bool = False
    drafted: bool = False
    draft_roll: int | None = None
    drifter: bool = False


class BasicTrainingResult(BaseModel):
    skills_gained: list[Skill] = Field(default_factory=list)
    first_career: bool


class SkillTrainingResult(BaseModel):
    table: str
    roll: int
    skill: str | None = Field(
        default=None,
        description="Skill granted, or None when the table has no entry for the roll"
    )
    new_level: int | None = None
    characteristic_gain: Characteristic | None = Field(
        default=None,
        description="Characteristic entry rolled; recorded only, characteristics are read-only"
    )


class SurvivalResult(BaseModel):
    passed: bool
    roll: int
    dm: int
    total: int
    target: int
    natural_two: bool = False


class AdvancementResult(BaseModel):
    passed: bool
    roll: int
    dm: int
    total: int
    target: int
    natural_twelve: bool = False
    new_rank: int
    rank_title: str | None = None
    bonus_skill: str | None = None


class AgingResult(BaseModel):
    checked: bool = Field(description="False before the aging start term")
    aging_roll: int | None = None
    characteristic_changes: dict[Characteristic, int] = Field(default_factory=dict)


class DecisionResult(BaseModel):
    choice: ChoiceType
    assignment_id: str | None = None


PhaseResult = (
    QualificationResult
    | BasicTrainingResult
    | SkillTrainingResult
    | SurvivalResult
    | AdvancementResult
    | AgingResult
    | DecisionResult
)


class TermPhase(BaseModel):
    """One slot of a term's 7-phase sequence"""
    tag: TermPhaseTag
    completed: bool = False
    result: PhaseResult | None = None


def initialize_phases() -> list[TermPhase]:
    """Fresh 7-slot phase sequence for a new term"""
    return [TermPhase(tag=tag) for tag in TERM_PHASE_ORDER]


# ============================================================================
# Term records
# ============================================================================


class CareerTerm(BaseModel):
    """
    Immutable record of one concluded term.

    Created once by the term ledger and appended to the term history;
    never mutated afterwards.
    """

    term_number: int = Field(ge=1)
    career: Career
    assignment: Assignment | None = None
    age: int = Field(description="Age at the start of the term")
    rank: int = Field(ge=0, description="Rank held when the term concluded")
    events: tuple[str, ...] = ()
    skills_gained: tuple[Skill, ...] = ()
    survived: bool
    advanced: bool
    commissioned: bool = False
    must_continue: bool = False

    model_config = {"frozen": True}


class CareerRecord(BaseModel):
    """Permanent summary of one career stint on the character sheet"""

    career_id: str
    assignment_id: str | None = None
    rank: int = Field(default=0, ge=0)
    terms: int = Field(default=0, ge=0)
    commissioned: bool = False

    model_config = {"frozen": True}


class CareerChoice(BaseModel):
    """An end-of-term option, recomputed at every decision phase"""

    type: ChoiceType
    label: str
    description: str
    available: bool
    reason: str | None = Field(
        default=None,
        description="Why the option is unavailable"
    )

    model_config = {"frozen": True}


class CareerTermState(BaseModel):
    """
    Mutable scratch state owned by the term engine.

    Invariants:
    - active_career is set once any phase beyond qualification runs
    - rank only increases, and only during a successful advancement
    - terms is append-only
    """

    current_term: int = Field(default=1, ge=1)
    age: int = Field(default=18, ge=0)
    total_terms: int = Field(default=0, ge=0)
    active_career: Career | None = None
    current_assignment: Assignment | None = None
    rank: int = Field(default=0, ge=0)
    commissioned: bool = False
    must_continue: bool = False
    can_return_to_university: bool = True
    terms: list[CareerTerm] = Field(default_factory=list)
    phases: list[TermPhase] = Field(default_factory=initialize_phases)
    phase_index: int = Field(default=0, ge=0)
    events: list[str] = Field(default_factory=list)
    skills_gained: list[Skill] = Field(default_factory=list)
    terms_in_career: int = Field(
        default=0,
        ge=0,
        description="Concluded terms in the active career stint"
    )

    model_config = {"validate_assignment": True}

    @property
    def current_phase(self) -> TermPhase | None:
        if self.phase_index >= len(self.phases):
            return None
        return self.phases[self.phase_index]

    def phase(self, tag: TermPhaseTag) -> TermPhase:
        for phase in self.phases:
            if phase.tag == tag:
                return phase
        raise KeyError(tag)
