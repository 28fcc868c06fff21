"""Data models for the Traveller career-term engine"""

from .career import (
    SKILL_TABLE_NAMES,
    Assignment,
    Career,
    CareerCheck,
    CareerRank,
    RankBonus,
    SkillTableName,
    SkillTables,
)
from .character import (
    CareerProgressResult,
    CareerSelection,
    Character,
)
from .characteristics import (
    MENTAL_CHARACTERISTICS,
    PHYSICAL_CHARACTERISTICS,
    Characteristic,
    CharacteristicSet,
    Skill,
    knows_skill,
)
from .term_state import (
    TERM_PHASE_ORDER,
    AdvancementResult,
    AgingResult,
    BasicTrainingResult,
    CareerChoice,
    CareerRecord,
    CareerTerm,
    CareerTermState,
    ChoiceType,
    DecisionResult,
    PhaseResult,
    ProgressExit,
    QualificationResult,
    SkillTrainingResult,
    SurvivalResult,
    TermPhase,
    TermPhaseTag,
    initialize_phases,
)

__all__ = [
    # Characteristic models
    "Characteristic",
    "CharacteristicSet",
    "Skill",
    "knows_skill",
    "PHYSICAL_CHARACTERISTICS",
    "MENTAL_CHARACTERISTICS",
    # Career catalog models
    "Career",
    "CareerCheck",
    "Assignment",
    "CareerRank",
    "RankBonus",
    "SkillTables",
    "SkillTableName",
    "SKILL_TABLE_NAMES",
    # Term models
    "TermPhaseTag",
    "TERM_PHASE_ORDER",
    "TermPhase",
    "initialize_phases",
    "PhaseResult",
    "QualificationResult",
    "BasicTrainingResult",
    "SkillTrainingResult",
    "SurvivalResult",
    "AdvancementResult",
    "AgingResult",
    "DecisionResult",
    "CareerTerm",
    "CareerRecord",
    "CareerChoice",
    "ChoiceType",
    "CareerTermState",
    "ProgressExit",
    # Character models
    "Character",
    "CareerSelection",
    "CareerProgressResult",
]
