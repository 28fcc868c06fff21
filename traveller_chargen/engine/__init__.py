# ABOUTME: Career engine exports for term progression, rule evaluation, draft and ledger.
# ABOUTME: Provides the 7-phase term state machine and the collaborators it drives.

from traveller_chargen.engine.aging import AgingPolicy, RecordOnlyAging, TravellerAgingTable
from traveller_chargen.engine.catalog import CareerCatalog, load_catalog
from traveller_chargen.engine.choices import available_choices, compute_career_choices
from traveller_chargen.engine.draft import DraftResolver, DraftResult, build_drifter_career
from traveller_chargen.engine.exceptions import (
    CareerNotFound,
    CatalogLoadError,
    EngineConcluded,
    EngineNotConcluded,
    InvalidCareerChoice,
    InvalidPhaseTransition,
    InvalidSkillTable,
    PhaseNotResolved,
)
from traveller_chargen.engine.ledger import TermLedger
from traveller_chargen.engine.rules import CheckOutcome, evaluate_dms, resolve_check
from traveller_chargen.engine.term_machine import PHASE_TRANSITIONS, CareerTermEngine

__all__ = [
    "CareerTermEngine",
    "PHASE_TRANSITIONS",
    "CareerCatalog",
    "load_catalog",
    "DraftResolver",
    "DraftResult",
    "build_drifter_career",
    "TermLedger",
    "AgingPolicy",
    "RecordOnlyAging",
    "TravellerAgingTable",
    "compute_career_choices",
    "available_choices",
    "CheckOutcome",
    "evaluate_dms",
    "resolve_check",
    "CareerNotFound",
    "CatalogLoadError",
    "EngineConcluded",
    "EngineNotConcluded",
    "InvalidCareerChoice",
    "InvalidPhaseTransition",
    "InvalidSkillTable",
    "PhaseNotResolved",
]
