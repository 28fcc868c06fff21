# ABOUTME: Career term state machine sequencing the 7 term phases through an explicit transition table.
# ABOUTME: Phase handlers combine the rule evaluator and dice resolver, mutate term state and log events.

from loguru import logger

from traveller_chargen.config.settings import Settings, get_settings
from traveller_chargen.engine.aging import AgingPolicy, RecordOnlyAging
from traveller_chargen.engine.catalog import CareerCatalog
from traveller_chargen.engine.choices import compute_career_choices
from traveller_chargen.engine.draft import DraftResolver, build_drifter_career
from traveller_chargen.engine.exceptions import (
    EngineConcluded,
    EngineNotConcluded,
    InvalidCareerChoice,
    InvalidPhaseTransition,
    InvalidSkillTable,
    PhaseNotResolved,
)
from traveller_chargen.engine.ledger import TermLedger
from traveller_chargen.engine.rules import resolve_check
from traveller_chargen.models.career import SKILL_TABLE_NAMES, Assignment, Career
from traveller_chargen.models.character import CareerProgressResult, Character
from traveller_chargen.models.characteristics import Characteristic, Skill, knows_skill
from traveller_chargen.models.term_state import (
    AdvancementResult,
    AgingResult,
    BasicTrainingResult,
    CareerChoice,
    CareerTermState,
    ChoiceType,
    DecisionResult,
    PhaseResult,
    ProgressExit,
    QualificationResult,
    SkillTrainingResult,
    SurvivalResult,
    TermPhaseTag,
    initialize_phases,
)
from traveller_chargen.utils.dice import DiceFunction, roll_2d6, roll_d6, roll_dice
from traveller_chargen.utils.logging import log_phase_event, log_phase_transition

# Normal forward transitions within a term. Decision has no successor: it
# either starts a new term or concludes progression.
PHASE_TRANSITIONS: dict[TermPhaseTag, TermPhaseTag | None] = {
    TermPhaseTag.QUALIFICATION: TermPhaseTag.BASIC_TRAINING,
    TermPhaseTag.BASIC_TRAINING: TermPhaseTag.SKILL_TRAINING,
    TermPhaseTag.SKILL_TRAINING: TermPhaseTag.SURVIVAL,
    TermPhaseTag.SURVIVAL: TermPhaseTag.ADVANCEMENT,
    TermPhaseTag.ADVANCEMENT: TermPhaseTag.AGING,
    TermPhaseTag.AGING: TermPhaseTag.DECISION,
    TermPhaseTag.DECISION: None,
}

_PHASE_INDEX: dict[TermPhaseTag, int] = {
    tag: index for index, tag in enumerate(PHASE_TRANSITIONS)
}


class CareerTermEngine:
    """
    Drives one character through consecutive 4-year career terms.

    Each public phase operation is one discrete user action: it checks
    that its phase is the current one, resolves the phase, records a typed
    result and an event string, and moves the cursor forward. The engine
    is single-use: once "end_career", "university" or a failed survival
    concludes progression, read the outcome from `result`.

    Usage:
        engine = CareerTermEngine(character, catalog)
        engine.qualify("navy")
        engine.basic_training()
        engine.skill_training("service")
        if engine.survival().passed:
            engine.advancement()
            engine.aging()
            engine.decide(ChoiceType.END_CAREER)
        outcome = engine.result
    """

    def __init__(
        self,
        character: Character,
        catalog: CareerCatalog,
        dice: DiceFunction = roll_dice,
        settings: Settings | None = None,
        aging_policy: AgingPolicy | None = None,
        draft_resolver: DraftResolver | None = None
    ):
        self.character = character
        self.catalog = catalog
        self.dice = dice
        self.settings = settings or get_settings()
        self.aging_policy = aging_policy or RecordOnlyAging()
        self.draft_resolver = draft_resolver or DraftResolver(
            catalog,
            self.settings.draft_careers,
            drifter=build_drifter_career(
                self.settings.drifter_career_id,
                self.settings.drifter_career_name
            )
        )
        self.ledger = TermLedger(character.careers)
        self.skills: list[Skill] = [skill.model_copy() for skill in character.skills]
        self._exit: ProgressExit | None = None

        self.state = CareerTermState(
            current_term=character.terms + 1,
            age=character.age,
            total_terms=character.terms,
            can_return_to_university=not character.graduated,
        )
        self._seed_from_selection()

    # ------------------------------------------------------------------
    # Cursor and inspection
    # ------------------------------------------------------------------

    @property
    def concluded(self) -> bool:
        return self._exit is not None

    @property
    def current_phase(self) -> TermPhaseTag | None:
        """Tag of the phase awaiting resolution, or None once concluded"""
        if self.concluded:
            return None
        phase = self.state.current_phase
        return phase.tag if phase else None

    @property
    def events(self) -> list[str]:
        """Event strings of the term in progress"""
        return list(self.state.events)

    @property
    def result(self) -> CareerProgressResult:
        """
        Outcome of career progression.

        Raises:
            EngineNotConcluded: If progression is still running
        """
        if self._exit is None:
            raise EngineNotConcluded(
                f"Career progression still running (phase: {self.current_phase})"
            )

        character = self.character.model_copy(update={
            "skills": list(self.skills),
            "age": self.state.age,
            "terms": self.state.total_terms,
            "careers": list(self.ledger.career_records),
            "career_selection": None,
        })
        return CareerProgressResult(
            exit=self._exit,
            character=character,
            career_terms=list(self.state.terms),
            total_terms=self.state.total_terms
        )

    def advance(self) -> TermPhaseTag | None:
        """
        Mark the current (resolved) phase complete and move the cursor.

        Returns:
            The new current phase

        Raises:
            PhaseNotResolved: If the current phase has no result yet
            InvalidPhaseTransition: At the decision phase, which only decide() ends
        """
        self._ensure_running()
        phase = self.state.current_phase
        if phase.result is None:
            raise PhaseNotResolved(f"Phase '{phase.tag.value}' has not been resolved")

        next_tag = PHASE_TRANSITIONS[phase.tag]
        if next_tag is None:
            raise InvalidPhaseTransition("The decision phase ends through decide(), not advance()")

        phase.completed = True
        self.state.phase_index = _PHASE_INDEX[next_tag]
        log_phase_transition(phase.tag.value, next_tag.value, self.state.current_term)
        return next_tag

    # ------------------------------------------------------------------
    # Phase 1: Qualification
    # ------------------------------------------------------------------

    def qualifiable_careers(self) -> list[Career]:
        """Careers the character may attempt to join, in catalog order"""
        return list(self.catalog)

    def qualify(self, career: Career | str, assignment_id: str | None = None) -> QualificationResult:
        """
        Roll to join a career; a failure triggers the draft.

        Args:
            career: Career (or career id) to attempt
            assignment_id: Assignment to join on success (default: the first)

        Returns:
            QualificationResult (passed is always True after a draft)
        """
        self._require_phase(TermPhaseTag.QUALIFICATION)
        if isinstance(career, str):
            career = self.catalog.get(career)

        outcome = resolve_check(career.qualification, self.character.characteristics, self.dice)
        returning = any(record.career_id == career.id for record in self.ledger.career_records)

        if outcome.passed:
            assignment = self._pick_assignment(career, assignment_id)
            self._join_career(career, assignment)
            result = QualificationResult(
                career_id=career.id,
                passed=True,
                roll=outcome.roll,
                dm=outcome.dm,
                total=outcome.total,
                target=outcome.target,
            )
            prefix = "Re-entered" if returning else "Qualified for"
            self._record(
                TermPhaseTag.QUALIFICATION,
                result,
                f"{prefix} {self._career_label()} ({outcome.describe()})"
            )
        else:
            self._add_event(f"Failed to qualify for {career.name} ({outcome.describe()})")
            draft = self.draft_resolver.resolve(self.dice)
            self._join_career(draft.career, draft.assignment)
            result = QualificationResult(
                career_id=draft.career.id,
                passed=True,
                roll=outcome.roll,
                dm=outcome.dm,
                total=outcome.total,
                target=outcome.target,
                drafted=not draft.drifter,
                draft_roll=draft.roll,
                drifter=draft.drifter,
            )
            if draft.drifter:
                message = f"Became {draft.career.name} (draft rolled {draft.roll})"
            else:
                message = f"Drafted into {self._career_label()} (draft rolled {draft.roll})"
            self._record(TermPhaseTag.QUALIFICATION, result, message)

        self.advance()
        return result

    # ------------------------------------------------------------------
    # Phase 2: Basic Training
    # ------------------------------------------------------------------

    def basic_training(self) -> BasicTrainingResult:
        """
        Grant level-0 service skills the character doesn't know yet.

        The first-ever career term grants the whole service table; later
        terms grant the first unknown service skill.
        """
        self._require_phase(TermPhaseTag.BASIC_TRAINING)
        career = self.state.active_career
        first_career = self.state.total_terms == 0
        source = f"{career.name} Basic Training"

        unknown = []
        for skill_name in career.skill_tables.service:
            if not knows_skill(self.skills, skill_name) and not knows_skill(unknown, skill_name):
                unknown.append(Skill(name=skill_name, level=0, source=source))

        gained = unknown if first_career else unknown[:1]
        for skill in gained:
            self.skills.append(skill)
            self.state.skills_gained.append(skill)

        result = BasicTrainingResult(skills_gained=gained, first_career=first_career)
        if gained:
            names = ", ".join(skill.name for skill in gained)
            message = f"Basic Training: gained {names} at level 0"
        else:
            message = "Basic Training: no new service skills"
        self._record(TermPhaseTag.BASIC_TRAINING, result, message)

        self.advance()
        return result

    # ------------------------------------------------------------------
    # Phase 3: Skill Training
    # ------------------------------------------------------------------

    def available_skill_tables(self) -> list[str]:
        """Tables offered for skill training ("officer" only when commissioned)"""
        return [
            table for table in SKILL_TABLE_NAMES
            if table != "officer" or self.state.commissioned
        ]

    def skill_training(self, table: str) -> SkillTrainingResult:
        """
        Roll 1d6 on the chosen table and train the indexed skill.

        A new skill is gained at level 1; a known skill goes up one level.
        Characteristic entries (STR, DEX ...) are recorded on the result but
        never applied or stored as skills.

        Raises:
            InvalidSkillTable: Unknown table, or officer table while not commissioned
        """
        self._require_phase(TermPhaseTag.SKILL_TRAINING)
        table = table.strip().lower()
        if table not in SKILL_TABLE_NAMES:
            raise InvalidSkillTable(
                f"Unknown skill table '{table}'. Must be one of: {', '.join(SKILL_TABLE_NAMES)}"
            )
        if table not in self.available_skill_tables():
            raise InvalidSkillTable("The officer table requires a commission")

        entries = self._skill_table(table)
        skill_roll = roll_d6(self.dice)
        skill_name = entries[skill_roll - 1] if skill_roll <= len(entries) else None

        if skill_name is None:
            logger.bind(table=table, roll=skill_roll, career_id=self.state.active_career.id).warning(
                f"Skill table '{table}' has no entry for roll {skill_roll}"
            )
            result = SkillTrainingResult(table=table, roll=skill_roll)
            message = f"Skill Training: {table} table has no entry for roll {skill_roll}"
        elif skill_name.strip().upper() in Characteristic.__members__:
            gain = Characteristic(skill_name.strip().upper())
            result = SkillTrainingResult(table=table, roll=skill_roll, characteristic_gain=gain)
            message = (
                f"Skill Training: rolled {gain.value} +1 on {table} table (rolled {skill_roll}), "
                f"characteristic gain not applied"
            )
        else:
            skill = self._train_skill(skill_name, f"{self.state.active_career.name} {table} table")
            result = SkillTrainingResult(
                table=table,
                roll=skill_roll,
                skill=skill.name,
                new_level=skill.level
            )
            message = (
                f"Skill Training: gained {skill.name} {skill.level} "
                f"from {table} table (rolled {skill_roll})"
            )
        self._record(TermPhaseTag.SKILL_TRAINING, result, message)

        self.advance()
        return result

    # ------------------------------------------------------------------
    # Phase 4: Survival
    # ------------------------------------------------------------------

    def survival(self) -> SurvivalResult:
        """
        Roll survival; a natural 2 always fails.

        Failure concludes the term immediately (advancement and aging are
        skipped) and ends career progression with a mishap.
        """
        self._require_phase(TermPhaseTag.SURVIVAL)
        career = self.state.active_career
        outcome = resolve_check(career.survival, self.character.characteristics, self.dice)
        natural_two = outcome.natural_two
        passed = outcome.passed and not natural_two

        result = SurvivalResult(
            passed=passed,
            roll=outcome.roll,
            dm=outcome.dm,
            total=outcome.total,
            target=outcome.target,
            natural_two=natural_two
        )

        if passed:
            self._record(TermPhaseTag.SURVIVAL, result, f"Survived term ({outcome.describe()})")
            self.advance()
            return result

        if natural_two:
            message = "Failed survival with a natural 2 - career ends with mishap"
        else:
            message = f"Failed survival ({outcome.describe()}) - career ends with mishap"
        self._record(TermPhaseTag.SURVIVAL, result, message, level="WARNING")
        self.state.current_phase.completed = True

        self.ledger.conclude_term(self.state, survived=False)
        self.ledger.close_career(self.state)
        self._count_concluded_term()
        self._conclude(ProgressExit.CAREER_ENDED_BY_MISHAP)
        return result

    # ------------------------------------------------------------------
    # Phase 5: Advancement
    # ------------------------------------------------------------------

    def advancement(self) -> AdvancementResult:
        """
        Roll for promotion; success raises rank by one.

        A natural 12 forces the character to continue next term, whether or
        not the roll succeeded.
        """
        self._require_phase(TermPhaseTag.ADVANCEMENT)
        career = self.state.active_career
        outcome = resolve_check(career.advancement, self.character.characteristics, self.dice)

        bonus_skill = None
        if outcome.passed:
            self.state.rank += 1
            rank = career.rank(self.state.rank)
            if rank and rank.bonus and rank.bonus.skill:
                bonus_skill = self._grant_rank_bonus(rank.bonus.skill, rank.bonus.level, career)

        if outcome.natural_twelve:
            self.state.must_continue = True

        rank_title = career.rank_title(self.state.rank)
        result = AdvancementResult(
            passed=outcome.passed,
            roll=outcome.roll,
            dm=outcome.dm,
            total=outcome.total,
            target=outcome.target,
            natural_twelve=outcome.natural_twelve,
            new_rank=self.state.rank,
            rank_title=rank_title,
            bonus_skill=bonus_skill
        )

        if outcome.passed:
            title = f" ({rank_title})" if rank_title else ""
            message = f"Advanced to rank {self.state.rank}{title} ({outcome.describe()})"
            if bonus_skill:
                message += f", gained {bonus_skill}"
        else:
            message = f"No advancement ({outcome.describe()})"
        if outcome.natural_twelve:
            message += "; natural 12 - must continue in career"
        self._record(TermPhaseTag.ADVANCEMENT, result, message)

        self.advance()
        return result

    # ------------------------------------------------------------------
    # Phase 6: Aging
    # ------------------------------------------------------------------

    def aging(self) -> AgingResult:
        """
        From the aging start term on, roll 2d6 minus total terms served.

        Characteristic effects come from the injected aging policy and are
        reported, not applied: characteristics are read-only here.
        """
        self._require_phase(TermPhaseTag.AGING)

        if self.state.current_term < self.settings.aging_start_term:
            result = AgingResult(checked=False)
            message = f"No aging check before term {self.settings.aging_start_term}"
        else:
            aging_roll = roll_2d6(self.dice) - self.state.total_terms
            changes = self.aging_policy.effects(aging_roll, self.character.characteristics)
            result = AgingResult(
                checked=True,
                aging_roll=aging_roll,
                characteristic_changes=changes
            )
            if changes:
                effects = ", ".join(
                    f"{characteristic.value} {change:+d}"
                    for characteristic, change in changes.items()
                )
            else:
                effects = "no effects"
            message = f"Aging check: rolled {aging_roll} ({effects})"
        self._record(TermPhaseTag.AGING, result, message)

        self.advance()
        return result

    # ------------------------------------------------------------------
    # Phase 7: Decision
    # ------------------------------------------------------------------

    def choices(self) -> list[CareerChoice]:
        """Every decision option with availability and reasons"""
        return compute_career_choices(self.state, self.settings.university_max_term)

    def available_choices(self) -> list[CareerChoice]:
        """Decision options the character may pick right now"""
        return [choice for choice in self.choices() if choice.available]

    def decide(self, choice: ChoiceType | str, assignment_id: str | None = None) -> DecisionResult:
        """
        Resolve the end-of-term decision.

        Args:
            choice: Choice type (or its string value)
            assignment_id: Target assignment for "change_assignment"

        Returns:
            DecisionResult

        Raises:
            InvalidCareerChoice: Unknown, unavailable, or incomplete choice
        """
        self._require_phase(TermPhaseTag.DECISION)
        try:
            choice = ChoiceType(choice)
        except ValueError as e:
            raise InvalidCareerChoice(f"Unknown career choice '{choice}'") from e

        offered = {option.type: option for option in self.choices()}
        option = offered[choice]
        if not option.available:
            logger.error(f"Rejected unavailable choice '{choice.value}': {option.reason}")
            raise InvalidCareerChoice(f"'{option.label}' is not available: {option.reason}")

        new_assignment = None
        if choice == ChoiceType.CHANGE_ASSIGNMENT:
            new_assignment = self._require_new_assignment(assignment_id)

        result = DecisionResult(
            choice=choice,
            assignment_id=new_assignment.id if new_assignment else None
        )
        self._record(TermPhaseTag.DECISION, result, f"Decision: {option.label}")
        self.state.current_phase.completed = True
        self.ledger.conclude_term(self.state, survived=True)

        if choice == ChoiceType.CONTINUE:
            self._count_concluded_term()
            self._begin_term(skip_qualification=True)
        elif choice == ChoiceType.CHANGE_ASSIGNMENT:
            self._count_concluded_term()
            self.state.current_assignment = new_assignment
            self._begin_term(skip_qualification=True)
        elif choice == ChoiceType.CHANGE_CAREER:
            self.ledger.close_career(self.state)
            self._count_concluded_term()
            self._leave_career()
            self._begin_term(skip_qualification=False)
        elif choice == ChoiceType.UNIVERSITY:
            self.ledger.close_career(self.state)
            self._count_concluded_term()
            self._conclude(ProgressExit.UNIVERSITY)
        else:
            self.ledger.close_career(self.state)
            self._count_concluded_term()
            self._conclude(ProgressExit.MUSTERING_OUT)

        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _seed_from_selection(self) -> None:
        """Start with a career active when one was chosen or is in progress"""
        selection = self.character.career_selection
        if selection is None:
            return

        career = self.catalog.find(selection.career_id)
        if career is None:
            logger.warning(
                f"Selected career '{selection.career_id}' not in catalog; starting at qualification"
            )
            return

        assignment = self._pick_assignment(career, selection.assignment_id)
        self._join_career(career, assignment)
        self.state.rank = selection.rank
        self.state.commissioned = selection.commissioned
        self.state.terms_in_career = selection.terms_served

        self._mark_already_qualified()
        self._add_event(f"Already qualified for {self._career_label()}")

    def _mark_already_qualified(self) -> None:
        qualification = self.state.phase(TermPhaseTag.QUALIFICATION)
        qualification.result = QualificationResult(
            career_id=self.state.active_career.id,
            passed=True,
            already_qualified=True
        )
        qualification.completed = True
        self.state.phase_index = _PHASE_INDEX[TermPhaseTag.BASIC_TRAINING]

    def _begin_term(self, skip_qualification: bool) -> None:
        """Reinitialize the phase sequence for the next term"""
        self.state.current_term += 1
        self.state.phases = initialize_phases()
        self.state.phase_index = 0
        self.state.events = []
        self.state.skills_gained = []
        self.state.must_continue = False

        if skip_qualification:
            self._mark_already_qualified()

        log_phase_event(
            f"Term {self.state.current_term} started",
            phase=self.current_phase.value,
            term_number=self.state.current_term,
            career_id=self.state.active_career.id if self.state.active_career else None,
            age=self.state.age
        )

    def _count_concluded_term(self) -> None:
        self.state.total_terms += 1
        self.state.age += self.settings.term_length_years

    def _leave_career(self) -> None:
        self.state.active_career = None
        self.state.current_assignment = None
        self.state.rank = 0
        self.state.commissioned = False
        self.state.terms_in_career = 0

    def _join_career(self, career: Career, assignment: Assignment | None) -> None:
        self.state.active_career = career
        self.state.current_assignment = assignment

    def _conclude(self, exit_: ProgressExit) -> None:
        self._exit = exit_
        log_phase_event(
            f"Career progression concluded: {exit_.value}",
            phase=self.state.current_phase.tag.value,
            term_number=self.state.current_term,
            total_terms=self.state.total_terms,
            careers=len(self.ledger.career_records)
        )

    def _pick_assignment(self, career: Career, assignment_id: str | None) -> Assignment | None:
        if assignment_id is None:
            return career.default_assignment

        assignment = career.assignment(assignment_id)
        if assignment is None:
            logger.warning(
                f"Assignment '{assignment_id}' not found in {career.name}; using default assignment"
            )
            return career.default_assignment
        return assignment

    def _require_new_assignment(self, assignment_id: str | None) -> Assignment:
        career = self.state.active_career
        if assignment_id is None:
            raise InvalidCareerChoice("change_assignment requires an assignment_id")

        assignment = career.assignment(assignment_id)
        if assignment is None:
            raise InvalidCareerChoice(
                f"Assignment '{assignment_id}' not found in {career.name}. "
                f"Available: {[a.id for a in career.assignments]}"
            )
        if self.state.current_assignment and assignment.id == self.state.current_assignment.id:
            raise InvalidCareerChoice(f"Already serving in {assignment.name}")
        return assignment

    def _skill_table(self, table: str) -> list[str]:
        career = self.state.active_career
        if table == "assignment":
            assignment = self.state.current_assignment
            return list(assignment.skill_table) if assignment else []
        if table == "officer":
            return list(career.skill_tables.officer or self.settings.default_officer_skills)
        return list(getattr(career.skill_tables, table))

    def _train_skill(self, skill_name: str, source: str) -> Skill:
        """Gain a skill at level 1, or raise a known skill by one level"""
        for index, skill in enumerate(self.skills):
            if skill.name.strip().lower() == skill_name.strip().lower():
                trained = skill.model_copy(update={"level": skill.level + 1})
                self.skills[index] = trained
                self.state.skills_gained.append(trained)
                return trained

        trained = Skill(name=skill_name, level=1, source=source)
        self.skills.append(trained)
        self.state.skills_gained.append(trained)
        return trained

    def _grant_rank_bonus(self, skill_name: str, level: int, career: Career) -> str | None:
        """Raise a skill to the rank bonus level; None when it is already that high"""
        source = f"{career.name} rank {self.state.rank}"
        for index, skill in enumerate(self.skills):
            if skill.name.strip().lower() == skill_name.strip().lower():
                if skill.level >= level:
                    return None
                self.skills[index] = skill.model_copy(update={"level": level})
                self.state.skills_gained.append(self.skills[index])
                return f"{skill.name} {level}"

        bonus = Skill(name=skill_name, level=level, source=source)
        self.skills.append(bonus)
        self.state.skills_gained.append(bonus)
        return f"{bonus.name} {bonus.level}"

    def _career_label(self) -> str:
        career = self.state.active_career
        assignment = self.state.current_assignment
        return f"{career.name} ({assignment.name})" if assignment else career.name

    def _add_event(self, message: str) -> None:
        self.state.events.append(message)

    def _record(
        self,
        tag: TermPhaseTag,
        result: PhaseResult,
        message: str,
        level: str = "INFO"
    ) -> None:
        self.state.phase(tag).result = result
        self._add_event(message)
        log_phase_event(
            message,
            phase=tag.value,
            term_number=self.state.current_term,
            career_id=self.state.active_career.id if self.state.active_career else None,
            level=level
        )

    def _ensure_running(self) -> None:
        if self._exit is not None:
            raise EngineConcluded(
                f"Career progression already concluded ({self._exit.value})"
            )

    def _require_phase(self, tag: TermPhaseTag) -> None:
        """Fail fast when a phase operation is invoked out of order"""
        self._ensure_running()
        current = self.state.current_phase
        if current is None or current.tag != tag:
            current_name = current.tag.value if current else "none"
            logger.error(f"Out-of-order phase '{tag.value}' (current: {current_name})")
            raise InvalidPhaseTransition(
                f"Cannot resolve '{tag.value}' while the current phase is '{current_name}'"
            )
        if tag != TermPhaseTag.QUALIFICATION and self.state.active_career is None:
            raise InvalidPhaseTransition(f"'{tag.value}' requires an active career")
