# ABOUTME: Interactive command-line driver that walks a character through career terms.
# ABOUTME: Prompt parsing, output formatting and the phase loop around CareerTermEngine.

import argparse
import sys
from collections.abc import Callable, Sequence

from loguru import logger

from traveller_chargen.config.settings import get_settings
from traveller_chargen.engine.catalog import CareerCatalog, load_catalog
from traveller_chargen.engine.exceptions import CatalogLoadError, InvalidCareerChoice
from traveller_chargen.engine.term_machine import CareerTermEngine
from traveller_chargen.models.career import Career
from traveller_chargen.models.character import CareerProgressResult, Character
from traveller_chargen.models.characteristics import Characteristic, CharacteristicSet
from traveller_chargen.models.term_state import CareerChoice, ChoiceType, TermPhaseTag
from traveller_chargen.utils.dice import (
    DiceFunction,
    characteristic_dm,
    difficulty_name,
    format_dm,
    roll_dice,
    seeded_dice,
)
from traveller_chargen.utils.logging import setup_logging

# ============================================================================
# Custom Exceptions
# ============================================================================


class InvalidSelectionError(Exception):
    """Raised when menu input can't be mapped to an option"""
    pass


# ============================================================================
# Input Parsing
# ============================================================================


def parse_stats(text: str) -> CharacteristicSet:
    """
    Parse "7,8,8,9,7,6" (STR, DEX, END, INT, EDU, SOC) into a CharacteristicSet.

    Raises:
        ValueError: If there aren't exactly six integers
    """
    parts = [part.strip() for part in text.split(",") if part.strip()]
    if len(parts) != 6:
        raise ValueError(
            f"Expected 6 comma-separated values (STR,DEX,END,INT,EDU,SOC), got {len(parts)}"
        )

    try:
        values = [int(part) for part in parts]
    except ValueError as e:
        raise ValueError(f"Characteristics must be integers: '{text}'") from e

    return CharacteristicSet(**dict(zip((c.value for c in Characteristic), values)))


def parse_menu_selection(user_input: str, option_count: int) -> int:
    """
    Map a 1-based menu number to a 0-based index.

    Raises:
        InvalidSelectionError: If input isn't a number in range
    """
    user_input = user_input.strip()
    if not user_input:
        raise InvalidSelectionError("Cannot parse empty selection")

    if not user_input.isdigit():
        raise InvalidSelectionError(f"'{user_input}' is not a number")

    number = int(user_input)
    if not 1 <= number <= option_count:
        raise InvalidSelectionError(f"Choose a number between 1 and {option_count}")

    return number - 1


# ============================================================================
# Output Formatting
# ============================================================================


class CareerCLIFormatter:
    """
    Formats engine state for display in the CLI.

    Handles:
    - Session header and characteristics
    - Term status lines
    - Career and decision menus
    - Event lists and the final summary
    """

    HEADER_BORDER = "═"
    PHASE_MARKER = "▶"
    EVENT_MARKER = "•"

    def format_header(self, character: Character) -> str:
        """Format header with the character's characteristics"""
        width = 60
        stats = "  ".join(
            f"{c.value} {character.characteristics.value(c)} "
            f"({format_dm(characteristic_dm(character.characteristics.value(c)))})"
            for c in Characteristic
        )
        lines = [
            "╔" + self.HEADER_BORDER * (width - 2) + "╗",
            "║" + "Traveller Career Terms".center(width - 2) + "║",
            "║" + f"Character: {character.name}".center(width - 2) + "║",
            "╚" + self.HEADER_BORDER * (width - 2) + "╝",
            stats,
            "",
        ]
        return "\n".join(lines)

    def format_status(self, engine: CareerTermEngine) -> str:
        state = engine.state
        career = state.active_career.name if state.active_career else "none"
        assignment = f" ({state.current_assignment.name})" if state.current_assignment else ""
        commissioned = " (Commissioned)" if state.commissioned else ""
        return (
            f"\nTerm {state.current_term} | Age {state.age} | Total terms {state.total_terms} | "
            f"Career: {career}{assignment} | Rank {state.rank}{commissioned}"
        )

    def format_phase(self, phase: TermPhaseTag, term_number: int) -> str:
        phase_name = phase.value.replace('_', ' ').title()
        return f"{self.PHASE_MARKER} [Term {term_number}] Phase: {phase_name}"

    def format_career_menu(self, careers: Sequence[Career]) -> str:
        lines = ["Choose a career to attempt:"]
        for number, career in enumerate(careers, start=1):
            check = career.qualification
            lines.append(
                f"  {number}. {career.name} - qualification {check.describe()} "
                f"({difficulty_name(check.target)})"
            )
        return "\n".join(lines)

    def format_options(self, title: str, options: Sequence[str]) -> str:
        lines = [title]
        for number, option in enumerate(options, start=1):
            lines.append(f"  {number}. {option}")
        return "\n".join(lines)

    def format_choices(self, choices: Sequence[CareerChoice]) -> str:
        lines = ["What next?"]
        for number, choice in enumerate(choices, start=1):
            lines.append(f"  {number}. {choice.label} - {choice.description}")
        return "\n".join(lines)

    def format_event(self, event: str) -> str:
        return f"  {self.EVENT_MARKER} {event}"

    def format_summary(self, result: CareerProgressResult) -> str:
        """Format the final career history"""
        character = result.character
        lines = [
            "",
            f"Career progression ended: {result.exit.value.replace('_', ' ')}",
            f"Age {character.age}, {result.total_terms} term(s) served",
            "Careers:",
        ]
        for record in character.careers:
            assignment = f"/{record.assignment_id}" if record.assignment_id else ""
            officer = ", commissioned" if record.commissioned else ""
            lines.append(
                f"  - {record.career_id}{assignment}: {record.terms} term(s), rank {record.rank}{officer}"
            )
        lines.append("Skills:")
        for skill in sorted(character.skills, key=lambda s: s.name):
            lines.append(f"  - {skill.name} {skill.level}")
        return "\n".join(lines)

    def format_error(self, message: str) -> str:
        return f"✗ Error: {message}"


# ============================================================================
# Interactive Loop
# ============================================================================


class CareerTermsCLI:
    """
    Interactive career-term session.

    Each prompt resolves exactly one phase operation on the engine, so the
    console session mirrors the engine's one-action-per-phase contract.
    Input and output functions are injectable for testing.
    """

    def __init__(
        self,
        engine: CareerTermEngine,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print
    ):
        self.engine = engine
        self.formatter = CareerCLIFormatter()
        self._input = input_func
        self._output = output_func

    def run(self) -> CareerProgressResult:
        """Drive the engine until career progression concludes"""
        self._output(self.formatter.format_header(self.engine.character))
        for event in self.engine.events:
            self._output(self.formatter.format_event(event))

        while not self.engine.concluded:
            phase = self.engine.current_phase
            shown = len(self.engine.events)
            term_number = self.engine.state.current_term
            if phase in (TermPhaseTag.QUALIFICATION, TermPhaseTag.BASIC_TRAINING):
                self._output(self.formatter.format_status(self.engine))
            self._output(self.formatter.format_phase(phase, term_number))

            self._resolve_phase(phase)

            # A decision starts a new term with a fresh event list
            if self.engine.state.current_term == term_number and not self.engine.concluded:
                new_events = self.engine.events[shown:]
            else:
                new_events = self._last_term_events()[shown:]
            for event in new_events:
                self._output(self.formatter.format_event(event))

        result = self.engine.result
        self._output(self.formatter.format_summary(result))
        return result

    def _resolve_phase(self, phase: TermPhaseTag) -> None:
        if phase == TermPhaseTag.QUALIFICATION:
            careers = self.engine.qualifiable_careers()
            index = self._prompt(self.formatter.format_career_menu(careers), len(careers))
            self.engine.qualify(careers[index])
        elif phase == TermPhaseTag.BASIC_TRAINING:
            self.engine.basic_training()
        elif phase == TermPhaseTag.SKILL_TRAINING:
            tables = self.engine.available_skill_tables()
            index = self._prompt(self.formatter.format_options("Roll on which skill table?", tables), len(tables))
            self.engine.skill_training(tables[index])
        elif phase == TermPhaseTag.SURVIVAL:
            self.engine.survival()
        elif phase == TermPhaseTag.ADVANCEMENT:
            self.engine.advancement()
        elif phase == TermPhaseTag.AGING:
            self.engine.aging()
        elif phase == TermPhaseTag.DECISION:
            self._resolve_decision()

    def _resolve_decision(self) -> None:
        choices = self.engine.available_choices()
        while True:
            index = self._prompt(self.formatter.format_choices(choices), len(choices))
            choice = choices[index]
            assignment_id = None
            if choice.type == ChoiceType.CHANGE_ASSIGNMENT:
                assignment_id = self._prompt_assignment()
            try:
                self.engine.decide(choice.type, assignment_id=assignment_id)
                return
            except InvalidCareerChoice as e:
                self._output(self.formatter.format_error(str(e)))

    def _prompt_assignment(self) -> str:
        state = self.engine.state
        others = [
            assignment for assignment in state.active_career.assignments
            if state.current_assignment is None or assignment.id != state.current_assignment.id
        ]
        index = self._prompt(
            self.formatter.format_options("Which assignment?", [a.name for a in others]),
            len(others)
        )
        return others[index].id

    def _prompt(self, menu: str, option_count: int) -> int:
        """Show a menu and re-prompt until a valid number is entered"""
        self._output(menu)
        while True:
            try:
                return parse_menu_selection(self._input("> "), option_count)
            except InvalidSelectionError as e:
                self._output(self.formatter.format_error(str(e)))

    def _last_term_events(self) -> list[str]:
        terms = self.engine.state.terms
        return list(terms[-1].events) if terms else []


# ============================================================================
# Entry Point
# ============================================================================


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="traveller-careers",
        description="Run a character through Traveller career terms"
    )
    parser.add_argument(
        "--stats",
        required=True,
        help="Characteristics as STR,DEX,END,INT,EDU,SOC (e.g. 7,8,8,9,7,6)"
    )
    parser.add_argument("--name", default="Traveller", help="Character name")
    parser.add_argument("--careers", default=None, help="Path to a JSON career catalog")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible dice")
    parser.add_argument(
        "--graduated",
        action="store_true",
        help="Character already graduated from university"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Console log level (overrides CHARGEN_CONSOLE_LOG_LEVEL)"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running the CLI standalone"""
    args = build_arg_parser().parse_args(argv)
    settings = get_settings()
    # Phase events are printed by the formatter; stderr only carries warnings and up
    setup_logging(
        log_level=settings.log_level,
        console_level=args.log_level or settings.console_log_level,
        log_dir=settings.log_dir,
        file_output=settings.log_dir is not None
    )

    try:
        characteristics = parse_stats(args.stats)
    except ValueError as e:
        print(f"Error: {e}")
        return 2

    try:
        catalog: CareerCatalog = load_catalog(args.careers or settings.careers_path)
    except CatalogLoadError as e:
        print(f"Error: {e}")
        return 1

    dice: DiceFunction = seeded_dice(args.seed) if args.seed is not None else roll_dice
    character = Character(
        name=args.name,
        characteristics=characteristics,
        age=settings.starting_age,
        graduated=args.graduated
    )
    engine = CareerTermEngine(character, catalog, dice=dice, settings=settings)

    try:
        CareerTermsCLI(engine).run()
    except (KeyboardInterrupt, EOFError):
        print("\nCareer session abandoned.")
        return 130
    except Exception as e:
        print(f"\nFatal error: {e}")
        logger.exception("Fatal error in career CLI")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
