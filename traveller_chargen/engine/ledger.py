# ABOUTME: Term ledger folding concluded term scratch state into immutable history records.
# ABOUTME: The only place where CareerTermState becomes CareerTerm / CareerRecord entries.

from loguru import logger

from traveller_chargen.models.term_state import (
    AdvancementResult,
    CareerRecord,
    CareerTerm,
    CareerTermState,
    TermPhaseTag,
)


class TermLedger:
    """
    Builds the permanent records of a career.

    conclude_term() snapshots the current term into a CareerTerm and
    appends it to state.terms; close_career() turns the active career
    stint into a CareerRecord for the character sheet. Apart from the
    append-only terms list and the stint counter, the state is only read.
    """

    def __init__(self, career_records: list[CareerRecord] | None = None):
        self.career_records: list[CareerRecord] = list(career_records or [])

    def conclude_term(self, state: CareerTermState, survived: bool) -> CareerTerm:
        """
        Snapshot the current term and append it to the term history.

        Raises:
            ValueError: If no career is active (a term needs a career)
        """
        if state.active_career is None:
            raise ValueError("Cannot conclude a term without an active career")

        advancement = state.phase(TermPhaseTag.ADVANCEMENT).result
        advanced = isinstance(advancement, AdvancementResult) and advancement.passed

        term = CareerTerm(
            term_number=state.current_term,
            career=state.active_career,
            assignment=state.current_assignment,
            age=state.age,
            rank=state.rank,
            events=tuple(state.events),
            skills_gained=tuple(state.skills_gained),
            survived=survived,
            advanced=advanced,
            commissioned=state.commissioned,
            must_continue=state.must_continue
        )
        state.terms.append(term)
        state.terms_in_career += 1

        logger.bind(
            term=term.term_number,
            career_id=term.career.id,
            survived=survived,
            advanced=advanced,
            rank=term.rank
        ).info(f"Term {term.term_number} concluded in {term.career.name}")

        return term

    def close_career(self, state: CareerTermState) -> CareerRecord:
        """
        Merge the active career stint into the permanent career records.

        Raises:
            ValueError: If no career is active
        """
        if state.active_career is None:
            raise ValueError("Cannot close a career that was never joined")

        record = CareerRecord(
            career_id=state.active_career.id,
            assignment_id=state.current_assignment.id if state.current_assignment else None,
            rank=state.rank,
            terms=state.terms_in_career,
            commissioned=state.commissioned
        )
        self.career_records.append(record)

        logger.bind(career_id=record.career_id, terms=record.terms, rank=record.rank).info(
            "Career record merged into character history"
        )
        return record
