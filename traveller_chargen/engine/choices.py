# ABOUTME: End-of-term decision logic computing the CareerChoice list from term state.
# ABOUTME: A natural-12 advancement (must_continue) restricts the offer to "continue" only.

from traveller_chargen.models.term_state import CareerChoice, CareerTermState, ChoiceType

MUST_CONTINUE_REASON = "Natural 12 on advancement: you must serve another term"


def compute_career_choices(
    state: CareerTermState,
    university_max_term: int = 3
) -> list[CareerChoice]:
    """
    Build every decision option with its availability.

    Unavailable options are kept in the list with a reason so a UI can
    show them greyed out; use available_choices() for the offer itself.
    """
    career = state.active_career
    career_name = career.name if career else "your career"
    locked = state.must_continue

    choices: list[CareerChoice] = []

    continue_reason = None if career else "No active career"
    choices.append(CareerChoice(
        type=ChoiceType.CONTINUE,
        label=f"Continue in {career_name}",
        description="Serve another term in your current career",
        available=continue_reason is None,
        reason=continue_reason
    ))

    if locked:
        assignment_reason = MUST_CONTINUE_REASON
    elif career is None or len(career.assignments) < 2:
        assignment_reason = "No other assignments in this career"
    else:
        assignment_reason = None
    choices.append(CareerChoice(
        type=ChoiceType.CHANGE_ASSIGNMENT,
        label="Change Assignment",
        description=f"Serve the next term in a different {career_name} assignment",
        available=assignment_reason is None,
        reason=assignment_reason
    ))

    if locked:
        university_reason = MUST_CONTINUE_REASON
    elif not state.can_return_to_university:
        university_reason = "University already completed"
    elif state.current_term > university_max_term:
        university_reason = f"Only possible during terms 1-{university_max_term}"
    else:
        university_reason = None
    choices.append(CareerChoice(
        type=ChoiceType.UNIVERSITY,
        label="Return to University",
        description="Leave your career and attempt university education",
        available=university_reason is None,
        reason=university_reason
    ))

    choices.append(CareerChoice(
        type=ChoiceType.CHANGE_CAREER,
        label="Change Career",
        description="Leave your career and attempt to qualify for another",
        available=not locked,
        reason=MUST_CONTINUE_REASON if locked else None
    ))

    choices.append(CareerChoice(
        type=ChoiceType.END_CAREER,
        label="End Career",
        description="Leave your career and proceed to mustering out",
        available=not locked,
        reason=MUST_CONTINUE_REASON if locked else None
    ))

    return choices


def available_choices(
    state: CareerTermState,
    university_max_term: int = 3
) -> list[CareerChoice]:
    """Only the options the character may pick right now"""
    return [
        choice
        for choice in compute_career_choices(state, university_max_term)
        if choice.available
    ]
