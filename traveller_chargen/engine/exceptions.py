# ABOUTME: Exception definitions for career engine errors.
# ABOUTME: Defines error types raised by CareerTermEngine, CareerCatalog and the decision logic.


class InvalidPhaseTransition(Exception):
    """Raised when a phase operation is invoked out of order"""

    pass


class PhaseNotResolved(Exception):
    """Raised when advancing past a phase that has no result yet"""

    pass


class EngineConcluded(Exception):
    """Raised when an operation is attempted after career progression concluded"""

    pass


class EngineNotConcluded(Exception):
    """Raised when the result is read before career progression concluded"""

    pass


class InvalidCareerChoice(Exception):
    """Raised when a decision choice is unknown or currently unavailable"""

    pass


class InvalidSkillTable(ValueError):
    """Raised when skill training names a table the character can't roll on"""

    pass


class CareerNotFound(KeyError):
    """Raised when a career id doesn't exist in the catalog"""

    pass


class CatalogLoadError(Exception):
    """Raised when a career catalog document can't be read or validated"""

    pass
