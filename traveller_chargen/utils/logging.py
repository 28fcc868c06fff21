# ABOUTME: Structured logging configuration using loguru for career-term simulations.
# ABOUTME: Supports context fields (phase, term, career_id) and file/console output.

import sys
from pathlib import Path
from typing import Any

from loguru import logger


# Term and phase columns come from bound context; records logged outside a
# phase fall back to the configured defaults
CAREER_LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>term {extra[term]}</magenta> <cyan>{extra[phase]: <14}</cyan> | "
    "<level>{message}</level>"
)

DEFAULT_CONTEXT = {"term": "-", "phase": "-"}

VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def setup_logging(
    log_level: str = "INFO",
    log_dir: str | Path | None = None,
    console_output: bool = True,
    file_output: bool = False,
    format_string: str | None = None,
    console_level: str | None = None,
    rotation: str = "10 MB",
    retention: str = "14 days",
    compression: str = "zip"
) -> None:
    """
    Configure loguru sinks for a career session.

    Console records show the term number and phase of every bound record;
    the optional file sink writes the same records with rotation.

    Usage:
        >>> setup_logging(log_level="DEBUG", log_dir="logs", file_output=True)
        >>> logger.bind(phase="survival", term=3).info("Survived term")

    Args:
        log_level: Minimum level, one of DEBUG, INFO, WARNING, ERROR, CRITICAL
        log_dir: Directory for chargen_*.log files (default: "logs")
        console_output: Log to stderr
        file_output: Log to a rotating file
        format_string: Override for CAREER_LOG_FORMAT
        console_level: Separate minimum for the stderr sink (default: log_level)
        rotation: Size or age at which the log file rotates
        retention: How long rotated files are kept
        compression: Archive format for rotated files

    Raises:
        ValueError: If log_level is invalid
    """
    level = _validate_level(log_level)
    stderr_level = _validate_level(console_level) if console_level else level

    logger.remove()
    logger.configure(extra=DEFAULT_CONTEXT)
    fmt = format_string or CAREER_LOG_FORMAT

    if console_output:
        logger.add(sys.stderr, format=fmt, level=stderr_level, colorize=True, diagnose=False)

    if file_output:
        target_dir = Path(log_dir) if log_dir is not None else Path("logs")
        target_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(target_dir / "chargen_{time:YYYY-MM-DD}.log"),
            format=fmt,
            level=level,
            rotation=rotation,
            retention=retention,
            compression=compression,
            diagnose=False,
        )

    logger.debug(f"Logging configured at {level} (console={console_output}, file={file_output})")


def _validate_level(log_level: str) -> str:
    level = log_level.upper()
    if level not in VALID_LEVELS:
        raise ValueError(
            f"Invalid log level: '{level}'. "
            f"Must be one of: {', '.join(sorted(VALID_LEVELS))}"
        )
    return level


def get_logger() -> Any:
    """The shared loguru logger; bind term/phase context before logging"""
    return logger


def log_phase_event(
    message: str,
    phase: str,
    term_number: int,
    career_id: str | None = None,
    level: str = "INFO",
    **extra_context: Any
) -> None:
    """
    Log a resolved phase with the standard career context fields.

    Usage:
        >>> log_phase_event(
        ...     "Failed survival with a natural 2",
        ...     phase="survival",
        ...     term_number=2,
        ...     career_id="scout",
        ...     level="WARNING"
        ... )

    Unknown levels are logged at INFO.
    """
    context: dict[str, Any] = {"phase": phase, "term": term_number, **extra_context}
    if career_id:
        context["career_id"] = career_id

    level = level.upper()
    logger.bind(**context).log(level if level in VALID_LEVELS else "INFO", message)


def log_phase_transition(
    from_phase: str,
    to_phase: str | None,
    term_number: int
) -> None:
    """Debug-level record of a cursor move (None means the term ended)"""
    target = to_phase or "end_of_term"
    logger.bind(phase=from_phase, from_phase=from_phase, to_phase=target, term=term_number).debug(
        f"Phase transition: {from_phase} -> {target}"
    )
