# ABOUTME: Unit tests for structured logging utilities
# ABOUTME: Validates loguru configuration, phase event helpers, and context attachment

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
from loguru import logger

from traveller_chargen.utils.logging import (
    CAREER_LOG_FORMAT,
    get_logger,
    log_phase_event,
    log_phase_transition,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_logger():
    """Reset logger state before each test"""
    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def temp_log_dir():
    """Create a temporary directory for log files"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def captured():
    """Collect emitted records (message, level, extra)"""
    records = []
    handler_id = logger.add(
        lambda message: records.append(message.record),
        level="DEBUG",
        format="{message}"
    )
    yield records
    logger.remove(handler_id)


class TestSetupLogging:
    """Test suite for setup_logging function"""

    def test_valid_log_levels(self):
        """Test that all valid log levels are accepted"""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logger.remove()
            setup_logging(log_level=level, console_output=True, file_output=False)

    def test_log_level_case_insensitive(self):
        for level in ["debug", "Debug", "DeBuG"]:
            logger.remove()
            setup_logging(log_level=level, console_output=True, file_output=False)

    def test_invalid_log_level_raises_error(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logging(log_level="INVALID")

        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logging(log_level="TRACE")  # Valid in loguru but not in our API

    def test_console_output_uses_career_format(self):
        with patch.object(logger, 'add') as mock_add:
            setup_logging(log_level="INFO", console_output=True, file_output=False)

            assert mock_add.call_count == 1
            assert mock_add.call_args.kwargs["format"] == CAREER_LOG_FORMAT
            assert mock_add.call_args.kwargs["level"] == "INFO"

    def test_console_level_applies_only_to_stderr(self, temp_log_dir):
        with patch.object(logger, 'add') as mock_add:
            setup_logging(
                log_level="INFO",
                console_level="warning",
                log_dir=temp_log_dir,
                console_output=True,
                file_output=True
            )

            console_call, file_call = mock_add.call_args_list
            assert console_call.kwargs["level"] == "WARNING"
            assert file_call.kwargs["level"] == "INFO"

    def test_invalid_console_level_raises_error(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logging(log_level="INFO", console_level="LOUD")

    def test_info_events_stay_off_warning_console(self, capsys):
        setup_logging(log_level="INFO", console_level="WARNING")

        log_phase_event("Survived term", phase="survival", term_number=1)
        log_phase_event("Mishap", phase="survival", term_number=1, level="WARNING")

        err = capsys.readouterr().err
        assert "Survived term" not in err
        assert "Mishap" in err

    def test_no_handlers_when_all_output_disabled(self):
        with patch.object(logger, 'add') as mock_add:
            setup_logging(console_output=False, file_output=False)
            assert not mock_add.called

    def test_file_output_creates_log_directory(self, temp_log_dir):
        log_dir = temp_log_dir / "nested"
        setup_logging(
            log_level="DEBUG",
            log_dir=log_dir,
            console_output=False,
            file_output=True
        )
        logger.info("written to file")
        logger.remove()

        assert log_dir.exists()
        log_files = list(log_dir.glob("chargen_*.log"))
        assert len(log_files) == 1
        assert "written to file" in log_files[0].read_text()


class TestGetLogger:
    def test_returns_loguru_logger(self):
        assert get_logger() is logger


class TestLogPhaseEvent:
    """Test the phase event helper"""

    def test_binds_standard_context(self, captured):
        log_phase_event(
            "Survived term",
            phase="survival",
            term_number=2,
            career_id="scout",
            roll=8
        )

        record = captured[-1]
        assert record["message"] == "Survived term"
        assert record["level"].name == "INFO"
        assert record["extra"]["phase"] == "survival"
        assert record["extra"]["term"] == 2
        assert record["extra"]["career_id"] == "scout"
        assert record["extra"]["roll"] == 8

    def test_career_id_omitted_when_none(self, captured):
        log_phase_event("Qualification failed", phase="qualification", term_number=1)

        assert "career_id" not in captured[-1]["extra"]

    def test_custom_level(self, captured):
        log_phase_event("Mishap", phase="survival", term_number=1, level="warning")

        assert captured[-1]["level"].name == "WARNING"

    def test_unknown_level_falls_back_to_info(self, captured):
        log_phase_event("Odd level", phase="aging", term_number=4, level="VERBOSE")

        assert captured[-1]["level"].name == "INFO"


class TestLogPhaseTransition:
    def test_logs_debug_transition(self, captured):
        log_phase_transition("survival", "advancement", term_number=3)

        record = captured[-1]
        assert record["level"].name == "DEBUG"
        assert record["extra"]["from_phase"] == "survival"
        assert record["extra"]["to_phase"] == "advancement"
        assert record["extra"]["term"] == 3

    def test_missing_target_is_end_of_term(self, captured):
        log_phase_transition("decision", None, term_number=1)

        assert captured[-1]["extra"]["to_phase"] == "end_of_term"
