# ABOUTME: Unit tests for environment-driven rule settings.
# ABOUTME: Covers defaults, CHARGEN_* overrides, draft validation and the lazy singleton.

import pytest
from pydantic import ValidationError

from traveller_chargen.config.settings import (
    DEFAULT_DRAFT_CAREERS,
    Settings,
    get_settings,
    reset_settings,
)


@pytest.fixture(autouse=True)
def clean_singleton():
    reset_settings()
    yield
    reset_settings()


class TestSettingsDefaults:
    def test_rule_constants(self, settings):
        assert settings.starting_age == 18
        assert settings.term_length_years == 4
        assert settings.aging_start_term == 4
        assert settings.university_max_term == 3
        assert settings.careers_path is None

    def test_logging_defaults(self, settings):
        assert settings.log_level == "INFO"
        assert settings.console_log_level == "WARNING"
        assert settings.log_dir is None

    def test_draft_defaults(self, settings):
        assert settings.draft_careers == DEFAULT_DRAFT_CAREERS
        assert settings.drifter_career_id == "drifter"
        assert settings.drifter_career_name == "Drifter"

    def test_default_officer_table_has_six_entries(self, settings):
        assert len(settings.default_officer_skills) == 6


class TestSettingsEnvironment:
    """Test CHARGEN_* overrides"""

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CHARGEN_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("CHARGEN_AGING_START_TERM", "5")
        monkeypatch.setenv("CHARGEN_CAREERS_PATH", "/tmp/careers.json")

        settings = Settings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.aging_start_term == 5
        assert str(settings.careers_path) == "/tmp/careers.json"

    def test_draft_careers_from_json_env(self, monkeypatch):
        monkeypatch.setenv(
            "CHARGEN_DRAFT_CAREERS",
            '["army", "army", "navy", "navy", "scout", "scout"]'
        )
        settings = Settings(_env_file=None)
        assert settings.draft_careers[0] == "army"

    def test_draft_needs_six_careers(self):
        with pytest.raises(ValidationError, match="exactly 6"):
            Settings(_env_file=None, draft_careers=["navy", "army"])

    def test_term_length_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, term_length_years=0)


class TestGetSettings:
    def test_singleton(self):
        assert get_settings() is get_settings()

    def test_reset_rereads_environment(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("CHARGEN_STARTING_AGE", "22")
        reset_settings()

        second = get_settings()
        assert second is not first
        assert second.starting_age == 22
