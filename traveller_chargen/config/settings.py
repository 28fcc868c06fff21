# ABOUTME: Configuration settings for the Traveller career-term engine using Pydantic Settings.
# ABOUTME: Loads CHARGEN_* environment variables (and .env) into type-safe rule constants.

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DRAFT_CAREERS = ["navy", "army", "marines", "merchant", "scout", "agent"]

DEFAULT_OFFICER_SKILLS = ["Leadership", "Tactics", "Admin", "Advocate", "Electronics", "Engineer"]


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    # Application Settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    console_log_level: str = Field(
        default="WARNING",
        description="Minimum level echoed to stderr by the interactive CLI"
    )
    log_dir: Path | None = Field(
        default=None,
        description="Directory for rotating chargen_*.log files (unset: no file log)"
    )
    careers_path: Path | None = Field(
        default=None,
        description="JSON career catalog (default: bundled sample catalog)"
    )

    # Term Rules
    starting_age: int = Field(
        default=18,
        ge=0,
        description="Age at the start of the first career term"
    )
    term_length_years: int = Field(
        default=4,
        ge=1,
        description="Years added to age per concluded term"
    )
    aging_start_term: int = Field(
        default=4,
        ge=1,
        description="First term in which the aging check applies"
    )
    university_max_term: int = Field(
        default=3,
        ge=0,
        description="Last term in which returning to university is offered"
    )

    # Draft Configuration
    draft_careers: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DRAFT_CAREERS),
        description="Fallback careers indexed by a 1d6 draft roll"
    )
    drifter_career_id: str = Field(
        default="drifter",
        description="Id of the catalog-independent fallback occupation"
    )
    drifter_career_name: str = Field(
        default="Drifter",
        description="Display name of the fallback occupation"
    )

    # Skill Tables
    default_officer_skills: list[str] = Field(
        default_factory=lambda: list(DEFAULT_OFFICER_SKILLS),
        description="Officer table for careers that don't define one"
    )

    model_config = SettingsConfigDict(
        env_prefix="CHARGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator('draft_careers')
    @classmethod
    def validate_draft_careers(cls, v: list[str]) -> list[str]:
        """The draft is a 1d6 lookup, so exactly six entries are needed"""
        if len(v) != 6:
            raise ValueError(
                f"draft_careers must list exactly 6 career ids, got {len(v)}"
            )
        return v


# Singleton settings instance - lazy initialization to allow import without .env
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the singleton settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment"""
    global _settings
    _settings = None
