"""Configuration module for the Traveller career-term engine"""

from .settings import (
    DEFAULT_DRAFT_CAREERS,
    DEFAULT_OFFICER_SKILLS,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "DEFAULT_DRAFT_CAREERS",
    "DEFAULT_OFFICER_SKILLS",
]
