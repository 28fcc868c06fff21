# ABOUTME: Pydantic models for externally configured career definitions (immutable catalog entries).
# ABOUTME: Covers check formulas with conditional DM tables, assignments, skill tables and ranks.

import re
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from traveller_chargen.models.characteristics import Characteristic

# Threshold keys in DM tables: "8+" means value >= 8, "5-" means value <= 5
THRESHOLD_PATTERN = re.compile(r'^\s*(\d+)\s*([+-]?)\s*$')

SkillTableName = Literal["personal", "service", "assignment", "advanced", "officer"]
SKILL_TABLE_NAMES: tuple[str, ...] = ("personal", "service", "assignment", "advanced", "officer")


class CareerCheck(BaseModel):
    """
    A qualification, survival or advancement formula.

    The roll is 2d6 plus every DM whose characteristic condition is met,
    compared against the target.

    Example:
        CareerCheck(
            characteristic="INT",
            target=6,
            dm={"EDU": {"8+": 1}, "SOC": {"5-": -1}}
        )
    """

    characteristic: Characteristic = Field(
        description="Governing characteristic shown to the player"
    )
    target: int = Field(
        ge=2,
        le=12,
        description="Total needed on 2d6 + DM"
    )
    dm: dict[Characteristic, dict[str, int]] = Field(
        default_factory=dict,
        description="Conditional DMs keyed by characteristic, then threshold ('8+')"
    )

    model_config = {"frozen": True}

    @field_validator('dm')
    @classmethod
    def validate_thresholds(cls, v: dict[Characteristic, dict[str, int]]) -> dict[Characteristic, dict[str, int]]:
        """Reject threshold keys the rule evaluator cannot read"""
        for characteristic, conditions in v.items():
            for condition in conditions:
                if not THRESHOLD_PATTERN.match(condition):
                    raise ValueError(
                        f"Invalid DM threshold '{condition}' for {characteristic.value}. "
                        f"Expected format: '8+' or '5-'"
                    )
        return v

    def describe(self) -> str:
        return f"{self.characteristic.value} {self.target}+"


class Assignment(BaseModel):
    """A specialisation within a career, with its own 1d6 skill table"""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    skill_table: list[str] = Field(
        default_factory=list,
        alias="skillTable",
        description="Six entries indexed by a 1d6 roll"
    )

    # Accepts both snake_case and the camelCase keys of the JSON catalog
    model_config = {"frozen": True, "populate_by_name": True}


class RankBonus(BaseModel):
    """Skill granted on reaching a rank"""

    skill: str | None = None
    level: int = Field(default=1, ge=0)

    model_config = {"frozen": True}


class CareerRank(BaseModel):
    """One rung of a career's rank ladder"""

    id: int = Field(ge=0, description="Rank number (0 = entry rank)")
    name: str = Field(min_length=1)
    title: str = Field(min_length=1)
    bonus: RankBonus | None = None

    model_config = {"frozen": True}


class SkillTables(BaseModel):
    """Career-wide skill tables; assignment tables live on each Assignment"""

    personal: list[str] = Field(default_factory=list)
    service: list[str] = Field(default_factory=list)
    advanced: list[str] = Field(default_factory=list)
    officer: list[str] = Field(
        default_factory=list,
        description="Commissioned-only table; empty uses the configured default"
    )

    model_config = {"frozen": True}


class Career(BaseModel):
    """
    A career definition from the catalog.

    Careers are immutable and externally sourced; the engine never writes
    to them. Assignment order matters: the first assignment is the default
    one granted on qualification or draft.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    qualification: CareerCheck
    survival: CareerCheck
    advancement: CareerCheck
    assignments: list[Assignment] = Field(default_factory=list)
    skill_tables: SkillTables = Field(default_factory=SkillTables, alias="skillTables")
    ranks: list[CareerRank] = Field(default_factory=list)

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def default_assignment(self) -> Assignment | None:
        """First configured assignment, if any"""
        return self.assignments[0] if self.assignments else None

    def assignment(self, assignment_id: str) -> Assignment | None:
        """Look up an assignment by id"""
        for assignment in self.assignments:
            if assignment.id == assignment_id:
                return assignment
        return None

    def rank(self, rank_number: int) -> CareerRank | None:
        for rank in self.ranks:
            if rank.id == rank_number:
                return rank
        return None

    def rank_title(self, rank_number: int) -> str | None:
        """Title for a rank number, or None when the ladder doesn't define it"""
        rank = self.rank(rank_number)
        return rank.title if rank else None
