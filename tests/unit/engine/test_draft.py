# ABOUTME: Unit tests for the draft resolver and the Drifter fallback career.
# ABOUTME: Verifies the 1d6 career mapping, default assignments and the never-fails guarantee.

import pytest

from traveller_chargen.config.settings import DEFAULT_DRAFT_CAREERS
from traveller_chargen.engine.draft import DraftResolver, build_drifter_career

from tests.conftest import ScriptedDice


class TestBuildDrifterCareer:
    def test_drifter_has_no_assignments_or_tables(self):
        drifter = build_drifter_career()

        assert drifter.id == "drifter"
        assert drifter.name == "Drifter"
        assert drifter.assignments == []
        assert drifter.skill_tables.service == []

    def test_custom_identity(self):
        drifter = build_drifter_career("wanderer", "Wanderer")
        assert (drifter.id, drifter.name) == ("wanderer", "Wanderer")


class TestDraftResolver:
    """Test forced enlistment"""

    def test_roll_maps_to_career(self, catalog):
        resolver = DraftResolver(catalog, DEFAULT_DRAFT_CAREERS)

        result = resolver.resolve(ScriptedDice(3))

        assert result.roll == 3
        assert result.career.id == "marines"
        assert result.assignment.id == "marines_a"
        assert not result.drifter

    def test_roll_one_is_navy(self, catalog):
        result = DraftResolver(catalog, DEFAULT_DRAFT_CAREERS).resolve(ScriptedDice(1))
        assert result.career.id == "navy"

    def test_missing_career_becomes_drifter(self, catalog):
        # "army" (roll 2) isn't in the test catalog
        result = DraftResolver(catalog, DEFAULT_DRAFT_CAREERS).resolve(ScriptedDice(2))

        assert result.drifter
        assert result.career.id == "drifter"
        assert result.assignment is None

    def test_short_order_falls_back_to_drifter(self, catalog):
        result = DraftResolver(catalog, ["navy"]).resolve(ScriptedDice(4))
        assert result.drifter

    def test_custom_drifter(self, catalog):
        resolver = DraftResolver(
            catalog,
            DEFAULT_DRAFT_CAREERS,
            drifter=build_drifter_career("wanderer", "Wanderer")
        )
        assert resolver.resolve(ScriptedDice(6)).career.id == "wanderer"

    def test_rolls_one_die(self, catalog):
        dice = ScriptedDice(5)
        DraftResolver(catalog, DEFAULT_DRAFT_CAREERS).resolve(dice)
        assert dice.calls == [(1, 6)]

    def test_draft_always_yields_a_career(self, catalog):
        resolver = DraftResolver(catalog, DEFAULT_DRAFT_CAREERS)
        for roll in range(1, 7):
            assert resolver.resolve(ScriptedDice(roll)).career is not None

    def test_empty_order_rejected(self, catalog):
        with pytest.raises(ValueError, match="at least one"):
            DraftResolver(catalog, [])
