# ABOUTME: Unit tests for the career catalog and its JSON loader.
# ABOUTME: Covers lookups, ordering, duplicate ids, document shapes and the bundled catalog.

import json

import pytest

from traveller_chargen.engine.catalog import (
    BUNDLED_CATALOG_PATH,
    CareerCatalog,
    load_catalog,
)
from traveller_chargen.engine.exceptions import CareerNotFound, CatalogLoadError

from tests.conftest import make_career

SCOUT_DOC = {
    "id": "scout",
    "name": "Scout",
    "qualification": {"characteristic": "INT", "target": 5},
    "survival": {"characteristic": "END", "target": 7},
    "advancement": {"characteristic": "INT", "target": 9},
}


class TestCareerCatalog:
    """Test catalog lookups"""

    def test_configuration_order(self, catalog):
        assert catalog.ids == ["navy", "marines", "scout"]
        assert [career.id for career in catalog] == ["navy", "marines", "scout"]
        assert len(catalog) == 3

    def test_contains(self, catalog):
        assert "navy" in catalog
        assert "army" not in catalog

    def test_find_and_get(self, catalog):
        assert catalog.find("scout").name == "Scout"
        assert catalog.find("army") is None
        assert catalog.get("navy").id == "navy"

    def test_get_missing_raises(self, catalog):
        with pytest.raises(CareerNotFound, match="army"):
            catalog.get("army")

    def test_career_not_found_is_key_error(self, catalog):
        with pytest.raises(KeyError):
            catalog.get("army")

    def test_duplicate_ids_rejected(self):
        with pytest.raises(CatalogLoadError, match="Duplicate"):
            CareerCatalog([make_career("navy"), make_career("navy")])


class TestCatalogFromData:
    def test_list_document(self):
        catalog = CareerCatalog.from_data([SCOUT_DOC])
        assert catalog.ids == ["scout"]

    def test_object_document(self):
        catalog = CareerCatalog.from_data({"careers": [SCOUT_DOC]})
        assert catalog.ids == ["scout"]

    def test_wrong_shape(self):
        with pytest.raises(CatalogLoadError, match="must be a list"):
            CareerCatalog.from_data({"jobs": []})

    def test_invalid_career(self):
        with pytest.raises(CatalogLoadError, match="Invalid career catalog"):
            CareerCatalog.from_data([{"id": "scout"}])


class TestCatalogFromJson:
    """Test file loading"""

    def test_round_trip_file(self, tmp_path):
        path = tmp_path / "careers.json"
        path.write_text(json.dumps({"careers": [SCOUT_DOC]}))

        assert CareerCatalog.from_json(path).ids == ["scout"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadError, match="not found"):
            CareerCatalog.from_json(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "careers.json"
        path.write_text("{not json")

        with pytest.raises(CatalogLoadError, match="Invalid JSON"):
            CareerCatalog.from_json(path)


class TestBundledCatalog:
    def test_bundled_catalog_loads(self):
        catalog = load_catalog()

        assert BUNDLED_CATALOG_PATH.exists()
        for career_id in ("agent", "army", "marines", "merchant", "navy", "scout"):
            assert career_id in catalog

    def test_bundled_careers_have_six_entry_tables(self):
        for career in load_catalog():
            assert len(career.skill_tables.service) == 6
            for assignment in career.assignments:
                assert len(assignment.skill_table) == 6
