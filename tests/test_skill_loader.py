# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Tests for the YAML skill catalog loader."""
from datetime import date

import pytest

from skilldex.config import DEFAULT_SKILLS_PATH
from skilldex.core.exceptions import SkillLoadError
from skilldex.core.skills.loader import SkillLoader

from conftest import CATALOG_RECORDS


def _record(skill_id, **overrides):
    record = {
        "id": skill_id,
        "name": f"{skill_id} skill",
        "description": "Does something useful",
        "category": "automation",
        "industry": "finance",
    }
    record.update(overrides)
    return record


# =============================================================================
# Successful loads
# =============================================================================

class TestLoadCatalog:
    def test_loads_every_record_in_file_name_order(self, catalog_path):
        catalog = SkillLoader(catalog_path).load()
        assert [s.id for s in catalog.skills] == [r["id"] for r in CATALOG_RECORDS]

    def test_index_document_is_kept(self, catalog_path):
        catalog = SkillLoader(catalog_path).load()
        assert catalog.index["name"] == "Test catalog"

    def test_sources_point_at_record_files(self, catalog_path):
        catalog = SkillLoader(catalog_path).load()
        assert catalog.sources["alpha"].endswith("01-alpha.yaml")

    def test_empty_index_becomes_empty_mapping(self, write_catalog, tmp_path):
        data_path = write_catalog([_record("one")])
        (data_path / "skill-index.yaml").write_text("", encoding="utf-8")
        assert SkillLoader(data_path).load().index == {}

    def test_yml_files_are_loaded_and_other_files_ignored(self, write_catalog):
        data_path = write_catalog([_record("one")])
        (data_path / "02-two.yml").write_text(
            "id: two\nname: Two\ndescription: Second\ncategory: quality\nindustry: retail\n",
            encoding="utf-8",
        )
        (data_path / "README.md").write_text("# not a skill", encoding="utf-8")

        catalog = SkillLoader(data_path).load()
        assert [s.id for s in catalog.skills] == ["one", "two"]

    def test_record_fields_are_parsed(self, catalog_path):
        alpha = SkillLoader(catalog_path).load().skills[0]
        assert alpha.triggers == ["invoice reconciliation", "manual matching"]
        assert alpha.evolution_level == 2
        assert alpha.complexity == "low"
        assert alpha.created_date == date(2024, 11, 4)

    def test_null_lists_become_empty(self, write_catalog):
        data_path = write_catalog([_record("one", tags=None, triggers=None)])
        skill = SkillLoader(data_path).load().skills[0]
        assert skill.tags == []
        assert skill.triggers == []

    def test_bundled_catalog_loads(self):
        catalog = SkillLoader(DEFAULT_SKILLS_PATH).load()
        assert len(catalog.skills) >= 5
        assert len({s.id for s in catalog.skills}) == len(catalog.skills)


# =============================================================================
# Failures
# =============================================================================

class TestLoadErrors:
    def test_missing_directory(self, tmp_path):
        with pytest.raises(SkillLoadError) as exc_info:
            SkillLoader(tmp_path / "nope").load()
        assert "does not exist" in exc_info.value.message
        assert exc_info.value.detail["source"].endswith("nope")

    def test_missing_index(self, tmp_path):
        (tmp_path / "one.yaml").write_text("id: one\n", encoding="utf-8")
        with pytest.raises(SkillLoadError, match="skill-index.yaml"):
            SkillLoader(tmp_path).load()

    def test_index_must_be_mapping(self, write_catalog):
        data_path = write_catalog([_record("one")], index=["not", "a", "mapping"])
        with pytest.raises(SkillLoadError, match="mapping"):
            SkillLoader(data_path).load()

    def test_invalid_yaml_is_wrapped(self, write_catalog):
        data_path = write_catalog([_record("one")])
        (data_path / "02-broken.yaml").write_text("id: [unclosed\n", encoding="utf-8")

        with pytest.raises(SkillLoadError, match="invalid YAML") as exc_info:
            SkillLoader(data_path).load()
        assert exc_info.value.__cause__ is not None

    def test_record_must_be_mapping(self, write_catalog):
        data_path = write_catalog([_record("one")])
        (data_path / "02-list.yaml").write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(SkillLoadError, match="must be a mapping"):
            SkillLoader(data_path).load()

    def test_record_without_id(self, write_catalog):
        record = _record("one")
        del record["id"]
        data_path = write_catalog([record])
        with pytest.raises(SkillLoadError, match="missing required 'id'"):
            SkillLoader(data_path).load()

    def test_invalid_record(self, write_catalog):
        data_path = write_catalog([_record("one", evolution_level=7)])
        with pytest.raises(SkillLoadError, match="invalid skill record 'one'") as exc_info:
            SkillLoader(data_path).load()
        assert exc_info.value.detail["errors"]

    def test_duplicate_ids(self, write_catalog):
        data_path = write_catalog([_record("one"), _record("one")])
        with pytest.raises(SkillLoadError, match="duplicate skill id 'one'") as exc_info:
            SkillLoader(data_path).load()
        assert exc_info.value.detail["first_defined_in"].endswith("01-one.yaml")

    def test_error_serializes(self, tmp_path):
        with pytest.raises(SkillLoadError) as exc_info:
            SkillLoader(tmp_path / "nope").load()
        payload = exc_info.value.to_dict()
        assert payload["error"] == "SkillLoadError"
        assert "Failed to load skills from" in payload["message"]
