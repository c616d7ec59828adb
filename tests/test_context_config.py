# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Tests for settings, logging setup and the component context."""
import logging

import pytest

from skilldex.config import DEFAULT_SKILLS_PATH, Settings, configure_logging, get_settings
from skilldex.core.context import SkillContext


@pytest.fixture
def restore_skilldex_logger():
    logger = logging.getLogger("skilldex")
    level = logger.level
    yield
    logger.setLevel(level)


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("SKILLDEX_MATCH_THRESHOLD", "SKILLDEX_SKILLS_DATA_PATH", "SKILLDEX_DEBUG"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings()

        assert settings.skills_data_path == DEFAULT_SKILLS_PATH
        assert settings.match_threshold == 0.5
        assert settings.related_skills_limit == 5
        assert settings.readiness_threshold == 0.8
        assert settings.tracker_uses_classifier is False

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SKILLDEX_MATCH_THRESHOLD", "0.7")
        monkeypatch.setenv("SKILLDEX_SKILLS_DATA_PATH", str(tmp_path))
        monkeypatch.setenv("SKILLDEX_TRACKER_USES_CLASSIFIER", "true")

        settings = get_settings()
        assert settings.match_threshold == 0.7
        assert settings.skills_data_path == tmp_path
        assert settings.tracker_uses_classifier is True

    def test_environment_helpers(self):
        assert Settings(environment="Production").is_production
        assert Settings(environment="development").is_development


class TestConfigureLogging:
    def test_debug_forces_debug_level(self, restore_skilldex_logger):
        assert configure_logging(Settings(debug=True, log_level="ERROR")) == logging.DEBUG
        assert logging.getLogger("skilldex").level == logging.DEBUG

    def test_log_level_name(self, restore_skilldex_logger):
        assert configure_logging(Settings(log_level="warning")) == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, restore_skilldex_logger):
        assert configure_logging(Settings(log_level="chatty")) == logging.INFO


class TestSkillContext:
    def test_from_settings_wires_components(self, catalog_path):
        settings = Settings(
            skills_data_path=catalog_path,
            match_threshold=0.6,
            readiness_threshold=0.7,
            related_skills_limit=1,
        )
        context = SkillContext.from_settings(settings)

        assert context.settings is settings
        assert context.store.data_path == catalog_path
        assert not context.store.is_loaded
        assert context.scorer.threshold == 0.6
        assert context.classifier.readiness_threshold == 0.7
        assert context.tracker.classifier is None

    def test_tracker_can_use_classifier(self, catalog_path):
        context = SkillContext.from_settings(
            Settings(skills_data_path=catalog_path, tracker_uses_classifier=True)
        )
        assert context.tracker.classifier is context.classifier

    async def test_related_skills_uses_configured_limit(self, catalog_path):
        context = SkillContext.from_settings(
            Settings(skills_data_path=catalog_path, related_skills_limit=1)
        )
        await context.store.load()
        assert [s.id for s in context.related_skills("alpha")] == ["bravo"]

    async def test_bundled_catalog_end_to_end(self):
        context = SkillContext.from_settings(Settings(skills_data_path=DEFAULT_SKILLS_PATH))
        await context.store.load()

        skill = context.store.get_by_id("invoice-matching")
        assert skill is not None
        assert context.store.get_by_industry("finance") == [skill]
