# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skill Context

Explicit container for the Skilldex components. Callers build one context and
pass it where it is needed instead of reaching for module-level singletons.

Example:
    >>> from skilldex import SkillContext, get_settings
    >>>
    >>> context = SkillContext.from_settings(get_settings())
    >>> await context.store.load()
    >>> matched = context.scorer.match(skill, pains, request_context)
"""

import logging
from dataclasses import dataclass
from typing import Optional

from skilldex.config import Settings, get_settings
from skilldex.core.evolution.classifier import EvolutionClassifier
from skilldex.core.evolution.tracker import ProgressionTracker
from skilldex.core.skills.matcher import MatchScorer
from skilldex.core.skills.store import SkillStore

logger = logging.getLogger(__name__)


@dataclass
class SkillContext:
    """Settings plus one instance of every component."""
    settings: Settings
    store: SkillStore
    scorer: MatchScorer
    classifier: EvolutionClassifier
    tracker: ProgressionTracker

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SkillContext":
        """
        Build every component from settings (read from the environment when
        omitted). The store is created but not loaded.
        """
        settings = settings or get_settings()

        classifier = EvolutionClassifier(readiness_threshold=settings.readiness_threshold)
        tracker = ProgressionTracker(
            classifier=classifier if settings.tracker_uses_classifier else None
        )

        logger.debug(
            f"Building skill context (environment={settings.environment}, "
            f"catalog={settings.skills_data_path})"
        )
        return cls(
            settings=settings,
            store=SkillStore(settings.skills_data_path),
            scorer=MatchScorer(threshold=settings.match_threshold),
            classifier=classifier,
            tracker=tracker,
        )

    def related_skills(self, skill_id: str):
        """Related skills using the configured default limit."""
        return self.store.get_related_skills(skill_id, limit=self.settings.related_skills_limit)
