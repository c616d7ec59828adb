# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skilldex - Skill catalog, pain-pattern matching and skill evolution.

Match reusable automation playbooks ("skills") against observed client
problems and classify each skill's maturity on a four-level ladder.
"""

from skilldex.config import Settings, configure_logging, get_settings
from skilldex.core.context import SkillContext
from skilldex.core.evolution import EvolutionClassifier, ProgressionTracker
from skilldex.core.exceptions import InvalidQueryError, SkillLoadError, SkilldexException
from skilldex.core.skills import MatchScorer, SkillLoader, SkillStore
from skilldex.models import Skill

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "configure_logging",
    "get_settings",
    "SkillContext",
    "EvolutionClassifier",
    "ProgressionTracker",
    "InvalidQueryError",
    "SkillLoadError",
    "SkilldexException",
    "MatchScorer",
    "SkillLoader",
    "SkillStore",
    "Skill",
]
