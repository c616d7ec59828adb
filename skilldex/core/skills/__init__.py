# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skills Catalog - Loading, lookup and pain-pattern matching.

- SkillLoader: Parse and validate the YAML skill catalog
- SkillStore: In-memory catalog with indexed queries
- MatchScorer: Skill vs pain-pattern relevance scoring
"""

from skilldex.core.skills.loader import SkillLoader, LoadedCatalog
from skilldex.core.skills.store import SkillStore
from skilldex.core.skills.matcher import MatchScorer

__all__ = [
    "SkillLoader",
    "LoadedCatalog",
    "SkillStore",
    "MatchScorer",
]
