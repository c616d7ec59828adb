# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from skilldex.schemas.evolution import (
    EVOLUTION_LEVELS,
    EvolutionAssessment,
    EvolutionCriteria,
    EvolutionEvidence,
    EvolutionHistoryEntry,
    EvolutionLevel,
    ProgressMetrics,
    get_evolution_level,
)
from skilldex.schemas.query import (
    AvailableFilters,
    FilterCondition,
    FilterResult,
    Pagination,
    SkillFilterOptions,
    SkillSearchCriteria,
    SkillStatistics,
    SortInfo,
)
from skilldex.schemas.recommendation import MatchingResult, PainPattern, RecommendationContext

__all__ = [
    # Evolution
    "EVOLUTION_LEVELS",
    "EvolutionAssessment",
    "EvolutionCriteria",
    "EvolutionEvidence",
    "EvolutionHistoryEntry",
    "EvolutionLevel",
    "ProgressMetrics",
    "get_evolution_level",
    # Query
    "AvailableFilters",
    "FilterCondition",
    "FilterResult",
    "Pagination",
    "SkillFilterOptions",
    "SkillSearchCriteria",
    "SkillStatistics",
    "SortInfo",
    # Recommendation
    "MatchingResult",
    "PainPattern",
    "RecommendationContext",
]
