# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Recommendation Input/Output Schemas.

PainPattern and RecommendationContext are produced by upstream classifiers and
handed to the MatchScorer as read-only input. MatchingResult is the per-pair
debug record returned by MatchScorer.get_detailed_matching_results().
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from skilldex.models.enums import CompanySize, MatchType, Urgency
from skilldex.models.skill import Skill


# =============================================================================
# Inputs
# =============================================================================

class PainPattern(BaseModel):
    """An observed client problem used as a matching target."""
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    name: str
    description: str = ""
    category: Optional[str] = None
    impact: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    occurrence_count: Optional[int] = Field(default=None, ge=0)

    @property
    def text(self) -> str:
        """Lower-cased name and description, the text every matcher reads."""
        return f"{self.name} {self.description}".lower()


class RecommendationContext(BaseModel):
    """
    Per-request context a recommendation is made in.

    roles behaves as a set; duplicates are harmless.
    """
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    industry: Optional[str] = None
    roles: List[str] = Field(default_factory=list)
    company_size: Optional[CompanySize] = None
    urgency: Optional[Urgency] = None
    current_tools: List[str] = Field(default_factory=list)
    budget: Optional[str] = None


# =============================================================================
# Outputs
# =============================================================================

@dataclass
class MatchingResult:
    """Detailed match of one skill against one pain pattern."""
    skill: Skill
    pain_pattern: PainPattern
    match_score: float  # base score x context relevance
    base_score: float
    context_relevance: float
    match_type: MatchType
    sub_scores: Dict[str, float] = field(default_factory=dict)
    evidence: List[str] = field(default_factory=list)
