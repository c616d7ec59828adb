# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Evolution Schemas

Evidence in, assessments and history entries out. EvolutionEvidence is
validated input; everything else is a plain result type.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


MIN_LEVEL = 1
MAX_LEVEL = 4


class EvolutionEvidence(BaseModel):
    """
    Aggregated deployment statistics for one skill.

    industries and roles are multisets; the classifier only looks at their
    distinct counts. A missing success_rate counts as 0.
    """
    model_config = ConfigDict(frozen=True)

    implementations: int = Field(default=0, ge=0)
    industries: List[str] = Field(default_factory=list)
    roles: List[str] = Field(default_factory=list)
    success_rate: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    cross_industry_success: bool = False
    feedbacks: List[str] = Field(default_factory=list)

    @property
    def distinct_industries(self) -> int:
        return len(set(self.industries))

    @property
    def distinct_roles(self) -> int:
        return len(set(self.roles))

    @property
    def effective_success_rate(self) -> float:
        return self.success_rate or 0.0


@dataclass(frozen=True, order=True)
class EvolutionLevel:
    """One rung of the four-level maturity ladder, ordered by level."""
    level: int
    name: str
    description: str


EVOLUTION_LEVELS: Dict[int, EvolutionLevel] = {
    1: EvolutionLevel(
        level=1,
        name="Individual Fit (person-specific)",
        description="Solved a real problem for one team on one site",
    ),
    2: EvolutionLevel(
        level=2,
        name="Reproducible (industry-specific)",
        description="Reproduced within the same industry and became a known industry pattern",
    ),
    3: EvolutionLevel(
        level=3,
        name="Structure Extracted (role-common)",
        description="Works for the same role across different industries",
    ),
    4: EvolutionLevel(
        level=4,
        name="Universal Skill (OS-grade)",
        description="A context-free tool usable anywhere",
    ),
}


def get_evolution_level(level: int) -> EvolutionLevel:
    """Return the ladder rung for level, clamped into [1, 4]."""
    return EVOLUTION_LEVELS[max(MIN_LEVEL, min(MAX_LEVEL, level))]


@dataclass(frozen=True)
class EvolutionCriteria:
    """Minimum thresholds a skill must meet to sit at a level."""
    level: int
    name: str
    requirements: Tuple[str, ...]
    min_implementations: int
    min_industries: int
    min_roles: int
    min_success_rate: float

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["requirements"] = list(self.requirements)
        return data


@dataclass(frozen=True)
class ProgressMetrics:
    implementation_count: int
    industry_diversity: int
    role_diversity: int
    success_rate: float

    @classmethod
    def from_evidence(cls, evidence: EvolutionEvidence) -> "ProgressMetrics":
        return cls(
            implementation_count=evidence.implementations,
            industry_diversity=evidence.distinct_industries,
            role_diversity=evidence.distinct_roles,
            success_rate=evidence.effective_success_rate,
        )


@dataclass
class EvolutionAssessment:
    """Composite report produced by EvolutionClassifier.assess_evolution()."""
    current_level: EvolutionLevel
    ready_for_next_level: bool
    readiness_score: float
    progress_metrics: ProgressMetrics
    strengths: List[str] = field(default_factory=list)
    gaps: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class EvolutionHistoryEntry:
    """
    One recorded level transition.

    Entries are append-only; evidence is a snapshot taken at record time.
    """
    skill_id: str
    evidence: EvolutionEvidence
    previous_level: int
    new_level: int
    timestamp: datetime
    trigger: Optional[str] = None

    @property
    def is_promotion(self) -> bool:
        return self.new_level > self.previous_level
