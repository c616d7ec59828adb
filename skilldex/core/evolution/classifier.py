# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Evolution Classifier - Places a skill on the four-level maturity ladder.

Responsible for:
- Determining the current level from aggregated deployment evidence
- Readiness (0-1) for the next level
- Gaps to a target level and strengths at the current level
- Level descriptions, next-level criteria, evolution paths and recommendations

Criteria Ladder (minimums):
    Level  Implementations  Industries  Roles  Success rate
    1      1                1           1      0.60
    2      3                1           2      0.70
    3      5                2           3      0.75
    4      10               4           5      0.80

Industry and role counts are distinct counts. Every method is pure.
"""

import logging
from typing import Callable, Dict, List, Optional, Union

import numpy as np

from skilldex.models.skill import Skill
from skilldex.schemas.evolution import (
    EVOLUTION_LEVELS,
    MAX_LEVEL,
    MIN_LEVEL,
    EvolutionAssessment,
    EvolutionCriteria,
    EvolutionEvidence,
    EvolutionLevel,
    ProgressMetrics,
    get_evolution_level,
)

logger = logging.getLogger(__name__)


DEFAULT_READINESS_THRESHOLD = 0.8
STRENGTH_MULTIPLIER = 1.5
HIGH_SUCCESS_RATE = 0.9

# implementations, industries, roles, success rate
READINESS_WEIGHTS = np.array([0.3, 0.25, 0.25, 0.2])


EVOLUTION_CRITERIA: Dict[int, EvolutionCriteria] = {
    1: EvolutionCriteria(
        level=1,
        name=EVOLUTION_LEVELS[1].name,
        requirements=(
            "At least one implementation",
            "A documented success on a specific site",
            "Concrete, recorded outcomes",
        ),
        min_implementations=1,
        min_industries=1,
        min_roles=1,
        min_success_rate=0.6,
    ),
    2: EvolutionCriteria(
        level=2,
        name=EVOLUTION_LEVELS[2].name,
        requirements=(
            "Multiple implementations within the same industry",
            "Industry-specific pattern identified",
            "Reproducible success stories",
        ),
        min_implementations=3,
        min_industries=1,
        min_roles=2,
        min_success_rate=0.7,
    ),
    3: EvolutionCriteria(
        level=3,
        name=EVOLUTION_LEVELS[3].name,
        requirements=(
            "Implementations across different industries",
            "Role-common structure extracted",
            "Successful horizontal roll-outs",
        ),
        min_implementations=5,
        min_industries=2,
        min_roles=3,
        min_success_rate=0.75,
    ),
    4: EvolutionCriteria(
        level=4,
        name=EVOLUTION_LEVELS[4].name,
        requirements=(
            "Implemented regardless of industry or role",
            "Usable without surrounding context",
            "Standardized method",
        ),
        min_implementations=10,
        min_industries=4,
        min_roles=5,
        min_success_rate=0.8,
    ),
}


Narrative = Callable[[EvolutionEvidence], str]

LEVEL_NARRATIVES: Dict[int, Narrative] = {
    1: lambda e: (
        f"This skill has proven individual value through {e.implementations} implementation(s). "
        f"It produced a clear 'that saved us' outcome on a specific site."
    ),
    2: lambda e: (
        f"Reproducibility was confirmed within {e.distinct_industries} industry(ies). "
        f"It is recognised as an effective answer to an industry-specific problem."
    ),
    3: lambda e: (
        f"Used across {e.distinct_industries} industries and {e.distinct_roles} roles, this skill "
        f"has been extracted as a structure common to a role. It works for the same role in "
        f"different industries."
    ),
    4: lambda e: (
        f"Through {e.implementations}+ implementations this skill is established as a general "
        f"tool independent of industry or role. It can be used without surrounding context."
    ),
}


def _level_number(level: Union[int, EvolutionLevel]) -> int:
    return level.level if isinstance(level, EvolutionLevel) else int(level)


class EvolutionClassifier:
    """
    Classify skills on the criteria ladder.

    Example usage:
        classifier = EvolutionClassifier()

        level = classifier.evaluate(evidence)
        assessment = classifier.assess_evolution(skill, evidence)
        if assessment.ready_for_next_level:
            ...
    """

    def __init__(
        self,
        readiness_threshold: float = DEFAULT_READINESS_THRESHOLD,
        narratives: Optional[Dict[int, Narrative]] = None
    ):
        """
        Args:
            readiness_threshold: Readiness at which a skill counts as ready to advance
            narratives: Level -> narrative builder; levels without one fall
                back to the static level description
        """
        self.readiness_threshold = readiness_threshold
        self.narratives = LEVEL_NARRATIVES if narratives is None else narratives

    # =========================================================================
    # Criteria
    # =========================================================================

    @staticmethod
    def get_criteria(level: Union[int, EvolutionLevel]) -> Optional[EvolutionCriteria]:
        """Thresholds for a level, None outside 1-4."""
        return EVOLUTION_CRITERIA.get(_level_number(level))

    @staticmethod
    def meets_criteria(evidence: EvolutionEvidence, criteria: EvolutionCriteria) -> bool:
        return (
            evidence.implementations >= criteria.min_implementations
            and evidence.distinct_industries >= criteria.min_industries
            and evidence.distinct_roles >= criteria.min_roles
            and evidence.effective_success_rate >= criteria.min_success_rate
        )

    def evaluate(self, evidence: EvolutionEvidence) -> EvolutionLevel:
        """
        Highest level whose thresholds are all met.

        Evidence that meets none of them (for example zero implementations)
        is still placed at level 1.
        """
        for level in range(MAX_LEVEL, MIN_LEVEL - 1, -1):
            if self.meets_criteria(evidence, EVOLUTION_CRITERIA[level]):
                return EVOLUTION_LEVELS[level]

        logger.debug(
            f"Evidence meets no level criteria (implementations={evidence.implementations}); "
            f"defaulting to level {MIN_LEVEL}"
        )
        return EVOLUTION_LEVELS[MIN_LEVEL]

    # =========================================================================
    # Readiness, gaps & strengths
    # =========================================================================

    @staticmethod
    def calculate_progress(evidence: EvolutionEvidence, criteria: EvolutionCriteria) -> Dict[str, float]:
        """Per-metric progress toward criteria, each capped at 1.0."""
        return {
            "implementations": min(evidence.implementations / criteria.min_implementations, 1.0),
            "industries": min(evidence.distinct_industries / criteria.min_industries, 1.0),
            "roles": min(evidence.distinct_roles / criteria.min_roles, 1.0),
            "success_rate": min(evidence.effective_success_rate / criteria.min_success_rate, 1.0),
        }

    def calculate_readiness(
        self,
        evidence: EvolutionEvidence,
        current_level: Union[int, EvolutionLevel]
    ) -> float:
        """
        Weighted progress toward the level after current_level.

        Level 4 is terminal and always returns 1.0.
        """
        next_level = _level_number(current_level) + 1
        if next_level > MAX_LEVEL:
            return 1.0

        criteria = EVOLUTION_CRITERIA.get(next_level)
        if criteria is None:
            return 0.0

        progress = self.calculate_progress(evidence, criteria)
        ratios = np.array([
            progress["implementations"],
            progress["industries"],
            progress["roles"],
            progress["success_rate"],
        ])
        return min(float(np.dot(ratios, READINESS_WEIGHTS)), 1.0)

    def identify_gaps(self, evidence: EvolutionEvidence, target_level: Union[int, EvolutionLevel]) -> List[str]:
        """
        One message per threshold of target_level that evidence misses.

        Empty when every threshold is met or the level does not exist.
        """
        criteria = self.get_criteria(target_level)
        if criteria is None:
            return []

        gaps = []
        if evidence.implementations < criteria.min_implementations:
            gaps.append(
                f"Not enough implementations (current: {evidence.implementations}, "
                f"required: {criteria.min_implementations})"
            )
        if evidence.distinct_industries < criteria.min_industries:
            gaps.append(
                f"Industry diversity too low (current: {evidence.distinct_industries} industries, "
                f"required: {criteria.min_industries})"
            )
        if evidence.distinct_roles < criteria.min_roles:
            gaps.append(
                f"Role coverage too low (current: {evidence.distinct_roles} roles, "
                f"required: {criteria.min_roles})"
            )
        success_rate = evidence.effective_success_rate
        if success_rate < criteria.min_success_rate:
            gaps.append(
                f"Success rate below target (current: {success_rate * 100:.0f}%, "
                f"required: {criteria.min_success_rate * 100:.0f}%)"
            )
        return gaps

    def identify_strengths(
        self,
        evidence: EvolutionEvidence,
        current_level: Union[int, EvolutionLevel]
    ) -> List[str]:
        """Metrics at least 1.5x the current level's threshold, plus notable outcomes."""
        criteria = self.get_criteria(current_level)
        if criteria is None:
            return []

        strengths = []
        if evidence.implementations >= criteria.min_implementations * STRENGTH_MULTIPLIER:
            strengths.append(f"Extensive implementation record ({evidence.implementations} implementations)")
        if evidence.distinct_industries >= criteria.min_industries * STRENGTH_MULTIPLIER:
            strengths.append(f"High industry diversity ({evidence.distinct_industries} industries)")
        if evidence.distinct_roles >= criteria.min_roles * STRENGTH_MULTIPLIER:
            strengths.append(f"Broad role coverage ({evidence.distinct_roles} roles)")
        if evidence.effective_success_rate >= HIGH_SUCCESS_RATE:
            strengths.append(f"Very high success rate ({evidence.effective_success_rate * 100:.0f}%)")
        if evidence.cross_industry_success:
            strengths.append("Proven success across industries")
        return strengths

    def assess_evolution(self, skill: Optional[Skill], evidence: EvolutionEvidence) -> EvolutionAssessment:
        """
        Full assessment: current level, readiness, strengths and the gaps to
        the next level (level 4 is compared against itself).
        """
        current = self.evaluate(evidence)
        next_level = min(current.level + 1, MAX_LEVEL)
        readiness = self.calculate_readiness(evidence, current)

        if skill is not None:
            logger.debug(f"Skill '{skill.id}' assessed at level {current.level} (readiness {readiness:.2f})")

        return EvolutionAssessment(
            current_level=current,
            ready_for_next_level=readiness >= self.readiness_threshold,
            readiness_score=readiness,
            progress_metrics=ProgressMetrics.from_evidence(evidence),
            strengths=self.identify_strengths(evidence, current),
            gaps=self.identify_gaps(evidence, next_level),
        )

    # =========================================================================
    # Reporting
    # =========================================================================

    def generate_level_description(self, level: Union[int, EvolutionLevel], evidence: EvolutionEvidence) -> str:
        """Narrative for the level, or its static description when there is none."""
        level = level if isinstance(level, EvolutionLevel) else get_evolution_level(level)
        narrative = self.narratives.get(level.level)
        if narrative is None:
            return level.description
        return narrative(evidence)

    @staticmethod
    def generate_progress_bar(level: int) -> str:
        """Filled squares for reached levels, e.g. level 2 -> ■■□□."""
        level = max(0, min(MAX_LEVEL, level))
        return "■" * level + "□" * (MAX_LEVEL - level)

    def get_level_details(self, level: Union[int, EvolutionLevel]) -> Dict[str, object]:
        level = level if isinstance(level, EvolutionLevel) else get_evolution_level(level)
        return {
            "level": level.level,
            "name": level.name,
            "description": level.description,
            "progress_bar": self.generate_progress_bar(level.level),
        }

    def get_next_level_criteria(self, level: Union[int, EvolutionLevel]) -> Optional[EvolutionCriteria]:
        """Criteria of the level above, None at level 4."""
        return EVOLUTION_CRITERIA.get(_level_number(level) + 1)

    def generate_evolution_path(self, level: Union[int, EvolutionLevel]) -> List[str]:
        """Current level, then the next level and its numbered requirements."""
        level = level if isinstance(level, EvolutionLevel) else get_evolution_level(level)
        path = [f"Current: {level.name} (Level {level.level})"]

        next_criteria = self.get_next_level_criteria(level)
        if next_criteria is not None:
            path.append(f"Next: {next_criteria.name}")
            for index, requirement in enumerate(next_criteria.requirements, start=1):
                path.append(f"  {index}. {requirement}")

        return path

    def generate_recommendations(
        self,
        level: Union[int, EvolutionLevel],
        assessment: EvolutionAssessment
    ) -> List[str]:
        recommendations = []

        if assessment.ready_for_next_level:
            recommendations.append("Ready to evolve to the next level")
            recommendations.append("Consider rolling out to new industries and roles")
        else:
            for gap in assessment.gaps:
                recommendations.append(f"Improve: {gap}")

        level_number = _level_number(level)
        if level_number == 1:
            recommendations.append("Add implementations within the same industry")
        elif level_number == 2:
            recommendations.append("Try a roll-out in a different industry")

        return recommendations
