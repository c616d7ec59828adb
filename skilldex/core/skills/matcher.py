# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Match Scorer - Relevance of a skill to an observed pain pattern.

Responsible for:
- Scoring one skill against one pain pattern (bounded to [0, 1])
- Adjusting that score for the recommendation context
- Selecting the pain patterns a skill addresses
- Producing per-pair debug records with human-readable evidence

Scoring Components (weighted mean):
1. Trigger  (0.4): skill trigger phrases found in the pain text
2. Category (0.2): exact / related-domain / containment match of categories
3. Keyword  (0.3): Jaccard similarity of stop-word-filtered tokens
4. Direct   (0.1): declared pain strings vs the pain name, only when declared

Context relevance is a separate multiplier (industry, role, company size,
urgency) capped at 1.5. Everything here is synchronous and side-effect free.
"""

import logging
import re
from typing import Dict, FrozenSet, List, Optional, Tuple

import numpy as np

from skilldex.models.enums import CompanySize, MatchType, Urgency
from skilldex.models.skill import Skill
from skilldex.schemas.recommendation import MatchingResult, PainPattern, RecommendationContext

logger = logging.getLogger(__name__)


DEFAULT_MATCH_THRESHOLD = 0.5

TRIGGER_WEIGHT = 0.4
CATEGORY_WEIGHT = 0.2
KEYWORD_WEIGHT = 0.3
DIRECT_PAIN_WEIGHT = 0.1

EXACT_MATCH_THRESHOLD = 0.8
PARTIAL_MATCH_THRESHOLD = 0.5
MAX_CONTEXT_RELEVANCE = 1.5
LOW_ADOPTION_COST = 0.3

# Main category -> categories considered the same problem domain
CATEGORY_RELATIONS: Dict[str, Tuple[str, ...]] = {
    "automation": ("efficiency", "productivity", "process", "workflow"),
    "communication": ("collaboration", "information", "reporting", "meeting"),
    "analysis": ("data", "insight", "reporting", "monitoring"),
    "quality": ("error", "testing", "validation", "review"),
    "security": ("compliance", "risk", "protection", "access"),
    "development": ("coding", "deployment", "integration", "testing"),
}

INDUSTRY_GROUPS: Tuple[Tuple[str, ...], ...] = (
    ("tech", "it", "software", "saas", "technology"),
    ("finance", "banking", "insurance", "fintech"),
    ("retail", "ecommerce", "commerce", "shopping"),
    ("healthcare", "medical", "pharma", "health"),
    ("manufacturing", "production", "factory", "industry"),
)

STOP_WORDS: FrozenSet[str] = frozenset({
    "the", "is", "at", "which", "on", "a", "an", "as", "are",
    "was", "were", "been", "be", "have", "has", "had", "do",
    "does", "did", "will", "would", "could", "should", "may",
    "might", "must", "shall", "can", "need", "to", "of", "in",
    "for", "with", "by", "from", "about", "into", "through",
    "during", "before", "after", "above", "below", "up", "down",
    "out", "off", "over", "under", "again", "further", "then",
    "once", "that", "this", "these", "those", "what",
    "who", "whom", "whose", "where", "when", "why", "how",
    "all", "both", "each", "few", "more", "most", "other",
    "some", "such", "no", "nor", "not", "only", "own", "same",
    "so", "than", "too", "very", "just", "and", "or", "but",
})

ENTERPRISE_PATTERN = re.compile(r"enterprise|scale|large|complex|distributed")
SIMPLE_PATTERN = re.compile(r"simple|basic|starter|small|lightweight")
PUNCTUATION_PATTERN = re.compile(r"[^\w\s]")


def extract_keywords(text: str) -> List[str]:
    """Distinct lower-cased tokens longer than two characters, minus stop words."""
    words = PUNCTUATION_PATTERN.sub(" ", text.lower()).split()
    return list(dict.fromkeys(
        word for word in words
        if len(word) > 2 and word not in STOP_WORDS
    ))


def industries_related(first: str, second: str) -> bool:
    first, second = first.lower(), second.lower()
    return any(
        any(name in first for name in group) and any(name in second for name in group)
        for group in INDUSTRY_GROUPS
    )


class MatchScorer:
    """
    Score skills against pain patterns.

    Example usage:
        scorer = MatchScorer(threshold=0.5)

        score = scorer.calculate_match_score(skill, pain)
        matched = scorer.match(skill, pains, context)

        for result in scorer.get_detailed_matching_results(skill, pains, context):
            print(f"{result.pain_pattern.name}: {result.match_score:.2f} ({result.match_type})")
    """

    def __init__(self, threshold: float = DEFAULT_MATCH_THRESHOLD):
        """
        Args:
            threshold: Minimum context-adjusted score for match() to keep a pain
        """
        self.threshold = threshold

    # =========================================================================
    # Public API
    # =========================================================================

    def match(
        self,
        skill: Skill,
        pain_patterns: List[PainPattern],
        context: RecommendationContext
    ) -> List[PainPattern]:
        """Pain patterns whose adjusted score reaches the threshold, in input order."""
        matched = []
        for pain in pain_patterns:
            adjusted = self.calculate_match_score(skill, pain) * self.calculate_context_relevance(
                skill, pain, context
            )
            if adjusted >= self.threshold:
                matched.append(pain)

        logger.debug(f"Skill '{skill.id}' matched {len(matched)}/{len(pain_patterns)} pain patterns")
        return matched

    def calculate_match_score(self, skill: Skill, pain: PainPattern) -> float:
        """Weighted mean of the sub-scores, in [0, 1]."""
        sub_scores = self.calculate_sub_scores(skill, pain)
        weights = {
            "trigger": TRIGGER_WEIGHT,
            "category": CATEGORY_WEIGHT,
            "keyword": KEYWORD_WEIGHT,
            "direct_pain": DIRECT_PAIN_WEIGHT,
        }

        names = list(sub_scores)
        values = np.array([sub_scores[name] for name in names], dtype=float)
        applied = np.array([weights[name] for name in names], dtype=float)

        return float(np.dot(values, applied) / applied.sum())

    def calculate_sub_scores(self, skill: Skill, pain: PainPattern) -> Dict[str, float]:
        """
        Individual sub-scores for a pair.

        direct_pain is present only when the skill declares pain_patterns.
        """
        scores = {
            "trigger": self.calculate_trigger_score(skill, pain),
            "category": self.calculate_category_score(skill, pain),
            "keyword": self.calculate_keyword_score(skill, pain),
        }
        if skill.pain_patterns:
            scores["direct_pain"] = self.calculate_direct_pain_score(skill, pain)
        return scores

    def calculate_context_relevance(
        self,
        skill: Skill,
        pain: PainPattern,
        context: RecommendationContext
    ) -> float:
        """
        Multiplier for the base score given the request context.

        Starts at 1.0 and is capped at MAX_CONTEXT_RELEVANCE.
        """
        relevance = 1.0

        if skill.industry and context.industry:
            if skill.industry.lower() == context.industry.lower():
                relevance *= 1.2
            elif industries_related(skill.industry, context.industry):
                relevance *= 1.1
            else:
                relevance *= 0.8

        target_role = skill.target_role
        if target_role and context.roles:
            target = target_role.lower()
            role_match = any(
                role.lower() in target or target in role.lower()
                for role in context.roles
            )
            relevance *= 1.15 if role_match else 0.85

        if context.company_size:
            relevance *= self.company_size_multiplier(skill, context.company_size)

        if context.urgency == Urgency.HIGH.value and skill.estimated_adoption_cost < LOW_ADOPTION_COST:
            relevance *= 1.1

        return min(relevance, MAX_CONTEXT_RELEVANCE)

    def get_detailed_matching_results(
        self,
        skill: Skill,
        pain_patterns: List[PainPattern],
        context: RecommendationContext
    ) -> List[MatchingResult]:
        """One MatchingResult per pain pattern, in input order."""
        results = []

        for pain in pain_patterns:
            sub_scores = self.calculate_sub_scores(skill, pain)
            base_score = self.calculate_match_score(skill, pain)
            relevance = self.calculate_context_relevance(skill, pain, context)
            adjusted = base_score * relevance

            results.append(MatchingResult(
                skill=skill,
                pain_pattern=pain,
                match_score=adjusted,
                base_score=base_score,
                context_relevance=relevance,
                match_type=self.classify(adjusted),
                sub_scores=sub_scores,
                evidence=self._build_evidence(skill, pain, sub_scores),
            ))

        return results

    @staticmethod
    def classify(adjusted_score: float) -> MatchType:
        if adjusted_score >= EXACT_MATCH_THRESHOLD:
            return MatchType.EXACT
        if adjusted_score >= PARTIAL_MATCH_THRESHOLD:
            return MatchType.PARTIAL
        return MatchType.RELATED

    # =========================================================================
    # Sub-scores
    # =========================================================================

    def calculate_trigger_score(self, skill: Skill, pain: PainPattern) -> float:
        """
        Full credit per trigger found verbatim in the pain text, otherwise half
        credit scaled by the share of its words (longer than two characters)
        that appear in the pain text.
        """
        if not skill.triggers:
            return 0.0

        pain_text = pain.text
        credit = 0.0

        for trigger in skill.triggers:
            trigger_lower = trigger.lower()
            if trigger_lower in pain_text:
                credit += 1.0
                continue

            words = trigger_lower.split()
            if not words:
                continue
            matched = [word for word in words if len(word) > 2 and word in pain_text]
            credit += len(matched) / len(words) * 0.5

        return min(credit / len(skill.triggers), 1.0)

    def calculate_category_score(self, skill: Skill, pain: PainPattern) -> float:
        if not skill.category or not pain.category:
            return 0.5  # neutral

        skill_category = skill.category.lower()
        pain_category = pain.category.lower()

        if skill_category == pain_category:
            return 1.0

        for main, related in CATEGORY_RELATIONS.items():
            if main in skill_category and any(rc in pain_category for rc in related):
                return 0.7
            if main in pain_category and any(rc in skill_category for rc in related):
                return 0.7

        if skill_category in pain_category or pain_category in skill_category:
            return 0.5

        return 0.2

    def calculate_keyword_score(self, skill: Skill, pain: PainPattern) -> float:
        """Jaccard similarity of skill and pain keyword sets."""
        skill_keywords = set(extract_keywords(f"{skill.name} {skill.description}"))
        pain_keywords = set(extract_keywords(pain.text))

        if not skill_keywords or not pain_keywords:
            return 0.0

        return len(skill_keywords & pain_keywords) / len(skill_keywords | pain_keywords)

    def calculate_direct_pain_score(self, skill: Skill, pain: PainPattern) -> float:
        """
        Best match between the skill's declared pain strings and the pain name.

        1.0 for equality, 0.7 for containment either way, otherwise half the
        shared-word ratio over the longer word list. Every declared string is
        scored and the best wins, so the result does not depend on the order
        the record lists them in; the first string that scores is not taken
        as the answer.
        """
        pain_name = pain.name.lower()
        pain_words = pain_name.split()
        best = 0.0

        for declared in skill.pain_patterns:
            declared_lower = declared.lower()

            if declared_lower == pain_name:
                return 1.0
            if declared_lower in pain_name or pain_name in declared_lower:
                best = max(best, 0.7)
                continue

            declared_words = declared_lower.split()
            if not declared_words or not pain_words:
                continue
            common = [word for word in declared_words if word in pain_words]
            if common:
                best = max(best, 0.5 * len(common) / max(len(declared_words), len(pain_words)))

        return best

    @staticmethod
    def company_size_multiplier(skill: Skill, company_size: str) -> float:
        """Size fit from enterprise/simple wording in the skill description."""
        description = skill.description.lower()
        is_enterprise = ENTERPRISE_PATTERN.search(description) is not None
        is_simple = SIMPLE_PATTERN.search(description) is not None

        if company_size == CompanySize.SMALL.value:
            if is_simple:
                return 1.2
            if is_enterprise:
                return 0.7
        elif company_size == CompanySize.LARGE.value:
            if is_enterprise:
                return 1.2
            if is_simple:
                return 0.8
        return 1.0

    # =========================================================================
    # Evidence
    # =========================================================================

    def _build_evidence(
        self,
        skill: Skill,
        pain: PainPattern,
        sub_scores: Dict[str, float]
    ) -> List[str]:
        evidence = []

        if sub_scores["trigger"] > 0:
            evidence.append(f"Trigger match: {sub_scores['trigger'] * 100:.0f}%")
        if sub_scores["category"] > 0.5:
            evidence.append(f"Category match: {skill.category} <-> {pain.category}")
        if sub_scores["keyword"] > 0.3:
            evidence.append(f"Keyword similarity: {sub_scores['keyword'] * 100:.0f}%")

        direct: Optional[float] = sub_scores.get("direct_pain")
        if direct is not None and direct > 0.5:
            evidence.append(f"Declared pain match: {direct * 100:.0f}%")

        return evidence
