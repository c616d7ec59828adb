# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skill Store - In-memory skill catalog with indexed lookups.

Responsible for:
- Loading the catalog once (single-flight, commit-on-success)
- Maintaining industry / category / evolution-level indices
- Providing query APIs (by id, by facet, text search, generic filter)
- Catalog statistics, facet listings and related-skill suggestions
"""

import asyncio
import copy
import json
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from skilldex.core.exceptions import InvalidQueryError, SkillLoadError
from skilldex.core.skills.loader import LoadedCatalog, SkillLoader
from skilldex.models.enums import Complexity, FilterOperator, SkillStatus
from skilldex.models.skill import Skill
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

logger = logging.getLogger(__name__)


DEFAULT_RELATED_LIMIT = 5


@dataclass
class _CatalogIndex:
    """One committed load cycle. Buckets hold ids in load order."""
    skills: Dict[str, Skill] = field(default_factory=dict)
    by_industry: Dict[str, List[str]] = field(default_factory=dict)
    by_category: Dict[str, List[str]] = field(default_factory=dict)
    by_level: Dict[int, List[str]] = field(default_factory=dict)
    summary: Optional[Dict[str, Any]] = None

    def add(self, skill: Skill):
        self.skills[skill.id] = skill
        self.by_industry.setdefault(skill.industry, []).append(skill.id)
        self.by_category.setdefault(skill.category, []).append(skill.id)
        if skill.evolution_level is not None:
            self.by_level.setdefault(skill.evolution_level, []).append(skill.id)

    @classmethod
    def build(cls, catalog: LoadedCatalog) -> '_CatalogIndex':
        index = cls(summary=catalog.index)
        for skill in catalog.skills:
            index.add(skill)
        return index


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(_plain(v)) for v in value)
    return str(_plain(value))


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _compare(left: Any, right: Any, operator: str) -> bool:
    left_num, right_num = _as_number(left), _as_number(right)
    if left_num is None or right_num is None:
        return False
    if operator == FilterOperator.GT.value:
        return left_num > right_num
    if operator == FilterOperator.GTE.value:
        return left_num >= right_num
    if operator == FilterOperator.LT.value:
        return left_num < right_num
    return left_num <= right_num


def evaluate_condition(skill: Skill, condition: FilterCondition) -> bool:
    """
    Apply one filter condition to a skill.

    Text operators compare case-insensitively, with None read as "" and lists
    joined by commas. Numeric operators are false when either side is not a
    number. in/not_in are false unless the value is a list, tuple or set.
    An unrecognised operator passes every skill.
    """
    operator = condition.operator
    field_value = _plain(getattr(skill, condition.field, None))
    value = condition.value

    if operator == FilterOperator.EQUALS.value:
        return field_value == _plain(value)
    if operator == FilterOperator.NOT_EQUALS.value:
        return field_value != _plain(value)

    if operator in (
        FilterOperator.CONTAINS.value,
        FilterOperator.STARTS_WITH.value,
        FilterOperator.ENDS_WITH.value,
    ):
        haystack = _as_text(field_value).lower()
        needle = _as_text(value).lower()
        if operator == FilterOperator.CONTAINS.value:
            return needle in haystack
        if operator == FilterOperator.STARTS_WITH.value:
            return haystack.startswith(needle)
        return haystack.endswith(needle)

    if operator in (
        FilterOperator.GT.value,
        FilterOperator.GTE.value,
        FilterOperator.LT.value,
        FilterOperator.LTE.value,
    ):
        return _compare(field_value, value, operator)

    if operator in (FilterOperator.IN.value, FilterOperator.NOT_IN.value):
        if not isinstance(value, (list, tuple, set, frozenset)):
            return False
        found = any(field_value == _plain(v) for v in value)
        if operator == FilterOperator.IN.value:
            return found
        return not found

    return True


class SkillStore:
    """
    Single source of truth for the skill catalog.

    load() is the only coroutine. It reads the catalog off the event loop,
    builds every index into a scratch structure and swaps it in only when the
    whole catalog validated. Reads before a successful load return empty
    results and log a warning.

    Usage:
        store = SkillStore("data/skills")
        await store.load()

        skill = store.get_by_id("invoice-matching")
        finance = store.get_by_industry("finance")
    """

    def __init__(
        self,
        data_path: Union[str, Path],
        loader: Optional[SkillLoader] = None
    ):
        self.data_path = Path(data_path)
        self._loader = loader or SkillLoader(self.data_path)
        self._index = _CatalogIndex()
        self._loaded = False
        self._lock = asyncio.Lock()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def load(self) -> int:
        """
        Load the catalog once.

        Concurrent first calls share one load; calls after a successful load
        return immediately.

        Returns:
            Number of skills loaded

        Raises:
            SkillLoadError: the catalog could not be read or validated. The
                store keeps its previous (empty) state.
        """
        async with self._lock:
            if self._loaded:
                return len(self._index.skills)

            logger.info(f"Loading skill catalog from {self.data_path}...")
            try:
                catalog = await asyncio.to_thread(self._loader.load)
            except SkillLoadError as e:
                logger.error(f"Skill catalog load failed: {e.message}")
                raise

            self._index = _CatalogIndex.build(catalog)
            self._loaded = True

            logger.info(f"Skill store loaded with {len(self._index.skills)} skills")
            return len(self._index.skills)

    def clear_cache(self):
        """Drop every skill and index; the next load() reads the catalog again."""
        self._index = _CatalogIndex()
        self._loaded = False
        logger.info("Skill store cache cleared")

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def skill_count(self) -> int:
        return len(self._index.skills)

    @property
    def index_summary(self) -> Optional[Dict[str, Any]]:
        """Copy of the loaded skill-index.yaml document, None before load."""
        if not self._check_loaded("index_summary"):
            return None
        return copy.deepcopy(self._index.summary)

    def _check_loaded(self, operation: str) -> bool:
        if not self._loaded:
            logger.warning(f"SkillStore.{operation}() called before load(); returning empty result")
        return self._loaded

    def _resolve(self, ids: List[str]) -> List[Skill]:
        return [self._index.skills[skill_id] for skill_id in ids if skill_id in self._index.skills]

    # =========================================================================
    # Lookups
    # =========================================================================

    def get_by_id(self, skill_id: str) -> Optional[Skill]:
        """Get skill by id, None if absent."""
        if not self._check_loaded("get_by_id"):
            return None
        return self._index.skills.get(skill_id)

    def get_all(self) -> List[Skill]:
        """All skills in load order."""
        if not self._check_loaded("get_all"):
            return []
        return list(self._index.skills.values())

    def get_by_industry(self, industry: str) -> List[Skill]:
        if not self._check_loaded("get_by_industry"):
            return []
        return self._resolve(self._index.by_industry.get(industry, []))

    def get_by_category(self, category: str) -> List[Skill]:
        if not self._check_loaded("get_by_category"):
            return []
        return self._resolve(self._index.by_category.get(category, []))

    def get_by_evolution_level(self, level: int) -> List[Skill]:
        if not self._check_loaded("get_by_evolution_level"):
            return []
        return self._resolve(self._index.by_level.get(level, []))

    # =========================================================================
    # Search & Filter
    # =========================================================================

    def search(self, query: str) -> List[Skill]:
        """Case-insensitive substring search over name + description."""
        if not self._check_loaded("search"):
            return []

        query_lower = query.lower()
        return [
            skill for skill in self._index.skills.values()
            if query_lower in f"{skill.name} {skill.description}".lower()
        ]

    def search_skills(self, criteria: SkillSearchCriteria) -> List[Skill]:
        """
        Search by several criteria at once.

        Every criterion that is set must hold. tags match when the skill has
        any one of them; query matches name or description. has_assets
        compares against Skill.has_assets.
        """
        if not self._check_loaded("search_skills"):
            return []

        results = list(self._index.skills.values())

        if criteria.industry:
            results = [s for s in results if s.industry == criteria.industry]
        if criteria.category:
            results = [s for s in results if s.category == criteria.category]
        if criteria.evolution_level is not None:
            results = [s for s in results if s.evolution_level == criteria.evolution_level]
        if criteria.complexity:
            complexity = _plain(criteria.complexity)
            results = [s for s in results if s.complexity == complexity]
        if criteria.status:
            status = _plain(criteria.status)
            results = [s for s in results if s.status == status]
        if criteria.tags:
            wanted = set(criteria.tags)
            results = [s for s in results if wanted.intersection(s.tags)]
        if criteria.has_assets is not None:
            results = [s for s in results if s.has_assets == criteria.has_assets]
        if criteria.query:
            query_lower = criteria.query.lower()
            results = [
                s for s in results
                if query_lower in s.name.lower() or query_lower in s.description.lower()
            ]

        return results

    def filter(self, options: Optional[SkillFilterOptions] = None) -> FilterResult:
        """
        Apply filter conditions, then sort, then paginate.

        Conditions are ANDed. An unrecognised operator is not an error: the
        condition passes every skill. Sorting is stable with missing values
        last in either direction.

        Raises:
            InvalidQueryError: page or limit below 1, or an unknown sort field
        """
        options = options or SkillFilterOptions()
        if options.pagination is not None:
            self._validate_pagination(options.pagination)
        if options.sort is not None and options.sort.field not in Skill.model_fields:
            raise InvalidQueryError("sort.field", f"unknown skill field '{options.sort.field}'")

        if not self._check_loaded("filter"):
            results: List[Skill] = []
        else:
            results = list(self._index.skills.values())

        for condition in options.filters:
            if not condition.is_known_operator:
                logger.debug(
                    f"Unknown filter operator '{condition.operator}' on '{condition.field}'; "
                    f"condition passes every skill"
                )
                continue
            results = [skill for skill in results if evaluate_condition(skill, condition)]

        if options.sort is not None:
            results = self._apply_sorting(results, options.sort)

        total = len(results)
        if options.pagination is None:
            return FilterResult(
                items=results,
                total=total,
                total_pages=1 if total else 0,
                page=1,
                limit=total,
            )

        page, limit = options.pagination.page, options.pagination.limit
        start = (page - 1) * limit
        return FilterResult(
            items=results[start:start + limit],
            total=total,
            total_pages=math.ceil(total / limit),
            page=page,
            limit=limit,
        )

    @staticmethod
    def _validate_pagination(pagination: Pagination):
        if pagination.page < 1:
            raise InvalidQueryError("pagination.page", f"must be >= 1, got {pagination.page}")
        if pagination.limit < 1:
            raise InvalidQueryError("pagination.limit", f"must be >= 1, got {pagination.limit}")

    @staticmethod
    def _apply_sorting(skills: List[Skill], sort: SortInfo) -> List[Skill]:
        present = []
        missing = []
        for skill in skills:
            value = getattr(skill, sort.field)
            if value is None or value == []:
                missing.append(skill)
            else:
                present.append(skill)

        try:
            present.sort(key=lambda s: getattr(s, sort.field), reverse=sort.descending)
        except TypeError as e:
            raise InvalidQueryError("sort.field", f"values of '{sort.field}' are not comparable") from e

        return present + missing

    # =========================================================================
    # Reporting
    # =========================================================================

    def get_statistics(self) -> SkillStatistics:
        """Counts per industry, category, level, complexity and status."""
        loaded = self._check_loaded("get_statistics")
        skills = list(self._index.skills.values()) if loaded else []

        by_complexity = {c.value: 0 for c in Complexity}
        by_status = {s.value: 0 for s in SkillStatus}
        for skill in skills:
            if skill.complexity:
                by_complexity[skill.complexity] = by_complexity.get(skill.complexity, 0) + 1
            if skill.status:
                by_status[skill.status] = by_status.get(skill.status, 0) + 1

        return SkillStatistics(
            total_skills=len(skills),
            by_industry={k: len(v) for k, v in sorted(self._index.by_industry.items())},
            by_category={k: len(v) for k, v in sorted(self._index.by_category.items())},
            by_evolution_level={k: len(v) for k, v in sorted(self._index.by_level.items())},
            by_complexity=dict(sorted(by_complexity.items())),
            by_status=dict(sorted(by_status.items())),
        )

    def get_available_filters(self) -> AvailableFilters:
        """Distinct sorted values for each filterable facet."""
        self._check_loaded("get_available_filters")
        skills = self._index.skills.values()

        return AvailableFilters(
            industries=sorted(self._index.by_industry),
            categories=sorted(self._index.by_category),
            evolution_levels=sorted(self._index.by_level),
            complexities=sorted({s.complexity for s in skills if s.complexity}),
            statuses=sorted({s.status for s in skills if s.status}),
            tags=sorted({tag for s in skills for tag in s.tags}),
        )

    def get_related_skills(self, skill_id: str, limit: int = DEFAULT_RELATED_LIMIT) -> List[Skill]:
        """
        Suggest skills similar to skill_id.

        Score per other skill: 3 for the same industry, 2 for the same
        category, 3 - |level difference| when both have a level, plus one per
        shared tag. Skills scoring <= 0 are dropped. Highest score first,
        ties in load order.
        """
        if not self._check_loaded("get_related_skills"):
            return []

        skill = self._index.skills.get(skill_id)
        if skill is None or limit <= 0:
            return []

        scored = []
        for other in self._index.skills.values():
            if other.id == skill.id:
                continue
            score = self.similarity_score(skill, other)
            if score > 0:
                scored.append((score, other))

        # sort() is stable, so equal scores keep load order
        scored.sort(key=lambda item: item[0], reverse=True)
        return [other for _, other in scored[:limit]]

    @staticmethod
    def similarity_score(skill: Skill, other: Skill) -> int:
        score = 0
        if other.industry == skill.industry:
            score += 3
        if other.category == skill.category:
            score += 2
        if skill.evolution_level is not None and other.evolution_level is not None:
            score += 3 - abs(other.evolution_level - skill.evolution_level)
        score += len(set(skill.tags) & set(other.tags))
        return score

    def export_to_json(self) -> str:
        """Serialize every skill as a JSON array, dates in ISO format."""
        if not self._check_loaded("export_to_json"):
            return "[]"
        return json.dumps(
            [skill.model_dump(mode="json") for skill in self._index.skills.values()],
            indent=2,
            ensure_ascii=False,
        )
