# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Catalog Query Schemas

Options accepted by SkillStore.filter() / SkillStore.search_skills() and the
result shapes they return.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from skilldex.core.exceptions import InvalidQueryError
from skilldex.models.enums import Complexity, FilterOperator, SkillStatus, SortDirection
from skilldex.models.skill import Skill


# camelCase operator spellings accepted alongside the canonical names
OPERATOR_ALIASES: Dict[str, str] = {
    "notEquals": FilterOperator.NOT_EQUALS.value,
    "startsWith": FilterOperator.STARTS_WITH.value,
    "endsWith": FilterOperator.ENDS_WITH.value,
    "notIn": FilterOperator.NOT_IN.value,
}


def normalize_operator(operator: Union[str, FilterOperator]) -> str:
    """Return the canonical operator name, leaving unknown names untouched."""
    if isinstance(operator, Enum):
        return operator.value
    return OPERATOR_ALIASES.get(operator, operator)


@dataclass
class FilterCondition:
    """Single predicate: <skill field> <operator> <value>."""
    field: str
    operator: Union[str, FilterOperator]
    value: Any = None

    def __post_init__(self):
        self.operator = normalize_operator(self.operator)

    @property
    def is_known_operator(self) -> bool:
        return self.operator in FilterOperator._value2member_map_


@dataclass
class SortInfo:
    field: str
    direction: Union[str, SortDirection] = SortDirection.ASC

    def __post_init__(self):
        if isinstance(self.direction, str) and not isinstance(self.direction, Enum):
            try:
                self.direction = SortDirection(self.direction.lower())
            except ValueError as e:
                raise InvalidQueryError(
                    "sort.direction",
                    f"expected 'asc' or 'desc', got '{self.direction}'"
                ) from e

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESC


@dataclass
class Pagination:
    """1-based page window."""
    page: int = 1
    limit: int = 20


@dataclass
class SkillFilterOptions:
    filters: List[FilterCondition] = field(default_factory=list)
    sort: Optional[SortInfo] = None
    pagination: Optional[Pagination] = None


@dataclass
class FilterResult:
    """
    Outcome of SkillStore.filter().

    total counts every match before pagination. Without pagination page is 1
    and limit equals total.
    """
    items: List[Skill]
    total: int
    total_pages: int
    page: int
    limit: int


@dataclass
class SkillSearchCriteria:
    """Conjunctive search criteria; tags match when any one is present."""
    query: Optional[str] = None
    industry: Optional[str] = None
    category: Optional[str] = None
    evolution_level: Optional[int] = None
    complexity: Optional[Union[str, Complexity]] = None
    status: Optional[Union[str, SkillStatus]] = None
    tags: List[str] = field(default_factory=list)
    has_assets: Optional[bool] = None


@dataclass
class SkillStatistics:
    total_skills: int
    by_industry: Dict[str, int]
    by_category: Dict[str, int]
    by_evolution_level: Dict[int, int]
    by_complexity: Dict[str, int]
    by_status: Dict[str, int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_skills": self.total_skills,
            "by_industry": dict(self.by_industry),
            "by_category": dict(self.by_category),
            "by_evolution_level": dict(self.by_evolution_level),
            "by_complexity": dict(self.by_complexity),
            "by_status": dict(self.by_status),
        }


@dataclass
class AvailableFilters:
    """Distinct sorted values per facet."""
    industries: List[str]
    categories: List[str]
    evolution_levels: List[int]
    complexities: List[str]
    statuses: List[str]
    tags: List[str]
