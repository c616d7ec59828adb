# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Shared Enums for skill records, recommendation inputs and catalog queries.

Using str inheritance ensures JSON serialization compatibility and Pydantic auto-conversion.
"""

from enum import Enum


class Complexity(str, Enum):
    """Implementation complexity declared on a skill record."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SkillStatus(str, Enum):
    """Lifecycle status of a skill record."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    DEPRECATED = "deprecated"


class CompanySize(str, Enum):
    """Size bracket of the client a recommendation is made for."""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class Urgency(str, Enum):
    """How urgently the client needs relief."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MatchType(str, Enum):
    """Classification of a context-adjusted match score."""
    EXACT = "exact"      # >= 0.8
    PARTIAL = "partial"  # >= 0.5
    RELATED = "related"  # below 0.5


class SortDirection(str, Enum):
    """Sort direction for catalog filtering."""
    ASC = "asc"
    DESC = "desc"


class FilterOperator(str, Enum):
    """
    Operators understood by SkillStore.filter().

    Any other operator string is accepted and treated as always-true.
    """
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"
    NOT_IN = "not_in"
