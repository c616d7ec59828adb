# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Skill catalog record models."""

from skilldex.models.enums import (
    Complexity,
    SkillStatus,
    CompanySize,
    Urgency,
    MatchType,
    SortDirection,
    FilterOperator,
)
from skilldex.models.skill import Skill, SkillImplementation

__all__ = [
    "Complexity",
    "SkillStatus",
    "CompanySize",
    "Urgency",
    "MatchType",
    "SortDirection",
    "FilterOperator",
    "Skill",
    "SkillImplementation",
]
