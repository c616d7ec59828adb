# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skill Models - Reusable automation playbooks.

A skill record is loaded from a declarative YAML document and is immutable for
the lifetime of a load cycle. The store owns every Skill instance; callers get
read-only views.
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from skilldex.models.enums import Complexity, SkillStatus


# Words that identify the role a skill is written for
ROLE_KEYWORDS = (
    "manager",
    "engineer",
    "developer",
    "analyst",
    "executive",
    "operator",
    "specialist",
    "coordinator",
)

# Fallback adoption cost (0-1, lower is cheaper) by declared complexity
COMPLEXITY_ADOPTION_COST = {
    Complexity.LOW.value: 0.2,
    Complexity.MEDIUM.value: 0.5,
    Complexity.HIGH.value: 0.8,
}
DEFAULT_ADOPTION_COST = 0.5


class SkillImplementation(BaseModel):
    """Implementation requirements declared on a skill record."""
    model_config = ConfigDict(frozen=True)

    estimated_hours: Optional[float] = Field(default=None, ge=0)
    technologies: List[str] = Field(default_factory=list)
    integration_points: List[str] = Field(default_factory=list)


class Skill(BaseModel):
    """
    Catalog entry for an automation playbook.

    Identity and taxonomy fields are required; everything else is optional
    metadata used for matching, filtering and reporting. evolution_level is an
    advisory cache of the last assessment, not an authoritative value.
    """
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    # Identity
    id: str
    name: str
    description: str

    # Taxonomy
    category: str
    industry: str

    # Matching metadata
    triggers: List[str] = Field(default_factory=list)
    pain_patterns: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)

    # Lifecycle
    evolution_level: Optional[int] = Field(default=None, ge=1, le=4)
    complexity: Optional[Complexity] = None
    status: Optional[SkillStatus] = None
    adoption_cost: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    # Delivery details
    prerequisites: List[str] = Field(default_factory=list)
    implementation: Optional[SkillImplementation] = None
    benefits: List[str] = Field(default_factory=list)
    metrics: List[str] = Field(default_factory=list)

    created_date: Optional[date] = None
    updated_date: Optional[date] = None

    @field_validator('id')
    @classmethod
    def validate_id(cls, value):
        """Ensure the id is usable as an index key."""
        if not value or not value.strip():
            raise ValueError("Skill id cannot be empty")
        return value.strip()

    @field_validator('name', 'category', 'industry')
    @classmethod
    def validate_required_text(cls, value):
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator('triggers', 'pain_patterns', 'tags', 'prerequisites', 'benefits', 'metrics', mode='before')
    @classmethod
    def none_as_empty(cls, value):
        # YAML renders an empty key as null
        return [] if value is None else value

    @property
    def target_role(self) -> Optional[str]:
        """
        Role this skill is written for, inferred from tags then description.

        A tag containing a role keyword wins over a keyword found in the
        description. Returns None when nothing matches.
        """
        for tag in self.tags:
            tag_lower = tag.lower()
            for keyword in ROLE_KEYWORDS:
                if keyword in tag_lower:
                    return tag

        description = self.description.lower()
        for keyword in ROLE_KEYWORDS:
            if keyword in description:
                return keyword

        return None

    @property
    def estimated_adoption_cost(self) -> float:
        """Declared adoption cost, or an estimate from complexity."""
        if self.adoption_cost is not None:
            return self.adoption_cost
        return COMPLEXITY_ADOPTION_COST.get(self.complexity, DEFAULT_ADOPTION_COST)

    @property
    def has_assets(self) -> bool:
        """True when the implementation lists technologies or integration points."""
        if self.implementation is None:
            return False
        return bool(self.implementation.technologies or self.implementation.integration_points)

    def __repr__(self):
        return f"<Skill(id='{self.id}', industry='{self.industry}', level={self.evolution_level})>"
