# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Progression Tracker - Append-only history of evolution level transitions.

Without a classifier the new level comes from the implementation-count step
rule (>=10 -> 4, >=5 -> 3, >=3 -> 2, else 1). Built with an
EvolutionClassifier, the classifier's ladder decides instead.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from skilldex.core.evolution.classifier import EvolutionClassifier
from skilldex.schemas.evolution import MIN_LEVEL, EvolutionEvidence, EvolutionHistoryEntry

logger = logging.getLogger(__name__)


# (minimum implementations, level), highest first
STEP_THRESHOLDS = ((10, 4), (5, 3), (3, 2))


def step_level(implementations: int) -> int:
    """Level estimate from implementation count alone."""
    for minimum, level in STEP_THRESHOLDS:
        if implementations >= minimum:
            return level
    return MIN_LEVEL


def _as_count(value: Any) -> int:
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


def _as_rate(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return min(1.0, max(0.0, float(value)))
    except (TypeError, ValueError):
        return None


def _as_names(value: Any) -> List[str]:
    if isinstance(value, (list, tuple, set, frozenset)):
        return [str(item) for item in value]
    return []


def coerce_evidence(data: Mapping[str, Any]) -> EvolutionEvidence:
    """
    Build evidence from a mapping, clamping what does not validate.

    Counts below zero become 0, success rates are clamped to [0, 1] and
    unreadable values fall back to their defaults.
    """
    try:
        return EvolutionEvidence.model_validate(dict(data))
    except ValidationError as e:
        logger.warning(f"Evidence did not validate, recording a clamped copy: {e.error_count()} error(s)")

    return EvolutionEvidence.model_construct(
        implementations=_as_count(data.get("implementations")),
        industries=_as_names(data.get("industries")),
        roles=_as_names(data.get("roles")),
        success_rate=_as_rate(data.get("success_rate")),
        cross_industry_success=bool(data.get("cross_industry_success", False)),
        feedbacks=_as_names(data.get("feedbacks")),
    )


class ProgressionTracker:
    """
    Per-skill level history held in memory for the life of the process.

    record() reads the previous level and appends under one lock, so
    concurrent records for the same skill chain their levels correctly.
    """

    def __init__(self, classifier: Optional[EvolutionClassifier] = None):
        self.classifier = classifier
        self._history: Dict[str, List[EvolutionHistoryEntry]] = {}
        self._lock = threading.Lock()

    def record(
        self,
        skill_id: str,
        evidence: Union[EvolutionEvidence, Mapping[str, Any]],
        timestamp: Optional[datetime] = None,
        trigger: Optional[str] = None
    ) -> EvolutionHistoryEntry:
        """
        Append a transition for skill_id and return it.

        Args:
            skill_id: Skill the evidence belongs to
            evidence: Evidence at this point in time; a snapshot is stored
            timestamp: When the evidence was observed (defaults to now, UTC)
            trigger: Free-form reason for the record, e.g. "assessment"
        """
        if isinstance(evidence, EvolutionEvidence):
            snapshot = evidence.model_copy(deep=True)
        else:
            snapshot = coerce_evidence(evidence or {})

        new_level = self._derive_level(snapshot)

        with self._lock:
            history = self._history.setdefault(skill_id, [])
            previous_level = history[-1].new_level if history else MIN_LEVEL

            entry = EvolutionHistoryEntry(
                skill_id=skill_id,
                evidence=snapshot,
                previous_level=previous_level,
                new_level=new_level,
                timestamp=timestamp or datetime.now(timezone.utc),
                trigger=trigger,
            )
            history.append(entry)

        if new_level != previous_level:
            logger.info(f"Skill '{skill_id}' moved from level {previous_level} to {new_level}")
        return entry

    def _derive_level(self, evidence: EvolutionEvidence) -> int:
        if self.classifier is not None:
            return self.classifier.evaluate(evidence).level
        return step_level(evidence.implementations)

    def get_history(self, skill_id: str) -> List[EvolutionHistoryEntry]:
        """Entries for skill_id in record order; empty if none."""
        with self._lock:
            return list(self._history.get(skill_id, []))

    def get_current_level(self, skill_id: str) -> int:
        """Last recorded level, 1 when the skill has no history."""
        with self._lock:
            history = self._history.get(skill_id)
            return history[-1].new_level if history else MIN_LEVEL

    def clear(self):
        """Forget every recorded entry."""
        with self._lock:
            self._history.clear()
