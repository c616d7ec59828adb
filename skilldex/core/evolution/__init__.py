# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skill Evolution - Maturity classification and progression history.

- EvolutionClassifier: Four-level criteria ladder, readiness, gaps, strengths
- ProgressionTracker: Append-only per-skill level history
"""

from skilldex.core.evolution.classifier import EvolutionClassifier, EVOLUTION_CRITERIA
from skilldex.core.evolution.tracker import ProgressionTracker, step_level

__all__ = [
    "EvolutionClassifier",
    "EVOLUTION_CRITERIA",
    "ProgressionTracker",
    "step_level",
]
