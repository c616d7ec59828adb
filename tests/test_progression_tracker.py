# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Tests for the evolution progression tracker."""
import logging
import threading
from datetime import datetime, timezone

import pytest

from skilldex.core.evolution.classifier import EvolutionClassifier
from skilldex.core.evolution.tracker import ProgressionTracker, coerce_evidence, step_level
from skilldex.schemas.evolution import EvolutionEvidence


@pytest.fixture
def tracker():
    return ProgressionTracker()


class TestStepRule:
    @pytest.mark.parametrize("implementations,expected", [
        (0, 1), (2, 1), (3, 2), (4, 2), (5, 3), (9, 3), (10, 4), (50, 4),
    ])
    def test_step_level(self, implementations, expected):
        assert step_level(implementations) == expected


class TestRecord:
    def test_first_record_starts_from_level_one(self, tracker):
        entry = tracker.record("skill-a", EvolutionEvidence(implementations=5))

        assert entry.previous_level == 1
        assert entry.new_level == 3
        assert entry.is_promotion
        assert entry.timestamp.tzinfo is not None

    def test_levels_chain_in_call_order(self, tracker):
        tracker.record("skill-a", EvolutionEvidence(implementations=3))
        tracker.record("skill-a", EvolutionEvidence(implementations=10))
        tracker.record("skill-a", EvolutionEvidence(implementations=1))

        history = tracker.get_history("skill-a")
        assert [(e.previous_level, e.new_level) for e in history] == [(1, 2), (2, 4), (4, 1)]
        assert tracker.get_current_level("skill-a") == 1

    def test_explicit_timestamp_and_trigger(self, tracker):
        when = datetime(2025, 1, 1, tzinfo=timezone.utc)
        entry = tracker.record("skill-a", EvolutionEvidence(), timestamp=when, trigger="quarterly review")
        assert entry.timestamp == when
        assert entry.trigger == "quarterly review"

    def test_accepts_mapping_evidence(self, tracker):
        entry = tracker.record("skill-a", {"implementations": 4, "industries": ["IT"]})
        assert entry.evidence.implementations == 4
        assert entry.new_level == 2

    def test_evidence_is_snapshotted(self, tracker):
        evidence = EvolutionEvidence(implementations=3, industries=["IT"])
        entry = tracker.record("skill-a", evidence)

        evidence.industries.append("Retail")
        assert entry.evidence.industries == ["IT"]

    def test_skills_are_independent(self, tracker):
        tracker.record("skill-a", EvolutionEvidence(implementations=10))
        entry = tracker.record("skill-b", EvolutionEvidence(implementations=3))

        assert entry.previous_level == 1
        assert tracker.get_current_level("skill-a") == 4

    def test_concurrent_records_chain_previous_levels(self, tracker):
        def worker(count):
            for _ in range(50):
                tracker.record("shared", EvolutionEvidence(implementations=count))

        threads = [threading.Thread(target=worker, args=(n,)) for n in (0, 3, 5, 10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        history = tracker.get_history("shared")
        assert len(history) == 200
        assert history[0].previous_level == 1
        for earlier, later in zip(history, history[1:]):
            assert later.previous_level == earlier.new_level


class TestClassifierBacked:
    def test_classifier_decides_the_level(self):
        tracker = ProgressionTracker(classifier=EvolutionClassifier())
        # step rule would say 4; the ladder needs industry and role diversity
        entry = tracker.record("skill-a", EvolutionEvidence(
            implementations=10, industries=["IT"], roles=["Engineer", "Manager"], success_rate=0.9
        ))
        assert entry.new_level == 2


class TestBestEffortEvidence:
    def test_out_of_range_values_are_clamped(self, tracker, caplog):
        with caplog.at_level(logging.WARNING, logger="skilldex.core.evolution.tracker"):
            entry = tracker.record("skill-a", {"implementations": 4, "success_rate": 1.2})

        assert entry.evidence.success_rate == 1.0
        assert entry.evidence.implementations == 4
        assert entry.new_level == 2
        assert len(tracker.get_history("skill-a")) == 1
        assert "did not validate" in caplog.text

    def test_unreadable_values_fall_back_to_defaults(self, tracker):
        entry = tracker.record("skill-a", {
            "implementations": -3,
            "success_rate": "often",
            "industries": "IT",
            "roles": ["Engineer", 7],
        })

        assert entry.evidence.implementations == 0
        assert entry.evidence.success_rate is None
        assert entry.evidence.industries == []
        assert entry.evidence.roles == ["Engineer", "7"]
        assert entry.new_level == 1

    def test_valid_mapping_is_not_clamped(self):
        assert coerce_evidence({"success_rate": 0.4}).success_rate == 0.4

    def test_classifier_reads_clamped_evidence(self):
        tracker = ProgressionTracker(classifier=EvolutionClassifier())
        entry = tracker.record("skill-a", {
            "implementations": 3, "industries": ["IT"], "roles": ["a", "b"], "success_rate": 7,
        })
        assert entry.new_level == 2


class TestQueries:
    def test_unknown_skill(self, tracker):
        assert tracker.get_history("missing") == []
        assert tracker.get_current_level("missing") == 1

    def test_history_is_a_copy(self, tracker):
        tracker.record("skill-a", EvolutionEvidence())
        tracker.get_history("skill-a").clear()
        assert len(tracker.get_history("skill-a")) == 1

    def test_clear(self, tracker):
        tracker.record("skill-a", EvolutionEvidence(implementations=10))
        tracker.clear()
        assert tracker.get_history("skill-a") == []
        assert tracker.get_current_level("skill-a") == 1
