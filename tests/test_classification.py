"""Tests for the six-question archetype classifier."""

import pytest

from engines.classification import (
    CLASSIFICATION_PROFILES,
    CLASSIFICATION_QUESTIONS,
    DIMENSIONS,
    MAX_SCORE,
    classify_archetype,
)


class TestProfiles:
    def test_one_profile_per_archetype(self):
        assert len(CLASSIFICATION_PROFILES) == 12
        for profile in CLASSIFICATION_PROFILES.values():
            assert len(profile) == len(DIMENSIONS)
            assert all(1 <= v <= 5 for v in profile)

    def test_questions_match_dimensions(self):
        assert [q["id"] for q in CLASSIFICATION_QUESTIONS] == DIMENSIONS
        assert all(len(q["options"]) == 5 for q in CLASSIFICATION_QUESTIONS)


class TestClassify:
    @pytest.mark.parametrize("archetype_id", list(CLASSIFICATION_PROFILES))
    def test_exact_profile_ranks_first_with_max_score(self, archetype_id):
        answers = dict(zip(DIMENSIONS, CLASSIFICATION_PROFILES[archetype_id]))
        ranked = classify_archetype(answers)
        assert ranked[0]["id"] == archetype_id
        assert ranked[0]["score"] == MAX_SCORE == 30

    def test_returns_three_descending(self):
        ranked = classify_archetype({"primaryGoal": 2, "processVolume": 5})
        assert len(ranked) == 3
        scores = [r["score"] for r in ranked]
        assert scores == sorted(scores, reverse=True)
        assert all(r["maxScore"] == 30 for r in ranked)

    def test_missing_answers_default_to_neutral(self):
        assert classify_archetype({}) == classify_archetype({d: 3 for d in DIMENSIONS})
        assert classify_archetype(None) == classify_archetype({})

    def test_out_of_range_answers_are_clamped(self):
        assert classify_archetype({"primaryGoal": 9}) == classify_archetype({"primaryGoal": 5})

    def test_ties_keep_declaration_order(self):
        ranked = classify_archetype({d: 3 for d in DIMENSIONS}, top=12)
        order = list(CLASSIFICATION_PROFILES)
        for a, b in zip(ranked, ranked[1:]):
            if a["score"] == b["score"]:
                assert order.index(a["id"]) < order.index(b["id"])

    def test_score_formula(self):
        answers = {d: 1 for d in DIMENSIONS}
        ranked = {r["id"]: r["score"] for r in classify_archetype(answers, top=12)}
        profile = CLASSIFICATION_PROFILES["it-operations-aiops"]
        assert ranked["it-operations-aiops"] == sum(5 - abs(1 - p) for p in profile)
