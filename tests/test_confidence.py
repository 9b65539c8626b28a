import dataclasses

import pytest

from listening_core.alignment.confidence import (
    HIGH_SIMILARITY,
    KNOWN_REDUCTION,
    LOW_CONFIDENCE,
    ConfidencePolicy,
    compute_string_similarity,
    evaluate_replacement,
    is_known_reduced_form,
)


class TestSimilarity:

    def test_identical_ignoring_case(self):
        assert compute_string_similarity("ABC", "abc") == 1.0

    def test_one_side_empty(self):
        assert compute_string_similarity("", "a") == 0.0

    def test_normalized_by_longer_string(self):
        assert compute_string_similarity("color", "colour") == pytest.approx(1 - 1 / 6)


class TestEvaluateReplacement:

    def test_high_similarity(self):
        decision = evaluate_replacement("color", "colour")
        assert decision.is_substitution
        assert decision.reason == HIGH_SIMILARITY

    @pytest.mark.parametrize("expected, actual", [("going to", "gonna"), ("gonna", "going to")])
    def test_known_reduction_both_directions(self, expected, actual):
        decision = evaluate_replacement(expected, actual)
        assert decision.is_substitution
        assert decision.reason == KNOWN_REDUCTION
        assert decision.confidence == 0.8

    def test_contraction_phrase(self):
        assert evaluate_replacement("i am", "i'm").reason == KNOWN_REDUCTION

    def test_low_confidence(self):
        decision = evaluate_replacement("cat", "elephant")
        assert not decision.is_substitution
        assert decision.reason == LOW_CONFIDENCE
        assert decision.confidence == compute_string_similarity("cat", "elephant")

    @pytest.mark.parametrize("expected, actual", [
        ("sea", "see"), ("their", "there"), ("walked", "walk"), ("street", "streets"),
    ])
    def test_similar_pairs_are_always_substitutions(self, expected, actual):
        assert compute_string_similarity(expected, actual) >= 0.55
        decision = evaluate_replacement(expected, actual)
        assert decision.is_substitution
        assert decision.confidence == compute_string_similarity(expected, actual)

    def test_policy_threshold(self):
        strict = ConfidencePolicy(substitution_threshold=0.9)
        assert not evaluate_replacement("color", "colour", policy=strict).is_substitution

    def test_policy_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ConfidencePolicy().substitution_threshold = 0.1


class TestKnownReducedForm:

    def test_head_word_counts(self):
        assert is_known_reduced_form("going", "gonna")

    def test_lexicon_injection(self, tiny_lexicon):
        assert not is_known_reduced_form("want to", "wanna", tiny_lexicon)
        assert is_known_reduced_form("want to", "wanna")
