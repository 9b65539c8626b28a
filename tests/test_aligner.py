import re

import jiwer
import pytest

from listening_core.alignment.aligner import align, build_result
from listening_core.alignment.edit_distance import align_sequences, edit_distance
from listening_core.alignment.operations import AlignmentStep
from listening_core.errors import AlignmentIntegrityError, MissingTranscriptError
from listening_core.models import CORRECT, EXTRA, MISSING, NOT_HEARD, SUBSTITUTION

from conftest import SCENARIO_ATTEMPT, SCENARIO_REFERENCE

PAIRS = [
    ("the cat sat on the mat", "the cat sat on mat"),
    ("I want to go home", "I wanna go home now"),
    ("she sells sea shells", "he sells see shells by"),
    ("hello world", "goodbye cruel world"),
    ("one two three four five", "five four three two one"),
]


class TestEditPath:

    def test_prefers_substitution_on_ties(self):
        assert align_sequences(["red", "blue"], ["blue", "green"]) == [("sub", 0, 0), ("sub", 1, 1)]

    def test_deletion(self):
        assert align_sequences(["a", "b", "c"], ["a", "c"]) == [
            ("match", 0, 0), ("del", 1, None), ("match", 2, 1),
        ]

    def test_insertion(self):
        assert align_sequences(["a", "c"], ["a", "b", "c"]) == [
            ("match", 0, 0), ("ins", None, 1), ("match", 1, 2),
        ]

    def test_empty_sides(self):
        assert align_sequences([], ["x"]) == [("ins", None, 0)]
        assert align_sequences(["x"], []) == [("del", 0, None)]
        assert align_sequences([], []) == []

    def test_edit_distance(self):
        assert edit_distance("kitten", "sitting") == 3
        assert edit_distance("", "abc") == 3

    @pytest.mark.crosscheck
    @pytest.mark.parametrize("reference, attempt", PAIRS)
    def test_cost_matches_jiwer(self, reference, attempt):
        ref = reference.lower().split()
        hyp = attempt.lower().split()
        cost = sum(1 for op, _, _ in align_sequences(ref, hyp) if op != "match")
        out = jiwer.process_words(" ".join(ref), " ".join(hyp))
        assert cost == out.substitutions + out.deletions + out.insertions


class TestAlign:

    def test_identity(self):
        result = align("The cat sat.", "the cat sat")
        assert [t.type for t in result.tokens] == [CORRECT] * 3
        assert result.events == []

    def test_idempotent_including_ids(self):
        assert align(SCENARIO_REFERENCE, SCENARIO_ATTEMPT) == align(SCENARIO_REFERENCE, SCENARIO_ATTEMPT)

    def test_ids_are_short_hex(self):
        result = align("the cat sat", "the dog sat")
        for token in result.tokens:
            assert re.fullmatch(r"[0-9a-f]{12}", token.id)
        assert len({t.id for t in result.tokens}) == len(result.tokens)

    def test_hasher_is_injectable(self, recording_hasher):
        result = align("the cat", "the cat", hasher=recording_hasher)
        assert result.tokens[0].id == "h00000000001"
        assert recording_hasher.calls[0] == {"t": "c", "r": 0, "u": 0, "w": "the"}

    @pytest.mark.parametrize("reference, attempt", PAIRS)
    def test_every_error_token_has_one_event(self, reference, attempt):
        result = align(reference, attempt)
        errors = [t for t in result.tokens if t.type != CORRECT]
        assert len(result.events) == len(errors)
        assert [e.type for e in result.events] == [t.type for t in errors]
        stats = result.stats
        assert stats.correct + stats.errors == len(result.tokens)

    @pytest.mark.parametrize("reference, attempt", PAIRS)
    def test_event_ranges_are_ordered(self, reference, attempt):
        for event in align(reference, attempt).events:
            assert 0 <= event.ref_start <= event.ref_end

    def test_interior_deletion(self, fox_sentence):
        result = align(fox_sentence, "the quick brown fox jumps over the old dog")
        assert len(result.events) == 1
        event = result.events[0]
        assert event.type == MISSING
        assert event.ref_start == event.ref_end == 7
        assert event.expected_span == "lazy"
        assert event.actual_span == NOT_HEARD
        assert event.user_start is None
        assert event.context.before == "jumps over the"
        assert event.context.after == "old dog"

    def test_reference_empty_raises(self):
        with pytest.raises(MissingTranscriptError):
            align("", "hello")
        with pytest.raises(MissingTranscriptError):
            align("?!", "hello")

    def test_reference_shorter_than_attempt(self):
        result = align("hello", "oh hello there friend")
        assert result.stats.correct == 1
        assert result.stats.extra == 3


class TestExtraAnchor:

    def test_extra_at_start_anchors_forward(self):
        result = align("hello world", "oh hello world")
        (event,) = result.events
        assert event.type == EXTRA
        assert event.ref_start == event.ref_end == 0
        assert event.expected_span == "hello"
        assert event.user_start == event.user_end == 0

    def test_extra_at_end_anchors_backward(self):
        (event,) = align("hello world", "hello world again").events
        assert event.ref_start == 1


class TestConfidenceAdjustment:

    def test_raw_path_keeps_substitutions(self):
        result = align("red blue", "blue green", adjust_confidence=False)
        assert [t.type for t in result.tokens] == [SUBSTITUTION, SUBSTITUTION]

    def test_dissimilar_words_are_split(self):
        result = align("red blue", "blue green")
        assert [t.type for t in result.tokens] == [MISSING, EXTRA, MISSING, EXTRA]
        assert [e.ref_start for e in result.events] == [0, 0, 1, 1]

    def test_similar_words_stay_substitution(self):
        result = align("I want to go", "I want to goo")
        assert result.tokens[-1].type == SUBSTITUTION
        assert result.tokens[-1].expected == "go"
        assert result.tokens[-1].actual == "goo"


class TestReductionReconciliation:

    def test_reduced_forms_in_attempt(self):
        result = align(SCENARIO_REFERENCE, SCENARIO_ATTEMPT)
        assert [t.type for t in result.tokens] == [SUBSTITUTION, SUBSTITUTION, CORRECT, CORRECT]
        first, second = result.tokens[:2]
        assert (first.expected, first.actual, first.ref_index) == ("i am", "i'm", 0)
        assert (second.expected, second.actual, second.ref_index) == ("going to", "gonna", 2)
        event = result.events[1]
        assert (event.ref_start, event.ref_end) == (2, 3)
        assert (event.user_start, event.user_end) == (1, 1)
        assert result.stats.substitutions == 2
        assert result.stats.missing == 0

    def test_reduced_forms_in_reference(self):
        result = align("I'm gonna go", "I am going to go")
        assert [t.type for t in result.tokens] == [SUBSTITUTION, SUBSTITUTION, CORRECT]
        assert result.tokens[1].actual == "going to"
        assert (result.events[1].user_start, result.events[1].user_end) == (2, 3)

    def test_custom_lexicon_without_reductions(self, tiny_lexicon):
        result = align("I am here", "I'm here", lexicon=tiny_lexicon)
        assert all(t.expected != "i am" for t in result.tokens)


class TestIntegrity:

    def test_out_of_range_step_raises(self):
        with pytest.raises(AlignmentIntegrityError):
            build_result(["a"], ["a"], [AlignmentStep(op="match", ref_index=5, user_index=0)])

    def test_missing_index_raises(self):
        with pytest.raises(AlignmentIntegrityError):
            build_result(["a"], ["b"], [AlignmentStep(op="sub", ref_index=0)])
