import pytest

from listening_core.diagnosis.classifier import analyze_errors, classify_error, sounds_similar
from listening_core.diagnosis.ranking import rank_causes
from listening_core.models import AlignmentToken, ErrorCause

C = ErrorCause


def missing(word, ref_index=1):
    return AlignmentToken(id="m", type="missing", ref_index=ref_index, expected=word)


def substitution(expected, actual):
    return AlignmentToken(id="s", type="substitution", ref_index=1, user_index=1, expected=expected, actual=actual)


NEIGHBOR = AlignmentToken(id="c", type="correct", ref_index=0, user_index=0, expected="x", actual="x")


class TestMissing:

    def test_function_word_between_neighbors(self):
        causes = classify_error(missing("the"), NEIGHBOR, NEIGHBOR)
        assert causes == [C.FUNCTION_WORD_DROP, C.CONNECTED_SPEECH]

    def test_content_word_at_edge(self):
        assert classify_error(missing("station"), NEIGHBOR, None) == [C.CONTENT_WORD_MISS]

    def test_contraction(self):
        assert classify_error(missing("don't")) == [C.WORD_REDUCTION]

    def test_casual_reduction(self):
        assert classify_error(missing("gonna")) == [C.WORD_REDUCTION, C.CONTENT_WORD_MISS]


class TestSubstitution:

    def test_reduced_phrase(self):
        assert classify_error(substitution("going to", "gonna")) == [C.WORD_REDUCTION, C.BOUNDARY_MISALIGNMENT]

    def test_sound_alike(self):
        assert classify_error(substitution("their", "there")) == [C.VOWEL_REDUCTION, C.BOUNDARY_MISALIGNMENT]

    def test_sound_alike_group(self):
        assert C.VOWEL_REDUCTION in classify_error(substitution("a", "the"))

    def test_unrelated_words(self):
        assert classify_error(substitution("market", "basket")) == [C.BOUNDARY_MISALIGNMENT]


def test_extra_word():
    token = AlignmentToken(id="x", type="extra", user_index=2, actual="so")
    assert classify_error(token) == [C.BOUNDARY_MISALIGNMENT]


def test_correct_token_has_no_causes():
    assert classify_error(NEIGHBOR) == []


def test_sounds_similar_empty_words():
    assert not sounds_similar("", "a")


def test_analyze_errors_counts_every_cause():
    tokens = [NEIGHBOR, missing("the"), NEIGHBOR, substitution("their", "there")]
    counts = analyze_errors(tokens)
    assert counts == {
        C.FUNCTION_WORD_DROP: 1,
        C.CONNECTED_SPEECH: 1,
        C.VOWEL_REDUCTION: 1,
        C.BOUNDARY_MISALIGNMENT: 1,
    }


class TestRanking:

    def test_count_then_priority(self):
        ranked = rank_causes({C.CONTENT_WORD_MISS: 2, C.WORD_REDUCTION: 2, C.BOUNDARY_MISALIGNMENT: 3})
        assert [r.cause for r in ranked] == [C.BOUNDARY_MISALIGNMENT, C.WORD_REDUCTION, C.CONTENT_WORD_MISS]

    @pytest.mark.parametrize("first, second", [
        (C.WORD_REDUCTION, C.VOWEL_REDUCTION),
        (C.VOWEL_REDUCTION, C.CONNECTED_SPEECH),
        (C.CONNECTED_SPEECH, C.FUNCTION_WORD_DROP),
        (C.FUNCTION_WORD_DROP, C.BOUNDARY_MISALIGNMENT),
        (C.BOUNDARY_MISALIGNMENT, C.CONTENT_WORD_MISS),
    ])
    def test_priority_breaks_ties(self, first, second):
        assert rank_causes({second: 1, first: 1})[0].cause == first

    def test_zero_counts_dropped(self):
        assert rank_causes({C.WORD_REDUCTION: 0}) == []
