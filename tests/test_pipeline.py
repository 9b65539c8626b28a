import pytest

from listening_core import (
    ErrorCause,
    InputTooLongError,
    MissingTranscriptError,
    SemanticScore,
    check_answer,
)
from listening_core.alignment.aligner import align
from listening_core.diagnosis.explanations import listening_explanation, operation_summary
from listening_core.scoring.accuracy import accuracy_percent, character_overlap_score

from conftest import FOX_SENTENCE, SCENARIO_ATTEMPT, SCENARIO_REFERENCE


class TestCheckAnswer:

    def test_identical_answer(self):
        result = check_answer("Nice to meet you.", "nice to meet you")
        assert result.accuracy_percent == 100
        assert result.events == []
        assert result.diagnostic is None
        assert result.stats.correct == 4

    def test_reduced_forms_score_above_naive_overlap(self):
        result = check_answer(SCENARIO_REFERENCE, SCENARIO_ATTEMPT)
        assert result.accuracy_percent == 50
        assert result.accuracy_percent > character_overlap_score(SCENARIO_REFERENCE, SCENARIO_ATTEMPT) * 100
        substitutions = [t for t in result.tokens if t.type == "substitution"]
        assert ("going to", "gonna") in [(t.expected, t.actual) for t in substitutions]

    def test_skipped(self):
        result = check_answer(SCENARIO_REFERENCE, "whatever I typed", skipped=True)
        assert result.skipped
        assert result.accuracy_percent == 0
        assert result.tokens == []
        assert result.events == []
        assert result.diagnostic is None

    @pytest.mark.parametrize("attempt", ["", None, "  ", "?!"])
    def test_empty_attempt_counts_as_skipped(self, attempt):
        result = check_answer(SCENARIO_REFERENCE, attempt)
        assert result.skipped
        assert result.accuracy_percent == 0

    @pytest.mark.parametrize("reference", ["", None, "   ", "..."])
    def test_missing_transcript(self, reference):
        with pytest.raises(MissingTranscriptError):
            check_answer(reference, "hello")

    def test_missing_transcript_is_a_value_error(self):
        with pytest.raises(ValueError):
            check_answer("", "hello")

    def test_interior_deletion(self):
        result = check_answer(FOX_SENTENCE, "the quick brown fox jumps over the old dog")
        (event,) = result.events
        assert event.ref_start == event.ref_end == 7
        causes = {c.cause for c in result.diagnostic.cause_counts}
        assert ErrorCause.CONNECTED_SPEECH in causes
        assert ErrorCause.CONTENT_WORD_MISS in causes

    def test_function_word_deletion(self):
        result = check_answer(FOX_SENTENCE, "the quick brown fox jumps over lazy old dog")
        (event,) = result.events
        assert event.ref_start == 6
        causes = {c.cause for c in result.diagnostic.cause_counts}
        assert causes == {ErrorCause.FUNCTION_WORD_DROP, ErrorCause.CONNECTED_SPEECH}

    def test_extra_words_do_not_lower_accuracy(self):
        result = check_answer("the cat", "the big cat")
        assert result.accuracy_percent == 100
        assert result.stats.extra == 1

    def test_summary_can_be_disabled(self):
        assert check_answer(FOX_SENTENCE, "the quick fox", include_summary=False).diagnostic is None

    def test_token_limit(self):
        with pytest.raises(InputTooLongError):
            check_answer("a b c", "a b c", max_tokens=2)
        with pytest.raises(InputTooLongError):
            check_answer("a b", "a b c", max_tokens=2)

    def test_semantic_score_is_preferred(self):
        result = check_answer(SCENARIO_REFERENCE, SCENARIO_ATTEMPT, semantic=SemanticScore(0.72, ["store"]))
        assert result.accuracy_percent == 50
        assert result.score_percent == 72
        assert result.to_dict()["semantic"] == {"scorePercent": 72, "missingKeywords": ["store"]}


class TestWireFormat:

    def test_missing_event_shape(self):
        data = check_answer(FOX_SENTENCE, "the quick brown fox jumps over the old dog").to_dict()
        event = data["events"][0]
        assert event["type"] == "missing"
        assert event["actualSpan"] == "(not heard)"
        assert "userStart" not in event
        assert set(event["context"]) == {"before", "after", "fullRef", "fullUser"}
        missing_token = next(t for t in data["tokens"] if t["type"] == "missing")
        assert "userIndex" not in missing_token

    def test_top_level_keys(self):
        data = check_answer(SCENARIO_REFERENCE, SCENARIO_ATTEMPT).to_dict()
        for key in ("refTokens", "userTokens", "tokens", "events", "stats", "accuracyPercent",
                    "scorePercent", "skipped", "diagnostic"):
            assert key in data
        assert data["stats"] == {"correct": 2, "substitutions": 2, "missing": 0, "extra": 0}

    def test_operation_summary_line(self):
        data = check_answer(SCENARIO_REFERENCE, SCENARIO_ATTEMPT).to_dict()
        assert data["operationSummary"] == "You substituted a few words."
        assert check_answer("see you later", "see you later").operation_summary == "Your answer matches well."

    def test_skipped_has_no_operation_summary(self):
        assert "operationSummary" not in check_answer(SCENARIO_REFERENCE, "", skipped=True).to_dict()


class TestScoring:

    def test_accuracy_percent_rounds_half_up(self):
        stats = align("a b c d e f g h", "a b c d e f g x").stats
        assert accuracy_percent(stats) == 88

    def test_character_overlap_score(self):
        assert character_overlap_score("hello there", "hello there") == 1.0
        assert character_overlap_score("", "x") == 0.0
        assert 0 < character_overlap_score("hello there", "hello") < 1


class TestExplanations:

    def test_reduction_explanation(self):
        assert listening_explanation("going to", "gonna", "substitution") == (
            "In casual speech, 'going to' is often reduced to 'gonna'."
        )

    def test_missing_explanation(self):
        assert "blended" in listening_explanation("the", "", "missing")

    def test_operation_summary(self):
        assert operation_summary(align("a b c d e", "a b c d e").stats) == "Your answer matches well."
        assert operation_summary(align("one two three four", "one").stats) == "You missed some words."
        assert operation_summary(align("one", "one two three four").stats) == "You added extra words."
