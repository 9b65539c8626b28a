"""Short sound-focused explanations for single word differences and whole attempts."""
from __future__ import annotations

from ..lexicon import DEFAULT_LEXICON, Lexicon
from ..models.alignment import EXTRA, MISSING, SUBSTITUTION, AlignmentStats

MOSTLY_CORRECT_RATIO = 0.8


def listening_explanation(
    expected: str, actual: str, type: str, lexicon: Lexicon = DEFAULT_LEXICON
) -> str:
    """One sentence on why ``expected`` might have been heard as ``actual``."""
    e = expected.lower().strip()
    a = actual.lower().strip()
    reduced_forms = lexicon.reduced_forms

    if reduced_forms.get(e) == a:
        return f"In casual speech, '{e}' is often reduced to '{a}'."
    if reduced_forms.get(a) == e:
        return f"'{e}' is a reduced form of '{a}' that often appears in fast speech."

    if type == MISSING:
        return "This word was likely spoken quickly or blended into nearby words."
    if type == SUBSTITUTION:
        if any(e in group and a in group for group in lexicon.sound_alike_groups):
            return "These can sound similar in fast speech."
        return "This likely sounded similar or blended with nearby sounds."
    if type == EXTRA:
        return "This word may have been inferred from context but wasn't in the audio."
    return "Listen carefully to how this word sounds in the audio."


def dominant_operation(stats: AlignmentStats) -> str:
    """Name the error kind making up more than half of all errors, else "mixed"."""
    errors = stats.errors
    if errors == 0:
        return "correct"
    if stats.substitutions / errors > 0.5:
        return "substitution"
    if stats.missing / errors > 0.5:
        return "deletion"
    if stats.extra / errors > 0.5:
        return "insertion"
    return "mixed"


def operation_summary(stats: AlignmentStats) -> str:
    """Conservative one-line summary from the dominant kind of mistake.

    Substitutions only survive the confidence gate when they are convincing,
    so a substitution-dominated attempt can say so directly.
    """
    total = stats.correct + stats.errors
    if total == 0:
        return "Some parts were unclear."
    if stats.correct / total > MOSTLY_CORRECT_RATIO:
        return "Your answer matches well."
    dominant = dominant_operation(stats)
    if dominant == "deletion":
        return "You missed some words."
    if dominant == "insertion":
        return "You added extra words."
    if dominant == "substitution":
        return "You substituted a few words."
    return "Some parts were unclear."
